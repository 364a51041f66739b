# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for license text equivalence."""

from __future__ import annotations

from spdxlicense._text import is_license_text_equivalent, normalize_text


class TestNormalizeText:
    """Tests for normalize Text."""

    def test_quotes_and_dashes(self) -> None:
        """Test typographic quotes and dashes are folded."""
        assert normalize_text('“Free” — it’s') == '"free" - it\'s'

    def test_http_scheme(self) -> None:
        """Test http scheme becomes https."""
        assert normalize_text('See http://example.org') == 'see https://example.org'

    def test_non_breaking_space(self) -> None:
        """Test non-breaking space becomes a space."""
        assert normalize_text('a b') == 'a b'


class TestIsLicenseTextEquivalent:
    """Tests for is License Text Equivalent."""

    def test_identical(self) -> None:
        """Test identical texts."""
        assert is_license_text_equivalent('Some text', 'Some text')

    def test_none_equals_empty(self) -> None:
        """Test missing text equals empty text."""
        assert is_license_text_equivalent(None, '')
        assert is_license_text_equivalent('', None)
        assert is_license_text_equivalent(None, None)

    def test_none_differs_from_text(self) -> None:
        """Test missing text differs from real text."""
        assert not is_license_text_equivalent(None, 'text')

    def test_whitespace_and_case(self) -> None:
        """Test whitespace and case are ignored."""
        assert is_license_text_equivalent('Permission is\n  hereby GRANTED', 'permission is hereby granted')

    def test_comment_markers_skipped(self) -> None:
        """Test comment markers are skipped."""
        a = '# Copyright (c) 2024 Example\n# All rights reserved.'
        b = 'Copyright (c) 2024 Example All rights reserved.'
        assert is_license_text_equivalent(a, b)

    def test_c_style_comment_stars_skipped(self) -> None:
        """Test C-style comment stars are skipped."""
        assert is_license_text_equivalent(' * Licensed under\n * the terms', '// Licensed under the terms')

    def test_curly_quotes(self) -> None:
        """Test curly quotes match straight quotes."""
        assert is_license_text_equivalent('the “Software”', 'the "Software"')

    def test_different_words(self) -> None:
        """Test different words are not equivalent."""
        assert not is_license_text_equivalent('may not be used', 'may be used')

    def test_punctuation_matters(self) -> None:
        """Test punctuation other than comment markers matters."""
        assert not is_license_text_equivalent('Section 1.', 'Section 1;')
