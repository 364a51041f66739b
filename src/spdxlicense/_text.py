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

"""Whitespace- and punctuation-tolerant comparison of license texts.

Two texts are equivalent when they produce the same sequence of
normalized tokens. Normalization folds typographic quotes and dashes,
non-breaking spaces, the ``http``/``https`` scheme, and case. Comment
markers that commonly prefix license headers in source files are
skipped.
"""

from __future__ import annotations

import functools
import re

__all__ = [
    'is_license_text_equivalent',
    'normalize_text',
]

_REPLACEMENTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile('[‘’‛‚`]'), "'"),
    (re.compile('http://'), 'https://'),
    (re.compile("''"), '"'),
    (re.compile('[“”‟„]'), '"'),
    (re.compile('\u00a0'), ' '),
    (re.compile('[—–]'), '-'),
    (re.compile('\u2028'), '\n'),
)

# Words (with inner hyphens, dots or apostrophes) or single punctuation.
_TOKEN_RE = re.compile(r"\w+(?:[-.']\w+)*|//|[^\w\s]")

_SKIPPABLE = frozenset({'*', '#', '//'})


def normalize_text(text: str) -> str:
    """Fold quotes, dashes, spaces and URL schemes, then lowercase."""
    for pattern, replacement in _REPLACEMENTS:
        text = pattern.sub(replacement, text)
    return text.lower()


@functools.lru_cache(maxsize=256)
def _tokens(text: str) -> tuple[str, ...]:
    return tuple(t for t in _TOKEN_RE.findall(normalize_text(text)) if t not in _SKIPPABLE)


def is_license_text_equivalent(text_a: str | None, text_b: str | None) -> bool:
    """Return whether two license texts should be treated as the same.

    A missing text (``None``) is equivalent to an empty one.

    Args:
        text_a: First license text.
        text_b: Second license text.

    Returns:
        ``True`` if the normalized token sequences match.
    """
    a = text_a or ''
    b = text_b or ''
    if a == b:
        return True
    return _tokens(a) == _tokens(b)
