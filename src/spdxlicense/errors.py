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

"""Error types raised by spdxlicense.

This module must have **zero** imports from other ``spdxlicense``
modules so that every layer (lexer, resolver, parser, config) can
raise these without import cycles.

Hierarchy::

    LicenseExpressionError
    ├── MalformedExpression          (also ValueError)
    ├── UnknownException             (also LookupError)
    ├── DuplicateExtractedLicenseId
    └── ConfigError                  (also ValueError)
"""

from __future__ import annotations

__all__ = [
    'ConfigError',
    'DuplicateExtractedLicenseId',
    'LicenseExpressionError',
    'MalformedExpression',
    'UnknownException',
]


class LicenseExpressionError(Exception):
    """Base class for every error raised by spdxlicense."""


class MalformedExpression(LicenseExpressionError, ValueError):
    """Raised when a license expression is lexically or grammatically invalid.

    Attributes:
        expression: The original expression string.
        position: Character offset where the error was detected.
        detail: Human-readable description of the problem.
    """

    def __init__(self, expression: str, position: int, detail: str) -> None:
        """Initialize with expression text, error position, and detail message."""
        self.expression = expression
        self.position = position
        self.detail = detail
        marker = ' ' * position + '^'
        super().__init__(f'malformed license expression at position {position}: {detail}\n  {expression}\n  {marker}')


class UnknownException(LicenseExpressionError, LookupError):
    """Raised when a ``WITH`` clause names an exception the registry lacks.

    Attributes:
        exception_id: The exception identifier as written.
    """

    def __init__(self, exception_id: str) -> None:
        """Initialize with the offending exception identifier."""
        self.exception_id = exception_id
        super().__init__(f'unknown license exception {exception_id!r}')


class DuplicateExtractedLicenseId(LicenseExpressionError):
    """Raised when an extracted license id is already present in a document.

    Attributes:
        license_id: The duplicated ``LicenseRef-`` identifier.
    """

    def __init__(self, license_id: str) -> None:
        """Initialize with the duplicated identifier."""
        self.license_id = license_id
        super().__init__(f'extracted license {license_id!r} already exists in this document')


class ConfigError(LicenseExpressionError, ValueError):
    """Raised when a configuration file has invalid content.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'spdxlicense configuration has {len(errors)} error(s):\n{bullet_list}')
