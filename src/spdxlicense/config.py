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

"""Parser configuration.

:class:`ParserConfig` is passed explicitly to
:func:`spdxlicense.parser.parse`; there is no global registry or
global state. Options can be read from TOML, either a dedicated file
or ``pyproject.toml``::

    [tool.spdxlicense]
    max_depth = 32

or::

    [spdxlicense]
    max_depth = 32

Usage::

    from pathlib import Path
    from spdxlicense.config import load_config

    config = load_config(Path('pyproject.toml'), registry=my_registry)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from spdxlicense.errors import ConfigError
from spdxlicense.logging import get_logger
from spdxlicense.registry import LicenseRegistry, ListedLicenseRegistry

__all__ = [
    'DEFAULT_MAX_DEPTH',
    'MAX_DEPTH_LIMIT',
    'ParserConfig',
    'load_config',
]

log = get_logger('spdxlicense.config')

#: Default maximum parenthesis nesting accepted by the parser.
DEFAULT_MAX_DEPTH = 64

#: Largest accepted ``max_depth``. Each nesting level costs four
#: interpreter frames.
MAX_DEPTH_LIMIT = 128

_TABLE = 'spdxlicense'


@dataclass(frozen=True)
class ParserConfig:
    """Everything the parser needs besides the expression and container.

    Attributes:
        registry: Listed licenses and exceptions. Defaults to an empty
            registry, so every license id is treated as non-standard and
            every ``WITH`` clause fails.
        max_depth: Maximum parenthesis nesting depth, from 1 to
            :data:`MAX_DEPTH_LIMIT`.
    """

    registry: LicenseRegistry = field(default_factory=ListedLicenseRegistry)
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ConfigError([_depth_range_error(self.max_depth)])


def _depth_range_error(max_depth: int) -> str:
    return f'max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}'


def _find_table(data: dict[str, Any]) -> dict[str, Any]:
    tool = data.get('tool', {})
    if isinstance(tool, dict) and _TABLE in tool:
        table = tool[_TABLE]
    else:
        table = data.get(_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError([f'[{_TABLE}] must be a table'])
    return table


def _validate(table: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    for key in sorted(table):
        if key != 'max_depth':
            errors.append(f'unknown key {key!r}')
    max_depth = table.get('max_depth', DEFAULT_MAX_DEPTH)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        errors.append(f'max_depth must be an integer, got {type(max_depth).__name__}')
    elif not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        errors.append(_depth_range_error(max_depth))
    return errors


def load_config(path: Path, *, registry: LicenseRegistry | None = None) -> ParserConfig:
    """Build a :class:`ParserConfig` from a TOML file.

    Args:
        path: TOML file to read. A missing ``spdxlicense`` table
            yields the defaults.
        registry: Registry to place in the config. Defaults to an
            empty :class:`ListedLicenseRegistry`.

    Returns:
        The assembled configuration.

    Raises:
        ConfigError: If the file is not valid TOML or the table has
            unknown keys or wrongly typed values.
    """
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError([f'{path}: {exc}']) from exc

    table = _find_table(data)
    errors = _validate(table)
    if errors:
        raise ConfigError(errors)

    config = ParserConfig(
        registry=registry if registry is not None else ListedLicenseRegistry(),
        max_depth=table.get('max_depth', DEFAULT_MAX_DEPTH),
    )
    log.debug('config_loaded', path=str(path), max_depth=config.max_depth)
    return config
