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

"""Structured logging for spdxlicense.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default): human-readable output, colored on a TTY.
- **JSON** (``json_log=True``): one JSON object per line.

Both modes write to stderr. The library itself never calls
:func:`configure_logging`; applications embedding it do.

License expressions and extracted license texts can be arbitrarily
long, so string fields longer than :data:`MAX_FIELD_LENGTH` are cut
by the :func:`truncate_long_values` processor.

Usage::

    from spdxlicense.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger()
    log.debug('expression_parsed', expression='MIT OR Apache-2.0')
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

#: String event fields longer than this are truncated.
MAX_FIELD_LENGTH = 200


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Configure structlog for spdxlicense.

    Should be called once at startup, before any logging calls.

    Args:
        verbose: Enable debug-level output.
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of console output.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        truncate_long_values,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'spdxlicense') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.

    Returns:
        A :class:`structlog.stdlib.BoundLogger` instance.
    """
    return structlog.get_logger(name)


def _truncate(value: object) -> object:
    """Shorten a long string value, noting how much was dropped."""
    if not isinstance(value, str) or len(value) <= MAX_FIELD_LENGTH:
        return value
    return f'{value[:MAX_FIELD_LENGTH]}...[{len(value) - MAX_FIELD_LENGTH} chars]'


def truncate_long_values(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: truncate over-long string fields.

    The ``event`` key itself is left untouched.
    """
    return {k: v if k == 'event' else _truncate(v) for k, v in event_dict.items()}


__all__ = [
    'MAX_FIELD_LENGTH',
    'configure_logging',
    'get_logger',
    'truncate_long_values',
]
