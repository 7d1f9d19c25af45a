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

"""Structured logging for autorelease.

Configures `structlog <https://www.structlog.org/>`_ with two renderers:

- **Console** (default): colored on a TTY and inside GitHub Actions,
  whose log viewer understands ANSI escapes.
- **JSON** (``--json-log``): one JSON object per line.

Everything goes to stderr. stdout is reserved for command output: the
next version, rendered notes and ``::error::`` workflow commands.

Per-run fields (repository, target commit) are bound once with
:func:`bind_run_context` and then appear on every event of the run.

Usage::

    from autorelease.logging import bind_run_context, configure_logging, get_logger

    configure_logging(verbose=True)
    bind_run_context(repo='octo/widgets')
    get_logger().info('release_created', tag='v1.3.0')
"""

from __future__ import annotations

import logging
import os
import sys

import structlog


def _resolve_level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def _use_colors() -> bool:
    return sys.stderr.isatty() or os.environ.get('GITHUB_ACTIONS') == 'true'


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Configure structlog on top of the stdlib root logger.

    Safe to call more than once; the last call wins.

    Args:
        verbose: Enable debug-level output (lists every new commit).
        quiet: Only warnings and errors.
        json_log: Render events as JSON lines.
    """
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=_resolve_level(verbose=verbose, quiet=quiet),
        force=True,
    )

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=_use_colors())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
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


def bind_run_context(**fields: str) -> None:
    """Attach ``fields`` to every event logged for the rest of the run."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**fields)


def get_logger(name: str = 'autorelease') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger named ``name``."""
    return structlog.get_logger(name)


__all__ = [
    'bind_run_context',
    'configure_logging',
    'get_logger',
]
