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

"""Structured error system for autorelease.

Every error has a unique ``AR-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix.

Code categories::

    AR-CONFIG-*       Configuration errors
    AR-VERSION-*      Version parsing errors
    AR-COMMIT-*       Commit message errors
    AR-RELEASE-*      Latest release lookup errors
    AR-FORGE-*        Repository API transport errors

Classifying a commit never raises; every error listed here aborts the
whole run before a release is published.

Usage::

    from autorelease.errors import AutoReleaseError, E

    raise AutoReleaseError(
        code=E.VERSION_INVALID_FORMAT,
        message="Version '1.2' must have exactly three parts",
        hint='Use the form v<major>.<minor>.<patch>.',
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all autorelease diagnostic codes."""

    # Configuration
    CONFIG_NOT_FOUND = 'AR-CONFIG-NOT-FOUND'
    CONFIG_INVALID_KEY = 'AR-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'AR-CONFIG-INVALID-VALUE'
    CONFIG_MISSING_REQUIRED = 'AR-CONFIG-MISSING-REQUIRED'

    # Versioning
    VERSION_INVALID_FORMAT = 'AR-VERSION-INVALID-FORMAT'

    # Commits
    COMMIT_UNPARSABLE = 'AR-COMMIT-UNPARSABLE'

    # Latest release lookup
    RELEASE_NOT_FOUND = 'AR-RELEASE-NOT-FOUND'
    RELEASE_NOT_ANNOTATED_TO_COMMIT = 'AR-RELEASE-NOT-ANNOTATED-TO-COMMIT'
    RELEASE_COMMIT_NOT_IN_HISTORY = 'AR-RELEASE-COMMIT-NOT-IN-HISTORY'

    # Forge transport
    FORGE_REQUEST_FAILED = 'AR-FORGE-REQUEST-FAILED'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``AR-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class AutoReleaseError(Exception):
    """Base exception for all autorelease errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def message(self) -> str:
        """The human-readable message without the code prefix."""
        return self.info.message

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='The config file given with --config does not exist or cannot be read.',
        hint='Check the path, or drop --config to use ./autorelease.toml when present.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='autorelease.toml contains an unrecognized key.',
        hint=(
            'Valid keys: api_url, draft, generate_release_notes, http_pool_size, http_timeout, '
            'max_commits, prerelease, repo_name, repo_owner. The token never goes in the file.'
        ),
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A setting has the wrong type or is out of range, or autorelease.toml is not valid TOML.',
        hint='Booleans are true/false, numbers must be positive, and --repo must be OWNER/NAME.',
    ),
    E.CONFIG_MISSING_REQUIRED: ErrorInfo(
        code=E.CONFIG_MISSING_REQUIRED,
        message='A required setting (repository or token) could not be resolved.',
        hint='Pass --repo OWNER/NAME and --token, or run inside GitHub Actions.',
    ),
    E.VERSION_INVALID_FORMAT: ErrorInfo(
        code=E.VERSION_INVALID_FORMAT,
        message='A version string is not of the form v<major>.<minor>.<patch>.',
        hint='Rename the latest release so its name is a three-part version such as v1.4.0.',
    ),
    E.COMMIT_UNPARSABLE: ErrorInfo(
        code=E.COMMIT_UNPARSABLE,
        message='A commit matched a release category but its scope and body could not be extracted.',
        hint='Use the form type(scope): description for release-worthy commits.',
    ),
    E.RELEASE_NOT_FOUND: ErrorInfo(
        code=E.RELEASE_NOT_FOUND,
        message='The repository has no published releases.',
        hint='Publish an initial release (e.g. v0.1.0) by hand to seed the version history.',
    ),
    E.RELEASE_NOT_ANNOTATED_TO_COMMIT: ErrorInfo(
        code=E.RELEASE_NOT_ANNOTATED_TO_COMMIT,
        message="The latest release's tag does not point directly at a commit.",
        hint='Recreate the tag as a lightweight tag on the release commit.',
    ),
    E.RELEASE_COMMIT_NOT_IN_HISTORY: ErrorInfo(
        code=E.RELEASE_COMMIT_NOT_IN_HISTORY,
        message='The latest release commit was not reached while listing the new commits.',
        hint=(
            'Raise max_commits in autorelease.toml, or check that the release commit '
            'is an ancestor of the target branch.'
        ),
    ),
    E.FORGE_REQUEST_FAILED: ErrorInfo(
        code=E.FORGE_REQUEST_FAILED,
        message='A request to the repository API failed.',
        hint='Check the token permissions (contents: write) and the API status, then rerun the job.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"AR-RELEASE-NOT-FOUND"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: AutoReleaseError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style.

    Output format::

        error[AR-RELEASE-NOT-FOUND]: No releases found for octo/widgets.
          |
          = hint: Publish an initial release by hand.

    Colors are used only when the stream is a terminal.

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr
    console = Console(file=out, highlight=False, no_color=not out.isatty())
    msg = rich_escape(exc.info.message)
    console.print(
        f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
    )
    if exc.hint:
        hint = rich_escape(exc.hint)
        console.print('  [dim]|[/dim]')
        console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
    console.print()


__all__ = [
    'E',
    'ERRORS',
    'AutoReleaseError',
    'ErrorCode',
    'ErrorInfo',
    'explain',
    'render_error',
]
