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


"""Configuration for an autorelease run.

A run is described by one frozen :class:`ReleaseConfig`, built in two
steps and then passed explicitly to the forge and the pipeline:

1. :func:`load_config` reads the optional ``autorelease.toml`` from the
   repository root and validates it.
2. :func:`resolve_config` fills in what the file cannot hold (the token)
   or usually does not (repository, target commit) from CLI flags and
   the GitHub Actions environment.

Precedence, highest first::

    CLI flag  >  autorelease.toml  >  GitHub Actions environment  >  default

The token is never read from the file: ``--token``, then the action
input ``GITHUB_TOKEN``, then the ``GITHUB_TOKEN`` / ``GH_TOKEN`` env vars.

Supported keys in ``autorelease.toml``::

    repo_owner              = "octo"
    repo_name               = "widgets"
    api_url                 = "https://api.github.com"
    http_timeout            = 30.0
    http_pool_size          = 4
    max_commits             = 1000       # history walk limit
    draft                   = false
    prerelease              = false
    generate_release_notes  = true       # append GitHub's generated notes

Usage::

    from autorelease.config import load_config, resolve_config

    cfg = resolve_config(load_config(Path.cwd()), dry_run=True)
    print(cfg.repository)  # "octo/widgets"
"""

from __future__ import annotations

import dataclasses
import difflib
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from autorelease.actions import get_input, load_event_payload, repository_from_event, target_commit_from_event
from autorelease.backends.forge.github_api import DEFAULT_BASE_URL, DEFAULT_MAX_COMMITS
from autorelease.errors import E, AutoReleaseError
from autorelease.logging import get_logger
from autorelease.net import DEFAULT_POOL_SIZE, DEFAULT_TIMEOUT

logger = get_logger(__name__)

# The config file name at the repository root.
CONFIG_FILENAME = 'autorelease.toml'

# All recognized keys in autorelease.toml.
VALID_KEYS: frozenset[str] = frozenset({
    'api_url',
    'draft',
    'generate_release_notes',
    'http_pool_size',
    'http_timeout',
    'max_commits',
    'prerelease',
    'repo_name',
    'repo_owner',
})

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'api_url': str,
    'draft': bool,
    'generate_release_notes': bool,
    'http_pool_size': int,
    'http_timeout': (int, float),
    'max_commits': int,
    'prerelease': bool,
    'repo_name': str,
    'repo_owner': str,
}


@dataclass(frozen=True)
class ReleaseConfig:
    """Validated configuration for one autorelease run.

    Attributes:
        repo_owner: Repository owner or organization.
        repo_name: Repository name.
        token: API token. Excluded from ``repr``.
        api_url: GitHub REST API base URL.
        target_commitish: Commit the new tag is created on; its history
            is the one scanned for new commits. Empty means the default
            branch.
        http_timeout: Request timeout in seconds.
        http_pool_size: Max connections for the httpx connection pool.
        max_commits: Upper bound on commits read since the last release.
        draft: Create the release as a draft.
        prerelease: Mark the release as a pre-release.
        generate_release_notes: Ask GitHub to append its generated notes.
        dry_run: Decide and render, but do not create the release.
        config_path: Path to the autorelease.toml that was loaded.
    """

    repo_owner: str = ''
    repo_name: str = ''
    token: str = field(default='', repr=False)
    api_url: str = DEFAULT_BASE_URL
    target_commitish: str = ''
    http_timeout: float = DEFAULT_TIMEOUT
    http_pool_size: int = DEFAULT_POOL_SIZE
    max_commits: int = DEFAULT_MAX_COMMITS
    draft: bool = False
    prerelease: bool = False
    generate_release_notes: bool = True
    dry_run: bool = False
    config_path: Path | None = None

    @property
    def repository(self) -> str:
        """``owner/name``, or ``''`` while unresolved."""
        if self.repo_owner and self.repo_name:
            return f'{self.repo_owner}/{self.repo_name}'
        return ''


def _validate_value_type(key: str, value: Any) -> None:  # noqa: ANN401
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP[key]
    # bool is an int subclass; never accept it for numeric keys.
    wrong = not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool)
    if wrong:
        type_name = expected.__name__ if isinstance(expected, type) else ' or '.join(t.__name__ for t in expected)
        raise AutoReleaseError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {CONFIG_FILENAME}.',
        )


def _validate_positive(key: str, value: float) -> None:
    if value <= 0:
        raise AutoReleaseError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be positive, got {value}",
        )


def load_config(root: Path, *, config_file: Path | None = None) -> ReleaseConfig:
    """Load and validate ``autorelease.toml``.

    Args:
        root: Directory searched for ``autorelease.toml``.
        config_file: Explicit config path. Unlike the default file, it
            must exist.

    Returns:
        A :class:`ReleaseConfig`; all defaults when there is no file.

    Raises:
        AutoReleaseError: If the file is unreadable or has invalid keys
            or values.
    """
    config_path = config_file or root / CONFIG_FILENAME

    if not config_path.is_file():
        if config_file is not None:
            raise AutoReleaseError(
                code=E.CONFIG_NOT_FOUND,
                message=f'Config file {config_path} does not exist',
            )
        logger.debug('no_autorelease_config', path=str(config_path))
        return ReleaseConfig()

    try:
        text = config_path.read_text(encoding='utf-8')
    except OSError as exc:
        raise AutoReleaseError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise AutoReleaseError(
            code=E.CONFIG_INVALID_VALUE,
            message=f'Failed to parse {config_path}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401

    for key in raw:
        if key not in VALID_KEYS:
            suggestion = difflib.get_close_matches(key, VALID_KEYS, n=1, cutoff=0.6)
            if key == 'token':
                hint = 'Tokens are not read from the config file; pass --token or set GITHUB_TOKEN.'
            elif suggestion:
                hint = f"Did you mean '{suggestion[0]}'?"
            else:
                hint = f'Valid keys: {", ".join(sorted(VALID_KEYS))}.'
            raise AutoReleaseError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {CONFIG_FILENAME}",
                hint=hint,
            )

    for key, value in raw.items():
        _validate_value_type(key, value)

    for key in ('http_timeout', 'http_pool_size', 'max_commits'):
        if key in raw:
            _validate_positive(key, raw[key])
    if 'http_timeout' in raw:
        raw['http_timeout'] = float(raw['http_timeout'])

    logger.debug('loaded_autorelease_config', path=str(config_path), keys=sorted(raw))
    return ReleaseConfig(**raw, config_path=config_path)


def _split_repository(repository: str) -> tuple[str, str]:
    owner, sep, name = repository.partition('/')
    if not sep or not owner or not name or '/' in name:
        raise AutoReleaseError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"Repository must be 'owner/name', got '{repository}'",
        )
    return owner, name


def resolve_config(
    base: ReleaseConfig,
    *,
    repository: str = '',
    token: str = '',
    target_commitish: str = '',
    dry_run: bool = False,
    env: Mapping[str, str] | None = None,
) -> ReleaseConfig:
    """Complete ``base`` with CLI values and the Actions environment.

    Args:
        base: Config loaded from ``autorelease.toml``.
        repository: ``owner/name`` from the CLI.
        token: Token from the CLI.
        target_commitish: Target commit from the CLI.
        dry_run: Skip release creation.
        env: Environment mapping (defaults to ``os.environ``).

    Returns:
        A fully resolved :class:`ReleaseConfig`.

    Raises:
        AutoReleaseError: ``AR-CONFIG-MISSING-REQUIRED`` if the
            repository or the token cannot be resolved.
    """
    environ = os.environ if env is None else env
    payload = load_event_payload(environ)

    owner, name = base.repo_owner, base.repo_name
    if repository:
        owner, name = _split_repository(repository)
    elif not (owner and name):
        from_env = repository_from_event(payload, environ)
        if from_env:
            owner, name = _split_repository(from_env)
    if not (owner and name):
        raise AutoReleaseError(
            code=E.CONFIG_MISSING_REQUIRED,
            message='Could not determine the repository',
            hint=f"Pass --repo OWNER/NAME, set repo_owner and repo_name in {CONFIG_FILENAME}, or run inside GitHub Actions.",
        )

    resolved_token = (
        token
        or get_input('GITHUB_TOKEN', environ)
        or environ.get('GITHUB_TOKEN', '')
        or environ.get('GH_TOKEN', '')
    )
    if not resolved_token:
        raise AutoReleaseError(
            code=E.CONFIG_MISSING_REQUIRED,
            message='No GitHub token available',
            hint="Pass --token, or give the action 'GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}'.",
        )

    target = target_commitish or target_commit_from_event(payload, environ)

    return dataclasses.replace(
        base,
        repo_owner=owner,
        repo_name=name,
        token=resolved_token,
        target_commitish=target,
        dry_run=dry_run or base.dry_run,
    )


__all__ = [
    'CONFIG_FILENAME',
    'VALID_KEYS',
    'ReleaseConfig',
    'load_config',
    'resolve_config',
]
