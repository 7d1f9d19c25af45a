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


"""GitHub Actions runner environment.

Reads what a workflow hands to the action and writes what the workflow
reads back:

    inputs     INPUT_<NAME> env vars            get_input()
    event      JSON file at GITHUB_EVENT_PATH   load_event_payload()
    outputs    key=value lines in GITHUB_OUTPUT set_output()
    failure    ``::error::`` workflow command   set_failed()

Outputs written by a release run::

    new-release-created   "true" or "false"
    new-version           the released version, or empty
"""

from __future__ import annotations

import json
import os
import sys
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

from autorelease.logging import get_logger

log = get_logger(__name__)

OUTPUT_RELEASE_CREATED = 'new-release-created'
OUTPUT_NEW_VERSION = 'new-version'


def _environ(env: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if env is None else env


def in_github_actions(env: Mapping[str, str] | None = None) -> bool:
    """Whether we run on a GitHub Actions runner."""
    return _environ(env).get('GITHUB_ACTIONS') == 'true'


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    """Return the action input ``name`` (``''`` when unset).

    The runner exposes ``with:`` inputs as ``INPUT_<NAME>`` with spaces
    replaced by underscores and the name upper-cased.
    """
    key = 'INPUT_' + name.replace(' ', '_').upper()
    return _environ(env).get(key, '').strip()


def load_event_payload(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Load the webhook payload that triggered the workflow.

    Returns ``{}`` outside Actions or when the file is missing.
    """
    path = _environ(env).get('GITHUB_EVENT_PATH', '')
    if not path:
        return {}
    try:
        payload = json.loads(Path(path).read_text(encoding='utf-8'))
    except (OSError, ValueError) as exc:
        log.warning('event_payload_unreadable', path=path, error=str(exc))
        return {}
    return payload if isinstance(payload, dict) else {}


def repository_from_event(payload: Mapping[str, Any], env: Mapping[str, str] | None = None) -> str:
    """Return ``owner/name`` of the triggering repository, or ``''``.

    Prefers the payload's ``repository`` object and falls back to
    ``GITHUB_REPOSITORY``.
    """
    repository = payload.get('repository') or {}
    full_name = repository.get('full_name', '')
    if full_name:
        return full_name
    owner = repository.get('owner') or {}
    owner_name = owner.get('login') or owner.get('name') or ''
    name = repository.get('name', '')
    if owner_name and name:
        return f'{owner_name}/{name}'
    return _environ(env).get('GITHUB_REPOSITORY', '')


def target_commit_from_event(payload: Mapping[str, Any], env: Mapping[str, str] | None = None) -> str:
    """Return the commit a new release should be tagged on, or ``''``.

    For a push this is the last pushed commit; otherwise the event's
    ``after`` SHA, then ``GITHUB_SHA``.
    """
    commits = payload.get('commits') or []
    if commits and commits[-1].get('id'):
        return commits[-1]['id']
    if payload.get('after'):
        return payload['after']
    return _environ(env).get('GITHUB_SHA', '')


def set_output(name: str, value: str, env: Mapping[str, str] | None = None) -> None:
    """Publish a step output.

    Appends to the ``GITHUB_OUTPUT`` file, using the heredoc form for
    multi-line values. Without ``GITHUB_OUTPUT`` the pair is only logged.
    """
    output_path = _environ(env).get('GITHUB_OUTPUT', '')
    if not output_path:
        log.info('step_output', name=name, value=value)
        return

    if '\n' in value:
        delimiter = f'ghadelimiter_{uuid.uuid4()}'
        line = f'{name}<<{delimiter}\n{value}\n{delimiter}\n'
    else:
        line = f'{name}={value}\n'
    with Path(output_path).open('a', encoding='utf-8') as fh:
        fh.write(line)
    log.debug('step_output', name=name, value=value)


def set_failed(message: str, *, file: TextIO | None = None) -> None:
    """Emit an ``::error::`` workflow command for ``message``.

    The caller is responsible for exiting non-zero.
    """
    out = file or sys.stdout
    escaped = message.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')
    print(f'::error::{escaped}', file=out)  # noqa: T201 - workflow command


__all__ = [
    'OUTPUT_NEW_VERSION',
    'OUTPUT_RELEASE_CREATED',
    'get_input',
    'in_github_actions',
    'load_event_payload',
    'repository_from_event',
    'set_failed',
    'set_output',
    'target_commit_from_event',
]
