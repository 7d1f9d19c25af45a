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


"""GitHub REST API forge backend for autorelease.

Implements the :class:`~autorelease.backends.forge.Forge` protocol using
the GitHub REST API v3 via ``httpx``.

Endpoints used::

    GET  /repos/{owner}/{repo}/releases/latest     latest published release
    GET  /repos/{owner}/{repo}/git/ref/tags/{tag}  tag -> commit SHA
    GET  /repos/{owner}/{repo}/commits             history, newest first
    POST /repos/{owner}/{repo}/releases            create the new release

Authentication:

    Resolves a token in order of precedence:

    1. ``token`` constructor parameter.
    2. ``GITHUB_TOKEN`` env var (set automatically by GitHub Actions).
    3. ``GH_TOKEN`` env var (used by the ``gh`` CLI).

    If none are set, the backend raises ``AR-CONFIG-MISSING-REQUIRED`` at
    construction rather than on the first API call.

Usage::

    from autorelease.backends.forge.github_api import GitHubAPIBackend

    forge = GitHubAPIBackend(owner='octo', repo='widgets')
    latest = await forge.get_latest_release()
    commits = await forge.get_commits_since(latest.commit_sha)

.. seealso::

    `GitHub REST API <https://docs.github.com/en/rest>`_
"""

from __future__ import annotations

import os
from contextlib import AbstractAsyncContextManager
from typing import Any
from urllib.parse import quote

import httpx

from autorelease.backends.forge._types import LatestRelease
from autorelease.commit_parsing import Commit
from autorelease.errors import E, AutoReleaseError
from autorelease.logging import get_logger
from autorelease.net import DEFAULT_POOL_SIZE, DEFAULT_TIMEOUT, http_client, send_request

log = get_logger('autorelease.backends.forge.github_api')

# GitHub REST API base URL.
DEFAULT_BASE_URL = 'https://api.github.com'

# API version header for stable API behavior.
_API_VERSION = '2022-11-28'

# Largest page size GET /commits accepts.
_COMMITS_PER_PAGE = 100

DEFAULT_MAX_COMMITS = 1000


class GitHubAPIBackend:
    """Forge implementation using the GitHub REST API.

    In GitHub Actions the ``GITHUB_TOKEN`` secret is available
    automatically; creating releases needs ``contents: write``.

    Args:
        owner: Repository owner (e.g., ``"octo"``).
        repo: Repository name (e.g., ``"widgets"``).
        token: GitHub API token. Falls back to ``GITHUB_TOKEN`` or
            ``GH_TOKEN`` env vars.
        base_url: API base URL (override for GitHub Enterprise Server).
        ref: Branch or SHA whose history is listed. Empty means the
            default branch.
        max_commits: Most commits listed since the latest release; more is
            an error rather than a partial batch.
        pool_size: HTTP connection pool size.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        *,
        token: str = '',
        base_url: str = DEFAULT_BASE_URL,
        ref: str = '',
        max_commits: int = DEFAULT_MAX_COMMITS,
        pool_size: int = DEFAULT_POOL_SIZE,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize with owner, repo, and API token."""
        self._owner = owner
        self._repo = repo
        self._base_url = base_url.rstrip('/')
        self._repo_url = f'{self._base_url}/repos/{owner}/{repo}'
        self._ref = ref
        self._max_commits = max_commits
        self._pool_size = pool_size
        self._timeout = timeout

        resolved_token = token or os.environ.get('GITHUB_TOKEN', '') or os.environ.get('GH_TOKEN', '')
        if not resolved_token:
            raise AutoReleaseError(
                code=E.CONFIG_MISSING_REQUIRED,
                message='GitHub API token required: pass token= or set GITHUB_TOKEN or GH_TOKEN env var.',
                hint="In a workflow, pass 'GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}' as an input.",
            )

        self._headers = {
            'Authorization': f'Bearer {resolved_token}',
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': _API_VERSION,
        }

    def __repr__(self) -> str:
        """Return a safe repr that never exposes the API token."""
        return f'GitHubAPIBackend(owner={self._owner!r}, repo={self._repo!r})'

    @property
    def slug(self) -> str:
        """``owner/repo``."""
        return f'{self._owner}/{self._repo}'

    def _client(self) -> AbstractAsyncContextManager[httpx.AsyncClient]:
        return http_client(
            pool_size=self._pool_size,
            timeout=self._timeout,
            headers=self._headers,
        )

    @staticmethod
    def _json(response: httpx.Response) -> Any:  # noqa: ANN401
        try:
            return response.json()
        except ValueError as exc:
            raise AutoReleaseError(
                code=E.FORGE_REQUEST_FAILED,
                message=f'{response.request.method} {response.request.url} returned invalid JSON: {exc}',
            ) from exc

    @staticmethod
    def _malformed(response: httpx.Response, detail: str) -> AutoReleaseError:
        return AutoReleaseError(
            code=E.FORGE_REQUEST_FAILED,
            message=f'{response.request.method} {response.request.url} returned an unexpected payload: {detail}',
        )

    @staticmethod
    def _commit(response: httpx.Response, item: Any) -> Commit:  # noqa: ANN401
        try:
            return Commit(sha=item['sha'], message=item['commit']['message'])
        except (KeyError, TypeError) as exc:
            raise GitHubAPIBackend._malformed(response, f'commit entry without sha or message ({exc!r})') from exc

    def _not_in_history(self, sha: str, detail: str) -> AutoReleaseError:
        return AutoReleaseError(
            code=E.RELEASE_COMMIT_NOT_IN_HISTORY,
            message=f'Release commit {sha[:7]} not found in {self.slug} history: {detail}',
            hint='Raise max_commits in autorelease.toml, or check that the release commit is on the target branch.',
        )

    async def get_latest_release(self) -> LatestRelease:
        """Look up the latest release and resolve its tag to a commit."""
        async with self._client() as client:
            response = await send_request(
                client,
                'GET',
                f'{self._repo_url}/releases/latest',
                expected=(200, 404),
            )
            if response.status_code == 404:
                raise AutoReleaseError(
                    code=E.RELEASE_NOT_FOUND,
                    message=f'Could not find any releases in {self.slug}',
                    hint='Publish an initial release (e.g. v0.1.0) by hand to seed the version history.',
                )
            release = self._json(response)
            if not isinstance(release, dict) or not release.get('tag_name'):
                raise self._malformed(response, 'release without tag_name')
            tag = release['tag_name']
            version = release.get('name') or tag

            ref_response = await send_request(
                client,
                'GET',
                f'{self._repo_url}/git/ref/tags/{quote(tag, safe="/")}',
                expected=(200, 404),
            )

        if ref_response.status_code == 404:
            raise AutoReleaseError(
                code=E.RELEASE_NOT_ANNOTATED_TO_COMMIT,
                message=f"Latest release tag '{tag}' does not exist in {self.slug}",
            )
        ref = self._json(ref_response)
        target = ref.get('object') if isinstance(ref, dict) else None
        if not isinstance(target, dict):
            target = {}
        if target.get('type') != 'commit' or not target.get('sha'):
            raise AutoReleaseError(
                code=E.RELEASE_NOT_ANNOTATED_TO_COMMIT,
                message=f"Latest release tag '{tag}' is not referencing a commit",
                hint='Recreate the tag as a lightweight tag on the release commit.',
            )

        log.info('latest_release', version=version, tag=tag, sha=target['sha'][:7])
        return LatestRelease(version=version, tag=tag, commit_sha=target['sha'])

    async def get_commits_since(self, sha: str) -> list[Commit]:
        """Walk history newest-first until ``sha``; return oldest first.

        Raises:
            AutoReleaseError: ``AR-RELEASE-COMMIT-NOT-IN-HISTORY`` when
                ``sha`` is not reached within ``max_commits`` commits or
                before history ends.
        """
        newer: list[Commit] = []
        found = False
        page = 1
        params: dict[str, str | int] = {'per_page': _COMMITS_PER_PAGE}
        if self._ref:
            params['sha'] = self._ref

        async with self._client() as client:
            while not found:
                response = await send_request(
                    client,
                    'GET',
                    f'{self._repo_url}/commits',
                    params={**params, 'page': page},
                )
                items = self._json(response)
                if not isinstance(items, list):
                    raise self._malformed(response, 'expected a list of commits')
                for item in items:
                    commit = self._commit(response, item)
                    if commit.sha == sha:
                        found = True
                        break
                    if len(newer) >= self._max_commits:
                        raise self._not_in_history(sha, f'more than max_commits={self._max_commits} commits')
                    newer.append(commit)
                if not found and len(items) < _COMMITS_PER_PAGE:
                    raise self._not_in_history(sha, f'history ended after {len(newer)} commits')
                page += 1

        log.info('commits_since_release', count=len(newer))
        newer.reverse()
        return newer

    async def publish_release(
        self,
        tag: str,
        *,
        target_commitish: str = '',
        body: str = '',
        draft: bool = False,
        prerelease: bool = False,
        generate_release_notes: bool = True,
        dry_run: bool = False,
    ) -> str:
        """Create a GitHub Release via the REST API."""
        url = f'{self._repo_url}/releases'
        payload: dict[str, Any] = {
            'tag_name': tag,
            'name': tag,
            'body': body,
            'draft': draft,
            'prerelease': prerelease,
            'generate_release_notes': generate_release_notes,
        }
        if target_commitish:
            payload['target_commitish'] = target_commitish

        if dry_run:
            log.info('dry_run_publish_release', tag=tag, target=target_commitish)
            return ''

        async with self._client() as client:
            response = await send_request(client, 'POST', url, expected=(201,), json=payload)

        html_url = self._json(response).get('html_url', '')
        log.info('publish_release', tag=tag, url=html_url)
        return html_url


__all__ = [
    'DEFAULT_BASE_URL',
    'DEFAULT_MAX_COMMITS',
    'GitHubAPIBackend',
]
