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


"""Forge protocol for autorelease.

The :class:`Forge` protocol is the repository collaborator the release
pipeline talks to: it reads the latest release and the commits since,
and publishes the next release. Implementations:

- :class:`~autorelease.backends.forge.github_api.GitHubAPIBackend`: GitHub REST API

Every method raises :class:`~autorelease.errors.AutoReleaseError` on
failure; none of them retries.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from autorelease.backends.forge._types import LatestRelease as LatestRelease
from autorelease.backends.forge.github_api import GitHubAPIBackend as GitHubAPIBackend
from autorelease.commit_parsing import Commit

__all__ = [
    'Forge',
    'GitHubAPIBackend',
    'LatestRelease',
]


@runtime_checkable
class Forge(Protocol):
    """Protocol for the repository operations a release run needs."""

    async def get_latest_release(self) -> LatestRelease:
        """Return the latest published release and its commit.

        Raises:
            AutoReleaseError: ``AR-RELEASE-NOT-FOUND`` if the repository
                has no releases, ``AR-RELEASE-NOT-ANNOTATED-TO-COMMIT`` if
                the release tag does not resolve to a commit, or
                ``AR-FORGE-REQUEST-FAILED`` on transport errors.
        """
        ...

    async def get_commits_since(self, sha: str) -> list[Commit]:
        """Return commits newer than ``sha``, oldest first, excluding ``sha``.

        Raises:
            AutoReleaseError: ``AR-RELEASE-COMMIT-NOT-IN-HISTORY`` if the
                complete set of newer commits cannot be listed.
        """
        ...

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
        """Create a release named and tagged ``tag``.

        Args:
            tag: Tag (and release name) to create.
            target_commitish: Commit or branch the tag is created on.
                Empty means the repository's default branch.
            body: Release notes (markdown).
            draft: Create as a draft release.
            prerelease: Mark as a pre-release.
            generate_release_notes: Ask the forge to append its own
                generated notes after ``body``.
            dry_run: Log the request without sending it.

        Returns:
            URL of the created release, or ``''`` in dry-run mode.
        """
        ...
