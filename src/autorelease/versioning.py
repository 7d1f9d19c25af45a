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

"""Next-version decision from a batch of commits.

The decision is a strict precedence ladder over the categories present
in the batch, not an additive scheme::

    any BREAKING                          -> MAJOR  (v1.2.3 -> v2.0.0)
    else any FEATURE                      -> MINOR  (v1.2.3 -> v1.3.0)
    else any FIX / PERFORMANCE / REFACTOR -> PATCH  (v1.2.3 -> v1.2.4)
    else                                  -> no release

Commit order and counts never matter: one ``breaking`` commit among ten
``fix`` commits is still exactly one major bump.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from autorelease.commit_parsing import (
    BumpType,
    Category,
    Commit,
    CommitClassifier,
    ScopedCommitClassifier,
    max_bump,
)
from autorelease.logging import get_logger
from autorelease.version import Version

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseDecision:
    """Outcome of :func:`decide`.

    Attributes:
        bump: The winning bump type (``NONE`` means no release).
        next_version: The version to release, or ``None``.
    """

    bump: BumpType
    next_version: Version | None = None

    @property
    def should_release(self) -> bool:
        """Whether a new release is warranted."""
        return self.next_version is not None


NO_RELEASE = ReleaseDecision(bump=BumpType.NONE)


def bump_for(category: Category) -> BumpType:
    """Bump contributed by one commit of ``category``."""
    return category.bump


def batch_bump(commits: Sequence[Commit], *, classifier: CommitClassifier | None = None) -> BumpType:
    """Fold the commits of a batch into the single strongest bump."""
    clf = classifier or ScopedCommitClassifier()
    bump = BumpType.NONE
    for commit in commits:
        category = clf.classify(commit)
        logger.debug(
            'new_commit',
            sha=commit.short_sha,
            subject=commit.subject,
            category=category.value,
        )
        bump = max_bump(bump, bump_for(category))
    return bump


def decide(
    commits: Sequence[Commit],
    prior_version: Version,
    *,
    classifier: CommitClassifier | None = None,
) -> ReleaseDecision:
    """Decide the next release from ``commits`` since ``prior_version``.

    Args:
        commits: Commits since the last release, oldest first.
        prior_version: Version of the last release.
        classifier: Optional classifier; defaults to
            :class:`~autorelease.commit_parsing.ScopedCommitClassifier`.
            Pass the same one to :func:`~autorelease.release_notes.compose_release_notes`
            so the notes and the bump agree.

    Returns:
        :data:`NO_RELEASE` when no commit is release-worthy, otherwise a
        decision carrying the bumped version.
    """
    bump = batch_bump(commits, classifier=classifier)
    if bump == BumpType.NONE:
        return NO_RELEASE
    return ReleaseDecision(bump=bump, next_version=prior_version.bump(bump))


__all__ = [
    'NO_RELEASE',
    'ReleaseDecision',
    'batch_bump',
    'bump_for',
    'decide',
]
