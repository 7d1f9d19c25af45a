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

"""Pure types for commit classification.

Frozen dataclasses and enums only: no I/O, no logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class BumpType(Enum):
    """Semver bump types, ordered by precedence (highest first).

    The strongest bump in a batch wins: a batch with one ``breaking``
    commit and ten ``fix`` commits is a single ``MAJOR`` bump.
    """

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    NONE = 'none'


# Bump precedence: lower index = higher precedence.
BUMP_PRECEDENCE: list[BumpType] = [
    BumpType.MAJOR,
    BumpType.MINOR,
    BumpType.PATCH,
    BumpType.NONE,
]


def max_bump(a: BumpType, b: BumpType) -> BumpType:
    """Return the higher-precedence bump type.

    >>> max_bump(BumpType.MINOR, BumpType.PATCH)
    <BumpType.MINOR: 'minor'>
    >>> max_bump(BumpType.NONE, BumpType.MAJOR)
    <BumpType.MAJOR: 'major'>
    """
    a_idx = BUMP_PRECEDENCE.index(a)
    b_idx = BUMP_PRECEDENCE.index(b)
    return BUMP_PRECEDENCE[min(a_idx, b_idx)]


class Category(Enum):
    """Release-notes category of a commit.

    Declaration order is the order sections appear in release notes.
    """

    BREAKING = 'breaking'
    FEATURE = 'feature'
    FIX = 'fix'
    PERFORMANCE = 'performance'
    REFACTOR = 'refactor'
    UNCLASSIFIED = 'unclassified'

    @property
    def label(self) -> str:
        """Section heading used in rendered release notes."""
        return _LABELS[self]

    @property
    def bump(self) -> BumpType:
        """Bump contributed by a single commit of this category."""
        return _BUMPS[self]


_LABELS: dict[Category, str] = {
    Category.BREAKING: 'Breaking Changes',
    Category.FEATURE: 'Features',
    Category.FIX: 'Bug Fixes',
    Category.PERFORMANCE: 'Performance Improvements',
    Category.REFACTOR: 'Refactoring',
    Category.UNCLASSIFIED: 'Other',
}

_BUMPS: dict[Category, BumpType] = {
    Category.BREAKING: BumpType.MAJOR,
    Category.FEATURE: BumpType.MINOR,
    Category.FIX: BumpType.PATCH,
    Category.PERFORMANCE: BumpType.PATCH,
    Category.REFACTOR: BumpType.PATCH,
    Category.UNCLASSIFIED: BumpType.NONE,
}


@dataclass(frozen=True)
class Commit:
    """One commit as returned by the forge.

    Attributes:
        sha: The full commit SHA.
        message: The full commit message. Only the first line is
            classified.
    """

    sha: str
    message: str

    @property
    def subject(self) -> str:
        """First line of the message."""
        return self.message.split('\n', 1)[0].rstrip('\r')

    @property
    def short_sha(self) -> str:
        """Abbreviated 7-character SHA for log lines."""
        return self.sha[:7]


@dataclass(frozen=True)
class CommitSummary:
    """Scope and description pulled from ``tag(scope): body``.

    Attributes:
        scope: Text inside the parentheses.
        body: Text after the colon with one leading space removed.
    """

    scope: str
    body: str

    def render(self) -> str:
        """Render as a release-notes entry: ``**scope**, body``."""
        return f'**{self.scope}**, {self.body}'


@runtime_checkable
class CommitClassifier(Protocol):
    """Protocol for commit classifiers.

    The built-in implementation is
    :class:`~autorelease.commit_parsing.ScopedCommitClassifier`. A custom
    classifier must keep :meth:`classify` and :meth:`summarize` in
    agreement: every commit it classifies must also be summarizable.
    """

    def classify(self, commit: Commit) -> Category:
        """Return the category of ``commit``; never raises."""
        ...

    def summarize(self, commit: Commit) -> CommitSummary:
        """Return the scoped summary of a classified ``commit``."""
        ...
