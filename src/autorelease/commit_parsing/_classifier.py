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

"""Scoped-prefix commit classifier.

Pure implementation: depends only on ``re`` and :mod:`._types`.

A commit is release-worthy when its subject line starts with one of the
tags below, a non-empty parenthesized scope, and a colon::

    breaking(api): drop the v1 endpoints      -> BREAKING
    BREAKING(api): drop the v1 endpoints      -> BREAKING
    feat(parser): accept trailing commas      -> FEATURE
    fix(cli): exit 1 on bad input             -> FIX
    perf(cache): avoid double hashing         -> PERFORMANCE
    refactor(core): split the loader          -> REFACTOR
    chore: bump deps                          -> UNCLASSIFIED (no scope)
    feat: add X                               -> UNCLASSIFIED (no scope)

Tags are case-sensitive; only ``breaking`` has an upper-case spelling.
"""

from __future__ import annotations

import re

from autorelease.commit_parsing._types import Category, Commit, CommitSummary
from autorelease.errors import E, AutoReleaseError

# Tag keywords per category, in evaluation order.
CATEGORY_TAGS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.BREAKING, ('breaking', 'BREAKING')),
    (Category.FEATURE, ('feat',)),
    (Category.FIX, ('fix',)),
    (Category.PERFORMANCE, ('perf',)),
    (Category.REFACTOR, ('refactor',)),
)


def _tag_pattern(tags: tuple[str, ...]) -> re.Pattern[str]:
    alternation = '|'.join(re.escape(tag) for tag in tags)
    return re.compile(rf'^(?:{alternation})\([^)]+\):')


# The classification ladder: first matching row wins.
CATEGORY_LADDER: tuple[tuple[Category, re.Pattern[str]], ...] = tuple(
    (category, _tag_pattern(tags)) for category, tags in CATEGORY_TAGS
)

_ALL_TAGS = '|'.join(re.escape(tag) for _, tags in CATEGORY_TAGS for tag in tags)

# tag(scope): body, used to pull the scope and body out of a classified subject.
SUMMARY_PATTERN: re.Pattern[str] = re.compile(
    rf'^(?:{_ALL_TAGS})'  # tag
    r'\((?P<scope>[^)]+)\)'  # (scope)
    r':(?P<body>.*)$',  # colon + body
)


def _subject(message: str) -> str:
    return message.split('\n', 1)[0].rstrip('\r')


def classify(message: str) -> Category:
    """Return the category of a commit message.

    Only the first line is inspected. Never raises: anything that does
    not match the ladder is :attr:`Category.UNCLASSIFIED`.
    """
    subject = _subject(message)
    for category, pattern in CATEGORY_LADDER:
        if pattern.match(subject):
            return category
    return Category.UNCLASSIFIED


def extract_summary(message: str) -> CommitSummary:
    """Pull ``(scope, body)`` out of a ``tag(scope): body`` subject.

    Exactly one leading space is trimmed from the body, so
    ``feat(x):  two spaces`` keeps one.

    Raises:
        AutoReleaseError: ``AR-COMMIT-UNPARSABLE`` if the subject does
            not have the ``tag(scope): body`` shape.
    """
    subject = _subject(message)
    match = SUMMARY_PATTERN.match(subject)
    if match is None:
        raise AutoReleaseError(
            code=E.COMMIT_UNPARSABLE,
            message=f"Cannot extract scope and body from commit message '{subject}'",
            hint='Use the form type(scope): description.',
        )
    body = match.group('body')
    if body.startswith(' '):
        body = body[1:]
    return CommitSummary(scope=match.group('scope'), body=body)


class ScopedCommitClassifier:
    """Object form of :func:`classify` / :func:`extract_summary`.

    Lets callers inject a classifier the same way a forge is injected.
    """

    def classify(self, commit: Commit) -> Category:
        """Classify ``commit`` by its subject line."""
        return classify(commit.message)

    def summarize(self, commit: Commit) -> CommitSummary:
        """Extract the scoped summary of ``commit``.

        Raises:
            AutoReleaseError: ``AR-COMMIT-UNPARSABLE``, with the SHA in
                the message.
        """
        try:
            return extract_summary(commit.message)
        except AutoReleaseError as exc:
            raise AutoReleaseError(
                code=exc.code,
                message=f'{exc.message} (commit {commit.short_sha})',
                hint=exc.hint,
            ) from exc
