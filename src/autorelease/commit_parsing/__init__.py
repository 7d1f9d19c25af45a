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

"""Commit message classification.

Maps a commit subject such as ``feat(ui): add dark mode`` to a
:class:`Category` and extracts its scoped summary for release notes.

Usage::

    from autorelease.commit_parsing import Category, classify, extract_summary

    assert classify('feat(ui): add dark mode') is Category.FEATURE
    assert extract_summary('feat(ui): add dark mode').render() == '**ui**, add dark mode'

    # Object form, for dependency injection:
    classifier = ScopedCommitClassifier()
    classifier.classify(Commit(sha='abc1234', message='fix(cli): typo'))
"""

from autorelease.commit_parsing._classifier import (
    CATEGORY_LADDER,
    CATEGORY_TAGS,
    ScopedCommitClassifier,
    classify,
    extract_summary,
)
from autorelease.commit_parsing._types import (
    BUMP_PRECEDENCE,
    BumpType,
    Category,
    Commit,
    CommitClassifier,
    CommitSummary,
    max_bump,
)

__all__ = [
    'BUMP_PRECEDENCE',
    'CATEGORY_LADDER',
    'CATEGORY_TAGS',
    'BumpType',
    'Category',
    'Commit',
    'CommitClassifier',
    'CommitSummary',
    'ScopedCommitClassifier',
    'classify',
    'extract_summary',
    'max_bump',
]
