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


"""Tests for the commit_parsing subpackage.

All tests are pure: no I/O, no mocks, no async.
"""

from __future__ import annotations

import pytest
from autorelease.commit_parsing import (
    BUMP_PRECEDENCE,
    CATEGORY_LADDER,
    BumpType,
    Category,
    Commit,
    CommitClassifier,
    CommitSummary,
    ScopedCommitClassifier,
    classify,
    extract_summary,
    max_bump,
)
from autorelease.errors import E, AutoReleaseError

# ---------------------------------------------------------------------------
# BumpType / max_bump
# ---------------------------------------------------------------------------


class TestMaxBump:
    """Tests for the max_bump pure function."""

    def test_precedence_order(self) -> None:
        """Test precedence order."""
        assert BUMP_PRECEDENCE == [BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH, BumpType.NONE]

    def test_major_wins_over_all(self) -> None:
        """Test major wins over all."""
        for bt in BumpType:
            assert max_bump(BumpType.MAJOR, bt) == BumpType.MAJOR
            assert max_bump(bt, BumpType.MAJOR) == BumpType.MAJOR

    def test_minor_over_patch(self) -> None:
        """Test minor over patch."""
        assert max_bump(BumpType.PATCH, BumpType.MINOR) == BumpType.MINOR

    def test_commutative(self) -> None:
        """max_bump(a, b) == max_bump(b, a) for all pairs."""
        for a in BumpType:
            for b in BumpType:
                assert max_bump(a, b) == max_bump(b, a)


# ---------------------------------------------------------------------------
# Ladder
# ---------------------------------------------------------------------------


class TestLadder:
    """Tests for the ordered category table."""

    def test_order(self) -> None:
        """The ladder is evaluated Breaking, Feature, Fix, Performance, Refactor."""
        assert [category for category, _ in CATEGORY_LADDER] == [
            Category.BREAKING,
            Category.FEATURE,
            Category.FIX,
            Category.PERFORMANCE,
            Category.REFACTOR,
        ]

    def test_unclassified_not_in_ladder(self) -> None:
        """Test unclassified not in ladder."""
        assert Category.UNCLASSIFIED not in {category for category, _ in CATEGORY_LADDER}

    def test_category_bumps(self) -> None:
        """Test category bumps."""
        assert Category.BREAKING.bump == BumpType.MAJOR
        assert Category.FEATURE.bump == BumpType.MINOR
        assert Category.FIX.bump == BumpType.PATCH
        assert Category.PERFORMANCE.bump == BumpType.PATCH
        assert Category.REFACTOR.bump == BumpType.PATCH
        assert Category.UNCLASSIFIED.bump == BumpType.NONE


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        ('message', 'expected'),
        [
            ('breaking(api): remove X', Category.BREAKING),
            ('BREAKING(api): remove X', Category.BREAKING),
            ('feat(ui): add Y', Category.FEATURE),
            ('fix(core): bug', Category.FIX),
            ('perf(cache): faster lookups', Category.PERFORMANCE),
            ('refactor(loader): split module', Category.REFACTOR),
        ],
    )
    def test_categories(self, message: str, expected: Category) -> None:
        """Test each tag maps to its category."""
        assert classify(message) is expected

    def test_no_space_after_colon_still_matches(self) -> None:
        """Body spacing does not affect the match."""
        assert classify('feat(x):no space') is Category.FEATURE

    @pytest.mark.parametrize(
        'message',
        [
            'chore: bump deps',
            'feat: add Y',  # no scope
            'feat(): empty scope',
            'feat(ui) add Y',  # no colon
            'Feat(ui): capitalized',
            'FEAT(ui): upper case',
            'FIX(core): upper case',
            'Breaking(api): mixed case',
            ' feat(ui): leading space',
            'feature(ui): long tag',
            'featx(ui): suffix',
            'docs(readme): typo',
            'Merge pull request #12 from octo/feat(ui)',
            '',
        ],
    )
    def test_unclassified(self, message: str) -> None:
        """Messages outside the convention are unclassified, never errors."""
        assert classify(message) is Category.UNCLASSIFIED

    def test_only_first_line_is_classified(self) -> None:
        """Test only first line is classified."""
        assert classify('chore: tidy\n\nfeat(ui): add Y') is Category.UNCLASSIFIED
        assert classify('fix(core): bug\n\nBREAKING(api): mentioned in body') is Category.FIX

    def test_crlf_subject(self) -> None:
        """Test crlf subject."""
        assert classify('feat(ui): add Y\r\n\r\nbody') is Category.FEATURE

    def test_scope_stops_at_first_paren(self) -> None:
        """Scopes cannot contain ')'."""
        assert classify('feat(a)b): nope') is Category.UNCLASSIFIED


# ---------------------------------------------------------------------------
# extract_summary
# ---------------------------------------------------------------------------


class TestExtractSummary:
    """Tests for extract_summary()."""

    def test_scope_and_body(self) -> None:
        """Test scope and body."""
        assert extract_summary('feat(ui): add Y') == CommitSummary(scope='ui', body='add Y')

    def test_trims_exactly_one_space(self) -> None:
        """Test trims exactly one space."""
        assert extract_summary('fix(core):  two spaces').body == ' two spaces'

    def test_no_space(self) -> None:
        """Test no space."""
        assert extract_summary('feat(x):no space') == CommitSummary(scope='x', body='no space')

    def test_uses_first_line(self) -> None:
        """Test uses first line."""
        summary = extract_summary('perf(db): index lookups\n\nLonger explanation.')
        assert summary.body == 'index lookups'

    def test_colon_in_body(self) -> None:
        """Test colon in body."""
        assert extract_summary('fix(cli): handle a:b').body == 'handle a:b'

    def test_render(self) -> None:
        """Test render."""
        assert extract_summary('fix(core): patch Z').render() == '**core**, patch Z'

    def test_unparsable_raises(self) -> None:
        """Test unparsable raises."""
        with pytest.raises(AutoReleaseError) as exc_info:
            extract_summary('chore: bump deps')
        assert exc_info.value.code == E.COMMIT_UNPARSABLE

    def test_every_classified_message_is_summarizable(self) -> None:
        """classify and extract_summary agree on the shape."""
        for message in (
            'breaking(a): x',
            'BREAKING(a): x',
            'feat(a):x',
            'fix(a b c): x',
            'perf(a): ',
            'refactor(a/b): x',
        ):
            assert classify(message) is not Category.UNCLASSIFIED
            extract_summary(message)


# ---------------------------------------------------------------------------
# ScopedCommitClassifier
# ---------------------------------------------------------------------------


class TestScopedCommitClassifier:
    """Tests for the object form of the classifier."""

    def test_satisfies_protocol(self) -> None:
        """Test satisfies protocol."""
        assert isinstance(ScopedCommitClassifier(), CommitClassifier)

    def test_classify_and_summarize(self) -> None:
        """Test classify and summarize."""
        clf = ScopedCommitClassifier()
        commit = Commit(sha='a' * 40, message='feat(ui): add Y')
        assert clf.classify(commit) is Category.FEATURE
        assert clf.summarize(commit).render() == '**ui**, add Y'

    def test_summarize_error_carries_sha(self) -> None:
        """Test summarize error carries sha."""
        clf = ScopedCommitClassifier()
        with pytest.raises(AutoReleaseError, match='abcdef1'):
            clf.summarize(Commit(sha='abcdef1234', message='nope'))


class TestCommit:
    """Tests for the Commit dataclass."""

    def test_subject_and_short_sha(self) -> None:
        """Test subject and short sha."""
        commit = Commit(sha='0123456789abcdef', message='feat(ui): add Y\n\nbody')
        assert commit.subject == 'feat(ui): add Y'
        assert commit.short_sha == '0123456'

    def test_frozen(self) -> None:
        """Test frozen."""
        commit = Commit(sha='a', message='b')
        with pytest.raises(AttributeError):
            commit.message = 'c'  # type: ignore[misc]
