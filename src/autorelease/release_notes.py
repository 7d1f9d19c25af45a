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

"""Release notes grouped by commit category.

Release notes generation flow::

    commits (oldest first)
         │
         ▼
    classify each commit ── UNCLASSIFIED ──▶ dropped
         │
         ▼
    extract "**scope**, body" entry
         │
         ▼
    group into sections (Breaking, Features, Bug Fixes,
                         Performance Improvements, Refactoring)
         │
         ▼
    render_release_notes() → markdown string

Rendered output::

    #### Features
    * **ui**, add dark mode

    #### Bug Fixes
    * **core**, patch race in loader

A category with no commits gets no section. A commit that classifies
but cannot be summarized aborts composition with
``AR-COMMIT-UNPARSABLE`` rather than being dropped from the notes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from string import Template

from autorelease.commit_parsing import (
    Category,
    Commit,
    CommitClassifier,
    ScopedCommitClassifier,
)
from autorelease.logging import get_logger

logger = get_logger(__name__)

# Section order in rendered notes.
SECTION_ORDER: tuple[Category, ...] = (
    Category.BREAKING,
    Category.FEATURE,
    Category.FIX,
    Category.PERFORMANCE,
    Category.REFACTOR,
)

_SECTION_TEMPLATE = Template("""\
#### $label
$entries""")

_ENTRY_TEMPLATE = Template('* $entry')


@dataclass(frozen=True)
class NotesSection:
    """One heading and its entries.

    Attributes:
        category: The category the section groups.
        entries: Rendered ``**scope**, body`` entries, oldest first.
    """

    category: Category
    entries: tuple[str, ...]

    @property
    def heading(self) -> str:
        """Section heading text."""
        return self.category.label


@dataclass(frozen=True)
class ReleaseNotes:
    """Grouped release notes.

    Attributes:
        sections: Non-empty sections in :data:`SECTION_ORDER`.
    """

    sections: tuple[NotesSection, ...] = field(default_factory=tuple)

    def section(self, category: Category) -> NotesSection | None:
        """Return the section for ``category``, or ``None`` if absent."""
        for section in self.sections:
            if section.category is category:
                return section
        return None

    def render(self) -> str:
        """Render as markdown; see :func:`render_release_notes`."""
        return render_release_notes(self)


def compose_release_notes(
    commits: Sequence[Commit],
    *,
    classifier: CommitClassifier | None = None,
) -> ReleaseNotes:
    """Group ``commits`` into release-notes sections.

    Args:
        commits: Commits since the last release, oldest first.
        classifier: Optional classifier; defaults to
            :class:`ScopedCommitClassifier`.

    Returns:
        The composed :class:`ReleaseNotes`.

    Raises:
        AutoReleaseError: ``AR-COMMIT-UNPARSABLE`` if a classified
            commit cannot be summarized.
    """
    clf = classifier or ScopedCommitClassifier()
    grouped: dict[Category, list[str]] = {category: [] for category in SECTION_ORDER}

    for commit in commits:
        category = clf.classify(commit)
        if category is Category.UNCLASSIFIED:
            continue
        grouped[category].append(clf.summarize(commit).render())

    sections = tuple(
        NotesSection(category=category, entries=tuple(grouped[category]))
        for category in SECTION_ORDER
        if len(grouped[category]) > 0
    )
    logger.debug(
        'release_notes_composed',
        sections=[s.category.value for s in sections],
        entries=sum(len(s.entries) for s in sections),
    )
    return ReleaseNotes(sections=sections)


def render_release_notes(notes: ReleaseNotes) -> str:
    """Render release notes as markdown.

    Sections are separated by one blank line and the document ends with
    a single newline. Notes without sections render as ``''``.
    """
    blocks = [
        _SECTION_TEMPLATE.substitute(
            label=section.heading,
            entries='\n'.join(_ENTRY_TEMPLATE.substitute(entry=entry) for entry in section.entries),
        )
        for section in notes.sections
    ]
    if not blocks:
        return ''
    return '\n\n'.join(blocks) + '\n'


__all__ = [
    'SECTION_ORDER',
    'NotesSection',
    'ReleaseNotes',
    'compose_release_notes',
    'render_release_notes',
]
