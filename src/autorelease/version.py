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

"""Three-part release version identifiers.

A release is named ``v<major>.<minor>.<patch>``. Parsing is strict:
anything other than exactly three runs of ASCII digits (after an
optional leading ``v``) raises ``AR-VERSION-INVALID-FORMAT`` instead of
silently defaulting a component to zero.

Usage::

    from autorelease.version import Version

    v = Version.parse('v1.2.3')
    assert str(v.bump(BumpType.MINOR)) == 'v1.3.0'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from autorelease.commit_parsing import BumpType
from autorelease.errors import E, AutoReleaseError

_PART_RE = re.compile(r'[0-9]+')


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` release version.

    Attributes:
        major: Incompatible-change counter.
        minor: Additive-change counter.
        patch: Fix-only counter.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        """Reject negative components."""
        for name in ('major', 'minor', 'patch'):
            if getattr(self, name) < 0:
                raise AutoReleaseError(
                    code=E.VERSION_INVALID_FORMAT,
                    message=f'Version {name} must be non-negative, got {getattr(self, name)}',
                )

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``v1.2.3`` or ``1.2.3``.

        Raises:
            AutoReleaseError: ``AR-VERSION-INVALID-FORMAT`` when the text
                does not have exactly three non-negative integer parts.
        """
        raw = text[1:] if text.startswith('v') else text
        parts = raw.split('.')
        if len(parts) != 3:
            raise AutoReleaseError(
                code=E.VERSION_INVALID_FORMAT,
                message=f"Version '{text}' must have exactly three dot-separated parts",
                hint='Use the form v<major>.<minor>.<patch>, e.g. v1.4.0.',
            )
        for part in parts:
            if not _PART_RE.fullmatch(part):
                raise AutoReleaseError(
                    code=E.VERSION_INVALID_FORMAT,
                    message=f"Version '{text}' has a non-numeric part '{part}'",
                    hint='Each part must be a non-negative integer.',
                )
        major, minor, patch = (int(p) for p in parts)
        return cls(major=major, minor=minor, patch=patch)

    def bump(self, bump: BumpType) -> Version:
        """Return the version after applying ``bump``.

        Higher components reset the lower ones; ``NONE`` is the identity.
        """
        if bump == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def __str__(self) -> str:
        """Canonical ``v<major>.<minor>.<patch>`` form."""
        return f'v{self.major}.{self.minor}.{self.patch}'


def parse_version(text: str) -> Version:
    """Functional alias for :meth:`Version.parse`."""
    return Version.parse(text)


def format_version(version: Version) -> str:
    """Functional alias for ``str(version)``."""
    return str(version)


__all__ = [
    'Version',
    'format_version',
    'parse_version',
]
