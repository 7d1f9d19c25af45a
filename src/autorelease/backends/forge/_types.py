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


"""Value types returned by forge backends."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LatestRelease:
    """The most recent published release and the commit it was cut from.

    Attributes:
        version: Version text of the release (its name, or its tag when
            the release has no name).
        tag: The release's git tag.
        commit_sha: SHA of the commit the tag points at.
    """

    version: str
    tag: str
    commit_sha: str
