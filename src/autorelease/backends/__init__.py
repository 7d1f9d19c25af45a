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


"""Protocol-based backend layer for autorelease.

Every call that leaves the process goes through an injectable protocol
defined here, so the release pipeline can run against a fake in tests.

Protocols (defined in subpackage ``__init__.py`` files):

- :class:`Forge`: latest release, commit history, release creation
  (default: :class:`GitHubAPIBackend`)
"""

from autorelease.backends.forge import Forge, GitHubAPIBackend, LatestRelease

__all__ = [
    'Forge',
    'GitHubAPIBackend',
    'LatestRelease',
]
