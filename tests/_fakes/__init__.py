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


"""Shared test doubles for autorelease tests.

Usage::

    from tests._fakes import FakeForge, commits

    forge = FakeForge(latest_version='v1.2.3', commits=commits('feat(ui): add Y'))
"""

from tests._fakes._forge import FakeForge as FakeForge, commits as commits

__all__ = [
    'FakeForge',
    'commits',
]
