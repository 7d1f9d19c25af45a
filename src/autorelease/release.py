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


"""Release pipeline: decide the next version and publish it.

Pipeline::

    forge.get_latest_release()            v1.2.3 @ abc1234
         │
         ▼
    forge.get_commits_since(abc1234)      oldest first
         │
         ▼
    decide(commits, v1.2.3) ── NO_RELEASE ──▶ ReleaseOutcome(created=False)
         │
         ▼ v1.3.0
    compose_release_notes(commits)
         │
         ▼
    forge.publish_release('v1.3.0', ...)  ──▶ ReleaseOutcome(created=True)

The steps run one after another. Any error aborts the pipeline before
the publish call, which is the only side effect.

Usage::

    from autorelease.release import ReleasePipeline

    outcome = await ReleasePipeline(forge, config).run()
    if outcome.created:
        print(outcome.version)
"""

from __future__ import annotations

from dataclasses import dataclass

from autorelease.backends.forge import Forge
from autorelease.commit_parsing import CommitClassifier
from autorelease.config import ReleaseConfig
from autorelease.logging import get_logger
from autorelease.release_notes import ReleaseNotes, compose_release_notes
from autorelease.version import Version
from autorelease.versioning import NO_RELEASE, ReleaseDecision, decide

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleaseOutcome:
    """Result of one pipeline run.

    Attributes:
        created: Whether a release was (or, in dry-run, would be) created.
        version: The new version text, or ``None``.
        decision: The version decision.
        notes: Composed notes, ``None`` when no release is needed.
        url: URL of the created release (empty in dry-run).
        dry_run: Whether the publish step was skipped.
    """

    created: bool
    version: str | None = None
    decision: ReleaseDecision = NO_RELEASE
    notes: ReleaseNotes | None = None
    url: str = ''
    dry_run: bool = False


class ReleasePipeline:
    """Runs one release attempt against a forge.

    Args:
        forge: Repository collaborator.
        config: Resolved run configuration.
        classifier: Commit classifier used for both the bump and the
            notes (default: scoped prefixes).
    """

    def __init__(
        self,
        forge: Forge,
        config: ReleaseConfig,
        *,
        classifier: CommitClassifier | None = None,
    ) -> None:
        """Initialize with the forge and run configuration."""
        self._forge = forge
        self._config = config
        self._classifier = classifier

    async def run(self) -> ReleaseOutcome:
        """Execute the pipeline.

        Raises:
            AutoReleaseError: On any failure; nothing is published then.
        """
        latest = await self._forge.get_latest_release()
        prior = Version.parse(latest.version)
        commits = await self._forge.get_commits_since(latest.commit_sha)

        decision = decide(commits, prior, classifier=self._classifier)
        if not decision.should_release:
            logger.info('no_release_needed', latest=str(prior), commits=len(commits))
            return ReleaseOutcome(created=False, decision=decision, dry_run=self._config.dry_run)

        notes = compose_release_notes(commits, classifier=self._classifier)
        tag = str(decision.next_version)
        logger.info(
            'new_version',
            previous=str(prior),
            version=tag,
            bump=decision.bump.value,
            commits=len(commits),
        )

        url = await self._forge.publish_release(
            tag,
            target_commitish=self._config.target_commitish,
            body=notes.render(),
            draft=self._config.draft,
            prerelease=self._config.prerelease,
            generate_release_notes=self._config.generate_release_notes,
            dry_run=self._config.dry_run,
        )
        if not self._config.dry_run:
            logger.info('release_created', version=tag, url=url)

        return ReleaseOutcome(
            created=True,
            version=tag,
            decision=decision,
            notes=notes,
            url=url,
            dry_run=self._config.dry_run,
        )


__all__ = [
    'ReleaseOutcome',
    'ReleasePipeline',
]
