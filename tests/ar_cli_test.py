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


"""Tests for the autorelease CLI."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from autorelease import __version__
from autorelease.cli import build_parser, main
from autorelease.errors import E, AutoReleaseError

from tests._fakes import FakeForge, commits

_ACTIONS_VARS = (
    'GITHUB_ACTIONS',
    'GITHUB_OUTPUT',
    'GITHUB_EVENT_PATH',
    'GITHUB_REPOSITORY',
    'GITHUB_SHA',
    'GITHUB_TOKEN',
    'GH_TOKEN',
    'INPUT_GITHUB_TOKEN',
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Run every test outside Actions, in an empty directory."""
    for name in _ACTIONS_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # main() points the root handler at the captured stderr of this test.
    logging.root.handlers.clear()


@pytest.fixture()
def forge(monkeypatch: pytest.MonkeyPatch) -> FakeForge:
    """Replace the GitHub backend with a FakeForge."""
    fake = FakeForge(commits=commits('feat(ui): add Y', 'fix(core): patch Z'))
    monkeypatch.setattr('autorelease.cli._build_forge', lambda config: fake)
    return fake


@pytest.fixture()
def actions_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Simulate a GitHub Actions runner; returns the GITHUB_OUTPUT file."""
    output = tmp_path / 'github_output'
    monkeypatch.setenv('GITHUB_ACTIONS', 'true')
    monkeypatch.setenv('GITHUB_OUTPUT', str(output))
    monkeypatch.setenv('GITHUB_REPOSITORY', 'octo/widgets')
    monkeypatch.setenv('GITHUB_SHA', 'e' * 40)
    monkeypatch.setenv('INPUT_GITHUB_TOKEN', 'input-token')
    return output


def _subjects(tmp_path: Path, *lines: str) -> str:
    path = tmp_path / 'subjects.txt'
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
    return str(path)


class TestParser:
    """Tests for build_parser."""

    def test_run_flags(self) -> None:
        """Test run flags."""
        args = build_parser().parse_args(['run', '--repo', 'octo/widgets', '--dry-run', '--show-notes'])
        assert args.command == 'run'
        assert args.repo == 'octo/widgets'
        assert args.dry_run
        assert args.show_notes

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test version."""
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestNoCommand:
    """Tests for invocation without a subcommand."""

    def test_outside_actions(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test outside actions."""
        assert main([]) == 2
        assert 'please provide a command' in capsys.readouterr().err

    def test_inside_actions_runs(self, forge: FakeForge, actions_env: Path) -> None:
        """On a runner, a bare invocation is a release run."""
        assert main([]) == 0
        assert forge.releases_published[0]['tag'] == 'v1.3.0'


class TestBump:
    """Tests for the bump subcommand."""

    def test_minor(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test minor."""
        path = _subjects(tmp_path, 'chore: tidy', 'feat(ui): add Y', 'fix(core): patch Z')
        assert main(['bump', 'v1.2.3', '-f', path]) == 0
        assert capsys.readouterr().out == 'v1.3.0\n'

    def test_none(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test none."""
        path = _subjects(tmp_path, 'chore: tidy', '', 'docs(readme): typo')
        assert main(['bump', '1.2.3', '--file', path]) == 0
        assert capsys.readouterr().out == 'none\n'

    def test_invalid_version(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test invalid version."""
        path = _subjects(tmp_path, 'feat(ui): add Y')
        assert main(['bump', 'v1.2', '-f', path]) == 1
        assert 'AR-VERSION-INVALID-FORMAT' in capsys.readouterr().err


class TestNotes:
    """Tests for the notes subcommand."""

    def test_notes(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test notes."""
        path = _subjects(tmp_path, 'feat(ui): add Y', 'chore: tidy', 'fix(core): patch Z')
        assert main(['notes', '-f', path]) == 0
        assert capsys.readouterr().out == ('#### Features\n* **ui**, add Y\n\n#### Bug Fixes\n* **core**, patch Z\n')

    def test_no_notes(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test no notes."""
        path = _subjects(tmp_path, 'chore: tidy')
        assert main(['notes', '-f', path]) == 0
        assert capsys.readouterr().out == ''


class TestExplain:
    """Tests for the explain subcommand."""

    def test_known(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test known."""
        assert main(['explain', 'AR-RELEASE-NOT-FOUND']) == 0
        assert capsys.readouterr().out.startswith('AR-RELEASE-NOT-FOUND: ')

    def test_unknown(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test unknown."""
        assert main(['explain', 'AR-NOPE']) == 1
        assert 'Unknown error code' in capsys.readouterr().err


class TestRun:
    """Tests for the run subcommand."""

    def test_release_created(
        self,
        forge: FakeForge,
        actions_env: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test release created."""
        assert main(['run']) == 0
        assert 'Release v1.3.0 created' in capsys.readouterr().out
        assert actions_env.read_text(encoding='utf-8') == 'new-release-created=true\nnew-version=v1.3.0\n'
        assert forge.releases_published[0]['target_commitish'] == 'e' * 40

    def test_no_release_needed(
        self,
        forge: FakeForge,
        actions_env: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test no release needed."""
        forge.commits = commits('chore: bump deps')
        assert main(['run']) == 0
        assert 'No need for new release' in capsys.readouterr().out
        assert actions_env.read_text(encoding='utf-8') == 'new-release-created=false\nnew-version=\n'

    def test_failure(
        self,
        forge: FakeForge,
        actions_env: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A failed run emits ::error:: and reports no release."""
        forge.latest_error = AutoReleaseError(code=E.RELEASE_NOT_FOUND, message='Could not find any releases')
        assert main(['run']) == 1
        captured = capsys.readouterr()
        assert '::error::[AR-RELEASE-NOT-FOUND] Could not find any releases' in captured.out
        assert 'error[AR-RELEASE-NOT-FOUND]' in captured.err
        assert actions_env.read_text(encoding='utf-8') == 'new-release-created=false\nnew-version=\n'
        assert forge.releases_published == []

    def test_unexpected_error_reported(
        self,
        forge: FakeForge,
        actions_env: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Errors outside the AR-* catalog still fail the step with outputs written."""
        forge.commits_error = KeyError('commit')
        assert main(['run']) == 1
        out = capsys.readouterr().out
        assert "::error::Unexpected error: KeyError('commit')" in out
        assert actions_env.read_text(encoding='utf-8') == 'new-release-created=false\nnew-version=\n'
        assert forge.releases_published == []

    def test_dry_run(
        self,
        forge: FakeForge,
        actions_env: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test dry run."""
        assert main(['run', '--dry-run', '--show-notes']) == 0
        out = capsys.readouterr().out
        assert 'Release v1.3.0 would be created (dry run)' in out
        assert '#### Features\n* **ui**, add Y\n' in out
        assert forge.releases_published[0]['dry_run'] is True
        assert actions_env.read_text(encoding='utf-8') == 'new-release-created=false\nnew-version=v1.3.0\n'

    def test_cli_overrides(self, forge: FakeForge, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test cli overrides."""
        seen: list[str] = []

        def build(config: object) -> FakeForge:
            seen.append(repr(config))
            return forge

        monkeypatch.setattr('autorelease.cli._build_forge', build)
        assert main(['run', '--repo', 'octo/gadgets', '--token', 'cli-token', '--target', 'abc']) == 0
        assert "repo_name='gadgets'" in seen[0]
        assert 'cli-token' not in seen[0]
        assert forge.releases_published[0]['target_commitish'] == 'abc'

    def test_missing_token(self, forge: FakeForge, capsys: pytest.CaptureFixture[str]) -> None:
        """Test missing token."""
        assert main(['run', '--repo', 'octo/widgets']) == 1
        assert 'AR-CONFIG-MISSING-REQUIRED' in capsys.readouterr().err
        assert forge.calls == []

    def test_config_file(self, forge: FakeForge, tmp_path: Path) -> None:
        """Test config file."""
        (tmp_path / 'autorelease.toml').write_text(
            'repo_owner = "octo"\nrepo_name = "widgets"\ndraft = true\n',
            encoding='utf-8',
        )
        assert main(['run', '--token', 't']) == 0
        assert forge.releases_published[0]['draft'] is True
