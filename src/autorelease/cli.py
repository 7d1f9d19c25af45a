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


"""CLI entry point for autorelease.

Constructs the forge backend from the resolved configuration and injects
it into the release pipeline.

Subcommands::

    autorelease run       Decide the next version and publish the release
    autorelease bump      Print the next version for commit subjects on stdin
    autorelease notes     Print release notes for commit subjects on stdin
    autorelease explain   Explain an error code

With no subcommand on a GitHub Actions runner, ``run`` is assumed.

Usage::

    # In a workflow step:
    autorelease run

    # Preview locally without creating a release:
    autorelease run --repo octo/widgets --dry-run

    # Offline, from git history:
    git log --format=%s --reverse v1.2.3..HEAD | autorelease bump v1.2.3
    git log --format=%s --reverse v1.2.3..HEAD | autorelease notes
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TextIO

from rich_argparse import RichHelpFormatter

from autorelease import __version__
from autorelease.actions import (
    OUTPUT_NEW_VERSION,
    OUTPUT_RELEASE_CREATED,
    in_github_actions,
    set_failed,
    set_output,
)
from autorelease.backends.forge import GitHubAPIBackend
from autorelease.commit_parsing import Commit
from autorelease.config import ReleaseConfig, load_config, resolve_config
from autorelease.errors import AutoReleaseError, explain, render_error
from autorelease.logging import bind_run_context, configure_logging, get_logger
from autorelease.release import ReleasePipeline
from autorelease.release_notes import compose_release_notes
from autorelease.version import Version
from autorelease.versioning import decide

logger = get_logger(__name__)


def _build_forge(config: ReleaseConfig) -> GitHubAPIBackend:
    """Construct the GitHub forge for a resolved config."""
    return GitHubAPIBackend(
        owner=config.repo_owner,
        repo=config.repo_name,
        token=config.token,
        base_url=config.api_url,
        ref=config.target_commitish,
        max_commits=config.max_commits,
        pool_size=config.http_pool_size,
        timeout=config.http_timeout,
    )


def _read_commits(stream: TextIO | None) -> list[Commit]:
    """Read one commit subject per non-blank line, oldest first."""
    text = (stream or sys.stdin).read()
    return [
        Commit(sha=f'line-{lineno}', message=line)
        for lineno, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]


def _report_outcome(created: bool, version: str | None) -> None:
    set_output(OUTPUT_RELEASE_CREATED, 'true' if created else 'false')
    set_output(OUTPUT_NEW_VERSION, version or '')


async def _cmd_run(args: argparse.Namespace) -> int:
    """Handle the ``run`` subcommand."""
    try:
        base = load_config(Path.cwd(), config_file=Path(args.config) if args.config else None)
        config = resolve_config(
            base,
            repository=args.repo or '',
            token=args.token or '',
            target_commitish=args.target or '',
            dry_run=args.dry_run,
        )
        bind_run_context(repo=config.repository, target=config.target_commitish[:7])
        outcome = await ReleasePipeline(_build_forge(config), config).run()
    except AutoReleaseError as exc:
        _report_outcome(False, None)
        set_failed(str(exc))
        render_error(exc)
        return 1
    except Exception as exc:
        logger.exception('release_run_crashed', error=repr(exc))
        _report_outcome(False, None)
        set_failed(f'Unexpected error: {exc!r}')
        return 1

    if not outcome.created:
        print('No need for new release')  # noqa: T201 - CLI output
        _report_outcome(False, None)
        return 0

    if outcome.dry_run:
        print(f'Release {outcome.version} would be created (dry run)')  # noqa: T201 - CLI output
        if args.show_notes and outcome.notes is not None:
            print(outcome.notes.render(), end='')  # noqa: T201 - CLI output
        _report_outcome(False, outcome.version)
        return 0

    print(f'Release {outcome.version} created')  # noqa: T201 - CLI output
    _report_outcome(True, outcome.version)
    return 0


def _cmd_bump(args: argparse.Namespace) -> int:
    """Handle the ``bump`` subcommand."""
    prior = Version.parse(args.current)
    decision = decide(_read_commits(args.file), prior)
    if not decision.should_release:
        print('none')  # noqa: T201 - CLI output
        return 0
    print(decision.next_version)  # noqa: T201 - CLI output
    return 0


def _cmd_notes(args: argparse.Namespace) -> int:
    """Handle the ``notes`` subcommand."""
    notes = compose_release_notes(_read_commits(args.file))
    print(notes.render(), end='')  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    text = explain(args.code)
    if text is None:
        print(f'Unknown error code: {args.code}', file=sys.stderr)  # noqa: T201 - CLI output
        return 1
    print(text)  # noqa: T201 - CLI output
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='autorelease',
        description='Semantic releases from scoped conventional commits.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Debug logging (lists every new commit and its category).',
    )
    parser.add_argument(
        '--quiet',
        '-q',
        action='store_true',
        help='Only log warnings and errors.',
    )
    parser.add_argument(
        '--json-log',
        action='store_true',
        help='Log JSON lines to stderr.',
    )

    subparsers = parser.add_subparsers(dest='command')

    run_parser = subparsers.add_parser(
        'run',
        help='Decide the next version and publish the release.',
        formatter_class=RichHelpFormatter,
    )
    run_parser.add_argument(
        '--repo',
        metavar='OWNER/NAME',
        help='Repository (default: from autorelease.toml or the Actions event).',
    )
    run_parser.add_argument(
        '--token',
        help='GitHub token (default: GITHUB_TOKEN input or env var).',
    )
    run_parser.add_argument(
        '--target',
        metavar='SHA',
        help='Commit to tag (default: last pushed commit).',
    )
    run_parser.add_argument(
        '--config',
        metavar='PATH',
        help='Config file (default: ./autorelease.toml if present).',
    )
    run_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Decide and render notes without creating the release.',
    )
    run_parser.add_argument(
        '--show-notes',
        action='store_true',
        help='With --dry-run, print the release notes.',
    )

    bump_parser = subparsers.add_parser(
        'bump',
        help='Print the next version for commit subjects read from a file or stdin.',
        formatter_class=RichHelpFormatter,
    )
    bump_parser.add_argument('current', help='Current version, e.g. v1.2.3.')
    bump_parser.add_argument(
        '--file',
        '-f',
        type=argparse.FileType('r', encoding='utf-8'),
        help='File with one commit subject per line, oldest first (default: stdin).',
    )

    notes_parser = subparsers.add_parser(
        'notes',
        help='Print release notes for commit subjects read from a file or stdin.',
        formatter_class=RichHelpFormatter,
    )
    notes_parser.add_argument(
        '--file',
        '-f',
        type=argparse.FileType('r', encoding='utf-8'),
        help='File with one commit subject per line, oldest first (default: stdin).',
    )

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
        formatter_class=RichHelpFormatter,
    )
    explain_parser.add_argument('code', help='Error code, e.g. AR-RELEASE-NOT-FOUND.')

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    command = args.command
    if command is None and in_github_actions():
        args = parser.parse_args([*(argv if argv is not None else sys.argv[1:]), 'run'])
        command = 'run'

    try:
        if command == 'run':
            return asyncio.run(_cmd_run(args))
        if command == 'bump':
            return _cmd_bump(args)
        if command == 'notes':
            return _cmd_notes(args)
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except AutoReleaseError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
]
