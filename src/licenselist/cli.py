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

"""Command-line entry point for licenselist.

Invocation modes, by number of positional arguments:

==========  =================================================================
Arguments   Behavior
==========  =================================================================
none        Write ``$SRCROOT/licenses.json`` from ``$SRCROOT/SourcePackages``.
            Without that directory, write an empty list and succeed.
OUTPUT      Write OUTPUT; find ``SourcePackages`` upward from ``$SRCROOT``.
            Fails if it cannot be found.
OUTPUT SP   Write OUTPUT from the ``SourcePackages`` directory SP.
==========  =================================================================

``$SRCROOT`` defaults to the current directory.  Progress and errors
are printed to stdout; structured logs go to stderr.

Exit codes:
    0  The licenses file was written.
    1  Invalid arguments, unreadable manifest, missing
       ``SourcePackages`` (one-argument mode) or unwritable output.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from rich.console import Console

from licenselist._types import Found, LookupResult
from licenselist.config import load_config, project_root
from licenselist.discovery import find_marker_directory
from licenselist.errors import InvalidArgumentsError, LicenseListError
from licenselist.export import write_libraries
from licenselist.generator import generate
from licenselist.logging import configure_logging, get_logger

__all__ = [
    'build_parser',
    'main',
]

logger = get_logger(__name__)

console = Console(highlight=False)

_EXAMPLES = """\

Examples:
  licenselist                                  # Auto-discover, output to ./licenses.json
  licenselist custom/path.json                 # Custom output, auto-discover SourcePackages
  licenselist output.json ./SourcePackages     # Explicit paths"""


def _say(message: str) -> None:
    # Dependency names come from JSON and may hold lone surrogates.
    printable = message.encode('utf-8', 'backslashreplace').decode('utf-8')
    console.print(printable, markup=False, soft_wrap=True)


def _report(outcome: LookupResult) -> None:
    if isinstance(outcome, Found):
        _say(f'✅ Found license for: {outcome.library.name}')
    else:
        _say(f'⚠️  No license found for: {outcome.name}')


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports errors with our usage text and exit status."""

    def error(self, message: str) -> NoReturn:
        raise InvalidArgumentsError(message)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``licenselist``."""
    parser = _ArgumentParser(
        prog='licenselist',
        description='Collect dependency license texts into a licenses.json file.',
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Counted by hand so that three or more paths print our usage text.
    parser.add_argument('paths', nargs='*', metavar='PATH', help='[output-file] [source-packages-path]')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument(
        '--json-log',
        action='store_true',
        default=None,
        help='Emit structured logs as JSON lines on stderr.',
    )
    return parser


def _write_empty(output_path: Path) -> int:
    _say('No SourcePackages found, creating empty license list')
    try:
        write_libraries([], output_path)
    except LicenseListError as exc:
        _say(str(exc))
        return 1
    _say(f'Created empty license list at {output_path}')
    return 0


def _run(paths: Sequence[str]) -> int:
    if len(paths) > 2:
        raise InvalidArgumentsError(f'expected at most 2 paths, got {len(paths)}')

    root = project_root()
    config = load_config(root)

    if not paths:
        output_path = root / config.output
        source_packages = root / config.marker
        if not source_packages.is_dir():
            return _write_empty(output_path)
    elif len(paths) == 1:
        output_path = Path(paths[0])
        source_packages = find_marker_directory(root, config.marker)
    else:
        output_path = Path(paths[0])
        source_packages = Path(paths[1])

    _say(f'🔍 Searching for licenses in: {source_packages}')
    result = generate(output_path, source_packages, config=config, on_result=_report)
    _say(f'📝 Generated {len(result.found)} licenses to: {output_path}')
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    try:
        args = build_parser().parse_args(argv)
    except InvalidArgumentsError as exc:
        _say(str(exc))
        _say(_EXAMPLES)
        return 1
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        return _run(args.paths)
    except InvalidArgumentsError as exc:
        logger.debug('invalid_arguments', detail=exc.detail)
        _say(str(exc))
        _say(_EXAMPLES)
        return 1
    except LicenseListError as exc:
        logger.debug('run_failed', error_type=type(exc).__name__)
        _say(str(exc))
        return 1
