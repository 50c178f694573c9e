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

"""Exceptions raised by licenselist.

Every error that aborts a run derives from :class:`LicenseListError`,
whose ``str()`` is the message shown to the user.  A dependency
without a license file is *not* an error; it is reported as a
:class:`~licenselist._types.Missing` result instead.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    'BuildStepError',
    'CheckoutRootNotFoundError',
    'ConfigError',
    'InvalidArgumentsError',
    'LicenseListError',
    'ManifestUnreadableError',
    'OutputWriteFailedError',
]

USAGE = 'USAGE: licenselist [output-file] [source-packages-path]'


class LicenseListError(Exception):
    """Base class for errors that abort a licenselist run."""


class ManifestUnreadableError(LicenseListError):
    """Raised when ``workspace-state.json`` is missing or malformed.

    Attributes:
        path: Path of the manifest that failed to load.
        detail: What went wrong, for logs.
    """

    def __init__(self, path: Path, detail: str = '') -> None:
        self.path = path
        self.detail = detail
        super().__init__(f'Error: Could not read {path.name}')


class OutputWriteFailedError(LicenseListError):
    """Raised when the licenses file cannot be serialized or written."""

    def __init__(self, path: Path, detail: str = '') -> None:
        self.path = path
        self.detail = detail
        super().__init__(f'Error: Could not write {path.name}')


class CheckoutRootNotFoundError(LicenseListError):
    """Raised when an upward walk finds no marker directory.

    Attributes:
        start: Directory the walk started from.
        marker: Name of the directory that was looked for.
    """

    def __init__(self, start: Path, marker: str) -> None:
        self.start = start
        self.marker = marker
        super().__init__(f'Error: {marker} directory not found')


class InvalidArgumentsError(LicenseListError):
    """Raised when the command line cannot be parsed.

    Attributes:
        detail: What was wrong with the arguments, for logs.
    """

    def __init__(self, detail: str = '') -> None:
        self.detail = detail
        super().__init__(USAGE)


class ConfigError(LicenseListError):
    """Raised when ``licenselist.toml`` fails validation.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, path: Path, errors: list[str]) -> None:
        self.path = path
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'Error: {path.name} has {len(errors)} validation error(s):\n{bullet_list}')


class BuildStepError(LicenseListError):
    """Raised when the generator subprocess of a build step fails."""

    def __init__(self, returncode: int, output: str = '') -> None:
        self.returncode = returncode
        self.output = output
        super().__init__(f'Error: license generation exited with status {returncode}')
