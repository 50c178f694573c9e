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

"""Layout configuration for licenselist.

The defaults describe the directory layout produced by Swift Package
Manager::

    $SRCROOT/
    ├── licenselist.toml           (optional overrides)
    ├── licenses.json              (output)
    └── SourcePackages/            (marker)
        ├── workspace-state.json   (manifest)
        └── checkouts/
            ├── alpha/LICENSE
            └── beta/LICENCE.md

Any of the four names can be overridden by a top-level key in an
optional ``licenselist.toml`` next to the project root::

    marker = "SourcePackages"
    manifest = "workspace-state.json"
    checkouts = "checkouts"
    output = "licenses.json"
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from licenselist.errors import ConfigError
from licenselist.logging import get_logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger(__name__)

CONFIG_FILENAME = 'licenselist.toml'

#: Environment variable holding the project root (set by Xcode).
SRCROOT_ENV = 'SRCROOT'

# Names that refer to a directory itself or its parent.
_RELATIVE_NAMES = frozenset({'.', '..'})


@dataclass(frozen=True)
class GeneratorConfig:
    """Names of the files and directories licenselist works with.

    Attributes:
        marker: Directory that holds the manifest and the checkouts.
        manifest: Manifest file name inside :attr:`marker`.
        checkouts: Checkouts directory name inside :attr:`marker`.
        output: Default output file name inside the project root.
    """

    marker: str = 'SourcePackages'
    manifest: str = 'workspace-state.json'
    checkouts: str = 'checkouts'
    output: str = 'licenses.json'


def _parse_config(data: Mapping[str, Any]) -> tuple[GeneratorConfig, list[str]]:
    """Validate a decoded config table.

    Returns:
        The parsed config and a list of validation errors.  The config
        is only meaningful when the error list is empty.
    """
    known = {f.name for f in fields(GeneratorConfig)}
    errors: list[str] = []
    values: dict[str, str] = {}
    for key, value in data.items():
        if key not in known:
            errors.append(f'unknown key {key!r} (expected one of: {", ".join(sorted(known))})')
            continue
        if not isinstance(value, str):
            errors.append(f'{key}: expected string, got {type(value).__name__}')
            continue
        if not value.strip() or '/' in value or value in _RELATIVE_NAMES:
            errors.append(f'{key}: must be a non-empty file name without "/" other than "." or ".."')
            continue
        values[key] = value
    return GeneratorConfig(**values), errors


def load_config(root: Path) -> GeneratorConfig:
    """Load ``licenselist.toml`` from *root*, or the defaults.

    Args:
        root: Project root directory.

    Returns:
        The effective :class:`GeneratorConfig`.

    Raises:
        ConfigError: If the file exists but is not valid TOML or
            contains unknown or malformed keys.
    """
    path = root / CONFIG_FILENAME
    if not path.is_file():
        return GeneratorConfig()
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(path, [str(exc)]) from exc

    config, errors = _parse_config(data)
    if errors:
        raise ConfigError(path, errors)
    logger.debug('config_loaded', path=str(path))
    return config


def project_root(environ: Mapping[str, str] | None = None) -> Path:
    """Return the project root: ``$SRCROOT`` or the current directory."""
    env = os.environ if environ is None else environ
    src_root = env.get(SRCROOT_ENV, '')
    if src_root:
        return Path(src_root)
    return Path.cwd()


__all__ = [
    'CONFIG_FILENAME',
    'SRCROOT_ENV',
    'GeneratorConfig',
    'load_config',
    'project_root',
]
