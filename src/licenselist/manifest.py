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

"""Parse ``workspace-state.json`` into dependency references.

Swift Package Manager records every resolved dependency in
``SourcePackages/workspace-state.json``.  Only two fields of each entry
matter here::

    {
      "object": {
        "dependencies": [
          {"packageRef": {"location": "https://github.com/org/Repo.git",
                          "name": "Repo", ...}, ...},
          ...
        ]
      }
    }

Parsing is all-or-nothing: one malformed entry fails the whole read,
so a run never silently drops part of the dependency list.

Usage::

    from licenselist.manifest import parse_workspace_state

    refs = parse_workspace_state(Path('SourcePackages/workspace-state.json'))
    # → [DependencyReference(name='Repo', source_location='https://...'), ...]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from licenselist._types import DependencyReference
from licenselist.errors import ManifestUnreadableError
from licenselist.logging import get_logger

logger = get_logger(__name__)


def _expect_object(value: Any, where: str) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(value, dict):
        raise ValueError(f'{where}: expected an object, got {type(value).__name__}')
    return value


def _expect_string(container: dict[str, Any], key: str, where: str) -> str:
    if key not in container:
        raise ValueError(f'{where}: missing required field "{key}"')
    value = container[key]
    if not isinstance(value, str):
        raise ValueError(f'{where}.{key}: expected string, got {type(value).__name__}')
    return value


def decode_workspace_state(data: Any) -> list[DependencyReference]:  # noqa: ANN401
    """Extract dependency references from a decoded manifest document.

    Args:
        data: The result of ``json.loads`` on the manifest.

    Returns:
        One :class:`DependencyReference` per entry, in manifest order.

    Raises:
        ValueError: If the document does not have the expected shape.
    """
    root = _expect_object(data, 'manifest')
    obj = _expect_object(root.get('object'), 'object')
    dependencies = obj.get('dependencies')
    if not isinstance(dependencies, list):
        raise ValueError(f'object.dependencies: expected list, got {type(dependencies).__name__}')

    refs: list[DependencyReference] = []
    for i, raw in enumerate(dependencies):
        where = f'dependencies[{i}]'
        entry = _expect_object(raw, where)
        package_ref = _expect_object(entry.get('packageRef'), f'{where}.packageRef')
        refs.append(
            DependencyReference(
                name=_expect_string(package_ref, 'name', f'{where}.packageRef'),
                source_location=_expect_string(package_ref, 'location', f'{where}.packageRef'),
            )
        )
    return refs


def parse_workspace_state(manifest_path: Path) -> list[DependencyReference]:
    """Parse a ``workspace-state.json`` file.

    Args:
        manifest_path: Path to the manifest.

    Returns:
        The dependency references, in manifest order.

    Raises:
        ManifestUnreadableError: If the file is missing, unreadable,
            not JSON, or not shaped like a workspace state.
    """
    try:
        text = manifest_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        logger.error('manifest_read_error', path=str(manifest_path), error=str(exc))
        raise ManifestUnreadableError(manifest_path, str(exc)) from exc

    try:
        refs = decode_workspace_state(json.loads(text))
    except ValueError as exc:
        # json.JSONDecodeError is a ValueError subclass.
        logger.error('manifest_parse_error', path=str(manifest_path), error=str(exc))
        raise ManifestUnreadableError(manifest_path, str(exc)) from exc

    logger.debug('parsed_workspace_state', path=str(manifest_path), dependencies=len(refs))
    return refs


__all__ = [
    'decode_workspace_state',
    'parse_workspace_state',
]
