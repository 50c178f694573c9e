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

"""Shared leaf-level types used across licenselist.

This module must have **zero** imports from other ``licenselist``
modules to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    'CollectionResult',
    'DependencyReference',
    'Found',
    'Library',
    'LookupResult',
    'Missing',
]


@dataclass(frozen=True)
class DependencyReference:
    """A resolved dependency as listed in ``workspace-state.json``.

    Attributes:
        name: Package name as declared by the dependency.
        source_location: Repository URL or local path the package was
            checked out from.
    """

    name: str
    source_location: str


@dataclass(frozen=True)
class Library:
    """A single entry of the generated licenses file.

    Attributes:
        name: Dependency name.
        url: Source location the dependency was resolved from.
        license_body: Verbatim text of the dependency's license file.
    """

    name: str
    url: str
    license_body: str

    def to_json(self) -> dict[str, str]:
        """Return the serialized form used in ``licenses.json``."""
        return {
            'licenseBody': self.license_body,
            'name': self.name,
            'url': self.url,
        }

    @classmethod
    def from_json(cls, data: Any) -> Library:  # noqa: ANN401
        """Build a :class:`Library` from one decoded JSON object.

        Raises:
            ValueError: If *data* is not an object with string
                ``name``, ``url`` and ``licenseBody`` fields.
        """
        if not isinstance(data, dict):
            raise ValueError(f'expected an object, got {type(data).__name__}')
        values: dict[str, str] = {}
        for key in ('name', 'url', 'licenseBody'):
            value = data.get(key)
            if not isinstance(value, str):
                raise ValueError(f'field {key!r} must be a string')
            values[key] = value
        return cls(name=values['name'], url=values['url'], license_body=values['licenseBody'])


@dataclass(frozen=True)
class Found:
    """A dependency whose license file was located and read."""

    library: Library


@dataclass(frozen=True)
class Missing:
    """A dependency left out of the output.

    Attributes:
        name: Dependency name (for diagnostics).
        reason: Short machine-friendly reason, e.g.
            ``'no_license_file'`` or ``'unresolvable_location'``.
    """

    name: str
    reason: str


LookupResult = Found | Missing


@dataclass
class CollectionResult:
    """Outcome of looking up every dependency of a manifest.

    Attributes:
        found: Records with a license body, in manifest order.
        missing: Dependencies that were skipped, in manifest order.
    """

    found: list[Library] = field(default_factory=list)
    missing: list[Missing] = field(default_factory=list)
