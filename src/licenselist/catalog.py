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

r"""Load a generated ``licenses.json`` at application runtime.

An application that ships the generated file calls
:func:`load_libraries` once at startup and keeps the returned tuple.
The file is looked up through a sequence of strategies, first hit wins:

1. **Bundled resource**: ``importlib.resources`` finds ``licenses.json``
   inside an installed package (the wheel the app ships).
2. **Adjacent file**: a plain path on disk, for development runs from a
   source checkout where the file was generated but not packaged.

If no strategy yields a decodable file, the result is empty; a notices
screen with no entries is preferable to a crash at startup.

Identifiers for list widgets are a presentation concern and are never
written to the file; :func:`identify` pairs each record with a fresh
UUID on every call.

Usage::

    from licenselist.catalog import adjacent_file, bundled_resource, identify, load_libraries

    libraries = load_libraries([bundled_resource('myapp'), adjacent_file(Path('licenses.json'))])
    for row in identify(libraries):
        print(row.id, row.library.name)
"""

from __future__ import annotations

import importlib.resources as _resources
import json
import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from licenselist._types import Library
from licenselist.logging import get_logger

__all__ = [
    'IdentifiedLibrary',
    'LicensesLookup',
    'adjacent_file',
    'bundled_resource',
    'decode_libraries',
    'default_lookups',
    'identify',
    'load_libraries',
    'repository_url',
]

logger = get_logger(__name__)

LICENSES_FILENAME = 'licenses.json'

#: Returns the text of a licenses file, or ``None`` if it is not there.
LicensesLookup = Callable[[], str | None]


def bundled_resource(package: str, name: str = LICENSES_FILENAME) -> LicensesLookup:
    """Look up *name* as a resource of the installed *package*."""

    def lookup() -> str | None:
        try:
            ref = _resources.files(package).joinpath(name)
            return ref.read_text(encoding='utf-8')
        except (OSError, ModuleNotFoundError, TypeError, UnicodeDecodeError):
            return None

    return lookup


def adjacent_file(path: Path) -> LicensesLookup:
    """Look up a licenses file at a fixed path on disk."""

    def lookup() -> str | None:
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            return None

    return lookup


def default_lookups() -> list[LicensesLookup]:
    """Bundled ``licenselist`` resource, then ``./licenses.json``."""
    return [
        bundled_resource('licenselist'),
        adjacent_file(Path.cwd() / LICENSES_FILENAME),
    ]


def decode_libraries(text: str) -> tuple[Library, ...]:
    """Decode the text of a licenses file.

    Raises:
        ValueError: If *text* is not a JSON array of library objects.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f'expected a list, got {type(data).__name__}')
    return tuple(Library.from_json(item) for item in data)


def load_libraries(lookups: Sequence[LicensesLookup] | None = None) -> tuple[Library, ...]:
    """Load the libraries from the first lookup that yields a valid file.

    Args:
        lookups: Strategies tried in order.  Defaults to
            :func:`default_lookups`.

    Returns:
        The decoded libraries, or an empty tuple when nothing was found.
    """
    for lookup in lookups if lookups is not None else default_lookups():
        text = lookup()
        if text is None:
            continue
        try:
            libraries = decode_libraries(text)
        except ValueError as exc:
            logger.warning('licenses_file_invalid', error=str(exc))
            continue
        logger.debug('licenses_loaded', count=len(libraries))
        return libraries

    logger.debug('licenses_file_not_found', hint='Run licenselist to generate licenses.json.')
    return ()


@dataclass(frozen=True)
class IdentifiedLibrary:
    """A library paired with a per-load identifier for UI lists."""

    id: uuid.UUID
    library: Library


def identify(
    libraries: Iterable[Library],
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
) -> list[IdentifiedLibrary]:
    """Attach a fresh identifier to each library."""
    return [IdentifiedLibrary(id=id_factory(), library=lib) for lib in libraries]


def repository_url(library: Library) -> str | None:
    """Return ``library.url`` if it is an absolute URL, else ``None``."""
    parsed = urlparse(library.url)
    if parsed.scheme and parsed.netloc:
        return library.url
    return None
