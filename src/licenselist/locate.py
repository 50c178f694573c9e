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

r"""Locate and read the license file of a dependency checkout.

Only the top level of the checkout is searched.  An entry is a license
file when its name, minus the last extension and case-folded, is
``license`` or ``licence``, and it is not a directory::

    LICENSE          ✓
    License.txt      ✓
    licence.md       ✓
    LICENSE/         ✗  (directory)
    COPYING          ✗
    docs/LICENSE     ✗  (not top level)

When several entries qualify, they are tried in a deterministic order
rather than directory-listing order: a name without an extension first,
then by case-folded name (``LICENSE`` before ``LICENSE.md`` before
``LICENSE.txt``).  The first candidate that reads as non-empty text
wins, so an empty ``LICENSE`` next to a real ``LICENSE.md`` still
yields the latter.

Text is UTF-8 unless the file starts with a UTF-8, UTF-16 or UTF-32
byte order mark, in which case the mark selects the encoding and is
dropped.  Line endings are kept verbatim.

A missing directory, no qualifying entry, or only candidates that are
undecodable or empty are all soft misses: the functions return
``None`` and the caller leaves the dependency out.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from licenselist.logging import get_logger

__all__ = [
    'LICENSE_STEMS',
    'decode_license_text',
    'find_license_file',
    'is_license_name',
    'license_candidates',
    'read_license_body',
]

logger = get_logger(__name__)

#: Case-folded file stems that identify a license file.
LICENSE_STEMS: frozenset[str] = frozenset({'license', 'licence'})

# UTF-32 marks first: the UTF-32-LE mark starts with the UTF-16-LE one.
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF8, 'utf-8-sig'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)


def is_license_name(name: str) -> bool:
    """Return ``True`` if *name* looks like a license file name."""
    return Path(name).stem.casefold() in LICENSE_STEMS


def _preference(path: Path) -> tuple[bool, str, str]:
    return (bool(path.suffix), path.name.casefold(), path.name)


def license_candidates(directory: Path) -> list[Path]:
    """Return the license files at the top level of *directory*, best first.

    Returns:
        Qualifying files in preference order; empty when the directory
        does not exist, cannot be listed, or has no qualifying entry.
    """
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.debug('checkout_unlistable', path=str(directory), error=str(exc))
        return []

    candidates = sorted(
        (entry for entry in entries if is_license_name(entry.name) and not entry.is_dir()),
        key=_preference,
    )
    if len(candidates) > 1:
        logger.debug('multiple_license_files', path=str(directory), candidates=[c.name for c in candidates])
    return candidates


def find_license_file(directory: Path) -> Path | None:
    """Return the preferred license file at the top level of *directory*."""
    candidates = license_candidates(directory)
    return candidates[0] if candidates else None


def decode_license_text(data: bytes) -> str:
    """Decode license file bytes, honoring a leading byte order mark.

    Raises:
        UnicodeDecodeError: If *data* is not valid in the selected
            encoding.
    """
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data.decode(encoding)
    return data.decode('utf-8')


def read_license_body(directory: Path) -> str | None:
    """Return the verbatim text of the license file in *directory*.

    Returns:
        The contents of the first readable, non-empty candidate, or
        ``None`` on a soft miss (see module docstring).
    """
    for license_path in license_candidates(directory):
        try:
            text = decode_license_text(license_path.read_bytes())
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning('license_unreadable', path=str(license_path), error=str(exc))
            continue
        if not text:
            logger.warning('license_empty', path=str(license_path))
            continue
        return text
    return None
