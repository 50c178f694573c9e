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

"""Serialize the license list to ``licenses.json``.

The output is byte-for-byte reproducible: records are sorted by
case-insensitive name (stable, so names differing only in case keep
manifest order), object keys are alphabetical, and the indentation is
fixed.  Running the generator twice on the same inputs produces
identical files, which keeps the generated file quiet in version
control.

The file is written to a temporary sibling and renamed into place, so
an interrupted run never leaves a truncated ``licenses.json`` behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from licenselist._types import Library
from licenselist.errors import OutputWriteFailedError
from licenselist.logging import get_logger

__all__ = [
    'render_libraries',
    'sort_libraries',
    'write_libraries',
]

logger = get_logger(__name__)


def sort_libraries(libraries: Iterable[Library]) -> list[Library]:
    """Return *libraries* sorted by lower-cased name (stable)."""
    return sorted(libraries, key=lambda lib: lib.name.lower())


def render_libraries(libraries: Iterable[Library]) -> str:
    """Render *libraries* as the text of ``licenses.json``."""
    records = [lib.to_json() for lib in sort_libraries(libraries)]
    return json.dumps(records, indent=2, sort_keys=True, ensure_ascii=False) + '\n'


def write_libraries(libraries: Iterable[Library], output_path: Path) -> None:
    """Write *libraries* to *output_path*, replacing any existing file.

    Missing parent directories are created.

    Raises:
        OutputWriteFailedError: If serialization, directory creation,
            or the write itself fails.
    """
    try:
        # Encoded up front so unencodable names fail before a file exists.
        data = render_libraries(libraries).encode('utf-8')
    except (TypeError, ValueError) as exc:
        logger.error('output_render_error', path=str(output_path), error=str(exc))
        raise OutputWriteFailedError(output_path, str(exc)) from exc

    tmp_name = ''
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent,
            prefix=f'.{output_path.name}.',
            suffix='.tmp',
        )
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        # mkstemp creates the file owner-only.
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, output_path)
    except OSError as exc:
        logger.error('output_write_error', path=str(output_path), error=str(exc))
        if tmp_name:
            Path(tmp_name).unlink(missing_ok=True)
        raise OutputWriteFailedError(output_path, str(exc)) from exc

    logger.debug('output_written', path=str(output_path), bytes=len(data))
