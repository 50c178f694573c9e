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

"""Find a marker directory by walking up from a starting path.

Both the command line (starting at ``$SRCROOT``) and the build step
(starting at its work directory, somewhere under DerivedData) use this
to locate ``SourcePackages``::

    /Users/me/DerivedData/App-abc/SourcePackages/       ← found here
    /Users/me/DerivedData/App-abc/Build/Plugins/out/    ← walk starts here
"""

from __future__ import annotations

from pathlib import Path

from licenselist.errors import CheckoutRootNotFoundError
from licenselist.logging import get_logger

__all__ = ['find_marker_directory']

logger = get_logger(__name__)


def find_marker_directory(start: Path, marker_name: str) -> Path:
    """Return the nearest ``<ancestor>/<marker_name>`` directory.

    *start* itself is checked first, then each parent up to and
    including the filesystem root.

    Args:
        start: Directory to start from; relative paths are taken
            relative to the current directory.
        marker_name: Name of the subdirectory to look for.

    Returns:
        Path of the first matching marker directory.

    Raises:
        CheckoutRootNotFoundError: If no ancestor contains the marker.
    """
    origin = start.absolute()
    for directory in (origin, *origin.parents):
        candidate = directory / marker_name
        if candidate.is_dir():
            logger.debug('marker_found', marker=marker_name, path=str(candidate))
            return candidate
    logger.debug('marker_not_found', marker=marker_name, start=str(origin))
    raise CheckoutRootNotFoundError(origin, marker_name)
