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

"""Map dependency references to their checkout directories.

SwiftPM clones each dependency into ``checkouts/<repo>``, where
``<repo>`` is the last path segment of the package location without a
``.git`` suffix::

    https://github.com/org/Repo.git  →  checkouts/Repo
    https://github.com/org/Repo      →  checkouts/Repo
    Repo                             →  checkouts/Repo
"""

from __future__ import annotations

from pathlib import Path

from licenselist._types import DependencyReference

_GIT_SUFFIX = '.git'

# Names that would point outside the checkouts directory.
_UNRESOLVABLE = frozenset({'', '.', '..'})


def checkout_name(location: str) -> str | None:
    """Return the checkout directory name for *location*.

    Returns:
        The directory name, or ``None`` when the final segment is empty
        (e.g. a location ending in ``/``), consists only of ``.git``,
        or is ``.`` or ``..``.
    """
    segment = location.rsplit('/', 1)[-1]
    if segment.endswith(_GIT_SUFFIX):
        segment = segment[: -len(_GIT_SUFFIX)]
    if segment in _UNRESOLVABLE:
        return None
    return segment


def resolve_checkout_dir(ref: DependencyReference, checkouts_root: Path) -> Path | None:
    """Return the expected checkout directory of *ref*.

    The directory is not required to exist.
    """
    name = checkout_name(ref.source_location)
    if name is None:
        return None
    return checkouts_root / name


__all__ = [
    'checkout_name',
    'resolve_checkout_dir',
]
