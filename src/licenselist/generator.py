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

r"""Build the license list for a ``SourcePackages`` directory.

Pipeline::

    workspace-state.json ──▶ [DependencyReference, ...]
                                   │
                    for each: checkouts/<repo> ──▶ LICENSE text?
                                   │                    │
                               Found(Library)      Missing(name)
                                   │
                         sort by name ──▶ licenses.json

Only two things can fail a run: reading the manifest and writing the
output.  A dependency without a license file is logged and skipped;
with hundreds of dependencies, some always lack one.

Usage::

    from licenselist.generator import generate

    result = generate(Path('licenses.json'), Path('SourcePackages'))
    print(len(result.found), 'licenses,', len(result.missing), 'missing')
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from licenselist._types import (
    CollectionResult,
    DependencyReference,
    Found,
    Library,
    LookupResult,
    Missing,
)
from licenselist.checkouts import resolve_checkout_dir
from licenselist.config import GeneratorConfig
from licenselist.export import write_libraries
from licenselist.locate import read_license_body
from licenselist.logging import get_logger
from licenselist.manifest import parse_workspace_state

__all__ = [
    'collect_libraries',
    'generate',
    'lookup_library',
]

logger = get_logger(__name__)

ResultCallback = Callable[[LookupResult], None]


def lookup_library(ref: DependencyReference, checkouts_root: Path) -> LookupResult:
    """Look up the license of a single dependency.

    Returns:
        :class:`Found` with the assembled :class:`Library`, or
        :class:`Missing` with the reason it was skipped.
    """
    directory = resolve_checkout_dir(ref, checkouts_root)
    if directory is None:
        logger.warning(
            'license_missing',
            dependency=ref.name,
            reason='unresolvable_location',
            location=ref.source_location,
        )
        return Missing(name=ref.name, reason='unresolvable_location')

    body = read_license_body(directory)
    if body is None:
        logger.warning('license_missing', dependency=ref.name, reason='no_license_file', checkout=str(directory))
        return Missing(name=ref.name, reason='no_license_file')

    logger.info('license_found', dependency=ref.name, checkout=str(directory))
    return Found(Library(name=ref.name, url=ref.source_location, license_body=body))


def collect_libraries(
    refs: Iterable[DependencyReference],
    checkouts_root: Path,
    *,
    on_result: ResultCallback | None = None,
) -> CollectionResult:
    """Look up every dependency and split the outcomes.

    Repeated references (same name and location) are looked up once.

    Args:
        refs: Dependency references in manifest order.
        checkouts_root: The ``checkouts`` directory.
        on_result: Optional callback invoked with each lookup result,
            used by the CLI to print progress.

    Returns:
        A :class:`CollectionResult` with found records and misses, both
        in manifest order.
    """
    result = CollectionResult()
    seen: set[DependencyReference] = set()
    for ref in refs:
        if ref in seen:
            logger.debug('duplicate_dependency', dependency=ref.name, location=ref.source_location)
            continue
        seen.add(ref)

        outcome = lookup_library(ref, checkouts_root)
        if isinstance(outcome, Found):
            result.found.append(outcome.library)
        else:
            result.missing.append(outcome)
        if on_result is not None:
            on_result(outcome)
    return result


def generate(
    output_path: Path,
    source_packages: Path,
    *,
    config: GeneratorConfig | None = None,
    on_result: ResultCallback | None = None,
) -> CollectionResult:
    """Generate the licenses file for *source_packages*.

    Args:
        output_path: Destination JSON file; overwritten if present.
        source_packages: Directory holding the manifest and checkouts.
        config: Layout names; defaults to :class:`GeneratorConfig`.
        on_result: Forwarded to :func:`collect_libraries`.

    Returns:
        The :class:`CollectionResult` that was written.

    Raises:
        ManifestUnreadableError: If the manifest cannot be loaded.
        OutputWriteFailedError: If the output cannot be written.
    """
    cfg = config or GeneratorConfig()
    logger.info('generate_start', source_packages=str(source_packages), output=str(output_path))

    refs = parse_workspace_state(source_packages / cfg.manifest)
    result = collect_libraries(refs, source_packages / cfg.checkouts, on_result=on_result)
    write_libraries(result.found, output_path)

    logger.info(
        'licenses_written',
        output=str(output_path),
        dependencies=len(refs),
        found=len(result.found),
        missing=len(result.missing),
    )
    return result
