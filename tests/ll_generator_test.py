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

"""Tests for the license collection pipeline."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from licenselist._types import DependencyReference, Found, Library, LookupResult, Missing
from licenselist.config import GeneratorConfig
from licenselist.errors import ManifestUnreadableError, OutputWriteFailedError
from licenselist.generator import collect_libraries, generate, lookup_library

# ── Fixtures ─────────────────────────────────────────────────────────


def _make_source_packages(
    tmp_path: Path,
    deps: list[tuple[str, str]],
    licenses: dict[str, tuple[str, str]],
) -> Path:
    """Create a SourcePackages tree.

    Args:
        tmp_path: Base directory.
        deps: ``(name, location)`` pairs for workspace-state.json.
        licenses: Checkout name → ``(file name, text)``.
    """
    source_packages = tmp_path / 'SourcePackages'
    checkouts = source_packages / 'checkouts'
    checkouts.mkdir(parents=True)
    state = {
        'object': {
            'dependencies': [{'packageRef': {'location': loc, 'name': name}} for name, loc in deps],
        },
        'version': 6,
    }
    (source_packages / 'workspace-state.json').write_text(json.dumps(state), encoding='utf-8')
    for checkout, (filename, text) in licenses.items():
        (checkouts / checkout).mkdir(exist_ok=True)
        (checkouts / checkout / filename).write_text(text, encoding='utf-8')
    return source_packages


def _read_output(path: Path) -> list[dict[str, str]]:
    """Decode a generated licenses file."""
    return json.loads(path.read_text(encoding='utf-8'))


# ── lookup_library ───────────────────────────────────────────────────


class TestLookupLibrary:
    """Tests for lookup_library()."""

    def test_found(self, tmp_path: Path) -> None:
        """A checkout with a license yields a Found record."""
        (tmp_path / 'alpha').mkdir()
        (tmp_path / 'alpha' / 'LICENSE').write_text('MIT', encoding='utf-8')
        ref = DependencyReference(name='Alpha', source_location='https://example.com/org/alpha.git')
        result = lookup_library(ref, tmp_path)
        assert result == Found(
            Library(name='Alpha', url='https://example.com/org/alpha.git', license_body='MIT'),
        )

    def test_missing_checkout(self, tmp_path: Path) -> None:
        """An absent checkout directory is a miss, not an error."""
        ref = DependencyReference(name='beta', source_location='https://example.com/org/beta.git')
        assert lookup_library(ref, tmp_path) == Missing(name='beta', reason='no_license_file')

    def test_unresolvable_location(self, tmp_path: Path) -> None:
        """A location ending in a slash is reported as unresolvable."""
        ref = DependencyReference(name='gamma', source_location='https://example.com/org/gamma/')
        assert lookup_library(ref, tmp_path) == Missing(name='gamma', reason='unresolvable_location')


# ── collect_libraries ────────────────────────────────────────────────


class TestCollectLibraries:
    """Tests for collect_libraries()."""

    def test_splits_found_and_missing(self, tmp_path: Path) -> None:
        """Hits and misses land in separate lists, in manifest order."""
        for name in ('a', 'c'):
            (tmp_path / name).mkdir()
            (tmp_path / name / 'LICENSE').write_text(f'{name} license', encoding='utf-8')
        refs = [DependencyReference(name=n, source_location=f'https://x/{n}.git') for n in ('c', 'b', 'a')]
        result = collect_libraries(refs, tmp_path)
        assert [lib.name for lib in result.found] == ['c', 'a']
        assert result.missing == [Missing(name='b', reason='no_license_file')]

    def test_duplicates_collapse(self, tmp_path: Path) -> None:
        """The same reference listed twice is looked up once."""
        (tmp_path / 'a').mkdir()
        (tmp_path / 'a' / 'LICENSE').write_text('MIT', encoding='utf-8')
        ref = DependencyReference(name='a', source_location='https://x/a.git')
        result = collect_libraries([ref, ref], tmp_path)
        assert len(result.found) == 1

    def test_callback_sees_every_outcome(self, tmp_path: Path) -> None:
        """on_result is called once per distinct dependency."""
        (tmp_path / 'a').mkdir()
        (tmp_path / 'a' / 'LICENCE.md').write_text('BSD', encoding='utf-8')
        refs = [
            DependencyReference(name='a', source_location='https://x/a.git'),
            DependencyReference(name='b', source_location='https://x/b.git'),
        ]
        seen: list[LookupResult] = []
        collect_libraries(refs, tmp_path, on_result=seen.append)
        assert [type(r) for r in seen] == [Found, Missing]

    def test_empty(self, tmp_path: Path) -> None:
        """No references yield an empty result."""
        result = collect_libraries([], tmp_path)
        assert result.found == []
        assert result.missing == []


# ── generate ─────────────────────────────────────────────────────────


class TestGenerate:
    """End-to-end tests for generate()."""

    def test_alpha_beta_scenario(self, tmp_path: Path) -> None:
        """Only dependencies with a license file are written."""
        sp = _make_source_packages(
            tmp_path,
            deps=[('Alpha', 'https://example.com/org/alpha.git'), ('beta', 'https://example.com/org/beta.git')],
            licenses={'alpha': ('LICENSE', 'MIT')},
        )
        output = tmp_path / 'out' / 'licenses.json'
        result = generate(output, sp)
        assert _read_output(output) == [
            {'licenseBody': 'MIT', 'name': 'Alpha', 'url': 'https://example.com/org/alpha.git'},
        ]
        assert [m.name for m in result.missing] == ['beta']

    def test_empty_manifest(self, tmp_path: Path) -> None:
        """Zero dependencies produce an empty array."""
        sp = _make_source_packages(tmp_path, deps=[], licenses={})
        output = tmp_path / 'licenses.json'
        generate(output, sp)
        assert output.read_text(encoding='utf-8') == '[]\n'

    def test_m_of_n_records(self, tmp_path: Path) -> None:
        """Exactly the dependencies with licenses appear, each non-empty."""
        names = [f'pkg{i}' for i in range(10)]
        licensed = {n: ('LICENSE.txt', f'{n} text') for n in names[::3]}
        sp = _make_source_packages(
            tmp_path,
            deps=[(n, f'https://x/{n}.git') for n in names],
            licenses=licensed,
        )
        output = tmp_path / 'licenses.json'
        generate(output, sp)
        records = _read_output(output)
        assert len(records) == len(licensed)
        assert {r['name'] for r in records} == set(licensed)
        assert all(r['licenseBody'] for r in records)

    def test_sorted_case_insensitively(self, tmp_path: Path) -> None:
        """Records are ordered by lower-cased name."""
        names = ['zeta', 'Alpha', 'beta', 'Gamma']
        sp = _make_source_packages(
            tmp_path,
            deps=[(n, f'https://x/{n}.git') for n in names],
            licenses={n: ('LICENSE', n) for n in names},
        )
        output = tmp_path / 'licenses.json'
        generate(output, sp)
        got = [r['name'] for r in _read_output(output)]
        assert got == ['Alpha', 'beta', 'Gamma', 'zeta']
        assert all(a.lower() <= b.lower() for a, b in zip(got, got[1:]))

    def test_idempotent(self, tmp_path: Path) -> None:
        """Two runs on unchanged input produce identical bytes."""
        sp = _make_source_packages(
            tmp_path,
            deps=[('b', 'https://x/b.git'), ('a', 'https://x/a.git')],
            licenses={'a': ('LICENSE', 'A\n'), 'b': ('LICENCE', 'B\n')},
        )
        output = tmp_path / 'licenses.json'
        generate(output, sp)
        first = output.read_bytes()
        generate(output, sp)
        assert output.read_bytes() == first

    def test_overwrites_previous_output(self, tmp_path: Path) -> None:
        """An existing output file is replaced."""
        sp = _make_source_packages(tmp_path, deps=[], licenses={})
        output = tmp_path / 'licenses.json'
        output.write_text('stale content that is longer than the new file', encoding='utf-8')
        generate(output, sp)
        assert _read_output(output) == []

    def test_custom_layout(self, tmp_path: Path) -> None:
        """Manifest and checkouts names come from the config."""
        sp = tmp_path / 'deps'
        (sp / 'src' / 'alpha').mkdir(parents=True)
        (sp / 'src' / 'alpha' / 'LICENSE').write_text('MIT', encoding='utf-8')
        state = {'object': {'dependencies': [{'packageRef': {'location': 'https://x/alpha', 'name': 'alpha'}}]}}
        (sp / 'state.json').write_text(json.dumps(state), encoding='utf-8')
        output = tmp_path / 'licenses.json'
        result = generate(output, sp, config=GeneratorConfig(manifest='state.json', checkouts='src'))
        assert [lib.name for lib in result.found] == ['alpha']

    def test_missing_manifest_is_fatal(self, tmp_path: Path) -> None:
        """A run without workspace-state.json fails and writes nothing."""
        output = tmp_path / 'licenses.json'
        with pytest.raises(ManifestUnreadableError):
            generate(output, tmp_path / 'SourcePackages')
        assert not output.exists()

    def test_unwritable_output_is_fatal(self, tmp_path: Path) -> None:
        """A directory at the output path makes the write fail."""
        sp = _make_source_packages(tmp_path, deps=[], licenses={})
        output = tmp_path / 'licenses.json'
        output.mkdir()
        with pytest.raises(OutputWriteFailedError):
            generate(output, sp)
