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

"""Tests for upward marker directory discovery."""

from __future__ import annotations

from pathlib import Path

import pytest
from licenselist.discovery import find_marker_directory
from licenselist.errors import CheckoutRootNotFoundError

_MARKER = 'SourcePackages-licenselist-test'


class TestFindMarkerDirectory:
    """Tests for find_marker_directory()."""

    def test_marker_in_start(self, tmp_path: Path) -> None:
        """The start directory itself is checked first."""
        (tmp_path / _MARKER).mkdir()
        assert find_marker_directory(tmp_path, _MARKER) == tmp_path / _MARKER

    def test_marker_in_ancestor(self, tmp_path: Path) -> None:
        """The walk climbs until it finds the marker."""
        (tmp_path / _MARKER).mkdir()
        start = tmp_path / 'Build' / 'Intermediates' / 'plugin-out'
        start.mkdir(parents=True)
        assert find_marker_directory(start, _MARKER) == tmp_path / _MARKER

    def test_nearest_wins(self, tmp_path: Path) -> None:
        """The closest ancestor with the marker is returned."""
        (tmp_path / _MARKER).mkdir()
        inner = tmp_path / 'nested'
        (inner / _MARKER).mkdir(parents=True)
        start = inner / 'deeper'
        start.mkdir()
        assert find_marker_directory(start, _MARKER) == inner / _MARKER

    def test_file_named_like_marker_is_skipped(self, tmp_path: Path) -> None:
        """Only directories count as markers."""
        (tmp_path / _MARKER).mkdir()
        start = tmp_path / 'child'
        start.mkdir()
        (start / _MARKER).write_text('', encoding='utf-8')
        assert find_marker_directory(start, _MARKER) == tmp_path / _MARKER

    def test_start_need_not_exist(self, tmp_path: Path) -> None:
        """A start path that does not exist yet still walks upward."""
        (tmp_path / _MARKER).mkdir()
        assert find_marker_directory(tmp_path / 'not' / 'yet', _MARKER) == tmp_path / _MARKER

    def test_not_found(self, tmp_path: Path) -> None:
        """Reaching the filesystem root without a match raises."""
        with pytest.raises(CheckoutRootNotFoundError) as exc_info:
            find_marker_directory(tmp_path, _MARKER)
        assert exc_info.value.marker == _MARKER
        assert str(exc_info.value) == f'Error: {_MARKER} directory not found'

    def test_relative_start(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative starts are resolved against the working directory."""
        (tmp_path / _MARKER).mkdir()
        (tmp_path / 'sub').mkdir()
        monkeypatch.chdir(tmp_path)
        assert find_marker_directory(Path('sub'), _MARKER) == tmp_path / _MARKER
