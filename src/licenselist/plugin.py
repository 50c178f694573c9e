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

"""Run license generation as a build step.

A build system hands the step a private work directory somewhere below
the directory that also holds ``SourcePackages``.  The step finds
``SourcePackages`` by walking up from there, then runs the generator in
a subprocess with both paths passed explicitly, so the generator itself
performs no discovery.

Usage::

    from licenselist.plugin import make_build_command, run_build_command

    cmd = make_build_command(Path(work_dir))
    run_build_command(cmd)
    # → <work_dir>/licenses.json
"""

from __future__ import annotations

import subprocess  # noqa: S404 - the generator runs as a child process
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from licenselist.config import GeneratorConfig
from licenselist.discovery import find_marker_directory
from licenselist.errors import BuildStepError
from licenselist.logging import get_logger

__all__ = [
    'BuildCommand',
    'default_executable',
    'make_build_command',
    'run_build_command',
]

logger = get_logger(__name__)


def default_executable() -> tuple[str, ...]:
    """Command prefix that runs this package's CLI with the current interpreter."""
    return (sys.executable, '-m', 'licenselist')


@dataclass(frozen=True)
class BuildCommand:
    """A fully resolved generator invocation.

    Attributes:
        display_name: Label shown by the build system.
        executable: Command prefix, e.g. ``('python', '-m', 'licenselist')``.
        output_path: File the generator writes.
        source_packages: ``SourcePackages`` directory to read.
    """

    display_name: str
    executable: tuple[str, ...]
    output_path: Path
    source_packages: Path

    @property
    def argv(self) -> list[str]:
        """Full argument vector for :func:`subprocess.run`."""
        return [*self.executable, str(self.output_path), str(self.source_packages)]


def make_build_command(
    work_dir: Path,
    *,
    config: GeneratorConfig | None = None,
    executable: Sequence[str] | None = None,
) -> BuildCommand:
    """Build the generator command for a build step.

    Args:
        work_dir: The step's work directory; the output is written
            into it and ``SourcePackages`` is searched from it upward.
        config: Layout names; defaults to :class:`GeneratorConfig`.
        executable: Command prefix; defaults to :func:`default_executable`.

    Raises:
        CheckoutRootNotFoundError: If no ``SourcePackages`` directory is
            found above *work_dir*.
    """
    cfg = config or GeneratorConfig()
    source_packages = find_marker_directory(work_dir, cfg.marker)
    return BuildCommand(
        display_name='Prepare LicenseList',
        executable=tuple(executable) if executable is not None else default_executable(),
        output_path=(work_dir / cfg.output).absolute(),
        source_packages=source_packages,
    )


def run_build_command(cmd: BuildCommand, *, timeout: float | None = None) -> None:
    """Run *cmd* and fail if the generator exits non-zero.

    Raises:
        BuildStepError: If the process exits with a non-zero status or
            cannot be started.
    """
    logger.info('build_step_start', display_name=cmd.display_name, argv=cmd.argv)
    try:
        proc = subprocess.run(  # noqa: S603 - argv is built from resolved paths
            cmd.argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        logger.error('build_step_failed', error=str(exc))
        raise BuildStepError(-1, str(exc)) from exc

    if proc.returncode != 0:
        logger.error('build_step_failed', returncode=proc.returncode, stdout=proc.stdout)
        raise BuildStepError(proc.returncode, proc.stdout)
    logger.info('build_step_done', output=str(cmd.output_path))
