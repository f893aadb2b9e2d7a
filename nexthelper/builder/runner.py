"""Production build runner.

Runs the front-end static export, mirrors the export folder into the
deployment folder, then starts the static file server (in the deployment
folder) and the development server (in the project root).  The two servers
are launched and left running: nothing waits for them, and they outlive the
runner.

Failures are reported on the console and recorded on the ``BuildResult``;
``BuildRunner.run`` never raises.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import subprocess
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.panel import Panel

from ..config import Config
from ..utils import console, ensure_dir, print_error, print_step, print_success, run_command


@dataclass
class BuildResult:
    """Structured result of one production build run."""

    build_exit_code: Optional[int] = None
    copied: bool = False
    files_copied: int = 0
    processes: dict[str, subprocess.Popen] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """The build exited cleanly and its output reached the deploy folder."""
        return self.build_exit_code == 0 and self.copied

    def summary(self) -> dict[str, str]:
        """Return a label -> value mapping for console tables."""
        data = {
            "Build exit code": "-" if self.build_exit_code is None else str(self.build_exit_code),
            "Files copied": str(self.files_copied) if self.copied else "not copied",
        }
        for label, process in self.processes.items():
            data[label] = f"pid {process.pid}"
        if self.errors:
            data["Errors"] = str(len(self.errors))
        return data


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def resolve_executable(name: str) -> str:
    """Return the full path of *name* on PATH, or *name* unchanged.

    On Windows this turns ``npm`` into ``...\\nodejs\\npm.cmd``, which
    ``CreateProcess`` cannot find on its own.
    """
    return shutil.which(name) or name


async def run_build(
    directory: str | Path,
    command: list[str],
    timeout: Optional[float] = None,
) -> int:
    """Run *command* in *directory* with inherited output and return its exit code.

    Blocks (asynchronously) until the process exits.  A non-zero exit is
    reported but not raised.
    """
    returncode, _, stderr = await run_command(command, cwd=directory, timeout=timeout, capture=False)
    if stderr:
        print_error(stderr)
    if returncode != 0:
        print_error(f"Command failed with exit code: {returncode}")
    return returncode


def _raise(error: OSError) -> None:
    raise error


def copy_tree(source: str | Path, dest: str | Path) -> int:
    """Mirror *source* into *dest*, overwriting files that already exist.

    Every directory is recreated, empty ones included, and symlinked
    directories are copied as real directories.  The first failing
    copy propagates; files copied before it stay in place.

    Returns:
        Number of files copied.

    Raises:
        FileNotFoundError: If *source* is not a directory.
    """
    src = Path(source)
    dst = Path(dest)
    if not src.is_dir():
        raise FileNotFoundError(f"Source directory not found: {src}")

    copied = 0
    for root, _dirs, files in os.walk(src, onerror=_raise, followlinks=True):
        target_dir = dst / Path(root).relative_to(src)
        ensure_dir(target_dir)
        for filename in files:
            shutil.copy2(Path(root) / filename, target_dir / filename)
            copied += 1
    return copied


def launch_detached(directory: str | Path, command: list[str]) -> subprocess.Popen:
    """Start *command* in *directory* and return without waiting for it.

    The child inherits stdout/stderr so its output streams live to the
    terminal.
    """
    return subprocess.Popen(command, cwd=str(directory))


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class BuildRunner:
    """Build, deploy, and start the servers for the static site."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def run(self, serve: bool = True) -> BuildResult:
        """Run the build, copy the export, then launch both servers.

        Args:
            serve: Launch the file server and dev server after copying.

        Returns:
            A ``BuildResult``.  A build or copy exception stops the run before
            any server is launched; a failing launch does not stop the other.
        """
        build = self.config.build
        npm = resolve_executable(build.npm)
        root = self.config.project_root
        output = self.config.build_output_path
        deploy = self.config.deploy_path
        result = BuildResult()

        console.print(
            Panel(
                f"[cyan]Production build[/cyan]\n"
                f"  Project: {escape(str(root))}\n"
                f"  Export: {escape(str(output))}\n"
                f"  Deploy: {escape(str(deploy))}",
                title="Build Runner",
                border_style="cyan",
            )
        )

        try:
            print_step(f"Running npm {' '.join(build.build_args)}...")
            result.build_exit_code = await run_build(root, [npm, *build.build_args], build.build_timeout)

            print_step(f"Build complete. Copying '{output}' to '{deploy}'...")
            result.files_copied = await asyncio.to_thread(copy_tree, output, deploy)
            result.copied = True
            print_success(f"Copied {result.files_copied} files to {deploy}")
        except Exception as exc:
            result.errors.append(str(exc))
            print_error(f"Build failed: {exc}")
            console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
            return result

        if serve:
            print_step("Starting concurrent processes...")
            self._launch(result, "http-server", deploy, [npm, *build.serve_args])
            self._launch(result, "dev server", root, [npm, *build.dev_args])
            print_step("Concurrent processes started.")

        return result

    def _launch(self, result: BuildResult, label: str, directory: Path, command: list[str]) -> None:
        try:
            print_step(f"Running {' '.join(command[1:])} in '{directory}'...")
            result.processes[label] = launch_detached(directory, command)
        except Exception as exc:
            result.errors.append(f"{label}: {exc}")
            print_error(f"Could not start {label}: {exc}")
            console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
