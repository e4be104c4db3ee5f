"""Abstractions for invoking external command line tools safely."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import shlex
import shutil
import subprocess
import sys

from weavesmith.core.diagnostics import DiagnosticEmitter, record_event
from weavesmith.core.exceptions import ToolExecutionError, ToolMissingError


logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ToolResult:
    """Outcome of an external tool invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(slots=True)
class ToolRunner:
    """Locate and run external programs from argument lists, never through a shell."""

    timeout: float | None = None
    emitter: DiagnosticEmitter | None = None
    _cache: dict[str, str | None] = field(default_factory=dict, init=False, repr=False)

    def find(self, name: str) -> str | None:
        """Return the resolved executable for ``name`` or ``None`` when absent."""
        if name in self._cache:
            return self._cache[name]
        try:
            executable = shutil.which(name)
        except (AssertionError, OSError, ValueError):
            executable = None
        self._cache[name] = executable
        return executable

    def has(self, name: str) -> bool:
        """Return True when the program can be located on PATH."""
        return self.find(name) is not None

    def reset(self) -> None:
        """Clear cached executable lookup results."""
        self._cache.clear()

    def run(
        self,
        args: Sequence[str | os.PathLike[str]],
        *,
        cwd: Path | None = None,
        check: bool = True,
    ) -> ToolResult:
        """Execute ``args`` and return the captured result.

        The first argument is resolved on PATH. ``ToolMissingError`` is raised
        when it cannot be found, ``ToolExecutionError`` when it cannot be
        started or, with ``check``, exits with a non-zero status.
        """
        if not args:
            raise ToolExecutionError("No command supplied.")
        name = os.fspath(args[0])
        executable = self.find(name)
        if executable is None:
            raise ToolMissingError(f"Cannot find '{name}'; please install it and put it in PATH.")

        command = [executable, *(os.fspath(arg) for arg in args[1:])]
        logger.debug("running %s", shlex.join(command))
        record_event(self.emitter, "tool_run", {"args": command})

        primary_error: OSError | None = None
        invoked = command
        try:
            completed = self._execute(command, cwd)
        except OSError as exc:
            primary_error = exc
            fallback = _script_fallback_command(command)
            if fallback is None:
                self._cache.pop(name, None)
                raise ToolExecutionError(f"Failed to execute {name}: {exc}") from exc
            invoked = fallback
            try:
                completed = self._execute(fallback, cwd)
            except OSError as fallback_exc:
                raise ToolExecutionError(
                    f"Failed to execute {name}: {fallback_exc}"
                ) from fallback_exc
        except subprocess.TimeoutExpired as exc:
            raise ToolExecutionError(f"{name} timed out after {exc.timeout} seconds") from exc

        result = ToolResult(
            args=tuple(invoked),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if check and not result.ok:
            detail = result.stderr.strip() or result.stdout.strip()
            message = f"{name} exited with status {result.returncode}"
            if primary_error is not None:
                message = f"{message} (initial failure: {primary_error})"
            if detail:
                message = f"{message}: {detail}"
            raise ToolExecutionError(message)

        return result

    def _execute(self, command: list[str], cwd: Path | None) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=self.timeout,
        )


def _script_fallback_command(command: Sequence[str]) -> list[str] | None:
    """Return a Windows-friendly command for script files without extensions."""
    if os.name != "nt" or not command:
        return None
    executable = Path(command[0])
    suffix = executable.suffix.lower()
    if suffix in {".exe", ".bat", ".cmd", ".com"}:
        return None
    if not executable.exists():
        return None
    interpreter: str | None = None
    try:
        lines = executable.read_text(encoding="utf-8", errors="ignore").splitlines()
    except OSError:
        lines = []
    first_line = lines[0] if lines else ""
    if first_line.startswith("#!"):
        shebang = first_line[2:].strip()
        try:
            parts = shlex.split(shebang)
        except ValueError:
            parts = [shebang]
        if parts and parts[0] == "/usr/bin/env" and len(parts) > 1:
            interpreter = parts[1]
        elif parts:
            interpreter = parts[0]
    if interpreter is None or shutil.which(interpreter) is None:
        interpreter = sys.executable
    return [interpreter, str(executable), *command[1:]]


_default_runner = ToolRunner()


def default_runner() -> ToolRunner:
    """Return the runner shared by callers that do not supply their own."""
    return _default_runner


__all__ = [
    "ToolResult",
    "ToolRunner",
    "default_runner",
]
