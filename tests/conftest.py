from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import pytest

from weavesmith.adapters.tools import ToolResult
from weavesmith.core.config import WeaveConfig
from weavesmith.core.context import DocumentContext
from weavesmith.core.exceptions import ToolExecutionError


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def paths(self, event: str) -> list[str]:
        return [payload["path"] for name, payload in self.events if name == event]


class RecordingRunner:
    def __init__(self, available: Iterable[str] = (), fail: Iterable[str] = ()) -> None:
        self.available = set(available)
        self.fail = set(fail)
        self.calls: list[list[str]] = []

    def has(self, name: str) -> bool:
        return name in self.available

    def run(self, args: Any, *, cwd: Any = None, check: bool = True) -> ToolResult:
        command = [str(arg) for arg in args]
        self.calls.append(command)
        if command[-1] in self.fail:
            raise ToolExecutionError(f"{command[0]} exited with status 1")
        return ToolResult(args=tuple(command), returncode=0)


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def make_context(
    tmp_path: Path, emitter: RecordingEmitter
) -> Callable[..., DocumentContext]:
    def factory(
        *,
        tools: Iterable[str] = (),
        fail: Iterable[str] = (),
        **overrides: Any,
    ) -> DocumentContext:
        config = overrides.pop("config", None) or WeaveConfig(work_dir=tmp_path, resize_delay=0)
        overrides.setdefault("runner", RecordingRunner(tools, fail))
        return DocumentContext(config=config, emitter=emitter, **overrides)

    return factory
