"""Per-document state shared by chunk hooks and output hooks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
from pathlib import Path
import time
from typing import Any

from weavesmith.adapters.scene import SceneDevice, SceneProvider, no_scene
from weavesmith.adapters.tools import ToolRunner, default_runner

from .config import WeaveConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .hooks import KnitHooks
from .options import ChunkOptions


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TangleState:
    """Target script and truncation flag for the code-tangle hook."""

    output: Path | None = None
    started: bool = False
    disabled: bool = False

    def reset(self) -> None:
        self.started = False
        self.disabled = False


@dataclass(slots=True)
class DocumentContext:
    """Build context handed to every hook while a document is woven."""

    config: WeaveConfig = field(default_factory=WeaveConfig)
    hooks: KnitHooks = field(default_factory=KnitHooks)
    emitter: DiagnosticEmitter = field(default_factory=LoggingEmitter)
    runner: ToolRunner = field(default_factory=default_runner)
    scene_provider: SceneProvider = no_scene
    upload: Callable[[str], str] | None = None
    tangle: TangleState = field(default_factory=TangleState)
    opts_chunk: dict[str, Any] = field(default_factory=dict)
    sleep: Callable[[float], None] = time.sleep

    def __post_init__(self) -> None:
        if self.tangle.output is None:
            self.tangle.output = self.config.tangle_output
        if not self.opts_chunk:
            self.opts_chunk.update(self.config.chunk_defaults)

    @classmethod
    def from_config(cls, config: WeaveConfig, **overrides: Any) -> DocumentContext:
        """Build a context whose tool runner honours the configured timeout and emitter."""
        emitter = overrides.setdefault("emitter", LoggingEmitter())
        overrides.setdefault("runner", ToolRunner(timeout=config.tool_timeout, emitter=emitter))
        return cls(config=config, **overrides)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def script_engine(self) -> str:
        return self.config.script_engine

    @property
    def resize_delay(self) -> float:
        return self.config.resize_delay

    @property
    def work_dir(self) -> Path:
        return self.config.work_dir

    def begin_document(self, tangle_output: Path | None = None) -> None:
        """Reset per-document state before the first chunk is processed."""
        if tangle_output is not None:
            self.tangle.output = tangle_output
        self.tangle.reset()
        logger.debug("document started (tangle output: %s)", self.tangle.output)

    def make_options(self, **values: Any) -> ChunkOptions:
        """Validate chunk options layered over the document defaults."""
        merged = {**self.opts_chunk, **values}
        return ChunkOptions.model_validate(merged)

    def current_scene(self) -> SceneDevice | None:
        """Return the active 3-D scene, if any."""
        return self.scene_provider()

    def upload_url(self, path: str) -> str:
        """Return the reference under which a figure is published."""
        if self.upload is None:
            return path
        return self.upload(path)

    def pause(self, seconds: float | None = None) -> None:
        """Wait for a window resize to take effect."""
        delay = self.resize_delay if seconds is None else seconds
        if delay > 0:
            self.sleep(delay)


__all__ = ["DocumentContext", "TangleState"]
