"""Interface to the interactive 3-D scene library used by the scene hooks."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from weavesmith.core.devices import SceneFormat
from weavesmith.core.exceptions import SceneError


WindowRect = tuple[int, int, int, int]


@runtime_checkable
class SceneDevice(Protocol):
    """Active 3-D drawing surface that can be resized, snapshotted, and exported."""

    def resize(self, window: WindowRect) -> None:
        """Move and resize the scene window to ``(left, top, right, bottom)``."""
        ...

    def snapshot(self, path: Path) -> None:
        """Write a PNG bitmap of the current scene."""
        ...

    def postscript(self, path: Path, fmt: SceneFormat) -> None:
        """Write a vector rendering (EPS or PDF) of the current scene."""
        ...

    def export_webgl(self, *, directory: Path, filename: Path, template: Path, prefix: str) -> None:
        """Write an interactive WebGL page built from ``template``."""
        ...


SceneProvider = Callable[[], "SceneDevice | None"]


def no_scene() -> SceneDevice | None:
    """Provider used when no 3-D library is wired in."""
    return None


def window_rect(dpi: int, width: float, height: float, *, offset: int = 100) -> WindowRect:
    """Return the window rectangle matching a figure size in inches."""
    return (
        offset,
        offset,
        offset + round(dpi * width),
        offset + round(dpi * height),
    )


def resize_scene(scene: SceneDevice, window: WindowRect) -> None:
    """Resize the scene window, wrapping library failures in ``SceneError``."""
    try:
        scene.resize(window)
    except Exception as exc:
        raise SceneError(f"Failed to resize the 3-D window: {exc}") from exc


def write_scene(scene: SceneDevice, stem: str, fmt: SceneFormat) -> Path:
    """Write ``scene`` to ``<stem>.<ext>`` in the requested format."""
    target = Path(f"{stem}.{fmt.extension}")
    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        match fmt:
            case SceneFormat.EPS | SceneFormat.PDF:
                scene.postscript(target, fmt)
            case SceneFormat.PNG:
                scene.snapshot(target)
    except Exception as exc:
        raise SceneError(f"Failed to write 3-D scene to '{target}': {exc}") from exc
    return target


def export_webgl(
    scene: SceneDevice, *, directory: Path, filename: Path, template: Path, prefix: str
) -> Path:
    """Export ``scene`` as a WebGL page written to ``filename``."""
    try:
        scene.export_webgl(
            directory=directory, filename=filename, template=template, prefix=prefix
        )
    except Exception as exc:
        raise SceneError(f"Failed to export WebGL scene: {exc}") from exc
    return filename


__all__ = [
    "SceneDevice",
    "SceneProvider",
    "WindowRect",
    "export_webgl",
    "no_scene",
    "resize_scene",
    "window_rect",
    "write_scene",
]
