"""Chunk hooks saving the active 3-D scene.

``hook_scene`` snapshots the scene to the formats implied by the chunk
devices (postscript → EPS, PDF → PDF, anything else → PNG) and embeds the
result through :func:`hook_plot_custom`. ``hook_webgl`` exports the scene as
an interactive WebGL page and returns its HTML.
"""

from __future__ import annotations

from collections.abc import Iterator
import contextlib
import logging
import os
from pathlib import Path
import re
import tempfile

from weavesmith.adapters.scene import (
    SceneDevice,
    export_webgl,
    resize_scene,
    window_rect,
    write_scene,
)
from weavesmith.core.context import DocumentContext
from weavesmith.core.devices import SceneFormat
from weavesmith.core.exceptions import WeaveError
from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions
from weavesmith.core.paths import fig_path, sanitize_identifier

from .plot import hook_plot_custom


logger = logging.getLogger(__name__)

_LEADING_SPACE_BEFORE_TAG = re.compile(r"^\s*<")


def _resize(scene: SceneDevice, options: ChunkOptions, context: DocumentContext) -> None:
    resize_scene(scene, window_rect(options.dpi, options.fig_width, options.fig_height))
    context.pause()


def _scene_formats(options: ChunkOptions) -> list[SceneFormat]:
    formats: list[SceneFormat] = []
    for device in options.dev:
        if device.scene_format not in formats:
            formats.append(device.scene_format)
    return formats


def hook_scene(phase: HookPhase, options: ChunkOptions, context: DocumentContext) -> str | None:
    """Snapshot the active 3-D scene and embed it as the single figure of the chunk."""
    if phase.before:
        return None
    scene = context.current_scene()
    if scene is None:
        return None

    stem = fig_path("", options)
    formats = _scene_formats(options)
    try:
        _resize(scene, options, context)
        for fmt in formats:
            write_scene(scene, stem, fmt)
    except (WeaveError, OSError) as exc:
        message = f"Failed to save 3-D scene for chunk '{options.label}': {exc}"
        context.emitter.warning(message, exc)
        return None

    update = {"fig_num": 1, "fig_ext": options.fig_ext or formats[0].extension}
    return hook_plot_custom(phase, options.model_copy(update=update), context)


@contextlib.contextmanager
def _scratch_file(directory: Path, prefix: str, suffix: str) -> Iterator[Path]:
    directory.mkdir(parents=True, exist_ok=True)
    handle, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
    os.close(handle)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def webgl_template(prefix: str) -> str:
    """Return the page template placing the WebGL scene and its start-up script."""
    return f"%{prefix}WebGL%\n<script>{prefix}webGLStart();</script>\n"


def clean_html(text: str) -> str:
    """Drop blank lines and whitespace in front of tags."""
    lines = [
        _LEADING_SPACE_BEFORE_TAG.sub("<", line) for line in text.splitlines() if line.strip()
    ]
    return "\n".join(lines)


def hook_webgl(phase: HookPhase, options: ChunkOptions, context: DocumentContext) -> str | None:
    """Export the active 3-D scene as WebGL and return the HTML to embed."""
    if phase.before:
        return None
    scene = context.current_scene()
    if scene is None:
        return None

    prefix = sanitize_identifier(options.label)
    try:
        with (
            _scratch_file(context.work_dir, "scene", ".html") as page,
            _scratch_file(context.work_dir, "scene", ".tpl") as template,
        ):
            _resize(scene, options, context)
            template.write_text(webgl_template(prefix), encoding="utf-8")
            export_webgl(
                scene, directory=page.parent, filename=page, template=template, prefix=prefix
            )
            html = page.read_text(encoding="utf-8")
    except (WeaveError, OSError) as exc:
        message = f"Failed to export WebGL for chunk '{options.label}': {exc}"
        context.emitter.warning(message, exc)
        return None

    logger.debug("exported WebGL scene for %s with prefix %s", options.label, prefix)
    return clean_html(html)


__all__ = ["clean_html", "hook_scene", "hook_webgl", "webgl_template"]
