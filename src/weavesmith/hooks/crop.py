"""Trim white margins from figure files."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageChops

from weavesmith.adapters.tools import ToolRunner, default_runner
from weavesmith.core.context import DocumentContext
from weavesmith.core.devices import GraphicsDevice
from weavesmith.core.diagnostics import DiagnosticEmitter, ensure_emitter, record_event
from weavesmith.core.exceptions import UnsupportedFormatError, WeaveError
from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions
from weavesmith.core.paths import all_figs


logger = logging.getLogger(__name__)

IMAGEMAGICK_COMMANDS: tuple[str, ...] = ("magick", "convert")
PILLOW_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"})


def plot_crop(
    path: str | Path,
    *,
    runner: ToolRunner | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> Path:
    """Crop the margins of ``path`` in place and return it.

    PDF files go through ``pdfcrop``; bitmaps through ImageMagick's ``-trim``
    or, when ImageMagick is not installed, through Pillow.
    """
    target = Path(path).expanduser()
    runner = runner or default_runner()
    emitter = ensure_emitter(emitter)

    if not target.exists():
        emitter.warning(f"Cannot crop missing figure '{target}'")
        return target

    try:
        if target.suffix.lower() == ".pdf":
            _crop_pdf(target, runner, emitter)
        else:
            _crop_bitmap(target, runner, emitter)
    except (WeaveError, OSError) as exc:
        emitter.warning(f"Failed to crop '{target}': {exc}", exc)
    return target


def _crop_pdf(target: Path, runner: ToolRunner, emitter: DiagnosticEmitter) -> None:
    if not runner.has("pdfcrop"):
        emitter.warning(f"Cannot find pdfcrop; '{target}' was not cropped")
        return
    record_event(emitter, "figure_crop", {"path": str(target), "tool": "pdfcrop"})
    runner.run(["pdfcrop", target, target])


def _crop_bitmap(target: Path, runner: ToolRunner, emitter: DiagnosticEmitter) -> None:
    for command in IMAGEMAGICK_COMMANDS:
        if runner.has(command):
            record_event(emitter, "figure_crop", {"path": str(target), "tool": command})
            runner.run([command, target, "-trim", target])
            return
    if target.suffix.lower() not in PILLOW_SUFFIXES:
        raise UnsupportedFormatError(
            f"Cannot crop '{target.suffix}' files without ImageMagick (magick or convert)"
        )
    record_event(emitter, "figure_crop", {"path": str(target), "tool": "pillow"})
    trim_image(target)


def trim_image(target: Path) -> bool:
    """Trim borders matching the top-left pixel colour; return True when cropped."""
    with Image.open(target) as image:
        image.load()
        image_format = image.format
        rgb = image.convert("RGB")
        background = Image.new("RGB", rgb.size, rgb.getpixel((0, 0)))
        bbox = ImageChops.difference(rgb, background).getbbox()
        if bbox is None or bbox == (0, 0, *image.size):
            return False
        cropped = image.crop(bbox)
    cropped.save(target, format=image_format)
    logger.debug("trimmed %s to %s", target, bbox)
    return True


def hook_pdfcrop(phase: HookPhase, options: ChunkOptions, context: DocumentContext) -> None:
    """Crop every figure produced by the chunk."""
    ext = options.extension
    if options.device is GraphicsDevice.TIKZ and options.external:
        ext = "pdf"
    if phase.before or options.fig_num == 0:
        return None
    for path in all_figs(options, ext, options.fig_num):
        plot_crop(path, runner=context.runner, emitter=context.emitter)
    return None


__all__ = ["IMAGEMAGICK_COMMANDS", "PILLOW_SUFFIXES", "hook_pdfcrop", "plot_crop", "trim_image"]
