"""Graphics devices understood by the chunk hooks.

Every device maps to the file extension of the figures it produces and to the
format used when a 3-D scene is snapshotted for that device. Scene snapshots
only know three formats: postscript devices produce EPS files, PDF devices
produce PDF files, and every other device falls back to a PNG bitmap.
"""

from __future__ import annotations

from enum import Enum


class SceneFormat(Enum):
    """Formats a 3-D scene can be written to."""

    EPS = "eps"
    PDF = "pdf"
    PNG = "png"

    @property
    def extension(self) -> str:
        return self.value


class GraphicsDevice(str, Enum):
    """Closed set of figure devices a chunk may declare."""

    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    TIFF = "tiff"
    SVG = "svg"
    PDF = "pdf"
    CAIRO_PDF = "cairo_pdf"
    POSTSCRIPT = "postscript"
    CAIRO_PS = "cairo_ps"
    PGF = "pgf"
    TIKZ = "tikz"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def scene_format(self) -> SceneFormat:
        match self:
            case GraphicsDevice.POSTSCRIPT | GraphicsDevice.CAIRO_PS:
                return SceneFormat.EPS
            case GraphicsDevice.PDF | GraphicsDevice.CAIRO_PDF:
                return SceneFormat.PDF
            case _:
                return SceneFormat.PNG


_EXTENSIONS: dict[GraphicsDevice, str] = {
    GraphicsDevice.PNG: "png",
    GraphicsDevice.JPEG: "jpeg",
    GraphicsDevice.BMP: "bmp",
    GraphicsDevice.TIFF: "tiff",
    GraphicsDevice.SVG: "svg",
    GraphicsDevice.PDF: "pdf",
    GraphicsDevice.CAIRO_PDF: "pdf",
    GraphicsDevice.POSTSCRIPT: "eps",
    GraphicsDevice.CAIRO_PS: "eps",
    GraphicsDevice.PGF: "pgf",
    GraphicsDevice.TIKZ: "tex",
}


def dev2ext(device: GraphicsDevice | str) -> str:
    """Return the default figure extension for a device."""
    return GraphicsDevice(device).extension


__all__ = ["GraphicsDevice", "SceneFormat", "dev2ext"]
