"""Chunk hooks and reStructuredText output hooks for literate documents."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from weavesmith.core.config import WeaveConfig
from weavesmith.core.context import DocumentContext, TangleState
from weavesmith.core.devices import GraphicsDevice, SceneFormat, dev2ext
from weavesmith.core.diagnostics import ConsoleEmitter, LoggingEmitter, NullEmitter
from weavesmith.core.exceptions import (
    SceneError,
    ToolExecutionError,
    ToolMissingError,
    UnsupportedFormatError,
    WeaveError,
)
from weavesmith.core.hooks import HookPhase, KnitHooks
from weavesmith.core.options import ChunkOptions
from weavesmith.core.paths import all_figs, fig_path, sanitize_identifier
from weavesmith.hooks import (
    hook_optipng,
    hook_pdfcrop,
    hook_plot_custom,
    hook_purl,
    hook_scene,
    hook_webgl,
    install_chunk_hooks,
    plot_crop,
)
from weavesmith.renderers.rst import RstRenderer, hook_plot_rst, make_directive, render_rst


try:
    __version__ = _pkg_version("weavesmith")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ChunkOptions",
    "ConsoleEmitter",
    "DocumentContext",
    "GraphicsDevice",
    "HookPhase",
    "KnitHooks",
    "LoggingEmitter",
    "NullEmitter",
    "RstRenderer",
    "SceneError",
    "SceneFormat",
    "TangleState",
    "ToolExecutionError",
    "ToolMissingError",
    "UnsupportedFormatError",
    "WeaveConfig",
    "WeaveError",
    "__version__",
    "all_figs",
    "dev2ext",
    "fig_path",
    "hook_optipng",
    "hook_pdfcrop",
    "hook_plot_custom",
    "hook_plot_rst",
    "hook_purl",
    "hook_scene",
    "hook_webgl",
    "install_chunk_hooks",
    "make_directive",
    "plot_crop",
    "render_rst",
    "sanitize_identifier",
]
