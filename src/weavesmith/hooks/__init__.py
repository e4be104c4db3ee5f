"""Built-in chunk hooks.

Register them on a document context with :func:`install_chunk_hooks`, then
enable them per chunk through the option of the same name, e.g. ``scene=True``
or ``optipng="-o7"``.
"""

from __future__ import annotations

from weavesmith.core.context import DocumentContext
from weavesmith.core.hooks import ChunkHook

from .crop import hook_pdfcrop, plot_crop
from .optipng import hook_optipng
from .plot import hook_plot_custom
from .purl import hook_purl
from .scene import hook_scene, hook_webgl


BUILTIN_CHUNK_HOOKS: dict[str, ChunkHook] = {
    "scene": hook_scene,
    "webgl": hook_webgl,
    "pdfcrop": hook_pdfcrop,
    "optipng": hook_optipng,
    "plot_custom": hook_plot_custom,
    "purl": hook_purl,
}


def install_chunk_hooks(context: DocumentContext, *names: str) -> DocumentContext:
    """Register built-in chunk hooks (all of them when no name is given)."""
    selected = names or tuple(BUILTIN_CHUNK_HOOKS)
    unknown = [name for name in selected if name not in BUILTIN_CHUNK_HOOKS]
    if unknown:
        raise KeyError(f"Unknown chunk hook(s): {', '.join(unknown)}")
    context.hooks.set(**{name: BUILTIN_CHUNK_HOOKS[name] for name in selected})
    return context


__all__ = [
    "BUILTIN_CHUNK_HOOKS",
    "hook_optipng",
    "hook_pdfcrop",
    "hook_plot_custom",
    "hook_purl",
    "hook_scene",
    "hook_webgl",
    "install_chunk_hooks",
    "plot_crop",
]
