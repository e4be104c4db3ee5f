"""Optimise PNG figures with ``optipng``."""

from __future__ import annotations

import shlex

from weavesmith.core.context import DocumentContext
from weavesmith.core.diagnostics import record_event
from weavesmith.core.exceptions import WeaveError
from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions
from weavesmith.core.paths import all_figs


OPTIPNG = "optipng"


def optipng_arguments(value: str | bool | None) -> list[str]:
    """Return the extra command line arguments carried by the ``optipng`` option."""
    if isinstance(value, str):
        return shlex.split(value)
    return []


def hook_optipng(phase: HookPhase, options: ChunkOptions, context: DocumentContext) -> None:
    """Run ``optipng`` on every PNG figure produced by the chunk.

    The ``optipng`` option may hold extra arguments, e.g. ``"-o7"``.
    """
    if phase.before:
        return None

    ext = options.extension.lower()
    if ext != "png":
        context.emitter.warning(
            f"The optipng hook only works with PNG figures; chunk '{options.label}' uses '{ext}'"
        )
        return None
    if not context.runner.has(OPTIPNG):
        context.emitter.warning("Cannot find optipng; please install it and put it in PATH")
        return None

    extra = optipng_arguments(options.optipng)
    for path in all_figs(options, ext):
        record_event(context.emitter, "png_optimise", {"path": path})
        try:
            context.runner.run([OPTIPNG, *extra, path])
        except WeaveError as exc:
            context.emitter.warning(f"Failed to optimize '{path}': {exc}", exc)
    return None


__all__ = ["OPTIPNG", "hook_optipng", "optipng_arguments"]
