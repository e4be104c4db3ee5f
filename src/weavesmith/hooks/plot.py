"""Embed figures that were written to disk outside the plot recorder."""

from __future__ import annotations

import logging

from weavesmith.core.context import DocumentContext
from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions
from weavesmith.core.paths import all_figs


logger = logging.getLogger(__name__)


def hook_plot_custom(
    phase: HookPhase, options: ChunkOptions, context: DocumentContext
) -> str | None:
    """Pass every figure of the chunk to the registered ``plot`` output hook."""
    if phase.before or options.fig_show == "hide":
        return None

    if options.fig_num == 0:
        options = options.model_copy(update={"fig_num": 1})
    count = options.fig_num
    paths = all_figs(options, options.extension, count)

    if count <= 1:
        return context.hooks.render("plot", paths[0], options, context)

    fragments = [
        context.hooks.render("plot", path, options.reduce_for_figure(index), context)
        for index, path in enumerate(paths, start=1)
    ]
    logger.debug("embedded %d figures for chunk %s", count, options.label)
    return "".join(fragments)


__all__ = ["hook_plot_custom"]
