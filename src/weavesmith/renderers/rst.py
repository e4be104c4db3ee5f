"""reStructuredText output hooks for Sphinx-based documentation.

A directive consists of a name, an argument, options and content::

    .. <name>:: <argument>

        :<option>: <value>


        <content>

:func:`make_directive` composes such fragments; :class:`RstRenderer` installs
output hooks that render source code, text output, inline values and plots
with it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import logging
from typing import Any

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from weavesmith.core.context import DocumentContext
from weavesmith.core.devices import GraphicsDevice
from weavesmith.core.formatting import format_values
from weavesmith.core.hooks import OutputHook
from weavesmith.core.options import ChunkOptions, pick_for_figure


logger = logging.getLogger(__name__)

INDENT = "    "

PlotHook = Callable[[str, ChunkOptions, DocumentContext], str]


def indent_block(block: str | None, spaces: str = INDENT) -> str:
    """Prefix every line of ``block`` with ``spaces``.

    Empty blocks collapse to ``spaces`` alone; a trailing newline yields a
    trailing indented empty line.
    """
    if not block:
        return spaces
    if not spaces:
        return block
    return spaces + block.replace("\n", f"\n{spaces}")


def make_directive(
    name: str,
    arg: str,
    options: Mapping[str, Any] | None = None,
    content: str = "",
) -> str:
    """Return a reStructuredText directive; options whose value is ``None`` are dropped."""
    head = f"\n.. {name}:: {arg}\n\n"
    lines = [f":{key}: {value}" for key, value in (options or {}).items() if value is not None]
    if not lines:
        return head + indent_block(content)
    return head + indent_block("\n".join(lines)) + "\n\n\n" + indent_block(content)


def literal_block(x: Any, options: ChunkOptions | None = None, context: Any = None) -> str:
    """Render text as an indented literal block framed by blank lines."""
    return "\n".join(["\n\n::\n", indent_block(_as_text(x)), ""])


def _as_text(x: Any) -> str:
    if isinstance(x, str):
        return x
    if isinstance(x, Iterable):
        return "\n".join(str(item) for item in x)
    return str(x)


def directive_language(engine: str) -> str:
    """Return the lower-cased engine name when Pygments can highlight it, else ``text``."""
    language = engine.strip().lower()
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        logger.debug("no Pygments lexer for engine %r, using 'text'", engine)
        return "text"
    return language


def _image_caption(options: ChunkOptions) -> str:
    return pick_for_figure(options.fig_cap, options.fig_cur) or ""


def hook_plot_animation(x: str, options: ChunkOptions, context: DocumentContext) -> str:
    """Render one frame of an animation as an ``image`` directive."""
    caption = _image_caption(options)
    return make_directive(
        "image",
        f"{context.base_url}{context.upload_url(x)}",
        {
            "class": "animation-frame",
            "alt": caption or None,
            "width": pick_for_figure(options.out_width, options.fig_cur),
            "height": pick_for_figure(options.out_height, options.fig_cur),
        },
    )


def hook_plot_rst(
    x: str,
    options: ChunkOptions,
    context: DocumentContext,
    *,
    animation_hook: PlotHook = hook_plot_animation,
) -> str:
    """Render a figure file as a ``figure`` directive."""
    if options.fig_show == "animate":
        return animation_hook(x, options, context)

    caption = _image_caption(options)
    return make_directive(
        "figure",
        f"{context.base_url}{context.upload_url(x)}",
        {
            "align": None if options.fig_align == "default" else options.fig_align,
            "alt": caption or None,
            "width": pick_for_figure(options.out_width, options.fig_cur),
            "height": pick_for_figure(options.out_height, options.fig_cur),
        },
        caption,
    )


def format_inline(value: Any, context: DocumentContext) -> str:
    """Render an inline value as reStructuredText inline literal text."""
    config = context.config
    text = format_values(
        value,
        digits=config.digits,
        scipen=config.scipen,
        decimal_mark=config.decimal_mark,
    )
    return f"``{text}``" if text else ""


class RstRenderer:
    """Install reStructuredText output hooks on a document context."""

    def __init__(
        self,
        strict: bool | None = None,
        *,
        animation_hook: PlotHook = hook_plot_animation,
    ) -> None:
        self.strict = strict
        self.animation_hook = animation_hook

    def source(self, x: Any, options: ChunkOptions, context: DocumentContext) -> str:
        code = _as_text(x) + "\n"
        if self._is_strict(context):
            return literal_block(code)
        return make_directive("sourcecode", directive_language(options.engine), content=code)

    def inline(self, x: Any, options: ChunkOptions, context: DocumentContext) -> str:
        return format_inline(x, context)

    def plot(self, x: str, options: ChunkOptions, context: DocumentContext) -> str:
        return hook_plot_rst(x, options, context, animation_hook=self.animation_hook)

    def hooks(self) -> dict[str, OutputHook]:
        """Return the output hooks provided by this renderer."""
        return {
            "source": self.source,
            "warning": literal_block,
            "error": literal_block,
            "message": literal_block,
            "output": literal_block,
            "inline": self.inline,
            "plot": self.plot,
        }

    def install(self, context: DocumentContext) -> DocumentContext:
        """Reset the context hooks and register the reStructuredText ones."""
        context.hooks.restore()
        context.opts_chunk["dev"] = GraphicsDevice.PNG
        context.hooks.set(**self.hooks())
        return context

    def _is_strict(self, context: DocumentContext) -> bool:
        if self.strict is None:
            return context.config.strict_rst
        return self.strict


def render_rst(context: DocumentContext, strict: bool | None = None) -> DocumentContext:
    """Configure ``context`` to emit reStructuredText."""
    return RstRenderer(strict).install(context)


__all__ = [
    "RstRenderer",
    "directive_language",
    "format_inline",
    "hook_plot_animation",
    "hook_plot_rst",
    "indent_block",
    "literal_block",
    "make_directive",
    "render_rst",
]
