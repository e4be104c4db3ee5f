"""Write chunk code to a standalone script while the document is woven."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path

from weavesmith.core.context import DocumentContext
from weavesmith.core.diagnostics import record_event
from weavesmith.core.hooks import HookPhase
from weavesmith.core.options import ChunkOptions


logger = logging.getLogger(__name__)

COMMENT_PREFIX = "# "


def comment_out(code: Sequence[str], prefix: str = COMMENT_PREFIX) -> list[str]:
    """Prefix every line of ``code`` with a comment marker."""
    return [f"{prefix}{line}" for line in code]


def label_code(code: Sequence[str], label: str, width: int = 80) -> str:
    """Return ``code`` preceded by a ``## ----label----`` header line."""
    header = f"## ----{label.ljust(max(width - 11, 0), '-')}----"
    return "\n".join([header, *code, ""])


def _eligible(options: ChunkOptions, context: DocumentContext) -> bool:
    return options.purl and options.engine.strip().lower() == context.script_engine


def _start_tangle(context: DocumentContext) -> None:
    if context.tangle.started:
        return
    context.tangle.started = True
    output = context.tangle.output
    if output is None:
        return
    try:
        output.unlink(missing_ok=True)
    except OSError as exc:
        _report_write_failure(context, output, exc)
        return
    record_event(context.emitter, "tangle_reset", {"path": str(output)})


def _report_write_failure(context: DocumentContext, output: Path, exc: OSError) -> None:
    context.tangle.disabled = True
    context.emitter.warning(f"Cannot write tangled code to '{output}': {exc}", exc)


def hook_purl(phase: HookPhase, options: ChunkOptions, context: DocumentContext) -> None:
    """Append the chunk code to the document script.

    Only chunks of the document script engine are written. The script is
    removed when the first eligible chunk of a document starts, so code from a
    previous run never leaks into the new one. File system errors are reported
    as warnings and never interrupt the document.
    """
    if not _eligible(options, context):
        logger.debug("not tangling %s chunk %s", options.engine, options.label)
        return None

    _start_tangle(context)
    if context.tangle.disabled:
        return None
    output = context.tangle.output
    if phase.before or output is None:
        return None

    code = list(options.code)
    if not options.eval:
        code = comment_out(code)
    label = options.params_src or options.label
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("a", encoding="utf-8") as handle:
            handle.write(label_code(code, label, context.config.tangle_width))
            handle.write("\n")
    except OSError as exc:
        _report_write_failure(context, output, exc)
    return None


__all__ = ["COMMENT_PREFIX", "comment_out", "hook_purl", "label_code"]
