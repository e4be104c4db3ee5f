"""Diagnostic abstractions shared by chunk hooks and renderers."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None and self.debug_enabled:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


class ConsoleEmitter:
    """Emitter printing one-line diagnostics on a Rich console."""

    def __init__(self, console: Console | None = None, *, debug_enabled: bool = False) -> None:
        if console is None:
            console = Console(stderr=True, highlight=False)
        self.console = console
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.console.print(f"[yellow]warning:[/yellow] {escape(message)}", markup=True)
        self._print_exception(exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.console.print(f"[bold red]error:[/bold red] {escape(message)}", markup=True)
        self._print_exception(exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self.console.print(f"[dim]{escape(message)}[/dim]", markup=True)

    def _print_exception(self, exc: BaseException | None) -> None:
        if exc is None or not self.debug_enabled:
            return
        detail = escape(f"{exc.__class__.__name__}: {exc}")
        self.console.print(f"[dim]{detail}[/dim]", markup=True)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "tool_run":
        args = data.get("args") or ()
        tool = args[0] if args else data.get("tool") or "<unknown>"
        return f"Running: {tool}"

    if name == "figure_crop":
        path = data.get("path") or "<unknown>"
        tool = data.get("tool")
        suffix = f" ({tool})" if tool else ""
        return f"Cropping {path}{suffix}"

    if name == "png_optimise":
        path = data.get("path") or "<unknown>"
        return f"Optimizing {path}"

    if name == "tangle_reset":
        path = data.get("path") or "<unknown>"
        return f"Writing tangled code to {path}"

    return None


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return a usable emitter, defaulting to the null implementation."""
    return emitter if emitter is not None else NullEmitter()


def record_event(
    emitter: DiagnosticEmitter | None,
    event: str,
    payload: Mapping[str, Any],
) -> None:
    """Forward a structured diagnostic event."""
    ensure_emitter(emitter).event(event, payload)


__all__ = [
    "ConsoleEmitter",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "ensure_emitter",
    "format_event_message",
    "record_event",
]
