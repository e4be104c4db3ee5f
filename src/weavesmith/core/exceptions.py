"""Custom exception hierarchy for chunk hooks and output renderers."""

from __future__ import annotations


class WeaveError(RuntimeError):
    """Base exception for weaving helper failures."""


class ToolMissingError(WeaveError):
    """Raised when an external program cannot be located on PATH."""


class ToolExecutionError(WeaveError):
    """Raised when an external program fails to execute properly."""


class UnsupportedFormatError(WeaveError):
    """Raised when a tool is asked to handle a file format it does not support."""


class SceneError(WeaveError):
    """Raised when the active 3-D scene cannot be resized or exported."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "SceneError",
    "ToolExecutionError",
    "ToolMissingError",
    "UnsupportedFormatError",
    "WeaveError",
    "exception_hint",
    "exception_messages",
]
