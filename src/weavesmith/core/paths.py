"""Figure path resolution and identifier helpers."""

from __future__ import annotations

import re

from .options import ChunkOptions


_UNSAFE_PATH_CHARS = re.compile(r"[^A-Za-z0-9/_-]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def valid_path(prefix: str, label: str) -> str:
    """Join a figure path prefix and a chunk label into a filesystem-safe stem."""
    return f"{prefix}{_UNSAFE_PATH_CHARS.sub('_', label)}"


def fig_path(suffix: str, options: ChunkOptions, number: int | None = None) -> str:
    """Return ``<fig_path><label><number><suffix>`` for a chunk."""
    index = "" if number is None else str(number)
    return f"{valid_path(options.fig_path, options.label)}{index}{suffix}"


def all_figs(options: ChunkOptions, ext: str | None = None, num: int | None = None) -> list[str]:
    """Return the paths of every figure produced by a chunk.

    A single figure carries no index; ``num`` figures are numbered ``1..num``.
    """
    extension = (ext or options.extension).lstrip(".")
    count = options.fig_num if num is None else num
    suffix = f".{extension}"
    if count <= 1:
        return [fig_path(suffix, options)]
    return [fig_path(suffix, options, index) for index in range(1, count + 1)]


def sanitize_identifier(label: str) -> str:
    """Turn a chunk label into an identifier usable in generated scripts."""
    prefix = _NON_ALNUM.sub("_", label)
    if not prefix or not (prefix[0].isalpha() or prefix[0] == "_"):
        prefix = f"_{prefix}"
    return prefix


__all__ = ["all_figs", "fig_path", "sanitize_identifier", "valid_path"]
