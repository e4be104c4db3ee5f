"""Hook registry and dispatcher driven by the weaving engine.

The engine owns two families of callbacks:

`Output hooks`
: Format a fragment produced while evaluating a chunk (``source``,
  ``output``, ``warning``, ``error``, ``message``, ``inline``, ``plot``).
  They receive the fragment, the chunk options, and the document context and
  return markup.

`Chunk hooks`
: Registered under the name of a chunk option. The engine calls
  :meth:`KnitHooks.run_chunk_hooks` once before and once after every chunk;
  each hook whose option is set (neither ``None`` nor ``False``) runs, in
  option order before evaluation and in reverse order afterwards. Returned
  strings are concatenated and spliced into the document.

Chunk hooks degrade instead of failing: a :class:`WeaveError` escaping a hook
is reported as a warning and the remaining hooks still run.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any

from .exceptions import WeaveError, exception_hint
from .options import ChunkOptions


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import DocumentContext


logger = logging.getLogger(__name__)


class HookPhase(Enum):
    """Point of chunk processing at which a chunk hook is called."""

    BEFORE = "before"
    AFTER = "after"

    @property
    def before(self) -> bool:
        return self is HookPhase.BEFORE


OutputHook = Callable[[Any, ChunkOptions, "DocumentContext"], str]
ChunkHook = Callable[[HookPhase, ChunkOptions, "DocumentContext"], "str | None"]

OUTPUT_HOOK_NAMES: tuple[str, ...] = (
    "source",
    "output",
    "warning",
    "error",
    "message",
    "inline",
    "plot",
)


def _passthrough(x: Any, options: ChunkOptions, context: DocumentContext) -> str:
    return str(x)


DEFAULT_OUTPUT_HOOKS: Mapping[str, OutputHook] = dict.fromkeys(OUTPUT_HOOK_NAMES, _passthrough)


class KnitHooks:
    """Registry of output hooks and chunk hooks for a document."""

    def __init__(self) -> None:
        self._output: dict[str, OutputHook] = dict(DEFAULT_OUTPUT_HOOKS)
        self._chunk: dict[str, ChunkHook] = {}

    def set(self, **hooks: OutputHook | ChunkHook | None) -> None:
        """Register hooks by name; ``None`` removes a chunk hook or restores an output hook."""
        for name, hook in hooks.items():
            if name in OUTPUT_HOOK_NAMES:
                self._output[name] = hook or DEFAULT_OUTPUT_HOOKS[name]  # type: ignore[assignment]
            elif hook is None:
                self._chunk.pop(name, None)
            else:
                self._chunk[name] = hook  # type: ignore[assignment]

    def get(self, name: str) -> OutputHook | ChunkHook | None:
        """Return the hook registered under ``name``."""
        if name in self._output:
            return self._output[name]
        return self._chunk.get(name)

    def restore(self) -> None:
        """Reset output hooks to their defaults and drop every chunk hook."""
        self._output = dict(DEFAULT_OUTPUT_HOOKS)
        self._chunk.clear()

    @property
    def chunk_hook_names(self) -> tuple[str, ...]:
        return tuple(self._chunk)

    def render(self, name: str, x: Any, options: ChunkOptions, context: DocumentContext) -> str:
        """Format a fragment with the output hook registered under ``name``."""
        try:
            hook = self._output[name]
        except KeyError as exc:
            raise WeaveError(f"Unknown output hook '{name}'") from exc
        return hook(x, options, context)

    def run_chunk_hooks(
        self, phase: HookPhase, options: ChunkOptions, context: DocumentContext
    ) -> str:
        """Invoke every chunk hook whose option is set and concatenate the results."""
        names = [name for name in _option_order(options) if name in self._chunk]
        if not phase.before:
            names.reverse()

        fragments: list[str] = []
        for name in names:
            if not options.option_set(name):
                continue
            hook = self._chunk[name]
            logger.debug("chunk hook %s (%s) for %s", name, phase.value, options.label)
            try:
                result = hook(phase, options, context)
            except WeaveError as exc:
                hint = exception_hint(exc) or str(exc)
                context.emitter.warning(
                    f"Chunk hook '{name}' failed for chunk '{options.label}': {hint}", exc
                )
                continue
            if result:
                fragments.append(result)
        return "".join(fragments)


def _option_order(options: ChunkOptions) -> list[str]:
    names = list(type(options).model_fields)
    names.extend(options.model_extra or {})
    return names


__all__ = [
    "DEFAULT_OUTPUT_HOOKS",
    "OUTPUT_HOOK_NAMES",
    "ChunkHook",
    "HookPhase",
    "KnitHooks",
    "OutputHook",
]
