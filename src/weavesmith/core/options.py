"""Per-chunk options handed to hooks by the weaving engine.

ChunkOptions

`label` (`str`)
: Chunk label, used to derive figure file names and script identifiers.

`engine` (`str`)
: Language engine evaluating the chunk (`python`, `r`, `bash`, ...).

`code` (`list[str]`)
: Source lines of the chunk. A single string is split on newlines.

`eval` (`bool`)
: Whether the chunk was evaluated. Unevaluated code is commented out when
  tangled.

`purl` (`bool`)
: Whether the chunk takes part in tangling.

`params_src` (`str | None`)
: Raw chunk header, written above the code in tangled scripts.

`dev` (`list[GraphicsDevice]`)
: Figure devices declared by the chunk. A single device is accepted.

`fig_ext` (`str | None`)
: Explicit figure extension. `None` or the `"none"` sentinel defers to the
  extension of the first device.

`fig_path` (`str`)
: Directory and prefix prepended to the chunk label for figure files.

`fig_num` / `fig_cur` (`int`)
: Number of figures produced by the chunk and index of the figure being
  rendered (1-based, `0` when not rendering a figure).

`fig_width` / `fig_height` (`float`) and `dpi` (`int`)
: Figure size in inches and resolution, also used to size 3-D windows.

`fig_show` (`str`)
: `asis`, `hold`, `animate` or `hide`.

`fig_align` (`str`)
: `default`, `left`, `right` or `center`.

`fig_cap`, `out_width`, `out_height` (`str | list[str] | None`)
: Caption and output sizes. Lists hold one value per figure.

`external` (`bool`)
: Whether TikZ figures are externalised to PDF.

`optipng` (`str | bool | None`)
: Extra command line arguments passed to `optipng`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .devices import GraphicsDevice, dev2ext


FigShow = Literal["asis", "hold", "animate", "hide"]
FigAlign = Literal["default", "left", "right", "center"]


class ChunkOptions(BaseModel):
    """Validated, immutable chunk options."""

    model_config = ConfigDict(extra="allow", frozen=True)

    label: str = "unnamed-chunk"
    engine: str = "python"
    code: list[str] = Field(default_factory=list)
    eval: bool = True
    purl: bool = True
    params_src: str | None = None

    dev: list[GraphicsDevice] = Field(default_factory=lambda: [GraphicsDevice.PNG])
    fig_ext: str | None = None
    fig_path: str = "figure/"
    fig_num: int = Field(default=0, ge=0)
    fig_cur: int = Field(default=0, ge=0)
    fig_width: float = Field(default=7.0, gt=0)
    fig_height: float = Field(default=7.0, gt=0)
    dpi: int = Field(default=72, gt=0)
    fig_show: FigShow = "asis"
    fig_align: FigAlign = "default"
    fig_cap: str | list[str] | None = None
    out_width: str | list[str] | None = None
    out_height: str | list[str] | None = None
    external: bool = True

    scene: bool | None = None
    webgl: bool | None = None
    pdfcrop: bool | None = None
    optipng: str | bool | None = None
    plot_custom: bool | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _split_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.splitlines()
        return value

    @field_validator("dev", mode="before")
    @classmethod
    def _wrap_device(cls, value: Any) -> Any:
        if isinstance(value, str | GraphicsDevice):
            return [value]
        return value

    @field_validator("dev")
    @classmethod
    def _require_device(cls, value: list[GraphicsDevice]) -> list[GraphicsDevice]:
        if not value:
            raise ValueError("at least one graphics device is required")
        return value

    @field_validator("fig_ext", mode="before")
    @classmethod
    def _normalise_extension(cls, value: Any) -> Any:
        if isinstance(value, str):
            candidate = value.strip().lstrip(".")
            if not candidate or candidate.lower() == "none":
                return None
            return candidate
        return value

    @property
    def device(self) -> GraphicsDevice:
        """Primary graphics device of the chunk."""
        return self.dev[0]

    @property
    def extension(self) -> str:
        """Figure extension, falling back to the device default."""
        return self.fig_ext or dev2ext(self.device)

    def option_set(self, name: str) -> bool:
        """Return True when an option is present and neither ``None`` nor ``False``."""
        value = getattr(self, name, None)
        return value is not None and value is not False

    def reduce_for_figure(self, index: int) -> ChunkOptions:
        """Return options narrowed to a single figure of a multi-figure chunk."""
        update: dict[str, Any] = {"fig_cur": index}
        for key in ("fig_cap", "out_width", "out_height"):
            update[key] = pick_for_figure(getattr(self, key), index)
        return self.model_copy(update=update)


def pick_for_figure(value: str | Sequence[str] | None, index: int) -> str | None:
    """Select the value matching figure ``index`` (1-based) from a per-figure list."""
    if value is None or isinstance(value, str):
        return value
    items = list(value)
    if not items:
        return None
    position = index - 1 if index > 0 else 0
    return items[position % len(items)]


__all__ = ["ChunkOptions", "FigAlign", "FigShow", "pick_for_figure"]
