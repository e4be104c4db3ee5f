"""Document-level configuration for chunk hooks and renderers.

WeaveConfig

`base_url` (`str`)
: Prefix prepended to figure paths in rendered markup, e.g. a CDN root.

`tangle_output` (`Path | None`)
: Script receiving tangled chunks. Tangling is disabled when unset.

`script_engine` (`str`)
: Engine whose chunks are tangled; chunks in other languages are skipped.

`tangle_width` (`int`)
: Width of the `## ----label----` header written above tangled chunks.

`resize_delay` (`float`)
: Seconds to wait after resizing a 3-D window before snapshotting it.

`work_dir` (`Path`)
: Directory receiving scratch files written while exporting scenes.

`tool_timeout` (`float | None`)
: Timeout in seconds applied to external tools. `None` waits forever.

`strict_rst` (`bool`)
: Render source code as plain literal blocks instead of `sourcecode`
  directives.

`digits` (`int`) / `scipen` (`int`)
: Rounding and scientific-notation threshold for inline numbers.

`decimal_mark` (`str`)
: Decimal separator for inline numbers, or `"locale"` to follow the active
  locale.

`chunk_defaults` (`dict[str, Any]`)
: Default chunk options merged below the options of every chunk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WeaveConfig(BaseModel):
    """Configuration shared by every chunk of a document."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = ""
    tangle_output: Path | None = None
    script_engine: str = "python"
    tangle_width: int = Field(default=80, ge=12)
    resize_delay: float = Field(default=0.05, ge=0)
    work_dir: Path = Field(default_factory=Path.cwd)
    tool_timeout: float | None = Field(default=None, gt=0)
    strict_rst: bool = False
    digits: int = Field(default=7, ge=0)
    scipen: int = 0
    decimal_mark: str = "."
    chunk_defaults: dict[str, Any] = Field(default_factory=dict)

    @field_validator("script_engine")
    @classmethod
    def _lower_engine(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("decimal_mark")
    @classmethod
    def _check_decimal_mark(cls, value: str) -> str:
        if value != "locale" and len(value) != 1:
            raise ValueError("decimal_mark must be a single character or 'locale'")
        return value


__all__ = ["WeaveConfig"]
