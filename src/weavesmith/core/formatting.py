"""Formatting helpers for inline values."""

from __future__ import annotations

from collections.abc import Iterable
import locale
import math
from numbers import Integral, Real
from typing import Any


def resolve_decimal_mark(decimal_mark: str) -> str:
    """Return the decimal separator, consulting the active locale for ``"locale"``."""
    if decimal_mark != "locale":
        return decimal_mark
    return locale.localeconv().get("decimal_point") or "."


def round_digits(value: float, digits: int = 7) -> str:
    """Round ``value`` to ``digits`` decimals and drop trailing zeros."""
    if isinstance(value, Integral):
        return str(int(value))
    rounded = round(float(value), digits)
    if rounded == int(rounded) and abs(rounded) < 1e15:
        return str(int(rounded))
    text = f"{rounded:.{digits}f}".rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text


def format_sci(
    value: Any,
    *,
    digits: int = 7,
    scipen: int = 0,
    decimal_mark: str = ".",
) -> str:
    """Format a scalar, switching to scientific notation for large or small magnitudes.

    Values whose decimal exponent has a magnitude below ``scipen + 4`` are
    rounded; others render as ``<mantissa>e<sign><exponent>`` with at least two
    exponent digits. Integers and non-numeric values are returned as text.
    """
    if isinstance(value, bool | Integral) or not isinstance(value, Real):
        return str(value)

    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Inf" if number > 0 else "-Inf"
    if number == 0:
        return "0"

    mark = resolve_decimal_mark(decimal_mark)
    exponent = math.floor(math.log10(abs(number)))
    if abs(exponent) < scipen + 4:
        text = round_digits(value, digits)
    else:
        scaled = round(number / 10**exponent, digits)
        if abs(scaled) >= 10:
            exponent += 1
            scaled = round(scaled / 10, digits)
        sign = "+" if exponent >= 0 else "-"
        text = f"{round_digits(scaled, digits)}e{sign}{abs(exponent):02d}"
    if mark != ".":
        text = text.replace(".", mark)
    return text


def format_values(values: Any, **kwargs: Any) -> str:
    """Format a scalar or an iterable of scalars, joining items with ``", "``."""
    if isinstance(values, str | bytes) or not isinstance(values, Iterable):
        return format_sci(values, **kwargs)
    return ", ".join(format_sci(item, **kwargs) for item in values)


__all__ = ["format_sci", "format_values", "resolve_decimal_mark", "round_digits"]
