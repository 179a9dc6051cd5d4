"""Presentation helpers: whole-unit rounding and currency strings.

This is the only place amounts are rounded. The engine keeps full float
precision through every period.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, NamedTuple, Optional

from pydantic import BaseModel


class CurrencyFormat(NamedTuple):
    symbol: str
    separator: str
    pattern: str


CURRENCY_FORMATS: Dict[str, CurrencyFormat] = {
    "indian": CurrencyFormat(symbol="₹", separator=",", pattern="indian"),
    "international": CurrencyFormat(symbol="$", separator=",", pattern="international"),
    "european": CurrencyFormat(symbol="€", separator=".", pattern="international"),
    "minimal": CurrencyFormat(symbol="", separator=",", pattern="international"),
}


def round_money(value: float) -> int:
    """Round half away from zero to a whole currency unit.

    Raises ``ValueError`` for NaN or infinity, which have no whole-unit value.
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot round non-finite amount {value!r}")
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def group_digits(digits: str, separator: str, pattern: str) -> str:
    """Insert separators into a string of digits.

    ``international`` groups by three; ``indian`` groups the last three
    digits and then by two (1,00,00,000).
    """
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    if pattern == "indian":
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        return separator.join(groups + [tail])

    groups = []
    while len(head) > 3:
        groups.insert(0, head[-3:])
        head = head[:-3]
    if head:
        groups.insert(0, head)
    return separator.join(groups + [tail])


def format_currency(
    value: Optional[float],
    style: str = "indian",
    with_symbol: bool = True,
) -> str:
    """Render ``value`` rounded to whole units, e.g. 5001148.4 -> "₹50,01,148".

    ``None`` (and NaN or infinity) renders as an empty string so incomplete
    inputs show nothing.
    """
    if value is None or not math.isfinite(value):
        return ""
    try:
        fmt = CURRENCY_FORMATS[style]
    except KeyError:
        raise ValueError(f"unknown currency style {style!r}") from None

    rounded = round_money(value)
    sign = "-" if rounded < 0 else ""
    body = group_digits(str(abs(rounded)), fmt.separator, fmt.pattern)
    symbol = fmt.symbol if with_symbol else ""
    return f"{sign}{symbol}{body}"


def format_percent(value: Optional[float], places: int = 2) -> str:
    if value is None or not math.isfinite(value):
        return ""
    return f"{value:.{places}f}%"


def format_result(result: BaseModel, style: str = "indian") -> Dict[str, str]:
    """Display strings for a result's headline figures.

    Float fields named ``*_percent`` render as percentages and ``*_years``
    fields are counts, so they are left out. Every other float is money.
    Breakdown rows are not formatted.
    """
    formatted: Dict[str, str] = {}
    for name, value in result:
        if not isinstance(value, float) or name.endswith("_years"):
            continue
        if name.endswith("_percent"):
            formatted[name] = format_percent(value)
        else:
            formatted[name] = format_currency(value, style)
    return formatted
