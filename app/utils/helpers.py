"""Shared utility functions — amount parsing and rounding."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from app.config import settings

# Characters stripped from free-form amount strings before parsing
_GROUPING_CHARS = (",", "_", "₹", " ")

_ROUNDING_PRECISION = 400


def parse_amount(value: Any) -> float:
    """Coerce a form value into a non-negative amount.

    Accepts numbers and numeric strings with digit grouping
    (``"12,00,000"``, ``"1,200,000"``) or a leading ``₹``.  Blank,
    non-numeric, non-finite and negative values all become ``0.0``, as do
    amounts above ``settings.MAX_AMOUNT`` (an int too large for a float
    included).  Never raises.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        raw = value
    elif isinstance(value, str):
        raw = value.strip()
        for ch in _GROUPING_CHARS:
            raw = raw.replace(ch, "")
        if not raw:
            return 0.0
    else:
        return 0.0

    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return 0.0

    if not math.isfinite(number) or number < 0 or number > settings.MAX_AMOUNT:
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); cess is
    rounded the commercial way, so ``2.5`` becomes ``3``.  Any finite float
    is accepted: the context precision covers the 309 integer digits of
    ``sys.float_info.max``.
    """
    with localcontext() as ctx:
        ctx.prec = _ROUNDING_PRECISION
        return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_currency(value: float, decimals: int = settings.CURRENCY_DECIMALS) -> float:
    """Round to *decimals* places."""
    return round(value, decimals)
