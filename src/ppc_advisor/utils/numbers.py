"""Rate arithmetic and display formatting for report metrics."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0 when the denominator is 0.

    No volume means no rate: a keyword with zero sales has an ACOS of 0,
    not infinity.
    """
    if denominator == 0:
        return 0.0
    return numerator / denominator


def round_cents(value: float) -> float:
    """Round to 2 decimals, half away from zero (1.005 -> 1.01, -1.005 -> -1.01)."""
    # repr() keeps the shortest decimal form so 1.005 stays 1.005 rather than 1.00499...
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def fmt_pct(value: float | None) -> str:
    """Format a percentage for display, e.g. 12.5 -> '12.50%'."""
    if value is None or math.isnan(value):
        return "—"
    return f"{value:.2f}%"


def fmt_currency(value: float | None) -> str:
    """Format a currency amount for display, e.g. 1.2 -> '$1.20'."""
    if value is None or math.isnan(value):
        return "—"
    return f"${value:.2f}"
