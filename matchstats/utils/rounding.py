"""Display rounding for rates and averages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a scoreboard does: exact halves go up, not to even.

    ``round(3.125, 2)`` gives 3.12; this gives 3.13.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
