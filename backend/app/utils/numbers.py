"""Numeric helpers for amounts and percentages."""

from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals with halves going toward +infinity.

    ``round()`` rounds halves to even, so ``0.125`` would become ``0.12``;
    here it becomes ``0.13`` (and ``-0.125`` becomes ``-0.12``). The float is
    read through its shortest repr, so ``0.125`` counts as an exact half.
    """
    quantum = Decimal(1).scaleb(-places)
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return float(Decimal(repr(value)).quantize(quantum, rounding=rounding))
