"""Linear trend estimation."""

from collections.abc import Sequence


def slope(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of ``values`` against x = 1..N.

    Returns 0 when fewer than two points are given or the regression is
    degenerate.
    """
    n = len(values)
    if n < 2:
        return 0.0

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for x, y in enumerate(values, start=1):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denominator
