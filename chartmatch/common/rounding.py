import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf.

    Python's ``round`` uses banker's rounding; approximation indices and
    reported scores need ``floor(x + 0.5)`` so that 2.5 -> 3 and -2.5 -> -2.
    """
    return int(math.floor(value + 0.5))
