"""Rate and average helpers with explicit zero-denominator guards.

Rounding is half-up on the decimal representation, so 6.25 becomes 6.3
rather than the 6.2 that round() gives.
"""

from decimal import ROUND_HALF_UP, Decimal

PCT_DIGITS = 1
MONEY_DIGITS = 2


def round_half_up(value: float, digits: int = PCT_DIGITS) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_rate(numerator: float, denominator: float, digits: int = PCT_DIGITS) -> float:
    """Return numerator / denominator as a percentage, 0.0 when denominator is 0."""
    if denominator == 0:
        return 0.0
    return round_half_up(numerator / denominator * 100, digits)


def safe_mean(total: float, count: int, digits: int = MONEY_DIGITS) -> float:
    """Return total / count, 0.0 when count is 0."""
    if count == 0:
        return 0.0
    return round_half_up(total / count, digits)


def money(value: float) -> float:
    return round_half_up(value, MONEY_DIGITS)
