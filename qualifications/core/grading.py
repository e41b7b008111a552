"""Weighting rules shared by qualifications and subjects.

Everything here is a pure function over plain values, so the cap check and the
aggregation can be exercised without a database session. Items only need
``percent`` and ``score`` attributes.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

MAX_PERCENT = Decimal("100")
QUALIFICATIONS_PER_SUBJECT = 3

ZERO = Decimal("0")
# Activity percent and score columns are NUMERIC(_, 2).
POINTS_PRECISION = Decimal("0.01")


class Weighted(Protocol):
    percent: Decimal
    score: Decimal


def as_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary float expansion
    return Decimal(str(value))


def as_points(value) -> Decimal:
    """Round a percent or score to the precision it is stored with."""
    return as_decimal(value).quantize(POINTS_PRECISION, rounding=ROUND_HALF_UP)


def total_percent(items: Iterable[Weighted]) -> Decimal:
    return sum((as_decimal(item.percent) for item in items), ZERO)


def fits_cap(items: Iterable[Weighted], percent_delta) -> bool:
    """Return True when adding ``percent_delta`` keeps the items within MAX_PERCENT."""
    return total_percent(items) + as_decimal(percent_delta) <= MAX_PERCENT


def weighted_total(items: Iterable[Weighted]) -> Decimal:
    """Sum of ``score * percent / 100``; an empty collection scores zero.

    Scores are not clamped, a score above the usual scale raises the total
    above the usual maximum as well.
    """
    weighted = sum((as_decimal(item.score) * as_decimal(item.percent) for item in items), ZERO)
    return weighted / MAX_PERCENT


def definitive_score(totals: Iterable) -> Decimal:
    return sum((as_decimal(total) for total in totals), ZERO)
