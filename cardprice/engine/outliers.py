"""
Card Price Resolver — Outlier Filter (Tukey IQR fence)

    Q1 = p[floor(0.25 * n)]     Q3 = p[floor(0.75 * n)]     (p sorted ascending)
    IQR = Q3 - Q1
    keep  Q1 - k*IQR <= p <= Q3 + k*IQR          (k = 1.5 by default)

Quartiles are index-based, not interpolated.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

import structlog

from cardprice.config import settings

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")


class PriceSummary(NamedTuple):
    """Aggregate over the prices that survived the fence."""
    mean: Decimal
    count: int
    low: Decimal
    high: Decimal
    prices: list[Decimal]


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def iqr_bounds(
    sorted_prices: list[Decimal],
    multiplier: Decimal | None = None,
) -> tuple[Decimal, Decimal]:
    """Return the (lower, upper) fence for an ascending, non-empty price list."""
    k = multiplier if multiplier is not None else settings.IQR_FENCE_MULTIPLIER
    n = len(sorted_prices)
    q1 = sorted_prices[n // 4]
    q3 = sorted_prices[(3 * n) // 4]
    iqr = q3 - q1
    return q1 - k * iqr, q3 + k * iqr


def summarize(
    prices: list[Decimal],
    multiplier: Decimal | None = None,
) -> PriceSummary | None:
    """
    Drop statistical outliers and summarize what is left.

    Args:
        prices: Cleaned listing prices (any order).
        multiplier: Override for IQR_FENCE_MULTIPLIER.

    Returns:
        PriceSummary, or None when no price survives the fence.

    Raises:
        ValueError: If prices is empty. Callers report "no listings" first.
    """
    if not prices:
        raise ValueError("prices must not be empty")

    ordered = sorted(prices)
    lower, upper = iqr_bounds(ordered, multiplier)
    kept = [p for p in ordered if lower <= p <= upper]

    if not kept:
        logger.warning(
            "outlier_filter_nothing_kept",
            input_count=len(ordered),
            lower_bound=str(lower),
            upper_bound=str(upper),
            source="outliers",
        )
        return None

    mean = _quantize(sum(kept, Decimal("0")) / Decimal(len(kept)))
    summary = PriceSummary(
        mean=mean,
        count=len(kept),
        low=kept[0],
        high=kept[-1],
        prices=kept,
    )

    logger.info(
        "outlier_filter_complete",
        input_count=len(ordered),
        kept_count=summary.count,
        lower_bound=str(lower),
        upper_bound=str(upper),
        mean=str(summary.mean),
        source="outliers",
    )
    return summary
