"""Demand transforms.

Series-level and scalar adjustments used to build a what-if demand series:
- growth: scale every period by (1 + g)
- promotion: scale a value by a promotional multiplier
- price elasticity: dQ/Q = E * dP/P, applied as Q * (1 + E * dP/P)

None of these clamp. A large price rise with a strongly negative elasticity
can push demand below zero, and callers get that number back.
"""

from __future__ import annotations

from typing import Callable

from .types import TimeSeries, as_series

DEFAULT_PRICE_ELASTICITY = -1.3


def forecast_demand(series: TimeSeries | None, growth_pct: float) -> TimeSeries:
    """Scale each value by (1 + growth_pct); dates and order are unchanged.

    Args:
        series: baseline demand series
        growth_pct: growth as a fraction (0.15 = +15%)

    Returns:
        A new TimeSeries. The input is never modified.
    """
    series = as_series(series)
    if len(series) == 0:
        return TimeSeries()

    growth_factor = 1.0 + growth_pct
    return series.with_values([v * growth_factor for v in series.values])


def promo_uplift(value: float, multiplier: float) -> float:
    """Demand after a promotion (1.8 = +80% uplift). Zero or negative is not rejected."""
    return value * multiplier


def price_elasticity(
    value: float, price_change_pct: float, elasticity: float = DEFAULT_PRICE_ELASTICITY
) -> float:
    """Demand after a relative price change (0.10 = +10% price)."""
    return value * (1.0 + elasticity * price_change_pct)


def apply_pointwise(
    series: TimeSeries | None, fn: Callable[..., float], *args: float, **kwargs: float
) -> TimeSeries:
    """Map a scalar transform over every value of a series."""
    series = as_series(series)
    return series.with_values([fn(v, *args, **kwargs) for v in series.values])
