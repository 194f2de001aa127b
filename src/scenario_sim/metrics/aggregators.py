from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from scenario_sim.series import TimeSeries, as_series

STOCKOUT_SATURATION_DAYS = 30.0
PERIOD_DAYS = 7.0


@dataclass(frozen=True)
class LeadTimeImpact:
    stockout_risk_pct: float
    availability_shift_days: float
    impacted_periods: int
    demand_at_risk: float

    @classmethod
    def zero(cls) -> "LeadTimeImpact":
        return cls(stockout_risk_pct=0.0, availability_shift_days=0.0, impacted_periods=0, demand_at_risk=0.0)

    def to_dict(self) -> dict[str, float]:
        return {
            "stockoutRiskPct": self.stockout_risk_pct,
            "availabilityShiftDays": self.availability_shift_days,
            "impactedPeriods": self.impacted_periods,
            "demandAtRisk": self.demand_at_risk,
        }


def _values(series: TimeSeries | None) -> np.ndarray:
    return np.asarray(as_series(series).values, dtype=float)


def round_half_up(x: float) -> int:
    # Presentation rounding: .5 goes up (toward +inf), unlike round()'s banker's rounding.
    return int(np.floor(x + 0.5))


def total_units(series: TimeSeries | None) -> float:
    v = _values(series)
    if v.size == 0:
        return 0.0
    return float(np.sum(v))


def inventory_coverage(series: TimeSeries | None, stock_on_hand: float) -> float:
    """Periods of coverage: stock / mean per-period demand.

    Returns 0 for an empty series or a non-positive mean.
    """
    v = _values(series)
    if v.size == 0:
        return 0.0
    avg = float(np.mean(v))
    return stock_on_hand / avg if avg > 0 else 0.0


def lead_time_impact(
    series: TimeSeries | None,
    lead_time_days: float,
    *,
    saturation_days: float = STOCKOUT_SATURATION_DAYS,
    period_days: float = PERIOD_DAYS,
) -> LeadTimeImpact:
    """Stockout exposure from replenishment lead time.

    Risk ramps linearly with lead time and saturates at 100% once the lead
    time reaches `saturation_days`. `impacted_periods` counts the periods
    (weeks by default) the lead time spans.
    """
    v = _values(series)
    if v.size == 0:
        return LeadTimeImpact.zero()

    risk = min(lead_time_days / saturation_days, 1.0)
    return LeadTimeImpact(
        stockout_risk_pct=risk * 100.0,
        availability_shift_days=lead_time_days,
        impacted_periods=int(np.ceil(lead_time_days / period_days)),
        demand_at_risk=float(np.sum(v)) * risk,
    )


def revenue(series: TimeSeries | None, unit_price: float) -> float:
    return total_units(series) * unit_price


def margin(revenue_value: float, cogs_pct: float) -> float:
    """Gross margin. cogs_pct outside [0, 1] is computed, not rejected."""
    return revenue_value * (1.0 - cogs_pct)
