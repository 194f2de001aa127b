from .aggregators import (  # noqa
    PERIOD_DAYS,
    STOCKOUT_SATURATION_DAYS,
    LeadTimeImpact,
    inventory_coverage,
    lead_time_impact,
    margin,
    revenue,
    round_half_up,
    total_units,
)

__all__ = [
    "PERIOD_DAYS",
    "STOCKOUT_SATURATION_DAYS",
    "LeadTimeImpact",
    "inventory_coverage",
    "lead_time_impact",
    "margin",
    "revenue",
    "round_half_up",
    "total_units",
]
