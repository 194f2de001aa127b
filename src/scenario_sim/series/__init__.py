"""Time series records and demand transforms."""

from .transforms import (  # noqa
    DEFAULT_PRICE_ELASTICITY,
    apply_pointwise,
    forecast_demand,
    price_elasticity,
    promo_uplift,
)
from .types import TimeSeries, TimeSeriesPoint, as_series  # noqa

__all__ = [
    "TimeSeries",
    "TimeSeriesPoint",
    "as_series",
    "DEFAULT_PRICE_ELASTICITY",
    "apply_pointwise",
    "forecast_demand",
    "price_elasticity",
    "promo_uplift",
]
