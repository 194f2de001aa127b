from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from scenario_sim.series import TimeSeries


class EntityCategory(str, Enum):
    KPI = "kpi"
    PRODUCT = "product"
    ZONE = "zone"


@dataclass(frozen=True)
class Entity:
    """A KPI, product or zone with its baseline demand series.

    `price` and `cogs` are optional; the engine falls back to its defaults
    when they are missing. `stock_on_hand` and `lead_time_days` are product
    attributes and only seed scenario parameters.
    """

    id: str
    category: EntityCategory
    name: str = ""
    series: TimeSeries | None = None
    price: float | None = None
    cogs: float | None = None
    stock_on_hand: float | None = None
    lead_time_days: float | None = None
    description: str = ""
    attributes: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)
