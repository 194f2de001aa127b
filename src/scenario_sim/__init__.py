"""Deterministic what-if simulation for business demand series.

Baseline series come from an entity registry (KPIs, products, zones); the
engine applies growth, promotion and price-elasticity levers and reports
current vs. simulated revenue, units, margin and service level.
"""

from .config import EngineConfig, ProjectConfig, load_config  # noqa
from .data import Entity, EntityCategory, InMemoryEntityRegistry, load_entity_registry  # noqa
from .scenario import ScenarioParams, ScenarioResult, ScenarioSimulator, simulate  # noqa
from .series import TimeSeries, TimeSeriesPoint  # noqa
