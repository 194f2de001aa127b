"""Scenario simulation engine.

Given an entity's baseline demand series and a set of what-if parameters,
compute the current metric bundle and a simulated one side by side.

Transform order for the simulated series is fixed:
  1. demand growth     (skipped when demand_growth_pct == 0)
  2. promotional uplift (skipped when promo_multiplier == 1)
  3. price elasticity   (skipped when price_change_pct == 0)
Each stage consumes the previous stage's output. Reordering changes
results once growth is involved, so the order is part of the contract.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

import pandas as pd

from scenario_sim.config import EngineConfig, ProjectConfig
from scenario_sim.data import Entity, EntityCategory, EntityRepository, load_entity_registry
from scenario_sim.metrics import (
    LeadTimeImpact,
    inventory_coverage,
    lead_time_impact,
    margin,
    revenue,
    round_half_up,
    total_units,
)
from scenario_sim.series import (
    DEFAULT_PRICE_ELASTICITY,
    TimeSeries,
    apply_pointwise,
    as_series,
    forecast_demand,
    price_elasticity,
    promo_uplift,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioParams:
    """What-if levers. Percentages are fractions (0.10 = +10%)."""
    demand_growth_pct: float = 0.0
    price_change_pct: float = 0.0
    promo_multiplier: float = 1.0
    lead_time_days: float = 7.0
    stock_available: float = 1000.0

    @classmethod
    def for_entity(cls, entity: Optional[Entity], **overrides: float) -> "ScenarioParams":
        """Defaults seeded from the entity's stock on hand and lead time, when it has them."""
        seeded: dict[str, float] = {}
        if entity is not None and entity.stock_on_hand is not None:
            seeded["stock_available"] = entity.stock_on_hand
        if entity is not None and entity.lead_time_days is not None:
            seeded["lead_time_days"] = entity.lead_time_days
        seeded.update(overrides)
        return cls(**seeded)


@dataclass(frozen=True)
class NamedScenario:
    name: str  # e.g. "Baseline", "Summer promo"
    params: ScenarioParams = field(default_factory=ScenarioParams)
    description: str = ""


@dataclass(frozen=True)
class MetricBundle:
    """Presentation metrics for one series. Values are rounded half-up."""
    revenue: int
    units: int
    margin: int
    service_level: int
    series: TimeSeries

    def to_dict(self) -> dict[str, Any]:
        return {
            "revenue": self.revenue,
            "units": self.units,
            "margin": self.margin,
            "serviceLevel": self.service_level,
            "series": self.series.to_records(),
        }


@dataclass(frozen=True)
class SimulatedBundle(MetricBundle):
    price_change_pct_realized: float  # (adjusted / original price - 1) * 100
    lead_time_impact: LeadTimeImpact

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["priceChangePctRealized"] = self.price_change_pct_realized
        out["leadTimeImpact"] = self.lead_time_impact.to_dict()
        return out


@dataclass(frozen=True)
class ScenarioResult:
    current: MetricBundle
    simulated: SimulatedBundle

    @classmethod
    def empty(cls) -> "ScenarioResult":
        """Result for a missing entity or series: zeros, service level 100."""
        return cls(
            current=MetricBundle(revenue=0, units=0, margin=0, service_level=100, series=TimeSeries()),
            simulated=SimulatedBundle(
                revenue=0,
                units=0,
                margin=0,
                service_level=100,
                series=TimeSeries(),
                price_change_pct_realized=0.0,
                lead_time_impact=LeadTimeImpact.zero(),
            ),
        )

    def deltas(self) -> dict[str, int]:
        """Simulated minus current, per rounded metric."""
        return {
            "revenue": self.simulated.revenue - self.current.revenue,
            "units": self.simulated.units - self.current.units,
            "margin": self.simulated.margin - self.current.margin,
            "service_level": self.simulated.service_level - self.current.service_level,
        }

    def to_dict(self) -> dict[str, Any]:
        return {"current": self.current.to_dict(), "simulated": self.simulated.to_dict()}


def build_simulated_series(
    series: TimeSeries, params: ScenarioParams, elasticity: float = DEFAULT_PRICE_ELASTICITY
) -> TimeSeries:
    """Apply growth, then promotion, then price elasticity."""
    out = series
    if params.demand_growth_pct != 0:
        out = forecast_demand(out, params.demand_growth_pct)
    if params.promo_multiplier != 1:
        out = apply_pointwise(out, promo_uplift, params.promo_multiplier)
    if params.price_change_pct != 0:
        out = apply_pointwise(out, price_elasticity, params.price_change_pct, elasticity)
    return out


def simulate(
    entity: Optional[Entity],
    params: Optional[ScenarioParams] = None,
    config: Optional[EngineConfig] = None,
) -> ScenarioResult:
    """Compare an entity's baseline metrics with a what-if scenario.

    Args:
        entity: resolved entity; None (or an entity without a series) yields
            ScenarioResult.empty()
        params: scenario levers; defaults to the neutral scenario
        config: engine constants (default price/COGS, elasticity, ...)

    Returns:
        ScenarioResult with current and simulated bundles. Never raises for
        out-of-range business inputs; they are computed as given.
    """
    params = params or ScenarioParams()
    config = config or EngineConfig()

    series = as_series(entity.series) if entity is not None else TimeSeries()
    if len(series) == 0:
        logger.debug(
            f"No series for entity {getattr(entity, 'id', None)!r}; returning neutral result"
        )
        return ScenarioResult.empty()

    # Zero price/COGS count as missing.
    price = entity.price or config.default_price
    cogs = entity.cogs or config.default_cogs

    logger.debug(f"Simulating {entity.id!r} ({len(series)} periods) with {params}")

    current_revenue = revenue(series, price)
    current_coverage = inventory_coverage(series, params.stock_available)
    current = MetricBundle(
        revenue=round_half_up(current_revenue),
        units=round_half_up(total_units(series)),
        margin=round_half_up(margin(current_revenue, cogs)),
        service_level=round_half_up(
            min(100.0, current_coverage * config.service_level_per_period)
        ),
        series=series,
    )

    sim_series = build_simulated_series(series, params, elasticity=config.elasticity)
    adjusted_price = price * (1.0 + params.price_change_pct)

    sim_revenue = revenue(sim_series, adjusted_price)
    sim_coverage = inventory_coverage(sim_series, params.stock_available)
    lead_time = lead_time_impact(
        sim_series,
        params.lead_time_days,
        saturation_days=config.stockout_saturation_days,
        period_days=config.period_days,
    )
    sim_service_level = max(
        0.0,
        min(100.0, sim_coverage * config.service_level_per_period - lead_time.stockout_risk_pct),
    )

    simulated = SimulatedBundle(
        revenue=round_half_up(sim_revenue),
        units=round_half_up(total_units(sim_series)),
        margin=round_half_up(margin(sim_revenue, cogs)),
        service_level=round_half_up(sim_service_level),
        series=sim_series,
        price_change_pct_realized=(adjusted_price / price - 1.0) * 100.0,
        lead_time_impact=lead_time,
    )
    return ScenarioResult(current=current, simulated=simulated)


_PARAM_NAMES = tuple(f.name for f in fields(ScenarioParams))


class ScenarioSimulator:
    """Run what-if scenarios for entities resolved from an injected registry."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[EntityRepository] = None,
        scenarios: Optional[list[NamedScenario]] = None,
    ):
        self.config = config or EngineConfig()
        self.registry = registry
        self.scenarios = list(scenarios or [])

    @classmethod
    def from_config(cls, cfg: ProjectConfig) -> "ScenarioSimulator":
        registry = load_entity_registry(cfg.registry.path) if cfg.registry.path else None
        return cls(
            config=cfg.engine,
            registry=registry,
            scenarios=[s.to_named_scenario() for s in cfg.scenarios],
        )

    def simulate(
        self, entity: Optional[Entity], params: Optional[ScenarioParams] = None
    ) -> ScenarioResult:
        return simulate(entity, params, self.config)

    def simulate_entity(
        self,
        category: EntityCategory | str,
        entity_id: str,
        params: Optional[ScenarioParams] = None,
    ) -> ScenarioResult:
        """Resolve an entity by id and simulate it. Unknown ids give the neutral result."""
        if self.registry is None:
            raise ValueError("No entity registry configured")
        entity = self.registry.get(category, entity_id)
        if entity is None:
            logger.debug(f"Entity {category}:{entity_id} not found")
        return self.simulate(entity, params)

    def run_scenarios(
        self, entity: Optional[Entity], scenarios: Optional[list[NamedScenario]] = None
    ) -> pd.DataFrame:
        """Run several scenarios for one entity and return a comparison table."""
        scenarios = self.scenarios if scenarios is None else scenarios

        rows = []
        for s in scenarios:
            r = self.simulate(entity, s.params)
            rows.append(
                {
                    "scenario": s.name,
                    "description": s.description,
                    "current_revenue": r.current.revenue,
                    "simulated_revenue": r.simulated.revenue,
                    "current_units": r.current.units,
                    "simulated_units": r.simulated.units,
                    "current_margin": r.current.margin,
                    "simulated_margin": r.simulated.margin,
                    "current_service_level": r.current.service_level,
                    "simulated_service_level": r.simulated.service_level,
                    "revenue_change": r.simulated.revenue - r.current.revenue,
                    "price_change_pct_realized": r.simulated.price_change_pct_realized,
                    "stockout_risk_pct": r.simulated.lead_time_impact.stockout_risk_pct,
                    "demand_at_risk": r.simulated.lead_time_impact.demand_at_risk,
                }
            )
        return pd.DataFrame(rows)

    def sensitivity_analysis(
        self,
        entity: Optional[Entity],
        parameter: str,
        values: list[float],
        base: Optional[ScenarioParams] = None,
    ) -> pd.DataFrame:
        """1-way sensitivity: vary one scenario lever, hold the rest at `base`.

        Args:
            entity: entity to simulate
            parameter: ScenarioParams field name, e.g. "price_change_pct"
            values: levels to test (e.g., [-0.1, -0.05, 0, 0.05, 0.1])
            base: levels for the other levers; neutral scenario by default

        Returns:
            DataFrame with one row per tested value.
        """
        if parameter not in _PARAM_NAMES:
            raise ValueError(f"Unknown scenario parameter: {parameter}")

        base = base or ScenarioParams()
        results = []
        for value in values:
            r = self.simulate(entity, replace(base, **{parameter: value}))
            results.append(
                {
                    "parameter": parameter,
                    "value": value,
                    "revenue": r.simulated.revenue,
                    "units": r.simulated.units,
                    "margin": r.simulated.margin,
                    "service_level": r.simulated.service_level,
                    "revenue_change": r.simulated.revenue - r.current.revenue,
                }
            )

        return pd.DataFrame(results)
