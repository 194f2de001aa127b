from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from scenario_sim.scenario import NamedScenario


class EngineConfig(BaseModel):
    # Fallbacks when an entity carries no price / COGS fraction.
    default_price: float = 12.50
    default_cogs: float = 0.65

    elasticity: float = -1.3

    # Stockout risk reaches 100% at this lead time.
    stockout_saturation_days: float = 30.0
    # Length of one series period in days (baseline data is weekly).
    period_days: float = 7.0
    # Service-level points per period of coverage.
    service_level_per_period: float = 10.0


class ScenarioSpec(BaseModel):
    name: str
    description: str = ""
    demand_growth_pct: float = 0.0
    price_change_pct: float = 0.0
    promo_multiplier: float = 1.0
    lead_time_days: float = 7.0
    stock_available: float = 1000.0

    def to_named_scenario(self) -> "NamedScenario":
        from scenario_sim.scenario import NamedScenario, ScenarioParams

        return NamedScenario(
            name=self.name,
            description=self.description,
            params=ScenarioParams(
                demand_growth_pct=self.demand_growth_pct,
                price_change_pct=self.price_change_pct,
                promo_multiplier=self.promo_multiplier,
                lead_time_days=self.lead_time_days,
                stock_available=self.stock_available,
            ),
        )


class RegistryConfig(BaseModel):
    # Entity catalog YAML; relative paths resolve against the config file.
    path: str | None = None


class ProjectMeta(BaseModel):
    name: str = "default"


class ProjectConfig(BaseModel):
    project: ProjectMeta = ProjectMeta()
    engine: EngineConfig = EngineConfig()
    registry: RegistryConfig = RegistryConfig()
    scenarios: list[ScenarioSpec] = Field(default_factory=list)


def load_config(path: str | Path) -> ProjectConfig:
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    cfg = ProjectConfig.model_validate(data)
    if cfg.registry.path is not None and not Path(cfg.registry.path).is_absolute():
        cfg.registry.path = str(path.parent / cfg.registry.path)
    return cfg
