import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from scenario_sim import load_config
from scenario_sim.config import EngineConfig
from scenario_sim.scenario import ScenarioSimulator

CONFIG = textwrap.dedent(
    """
    project:
      name: la-dona
    engine:
      default_price: 10.0
      elasticity: -1.1
    registry:
      path: entities.yaml
    scenarios:
      - name: Baseline
        lead_time_days: 0
      - name: Summer promo
        description: 2-for-1 on condiments
        promo_multiplier: 1.8
        price_change_pct: -0.05
    """
)

ENTITIES = textwrap.dedent(
    """
    products:
      - id: spicy-mustard
        name: Mostaza Picante Especial
        cogs: 0.52
        series:
          - {date: "2025-01-06", value: 100}
          - {date: "2025-01-13", value: 100}
    """
)


@pytest.fixture
def config_path(tmp_path):
    (tmp_path / "entities.yaml").write_text(ENTITIES, encoding="utf-8")
    path = tmp_path / "project.yaml"
    path.write_text(CONFIG, encoding="utf-8")
    return path


def test_engine_defaults():
    cfg = EngineConfig()
    assert cfg.default_price == 12.50
    assert cfg.default_cogs == 0.65
    assert cfg.elasticity == -1.3
    assert cfg.stockout_saturation_days == 30
    assert cfg.period_days == 7
    assert cfg.service_level_per_period == 10


def test_load_config(config_path):
    cfg = load_config(config_path)
    assert cfg.project.name == "la-dona"
    assert cfg.engine.default_price == 10.0
    assert cfg.engine.default_cogs == 0.65
    assert cfg.registry.path == str(config_path.parent / "entities.yaml")
    assert [s.name for s in cfg.scenarios] == ["Baseline", "Summer promo"]
    assert cfg.scenarios[1].stock_available == 1000


def test_scenario_spec_to_named_scenario(config_path):
    named = load_config(config_path).scenarios[1].to_named_scenario()
    assert named.name == "Summer promo"
    assert named.description == "2-for-1 on condiments"
    assert named.params.promo_multiplier == 1.8
    assert named.params.price_change_pct == -0.05
    assert named.params.lead_time_days == 7


def test_simulator_from_config(config_path):
    sim = ScenarioSimulator.from_config(load_config(config_path))
    r = sim.simulate_entity("product", "spicy-mustard")
    # missing price falls back to the configured default
    assert r.current.revenue == 2000
    assert r.current.margin == 960

    df = sim.run_scenarios(sim.registry.get("product", "spicy-mustard"))
    assert df["scenario"].tolist() == ["Baseline", "Summer promo"]
    # 100 * 1.8 * (1 + 1.1 * 0.05) = 189.9 per week at price 9.5
    assert df.loc[1, "simulated_units"] == 380
    assert df.loc[1, "simulated_revenue"] == 3608


def test_invalid_config(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("scenarios:\n  - description: missing name\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


def test_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.scenarios == []
    assert cfg.registry.path is None


def test_shipped_configs_load():
    path = Path(__file__).resolve().parents[1] / "configs" / "scenarios.yaml"
    sim = ScenarioSimulator.from_config(load_config(path))
    salsa = sim.registry.get("product", "mango-salsa")
    df = sim.run_scenarios(salsa)
    assert len(df) == 4
    baseline = df.iloc[0]
    assert baseline["simulated_revenue"] == baseline["current_revenue"]
