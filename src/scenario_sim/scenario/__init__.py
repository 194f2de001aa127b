"""What-if scenario layer.

Compares an entity's baseline demand, revenue, margin and service level
against a scenario built from growth, promotion, price and lead-time levers.

Use case:
- Resolve an entity (KPI, product or zone) from an injected registry.
- Apply the scenario levers to its baseline series in a fixed order.
- Report current vs. simulated metrics, one scenario or a batch of them.

Design:
- Pure arithmetic, no I/O inside the engine.
- No validation of business plausibility; inputs are computed as given.
"""

from .simulator import (  # noqa
    MetricBundle,
    NamedScenario,
    ScenarioParams,
    ScenarioResult,
    ScenarioSimulator,
    SimulatedBundle,
    build_simulated_series,
    simulate,
)

__all__ = [
    "MetricBundle",
    "NamedScenario",
    "ScenarioParams",
    "ScenarioResult",
    "ScenarioSimulator",
    "SimulatedBundle",
    "build_simulated_series",
    "simulate",
]
