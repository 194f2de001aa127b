from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Any, Iterable, Protocol

import yaml
from pydantic import BaseModel, Field, field_validator

from scenario_sim.connectors import CSVConnector
from scenario_sim.series import TimeSeries

from .entities import Entity, EntityCategory

logger = logging.getLogger(__name__)

# YAML section name -> category
_SECTIONS = {
    "kpis": EntityCategory.KPI,
    "products": EntityCategory.PRODUCT,
    "zones": EntityCategory.ZONE,
}


class EntityRepository(Protocol):
    """Read-only lookup of entities by category and id."""

    def get(self, category: EntityCategory | str, entity_id: str) -> Entity | None: ...


def _category(value: EntityCategory | str) -> EntityCategory:
    try:
        return EntityCategory(value)
    except ValueError:
        raise ValueError(f"Unsupported entity category: {value!r}") from None


class InMemoryEntityRegistry:
    """Immutable catalog of KPIs, products and zones keyed by (category, id)."""

    def __init__(self, entities: Iterable[Entity] = ()):
        index: dict[tuple[EntityCategory, str], Entity] = {}
        for e in entities:
            key = (e.category, e.id)
            if key in index:
                raise ValueError(f"Duplicate entity id {e.id!r} in category {e.category.value!r}")
            index[key] = e
        self._index = index

    def __len__(self) -> int:
        return len(self._index)

    def get(self, category: EntityCategory | str, entity_id: str) -> Entity | None:
        return self._index.get((_category(category), entity_id))

    def by_category(self, category: EntityCategory | str) -> list[Entity]:
        cat = _category(category)
        return [e for (c, _), e in self._index.items() if c == cat]

    def all(self) -> list[Entity]:
        return list(self._index.values())

    def search(self, query: str, category: EntityCategory | str | None = None) -> list[Entity]:
        """Case-insensitive substring match on name and description."""
        q = query.lower()
        pool = self.all() if category is None else self.by_category(category)
        return [e for e in pool if q in e.name.lower() or q in e.description.lower()]


class SeriesCSVSpec(BaseModel):
    path: str
    time_col: str = "date"
    value_col: str = "value"


class SeriesPointRecord(BaseModel):
    date: str | None = None
    value: float

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_str(cls, v: Any) -> Any:
        # Unquoted YAML dates arrive as datetime.date
        if isinstance(v, (dt.date, dt.datetime)):
            return v.isoformat()[:10]
        return v


class EntityRecord(BaseModel):
    id: str
    name: str = ""
    title: str = ""  # KPIs are titled rather than named
    description: str = ""
    price: float | None = None
    cogs: float | None = None
    stock_on_hand: float | None = None
    lead_time_days: float | None = None
    series: list[SeriesPointRecord] | None = None
    series_csv: SeriesCSVSpec | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)


def _load_series(rec: EntityRecord, base_dir: Path) -> TimeSeries | None:
    if rec.series_csv is not None:
        path = Path(rec.series_csv.path)
        if not path.is_absolute():
            path = base_dir / path
        conn = CSVConnector(
            path=str(path),
            time_col=rec.series_csv.time_col,
            value_col=rec.series_csv.value_col,
        )
        return conn.load_series()
    if rec.series is not None:
        return TimeSeries.from_records(p.model_dump() for p in rec.series)
    return None


def _entity_from_record(rec: EntityRecord, category: EntityCategory, base_dir: Path) -> Entity:
    return Entity(
        id=rec.id,
        category=category,
        name=rec.name or rec.title,
        series=_load_series(rec, base_dir),
        price=rec.price,
        cogs=rec.cogs,
        stock_on_hand=rec.stock_on_hand,
        lead_time_days=rec.lead_time_days,
        description=rec.description,
        attributes=dict(rec.attributes),
    )


def load_entity_registry(path: str | Path) -> InMemoryEntityRegistry:
    """Load an entity catalog from YAML.

    Expected YAML structure:
      products:
        - id: "mango-salsa"
          name: "Mango Salsa Premium"
          price: 12.50
          cogs: 0.65
          stock_on_hand: 4800
          lead_time_days: 14
          series:
            - {date: "2025-01-06", value: 1180}
            - {date: "2025-01-13", value: 1225}
      zones:
        - id: "chiriqui"
          name: "Chiriqui Central"
          series_csv:
            path: "series/chiriqui.csv"   # relative to this file
            time_col: "date"
            value_col: "value"
      kpis: []
    """
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown registry sections: {sorted(unknown)}")

    entities: list[Entity] = []
    for section, category in _SECTIONS.items():
        records = [EntityRecord.model_validate(r) for r in data.get(section) or []]
        entities.extend(_entity_from_record(r, category, path.parent) for r in records)
        logger.info(f"Loaded {len(records)} {category.value} entities from {path.name}")

    return InMemoryEntityRegistry(entities)
