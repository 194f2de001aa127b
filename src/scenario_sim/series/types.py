from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Sequence

import pandas as pd


@dataclass(frozen=True)
class TimeSeriesPoint:
    date: str | None
    value: float


@dataclass(frozen=True)
class TimeSeries:
    """Ordered sequence of dated observations (chronological, ascending).

    Order is kept exactly as given. Nothing here sorts, resamples or
    de-duplicates: aggregations see the sequence the caller supplied.
    """

    points: tuple[TimeSeriesPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TimeSeriesPoint]:
        return iter(self.points)

    def __getitem__(self, i: int) -> TimeSeriesPoint:
        return self.points[i]

    @property
    def values(self) -> list[float]:
        return [p.value for p in self.points]

    @property
    def dates(self) -> list[str | None]:
        return [p.date for p in self.points]

    def with_values(self, values: Sequence[float]) -> "TimeSeries":
        """Same dates, new values. Lengths must match."""
        if len(values) != len(self.points):
            raise ValueError(
                f"Expected {len(self.points)} values, got {len(values)}"
            )
        return TimeSeries(
            tuple(TimeSeriesPoint(date=p.date, value=float(v)) for p, v in zip(self.points, values))
        )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any] | TimeSeriesPoint]) -> "TimeSeries":
        points = []
        for rec in records:
            if isinstance(rec, TimeSeriesPoint):
                points.append(rec)
                continue
            date = rec.get("date")
            points.append(
                TimeSeriesPoint(date=None if date is None else str(date), value=float(rec["value"]))
            )
        return cls(tuple(points))

    def to_records(self) -> list[dict[str, Any]]:
        return [{"date": p.date, "value": p.value} for p in self.points]

    @classmethod
    def from_frame(
        cls, df: pd.DataFrame, time_col: str = "date", value_col: str = "value"
    ) -> "TimeSeries":
        """Build from a dataframe, keeping row order.

        Timestamps are rendered as ISO calendar dates (YYYY-MM-DD).
        """
        if time_col not in df.columns or value_col not in df.columns:
            raise ValueError(
                f"DataFrame missing required columns: {time_col!r}, {value_col!r}"
            )
        dates = pd.to_datetime(df[time_col]).dt.strftime("%Y-%m-%d")
        values = df[value_col].astype("float64")
        return cls(
            tuple(TimeSeriesPoint(date=d, value=float(v)) for d, v in zip(dates, values))
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"date": self.dates, "value": self.values}, columns=["date", "value"]
        )


def as_series(obj: TimeSeries | Iterable[Mapping[str, Any] | TimeSeriesPoint] | None) -> TimeSeries:
    """Coerce None, a TimeSeries, or an iterable of records into a TimeSeries."""
    if obj is None:
        return TimeSeries()
    if isinstance(obj, TimeSeries):
        return obj
    return TimeSeries.from_records(obj)
