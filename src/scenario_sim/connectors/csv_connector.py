from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from scenario_sim.series import TimeSeries


@dataclass(frozen=True)
class CSVConnector:
    """Loads one dated demand series from a CSV file."""

    path: str
    time_col: str = "date"
    value_col: str = "value"

    def load_series(self) -> TimeSeries:
        df = pd.read_csv(self.path)
        if self.time_col not in df.columns or self.value_col not in df.columns:
            raise ValueError(
                f"CSV missing required columns: {self.time_col!r}, {self.value_col!r}"
            )

        df = df.assign(**{self.time_col: pd.to_datetime(df[self.time_col])})
        df = df.sort_values(self.time_col, kind="stable")

        # Entities hold one observation per period; aggregate upstream otherwise.
        if df[self.time_col].duplicated().any():
            dupes = df.loc[df[self.time_col].duplicated(), self.time_col].unique()
            raise ValueError(
                f"Duplicate dates in {Path(self.path).name}: e.g. "
                f"{[str(d.date()) for d in dupes[:3]]}"
            )

        return TimeSeries.from_frame(df, time_col=self.time_col, value_col=self.value_col)
