import pytest

from scenario_sim.data import Entity, EntityCategory
from scenario_sim.series import TimeSeries


@pytest.fixture
def two_week_series():
    return TimeSeries.from_records(
        [
            {"date": "2025-01-01", "value": 100},
            {"date": "2025-01-08", "value": 100},
        ]
    )


@pytest.fixture
def product(two_week_series):
    return Entity(
        id="mango-salsa",
        category=EntityCategory.PRODUCT,
        name="Mango Salsa Premium",
        series=two_week_series,
        price=12.50,
        cogs=0.65,
        stock_on_hand=4800,
        lead_time_days=14,
        description="Premium mango salsa with tropical flavors",
    )
