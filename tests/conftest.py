"""Shared test fixtures for the stock chart package."""

from decimal import Decimal

import pytest

from stockchart.config import ChartSettings
from stockchart.data import SeriesData, ingest_rows
from stockchart.dates import CalendarDate, add_days


def make_rows(first: CalendarDate, last: CalendarDate, with_volume: bool = True) -> list[list[str]]:
    """Quote rows for every weekday from ``first`` to ``last``.

    Prices climb by 0.5 per row from an open of 100; volume climbs by 100.
    """
    rows: list[list[str]] = []
    date = first
    step = 0
    while date <= last:
        if date.is_weekday:
            base = Decimal("100") + Decimal("0.5") * step
            row = [date.key, str(base), str(base + 2), str(base - 1), str(base + 1)]
            if with_volume:
                row.append(str(1000 + 100 * step))
            rows.append(row)
            step += 1
        date = add_days(date, 1)
    return rows


@pytest.fixture
def chart_settings() -> ChartSettings:
    """ChartSettings with test defaults (DEBUG logging, ps output)."""
    return ChartSettings(log_level="DEBUG")


@pytest.fixture
def quarter_series() -> SeriesData:
    """Weekday prices and volumes for the first quarter of 2002."""
    return ingest_rows(make_rows(CalendarDate(2002, 1, 1), CalendarDate(2002, 3, 29)))


@pytest.fixture
def quote_rows():
    """Factory building weekday quote rows (see make_rows)."""
    return make_rows
