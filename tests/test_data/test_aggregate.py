"""Tests for averaging records into weekly and monthly slots."""

from decimal import Decimal

from stockchart.axis import compact
from stockchart.data import PriceQuad, TradingRecord, aggregate_records, average_records, ingest_rows
from stockchart.dates import CalendarDate
from stockchart.models import Granularity


def _quad(open_: str, high: str, low: str, close: str) -> PriceQuad:
    return PriceQuad(Decimal(open_), Decimal(high), Decimal(low), Decimal(close))


class TestAverageRecords:
    """Each component averages independently under the representative date."""

    def test_price_and_volume(self) -> None:
        monday = TradingRecord(CalendarDate(2002, 1, 7), _quad("10", "12", "9", "11"), Decimal("100"))
        wednesday = TradingRecord(CalendarDate(2002, 1, 9), _quad("12", "14", "11", "13"), Decimal("200"))

        result = average_records([monday, wednesday], wednesday)

        assert result.date == CalendarDate(2002, 1, 9)
        assert result.price == _quad("11", "13", "10", "12")
        assert result.volume == Decimal("150")

    def test_volume_missing_on_some_days(self) -> None:
        first = TradingRecord(CalendarDate(2002, 1, 7), _quad("10", "10", "10", "10"))
        second = TradingRecord(CalendarDate(2002, 1, 8), _quad("11", "11", "11", "11"), Decimal("300"))

        result = average_records([first, second], second)

        assert result.volume == Decimal("300")
        assert result.price is not None
        assert result.price.close == Decimal("10.5")

    def test_repeating_fraction_is_quantized(self) -> None:
        records = [
            TradingRecord(CalendarDate(2002, 1, d), volume=Decimal(v))
            for d, v in ((7, "1"), (8, "1"), (9, "2"))
        ]
        result = average_records(records, records[-1])
        assert result.volume == Decimal("1.333333")
        assert result.price is None


class TestAggregateRecords:
    """Test slot-level aggregation against a compacted axis."""

    def test_per_day_granularities_unchanged(self) -> None:
        series = ingest_rows([["2002-01-07", "100"], ["2002-01-08", "200"]])
        axis = compact(series.records, series.first_date, series.last_date, Granularity.EVERY_WEEKDAY)
        assert aggregate_records(series, axis) == series.records

    def test_weekly_average_filed_under_latest_known(self) -> None:
        series = ingest_rows(
            [
                ["2002-01-07", "10", "12", "9", "11", "100"],
                ["2002-01-09", "12", "14", "11", "13", "200"],
                ["2002-01-14", "20", "22", "19", "21", "50"],
            ]
        )
        axis = compact(series.records, series.first_date, series.last_date, Granularity.WEEKLY_SLOT)

        result = aggregate_records(series, axis)

        assert list(result) == ["2002-01-09", "2002-01-14"]
        assert result["2002-01-09"].price == _quad("11", "13", "10", "12")
        assert result["2002-01-09"].volume == Decimal("150")
        assert result["2002-01-14"].volume == Decimal("50")

    def test_weekend_records_left_out(self) -> None:
        series = ingest_rows(
            [
                ["2002-01-10", "100"],
                ["2002-01-12", "900"],
                ["2002-01-14", "300"],
            ]
        )
        axis = compact(series.records, series.first_date, series.last_date, Granularity.WEEKLY_SLOT)

        result = aggregate_records(series, axis)

        assert list(result) == ["2002-01-10", "2002-01-14"]
        assert result["2002-01-10"].volume == Decimal("100")

    def test_monthly_average(self) -> None:
        series = ingest_rows(
            [
                ["2002-01-30", "100"],
                ["2002-01-31", "300"],
                ["2002-02-01", "500"],
            ]
        )
        axis = compact(series.records, series.first_date, series.last_date, Granularity.MONTHLY_SLOT)

        result = aggregate_records(series, axis)

        assert list(result) == ["2002-01-31", "2002-02-01"]
        assert result["2002-01-31"].volume == Decimal("200")
