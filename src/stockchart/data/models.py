"""Data models for ingested price and volume series.

CRITICAL: All price and volume values use Decimal. Conversion to float happens
only at the rendering boundary (stockchart.chart.paper).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from stockchart.dates import CalendarDate
from stockchart.exceptions import NoUsableData


@dataclass(frozen=True)
class PriceQuad:
    """Open, high, low and close prices for one date."""

    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal

    @property
    def lowest(self) -> Decimal:
        return min(self.open, self.high, self.low, self.close)

    @property
    def highest(self) -> Decimal:
        return max(self.open, self.high, self.low, self.close)


@dataclass(frozen=True)
class TradingRecord:
    """Price and/or volume recorded for a single date.

    Raises:
        ValueError: If neither a price nor a volume is given.
    """

    date: CalendarDate
    price: PriceQuad | None = None
    volume: Decimal | None = None

    def __post_init__(self) -> None:
        if self.price is None and self.volume is None:
            raise ValueError(f"Record for {self.date} has neither price nor volume")


@dataclass
class SeriesData:
    """Ingested series: records keyed by ``YYYY-MM-DD`` plus their extents.

    Attributes:
        records: Mapping of date key to record, in chronological order.
        price_range: (lowest, highest) over every price quad, None without prices.
        volume_range: (lowest, highest) volume, None without volumes.
        first_date: Earliest record date.
        last_date: Latest record date.
    """

    records: dict[str, TradingRecord]
    price_range: tuple[Decimal, Decimal] | None
    volume_range: tuple[Decimal, Decimal] | None
    first_date: CalendarDate
    last_date: CalendarDate

    @property
    def has_price(self) -> bool:
        return self.price_range is not None

    @property
    def has_volume(self) -> bool:
        return self.volume_range is not None

    @classmethod
    def from_records(cls, records: Iterable[TradingRecord]) -> "SeriesData":
        """Index records by date and compute the price and volume extents.

        Raises:
            NoUsableData: If ``records`` is empty.
        """
        ordered = sorted(records, key=lambda r: r.date)
        if not ordered:
            raise NoUsableData("No price or volume data")

        prices = [r.price for r in ordered if r.price is not None]
        volumes = [r.volume for r in ordered if r.volume is not None]

        price_range = None
        if prices:
            price_range = (min(p.lowest for p in prices), max(p.highest for p in prices))

        volume_range = None
        if volumes:
            volume_range = (min(volumes), max(volumes))

        return cls(
            records={r.date.key: r for r in ordered},
            price_range=price_range,
            volume_range=volume_range,
            first_date=ordered[0].date,
            last_date=ordered[-1].date,
        )
