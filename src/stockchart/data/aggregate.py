"""Per-slot averaging of records for weekly and monthly axes.

When a weekly or monthly slot stands for several trading days, the values
drawn at the slot are the averages over its known member dates, filed under
the slot's representative date. Each price component is averaged on its own.

CRITICAL: All computations use Decimal. Never use float.
"""

from decimal import Decimal

from stockchart.axis.models import CompactAxis
from stockchart.data.models import PriceQuad, SeriesData, TradingRecord
from stockchart.models import Granularity

#: Precision of averaged prices and volumes (6 decimal places).
_AVERAGE_QUANTIZE = Decimal("0.000001")

_PERIOD_GRANULARITIES = (Granularity.WEEKLY_SLOT, Granularity.MONTHLY_SLOT)


def mean(values: list[Decimal]) -> Decimal:
    """Average of ``values`` (at least one), quantized to 6 decimal places."""
    return (sum(values, Decimal("0")) / Decimal(len(values))).quantize(_AVERAGE_QUANTIZE)


def average_records(records: list[TradingRecord], representative: TradingRecord) -> TradingRecord:
    """Average the prices and volumes of ``records`` under one date.

    Args:
        records: Records of one slot (at least one).
        representative: Record whose date the average is filed under.

    Returns:
        A record carrying whichever of price and volume the inputs carry.
    """
    prices = [r.price for r in records if r.price is not None]
    volumes = [r.volume for r in records if r.volume is not None]

    price = None
    if prices:
        price = PriceQuad(
            open=mean([p.open for p in prices]),
            high=mean([p.high for p in prices]),
            low=mean([p.low for p in prices]),
            close=mean([p.close for p in prices]),
        )
    volume = mean(volumes) if volumes else None
    return TradingRecord(date=representative.date, price=price, volume=volume)


def aggregate_records(series: SeriesData, axis: CompactAxis) -> dict[str, TradingRecord]:
    """Return the records to draw, one per known slot date.

    Per-day granularities return the records unchanged. Weekly and monthly
    axes get one averaged record per known slot; records on dates no slot
    covers (weekends) are left out.
    """
    if axis.granularity not in _PERIOD_GRANULARITIES:
        return dict(series.records)

    aggregated: dict[str, TradingRecord] = {}
    for slot in axis.slots:
        if not slot.known:
            continue
        members = [series.records[d.key] for d in slot.members if d.key in series.records]
        aggregated[slot.date.key] = average_records(members, series.records[slot.date.key])
    return aggregated
