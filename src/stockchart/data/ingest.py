"""Row ingestion: turn loosely typed quote rows into a SeriesData.

Accepted row shapes (first field always a date):

    date, volume
    date, open, high, low, close
    date, open, high, low, close, volume

A first row whose second field is not numeric is a header and is dropped.
Rows that cannot be read (bad date, wrong field count, non-numeric values)
are skipped and counted rather than failing the dataset.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation

from stockchart.data.models import PriceQuad, SeriesData, TradingRecord
from stockchart.dates import coerce_date
from stockchart.exceptions import DateError, EmptyDataset, NoUsableData, UnrecognizedDateFormat
from stockchart.logging import get_logger

logger = get_logger(__name__)


def _clean(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


def _is_blank(value: object) -> bool:
    if value is None or value == "":
        return True
    # pandas hands over NaN for missing cells
    return isinstance(value, float) and value != value


def to_decimal(value: object) -> Decimal:
    """Convert a cell to a finite Decimal.

    Raises:
        ValueError: If the cell is not a finite number.
    """
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def is_numeric(value: object) -> bool:
    """True if the cell holds a finite number."""
    if _is_blank(value):
        return False
    try:
        to_decimal(_clean(value))
    except ValueError:
        return False
    return True


def _optional_decimal(value: object) -> Decimal | None:
    if _is_blank(value):
        return None
    return to_decimal(value)


def _price_quad(values: Sequence[object]) -> PriceQuad | None:
    parsed = [_optional_decimal(v) for v in values]
    if all(p is None for p in parsed):
        return None
    if any(p is None for p in parsed):
        raise ValueError(f"Incomplete price quad: {list(values)!r}")
    open_, high, low, close = parsed
    return PriceQuad(open=open_, high=high, low=low, close=close)  # type: ignore[arg-type]


def parse_row(row: Sequence[object]) -> TradingRecord | None:
    """Read one row into a TradingRecord.

    Trailing blank cells are ignored, so a padded ``date, volume`` row still
    reads as two fields.

    Returns:
        The record, or None when the date is valid but no value is present.

    Raises:
        DateError: If the first field is not a readable date.
        ValueError: If the field count is unsupported or a value is not numeric.
    """
    fields = [_clean(v) for v in row]
    while fields and _is_blank(fields[-1]):
        fields.pop()
    if not fields:
        raise UnrecognizedDateFormat("Row has no date")

    date = coerce_date(fields[0])

    if len(fields) == 1:
        return None
    if len(fields) == 2:
        price, volume = None, _optional_decimal(fields[1])
    elif len(fields) == 5:
        price, volume = _price_quad(fields[1:5]), None
    elif len(fields) == 6:
        price, volume = _price_quad(fields[1:5]), _optional_decimal(fields[5])
    else:
        raise ValueError(f"Unsupported row with {len(fields)} fields")

    if price is None and volume is None:
        return None
    return TradingRecord(date=date, price=price, volume=volume)


def _is_header(row: Sequence[object]) -> bool:
    return len(row) < 2 or not is_numeric(_clean(row[1]))


def ingest_rows(rows: Iterable[Sequence[object]]) -> SeriesData:
    """Build a SeriesData from quote rows.

    A later row for a date already seen replaces the earlier record.

    Args:
        rows: Rows in any of the accepted shapes, optionally led by a header.

    Returns:
        SeriesData indexed by date key with price and volume extents.

    Raises:
        EmptyDataset: If no row yields a valid date.
        NoUsableData: If dated rows exist but none has a price or volume.
    """
    records: dict[str, TradingRecord] = {}
    dated_rows = 0
    skipped = 0
    first = True

    for number, row in enumerate(rows):
        if all(_is_blank(_clean(v)) for v in row):
            continue
        if first:
            first = False
            if _is_header(row):
                logger.debug("header_row_dropped", row=list(row))
                continue
        try:
            record = parse_row(row)
        except DateError as e:
            skipped += 1
            logger.debug("row_skipped", row_number=number, reason=str(e))
            continue
        except ValueError as e:
            dated_rows += 1
            skipped += 1
            logger.debug("row_skipped", row_number=number, reason=str(e))
            continue

        dated_rows += 1
        if record is not None:
            records[record.date.key] = record

    if dated_rows == 0:
        raise EmptyDataset("No row contains a valid date")
    if not records:
        raise NoUsableData("No price or volume data")

    series = SeriesData.from_records(records.values())
    logger.info(
        "rows_ingested",
        records=len(series.records),
        skipped=skipped,
        first_date=series.first_date.key,
        last_date=series.last_date.key,
        has_price=series.has_price,
        has_volume=series.has_volume,
    )
    return series
