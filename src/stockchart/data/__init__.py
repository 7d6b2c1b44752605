"""Series data: typed records, row ingestion, CSV loading and slot averaging."""

from stockchart.data.aggregate import aggregate_records, average_records, mean
from stockchart.data.ingest import ingest_rows, parse_row
from stockchart.data.models import PriceQuad, SeriesData, TradingRecord
from stockchart.data.reader import read_csv, read_rows

__all__ = [
    "PriceQuad",
    "SeriesData",
    "TradingRecord",
    "aggregate_records",
    "average_records",
    "ingest_rows",
    "mean",
    "parse_row",
    "read_csv",
    "read_rows",
]
