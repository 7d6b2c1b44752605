"""Stock price and volume charts on a compacted date axis."""

from stockchart.chart import LineStyle, StockChart
from stockchart.config import ChartSettings
from stockchart.models import Granularity, PriceShape

__all__ = [
    "ChartSettings",
    "Granularity",
    "LineStyle",
    "PriceShape",
    "StockChart",
]
