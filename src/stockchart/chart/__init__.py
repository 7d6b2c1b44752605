"""Chart rendering: graph paper panels, line styles and the chart assembler."""

from stockchart.chart.paper import POINTS_PER_INCH, GraphPaper
from stockchart.chart.stock_chart import OUTPUT_FORMATS, OverlayLine, StockChart
from stockchart.chart.style import LineStyle, complement, to_rgb

__all__ = [
    "GraphPaper",
    "LineStyle",
    "OUTPUT_FORMATS",
    "OverlayLine",
    "POINTS_PER_INCH",
    "StockChart",
    "complement",
    "to_rgb",
]
