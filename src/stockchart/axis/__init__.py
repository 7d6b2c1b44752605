"""Date axis: slot compaction, label construction and label density.

Provides the compactor that maps an irregular set of trading dates to evenly
spaced slots, the change-only label builder, and the density filter that
decides which labels fit.
"""

from stockchart.axis.compactor import calendar_days, compact
from stockchart.axis.density import filter_label_density
from stockchart.axis.labels import DateComponents, LabelPolicy, build_label
from stockchart.axis.models import AxisSlot, CompactAxis, TickLabel

__all__ = [
    "AxisSlot",
    "CompactAxis",
    "DateComponents",
    "LabelPolicy",
    "TickLabel",
    "build_label",
    "calendar_days",
    "compact",
    "filter_label_density",
]
