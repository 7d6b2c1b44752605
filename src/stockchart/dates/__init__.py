"""Calendar dates: validated triples, day arithmetic and string decoding."""

from stockchart.dates.calendar import (
    CalendarDate,
    add_days,
    day_of_week,
    delta_days,
    format_date,
    from_ordinal,
    to_ordinal,
)
from stockchart.dates.parsing import coerce_date, month_from_name, parse_date

__all__ = [
    "CalendarDate",
    "add_days",
    "coerce_date",
    "day_of_week",
    "delta_days",
    "format_date",
    "from_ordinal",
    "month_from_name",
    "parse_date",
    "to_ordinal",
]
