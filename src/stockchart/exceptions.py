"""Exceptions raised while reading series data and building charts.

Every failure here is fatal to the chart being built: the input is unusable
rather than transiently unavailable, so callers should not retry.
"""


class ChartError(Exception):
    """Base exception for all chart errors."""


class DateError(ChartError, ValueError):
    """Base for date strings or triples that cannot become a CalendarDate."""


class InvalidDate(DateError):
    """Raised when a year/month/day combination does not exist (e.g. Feb 30)."""


class UnrecognizedDateFormat(DateError):
    """Raised when a date string matches none of the supported conventions."""


class EmptyDataset(ChartError):
    """Raised when no input row yields a valid date."""


class NoUsableData(ChartError):
    """Raised when dated rows exist but none carries a price or a volume."""


#: Name used by the axis compactor and chart assembler for the same failure.
NoPriceOrVolumeData = NoUsableData
