"""Shared enumerations for axis layout and price marks."""

from enum import Enum


class Granularity(str, Enum):
    """How trading dates are laid out as slots on the date axis."""

    RAW_DATA = "data"  # one slot per known date, gaps closed up
    EVERY_DAY = "days"  # every calendar day between first and last date
    EVERY_WEEKDAY = "weekdays"  # Monday to Friday only
    WEEKLY_SLOT = "weeks"  # one slot per run of weekdays
    MONTHLY_SLOT = "months"  # one slot per run of days within a month


class PriceShape(str, Enum):
    """Mark drawn for each price quad on the price panel."""

    STOCK = "stock"  # open tick left, high-low bar, close tick right
    STOCK2 = "stock2"  # as STOCK, drawn over a contrasting outline
    CLOSE = "close"  # close tick only
    CLOSE2 = "close2"  # as CLOSE, drawn over a contrasting outline
    CANDLE = "candle"  # filled open-close body with high-low wick

    @property
    def outlined(self) -> bool:
        """True for the two-colour variants."""
        return self in (PriceShape.STOCK2, PriceShape.CLOSE2)
