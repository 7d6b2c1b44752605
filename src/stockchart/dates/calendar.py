"""Calendar arithmetic over (year, month, day) triples.

CalendarDate is backed by the proleptic Gregorian ordinal used by
``datetime.date``: comparisons, differences and day offsets are integer
operations on that ordinal. The canonical string form ``YYYY-MM-DD`` is the
key used for every date-indexed mapping in the package.
"""

from dataclasses import dataclass
from datetime import date

from stockchart.exceptions import InvalidDate

#: ISO day numbers, Monday first.
MONDAY = 1
FRIDAY = 5
SUNDAY = 7


@dataclass(frozen=True, order=True)
class CalendarDate:
    """An immutable, validated calendar date.

    Field order makes the dataclass ordering chronological.

    Raises:
        InvalidDate: If the triple does not name a real day (e.g. 2002-02-30).
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        try:
            date(self.year, self.month, self.day)
        except (TypeError, ValueError) as e:
            raise InvalidDate(
                f"{self.year}-{self.month}-{self.day} is not a calendar date"
            ) from e

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        """Build from a ``datetime.date`` (or ``datetime``, time dropped)."""
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def ordinal(self) -> int:
        """Day count with 0001-01-01 as day 1."""
        return self.to_date().toordinal()

    @property
    def weekday(self) -> int:
        """ISO day of week, Monday=1 .. Sunday=7."""
        return self.to_date().isoweekday()

    @property
    def is_weekday(self) -> bool:
        return self.weekday <= FRIDAY

    @property
    def key(self) -> str:
        """Canonical ``YYYY-MM-DD`` string."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.key


def to_ordinal(value: CalendarDate) -> int:
    """Return the ordinal day count for a date."""
    return value.ordinal


def from_ordinal(ordinal: int) -> CalendarDate:
    """Return the date for an ordinal day count.

    Raises:
        InvalidDate: If the ordinal falls outside years 1-9999.
    """
    try:
        return CalendarDate.from_date(date.fromordinal(ordinal))
    except (ValueError, OverflowError) as e:
        raise InvalidDate(f"Ordinal {ordinal} is outside the calendar") from e


def day_of_week(value: CalendarDate) -> int:
    """Return the ISO day of week (Monday=1 .. Sunday=7)."""
    return value.weekday


def add_days(value: CalendarDate, days: int) -> CalendarDate:
    """Return the date ``days`` after ``value`` (negative moves backwards)."""
    return from_ordinal(value.ordinal + days)


def delta_days(first: CalendarDate, second: CalendarDate) -> int:
    """Return the signed number of days from ``first`` to ``second``."""
    return second.ordinal - first.ordinal


def format_date(value: CalendarDate) -> str:
    """Return the canonical ``YYYY-MM-DD`` form of a date."""
    return value.key
