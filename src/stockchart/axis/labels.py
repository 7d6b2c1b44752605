"""Date label construction with change-only component suppression.

A label is built from up to four components, always in the order weekday,
day of month, month name, year. A component appears when the policy shows
it and, unless ``show_all_components`` is set, its value differs from the
same component of the last slot that received a non-empty label. A run of
daily labels therefore reads ``Tue 1 Jan 2002``, ``Wed 2``, ``Thu 3``...
"""

from dataclasses import dataclass
from typing import NamedTuple

from stockchart.dates import CalendarDate
from stockchart.models import Granularity

DEFAULT_WEEKDAY_NAMES: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
DEFAULT_MONTH_NAMES: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

#: (weekday, day, month, year) visibility per granularity.
_COMPONENT_DEFAULTS: dict[Granularity, tuple[bool, bool, bool, bool]] = {
    Granularity.RAW_DATA: (True, True, True, True),
    Granularity.EVERY_DAY: (True, True, True, True),
    Granularity.EVERY_WEEKDAY: (True, True, True, True),
    Granularity.WEEKLY_SLOT: (False, True, True, True),
    Granularity.MONTHLY_SLOT: (False, False, True, True),
}


class DateComponents(NamedTuple):
    """Display text of each label component for one date."""

    weekday: str
    day: str
    month: str
    year: str


@dataclass(frozen=True)
class LabelPolicy:
    """Which label components to show and how to name them.

    Attributes:
        show_weekday: Include the weekday name.
        show_day: Include the day of month.
        show_month: Include the month name.
        show_year: Include the four-digit year.
        show_all_components: Disable change-only suppression.
        weekday_names: Seven names, Monday first.
        month_names: Twelve names, January first.

    Raises:
        ValueError: If a name table has the wrong length.
    """

    show_weekday: bool = True
    show_day: bool = True
    show_month: bool = True
    show_year: bool = True
    show_all_components: bool = False
    weekday_names: tuple[str, ...] = DEFAULT_WEEKDAY_NAMES
    month_names: tuple[str, ...] = DEFAULT_MONTH_NAMES

    def __post_init__(self) -> None:
        if len(self.weekday_names) != 7:
            raise ValueError(f"Expected 7 weekday names, got {len(self.weekday_names)}")
        if len(self.month_names) != 12:
            raise ValueError(f"Expected 12 month names, got {len(self.month_names)}")

    @classmethod
    def for_granularity(
        cls,
        granularity: Granularity,
        *,
        show_weekday: bool | None = None,
        show_day: bool | None = None,
        show_month: bool | None = None,
        show_year: bool | None = None,
        show_all_components: bool = False,
        weekday_names: tuple[str, ...] | None = None,
        month_names: tuple[str, ...] | None = None,
    ) -> "LabelPolicy":
        """Build a policy from the granularity defaults plus explicit overrides.

        Per-day granularities show all four components, weekly slots drop the
        weekday (always the same day) and monthly slots drop weekday and day.
        A None override keeps the default.
        """
        weekday, day, month, year = _COMPONENT_DEFAULTS[granularity]
        return cls(
            show_weekday=weekday if show_weekday is None else show_weekday,
            show_day=day if show_day is None else show_day,
            show_month=month if show_month is None else show_month,
            show_year=year if show_year is None else show_year,
            show_all_components=show_all_components,
            weekday_names=tuple(weekday_names or DEFAULT_WEEKDAY_NAMES),
            month_names=tuple(month_names or DEFAULT_MONTH_NAMES),
        )

    @property
    def flags(self) -> tuple[bool, bool, bool, bool]:
        return (self.show_weekday, self.show_day, self.show_month, self.show_year)

    def components(self, date: CalendarDate) -> DateComponents:
        """Return the display text of every component of ``date``."""
        return DateComponents(
            weekday=self.weekday_names[date.weekday - 1],
            day=str(date.day),
            month=self.month_names[date.month - 1],
            year=f"{date.year:04d}",
        )


def build_label(
    date: CalendarDate,
    previous: DateComponents | None,
    policy: LabelPolicy,
) -> str:
    """Assemble the label for ``date``.

    Args:
        date: Date being labelled.
        previous: Components of the last slot given a non-empty label, or
            None when nothing has been labelled yet.
        policy: Component visibility and name tables.

    Returns:
        Space-separated components, possibly empty.
    """
    current = policy.components(date)
    parts: list[str] = []
    for index, shown in enumerate(policy.flags):
        if not shown:
            continue
        if policy.show_all_components or previous is None or current[index] != previous[index]:
            parts.append(current[index])
    return " ".join(parts).rstrip()
