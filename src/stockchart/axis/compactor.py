"""Date-axis compaction: turn an irregular set of trading dates into slots.

Every calendar day from ``first`` to ``last`` is visited once. The
granularity decides which days become slots:

- RAW_DATA: known dates only, gaps closed up.
- EVERY_DAY: every day; unknown days are unlabelled placeholders.
- EVERY_WEEKDAY: Monday to Friday; unknown weekdays are placeholders.
- WEEKLY_SLOT / MONTHLY_SLOT: weekdays are grouped into runs and each run
  becomes one slot when it closes.

A weekly run closes when the weekday number fails to increase; a monthly run
when the day of month fails to increase. Both compare against the previous
weekday visited and ignore weekends. A run is represented by its latest
known date, or by its latest weekday when none is known: known beats
unknown even if the placeholder is later in the run. A run still open when
the range ends is flushed the same way.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

from stockchart.axis.labels import DateComponents, LabelPolicy, build_label
from stockchart.axis.models import AxisSlot, CompactAxis
from stockchart.dates import CalendarDate, add_days, delta_days
from stockchart.exceptions import NoPriceOrVolumeData
from stockchart.logging import get_logger
from stockchart.models import Granularity

logger = get_logger(__name__)


@dataclass(frozen=True)
class _SlotChoice:
    """A date selected to become a slot, with the dates it stands for."""

    date: CalendarDate
    known: bool
    members: tuple[CalendarDate, ...]


def calendar_days(first: CalendarDate, last: CalendarDate) -> Iterator[CalendarDate]:
    """Yield every date from ``first`` to ``last`` inclusive."""
    for offset in range(delta_days(first, last) + 1):
        yield add_days(first, offset)


def _single(date: CalendarDate, known: bool) -> _SlotChoice:
    return _SlotChoice(date=date, known=known, members=(date,))


def _raw_data_slots(days: Iterator[CalendarDate], known: Mapping[str, object]) -> Iterator[_SlotChoice]:
    for date in days:
        if date.key in known:
            yield _single(date, True)


def _every_day_slots(days: Iterator[CalendarDate], known: Mapping[str, object]) -> Iterator[_SlotChoice]:
    for date in days:
        yield _single(date, date.key in known)


def _every_weekday_slots(days: Iterator[CalendarDate], known: Mapping[str, object]) -> Iterator[_SlotChoice]:
    for date in days:
        if date.is_weekday:
            yield _single(date, date.key in known)


def _close_run(run: list[CalendarDate], latest_known: CalendarDate | None) -> _SlotChoice:
    if latest_known is not None:
        return _SlotChoice(date=latest_known, known=True, members=tuple(run))
    return _SlotChoice(date=run[-1], known=False, members=tuple(run))


def _run_slots(
    days: Iterator[CalendarDate],
    known: Mapping[str, object],
    marker: Callable[[CalendarDate], int],
) -> Iterator[_SlotChoice]:
    """Group weekdays into runs that close when ``marker`` fails to increase."""
    run: list[CalendarDate] = []
    latest_known: CalendarDate | None = None
    previous_marker: int | None = None

    for date in days:
        if not date.is_weekday:
            continue
        current = marker(date)
        if previous_marker is not None and current <= previous_marker:
            yield _close_run(run, latest_known)
            run, latest_known = [], None
        run.append(date)
        if date.key in known:
            latest_known = date
        previous_marker = current

    if run:
        yield _close_run(run, latest_known)


def _weekly_slots(days: Iterator[CalendarDate], known: Mapping[str, object]) -> Iterator[_SlotChoice]:
    return _run_slots(days, known, marker=lambda d: d.weekday)


def _monthly_slots(days: Iterator[CalendarDate], known: Mapping[str, object]) -> Iterator[_SlotChoice]:
    return _run_slots(days, known, marker=lambda d: d.day)


_SELECTORS: dict[
    Granularity,
    Callable[[Iterator[CalendarDate], Mapping[str, object]], Iterator[_SlotChoice]],
] = {
    Granularity.RAW_DATA: _raw_data_slots,
    Granularity.EVERY_DAY: _every_day_slots,
    Granularity.EVERY_WEEKDAY: _every_weekday_slots,
    Granularity.WEEKLY_SLOT: _weekly_slots,
    Granularity.MONTHLY_SLOT: _monthly_slots,
}


def compact(
    records: Mapping[str, object],
    first: CalendarDate,
    last: CalendarDate,
    granularity: Granularity,
    policy: LabelPolicy | None = None,
) -> CompactAxis:
    """Lay the dates from ``first`` to ``last`` out as axis slots.

    Args:
        records: Mapping keyed by ``YYYY-MM-DD``; a key's presence makes that
            date known. Values are not inspected.
        first: First date of the range.
        last: Last date of the range, inclusive.
        granularity: Slot selection policy.
        policy: Label components to show. Defaults to the granularity defaults.

    Returns:
        CompactAxis with slots, parallel labels, the date-to-slot index and
        the longest label length.

    Raises:
        NoPriceOrVolumeData: If ``records`` is empty.
        ValueError: If ``last`` precedes ``first``.
    """
    if not records:
        raise NoPriceOrVolumeData("No price or volume data")
    if last < first:
        raise ValueError(f"Last date {last} precedes first date {first}")
    if policy is None:
        policy = LabelPolicy.for_granularity(granularity)

    slots: list[AxisSlot] = []
    labels: list[str] = []
    index_of: dict[str, int] = {}
    previous: DateComponents | None = None
    label_max_length = 0

    for choice in _SELECTORS[granularity](calendar_days(first, last), records):
        label = ""
        if choice.known:
            label = build_label(choice.date, previous, policy)
            if label:
                previous = policy.components(choice.date)
        label_max_length = max(label_max_length, len(label))

        index = len(slots)
        slots.append(
            AxisSlot(
                index=index,
                date=choice.date,
                known=choice.known,
                label=label,
                members=choice.members,
            )
        )
        labels.append(label)
        for member in choice.members:
            index_of[member.key] = index
        index_of[choice.date.key] = index

    logger.debug(
        "axis_compacted",
        granularity=granularity.value,
        first_date=first.key,
        last_date=last.key,
        slots=len(slots),
        known_slots=sum(1 for s in slots if s.known),
        label_max_length=label_max_length,
    )

    return CompactAxis(
        granularity=granularity,
        slots=slots,
        labels=labels,
        date_to_slot_index=index_of,
        label_max_length=label_max_length,
    )
