"""Tests for date-axis compaction across every granularity."""

import pytest

from stockchart.axis import LabelPolicy, calendar_days, compact
from stockchart.dates import CalendarDate, add_days, delta_days
from stockchart.exceptions import NoPriceOrVolumeData
from stockchart.models import Granularity


def _known(*keys: str) -> dict[str, object]:
    """Record mapping in which only the presence of a key matters."""
    return {key: object() for key in keys}


JAN_1 = CalendarDate(2002, 1, 1)
JAN_7 = CalendarDate(2002, 1, 7)


class TestCalendarDays:
    """calendar_days visits every date once, inclusive of both ends."""

    def test_inclusive_range(self) -> None:
        days = list(calendar_days(JAN_1, JAN_7))
        assert days[0] == JAN_1
        assert days[-1] == JAN_7
        assert len(days) == 7

    def test_single_day(self) -> None:
        assert list(calendar_days(JAN_1, JAN_1)) == [JAN_1]


class TestEveryDay:
    """One slot per calendar day, placeholders unlabelled."""

    def test_scenario_first_week_of_2002(self) -> None:
        axis = compact(_known("2002-01-01", "2002-01-04"), JAN_1, JAN_7, Granularity.EVERY_DAY)

        assert len(axis) == 7
        assert axis.labels == ["Tue 1 Jan 2002", "", "", "Fri 4", "", "", ""]
        assert [s.known for s in axis.slots] == [True, False, False, True, False, False, False]
        assert axis.label_max_length == len("Tue 1 Jan 2002")

    def test_slot_per_day_in_order(self) -> None:
        first = CalendarDate(2001, 12, 20)
        last = CalendarDate(2002, 3, 10)
        axis = compact(_known("2002-01-15"), first, last, Granularity.EVERY_DAY)

        assert len(axis) == delta_days(first, last) + 1
        assert [s.date for s in axis.slots] == [add_days(first, i) for i in range(len(axis))]
        assert [s.index for s in axis.slots] == list(range(len(axis)))

    def test_placeholder_label_suppression_uses_last_labelled_slot(self) -> None:
        axis = compact(_known("2002-01-31", "2002-02-04"), CalendarDate(2002, 1, 31), CalendarDate(2002, 2, 4), Granularity.EVERY_DAY)
        assert axis.labels == ["Thu 31 Jan 2002", "", "", "", "Mon 4 Feb"]


class TestRawData:
    """Known dates only, gaps closed up."""

    def test_slot_per_known_date(self) -> None:
        keys = ("2002-01-02", "2002-01-03", "2002-01-07", "2002-02-11")
        axis = compact(_known(*keys), CalendarDate(2002, 1, 2), CalendarDate(2002, 2, 11), Granularity.RAW_DATA)

        assert [s.date.key for s in axis.slots] == list(keys)
        assert all(s.known for s in axis.slots)
        assert axis.labels == ["Wed 2 Jan 2002", "Thu 3", "Mon 7", "11 Feb"]

    def test_weekend_records_kept(self) -> None:
        axis = compact(_known("2002-01-05", "2002-01-06"), CalendarDate(2002, 1, 5), CalendarDate(2002, 1, 6), Granularity.RAW_DATA)
        assert len(axis) == 2

    def test_month_not_repeated(self) -> None:
        keys = [f"2002-03-{day:02d}" for day in range(4, 30) if CalendarDate(2002, 3, day).is_weekday]
        axis = compact(_known(*keys), CalendarDate(2002, 3, 4), CalendarDate(2002, 3, 29), Granularity.RAW_DATA)

        assert "Mar" in axis.labels[0]
        assert all("Mar" not in label for label in axis.labels[1:])


class TestEveryWeekday:
    """Weekdays only; weekend dates appear nowhere."""

    def test_weekends_skipped(self) -> None:
        axis = compact(_known("2002-01-02"), JAN_1, CalendarDate(2002, 1, 14), Granularity.EVERY_WEEKDAY)

        assert len(axis) == 10
        assert all(s.date.is_weekday for s in axis.slots)
        assert axis.slot_index("2002-01-05") is None
        assert axis.labels[1] == "Wed 2 Jan 2002"
        assert axis.labels[0] == ""


class TestWeeklySlot:
    """Runs of weekdays, closed when the weekday number fails to increase."""

    def test_scenario_placeholder_week_then_known_wednesday(self) -> None:
        axis = compact(_known("2002-01-16"), JAN_7, CalendarDate(2002, 1, 18), Granularity.WEEKLY_SLOT)

        assert len(axis) == 2
        placeholder, known = axis.slots
        assert placeholder.date == CalendarDate(2002, 1, 11)
        assert not placeholder.known
        assert placeholder.label == ""
        assert known.date == CalendarDate(2002, 1, 16)
        assert known.known
        assert known.label == "16 Jan 2002"

    def test_known_beats_later_placeholder(self) -> None:
        axis = compact(_known("2002-01-07", "2002-01-08"), JAN_7, CalendarDate(2002, 1, 11), Granularity.WEEKLY_SLOT)
        assert [s.date.key for s in axis.slots] == ["2002-01-08"]
        assert axis.slots[0].known

    def test_runs_with_known_dates_resolve_to_known(self) -> None:
        keys = ("2002-01-02", "2002-01-09", "2002-01-10", "2002-01-28", "2002-02-13")
        axis = compact(_known(*keys), JAN_1, CalendarDate(2002, 2, 15), Granularity.WEEKLY_SLOT)

        for slot in axis.slots:
            if any(member.key in keys for member in slot.members):
                assert slot.known
                assert slot.date.key in keys
            else:
                assert not slot.known

    def test_member_dates_map_to_their_slot(self) -> None:
        axis = compact(_known("2002-01-16"), JAN_7, CalendarDate(2002, 1, 18), Granularity.WEEKLY_SLOT)

        assert axis.slot_index("2002-01-07") == 0
        assert axis.slot_index("2002-01-11") == 0
        assert axis.slot_index("2002-01-14") == 1
        assert axis.slot_index("2002-01-18") == 1
        assert axis.slot_index("2002-01-12") is None

    def test_range_starting_friday_closes_at_monday(self) -> None:
        """A run of one Friday closes when Monday follows."""
        axis = compact(_known("2002-01-04", "2002-01-08"), CalendarDate(2002, 1, 4), CalendarDate(2002, 1, 8), Granularity.WEEKLY_SLOT)

        assert [s.date.key for s in axis.slots] == ["2002-01-04", "2002-01-08"]
        assert [len(s.members) for s in axis.slots] == [1, 2]

    def test_trailing_run_flushed(self) -> None:
        axis = compact(_known("2002-01-07", "2002-01-15"), JAN_7, CalendarDate(2002, 1, 16), Granularity.WEEKLY_SLOT)
        assert [s.date.key for s in axis.slots] == ["2002-01-07", "2002-01-15"]

    def test_trailing_run_without_known_dates(self) -> None:
        axis = compact(_known("2002-01-07"), JAN_7, CalendarDate(2002, 1, 16), Granularity.WEEKLY_SLOT)
        assert axis.slots[-1].date == CalendarDate(2002, 1, 16)
        assert not axis.slots[-1].known

    def test_labels_drop_repeated_month(self) -> None:
        axis = compact(_known("2002-01-09", "2002-01-16", "2002-02-06"), JAN_7, CalendarDate(2002, 2, 8), Granularity.WEEKLY_SLOT)
        known_labels = [s.label for s in axis.slots if s.known]
        assert known_labels == ["9 Jan 2002", "16", "6 Feb"]


class TestMonthlySlot:
    """Runs closed when the day of month fails to increase."""

    def test_one_slot_per_month(self) -> None:
        axis = compact(
            _known("2002-01-29", "2002-02-04"),
            CalendarDate(2002, 1, 28),
            CalendarDate(2002, 2, 5),
            Granularity.MONTHLY_SLOT,
        )
        assert [s.date.key for s in axis.slots] == ["2002-01-29", "2002-02-04"]
        assert axis.labels == ["Jan 2002", "Feb"]

    def test_month_without_data_is_placeholder(self) -> None:
        axis = compact(
            _known("2002-01-15", "2002-03-15"),
            CalendarDate(2002, 1, 15),
            CalendarDate(2002, 3, 15),
            Granularity.MONTHLY_SLOT,
        )
        assert len(axis) == 3
        assert not axis.slots[1].known
        assert axis.slots[1].date == CalendarDate(2002, 2, 28)
        assert axis.labels == ["Jan 2002", "", "Mar"]


class TestCompactFailures:
    """Empty record sets and reversed ranges are rejected."""

    def test_no_records(self) -> None:
        with pytest.raises(NoPriceOrVolumeData):
            compact({}, JAN_1, JAN_7, Granularity.EVERY_DAY)

    def test_reversed_range(self) -> None:
        with pytest.raises(ValueError):
            compact(_known("2002-01-01"), JAN_7, JAN_1, Granularity.EVERY_DAY)


class TestLabelPolicyOverrides:
    """A caller-supplied policy replaces the granularity defaults."""

    def test_show_all_components(self) -> None:
        policy = LabelPolicy.for_granularity(Granularity.RAW_DATA, show_all_components=True)
        axis = compact(_known("2002-01-02", "2002-01-03"), CalendarDate(2002, 1, 2), CalendarDate(2002, 1, 3), Granularity.RAW_DATA, policy)
        assert axis.labels == ["Wed 2 Jan 2002", "Thu 3 Jan 2002"]

    def test_label_max_length_tracks_longest(self) -> None:
        policy = LabelPolicy.for_granularity(Granularity.RAW_DATA, show_weekday=False)
        axis = compact(_known("2002-01-02", "2002-01-03"), CalendarDate(2002, 1, 2), CalendarDate(2002, 1, 3), Granularity.RAW_DATA, policy)
        assert axis.labels == ["2 Jan 2002", "3"]
        assert axis.label_max_length == len("2 Jan 2002")
