"""Data models for the compacted date axis."""

from dataclasses import dataclass

from stockchart.dates import CalendarDate
from stockchart.models import Granularity


@dataclass(frozen=True)
class AxisSlot:
    """One evenly spaced position on the date axis.

    Attributes:
        index: Zero-based position, increasing with ``date``.
        date: The date the slot is bound to.
        known: True if a trading record exists for ``date``; False for a
            placeholder filling a gap.
        label: Display text, empty for placeholders and fully suppressed labels.
        members: Dates the slot stands for. A single date for the per-day
            granularities, every weekday of the run for weekly and monthly slots.
    """

    index: int
    date: CalendarDate
    known: bool
    label: str
    members: tuple[CalendarDate, ...]


@dataclass
class CompactAxis:
    """Result of compacting a date range into slots.

    ``labels`` parallels ``slots``. ``date_to_slot_index`` maps the key of
    every slot date and member date to the slot index.
    """

    granularity: Granularity
    slots: list[AxisSlot]
    labels: list[str]
    date_to_slot_index: dict[str, int]
    label_max_length: int

    def __len__(self) -> int:
        return len(self.slots)

    def slot_index(self, date_key: str) -> int | None:
        """Return the slot covering ``date_key``, None if it has no slot."""
        return self.date_to_slot_index.get(date_key)


@dataclass(frozen=True)
class TickLabel:
    """Density decision for one slot: a labelled tick or a bare one."""

    text: str
    shown: bool

    def blank(self) -> "TickLabel":
        """Same decision without text, for panels that share the axis."""
        return TickLabel(text="", shown=self.shown)
