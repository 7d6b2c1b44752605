"""Label density filter: hide date labels that would overlap.

Walking the slots left to right, the pixel distance since the last shown
label is accumulated. A label is shown once at least ``label_font_half_width``
pixels have built up, which resets the distance; until then slots get a bare
tick. The accumulator starts at the half width so the first slot is always
labelled.

The decisions are computed once per chart and reused by every panel sharing
the axis, so all panels suppress the same slots.
"""

from collections.abc import Sequence

from stockchart.axis.models import TickLabel


def filter_label_density(
    labels: Sequence[str],
    slot_pixel_step: float,
    label_font_half_width: float,
) -> list[TickLabel]:
    """Decide which slot labels are drawn.

    Args:
        labels: Slot labels from the compactor, one per slot.
        slot_pixel_step: Pixel distance between adjacent slot ticks.
        label_font_half_width: Space a label needs before the next may show.

    Returns:
        One TickLabel per slot. Suppressed slots have empty text. The input
        sequence is left untouched.

    Raises:
        ValueError: If ``slot_pixel_step`` is not positive.
    """
    if slot_pixel_step <= 0:
        raise ValueError(f"slot_pixel_step must be positive, got {slot_pixel_step}")

    ticks: list[TickLabel] = []
    accumulated = label_font_half_width
    for text in labels:
        accumulated += slot_pixel_step
        if accumulated < label_font_half_width:
            ticks.append(TickLabel(text="", shown=False))
        else:
            ticks.append(TickLabel(text=text, shown=True))
            accumulated = 0.0
    return ticks
