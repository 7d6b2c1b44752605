"""Graph paper: one chart panel drawn on a matplotlib Axes.

X is measured in slots: slot ``i`` spans ``[i, i + 1)`` with its tick and
marks at the centre ``i + 0.5``. The figure uses 72 dpi so display units are
PostScript points, which makes ``slot_pixel_step`` and the ``px``/``py``
mappings directly comparable with font sizes.
"""

from collections.abc import Sequence
from decimal import Decimal

from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.ticker import AutoMinorLocator

from stockchart.axis.models import TickLabel
from stockchart.chart.style import RGB, LineStyle, to_rgb
from stockchart.config import Color, GridSettings
from stockchart.data.models import PriceQuad
from stockchart.models import PriceShape

POINTS_PER_INCH = 72

#: Half the width of a price mark or bar, in slots.
_MARK_HALF_WIDTH = 0.35


class GraphPaper:
    """A panel sharing the slot-indexed date axis.

    Args:
        figure: Figure the panel is drawn on.
        rect: (left, bottom, width, height) in points from the page origin.
        slot_count: Number of axis slots.
        low: Bottom of the Y axis.
        high: Top of the Y axis.
        title: Y axis title.
        background: Panel fill colour.
        grid: Grid line settings.
        font_size: Date label font size in points.
    """

    def __init__(
        self,
        figure: Figure,
        rect: tuple[float, float, float, float],
        slot_count: int,
        low: Decimal,
        high: Decimal,
        title: str,
        background: Color,
        grid: GridSettings,
        font_size: float,
    ) -> None:
        page_width = figure.get_figwidth() * POINTS_PER_INCH
        page_height = figure.get_figheight() * POINTS_PER_INCH
        left, bottom, width, height = rect

        self.figure = figure
        self.rect = rect
        self.slot_count = slot_count
        self.background = to_rgb(background)
        self._grid = grid
        self._font_size = font_size

        if high <= low:
            low, high = low - 1, high + 1
        self.low = low
        self.high = high

        self.axes = figure.add_axes(
            (left / page_width, bottom / page_height, width / page_width, height / page_height)
        )
        self.axes.set_xlim(0, max(slot_count, 1))
        self.axes.set_ylim(float(low), float(high))
        self.axes.set_facecolor(self.background)
        self.axes.set_ylabel(title)
        self.axes.tick_params(axis="y", labelsize=font_size)

    @property
    def slot_pixel_step(self) -> float:
        """Points between adjacent slot ticks."""
        return self.rect[2] / max(self.slot_count, 1)

    @property
    def font_size(self) -> float:
        return self._font_size

    def px(self, slot: float) -> float:
        """Page X, in points, of a slot position."""
        return self.rect[0] + slot * self.slot_pixel_step

    def py(self, value: Decimal | float) -> float:
        """Page Y, in points, of a value on this panel's scale."""
        span = float(self.high - self.low)
        return self.rect[1] + (float(value) - float(self.low)) / span * self.rect[3]

    def draw_x_axis(self, ticks: Sequence[TickLabel]) -> None:
        """Draw date ticks: shown labels as major ticks, suppressed as minor.

        With ``show_lines`` set, major ticks carry heavy vertical lines and
        minor ticks mid lines.
        """
        shown = [(i + 0.5, t.text) for i, t in enumerate(ticks) if t.shown]
        hidden = [i + 0.5 for i, t in enumerate(ticks) if not t.shown]

        self.axes.set_xticks(
            [x for x, _ in shown],
            labels=[text for _, text in shown],
            rotation=90,
            fontsize=self._font_size,
        )
        self.axes.set_xticks(hidden, minor=True)
        self.axes.tick_params(axis="x", which="major", length=4)
        self.axes.tick_params(axis="x", which="minor", length=2)

        grid = self._grid
        if grid.show_lines:
            self.axes.grid(
                True,
                which="major",
                axis="x",
                color=to_rgb(grid.x_heavy_color),
                linewidth=grid.x_heavy_width,
            )
            self.axes.grid(
                True,
                which="minor",
                axis="x",
                color=to_rgb(grid.x_mid_color),
                linewidth=grid.x_mid_width,
            )

    def draw_y_axis(self) -> None:
        """Draw horizontal value lines: heavy at labels, light between."""
        grid = self._grid
        self.axes.yaxis.set_minor_locator(AutoMinorLocator())
        self.axes.grid(
            True,
            which="major",
            axis="y",
            color=to_rgb(grid.y_heavy_color),
            linewidth=grid.y_heavy_width,
        )
        self.axes.grid(
            True,
            which="minor",
            axis="y",
            color=to_rgb(grid.y_light_color),
            linewidth=grid.y_light_width,
        )
        self.axes.set_axisbelow(True)

    def draw_price_marks(
        self,
        marks: Sequence[tuple[int, PriceQuad]],
        shape: PriceShape,
        color: Color,
        width: float,
        outline: RGB,
    ) -> None:
        """Draw one price mark per (slot, quad)."""
        if not marks:
            return
        if shape is PriceShape.CANDLE:
            self._draw_candles(marks, to_rgb(color), width)
            return

        segments = []
        for slot, quad in marks:
            centre = slot + 0.5
            close_tick = [(centre, float(quad.close)), (centre + _MARK_HALF_WIDTH, float(quad.close))]
            if shape in (PriceShape.CLOSE, PriceShape.CLOSE2):
                segments.append(close_tick)
                continue
            segments.append([(centre - _MARK_HALF_WIDTH, float(quad.open)), (centre, float(quad.open))])
            segments.append([(centre, float(quad.low)), (centre, float(quad.high))])
            segments.append(close_tick)

        if shape.outlined:
            self.axes.add_collection(
                LineCollection(segments, colors=[outline], linewidths=width * 2.5, capstyle="projecting")
            )
        self.axes.add_collection(
            LineCollection(segments, colors=[to_rgb(color)], linewidths=width, capstyle="projecting")
        )

    def _draw_candles(self, marks: Sequence[tuple[int, PriceQuad]], color: RGB, width: float) -> None:
        wicks = [[(slot + 0.5, float(q.low)), (slot + 0.5, float(q.high))] for slot, q in marks]
        self.axes.add_collection(LineCollection(wicks, colors=[color], linewidths=width))

        centres = [slot + 0.5 for slot, _ in marks]
        bottoms = [float(min(q.open, q.close)) for _, q in marks]
        heights = [float(abs(q.close - q.open)) for _, q in marks]
        # falling days filled, rising days hollow
        faces = [color if q.close < q.open else self.background for _, q in marks]
        self.axes.bar(
            centres,
            heights,
            width=_MARK_HALF_WIDTH * 2,
            bottom=bottoms,
            color=faces,
            edgecolor=color,
            linewidth=width,
            zorder=3,
        )

    def draw_bars(
        self,
        bars: Sequence[tuple[int, Decimal]],
        color: Color,
        outline: RGB,
        outline_width: float,
    ) -> None:
        """Draw one bar per (slot, value), rising from the bottom of the scale."""
        if not bars:
            return
        self.axes.bar(
            [slot + 0.5 for slot, _ in bars],
            [float(value - self.low) for _, value in bars],
            width=_MARK_HALF_WIDTH * 2,
            bottom=float(self.low),
            color=to_rgb(color),
            edgecolor=outline,
            linewidth=outline_width,
            zorder=2,
        )

    def draw_line(self, points: Sequence[tuple[int, Decimal]], style: LineStyle, key: str) -> None:
        """Draw an overlay line through (slot, value) points."""
        if not points:
            return
        self.axes.plot(
            [slot + 0.5 for slot, _ in points],
            [float(value) for _, value in points],
            label=key,
            zorder=4,
            **style.plot_kwargs(),
        )

    def draw_key(self, title: str, font_size: float) -> None:
        """Draw the key to the right of the panel, one entry per labelled line."""
        handles, labels = self.axes.get_legend_handles_labels()
        if not handles:
            return
        self.axes.legend(
            handles,
            labels,
            title=title,
            loc="upper left",
            bbox_to_anchor=(1.01, 1.0),
            fontsize=font_size,
            title_fontsize=font_size,
            borderaxespad=0.0,
        )
