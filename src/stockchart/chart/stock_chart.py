"""Stock chart assembly: price, analysis and volume panels on one date axis.

Wiring order (in build):
1. Compact the series dates into axis slots (stockchart.axis.compact)
2. Average records per slot for weekly/monthly axes
3. Work out which panels appear and their share of the page
4. Fit each panel's Y scale around its data and overlay lines
5. Lay out the panels and create a GraphPaper for each
6. Run the label density filter once, against the labelled panel's tick
   spacing (price, or volume when there is no price panel)
7. Draw ticks (label text on the labelled panel, bare ticks elsewhere), marks,
   bars, overlay lines and keys
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from matplotlib.figure import Figure

from stockchart.axis import CompactAxis, TickLabel, compact, filter_label_density
from stockchart.chart.paper import POINTS_PER_INCH, GraphPaper
from stockchart.chart.style import LineStyle, complement, to_rgb
from stockchart.config import ChartSettings
from stockchart.data import SeriesData, aggregate_records, ingest_rows, mean, read_csv
from stockchart.data.ingest import to_decimal
from stockchart.dates import CalendarDate, coerce_date
from stockchart.exceptions import NoPriceOrVolumeData
from stockchart.logging import get_logger
from stockchart.models import Granularity

logger = get_logger(__name__)

OUTPUT_FORMATS = ("ps", "eps", "pdf", "svg")

#: Label band height per label character, as a fraction of the font size.
_LABEL_HEIGHT_RATIO = Decimal("0.7")
#: Room left of each panel for Y tick labels and title, points.
_Y_AXIS_WIDTH = 60.0
#: Height of the bare tick band under panels without label text, points.
_BARE_TICK_HEIGHT = 5.0
#: Height reserved for the heading, points.
_HEADING_HEIGHT = 24.0
#: Key layout estimates, points.
_KEY_ICON_WIDTH = 30.0
_KEY_PADDING = 16.0

PANELS = ("price", "analysis", "volume")


@dataclass
class OverlayLine:
    """A line drawn over one panel, with its key text and style."""

    points: list[tuple[CalendarDate, Decimal]]
    key: str
    style: LineStyle
    order: int


class StockChart:
    """Builds a stock chart from series data and overlay lines.

    Args:
        settings: Chart settings. Defaults to ChartSettings() (environment
            and .env overrides applied).
    """

    def __init__(self, settings: ChartSettings | None = None) -> None:
        self.settings = settings if settings is not None else ChartSettings()
        self.series: SeriesData | None = None
        self.axis: CompactAxis | None = None
        self.ticks: list[TickLabel] = []
        self.figure: Figure | None = None
        self.papers: dict[str, GraphPaper] = {}
        self._lines: dict[str, list[OverlayLine]] = {panel: [] for panel in PANELS}
        self._line_count = 0

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def load_series(self, series: SeriesData) -> SeriesData:
        self.series = series
        self.figure = None
        return series

    def load_rows(self, rows: Iterable[Sequence[object]]) -> SeriesData:
        """Ingest in-memory rows (see stockchart.data.ingest_rows)."""
        return self.load_series(ingest_rows(rows))

    def load_csv(self, path: str | Path) -> SeriesData:
        """Ingest a quote CSV file (see stockchart.data.read_csv)."""
        return self.load_series(read_csv(path))

    def _add_line(
        self,
        panel: str,
        data: Iterable[tuple[object, object]],
        key: str,
        style: LineStyle | None,
    ) -> OverlayLine:
        points = [
            (coerce_date(date), to_decimal(value)) for date, value in data if value is not None
        ]
        line = OverlayLine(points=points, key=key, style=style or LineStyle(), order=self._line_count)
        self._line_count += 1
        self._lines[panel].append(line)
        self.figure = None
        return line

    def add_price_line(
        self, data: Iterable[tuple[object, object]], key: str, style: LineStyle | None = None
    ) -> OverlayLine:
        """Overlay a line of (date, price) points on the price panel."""
        return self._add_line("price", data, key, style)

    def add_analysis_line(
        self, data: Iterable[tuple[object, object]], key: str, style: LineStyle | None = None
    ) -> OverlayLine:
        """Overlay a line on the analysis panel (shown when analysis.percent > 0)."""
        return self._add_line("analysis", data, key, style)

    def add_volume_line(
        self, data: Iterable[tuple[object, object]], key: str, style: LineStyle | None = None
    ) -> OverlayLine:
        """Overlay a line of (date, volume) points on the volume panel."""
        return self._add_line("volume", data, key, style)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def panel_shares(self, series: SeriesData, granularity: Granularity) -> dict[str, float]:
        """Return each panel's fraction of the plotting height (0 = hidden).

        The price panel needs price data and the volume panel volume data;
        monthly axes never show volume. When neither data panel is left, the
        one with data takes the whole share.
        """
        shares = {
            "price": self.settings.price.percent if series.has_price else 0.0,
            "analysis": self.settings.analysis.percent,
            "volume": self.settings.volume.percent,
        }
        if not series.has_volume or granularity is Granularity.MONTHLY_SLOT:
            shares["volume"] = 0.0
        if shares["price"] <= 0 and shares["volume"] <= 0:
            shares["price" if series.has_price else "volume"] = 100.0
        total = sum(shares.values())
        return {panel: share / total for panel, share in shares.items()}

    def _slot_points(self, line: OverlayLine, axis: CompactAxis) -> list[tuple[int, Decimal]]:
        """Reduce a line to one (slot, value) point per slot, in slot order.

        Points on dates the axis has no slot for are dropped. Where several
        dates share a slot (weekly and monthly axes) their values are
        averaged, as the records are.
        """
        by_slot: dict[int, list[Decimal]] = {}
        for date, value in line.points:
            slot = axis.slot_index(date.key)
            if slot is not None:
                by_slot.setdefault(slot, []).append(value)
        return [(slot, mean(values)) for slot, values in sorted(by_slot.items())]

    def _scale(self, panel: str, axis: CompactAxis, records: dict) -> tuple[Decimal, Decimal]:
        """Y range of the values drawn on ``panel``; off-axis values are ignored."""
        values: list[Decimal] = [
            v for line in self._lines[panel] for _, v in self._slot_points(line, axis)
        ]
        drawn = [r for key, r in records.items() if axis.slot_index(key) is not None]
        if panel == "price":
            for record in drawn:
                if record.price is not None:
                    values.extend((record.price.lowest, record.price.highest))
        elif panel == "volume":
            values.extend(r.volume for r in drawn if r.volume is not None)
            values.append(Decimal("0"))
        else:
            analysis = self.settings.analysis
            if analysis.low is not None:
                values.append(analysis.low)
            if analysis.high is not None:
                values.append(analysis.high)
            if not values:
                values = [Decimal("0"), Decimal("1")]
            low = analysis.low if analysis.low is not None else min(values)
            high = analysis.high if analysis.high is not None else max(values)
            return low, high
        if not values:
            # no record or line point falls on a slot
            return Decimal("0"), Decimal("1")
        return min(values), max(values)

    def _key_width(self, shares: dict[str, float]) -> float:
        if not self.settings.show_key:
            return 0.0
        widest = 0.0
        for panel in PANELS:
            lines = self._lines[panel]
            if shares[panel] <= 0 or not lines:
                continue
            text = max(len(line.key) for line in lines)
            widest = max(widest, text * self.settings.key_font_size * self.settings.glyph_ratio)
        return widest + _KEY_ICON_WIDTH + _KEY_PADDING if widest else 0.0

    def labelled_panel(self, shares: dict[str, float]) -> str:
        """Panel carrying the date label text: price, or volume without a price panel.

        The analysis panel never carries labels; it gets bare ticks like any
        other panel sharing the axis.
        """
        return "price" if shares["price"] > 0 else "volume"

    def _label_font_size(self, shares: dict[str, float]) -> float:
        if shares["price"] > 0:
            return self.settings.price.font_size
        return self.settings.volume.font_size

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self) -> Figure:
        """Construct the figure for the loaded series and overlay lines.

        Raises:
            NoPriceOrVolumeData: If no series has been loaded.
        """
        if self.series is None:
            raise NoPriceOrVolumeData("No price or volume data loaded")
        series = self.series
        settings = self.settings
        granularity = settings.dates.by

        axis = compact(
            series.records,
            series.first_date,
            series.last_date,
            granularity,
            settings.dates.label_policy(),
        )
        records = aggregate_records(series, axis)
        shares = self.panel_shares(series, granularity)
        visible = [panel for panel in PANELS if shares[panel] > 0]

        page = settings.page
        figure = Figure(figsize=(page.width / POINTS_PER_INCH, page.height / POINTS_PER_INCH), dpi=POINTS_PER_INCH)
        figure.set_facecolor("white")

        font_size = self._label_font_size(shares)
        label_height = float(axis.label_max_length * _LABEL_HEIGHT_RATIO * Decimal(str(font_size)))
        heading = settings.heading or (settings.epic if settings.epic != "<unknown>" else "")
        heading_height = _HEADING_HEIGHT if heading else 0.0
        labelled = self.labelled_panel(shares)
        bare_bands = _BARE_TICK_HEIGHT * (len(visible) - 1)

        left = page.left + _Y_AXIS_WIDTH
        width = page.width - left - page.right - self._key_width(shares)
        plot_height = page.height - page.top - page.bottom - label_height - heading_height - bare_bands
        if width <= 0 or plot_height <= 0:
            raise ValueError("Page too small for the chart")

        titles = {
            "price": settings.price.title,
            "analysis": settings.analysis.title,
            "volume": settings.volume.title,
        }
        top = page.height - page.top - heading_height
        self.papers = {}
        for panel in visible:
            height = plot_height * shares[panel]
            bottom = top - height
            low, high = self._scale(panel, axis, records)
            self.papers[panel] = GraphPaper(
                figure,
                (left, bottom, width, height),
                len(axis),
                low,
                high,
                title=titles[panel],
                background=settings.background,
                grid=settings.grid,
                font_size=font_size,
            )
            top = bottom - (label_height if panel == labelled else _BARE_TICK_HEIGHT)

        if heading:
            figure.text(0.5, 1 - (page.top + heading_height / 2) / page.height, heading, ha="center", va="center", fontsize=14)

        label_paper = self.papers[labelled]
        self.ticks = filter_label_density(axis.labels, label_paper.slot_pixel_step, font_size / 2)
        blank_ticks = [tick.blank() for tick in self.ticks]
        for panel in visible:
            paper = self.papers[panel]
            paper.draw_x_axis(self.ticks if paper is label_paper else blank_ticks)
            paper.draw_y_axis()

        self._draw_data(axis, records)
        self._draw_lines(axis)

        self.axis = axis
        self.figure = figure
        logger.info(
            "chart_built",
            granularity=granularity.value,
            slots=len(axis),
            shown_labels=sum(1 for t in self.ticks if t.shown),
            panels=visible,
            lines=self._line_count,
        )
        return figure

    def _outline(self):
        if self.settings.bgnd_outline:
            return to_rgb(self.settings.background)
        return complement(self.settings.background)

    def _draw_data(self, axis: CompactAxis, records: dict) -> None:
        marks = []
        bars = []
        for key, record in records.items():
            slot = axis.slot_index(key)
            if slot is None:
                continue
            if record.price is not None:
                marks.append((slot, record.price))
            if record.volume is not None:
                bars.append((slot, record.volume))

        price = self.settings.price
        if "price" in self.papers:
            self.papers["price"].draw_price_marks(
                marks, price.shape, price.color, price.width, self._outline()
            )
        if "volume" in self.papers:
            volume = self.settings.volume
            bar_color = volume.bar_color if volume.bar_color is not None else price.color
            self.papers["volume"].draw_bars(bars, bar_color, self._outline(), volume.bar_width)

    def _draw_lines(self, axis: CompactAxis) -> None:
        key_titles = {
            "price": self.settings.price.key_title,
            "analysis": self.settings.analysis.key_title,
            "volume": self.settings.volume.key_title,
        }
        for panel, paper in self.papers.items():
            keyed: set[LineStyle] = set()
            for line in sorted(self._lines[panel], key=lambda l: l.order):
                points = self._slot_points(line, axis)
                # lines sharing a style share one key entry
                label = line.key if line.style not in keyed else "_nolegend_"
                keyed.add(line.style)
                paper.draw_line(points, line.style, label)
            if self.settings.show_key and self._lines[panel]:
                paper.draw_key(key_titles[panel], self.settings.key_font_size)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def output(self, path: str | Path) -> Path:
        """Build (if needed) and save the chart.

        The format comes from the file suffix (.ps, .eps, .pdf, .svg); a
        path without a suffix gets the page format's suffix.

        Returns:
            The path written.

        Raises:
            ValueError: If the suffix names an unsupported format.
        """
        target = Path(path)
        if not target.suffix:
            target = target.with_suffix(f".{self.settings.page.format}")
        fmt = target.suffix[1:].lower()
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format {fmt!r}, expected one of {OUTPUT_FORMATS}")

        figure = self.figure if self.figure is not None else self.build()
        figure.savefig(target, format=fmt)
        logger.info("chart_saved", path=str(target), format=fmt)
        return target
