"""Configuration system using pydantic-settings with environment variable loading.

Each group is a typed BaseSettings with documented field defaults, read once
when the chart is constructed. Colours are either a grey level in 0-1
(0 black, 1 white) or an (r, g, b) triple of 0-1 values.
"""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from stockchart.axis.labels import DEFAULT_MONTH_NAMES, DEFAULT_WEEKDAY_NAMES, LabelPolicy
from stockchart.models import Granularity, PriceShape

Color = float | tuple[float, float, float]


class DateAxisSettings(BaseSettings):
    """Date axis layout and label components.

    The show_* fields default to None, meaning "use the granularity default"
    (see LabelPolicy.for_granularity).
    """

    model_config = SettingsConfigDict(env_prefix="DATES_")

    by: Granularity = Granularity.RAW_DATA
    changes_only: bool = True  # suppress components unchanged since the last label
    show_weekday: bool | None = None
    show_day: bool | None = None
    show_month: bool | None = None
    show_year: bool | None = None
    days: list[str] = list(DEFAULT_WEEKDAY_NAMES)  # Monday first
    months: list[str] = list(DEFAULT_MONTH_NAMES)

    def label_policy(self) -> LabelPolicy:
        """Resolve these settings into a LabelPolicy for ``by``."""
        return LabelPolicy.for_granularity(
            self.by,
            show_weekday=self.show_weekday,
            show_day=self.show_day,
            show_month=self.show_month,
            show_year=self.show_year,
            show_all_components=not self.changes_only,
            weekday_names=tuple(self.days),
            month_names=tuple(self.months),
        )


class PriceSettings(BaseSettings):
    """Price panel: proportion, marks and date label font."""

    model_config = SettingsConfigDict(env_prefix="PRICE_")

    percent: float = 75
    title: str = "Price"
    key_title: str = "Price key"
    shape: PriceShape = PriceShape.STOCK2
    color: Color = 0.0
    width: float = 1.0  # mark line width, points
    font_size: float = 10  # date label font size, points


class AnalysisSettings(BaseSettings):
    """Analysis panel for overlays that use neither price nor volume scales.

    The panel only appears when percent > 0. low/high pin the Y axis;
    left unset, the axis fits the analysis lines.
    """

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    percent: float = 0
    title: str = "Analysis"
    key_title: str = "Analysis key"
    low: Decimal | None = None
    high: Decimal | None = None


class VolumeSettings(BaseSettings):
    """Volume bar panel."""

    model_config = SettingsConfigDict(env_prefix="VOLUME_")

    percent: float = 25
    title: str = "Volume"
    key_title: str = "Volume key"
    bar_color: Color | None = None  # None = price mark colour
    bar_width: float = 0.25  # outline width, points
    font_size: float = 10  # date label font size when there is no price panel


class GridSettings(BaseSettings):
    """Grid lines drawn behind the data."""

    model_config = SettingsConfigDict(env_prefix="GRID_")

    show_lines: bool = False  # vertical lines at each date tick
    x_heavy_color: Color = 0.4  # ticks with a shown label
    x_heavy_width: float = 0.75
    x_mid_color: Color = 0.5  # ticks whose label was suppressed
    x_mid_width: float = 0.5
    y_heavy_color: Color = 0.4  # labelled value lines
    y_heavy_width: float = 0.75
    y_light_color: Color = 0.6  # unlabelled value lines
    y_light_width: float = 0.25


class PageSettings(BaseSettings):
    """Page geometry in points (72 per inch). Defaults to A4 landscape."""

    model_config = SettingsConfigDict(env_prefix="PAGE_")

    width: float = 842
    height: float = 595
    left: float = 36
    right: float = 36
    top: float = 36
    bottom: float = 36
    format: Literal["ps", "eps", "pdf", "svg"] = "ps"  # used when the output path has no suffix


class ChartSettings(BaseSettings):
    """Root chart settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    heading: str = ""
    epic: str = "<unknown>"  # exchange code of the stock charted
    background: Color = 1.0
    bgnd_outline: bool = False  # outline two-colour marks in the background colour
    show_key: bool = True
    key_font_size: float = 8
    glyph_ratio: float = 0.47  # average glyph width as a fraction of font size
    dates: DateAxisSettings = DateAxisSettings()
    price: PriceSettings = PriceSettings()
    analysis: AnalysisSettings = AnalysisSettings()
    volume: VolumeSettings = VolumeSettings()
    grid: GridSettings = GridSettings()
    page: PageSettings = PageSettings()
