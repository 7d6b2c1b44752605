"""Line styles for overlay lines and colour helpers.

Colours follow the settings convention: a single 0-1 grey level or an
(r, g, b) triple of 0-1 values.
"""

from dataclasses import dataclass

from stockchart.config import Color

RGB = tuple[float, float, float]


def to_rgb(color: Color) -> RGB:
    """Normalise a grey level or RGB triple to an RGB triple.

    Raises:
        ValueError: If a component lies outside 0-1 or the triple is malformed.
    """
    if isinstance(color, (int, float)):
        components: tuple[float, ...] = (float(color),) * 3
    else:
        components = tuple(float(c) for c in color)
    if len(components) != 3:
        raise ValueError(f"Colour needs 1 or 3 components, got {color!r}")
    if any(c < 0 or c > 1 for c in components):
        raise ValueError(f"Colour components must lie in 0-1, got {color!r}")
    return components  # type: ignore[return-value]


def complement(color: Color) -> RGB:
    """Return the colour opposite ``color``, used to outline marks."""
    r, g, b = to_rgb(color)
    return (1 - r, 1 - g, 1 - b)


@dataclass(frozen=True)
class LineStyle:
    """Appearance of one overlay line and its key entry.

    A style with ``width`` 0 draws no line, and one without ``point_shape``
    draws no points. ``point_shape`` takes a matplotlib marker code
    (``"o"``, ``"D"``, ``"s"``...).
    """

    color: Color = 0.0
    width: float = 1.0
    dashes: tuple[float, ...] | None = None
    point_shape: str | None = None
    point_size: float = 4.0
    point_color: Color | None = None

    def use_line(self) -> bool:
        return self.width > 0

    def use_point(self) -> bool:
        return self.point_shape is not None

    def plot_kwargs(self) -> dict:
        """Keyword arguments for ``Axes.plot`` drawing this style."""
        kwargs: dict = {
            "color": to_rgb(self.color),
            "linewidth": self.width,
            "linestyle": "-" if self.use_line() else "none",
        }
        if self.use_line() and self.dashes:
            kwargs["dashes"] = self.dashes
        if self.use_point():
            kwargs["marker"] = self.point_shape
            kwargs["markersize"] = self.point_size
            point_color = to_rgb(self.point_color if self.point_color is not None else self.color)
            kwargs["markerfacecolor"] = point_color
            kwargs["markeredgecolor"] = point_color
        return kwargs
