"""Decoration (underline, strikethrough, overline) regions that skip glyph ink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from skipink.area import Area
from skipink.bezier import BezierCurve
from skipink.common import DECORATION_THICKNESS_RATIO, DecorationKind, DecorationStrategy, JoinKind
from skipink.config import SETTINGS
from skipink.interval import Interval, merge, negate
from skipink.offset import OffsetRequest, OutlineOffsetEngine
from skipink.outline import Outline

logger = logging.getLogger(__name__)


###############################################################################
# DecorationBand
###############################################################################
@dataclass(frozen=True)
class DecorationBand:
    """Rectangle a decoration line occupies before ink skipping.

    Attributes:
        x (float): Left edge.
        y (float): Top edge (device coordinates, y pointing down).
        width (float): Horizontal extent.
        height (float): Thickness of the line.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def for_text(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        kind: DecorationKind,
        left: float,
        right: float,
        top: float,
        bottom: float,
        font_height: float,
    ) -> DecorationBand:
        """Band of a decoration line for text spanning [left, right] x [top, bottom].

        The thickness is font_height / 12. The line is centred on the bottom
        for underlines, on (2 * bottom + top) / 3 for strikethroughs and on
        the top for overlines.
        """
        thickness = font_height * DECORATION_THICKNESS_RATIO
        if kind is DecorationKind.UNDERLINE:
            centre = bottom
        elif kind is DecorationKind.STRIKETHROUGH:
            centre = (bottom * 2.0 + top) / 3.0
        else:
            centre = top
        return cls(left, centre - thickness / 2.0, right - left, thickness)

    @property
    def right(self) -> float:
        """float: Right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """float: Bottom edge."""
        return self.y + self.height

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """The band as Tuple (x, y, width, height)."""
        return self.x, self.y, self.width, self.height

    def to_area(self) -> Area:
        """The band as an Area."""
        return Area.from_rect(self.x, self.y, self.width, self.height)

    def to_outline(self) -> Outline:
        """The band as a closed rectangular outline."""
        return Outline.from_rect(self.x, self.y, self.width, self.height)


DecorationShape = Union[DecorationBand, Outline]


def as_outline(shape: DecorationShape) -> Outline:
    """Express a decoration shape in the outline command vocabulary."""
    if isinstance(shape, DecorationBand):
        return shape.to_outline()
    return shape


###############################################################################
# TextRunMetrics
###############################################################################
@dataclass(frozen=True)
class TextRunMetrics:
    """Bounds of one or more text runs sharing a decoration line.

    Attributes:
        left: Leftmost x of the runs.
        right: Rightmost x of the runs.
        top: Topmost y of the runs.
        bottom: Lowest y of the runs (top + font height).
        font_height: Largest font height among the runs.
    """

    left: float
    right: float
    top: float
    bottom: float
    font_height: float

    @classmethod
    def from_run(cls, x: float, y: float, width: float, font_height: float) -> TextRunMetrics:
        """Metrics of a single run drawn with its top-left corner at (x, y)."""
        return cls(x, x + width, y, y + font_height, font_height)

    @classmethod
    def combine(cls, runs: Iterable[TextRunMetrics]) -> Optional[TextRunMetrics]:
        """Smallest metrics enclosing all runs, None without runs."""
        result: Optional[TextRunMetrics] = None
        for run in runs:
            if result is None:
                result = run
                continue
            result = cls(
                min(result.left, run.left),
                max(result.right, run.right),
                min(result.top, run.top),
                max(result.bottom, run.bottom),
                max(result.font_height, run.font_height),
            )
        return result

    def band(self, kind: DecorationKind) -> DecorationBand:
        """Decoration band of the given kind for these metrics."""
        return DecorationBand.for_text(kind, self.left, self.right, self.top, self.bottom, self.font_height)


###############################################################################
# DecorationRegionBuilder
###############################################################################
class DecorationRegionBuilder:
    """Turns a decoration band and the glyph outline it crosses into fill shapes.

    The builder only stores its defaults; build() is a pure function of its
    arguments and can be called concurrently.
    """

    _strategy: DecorationStrategy
    _flatness: float

    def __init__(self, strategy: Optional[DecorationStrategy] = None, flatness: Optional[float] = None):
        """
        Args:
            strategy: Default strategy, the configured underline method if None.
            flatness: Flattening tolerance for glyph curves, the configured one if None.
        """
        self._strategy = SETTINGS.underline_method if strategy is None else strategy
        self._flatness = SETTINGS.flatness if flatness is None else flatness

    @property
    def strategy(self) -> DecorationStrategy:
        """DecorationStrategy: Strategy used when build() is not given one."""
        return self._strategy

    @property
    def flatness(self) -> float:
        """float: Flattening tolerance for glyph curves."""
        return self._flatness

    def build(
        self,
        band: DecorationBand,
        glyph_outline: Optional[Outline],
        strategy: Optional[DecorationStrategy] = None,
    ) -> List[DecorationShape]:
        """Fill shapes replacing _band_ so that it does not run through _glyph_outline_.

        Args:
            band: Nominal decoration rectangle.
            glyph_outline: Outline of the glyphs on the decorated line (may be None).
            strategy: Strategy to use, the builder's default if None.

        Returns:
            List of rectangles (DecorationBand) or outlines, to be filled with the non-zero rule.
        """
        strategy = self._strategy if strategy is None else strategy
        logger.debug("Building %s decoration for band %s", strategy.name, band.extent)
        if strategy is DecorationStrategy.STRAIGHT:
            return self.straight(band)
        if glyph_outline is None or glyph_outline.is_empty:
            return [band]
        if strategy is DecorationStrategy.LARGEST_GAP:
            return self.largest_gap(band, glyph_outline, self._flatness)
        return self.offset_mask(band, glyph_outline, self._flatness)

    @staticmethod
    def straight(band: DecorationBand) -> List[DecorationShape]:
        """The band itself, glyphs are ignored."""
        return [band]

    @staticmethod
    def ink_extents(band: DecorationBand, glyph_outline: Outline, flatness: float) -> List[Interval]:
        """Exact horizontal extent of every connected piece of glyph ink inside the band.

        The flattened ink only tells which pieces exist. Their extents come
        from the unflattened segments: every segment is cut where it crosses
        the band edges, and each part running inside the band contributes
        its end points and derivative-root extrema to the ink piece closest
        to it. Ink reaching a band end is clamped to it.
        """
        ink = Area.from_outline(glyph_outline, flatness).intersect(band.to_area())
        pieces = ink.components()
        if not pieces:
            return []

        lows = [np.inf] * len(pieces)
        highs = [-np.inf] * len(pieces)
        x_range = (band.x, band.right)
        y_range = (band.y, band.bottom)
        for segment in glyph_outline.segments():
            for t0, t1 in BezierCurve.pieces_in_box(segment, x_range, y_range):
                middle = BezierCurve.evaluate(segment, np.array([(t0 + t1) / 2.0]))[0]
                distances = [piece.distance(middle) for piece in pieces]
                idx = int(np.argmin(distances))
                if distances[idx] > 2.0 * flatness:
                    logger.debug("Ignoring segment part in band, %g away from the ink", distances[idx])
                    continue
                lo, hi = BezierCurve.piece_extent(segment, t0, t1, 0)
                lows[idx] = min(lows[idx], lo)
                highs[idx] = max(highs[idx], hi)

        intervals: List[Interval] = []
        for piece, lo, hi in zip(pieces, lows, highs):
            xmin, _, xmax, _ = piece.bounds
            if xmin <= band.x:
                lo = band.x
            elif lo == np.inf:
                lo = xmin
            if xmax >= band.right:
                hi = band.right
            elif hi == -np.inf:
                hi = xmax
            intervals.append(Interval.from_bounds(max(band.x, lo), min(band.right, hi)))
        return intervals

    @staticmethod
    def largest_gap(band: DecorationBand, glyph_outline: Outline, flatness: float) -> List[DecorationShape]:
        """Rectangles covering the gaps between the ink, kept a band height away from it.

        Every gap is shrunk by the band height on each side facing ink (the
        outer sides of the first and the last gap stay at the band ends)
        and dropped when less than a band height remains.
        """
        intervals = DecorationRegionBuilder.ink_extents(band, glyph_outline, flatness)
        if not intervals:
            return [band]

        gaps = negate(merge(intervals), band.x, band.width)
        margin = band.height
        last = len(gaps) - 1
        shapes: List[DecorationShape] = []
        for idx, gap in enumerate(gaps):
            lower = gap.start + (margin if idx > 0 else 0.0)
            upper = gap.end - (margin if idx < last else 0.0)
            if upper - lower >= margin:
                shapes.append(DecorationBand(lower, band.y, upper - lower, band.height))
        return shapes

    @staticmethod
    def offset_mask(band: DecorationBand, glyph_outline: Outline, flatness: float) -> List[DecorationShape]:
        """The band minus the glyph outline grown by the band height (miter joins)."""
        request = OffsetRequest(distance=band.height, join=JoinKind.MITER, flatness=flatness)
        mask = OutlineOffsetEngine.offset(glyph_outline, request)
        region = band.to_area().subtract(mask)
        return list(region.polygons())


def build_decoration(
    band: DecorationBand,
    glyph_outline: Optional[Outline],
    strategy: Optional[DecorationStrategy] = None,
    flatness: Optional[float] = None,
) -> List[DecorationShape]:
    """Shortcut for DecorationRegionBuilder(flatness=flatness).build(band, glyph_outline, strategy)."""
    return DecorationRegionBuilder(flatness=flatness).build(band, glyph_outline, strategy)


def main():
    """Main"""
    glyphs = Outline.join(
        Outline.from_rect(100.0, 50.0, 100.0, 120.0),
        Outline.from_rect(220.0, 50.0, 20.0, 120.0),
    )
    band = DecorationBand(0.0, 140.0, 800.0, 20.0)
    for strategy in DecorationStrategy:
        print(strategy.name, build_decoration(band, glyphs, strategy))


if __name__ == "__main__":
    main()
