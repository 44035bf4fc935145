"""Test module for skipink.decoration

The tests are run using pytest.
Two glyph blocks [100, 200] and [220, 240] (y 50..170) are crossed by an
underline band at y 140..160 spanning 0..800.
"""

import math

import pytest

from skipink.area import Area
from skipink.common import DecorationKind, DecorationStrategy
from skipink.decoration import (
    DecorationBand,
    DecorationRegionBuilder,
    TextRunMetrics,
    as_outline,
    build_decoration,
)
from skipink.outline import Outline

BAND = DecorationBand(0.0, 140.0, 800.0, 20.0)
BLOCKS = Outline.join(
    Outline.from_rect(100.0, 50.0, 100.0, 120.0),
    Outline.from_rect(220.0, 50.0, 20.0, 120.0),
)
QUAD_GLYPH = Outline(
    [(220.0, 100.0), (250.0, 100.0), (265.0, 150.0), (250.0, 200.0), (220.0, 200.0)],
    ["M", "L", "Q", "L", "Z"],
)


def _extent(band):
    return pytest.approx(band.extent)


def _region(shapes):
    return Area.union_all([Area.from_outline(as_outline(shape)) for shape in shapes])


###############################################################################
# Bands from text metrics
###############################################################################


class TestDecorationBand:
    """Band geometry."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (DecorationKind.UNDERLINE, (10.0, 23.0, 100.0, 2.0)),
            (DecorationKind.STRIKETHROUGH, (10.0, 15.0, 100.0, 2.0)),
            (DecorationKind.OVERLINE, (10.0, -1.0, 100.0, 2.0)),
        ],
    )
    def test_for_text(self, kind, expected):
        """Thickness is font height / 12, centred per decoration kind."""
        band = DecorationBand.for_text(kind, 10.0, 110.0, 0.0, 24.0, 24.0)
        assert band.extent == pytest.approx(expected)

    def test_edges_and_outline(self):
        """Derived edges and the rectangle outline."""
        assert BAND.right == 800.0
        assert BAND.bottom == 160.0
        assert as_outline(BAND) == Outline.from_rect(0.0, 140.0, 800.0, 20.0)
        assert BAND.to_area().area == pytest.approx(16000.0)

    def test_text_run_metrics(self):
        """Runs combine into their bounding metrics."""
        first = TextRunMetrics.from_run(10.0, 0.0, 50.0, 24.0)
        second = TextRunMetrics.from_run(60.0, 4.0, 50.0, 20.0)
        combined = TextRunMetrics.combine([first, second])
        assert combined == TextRunMetrics(10.0, 110.0, 0.0, 24.0, 24.0)
        assert combined.band(DecorationKind.UNDERLINE).extent == pytest.approx((10.0, 23.0, 100.0, 2.0))
        assert TextRunMetrics.combine([]) is None


###############################################################################
# Straight
###############################################################################


class TestStraight:
    """The band is returned untouched."""

    @pytest.mark.parametrize("outline", [None, Outline(), BLOCKS], ids=["none", "empty", "blocks"])
    def test_band_is_returned(self, outline):
        """The very same band object, glyphs ignored."""
        result = build_decoration(BAND, outline, DecorationStrategy.STRAIGHT)
        assert len(result) == 1
        assert result[0] is BAND


###############################################################################
# Largest gap
###############################################################################


class TestLargestGap:
    """Rectangles between the ink."""

    def test_blocks(self):
        """The gap between the blocks is too narrow, the outer gaps are shrunk."""
        result = build_decoration(BAND, BLOCKS, DecorationStrategy.LARGEST_GAP)
        assert [shape.extent for shape in result] == [
            _extent(DecorationBand(0.0, 140.0, 80.0, 20.0)),
            _extent(DecorationBand(260.0, 140.0, 540.0, 20.0)),
        ]

    def test_curved_glyph_uses_exact_extremum(self):
        """The bulge of the quadratic reaches x = 257.5 inside the band."""
        result = build_decoration(BAND, QUAD_GLYPH, DecorationStrategy.LARGEST_GAP)
        assert [shape.extent for shape in result] == [
            _extent(DecorationBand(0.0, 140.0, 200.0, 20.0)),
            _extent(DecorationBand(277.5, 140.0, 522.5, 20.0)),
        ]

    def test_ink_extents(self):
        """One extent per contour of ink inside the band."""
        extents = DecorationRegionBuilder.ink_extents(BAND, BLOCKS, 1.0)
        assert sorted((i.start, i.end) for i in extents) == [
            pytest.approx((100.0, 200.0)),
            pytest.approx((220.0, 240.0)),
        ]

    def test_band_clipping_shallow_curve(self):
        """Where the band cuts a shallow curve the extent comes from the curve, not its chords.

        y = 200 - 100 t (1 - t) with x = 200 t reaches the band bottom 196 at
        t = (1 -+ sqrt(0.84)) / 2, where the coarse chords do not reach.
        """
        band = DecorationBand(-100.0, 176.0, 400.0, 20.0)
        glyph = Outline([(0.0, 200.0), (100.0, 150.0), (200.0, 200.0)], ["M", "Q", "Z"])
        start = 100.0 * (1.0 - math.sqrt(0.84))
        end = 100.0 * (1.0 + math.sqrt(0.84))

        extents = DecorationRegionBuilder.ink_extents(band, glyph, 5.0)
        assert [(i.start, i.end) for i in extents] == [pytest.approx((start, end))]

        result = DecorationRegionBuilder.largest_gap(band, glyph, 5.0)
        assert [shape.extent for shape in result] == [
            _extent(DecorationBand(-100.0, 176.0, start - 20.0 + 100.0, 20.0)),
            _extent(DecorationBand(end + 20.0, 176.0, 300.0 - end - 20.0, 20.0)),
        ]

    def test_ink_reaching_band_end_is_clamped(self):
        """Ink crossing a band end extends exactly to it."""
        glyph = Outline.from_rect(-50.0, 100.0, 150.0, 100.0)
        extents = DecorationRegionBuilder.ink_extents(BAND, glyph, 1.0)
        assert [(i.start, i.end) for i in extents] == [pytest.approx((0.0, 100.0))]

    def test_no_ink_in_band(self):
        """Glyphs above the band leave it untouched."""
        glyph = Outline.from_rect(100.0, 0.0, 50.0, 50.0)
        assert build_decoration(BAND, glyph, DecorationStrategy.LARGEST_GAP) == [BAND]

    def test_ink_covering_band(self):
        """Nothing remains when the ink covers the whole band."""
        glyph = Outline.from_rect(-10.0, 100.0, 820.0, 100.0)
        assert build_decoration(BAND, glyph, DecorationStrategy.LARGEST_GAP) == []


###############################################################################
# Offset mask
###############################################################################


class TestOffsetMask:
    """The band minus the grown glyph outline."""

    def test_blocks(self):
        """The grown blocks cut the band into two pieces."""
        result = build_decoration(BAND, BLOCKS, DecorationStrategy.OFFSET_MASK)
        assert len(result) == 2
        bounds = sorted(Area.from_outline(shape).bounds for shape in result)
        assert bounds[0] == pytest.approx((0.0, 140.0, 80.0, 160.0))
        assert bounds[1] == pytest.approx((260.0, 140.0, 800.0, 160.0))

    def test_same_region_as_largest_gap_for_blocks(self):
        """Rectangular ink: both strategies cover exactly the same region."""
        gap = _region(build_decoration(BAND, BLOCKS, DecorationStrategy.LARGEST_GAP))
        mask = _region(build_decoration(BAND, BLOCKS, DecorationStrategy.OFFSET_MASK))
        assert mask.symmetric_difference_area(gap) == pytest.approx(0.0, abs=1e-6)

    def test_close_to_largest_gap(self):
        """For a curved glyph the regions differ only by slivers along the bulge."""
        gap = _region(build_decoration(BAND, QUAD_GLYPH, DecorationStrategy.LARGEST_GAP))
        mask = _region(build_decoration(BAND, QUAD_GLYPH, DecorationStrategy.OFFSET_MASK))
        assert mask.symmetric_difference_area(gap) < 0.01 * BAND.to_area().area

    def test_no_ink_in_band(self):
        """The mask does not reach the band: one polygon with the band's area."""
        glyph = Outline.from_rect(100.0, 0.0, 50.0, 50.0)
        result = build_decoration(BAND, glyph, DecorationStrategy.OFFSET_MASK)
        assert len(result) == 1
        assert Area.from_outline(result[0]).area == pytest.approx(16000.0)


###############################################################################
# Builder
###############################################################################


class TestDecorationRegionBuilder:
    """Defaults and input without ink."""

    @pytest.mark.parametrize("strategy", [DecorationStrategy.LARGEST_GAP, DecorationStrategy.OFFSET_MASK])
    @pytest.mark.parametrize("outline", [None, Outline(), Outline([(1.0, 1.0)], ["M"])], ids=["none", "empty", "move"])
    def test_nothing_to_skip(self, strategy, outline):
        """Without glyph outline the band is returned."""
        assert build_decoration(BAND, outline, strategy) == [BAND]

    def test_defaults(self):
        """Explicit defaults are kept and used by build()."""
        builder = DecorationRegionBuilder(DecorationStrategy.STRAIGHT, 0.5)
        assert builder.strategy is DecorationStrategy.STRAIGHT
        assert builder.flatness == 0.5
        assert builder.build(BAND, BLOCKS) == [BAND]
        assert len(builder.build(BAND, BLOCKS, DecorationStrategy.LARGEST_GAP)) == 2
