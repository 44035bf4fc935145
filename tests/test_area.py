"""Test module for skipink.area

The tests are run using pytest.
These tests check the non-zero winding fill and the boolean operations.
"""

import numpy as np
import pytest

from skipink.area import Area, winding_numbers
from skipink.geom import Polygon
from skipink.outline import Outline

SQUARE = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]], dtype=np.float64)
BIG = np.array([[0.0, 0.0], [30.0, 0.0], [30.0, 30.0], [0.0, 30.0]], dtype=np.float64)
INNER = np.array([[10.0, 10.0], [20.0, 10.0], [20.0, 20.0], [10.0, 20.0]], dtype=np.float64)


class TestWindingNumbers:
    """Winding numbers of query points."""

    def test_inside_and_outside(self):
        """Inside points wind once, outside points not at all."""
        points = np.array([[5.0, 5.0], [15.0, 5.0], [-1.0, 5.0]])
        result = winding_numbers(points, SQUARE)
        assert abs(result[0]) == 1
        assert result[1] == 0
        assert result[2] == 0

    def test_orientation_flips_sign(self):
        """Reversing the ring negates the winding number."""
        point = np.array([[5.0, 5.0]])
        assert winding_numbers(point, SQUARE)[0] == -winding_numbers(point, SQUARE[::-1])[0]

    def test_double_loop(self):
        """A ring going around twice winds twice."""
        point = np.array([[5.0, 5.0]])
        assert abs(winding_numbers(point, np.vstack([SQUARE, SQUARE]))[0]) == 2


class TestAreaFromRings:
    """Non-zero winding fill."""

    def test_empty(self):
        """No rings, no area."""
        assert Area.from_rings([]).is_empty
        assert Area().area == 0.0
        assert Area().bounds is None

    def test_square(self):
        """A simple ring is filled."""
        area = Area.from_rings([SQUARE])
        assert area.area == pytest.approx(100.0)
        assert area.bounds == (0.0, 0.0, 10.0, 10.0)

    def test_bow_tie_fills_both_lobes(self):
        """Both lobes of a self-intersecting ring have non-zero winding."""
        bow_tie = np.array([[0.0, 0.0], [10.0, 10.0], [10.0, 0.0], [0.0, 10.0]])
        assert Area.from_rings([bow_tie]).area == pytest.approx(50.0)

    def test_region_covered_twice_counts_once(self):
        """Winding number 2 is filled once."""
        assert Area.from_rings([np.vstack([SQUARE, SQUARE])]).area == pytest.approx(100.0)

    def test_opposite_ring_cuts_hole(self):
        """An oppositely oriented inner ring brings the winding back to zero."""
        assert Area.from_rings([BIG, INNER[::-1]]).area == pytest.approx(800.0)

    def test_same_orientation_ring_does_not_cut_hole(self):
        """Non-zero rule, not even-odd: nested rings of equal orientation stay filled."""
        assert Area.from_rings([BIG, INNER]).area == pytest.approx(900.0)

    def test_degenerate_rings_ignored(self):
        """Rings without two distinct vertices contribute nothing."""
        assert Area.from_rings([np.array([[1.0, 1.0], [1.0, 1.0]])]).is_empty

    def test_from_outline(self):
        """Outlines are flattened and filled."""
        outline = Outline.join(Outline.from_polygon(BIG), Outline.from_polygon(INNER[::-1]))
        assert Area.from_outline(outline).area == pytest.approx(800.0)
        assert Area.from_outline(None).is_empty


class TestAreaOperations:
    """Boolean operations and contour extraction."""

    def test_rect(self):
        """Rectangles; zero-sized rectangles are empty."""
        assert Area.from_rect(0.0, 0.0, 4.0, 5.0).area == pytest.approx(20.0)
        assert Area.from_rect(0.0, 0.0, 0.0, 5.0).is_empty

    def test_union_intersect_subtract(self):
        """Two overlapping rectangles."""
        a = Area.from_rect(0.0, 0.0, 10.0, 10.0)
        b = Area.from_rect(5.0, 0.0, 10.0, 10.0)
        assert a.union(b).area == pytest.approx(150.0)
        assert a.intersect(b).area == pytest.approx(50.0)
        assert a.subtract(b).area == pytest.approx(50.0)
        assert a.symmetric_difference_area(b) == pytest.approx(100.0)

    def test_touching_intersection_is_empty(self):
        """Shared edges leave no polygonal intersection."""
        a = Area.from_rect(0.0, 0.0, 10.0, 10.0)
        b = Area.from_rect(10.0, 0.0, 10.0, 10.0)
        assert a.intersect(b).is_empty

    def test_union_all(self):
        """Union of many areas."""
        areas = [Area.from_rect(float(x), 0.0, 10.0, 10.0) for x in (0, 20, 40)]
        assert Area.union_all(areas).area == pytest.approx(300.0)
        assert Area.union_all([]).is_empty

    def test_contours_orientation(self):
        """Outer contours are positive, holes negative."""
        area = Area.from_rect(0.0, 0.0, 30.0, 30.0).subtract(Area.from_rect(10.0, 10.0, 10.0, 10.0))
        contours = area.contours()
        assert len(contours) == 2
        assert Polygon.signed_area(contours[0].points) == pytest.approx(900.0)
        assert Polygon.signed_area(contours[1].points) == pytest.approx(-100.0)

    def test_polygons_keep_holes(self):
        """Every component becomes one outline with its holes as sub-paths."""
        area = (
            Area.from_rect(0.0, 0.0, 30.0, 30.0)
            .subtract(Area.from_rect(10.0, 10.0, 10.0, 10.0))
            .union(Area.from_rect(50.0, 0.0, 10.0, 10.0))
        )
        polygons = area.polygons()
        assert len(polygons) == 2
        assert sorted(p.commands.count("M") for p in polygons) == [1, 2]

    def test_components(self):
        """Each connected polygon becomes its own area, holes stay with it."""
        area = (
            Area.from_rect(0.0, 0.0, 30.0, 30.0)
            .subtract(Area.from_rect(10.0, 10.0, 10.0, 10.0))
            .union(Area.from_rect(50.0, 0.0, 10.0, 10.0))
        )
        components = area.components()
        assert sorted(c.area for c in components) == pytest.approx([100.0, 800.0])
        assert Area().components() == []

    def test_distance(self):
        """Zero inside, Euclidean outside, infinite for nothing."""
        area = Area.from_rect(0.0, 0.0, 10.0, 10.0)
        assert area.distance((5.0, 5.0)) == 0.0
        assert area.distance((13.0, 14.0)) == pytest.approx(5.0)
        assert Area().distance((0.0, 0.0)) == float("inf")

    def test_contours_round_trip(self):
        """Filling the joined contours reproduces the area."""
        area = Area.from_rect(0.0, 0.0, 30.0, 30.0).subtract(Area.from_rect(10.0, 10.0, 10.0, 10.0))
        again = Area.from_outline(area.to_outline())
        assert again.symmetric_difference_area(area) == pytest.approx(0.0, abs=1e-9)
