"""Boolean-cleaned regions built on Shapely.

An Area is a set of non-overlapping closed contours. Offsetting and
decoration code only talks to this module, never to Shapely directly.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import shapely.geometry
import shapely.geometry.base
import shapely.geometry.polygon
import shapely.ops
from numpy.typing import NDArray

from skipink.common import FLATNESS_TOLERANCE
from skipink.geom import Polygon
from skipink.outline import Outline, flatten


###############################################################################
# Winding
###############################################################################
def winding_numbers(points: NDArray[np.float64], ring: NDArray[np.float64]) -> NDArray[np.int64]:
    """Winding numbers of all _points_ with respect to the closed _ring_.

    Crossing-number formulation: an upward edge crossing the horizontal ray
    to the right of the point counts +1 when the point lies left of it, a
    downward edge counts -1 when the point lies right of it.

    Args:
        points: Query points of shape (m, 2).
        ring: Ring vertices of shape (n, 2), implicitly closed.

    Returns:
        NDArray[np.int64]: One winding number per query point.
    """
    x0 = ring[:, 0][np.newaxis, :]
    y0 = ring[:, 1][np.newaxis, :]
    x1 = np.roll(ring[:, 0], -1)[np.newaxis, :]
    y1 = np.roll(ring[:, 1], -1)[np.newaxis, :]
    px = points[:, 0][:, np.newaxis]
    py = points[:, 1][:, np.newaxis]

    side = (x1 - x0) * (py - y0) - (px - x0) * (y1 - y0)
    upward = (y0 <= py) & (y1 > py) & (side > 0)
    downward = (y0 > py) & (y1 <= py) & (side < 0)
    return np.sum(upward, axis=1, dtype=np.int64) - np.sum(downward, axis=1, dtype=np.int64)


def _polygonal(geometry: Optional[shapely.geometry.base.BaseGeometry]) -> shapely.geometry.base.BaseGeometry:
    """Keep the polygonal parts of a geometry (drops points and lines left over by boolean ops)."""
    if geometry is None or geometry.is_empty:
        return shapely.geometry.Polygon()
    polygonal = (shapely.geometry.Polygon, shapely.geometry.MultiPolygon)
    if isinstance(geometry, polygonal):
        return geometry
    if isinstance(geometry, shapely.geometry.GeometryCollection):
        parts = [g for g in geometry.geoms if isinstance(g, polygonal)]
        if parts:
            return shapely.ops.unary_union(parts)
    return shapely.geometry.Polygon()


###############################################################################
# Area
###############################################################################
class Area:
    """Region represented by non-overlapping Shapely polygons.

    Areas are values: every operation returns a new Area.
    """

    _geometry: shapely.geometry.base.BaseGeometry

    def __init__(self, geometry: Optional[shapely.geometry.base.BaseGeometry] = None):
        """Wrap a Shapely geometry; non-polygonal parts are dropped."""
        self._geometry = _polygonal(geometry)

    @classmethod
    def from_rings(cls, rings: Iterable[NDArray[np.float64]]) -> Area:
        """Fill a set of closed rings with the non-zero winding rule.

        The rings may self-intersect and overlap each other. All rings are
        noded together, the resulting faces are polygonized and a face is
        kept when the summed winding number of an interior point is non-zero.
        Regions covered twice therefore count as filled once.
        """
        closed: List[NDArray[np.float64]] = [
            Polygon.remove_zero_length_edges(np.asarray(r, dtype=np.float64)) for r in rings
        ]
        closed = [r for r in closed if r.shape[0] >= 2]
        if not closed:
            return cls()

        lines = [shapely.geometry.LineString(np.vstack([r, r[:1]])) for r in closed]
        noded = shapely.ops.unary_union(lines)
        faces = list(shapely.ops.polygonize(noded))
        if not faces:
            return cls()

        samples = np.array([face.representative_point().coords[0] for face in faces], dtype=np.float64)
        winding = np.zeros(len(faces), dtype=np.int64)
        for ring in closed:
            winding += winding_numbers(samples, ring)

        kept = [face for face, w in zip(faces, winding) if w != 0]
        return cls(shapely.ops.unary_union(kept) if kept else None)

    @classmethod
    def from_outline(cls, outline: Optional[Outline], tolerance: float = FLATNESS_TOLERANCE) -> Area:
        """Area covered by an outline filled with the non-zero winding rule."""
        if outline is None:
            return cls()
        return cls.from_rings(flatten(outline, tolerance))

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> Area:
        """Axis-aligned rectangle."""
        if width <= 0.0 or height <= 0.0:
            return cls()
        return cls(shapely.geometry.box(x, y, x + width, y + height))

    @classmethod
    def union_all(cls, areas: Sequence[Area]) -> Area:
        """Union of any number of areas."""
        if not areas:
            return cls()
        return cls(shapely.ops.unary_union([a.geometry for a in areas]))

    @property
    def geometry(self) -> shapely.geometry.base.BaseGeometry:
        """The wrapped Shapely geometry (Polygon or MultiPolygon, possibly empty)."""
        return self._geometry

    @property
    def is_empty(self) -> bool:
        """True if the area covers nothing."""
        return self._geometry.is_empty

    @property
    def area(self) -> float:
        """Covered area."""
        return float(self._geometry.area)

    @property
    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """(xmin, ymin, xmax, ymax) or None for an empty area."""
        if self.is_empty:
            return None
        return tuple(float(v) for v in self._geometry.bounds)  # type: ignore[return-value]

    def union(self, other: Area) -> Area:
        """Points in either area."""
        return Area(self._geometry.union(other.geometry))

    def intersect(self, other: Area) -> Area:
        """Points in both areas."""
        return Area(self._geometry.intersection(other.geometry))

    def subtract(self, other: Area) -> Area:
        """Points of this area not in _other_."""
        return Area(self._geometry.difference(other.geometry))

    def symmetric_difference_area(self, other: Area) -> float:
        """Size of the region covered by exactly one of both areas."""
        return float(self._geometry.symmetric_difference(other.geometry).area)

    def _oriented_polygons(self) -> List[shapely.geometry.Polygon]:
        if self.is_empty:
            return []
        if isinstance(self._geometry, shapely.geometry.MultiPolygon):
            polygons = list(self._geometry.geoms)
        else:
            polygons = [self._geometry]
        # sign=1.0: exterior with positive, holes with negative signed area
        return [shapely.geometry.polygon.orient(p, sign=1.0) for p in polygons if not p.is_empty]

    @staticmethod
    def _ring_outline(ring: shapely.geometry.LinearRing) -> Outline:
        coords = np.asarray(ring.coords, dtype=np.float64)[:-1, :2]
        return Outline.from_polygon(coords)

    def components(self) -> List[Area]:
        """One area per connected polygon."""
        return [Area(polygon) for polygon in self._oriented_polygons()]

    def distance(self, point: Sequence[float]) -> float:
        """Euclidean distance from _point_ to the area, 0 inside, inf for an empty area."""
        if self.is_empty:
            return float("inf")
        return float(self._geometry.distance(shapely.geometry.Point(float(point[0]), float(point[1]))))

    def contours(self) -> List[Outline]:
        """Every closed contour as its own single sub-path outline.

        Outer contours have positive signed area, holes negative, so the
        joined contours filled with the non-zero rule reproduce the area.
        """
        result: List[Outline] = []
        for polygon in self._oriented_polygons():
            result.append(self._ring_outline(polygon.exterior))
            result.extend(self._ring_outline(hole) for hole in polygon.interiors)
        return result

    def polygons(self) -> List[Outline]:
        """One outline per connected component, holes included as extra sub-paths."""
        result: List[Outline] = []
        for polygon in self._oriented_polygons():
            rings = [self._ring_outline(polygon.exterior)]
            rings.extend(self._ring_outline(hole) for hole in polygon.interiors)
            result.append(Outline.join(*rings))
        return result

    def to_outline(self) -> Outline:
        """All contours joined into one outline."""
        return Outline.join(*self.contours())

    def __repr__(self) -> str:
        return f"Area(area={self.area:g}, contours={len(self.contours())})"


def main():
    """Main"""
    # bow-tie ring: two triangles, both filled under the non-zero rule
    bow_tie = np.array([[0.0, 0.0], [10.0, 10.0], [10.0, 0.0], [0.0, 10.0]])
    print(Area.from_rings([bow_tie]))


if __name__ == "__main__":
    main()
