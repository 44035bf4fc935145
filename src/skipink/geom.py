"""Handling geometries"""

from __future__ import annotations

import math
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling."""

    @staticmethod
    def transform_point(
        affine_trafo: Sequence[Union[int, float]], point: Sequence[Union[int, float]]
    ) -> Tuple[float, float]:
        """
        Perform an affine transformation on the given 2D point.

        The given _affine_trafo_ is a list of 6 floats, performing an affine transformation.
        The transformation is defined as:
            | x' | = | a00 a01 b0 |   | x |
            | y' | = | a10 a11 b1 | * | y |
            | 1  | = |  0   0  1  |   | 1 |
        with
            affine_trafo = [a00, a01, a10, a11, b0, b1]
        See also shapely - Affine Transformations

        Args:
            affine_trafo (Tuple/List[float]): Affine transformation - [a00, a01, a10, a11, b0, b1]
            point (Tuple/List[float]): 2D point - (x, y)

        Returns:
            Tuple[float, float]: the transformed point
        """
        x_new = float(affine_trafo[0] * point[0] + affine_trafo[1] * point[1] + affine_trafo[4])
        y_new = float(affine_trafo[2] * point[0] + affine_trafo[3] * point[1] + affine_trafo[5])
        return (x_new, y_new)

    @staticmethod
    def unit_direction(
        start: Sequence[float], end: Sequence[float]
    ) -> Tuple[float, float]:
        """Unit vector pointing from _start_ to _end_.

        The caller guarantees that both points differ (zero-length edges are
        filtered before offsetting).
        """
        dx = float(end[0]) - float(start[0])
        dy = float(end[1]) - float(start[1])
        length = math.hypot(dx, dy)
        return dx / length, dy / length

    @staticmethod
    def cross(ax: float, ay: float, bx: float, by: float) -> float:
        """z-component of the cross product of a and b."""
        return ax * by - ay * bx

    @staticmethod
    def dot(ax: float, ay: float, bx: float, by: float) -> float:
        """Dot product of a and b."""
        return ax * bx + ay * by


###############################################################################
# Polygon
###############################################################################
class Polygon:
    """Static helpers for closed polygons given as (n, 2) vertex arrays.

    The closing edge from the last to the first vertex is implicit.
    Coordinates are device units with y pointing down, so a positive
    signed area means clockwise on screen (an outer contour) and a
    negative one a hole.
    """

    @staticmethod
    def signed_area(points: NDArray[np.float64]) -> float:
        """Shoelace sum of consecutive cross products, halved."""
        if points.shape[0] < 3:
            return 0.0
        x = points[:, 0]
        y = points[:, 1]
        x_next = np.roll(x, -1)
        y_next = np.roll(y, -1)
        return float(np.sum(x * y_next - x_next * y) / 2.0)

    @staticmethod
    def area(points: NDArray[np.float64]) -> float:
        """Absolute area of the polygon."""
        return abs(Polygon.signed_area(points))

    @staticmethod
    def is_outer(points: NDArray[np.float64]) -> bool:
        """True for positive-area (outer) polygons, False for holes and degenerate ones."""
        return Polygon.signed_area(points) > 0.0

    @staticmethod
    def remove_zero_length_edges(points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Drop vertices equal to their predecessor, including the implicit closing edge."""
        if points.shape[0] == 0:
            return points
        keep = np.ones(points.shape[0], dtype=bool)
        keep[1:] = np.any(points[1:] != points[:-1], axis=1)
        cleaned = points[keep]
        while cleaned.shape[0] > 1 and np.array_equal(cleaned[-1], cleaned[0]):
            cleaned = cleaned[:-1]
        return cleaned


def main():
    """Main"""
    square = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])
    print("signed area:", Polygon.signed_area(square))
    print("reversed:   ", Polygon.signed_area(square[::-1]))


if __name__ == "__main__":
    main()
