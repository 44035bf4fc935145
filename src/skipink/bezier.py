"""Bezier curve handling utilities for outline flattening and extent calculation."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Coefficients closer to zero than this are treated as zero when solving for extrema
_ROOT_EPS: float = 1.0e-12

CurvePoints = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    Provides evaluation, flattening into point sequences at a given
    flatness tolerance, and the exact extrema of a curve obtained from
    the roots of its derivative.
    """

    ###########################################################################
    # Evaluation
    ###########################################################################

    @staticmethod
    def evaluate_quadratic(points: CurvePoints, t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Evaluate a quadratic Bezier curve at the parameters _t_.

        Args:
            points: Control points (P0, P1, P2).
            t: 1D array of curve parameters.

        Returns:
            NDArray[np.float64]: Points of shape (len(t), 2).
        """
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        t = t[:, np.newaxis]
        omt = 1.0 - t
        return omt * omt * pts[0] + 2.0 * omt * t * pts[1] + t * t * pts[2]

    @staticmethod
    def evaluate_cubic(points: CurvePoints, t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Evaluate a cubic Bezier curve at the parameters _t_.

        Args:
            points: Control points (P0, P1, P2, P3).
            t: 1D array of curve parameters.

        Returns:
            NDArray[np.float64]: Points of shape (len(t), 2).
        """
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        t = t[:, np.newaxis]
        omt = 1.0 - t
        omt2 = omt * omt
        t2 = t * t
        return omt2 * omt * pts[0] + 3.0 * omt2 * t * pts[1] + 3.0 * omt * t2 * pts[2] + t2 * t * pts[3]

    ###########################################################################
    # Flattening
    ###########################################################################

    @staticmethod
    def quadratic_steps(points: CurvePoints, tolerance: float) -> int:
        """Number of uniform parameter steps keeping the chords within _tolerance_.

        The second derivative of a quadratic is the constant 2*(P0 - 2*P1 + P2),
        so a chord spanning h in t deviates at most |P0 - 2*P1 + P2| * h^2 / 4.
        """
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        dd = float(np.hypot(*(pts[0] - 2.0 * pts[1] + pts[2])))
        if dd <= 0.0:
            return 1
        return max(1, math.ceil(math.sqrt(dd / (4.0 * tolerance))))

    @staticmethod
    def cubic_steps(points: CurvePoints, tolerance: float) -> int:
        """Number of uniform parameter steps keeping the chords within _tolerance_.

        |B''(t)| of a cubic is bounded by 6 * max(|P0 - 2*P1 + P2|, |P1 - 2*P2 + P3|).
        """
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        dd0 = float(np.hypot(*(pts[0] - 2.0 * pts[1] + pts[2])))
        dd1 = float(np.hypot(*(pts[1] - 2.0 * pts[2] + pts[3])))
        dd = max(dd0, dd1)
        if dd <= 0.0:
            return 1
        return max(1, math.ceil(math.sqrt(3.0 * dd / (4.0 * tolerance))))

    @classmethod
    def _flatten_parameters(cls, steps: int, extrema: List[float]) -> NDArray[np.float64]:
        uniform = np.arange(1, steps + 1, dtype=np.float64) / steps
        if not extrema:
            return uniform
        return np.unique(np.concatenate([uniform, np.asarray(extrema, dtype=np.float64)]))

    @classmethod
    def flatten_quadratic(cls, points: CurvePoints, tolerance: float) -> NDArray[np.float64]:
        """Flatten a quadratic curve into points for t in (0, 1].

        The start point is not included. The parameters of the x and y
        extrema are added to the uniform steps so the flattened polyline
        reaches the exact bounding box of the curve.

        Returns:
            NDArray[np.float64]: Points of shape (n, 2), the last one being P2.
        """
        t = cls._flatten_parameters(
            cls.quadratic_steps(points, tolerance),
            cls.quadratic_extrema_parameters(points, 0) + cls.quadratic_extrema_parameters(points, 1),
        )
        flat = cls.evaluate_quadratic(points, t)
        flat[-1] = np.asarray(points, dtype=np.float64)[2, :2]
        return flat

    @classmethod
    def flatten_cubic(cls, points: CurvePoints, tolerance: float) -> NDArray[np.float64]:
        """Flatten a cubic curve into points for t in (0, 1].

        Same contract as flatten_quadratic().
        """
        t = cls._flatten_parameters(
            cls.cubic_steps(points, tolerance),
            cls.cubic_extrema_parameters(points, 0) + cls.cubic_extrema_parameters(points, 1),
        )
        flat = cls.evaluate_cubic(points, t)
        flat[-1] = np.asarray(points, dtype=np.float64)[3, :2]
        return flat

    ###########################################################################
    # Extrema
    ###########################################################################

    @staticmethod
    def quadratic_extrema_parameters(points: CurvePoints, axis: int) -> List[float]:
        """Parameters in (0, 1) where the derivative of the given axis vanishes.

        B'(t) = 2 * ((P1 - P0) + t * (P0 - 2*P1 + P2)), which has a single root.
        """
        p0 = float(points[0][axis])
        p1 = float(points[1][axis])
        p2 = float(points[2][axis])
        denominator = p0 - 2.0 * p1 + p2
        if abs(denominator) < _ROOT_EPS:
            return []
        t = (p0 - p1) / denominator
        return [t] if 0.0 < t < 1.0 else []

    @staticmethod
    def cubic_extrema_parameters(points: CurvePoints, axis: int) -> List[float]:
        """Parameters in (0, 1) where the derivative of the given axis vanishes.

        B'(t) / 3 = a*t^2 + b*t + c with
            a = -P0 + 3*P1 - 3*P2 + P3
            b = 2 * (P0 - 2*P1 + P2)
            c = P1 - P0
        solved with the quadratic formula (or linearly when a vanishes).
        """
        p0 = float(points[0][axis])
        p1 = float(points[1][axis])
        p2 = float(points[2][axis])
        p3 = float(points[3][axis])
        a = -p0 + 3.0 * p1 - 3.0 * p2 + p3
        b = 2.0 * (p0 - 2.0 * p1 + p2)
        c = p1 - p0

        roots: List[float] = []
        if abs(a) < _ROOT_EPS:
            if abs(b) >= _ROOT_EPS:
                roots.append(-c / b)
        else:
            discriminant = b * b - 4.0 * a * c
            if discriminant >= 0.0:
                sqrt_d = math.sqrt(discriminant)
                roots.append((-b + sqrt_d) / (2.0 * a))
                roots.append((-b - sqrt_d) / (2.0 * a))
        return sorted({t for t in roots if 0.0 < t < 1.0})

    @classmethod
    def quadratic_extent(cls, points: CurvePoints, axis: int = 0) -> Tuple[float, float]:
        """Exact (min, max) of a quadratic curve along the given axis."""
        values = [float(points[0][axis]), float(points[2][axis])]
        t = cls.quadratic_extrema_parameters(points, axis)
        if t:
            values.extend(cls.evaluate_quadratic(points, np.asarray(t))[:, axis].tolist())
        return min(values), max(values)

    @classmethod
    def cubic_extent(cls, points: CurvePoints, axis: int = 0) -> Tuple[float, float]:
        """Exact (min, max) of a cubic curve along the given axis."""
        values = [float(points[0][axis]), float(points[3][axis])]
        t = cls.cubic_extrema_parameters(points, axis)
        if t:
            values.extend(cls.evaluate_cubic(points, np.asarray(t))[:, axis].tolist())
        return min(values), max(values)

    ###########################################################################
    # Segments of any degree (line = 2, quadratic = 3, cubic = 4 control points)
    ###########################################################################

    @classmethod
    def evaluate(cls, points: CurvePoints, t: NDArray[np.float64]) -> NDArray[np.float64]:
        """Evaluate a line, quadratic or cubic segment at the parameters _t_."""
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        if pts.shape[0] == 4:
            return cls.evaluate_cubic(pts, t)
        if pts.shape[0] == 3:
            return cls.evaluate_quadratic(pts, t)
        t = t[:, np.newaxis]
        return pts[0] + t * (pts[1] - pts[0])

    @classmethod
    def extrema_parameters(cls, points: CurvePoints, axis: int) -> List[float]:
        """Interior extremum parameters of a segment of any degree (none for lines)."""
        if len(points) == 4:
            return cls.cubic_extrema_parameters(points, axis)
        if len(points) == 3:
            return cls.quadratic_extrema_parameters(points, axis)
        return []

    @staticmethod
    def power_coefficients(points: CurvePoints, axis: int) -> NDArray[np.float64]:
        """Polynomial coefficients of one axis of a segment, highest power first."""
        p = np.asarray(points, dtype=np.float64)[:, axis]
        if p.shape[0] == 4:
            return np.array(
                [-p[0] + 3.0 * p[1] - 3.0 * p[2] + p[3], 3.0 * (p[0] - 2.0 * p[1] + p[2]), 3.0 * (p[1] - p[0]), p[0]]
            )
        if p.shape[0] == 3:
            return np.array([p[0] - 2.0 * p[1] + p[2], 2.0 * (p[1] - p[0]), p[0]])
        return np.array([p[1] - p[0], p[0]])

    @classmethod
    def parameters_at(cls, points: CurvePoints, axis: int, value: float) -> List[float]:
        """Parameters in [0, 1] where the segment's coordinate on _axis_ equals _value_.

        A segment lying entirely on the value (e.g. a horizontal line on a
        horizontal edge) has no isolated crossings and returns [].
        """
        coefficients = cls.power_coefficients(points, axis)
        coefficients[-1] -= value
        nonzero = np.flatnonzero(np.abs(coefficients) >= _ROOT_EPS)
        if nonzero.size == 0 or nonzero[0] == coefficients.shape[0] - 1:
            return []
        roots = np.roots(coefficients[nonzero[0] :])
        real = roots[np.abs(roots.imag) < 1.0e-9].real
        return sorted({min(1.0, max(0.0, float(t))) for t in real if -1.0e-9 <= t <= 1.0 + 1.0e-9})

    @classmethod
    def pieces_in_box(
        cls, points: CurvePoints, x_range: Tuple[float, float], y_range: Tuple[float, float]
    ) -> List[Tuple[float, float]]:
        """Parameter intervals (t0, t1) where the segment runs inside the closed box.

        The segment is split where it crosses one of the four box edges;
        every part whose middle lies inside the box is kept, touching parts
        are joined. A segment merely touching the box yields (t, t).
        """
        breaks = {0.0, 1.0}
        for axis, (lower, upper) in enumerate((x_range, y_range)):
            breaks.update(cls.parameters_at(points, axis, lower))
            breaks.update(cls.parameters_at(points, axis, upper))
        params = sorted(breaks)

        def inside(t: float) -> bool:
            x, y = cls.evaluate(points, np.array([t]))[0]
            eps = 1.0e-9
            return (
                x_range[0] - eps <= x <= x_range[1] + eps and y_range[0] - eps <= y <= y_range[1] + eps
            )

        pieces: List[Tuple[float, float]] = []
        for t0, t1 in zip(params, params[1:]):
            if not inside((t0 + t1) / 2.0):
                continue
            if pieces and pieces[-1][1] == t0:
                pieces[-1] = (pieces[-1][0], t1)
            else:
                pieces.append((t0, t1))
        for t in params:
            if inside(t) and not any(t0 <= t <= t1 for t0, t1 in pieces):
                pieces.append((t, t))
        return sorted(pieces)

    @classmethod
    def piece_extent(cls, points: CurvePoints, t0: float, t1: float, axis: int = 0) -> Tuple[float, float]:
        """Exact (min, max) along _axis_ of the segment restricted to [t0, t1]."""
        params = [t0, t1] + [t for t in cls.extrema_parameters(points, axis) if t0 < t < t1]
        values = cls.evaluate(points, np.asarray(params, dtype=np.float64))[:, axis]
        return float(values.min()), float(values.max())


def main():
    """Main"""
    quad = [(250.0, 100.0), (265.0, 150.0), (250.0, 200.0)]
    print("quadratic x-extent:", BezierCurve.quadratic_extent(quad))
    print("flattened:", BezierCurve.flatten_quadratic(quad, 1.0).shape[0], "points")


if __name__ == "__main__":
    main()
