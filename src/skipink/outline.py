"""Outline handling: immutable path command sequences and their flattening into polygons."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from skipink.bezier import BezierCurve
from skipink.common import FLATNESS_TOLERANCE, OutlineCmds
from skipink.geom import Polygon

logger = logging.getLogger(__name__)

###############################################################################
# OutlineCommandInfo
###############################################################################


@dataclass(frozen=True)
class OutlineCommandInfo:
    """Metadata for outline commands.

    Attributes:
        consumes_points: Number of points this command consumes
        is_segment: Whether this command draws a segment from the current point
    """

    consumes_points: int
    is_segment: bool


# Command registry with metadata
COMMAND_INFO = {
    "M": OutlineCommandInfo(1, False),  # MoveTo
    "L": OutlineCommandInfo(1, True),  # LineTo - line segment
    "Q": OutlineCommandInfo(2, True),  # Quadratic - curve segment
    "C": OutlineCommandInfo(3, True),  # Cubic - curve segment
    "Z": OutlineCommandInfo(0, False),  # ClosePath - implicit line back to the start, no points
}


###############################################################################
# OutlineCommandProcessor
###############################################################################


class OutlineCommandProcessor:
    """Handles command/point processing operations."""

    @staticmethod
    def get_point_consumption(cmd: str) -> int:
        """Return number of points consumed by command."""
        return COMMAND_INFO[cmd].consumes_points

    @staticmethod
    def is_known_command(cmd: str) -> bool:
        """Return True if the command tag is part of the outline vocabulary."""
        return cmd in COMMAND_INFO

    @staticmethod
    def iter_commands(
        commands: Sequence[str], points: NDArray[np.float64]
    ) -> Iterator[Tuple[OutlineCmds, NDArray[np.float64]]]:
        """Yield (command, consumed_points) pairs.

        Unknown command tags are skipped without consuming points. A command
        needing more points than remain ends the iteration. Both cases are
        logged at debug level only, a partially usable outline is still
        better than none.
        """
        point_idx = 0
        for cmd in commands:
            if not OutlineCommandProcessor.is_known_command(cmd):
                logger.debug("Skipping unknown outline command %r", cmd)
                continue
            consumed = OutlineCommandProcessor.get_point_consumption(cmd)
            if point_idx + consumed > points.shape[0]:
                logger.debug("Outline command %r at point %d lacks points, ignoring the rest", cmd, point_idx)
                return
            yield cmd, points[point_idx : point_idx + consumed]
            point_idx += consumed


###############################################################################
# Outline
###############################################################################


@dataclass(eq=False)
class Outline:
    """Closed-curve outline represented by points and corresponding commands.

    An outline contains 0..n sub-paths; each sub-path starts with M, is
    followed by an arbitrary mix of L/Q/C and usually ends with Z. Open
    sub-paths are treated as implicitly closed. Coordinates are device
    units with y pointing down.

    Outlines are immutable: the points array is read-only and the command
    sequence is a tuple.

    Attributes:
        _points: Array of 2D points (shape: n_points, 2)
        _commands: Tuple of commands consuming the points in order
    """

    _points: NDArray[np.float64]  # shape (n_points, 2)
    _commands: Tuple[str, ...]

    def __init__(
        self,
        points: Optional[Union[Sequence[Tuple[float, float]], NDArray[np.float64]]] = None,
        commands: Optional[Sequence[str]] = None,
    ):
        """
        Initialize an Outline from 2D points and commands.

        Args:
            points: a sequence of (x, y).
            commands: Drawing commands consuming the points in order.

        Raises:
            ValueError: If points is not a sequence of 2D points.
        """
        if points is None:
            arr = np.empty((0, 2), dtype=np.float64)
        else:
            arr = np.array(points, dtype=np.float64)
            if arr.size == 0:
                arr = arr.reshape(0, 2)

        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"points must have shape (n, 2), got {arr.shape}")

        arr.setflags(write=False)
        self._points = arr
        self._commands = tuple(commands) if commands is not None else ()

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> Outline:
        """Rectangle as a single closed sub-path with positive signed area."""
        return cls(
            [(x, y), (x + width, y), (x + width, y + height), (x, y + height)],
            ["M", "L", "L", "L", "Z"],
        )

    @classmethod
    def from_polygon(cls, points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]]) -> Outline:
        """Polygon vertices as a single closed sub-path."""
        arr = np.asarray(points, dtype=np.float64)
        if arr.shape[0] == 0:
            return cls()
        return cls(arr, ["M"] + ["L"] * (arr.shape[0] - 1) + ["Z"])

    @classmethod
    def join(cls, *outlines: Outline) -> Outline:
        """Concatenate the sub-paths of several outlines into one outline."""
        if not outlines:
            return cls()
        points = np.concatenate([o.points for o in outlines], axis=0)
        commands: List[str] = []
        for o in outlines:
            commands.extend(o.commands)
        return cls(points, commands)

    @property
    def points(self) -> NDArray[np.float64]:
        """The points of this outline as a read-only numpy array of shape (n_points, 2)."""
        return self._points

    @property
    def commands(self) -> Tuple[str, ...]:
        """The commands of this outline."""
        return self._commands

    @property
    def is_empty(self) -> bool:
        """True if the outline draws nothing."""
        return not any(COMMAND_INFO[cmd].is_segment for cmd in self._commands if cmd in COMMAND_INFO)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outline):
            return NotImplemented
        return self._commands == other._commands and np.array_equal(self._points, other._points)

    def __repr__(self) -> str:
        return f"Outline(commands={''.join(self._commands)!r}, points={self._points.shape[0]})"

    def segments(self) -> Iterator[NDArray[np.float64]]:
        """Yield the control points of every drawn segment.

        Lines yield 2 points, quadratics 3 and cubics 4, each starting at the
        current point. ClosePath and the implicit closing of open sub-paths
        yield a line back to the sub-path start unless it ends there anyway.
        """
        current: Optional[NDArray[np.float64]] = None
        start: Optional[NDArray[np.float64]] = None
        for cmd, cmd_points in OutlineCommandProcessor.iter_commands(self._commands, self._points):
            if cmd in ("M", "Z"):
                if current is not None and not np.array_equal(current, start):
                    yield np.vstack([current, start])
                if cmd == "M":
                    current = start = cmd_points[0]
                else:
                    current = start
                continue
            if current is None:
                continue  # segment without a current point
            yield np.vstack([current[np.newaxis], cmd_points])
            current = cmd_points[-1]
        if current is not None and not np.array_equal(current, start):
            yield np.vstack([current, start])

    def extent(self, axis: int = 0) -> Optional[Tuple[float, float]]:
        """Exact (min, max) of the outline along the given axis (0 = x, 1 = y).

        Lines contribute their end points, curves additionally the points
        where their derivative vanishes inside (0, 1).

        Returns:
            The extent, or None if the outline has no points.
        """
        lo = np.inf
        hi = -np.inf
        for cmd, cmd_points in OutlineCommandProcessor.iter_commands(self._commands, self._points):
            if cmd == "M":
                lo = min(lo, float(cmd_points[0][axis]))
                hi = max(hi, float(cmd_points[0][axis]))
        for segment in self.segments():
            seg_lo, seg_hi = BezierCurve.piece_extent(segment, 0.0, 1.0, axis)
            lo = min(lo, seg_lo)
            hi = max(hi, seg_hi)
        if lo > hi:
            return None
        return lo, hi

    def to_svg_path(self) -> str:
        """SVG path data (absolute commands) describing this outline."""
        parts: List[str] = []
        for cmd, cmd_points in OutlineCommandProcessor.iter_commands(self._commands, self._points):
            coords = " ".join(f"{x:g} {y:g}" for x, y in cmd_points)
            parts.append(f"{cmd} {coords}" if coords else cmd)
        return " ".join(parts)


###############################################################################
# Flattening
###############################################################################


def flatten(outline: Outline, tolerance: float = FLATNESS_TOLERANCE) -> List[NDArray[np.float64]]:
    """Flatten an outline into a set of closed polygons.

    Curves are replaced by chords deviating at most _tolerance_ from the
    curve (plus their exact extreme points). A new polygon starts at every
    MoveTo and after every ClosePath; a drawing command directly after a
    ClosePath continues from the start point of the closed sub-path.
    Zero-length edges are removed and polygons with fewer than two distinct
    vertices are dropped.

    Args:
        outline: The outline to flatten.
        tolerance: Flatness tolerance in device units (> 0).

    Returns:
        List of (n, 2) vertex arrays, each implicitly closed.
    """
    polygons: List[NDArray[np.float64]] = []
    current: List[NDArray[np.float64]] = []
    start: Optional[NDArray[np.float64]] = None

    def finish() -> None:
        if len(current) > 1:
            poly = Polygon.remove_zero_length_edges(np.vstack(current))
            if poly.shape[0] > 1:
                polygons.append(poly)
        current.clear()

    for cmd, cmd_points in OutlineCommandProcessor.iter_commands(outline.commands, outline.points):
        if cmd == "M":
            finish()
            start = cmd_points[0]
            current.append(cmd_points[:1])
            continue
        if start is None:
            logger.debug("Skipping %r without a current point", cmd)
            continue
        if cmd == "Z":
            finish()
            continue
        if not current:
            current.append(start[np.newaxis])
        last = current[-1][-1]
        if cmd == "L":
            current.append(cmd_points[:1])
        elif cmd == "Q":
            current.append(BezierCurve.flatten_quadratic([last, cmd_points[0], cmd_points[1]], tolerance))
        else:  # C
            current.append(
                BezierCurve.flatten_cubic([last, cmd_points[0], cmd_points[1], cmd_points[2]], tolerance)
            )
    finish()
    return polygons


def main():
    """Main"""
    glyph = Outline(
        [(220.0, 100.0), (250.0, 100.0), (265.0, 150.0), (250.0, 200.0), (220.0, 200.0)],
        ["M", "L", "Q", "L", "Z"],
    )
    print(glyph)
    print("x-extent:", glyph.extent(0))
    for poly in flatten(glyph):
        print("polygon with", poly.shape[0], "vertices, signed area", Polygon.signed_area(poly))


if __name__ == "__main__":
    main()
