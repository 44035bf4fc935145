"""Outline offsetting.

The offset of an outline is computed per outer sub-path: every vertex
contributes its join geometry to a single ring, the ring is filled with the
non-zero winding rule and all rings are united. This is the approach of the
Clipper library, with Shapely taking care of the winding cleanup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np
from numpy.typing import NDArray

from skipink.area import Area
from skipink.common import (
    FLATNESS_TOLERANCE,
    MITER_LIMIT,
    ROUND_CHORD_LENGTH,
    ROUND_MAX_STEP,
    JoinKind,
)
from skipink.geom import Polygon
from skipink.join import Point, SegmentJoinResolver
from skipink.outline import Outline, flatten

logger = logging.getLogger(__name__)


###############################################################################
# OffsetRequest
###############################################################################


@dataclass(frozen=True)
class OffsetRequest:
    """Parameters of one offset computation.

    Attributes:
        distance: Perpendicular distance between the outline and its offset.
            Must be >= 0; negative values are not supported (no insetting).
        join: Join style at convex vertices.
        flatness: Flattening tolerance for curves.
        miter_limit: Miter joins reaching further than miter_limit * distance become bevels.
        round_chord: Target chord length of round joins.
        round_max_step: Upper bound for the angular step of round joins (radians).
    """

    distance: float
    join: JoinKind = JoinKind.MITER
    flatness: float = FLATNESS_TOLERANCE
    miter_limit: float = MITER_LIMIT
    round_chord: float = ROUND_CHORD_LENGTH
    round_max_step: float = ROUND_MAX_STEP


###############################################################################
# OutlineOffsetEngine
###############################################################################


class OutlineOffsetEngine:
    """Stateless offset engine; all methods are pure functions of their arguments."""

    @staticmethod
    def offset_ring(polygon: NDArray[np.float64], request: OffsetRequest) -> List[Point]:
        """Raw offset ring of a single polygon, before winding cleanup.

        The polygon must be free of zero-length edges. The ring starts at the
        geometry of the polygon's second vertex (the end of the first edge).
        """
        count = polygon.shape[0]
        ring: List[Point] = []
        for i in range(count):
            ring.extend(
                SegmentJoinResolver.resolve(
                    polygon[i],
                    polygon[(i + 1) % count],
                    polygon[(i + 2) % count],
                    request.distance,
                    request.join,
                    miter_limit=request.miter_limit,
                    round_chord=request.round_chord,
                    round_max_step=request.round_max_step,
                )
            )
        return ring

    @staticmethod
    def offset_polygons(polygons: List[NDArray[np.float64]], request: OffsetRequest) -> Area:
        """Offset already flattened polygons; holes (negative area) are dropped."""
        areas: List[Area] = []
        for polygon in polygons:
            if not Polygon.is_outer(polygon):
                logger.debug("Dropping non-positive sub-path with %d vertices", polygon.shape[0])
                continue
            ring = OutlineOffsetEngine.offset_ring(polygon, request)
            areas.append(Area.from_rings([np.asarray(ring, dtype=np.float64)]))
        return Area.union_all(areas)

    @staticmethod
    def offset(outline: Outline, request: OffsetRequest) -> Area:
        """Offset every outer sub-path of _outline_ and unite the results.

        Args:
            outline: Closed outline in device units; curves are flattened at request.flatness.
            request: Offset parameters.

        Returns:
            Area: The offset region, empty for an empty outline.
        """
        return OutlineOffsetEngine.offset_polygons(flatten(outline, request.flatness), request)


def offset(
    outline: Outline,
    distance: float,
    join: JoinKind = JoinKind.MITER,
    flatness: float = FLATNESS_TOLERANCE,
) -> Area:
    """Offset _outline_ by _distance_ (>= 0) using the given join style.

    Convenience wrapper around OutlineOffsetEngine.offset() with the default
    miter limit and round join tuning.
    """
    return OutlineOffsetEngine.offset(outline, OffsetRequest(distance=distance, join=join, flatness=flatness))


def main():
    """Main"""
    square = Outline.from_rect(0.0, 0.0, 10.0, 10.0)
    for join in JoinKind:
        print(join.name, offset(square, 2.0, join))


if __name__ == "__main__":
    main()
