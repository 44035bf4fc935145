"""Corner geometry for outline offsetting."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from skipink.common import MITER_LIMIT, ROUND_CHORD_LENGTH, ROUND_MAX_STEP, JoinKind
from skipink.geom import GeomMath

Point = Tuple[float, float]


class SegmentJoinResolver:
    """Computes the offset geometry emitted at a single vertex.

    The vertex V is shared by the incoming edge (prev -> V) and the outgoing
    edge (V -> next). Offset points lie on the left-hand side of each edge,
    which is the outside of a positive-area polygon in y-down device
    coordinates:

        offset = V + (dy, -dx) * distance

    with (dx, dy) the unit direction of the edge.

    Concave vertices are walked through V itself (incoming offset point,
    V, outgoing offset point). The loop this creates overlaps the
    neighbouring offset edges and disappears once the ring is filled with
    the non-zero winding rule (see Chen & McMains, "Polygon Offsetting by
    Computing Winding Numbers", DAC 2005).
    """

    @staticmethod
    def resolve(
        # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
        prev_pt: Sequence[float],
        vertex: Sequence[float],
        next_pt: Sequence[float],
        distance: float,
        join: JoinKind,
        miter_limit: float = MITER_LIMIT,
        round_chord: float = ROUND_CHORD_LENGTH,
        round_max_step: float = ROUND_MAX_STEP,
    ) -> List[Point]:
        """Points emitted for _vertex_, in ring order.

        Args:
            prev_pt: Start of the incoming edge.
            vertex: The shared vertex V.
            next_pt: End of the outgoing edge.
            distance: Perpendicular offset distance (>= 0).
            join: Join style used at convex vertices.
            miter_limit: Miter joins longer than miter_limit * distance become bevels.
            round_chord: Target chord length of round joins.
            round_max_step: Upper bound for the angular step of round joins (radians).

        Returns:
            List of (x, y) points.
        """
        vx = float(vertex[0])
        vy = float(vertex[1])
        cdx, cdy = GeomMath.unit_direction(prev_pt, vertex)
        ndx, ndy = GeomMath.unit_direction(vertex, next_pt)

        incoming = (vx + cdy * distance, vy - cdx * distance)
        outgoing = (vx + ndy * distance, vy - ndx * distance)

        # unit bisector of both edge normals, zero for anti-parallel edges
        mdx = cdy + ndy
        mdy = -(cdx + ndx)
        m_length = math.hypot(mdx, mdy)
        if m_length > 0.0:
            mdx /= m_length
            mdy /= m_length
        # cosine of the half angle between the normals, may be zero
        cos_half = GeomMath.dot(cdy, -cdx, mdx, mdy)

        if GeomMath.cross(ndx, ndy, cdx, cdy) >= 0.0:
            return [incoming, (vx, vy), outgoing]

        if join is JoinKind.BEVEL:
            return [incoming, outgoing]

        if join is JoinKind.MITER:
            # apex lies distance / cos_half away from V; beyond miter_limit * distance use a bevel
            if cos_half * miter_limit < 1.0:
                return [incoming, outgoing]
            return [(vx + mdx * distance / cos_half, vy + mdy * distance / cos_half)]

        points: List[Point] = [incoming]
        if distance > 0.0:
            points.extend(
                SegmentJoinResolver._round_fan(vx, vy, cdx, cdy, cos_half, distance, round_chord, round_max_step)
            )
            points.append(outgoing)
        return points

    @staticmethod
    def _round_fan(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        vx: float,
        vy: float,
        cdx: float,
        cdy: float,
        cos_half: float,
        distance: float,
        round_chord: float,
        round_max_step: float,
    ) -> List[Point]:
        """Arc points between the incoming and the outgoing offset point, both excluded."""
        angle = math.atan2(-cdx, cdy)
        arc = 2.0 * math.acos(max(-1.0, min(1.0, cos_half)))
        step = min(round_max_step, round_chord / distance)
        angle_end = angle + arc - step

        # spread the partial step evenly on both ends of the arc
        remainder = arc - int(arc / step + 0.5) * step
        angle += remainder / 2.0

        points: List[Point] = []
        while angle < angle_end:
            angle += step
            points.append((math.cos(angle) * distance + vx, math.sin(angle) * distance + vy))
        return points
