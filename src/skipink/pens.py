"""Classes related to the FontTools library."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from fontTools.pens.basePen import BasePen

from skipink.geom import GeomMath
from skipink.outline import Outline

# Font units are y-up; device units are y-down
Y_FLIP_TRAFO: Tuple[float, ...] = (1.0, 0.0, 0.0, -1.0, 0.0, 0.0)


class OutlinePen(BasePen):
    """
    Records glyph drawing commands into an Outline.

    Supports the commands: M, L, Q, C, Z (all absolute). Every point is
    transformed by an affine transformation [a00, a01, a10, a11, b0, b1]
    on the way in, by default a y-flip from font units to device units.
    Use for_glyph_run() to place a glyph at a position and size.

    TrueType outer contours (clockwise in font units) come out with a
    positive signed area after the y-flip, so they are offset as outers.

    Access the result via `.outline` after drawing one or more glyphs.
    """

    _points: List[Tuple[float, float]]
    _commands: List[str]
    _affine_trafo: Sequence[float]

    def __init__(self, glyphSet=None, affine_trafo: Optional[Sequence[float]] = None):
        """
        Initialize the OutlinePen.

        Parameters:
            glyphSet (GlyphSet, optional): The glyph set to resolve components with.
            affine_trafo (Sequence[float], optional): Transformation applied to every point.
                Defaults to a y-flip.
        """
        super().__init__(glyphSet)
        self._affine_trafo = Y_FLIP_TRAFO if affine_trafo is None else tuple(affine_trafo)
        self._points = []
        self._commands = []

    @classmethod
    def for_glyph_run(
        cls, scale: float, origin_x: float, baseline_y: float, glyphSet=None
    ) -> OutlinePen:
        """Pen placing font-unit glyphs at (origin_x, baseline_y) in device units.

        Maps (x, y) to (origin_x + x * scale, baseline_y - y * scale).
        """
        return cls(glyphSet, (scale, 0.0, 0.0, -scale, origin_x, baseline_y))

    def _add(self, cmd: str, *pts: Tuple[float, float]) -> None:
        self._commands.append(cmd)
        self._points.extend(GeomMath.transform_point(self._affine_trafo, pt) for pt in pts)

    # BasePen callback methods -------------------------------------------------
    def _moveTo(self, pt: Tuple[float, float]):
        self._add("M", pt)

    def _lineTo(self, pt: Tuple[float, float]):
        self._add("L", pt)

    def _qCurveToOne(self, pt1: Tuple[float, float], pt2: Tuple[float, float]):
        # quadratic bezier: one control point and an end point
        self._add("Q", pt1, pt2)

    def _curveToOne(self, pt1: Tuple[float, float], pt2: Tuple[float, float], pt3: Tuple[float, float]):
        # cubic bezier: two control points and an end point
        self._add("C", pt1, pt2, pt3)

    def _closePath(self):
        self._commands.append("Z")

    def _endPath(self):
        # glyph contours are closed areas, an open contour is closed implicitly
        self._commands.append("Z")

    @property
    def outline(self) -> Outline:
        """The recorded drawing as an Outline."""
        return Outline(self._points, self._commands)

    def reset(self) -> None:
        """Clear recorded commands and points."""
        self._points = []
        self._commands = []
