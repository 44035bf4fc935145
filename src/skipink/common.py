"""Central module containing constants and definitions for outline offsetting and decoration."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Literal

###############################################################################
# Types
###############################################################################


OutlineCmds = Literal[  # Type-Definition for path commands used in Outline
    # MoveTo (1 point) - start a new sub-path and move the current point to (x,y)
    "M",
    # LineTo (1 point) - draw a straight line from the current point to (x,y)
    "L",
    # Quadratic Bezier To (2 points) - one control point and an endpoint (x,y)
    "Q",
    # Cubic Bezier To (3 points) - two control points and an endpoint (x,y)
    "C",
    # ClosePath (0 points) - close sub-path by drawing a line back to its start point
    "Z",
]


###############################################################################
# Tuning defaults
###############################################################################

FLATNESS_TOLERANCE: float = 1.0  # max distance of a flattened chord from its curve (device units)
MITER_LIMIT: float = 4.0  # miter apex may reach at most MITER_LIMIT * distance from the vertex
ROUND_CHORD_LENGTH: float = 10.0  # target chord length of round joins (device units)
ROUND_MAX_STEP: float = 0.5  # upper bound for the angular step of round joins (radians)
DECORATION_THICKNESS_RATIO: float = 1.0 / 12.0  # decoration thickness relative to the font height


###############################################################################
# Enums
###############################################################################


class JoinKind(Enum):
    """Corner geometry used at convex vertices when offsetting."""

    BEVEL = "bevel"
    MITER = "miter"
    ROUND = "round"


class DecorationStrategy(IntEnum):
    """How a decoration band is split around the glyphs it crosses.

    The integer values are the ones accepted by the configuration.
    """

    STRAIGHT = 0
    LARGEST_GAP = 1
    OFFSET_MASK = 2

    @classmethod
    def parse(cls, value: str) -> DecorationStrategy:
        """Parse an integer value or a name like ``largest-gap`` / ``LARGEST_GAP``.

        Raises:
            ValueError: If the value names no strategy.
        """
        text = value.strip()
        if text.lstrip("-").isdigit():
            return cls(int(text))
        try:
            return cls[text.upper().replace("-", "_")]
        except KeyError as e:
            raise ValueError(f"Unknown decoration strategy '{value}'") from e


class DecorationKind(Enum):
    """Text decoration lines a band can be derived for."""

    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    OVERLINE = "overline"


###############################################################################
# Functions
###############################################################################


def main() -> None:
    """Display the enum values and tuning defaults."""
    for join in JoinKind:
        print(join, join.value)
    print()
    for strategy in DecorationStrategy:
        print(strategy, int(strategy))
    print()
    print("flatness:   ", FLATNESS_TOLERANCE)
    print("miter limit:", MITER_LIMIT)
    print("round chord:", ROUND_CHORD_LENGTH)
    print("round step: ", ROUND_MAX_STEP)


if __name__ == "__main__":
    main()
