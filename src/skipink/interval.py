"""Sweep-line interval union and complement used by decoration placement."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class Interval:
    """Half-open interval [start, start + length) on one axis.

    Attributes:
        start: Lower bound (inclusive).
        length: Extent of the interval (>= 0).
    """

    start: float
    length: float

    @classmethod
    def from_bounds(cls, lower: float, upper: float) -> Interval:
        """Interval covering [lower, upper)."""
        return cls(lower, upper - lower)

    @property
    def end(self) -> float:
        """Upper bound (exclusive)."""
        return self.start + self.length


def merge(intervals: Iterable[Interval]) -> List[Interval]:
    """Union of the given intervals as sorted, pairwise disjoint intervals.

    Each start adds +1 and each end adds -1 to a coordinate map (deltas at
    the same coordinate are summed). Sweeping the coordinates in increasing
    order with a depth counter, a merged interval opens when the depth
    leaves 0 and closes when it returns to 0. Intervals touching each other
    collapse into one and zero-length intervals vanish.
    """
    deltas: Dict[float, int] = defaultdict(int)
    for interval in intervals:
        deltas[interval.start] += 1
        deltas[interval.end] -= 1

    merged: List[Interval] = []
    depth = 0
    opened = 0.0
    for coordinate in sorted(deltas):
        delta = deltas[coordinate]
        if delta == 0:
            continue
        if depth == 0:
            opened = coordinate
        depth += delta
        if depth == 0:
            merged.append(Interval.from_bounds(opened, coordinate))
    return merged


def negate(merged: List[Interval], domain_start: float, domain_length: float) -> List[Interval]:
    """Gaps of _merged_ inside [domain_start, domain_start + domain_length).

    _merged_ must be the sorted, disjoint output of merge(). The result
    always has len(merged) + 1 entries: the leading gap, the gaps between
    consecutive intervals and the trailing gap. Gaps may be zero-length.
    """
    gaps: List[Interval] = []
    cursor = domain_start
    for interval in merged:
        gaps.append(Interval.from_bounds(cursor, interval.start))
        cursor = interval.end
    gaps.append(Interval.from_bounds(cursor, domain_start + domain_length))
    return gaps


def main():
    """Main"""
    merged = merge([Interval(100.0, 100.0), Interval(220.0, 20.0), Interval(150.0, 20.0)])
    print("merged:", merged)
    print("gaps:  ", negate(merged, 0.0, 800.0))


if __name__ == "__main__":
    main()
