"""
Locus Store
===========
The recorded pen trace, kept as an ordered list of styled path segments.

Why segments?
-------------
A renderer draws every segment as one polyline with a single colour and
width. Splitting on style changes and on explicit restarts means a pen jump
(resume after stop, moved gears) never shows up as a stray straight line.

Empty-segment policy:
    `set_style` on an empty last segment restyles it in place.
    `start_new_segment` always appends, even behind an empty segment.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable, Iterator, TYPE_CHECKING

import numpy as np

from spirodesign.model.geometry_primitives import Point

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass
class PathSegment:
    """One continuous run of the locus drawn in one style."""
    color: str
    size: float
    points: list[Point] = field(default_factory=list)

    @property
    def style(self) -> tuple[str, float]:
        return self.color, self.size

    def add_point(self, point: Point) -> None:
        self.points.append(Point(float(point.x), float(point.y)))

    def is_empty(self) -> bool:
        return not self.points

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def as_array(self) -> npt.NDArray[np.float64]:
        """(N, 2) array of the segment's points."""
        if not self.points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([(p.x, p.y) for p in self.points], dtype=np.float64)

    @staticmethod
    def from_array(color: str, size: float, points: npt.ArrayLike) -> PathSegment:
        arr = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return PathSegment(color, float(size), [Point(float(x), float(y)) for x, y in arr])


class Locus:
    """Ordered segments; the last one is always the append target."""

    def __init__(self, color: str, size: float) -> None:
        self._segments: list[PathSegment] = [PathSegment(color, float(size))]

    @classmethod
    def from_segments(cls, segments: Iterable[PathSegment]) -> Locus:
        segments = list(segments)
        if not segments:
            raise ValueError("A locus needs at least one segment.")
        locus = cls(segments[-1].color, segments[-1].size)
        locus._segments = [PathSegment(s.color, s.size, [p.copy() for p in s.points]) for s in segments]
        return locus

    # ---- writes ----

    def append_point(self, point: Point) -> None:
        self._segments[-1].add_point(point)

    def set_style(self, color: str, size: float) -> None:
        size = float(size)
        last = self._segments[-1]
        if last.style == (color, size):
            return
        if last.is_empty():
            last.color, last.size = color, size
            return
        self._segments.append(PathSegment(color, size))
        logger.debug(f"Locus style changed to {color} / {size:g}, now {len(self._segments)} segments.")

    def start_new_segment(self) -> None:
        last = self._segments[-1]
        self._segments.append(PathSegment(last.color, last.size))

    def clear(self) -> None:
        color, size = self.current_style
        self._segments = [PathSegment(color, size)]

    # ---- reads ----

    def segments(self) -> tuple[PathSegment, ...]:
        return tuple(self._segments)

    @property
    def current_style(self) -> tuple[str, float]:
        return self._segments[-1].style

    @property
    def point_count(self) -> int:
        return sum(len(s) for s in self._segments)

    def is_empty(self) -> bool:
        return self.point_count == 0

    def __len__(self) -> int:
        return len(self._segments)
