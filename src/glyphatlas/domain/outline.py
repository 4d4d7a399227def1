"""Core geometric types for outline representation.

This module defines the fundamental geometric types of a glyph outline:
- Point: A 2D point in pixel space
- Line, QuadraticCurve, CubicCurve: Outline segments
- Contour: A closed sequence of segments
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. Coordinates are in pixels with y pointing up,
    the font's own orientation scaled to the requested pixel size.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, data: "tuple[float, float] | list[float]") -> "Point":
        """Create a point from an (x, y) pair."""
        return cls(float(data[0]), float(data[1]))


@dataclass(frozen=True, slots=True)
class Line:
    """Straight segment from the previous end point to ``end``."""

    end: Point

    kind = "line"


@dataclass(frozen=True, slots=True)
class QuadraticCurve:
    """Quadratic Bezier segment from the previous end point to ``end``."""

    control: Point
    end: Point

    kind = "quadratic"


@dataclass(frozen=True, slots=True)
class CubicCurve:
    """Cubic Bezier segment, as found in CFF outlines.

    Kept in the model so that such outlines can be extracted and reported;
    the distance evaluator rejects them.
    """

    control1: Point
    control2: Point
    end: Point

    kind = "cubic"


Segment = Union[Line, QuadraticCurve, CubicCurve]


def _segment_to_dict(segment: Segment) -> dict[str, Any]:
    if isinstance(segment, Line):
        return {"type": "line", "points": [segment.end.to_tuple()]}
    if isinstance(segment, QuadraticCurve):
        return {
            "type": "quadratic",
            "points": [segment.control.to_tuple(), segment.end.to_tuple()],
        }
    return {
        "type": "cubic",
        "points": [
            segment.control1.to_tuple(),
            segment.control2.to_tuple(),
            segment.end.to_tuple(),
        ],
    }


def _segment_from_dict(data: dict[str, Any]) -> Segment:
    points = [Point.from_tuple(p) for p in data["points"]]
    if data["type"] == "line":
        return Line(*points)
    if data["type"] == "quadratic":
        return QuadraticCurve(*points)
    if data["type"] == "cubic":
        return CubicCurve(*points)
    raise ValueError(f"Unknown segment type: {data['type']!r}")


@dataclass(frozen=True)
class Contour:
    """A closed contour of outline segments.

    The first segment starts at ``start``; every following segment starts
    where the previous one ended. The last segment ends at ``start`` for a
    properly closed contour.

    Attributes:
        start: Start point of the first segment
        segments: Ordered segments forming the contour
    """

    start: Point
    segments: tuple[Segment, ...]

    def __len__(self) -> int:
        return len(self.segments)

    def iter_segments(self) -> Iterator[tuple[Point, Segment]]:
        """Iterate over segments paired with their start points.

        Yields:
            Tuples of (segment start point, segment)
        """
        start = self.start
        for segment in self.segments:
            yield start, segment
            start = segment.end

    def is_closed(self) -> bool:
        """Check whether the last segment returns to the start point."""
        return not self.segments or self.segments[-1].end == self.start

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the contour
        """
        return {
            "start": self.start.to_tuple(),
            "segments": [_segment_to_dict(s) for s in self.segments],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls(
            start=Point.from_tuple(data["start"]),
            segments=tuple(_segment_from_dict(s) for s in data["segments"]),
        )
