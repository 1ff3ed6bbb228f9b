"""Terrain model: the ground profile as a connected polyline.

The terrain is an ordered sequence of segments spanning the world's x-range.
Consecutive segments share an endpoint. Horizontal ("flat") segments are
landing pads; every other segment is an obstacle the planner must clear.

The reference surface is given as a text table of `x y` pairs, one point
per line, joined in order.

Example:
    >>> from lander.terrain import MARS_SURFACE, Terrain
    >>>
    >>> terrain = Terrain.from_text(MARS_SURFACE)
    >>> terrain.landing_target()
    Point(x=4200.0, y=220.0)
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.geometry import Point, Segment, WorldBounds, segments_intersect

# =============================================================================
# Reference Surface
# =============================================================================

MARS_SURFACE: str = """\
0 1800
300 1200
1000 1550
2000 1200
2500 1650
3700 220
4700 220
4750 1000
4700 1650
4000 1700
3700 1600
3750 1900
4000 2100
4900 2050
5100 1000
5500 500
6200 800
6999 600"""


# =============================================================================
# Parsing
# =============================================================================


@beartype
def parse_points(text: str) -> list[Point]:
    """Parse a whitespace-separated `x y` table into points.

    Blank lines are skipped.

    Raises:
        ValueError: If a line does not hold exactly two numbers
    """
    points = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 2:
            raise ValueError(f"Line {lineno}: expected 'x y', got {line!r}")
        try:
            x, y = float(fields[0]), float(fields[1])
        except ValueError as err:
            raise ValueError(f"Line {lineno}: non-numeric coordinate in {line!r}") from err
        points.append(Point(x, y))
    return points


@beartype
def parse_surface(text: str) -> list[Segment]:
    """Parse a surface table into consecutive segments.

    Raises:
        ValueError: If fewer than two points are given
    """
    points = parse_points(text)
    if len(points) < 2:
        raise ValueError(f"Surface needs at least 2 points, got {len(points)}")
    return [Segment(a, b) for a, b in zip(points, points[1:])]


# =============================================================================
# Terrain
# =============================================================================


@beartype
@dataclass(frozen=True)
class Terrain:
    """Immutable ground profile.

    Attributes:
        segments: Ordered, connected terrain edges
        bounds: World rectangle all coordinates must lie in
    """
    segments: tuple[Segment, ...]
    bounds: WorldBounds = field(default_factory=WorldBounds)

    def __post_init__(self) -> None:
        """Validate connectivity and bounds."""
        if not self.segments:
            raise ValueError("Terrain needs at least one segment")

        for i, (prev, curr) in enumerate(zip(self.segments, self.segments[1:])):
            if prev.b != curr.a:
                raise ValueError(
                    f"Segments {i} and {i + 1} are not connected: {prev.b} != {curr.a}"
                )

        for i, seg in enumerate(self.segments):
            if seg.is_degenerate:
                raise ValueError(f"Segment {i} has zero length at {seg.a} (repeated point)")
            for p in (seg.a, seg.b):
                if not self.bounds.contains(p):
                    raise ValueError(f"Terrain point {p} lies outside the world")

    @classmethod
    def from_text(cls, text: str, bounds: WorldBounds | None = None) -> "Terrain":
        """Build terrain from an `x y` table."""
        return cls(
            segments=tuple(parse_surface(text)),
            bounds=bounds or WorldBounds(),
        )

    @classmethod
    def from_points(cls, points: list[Point], bounds: WorldBounds | None = None) -> "Terrain":
        """Build terrain by joining points in order."""
        if len(points) < 2:
            raise ValueError(f"Terrain needs at least 2 points, got {len(points)}")
        return cls(
            segments=tuple(Segment(a, b) for a, b in zip(points, points[1:])),
            bounds=bounds or WorldBounds(),
        )

    @property
    def points(self) -> list[Point]:
        """Polyline vertices in order."""
        return [self.segments[0].a] + [seg.b for seg in self.segments]

    @property
    def flat_segments(self) -> list[Segment]:
        """Landing pads."""
        return [seg for seg in self.segments if seg.is_flat]

    @property
    def obstacle_segments(self) -> list[Segment]:
        """Non-flat segments subject to collision checks."""
        return [seg for seg in self.segments if not seg.is_flat]

    def landing_zone(self) -> Segment:
        """First flat segment of the terrain.

        Raises:
            ValueError: If the terrain has no flat segment
        """
        for seg in self.segments:
            if seg.is_flat:
                return seg
        raise ValueError("Terrain has no flat landing zone")

    def landing_target(self) -> Point:
        """Midpoint of the landing zone."""
        zone = self.landing_zone()
        return Point((zone.a.x + zone.b.x) / 2, zone.a.y)

    def crossing(self, start: Point, end: Point) -> Segment | None:
        """Terrain segment crossed when moving from `start` to `end`.

        A flat segment wins over a slope sharing the touched vertex; otherwise
        the first hit in terrain order is returned. Returns None if the move
        stays clear of the ground.
        """
        move = Segment(start, end)
        hits = [seg for seg in self.segments if segments_intersect(move, seg)]
        for seg in hits:
            if seg.is_flat:
                return seg
        return hits[0] if hits else None

    def segment_array(self, include_flat: bool = True) -> NDArray[np.float64]:
        """Segments as an (M, 4) array of [ax, ay, bx, by] rows."""
        rows = [
            seg.as_array() for seg in self.segments
            if include_flat or not seg.is_flat
        ]
        if not rows:
            return np.empty((0, 4), dtype=np.float64)
        return np.vstack(rows)
