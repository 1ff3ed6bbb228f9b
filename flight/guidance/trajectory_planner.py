"""Bézier trajectory planner for powered descent.

Finds a single intermediate waypoint w such that the quadratic Bézier path
(start, w, target) stays inside the world and keeps a safety radius from
every non-flat terrain segment.

The search is breadth-first over an implicit square lattice centred on the
start/target midpoint:

1. Seed the frontier with the midpoint and mark it visited.
2. Pop the oldest candidate (FIFO).
3. Enqueue its four lattice neighbours (+x, +y, -x, -y) that were never
   visited, marking them visited on enqueue.
4. Sample the candidate's Bézier path and validate it.
5. Accept the first candidate that validates.
6. Stop when the frontier is empty or the visited set reaches its cap, and
   return the seed midpoint as an unvalidated fallback (found=False).

First-valid-wins favours waypoints close to the midpoint; it is not an
optimal search. Flat segments are exempt from clearance checks so that the
path may terminate on the landing pad.

Lattice nodes are identified by integer offsets (i, j) from the seed and
converted to world coordinates as seed + step * (i, j), so the visited set
never compares floats.

This is flight software - designed to run on the vehicle.

Example:
    >>> from flight.guidance import TrajectoryPlanner
    >>> from lander.geometry import Point
    >>> from lander.terrain import MARS_SURFACE, Terrain
    >>>
    >>> terrain = Terrain.from_text(MARS_SURFACE)
    >>> planner = TrajectoryPlanner()
    >>> plan = planner.plan(Point(6500.0, 2000.0), terrain.landing_target(), terrain)
    >>> if plan.found:
    ...     print(plan.waypoint)
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from lander.bezier import sample_bezier
from lander.geometry import Point, path_clearance, points_in_bounds
from lander.terrain import Terrain

logger = logging.getLogger(__name__)

# Lattice moves, in expansion order.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class PlannerConfig:
    """Tuning for the waypoint search.

    Attributes:
        step_size: Lattice spacing between candidate waypoints [m]
        sample_count: Samples per candidate path
        safety_radius: Minimum clearance from non-flat terrain [m]
        max_visited: Cap on the visited-set size (bounds the search cost)
        reject_below_target: Also reject paths dipping below the target altitude
    """
    step_size: float = 50.0
    sample_count: int = 50
    safety_radius: float = 100.0
    max_visited: int = 100_000
    reject_below_target: bool = False

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {self.sample_count}")
        if self.safety_radius < 0:
            raise ValueError(f"safety_radius must be non-negative, got {self.safety_radius}")
        if self.max_visited < 0:
            raise ValueError(f"max_visited must be non-negative, got {self.max_visited}")


# =============================================================================
# Result
# =============================================================================


class PlanResult(NamedTuple):
    """Output from one planning cycle.

    When `found` is False the waypoint is the seed midpoint and the path
    was never validated; treat it as best-effort only.
    """
    found: bool
    start: Point
    target: Point
    waypoint: Point
    path: NDArray[np.float64]  # Sampled path, shape (sample_count, 2)
    expansions: int  # Candidates validated
    visited: int  # Lattice nodes enqueued

    @property
    def path_points(self) -> list[Point]:
        """Sampled path as points."""
        return [Point(float(x), float(y)) for x, y in self.path]

    @property
    def lit_points(self) -> list[Point]:
        """Points a display should mark for this plan.

        Start, waypoint and every path sample. Empty when no valid path was
        found.
        """
        if not self.found:
            return []
        return [self.waypoint, self.start] + self.path_points


# =============================================================================
# Planner
# =============================================================================


@dataclass
class TrajectoryPlanner:
    """Breadth-first waypoint search over a lattice of Bézier control points.

    Each call to `plan` owns its frontier and visited set; nothing is shared
    between calls.
    """
    config: PlannerConfig = field(default_factory=PlannerConfig)

    def plan(self, start: Point, target: Point, terrain: Terrain) -> PlanResult:
        """Search for a collision-free waypoint.

        Args:
            start: Current vehicle position [m]
            target: Landing target [m]
            terrain: Ground profile and world bounds

        Returns:
            PlanResult; `found` tells a validated waypoint from the fallback
        """
        cfg = self.config
        seed = start.lerp(target, 0.5)
        obstacles = terrain.segment_array(include_flat=False)

        control = np.array([
            [start.x, start.y],
            [seed.x, seed.y],
            [target.x, target.y],
        ])

        frontier: deque[tuple[int, int]] = deque([(0, 0)])
        visited: set[tuple[int, int]] = {(0, 0)}
        expansions = 0

        while frontier and len(visited) < cfg.max_visited:
            i, j = frontier.popleft()

            for di, dj in NEIGHBOR_OFFSETS:
                node = (i + di, j + dj)
                if node not in visited:
                    visited.add(node)
                    frontier.append(node)

            control[1, 0] = seed.x + i * cfg.step_size
            control[1, 1] = seed.y + j * cfg.step_size
            path = sample_bezier(control, cfg.sample_count)
            expansions += 1

            if self.is_safe(path, obstacles, terrain, target):
                waypoint = Point(float(control[1, 0]), float(control[1, 1]))
                logger.debug(
                    "Waypoint %s found after %d expansions (%d visited)",
                    waypoint, expansions, len(visited),
                )
                return PlanResult(
                    found=True,
                    start=start,
                    target=target,
                    waypoint=waypoint,
                    path=path,
                    expansions=expansions,
                    visited=len(visited),
                )

        logger.info(
            "No safe waypoint from %s to %s after %d expansions (%d visited); "
            "falling back to midpoint",
            start, target, expansions, len(visited),
        )
        control[1] = [seed.x, seed.y]
        return PlanResult(
            found=False,
            start=start,
            target=target,
            waypoint=seed,
            path=sample_bezier(control, cfg.sample_count),
            expansions=expansions,
            visited=len(visited),
        )

    def is_safe(
        self,
        path: NDArray[np.float64],
        obstacles: NDArray[np.float64],
        terrain: Terrain,
        target: Point,
    ) -> bool:
        """Validate a sampled path.

        Args:
            path: Sampled points, shape (N, 2)
            obstacles: Non-flat segments, shape (M, 4)
            terrain: Terrain providing the world bounds
            target: Landing target (for the below-target check)

        Returns:
            True if the path is in bounds and clears every obstacle
        """
        if not points_in_bounds(path, terrain.bounds):
            return False
        if self.config.reject_below_target and np.any(path[:, 1] < target.y):
            return False
        return path_clearance(path, obstacles) >= self.config.safety_radius
