"""Guidance algorithms for the lander.

Guidance computes where the vehicle should go next based on the current
position, the landing target and the terrain.

Available algorithms:
    TrajectoryPlanner: Breadth-first search for a safe quadratic Bézier waypoint
"""

from flight.guidance.trajectory_planner import (
    NEIGHBOR_OFFSETS,
    PlannerConfig,
    PlanResult,
    TrajectoryPlanner,
)

__all__ = [
    "NEIGHBOR_OFFSETS",
    "PlannerConfig",
    "PlanResult",
    "TrajectoryPlanner",
]
