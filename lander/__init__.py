"""Lander - Simulation plant for a 2D powered-descent vehicle.

This package provides the geometry kernel, Bézier path sampling, the
terrain model, point-mass dynamics and a step-driven simulator. Guidance
and control algorithms live in the separate `flight` package.

Example:
    >>> from lander import MARS_SURFACE, Terrain, VehicleState
    >>> from lander.simulation import Simulator
    >>>
    >>> terrain = Terrain.from_text(MARS_SURFACE)
    >>> sim = Simulator(VehicleState.initial(), terrain)
    >>> result = sim.run(max_time=10.0)
    >>> print(result.status, result.final_state.position)
"""

__version__ = "0.1.0"

# Bézier sampling
from lander.bezier import (
    DEFAULT_SAMPLE_COUNT,
    evaluate_bezier,
    path_length,
    sample_bezier,
)

# Vehicle model
from lander.dynamics import (
    GRAVITY,
    MARS_GRAVITY,
    Command,
    VehicleState,
    integrate,
)

# Geometry kernel
from lander.geometry import (
    WORLD_HEIGHT,
    WORLD_WIDTH,
    DegenerateGeometryError,
    Point,
    Segment,
    WorldBounds,
    closest_point,
    distance,
    dot,
    in_world_bounds,
    lerp,
    normalize,
    path_clearance,
    point_lerp,
    segment_distance,
    segment_parameter,
    segments_intersect,
)

# Terrain
from lander.terrain import (
    MARS_SURFACE,
    Terrain,
    parse_points,
    parse_surface,
)

__all__ = [
    "__version__",
    # Geometry
    "Point",
    "Segment",
    "WorldBounds",
    "WORLD_WIDTH",
    "WORLD_HEIGHT",
    "DegenerateGeometryError",
    "distance",
    "lerp",
    "point_lerp",
    "dot",
    "normalize",
    "in_world_bounds",
    "segment_parameter",
    "closest_point",
    "segment_distance",
    "segments_intersect",
    "path_clearance",
    # Bézier
    "DEFAULT_SAMPLE_COUNT",
    "evaluate_bezier",
    "sample_bezier",
    "path_length",
    # Terrain
    "MARS_SURFACE",
    "Terrain",
    "parse_points",
    "parse_surface",
    # Vehicle
    "VehicleState",
    "Command",
    "GRAVITY",
    "MARS_GRAVITY",
    "integrate",
]
