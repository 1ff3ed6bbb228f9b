"""Point-mass translational dynamics under constant gravity.

Equations of motion:
    thrust_dir = heading * pi/180 + pi/2
    a = power * [cos(thrust_dir), sin(thrust_dir)] + g
    v(t+dt) = v(t) + a * dt
    r(t+dt) = r(t) + v(t+dt) * dt

Heading 0 points straight up; the +pi/2 offset rotates the heading
convention into the thrust direction, so a positive heading tilts the
thrust to the left (-x).

Both updates are scaled by dt (semi-implicit Euler), so the velocity after
a fixed time does not depend on the tick length.
"""

import math

from beartype import beartype

from lander.dynamics.state import VehicleState
from lander.geometry import Point

# =============================================================================
# Constants
# =============================================================================

MARS_GRAVITY: float = 3.711  # [m/s^2]
GRAVITY: Point = Point(0.0, -MARS_GRAVITY)


# =============================================================================
# Dynamics
# =============================================================================


@beartype
def thrust_acceleration(heading_deg: float, power: int) -> Point:
    """Thrust acceleration vector for a heading and power level [m/s^2]."""
    direction = heading_deg * math.pi / 180 + math.pi / 2
    return Point(power * math.cos(direction), power * math.sin(direction))


@beartype
def acceleration(state: VehicleState, gravity: Point = GRAVITY) -> Point:
    """Total acceleration (thrust + gravity) acting on the vehicle [m/s^2]."""
    return thrust_acceleration(state.heading_deg, state.power) + gravity


@beartype
def integrate(state: VehicleState, dt: float, gravity: Point = GRAVITY) -> VehicleState:
    """Advance `state` in place by one tick.

    Args:
        state: Vehicle state, mutated in place
        dt: Time step [s]; non-positive steps leave the state unchanged
        gravity: Gravity acceleration vector [m/s^2]

    Returns:
        The same state object, for chaining
    """
    if dt <= 0:
        return state

    accel = acceleration(state, gravity)
    state.velocity = state.velocity + accel * dt
    state.position = state.position + state.velocity * dt
    state.time += dt
    return state


@beartype
def propagate(
    state: VehicleState,
    duration: float,
    dt: float,
    gravity: Point = GRAVITY,
) -> VehicleState:
    """Integrate `state` in place over `duration` seconds in ticks of `dt`.

    The final tick is shortened so the total elapsed time equals `duration`.
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    remaining = duration
    while remaining > 1e-12:
        step = min(dt, remaining)
        integrate(state, step, gravity)
        remaining -= step
    return state
