"""Vehicle state and control command for the point-mass lander.

The state vector contains:
- Position (2): [x, y] in world frame [m], y is altitude
- Velocity (2): [vx, vy] in world frame [m/s]
- Heading (1): attitude angle [deg], 0 = upright, positive tilts left
- Power (1): engine throttle level, integer 0..4 [m/s^2 of thrust]

Commands are rate-limited: one application moves the heading by at most
15 degrees and the power by at most one level toward the requested values,
then clamps both to their envelopes.

Example:
    >>> from lander.dynamics.state import Command, VehicleState
    >>>
    >>> state = VehicleState.initial()
    >>> Command(target_angle=-45.0, target_power=2).apply(state)
    >>> state.heading_deg, state.power
    (-15.0, 3)
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype

from lander.geometry import ORIGIN, Point

# =============================================================================
# Envelope Constants
# =============================================================================

MIN_ANGLE_DEG: float = -90.0
MAX_ANGLE_DEG: float = 90.0
MAX_ANGLE_STEP_DEG: float = 15.0  # Per command application

MIN_POWER: int = 0
MAX_POWER: int = 4
MAX_POWER_STEP: int = 1  # Per command application


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# =============================================================================
# Vehicle State
# =============================================================================


@beartype
@dataclass
class VehicleState:
    """Mutable translational state of one vehicle.

    Owned by the physics pipeline; rollouts work on `copy()` clones so the
    real state is never touched.

    Attributes:
        position: Position in world frame [m]
        velocity: Velocity in world frame [m/s]
        heading_deg: Attitude angle in [-90, 90] [deg]
        power: Thrust level in [0, 4]
        time: Simulation time [s]
    """
    position: Point
    velocity: Point = field(default=ORIGIN)
    heading_deg: float = 0.0
    power: int = 0
    time: float = 0.0

    def __post_init__(self) -> None:
        """Validate envelope."""
        if not MIN_ANGLE_DEG <= self.heading_deg <= MAX_ANGLE_DEG:
            raise ValueError(
                f"Heading must be in [{MIN_ANGLE_DEG}, {MAX_ANGLE_DEG}], got {self.heading_deg}"
            )
        if not MIN_POWER <= self.power <= MAX_POWER:
            raise ValueError(f"Power must be in [{MIN_POWER}, {MAX_POWER}], got {self.power}")

    @classmethod
    def initial(cls) -> "VehicleState":
        """Reference starting state: high above the east plain, full power."""
        return cls(
            position=Point(6500.0, 2000.0),
            velocity=ORIGIN,
            heading_deg=0.0,
            power=4,
        )

    def copy(self) -> "VehicleState":
        """Create an independent copy of this state."""
        return VehicleState(
            position=self.position,
            velocity=self.velocity,
            heading_deg=self.heading_deg,
            power=self.power,
            time=self.time,
        )

    @property
    def speed(self) -> float:
        """Velocity magnitude [m/s]."""
        return self.velocity.norm()

    def as_array(self) -> np.ndarray:
        """Flat vector [t, x, y, vx, vy, heading, power]."""
        return np.array([
            self.time,
            self.position.x, self.position.y,
            self.velocity.x, self.velocity.y,
            self.heading_deg, float(self.power),
        ])


# =============================================================================
# Command
# =============================================================================


@beartype
@dataclass(frozen=True)
class Command:
    """Requested control input.

    Attributes:
        target_angle: Requested heading [deg]
        target_power: Requested thrust level
    """
    target_angle: float = 0.0
    target_power: int = 0

    def apply(self, state: VehicleState) -> None:
        """Move `state` toward this command by one rate-limited step.

        Heading changes by at most 15 degrees and is then clamped to
        [-90, 90]; power changes by at most one level and is clamped to
        [0, 4]. Requests are never overshot.
        """
        delta = _clamp(
            self.target_angle - state.heading_deg,
            -MAX_ANGLE_STEP_DEG,
            MAX_ANGLE_STEP_DEG,
        )
        state.heading_deg = _clamp(state.heading_deg + delta, MIN_ANGLE_DEG, MAX_ANGLE_DEG)

        step = max(-MAX_POWER_STEP, min(MAX_POWER_STEP, self.target_power - state.power))
        state.power = max(MIN_POWER, min(MAX_POWER, state.power + step))

    @classmethod
    def hold(cls, state: VehicleState) -> "Command":
        """Command that keeps the current heading and power."""
        return cls(target_angle=state.heading_deg, target_power=state.power)
