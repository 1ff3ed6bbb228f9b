"""Rollout-based command selection.

Chooses the (power, angle) command whose short forward simulation ends
with a velocity best aligned with a desired direction.

For every pair in a discrete grid of power levels and heading offsets:
1. Clone the current vehicle state
2. Apply the command once (rate limits included)
3. Integrate the clone for a short horizon in fixed ticks
4. Score = normalized(desired) . normalized(end velocity)

The highest score wins; ties keep the first pair in enumeration order
(powers outer, offsets inner). The grid is the entire search space.

This is flight software - designed to run on the vehicle.

Example:
    >>> from flight.control import CommandSelector
    >>> from lander.dynamics import VehicleState
    >>> from lander.geometry import Point
    >>>
    >>> selector = CommandSelector()
    >>> selection = selector.select(Point(-1.0, 0.0), VehicleState.initial())
    >>> selection.command.target_angle  # tilted left
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from lander.dynamics.point_mass import integrate
from lander.dynamics.state import (
    MAX_ANGLE_DEG,
    MAX_ANGLE_STEP_DEG,
    MAX_POWER,
    MIN_ANGLE_DEG,
    MIN_POWER,
    Command,
    VehicleState,
)
from lander.geometry import Point, normalize

DEFAULT_POWERS: tuple[int, ...] = (0, 1, 2, 3, 4)
DEFAULT_ANGLE_OFFSETS: tuple[float, ...] = (
    0.0, -5.0, 5.0, -10.0, 10.0, -15.0, 15.0, -30.0, 30.0, -60.0, 60.0, -90.0, 90.0,
)


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class SelectorConfig:
    """Candidate grid and rollout horizon.

    Attributes:
        powers: Candidate thrust levels
        angle_offsets: Candidate heading offsets from the current heading [deg]
        horizon_ticks: Number of integration ticks per rollout
        tick_dt: Rollout tick length [s]
    """
    powers: tuple[int, ...] = DEFAULT_POWERS
    angle_offsets: tuple[float, ...] = DEFAULT_ANGLE_OFFSETS
    horizon_ticks: int = 10
    tick_dt: float = 0.2

    def __post_init__(self) -> None:
        """Validate inputs."""
        if not self.powers or not self.angle_offsets:
            raise ValueError("Candidate grid must not be empty")
        for p in self.powers:
            if not MIN_POWER <= p <= MAX_POWER:
                raise ValueError(f"Power {p} outside [{MIN_POWER}, {MAX_POWER}]")
        if self.horizon_ticks < 1:
            raise ValueError(f"horizon_ticks must be at least 1, got {self.horizon_ticks}")
        if self.tick_dt <= 0:
            raise ValueError(f"tick_dt must be positive, got {self.tick_dt}")

    @property
    def horizon(self) -> float:
        """Rollout duration [s]."""
        return self.horizon_ticks * self.tick_dt


# =============================================================================
# Result
# =============================================================================


class Selection(NamedTuple):
    """Best command found by the selector."""
    command: Command
    score: float  # Alignment score (higher is better)
    velocity: Point  # Simulated velocity at the end of the rollout [m/s]
    angle_offset: float  # Offset from the heading at selection time [deg]


# =============================================================================
# Selector
# =============================================================================


@dataclass
class CommandSelector:
    """Brute-force command search over a discrete power/angle grid."""
    config: SelectorConfig = field(default_factory=SelectorConfig)

    def candidates(self, state: VehicleState) -> list[tuple[Command, float]]:
        """Enumerate (command, offset) pairs for the current heading.

        Offsets saturate at the per-command slew limit and the target angle is
        clamped to the envelope, so candidates that would reach the same
        attitude are listed once (first occurrence kept).
        """
        out = []
        seen = set()
        for power in self.config.powers:
            for offset in self.config.angle_offsets:
                step = max(-MAX_ANGLE_STEP_DEG, min(MAX_ANGLE_STEP_DEG, offset))
                angle = max(MIN_ANGLE_DEG, min(MAX_ANGLE_DEG, state.heading_deg + step))
                if (angle, power) in seen:
                    continue
                seen.add((angle, power))
                out.append((Command(target_angle=angle, target_power=power), step))
        return out

    def rollout(self, state: VehicleState, command: Command) -> VehicleState:
        """Simulate `command` from a clone of `state`; `state` is untouched."""
        trial = state.copy()
        command.apply(trial)
        for _ in range(self.config.horizon_ticks):
            integrate(trial, self.config.tick_dt)
        return trial

    def select(self, desired: Point, state: VehicleState) -> Selection:
        """Pick the command that best steers velocity toward `desired`.

        Args:
            desired: Desired direction of travel (any magnitude)
            state: Current vehicle state (not modified)

        Returns:
            Selection with the winning command and its score
        """
        goal = normalize(desired)
        best: Selection | None = None

        for command, offset in self.candidates(state):
            trial = self.rollout(state, command)
            score = goal.dot(normalize(trial.velocity))
            if best is None or score > best.score:
                best = Selection(
                    command=command,
                    score=score,
                    velocity=trial.velocity,
                    angle_offset=offset,
                )

        return best
