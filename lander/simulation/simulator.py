"""Step-driven descent simulation.

Provides a clean simulation interface where external flight software
controls the loop. The simulator maintains the "truth" state of one vehicle
and propagates physics in response to commands.

Cadences:
- every tick the point-mass dynamics are integrated
- every `command_interval` seconds the active command is applied once
  (rate limits included), so attitude and power slew at the same rate
  whatever the tick length

Leaving the world or touching the ground ends the flight with a status;
nothing is raised.

Architecture:
    Flight code owns the simulation loop and calls:
    - sim.get_state() -> current truth state
    - sim.set_command(cmd) -> new command to fly
    - sim.step() -> propagate physics by one tick

Example:
    >>> from lander.dynamics import Command, VehicleState
    >>> from lander.simulation import Simulator
    >>> from lander.terrain import MARS_SURFACE, Terrain
    >>>
    >>> sim = Simulator(VehicleState.initial(), Terrain.from_text(MARS_SURFACE))
    >>> while not sim.status.is_terminal:
    ...     state = sim.get_state()
    ...     sim.set_command(Command(target_angle=0.0, target_power=3))
    ...     sim.step()
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from lander.dynamics.point_mass import integrate
from lander.dynamics.state import Command, VehicleState
from lander.geometry import Point
from lander.terrain import Terrain

logger = logging.getLogger(__name__)

# Tolerance for comparing accumulated simulation time with schedule times.
_TIME_EPS: float = 1e-9


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass
class SimConfig:
    """Simulation configuration.

    Attributes:
        dt: Physics tick [s]
        command_interval: Time between command applications [s]
        max_time: Simulation stops (still flying) after this time [s]
        max_landing_vx: Largest horizontal speed for a safe touchdown [m/s]
        max_landing_vy: Largest vertical speed for a safe touchdown [m/s]
        max_landing_angle: Largest |heading| for a safe touchdown [deg]
        record_history: Keep a copy of every state
    """
    dt: float = 1.0 / 60.0
    command_interval: float = 1.0
    max_time: float = 600.0
    max_landing_vx: float = 20.0
    max_landing_vy: float = 40.0
    max_landing_angle: float = 0.0
    record_history: bool = True

    def __post_init__(self) -> None:
        """Validate inputs."""
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.command_interval <= 0:
            raise ValueError(f"command_interval must be positive, got {self.command_interval}")


# =============================================================================
# Flight Status
# =============================================================================


class FlightStatus(Enum):
    """Flight outcome."""

    FLYING = auto()         # Still airborne
    LANDED = auto()         # Safe touchdown on a flat segment
    CRASHED = auto()        # Touched terrain outside the landing envelope
    OUT_OF_BOUNDS = auto()  # Left the world rectangle

    @property
    def is_terminal(self) -> bool:
        return self is not FlightStatus.FLYING


# =============================================================================
# Simulator
# =============================================================================


@dataclass
class Simulator:
    """Step-driven descent simulator.

    Attributes:
        state: Truth state of the vehicle (mutated in place)
        terrain: Ground profile and world bounds
        config: Simulation configuration
    """
    state: VehicleState
    terrain: Terrain
    config: SimConfig = field(default_factory=SimConfig)

    # Internal
    _status: FlightStatus = field(default=FlightStatus.FLYING, init=False)
    _command: Command = field(init=False, repr=False)
    _next_command: float = field(default=0.0, init=False, repr=False)
    _history: list[VehicleState] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._command = Command.hold(self.state)
        self._next_command = self.state.time
        if self.config.record_history:
            self._history = [self.state.copy()]
        if not self.terrain.bounds.contains(self.state.position):
            self._status = FlightStatus.OUT_OF_BOUNDS

    @property
    def status(self) -> FlightStatus:
        """Current flight status."""
        return self._status

    @property
    def command(self) -> Command:
        """Command currently being flown."""
        return self._command

    @property
    def time(self) -> float:
        """Current simulation time [s]."""
        return self.state.time

    def get_state(self) -> VehicleState:
        """Get current truth state.

        Returns a copy to prevent external modification.
        """
        return self.state.copy()

    def set_command(self, command: Command) -> None:
        """Replace the command flown from the next application on."""
        self._command = command

    def step(self) -> FlightStatus:
        """Advance the simulation by one physics tick.

        Returns:
            Flight status after the tick
        """
        if self._status.is_terminal:
            return self._status

        if self.state.time + _TIME_EPS >= self._next_command:
            self._command.apply(self.state)
            self._next_command += self.config.command_interval

        previous = self.state.position
        integrate(self.state, self.config.dt)
        self._status = self._classify(previous)

        if self.config.record_history:
            self._history.append(self.state.copy())

        if self._status.is_terminal:
            logger.info(
                "Flight ended at t=%.2fs: %s at %s (v=%s, heading=%.1f)",
                self.state.time, self._status.name, self.state.position,
                self.state.velocity, self.state.heading_deg,
            )
        return self._status

    def run(self, max_time: float | None = None) -> "SimulationResult":
        """Step until the flight ends or the time limit is reached."""
        limit = self.config.max_time if max_time is None else max_time
        while not self._status.is_terminal and self.state.time + _TIME_EPS < limit:
            self.step()
        return SimulationResult.from_simulator(self)

    def _classify(self, previous: Point) -> FlightStatus:
        """Status after moving from `previous` to the current position."""
        position = self.state.position
        contact = self.terrain.crossing(previous, position)
        if contact is not None:
            if contact.is_flat and self._within_landing_envelope():
                return FlightStatus.LANDED
            return FlightStatus.CRASHED
        if not self.terrain.bounds.contains(position):
            return FlightStatus.OUT_OF_BOUNDS
        return FlightStatus.FLYING

    def _within_landing_envelope(self) -> bool:
        cfg = self.config
        return (
            abs(self.state.velocity.x) <= cfg.max_landing_vx
            and abs(self.state.velocity.y) <= cfg.max_landing_vy
            and abs(self.state.heading_deg) <= cfg.max_landing_angle
        )

    def get_history(self) -> list[VehicleState]:
        """Get recorded state history."""
        return self._history.copy()



# =============================================================================
# Results and Analysis
# =============================================================================


@dataclass
class SimulationResult:
    """Results from a completed simulation.

    Provides convenient access to trajectory data and analysis.
    """
    states: list[VehicleState]
    status: FlightStatus
    plans: list = field(default_factory=list)  # Recorded by the flight software

    @property
    def time(self) -> NDArray[np.float64]:
        """Time array [s]."""
        return np.array([s.time for s in self.states])

    @property
    def position(self) -> NDArray[np.float64]:
        """Position history [m], shape (N, 2)."""
        return np.array([[s.position.x, s.position.y] for s in self.states])

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 2)."""
        return np.array([[s.velocity.x, s.velocity.y] for s in self.states])

    @property
    def heading(self) -> NDArray[np.float64]:
        """Heading history [deg]."""
        return np.array([s.heading_deg for s in self.states])

    @property
    def power(self) -> NDArray[np.int64]:
        """Thrust level history."""
        return np.array([s.power for s in self.states], dtype=np.int64)

    @property
    def final_state(self) -> VehicleState:
        return self.states[-1]

    @property
    def duration(self) -> float:
        """Flight time [s]."""
        return self.states[-1].time - self.states[0].time

    @classmethod
    def from_simulator(cls, sim: Simulator, plans: list | None = None) -> "SimulationResult":
        """Create result from simulator history."""
        states = sim.get_history() or [sim.get_state()]
        return cls(states=states, status=sim.status, plans=plans or [])

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        position = self.position
        velocity = self.velocity
        return pl.DataFrame({
            "time": self.time,
            "x": position[:, 0],
            "y": position[:, 1],
            "vx": velocity[:, 0],
            "vy": velocity[:, 1],
            "heading": self.heading,
            "power": self.power,
        })
