"""Simulation module for point-mass descent simulation.

Provides the step-driven simulation interface where flight software
controls the loop and the simulator maintains truth state.

Example:
    >>> from lander.dynamics import Command, VehicleState
    >>> from lander.simulation import SimConfig, Simulator
    >>> from lander.terrain import MARS_SURFACE, Terrain
    >>>
    >>> sim = Simulator(VehicleState.initial(), Terrain.from_text(MARS_SURFACE))
    >>>
    >>> # Flight loop
    >>> while not sim.status.is_terminal:
    ...     state = sim.get_state()
    ...     sim.set_command(Command(target_angle=0.0, target_power=4))
    ...     sim.step()
"""

from lander.simulation.simulator import (
    FlightStatus,
    SimConfig,
    SimulationResult,
    Simulator,
)

__all__ = [
    "FlightStatus",
    "SimConfig",
    "SimulationResult",
    "Simulator",
]
