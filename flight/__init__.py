"""Flight software package - guidance and control for the lander.

This package contains the waypoint planner, the command selector and the
pilot that ties them together. These are developed and tested against the
simulation infrastructure in lander/.

Architecture:
    The simulation (lander/) provides the "plant" - the point-mass vehicle,
    terrain and world bounds. Flight software (flight/) provides the
    algorithms that command the vehicle.

    Simulation loop:
        state = sim.get_state()          # "Sensors" (truth for now)
        decision = pilot.update(state)   # Plan + select
        sim.set_command(decision.command)
        sim.step()                       # Apply to plant

Subpackages:
    guidance: Bézier waypoint search
    control: Rollout-based command selection

Example:
    >>> from flight import LandingPilot
    >>> from lander.dynamics import VehicleState
    >>> from lander.simulation import Simulator
    >>> from lander.terrain import MARS_SURFACE, Terrain
    >>>
    >>> terrain = Terrain.from_text(MARS_SURFACE)
    >>> pilot = LandingPilot(terrain=terrain)
    >>> result = pilot.fly(Simulator(VehicleState.initial(), terrain))
"""

from flight.control import CommandSelector, SelectorConfig, Selection
from flight.guidance import PlannerConfig, PlanResult, TrajectoryPlanner
from flight.pilot import LandingPilot, PilotDecision

__all__ = [
    "CommandSelector",
    "SelectorConfig",
    "Selection",
    "LandingPilot",
    "PilotDecision",
    "PlannerConfig",
    "PlanResult",
    "TrajectoryPlanner",
]
