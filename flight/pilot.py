"""Landing pilot: one planning + steering cycle per call.

Holds the planner and selector for a single vehicle and the results of its
last cycle. Each vehicle gets its own pilot; pilots share no mutable state.

Cycle:
    plan = planner.plan(state.position, target, terrain)
    desired = path[1] - position   (target - position if not found)
    selection = selector.select(desired, state)

The pilot steers along the first leg of the sampled path rather than at the
Bézier control point, which lies off the path and may sit outside the world.

The last plan and command stay available for display and as the fallback
when a cycle cannot produce a better command.

`fly` owns a closed simulation loop: it re-plans every `plan_interval`
seconds of simulated time and steps the simulator every tick in between.

This is flight software - designed to run on the vehicle.

Example:
    >>> from flight.pilot import LandingPilot
    >>> from lander.dynamics import VehicleState
    >>> from lander.simulation import Simulator
    >>> from lander.terrain import MARS_SURFACE, Terrain
    >>>
    >>> terrain = Terrain.from_text(MARS_SURFACE)
    >>> pilot = LandingPilot(terrain=terrain)
    >>> decision = pilot.update(VehicleState.initial())
    >>> decision.command
    >>>
    >>> sim = Simulator(VehicleState.initial(), terrain)
    >>> result = pilot.fly(sim)
"""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from flight.control.command_selector import CommandSelector, SelectorConfig, Selection
from flight.guidance.trajectory_planner import PlannerConfig, PlanResult, TrajectoryPlanner
from lander.dynamics.state import Command, VehicleState
from lander.geometry import Point
from lander.simulation.simulator import SimulationResult, Simulator
from lander.terrain import Terrain

logger = logging.getLogger(__name__)


class PilotDecision(NamedTuple):
    """Output from one pilot cycle."""
    plan: PlanResult
    desired: Point  # Direction handed to the selector
    selection: Selection

    @property
    def command(self) -> Command:
        return self.selection.command


@dataclass
class LandingPilot:
    """Planner/selector context for one vehicle.

    Attributes:
        terrain: Ground profile
        target: Landing target; defaults to the landing-zone midpoint
        planner_config: Waypoint search tuning
        selector_config: Command grid and rollout horizon
        plan_interval: Simulated time between cycles in `fly` [s]
    """
    terrain: Terrain
    target: Point | None = None
    planner_config: PlannerConfig = field(default_factory=PlannerConfig)
    selector_config: SelectorConfig = field(default_factory=SelectorConfig)
    plan_interval: float = 1.0

    # Internal state
    _planner: TrajectoryPlanner = field(init=False, repr=False)
    _selector: CommandSelector = field(init=False, repr=False)
    _last_plan: PlanResult | None = field(default=None, init=False, repr=False)
    _last_command: Command | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.target is None:
            self.target = self.terrain.landing_target()
        self._planner = TrajectoryPlanner(self.planner_config)
        self._selector = CommandSelector(self.selector_config)

    @property
    def last_plan(self) -> PlanResult | None:
        """Plan from the most recent cycle."""
        return self._last_plan

    @property
    def last_command(self) -> Command | None:
        """Command from the most recent cycle."""
        return self._last_command

    def set_target(self, target: Point) -> None:
        """Retarget the pilot, e.g. from an externally supplied point."""
        self.target = target

    def command_or_hold(self, state: VehicleState) -> Command:
        """Last good command, or one that holds the current attitude."""
        if self._last_command is None:
            return Command.hold(state)
        return self._last_command

    def update(self, state: VehicleState) -> PilotDecision:
        """Run one planning cycle from the current state.

        Args:
            state: Current vehicle state (not modified)

        Returns:
            PilotDecision with the plan and the selected command
        """
        plan = self._planner.plan(state.position, self.target, self.terrain)

        if plan.found and len(plan.path) > 1:
            desired = Point.from_array(plan.path[1]) - state.position
        elif plan.found:
            desired = plan.waypoint - state.position
        else:
            desired = self.target - state.position

        selection = self._selector.select(desired, state)
        logger.debug(
            "t=%.1fs plan found=%s waypoint=%s desired=%s -> %s (score %.0f)",
            state.time, plan.found, plan.waypoint, desired, selection.command, selection.score,
        )

        self._last_plan = plan
        self._last_command = selection.command
        return PilotDecision(plan=plan, desired=desired, selection=selection)

    def fly(self, sim: Simulator, max_time: float | None = None) -> SimulationResult:
        """Fly the simulated vehicle until touchdown, exit or time limit.

        Args:
            sim: Simulator holding the vehicle to fly
            max_time: Time limit [s]; defaults to the simulator's limit

        Returns:
            SimulationResult including every plan made during the flight
        """
        if self.plan_interval <= 0:
            raise ValueError(f"plan_interval must be positive, got {self.plan_interval}")

        limit = sim.config.max_time if max_time is None else max_time
        plans = []
        next_plan = sim.time

        while not sim.status.is_terminal and sim.time < limit:
            if sim.time + 1e-9 >= next_plan:
                decision = self.update(sim.get_state())
                sim.set_command(decision.command)
                plans.append(decision.plan)
                next_plan += self.plan_interval
            sim.step()

        return SimulationResult.from_simulator(sim, plans=plans)
