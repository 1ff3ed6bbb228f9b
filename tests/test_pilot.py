"""Tests for the landing pilot - one planning cycle and the closed loop."""

import pytest

from flight import LandingPilot
from flight.guidance import PlannerConfig
from lander.dynamics import Command, VehicleState
from lander.geometry import Point
from lander.simulation import FlightStatus, SimConfig, Simulator
from lander.terrain import MARS_SURFACE, Terrain


@pytest.fixture
def pad_only() -> Terrain:
    return Terrain.from_points([Point(3700.0, 220.0), Point(4700.0, 220.0)])


def resting_state(x: float = 6500.0, y: float = 2000.0) -> VehicleState:
    return VehicleState(position=Point(x, y), heading_deg=0.0, power=0)


class TestLandingPilot:
    """Test a single planning cycle."""

    def test_default_target_is_pad_midpoint(self):
        pilot = LandingPilot(terrain=Terrain.from_text(MARS_SURFACE))
        assert pilot.target == Point(4200.0, 220.0)

    def test_explicit_target(self, pad_only):
        pilot = LandingPilot(terrain=pad_only, target=Point(4000.0, 220.0))
        assert pilot.target == Point(4000.0, 220.0)
        pilot.set_target(Point(4500.0, 220.0))
        assert pilot.target == Point(4500.0, 220.0)

    def test_hold_before_first_cycle(self, pad_only):
        pilot = LandingPilot(terrain=pad_only)
        state = resting_state()
        assert pilot.last_plan is None
        assert pilot.command_or_hold(state) == Command.hold(state)

    def test_update_steers_toward_waypoint(self, pad_only):
        """Vehicle east of the pad tilts west (positive heading)."""
        pilot = LandingPilot(terrain=pad_only)
        state = resting_state()
        decision = pilot.update(state)

        assert decision.plan.found
        assert decision.plan.start == state.position
        assert decision.command.target_angle > 0.0
        assert decision.selection.velocity.x < 0.0
        assert pilot.last_plan is decision.plan
        assert pilot.last_command == decision.command
        assert pilot.command_or_hold(state) == decision.command

    def test_steers_along_path(self, pad_only):
        """Desired direction follows the first leg of the sampled path."""
        state = resting_state()
        decision = LandingPilot(terrain=pad_only).update(state)

        assert decision.plan.found
        assert decision.desired == Point.from_array(decision.plan.path[1]) - state.position
        assert decision.desired.x < 0.0

    def test_fallback_desired_is_target(self, pad_only):
        pilot = LandingPilot(terrain=pad_only, planner_config=PlannerConfig(max_visited=1))
        state = resting_state()
        decision = pilot.update(state)

        assert not decision.plan.found
        assert decision.desired == pilot.target - state.position

    def test_update_does_not_touch_state(self, pad_only):
        state = resting_state()
        before = state.copy()
        LandingPilot(terrain=pad_only).update(state)
        assert state == before

    def test_fallback_steers_at_target(self):
        """Without a safe path the pilot aims straight at the target."""
        ridge = Terrain.from_points([
            Point(0.0, 500.0),
            Point(1000.0, 500.0),
            Point(2000.0, 1500.0),
            Point(3000.0, 500.0),
            Point(6999.0, 500.0),
        ])
        pilot = LandingPilot(
            terrain=ridge,
            target=Point(500.0, 500.0),
            planner_config=PlannerConfig(max_visited=1),
        )
        decision = pilot.update(resting_state(5000.0, 2000.0))

        assert not decision.plan.found
        assert decision.command.target_angle > 0.0


class TestFly:
    """Test the closed planning/stepping loop."""

    def test_plans_on_cadence(self, pad_only):
        """One plan per plan interval of simulated time."""
        sim = Simulator(resting_state(), pad_only, SimConfig(dt=0.25))
        pilot = LandingPilot(terrain=pad_only, plan_interval=1.0)
        result = pilot.fly(sim, max_time=3.0)

        assert result.status is FlightStatus.FLYING
        assert len(result.plans) == 3
        assert result.plans[0].start == Point(6500.0, 2000.0)
        assert sim.time == 3.0

    def test_moves_toward_pad(self, pad_only):
        sim = Simulator(resting_state(), pad_only, SimConfig(dt=0.25))
        result = LandingPilot(terrain=pad_only).fly(sim, max_time=10.0)

        assert result.final_state.position.x < 6500.0

    def test_stops_at_terminal_status(self, pad_only):
        sim = Simulator(resting_state(-10.0, 2000.0), pad_only)
        result = LandingPilot(terrain=pad_only).fly(sim)

        assert result.status is FlightStatus.OUT_OF_BOUNDS
        assert result.plans == []

    def test_invalid_plan_interval(self, pad_only):
        sim = Simulator(resting_state(), pad_only)
        with pytest.raises(ValueError):
            LandingPilot(terrain=pad_only, plan_interval=0.0).fly(sim)
