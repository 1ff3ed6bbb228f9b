"""Tests for the step-driven simulator - cadence, touchdown and results."""

import numpy as np
import pytest

from lander.dynamics import Command, VehicleState
from lander.geometry import Point
from lander.simulation import FlightStatus, SimConfig, SimulationResult, Simulator
from lander.terrain import Terrain

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def plain() -> Terrain:
    """Flat ground at 100 m across the whole world."""
    return Terrain.from_points([Point(0.0, 100.0), Point(6999.0, 100.0)])


@pytest.fixture
def slope() -> Terrain:
    """Flat strip on the left, rising slope on the right."""
    return Terrain.from_points([Point(0.0, 100.0), Point(3000.0, 100.0), Point(6999.0, 1000.0)])


def make_sim(terrain, position, velocity=Point(0.0, 0.0), heading=0.0, power=0, **cfg):
    state = VehicleState(position=position, velocity=velocity, heading_deg=heading, power=power)
    return Simulator(state, terrain, SimConfig(**cfg))


# =============================================================================
# Configuration
# =============================================================================


class TestSimConfig:
    def test_defaults(self):
        cfg = SimConfig()
        assert cfg.dt == pytest.approx(1.0 / 60.0)
        assert cfg.command_interval == 1.0
        assert cfg.max_landing_vx == 20.0
        assert cfg.max_landing_vy == 40.0

    def test_invalid_dt(self):
        with pytest.raises(ValueError):
            SimConfig(dt=0.0)

    def test_invalid_command_interval(self):
        with pytest.raises(ValueError):
            SimConfig(command_interval=-1.0)


# =============================================================================
# Stepping
# =============================================================================


class TestStepping:
    """Test the physics tick and the command cadence."""

    def test_get_state_is_copy(self, plain):
        sim = make_sim(plain, Point(3500.0, 2000.0))
        state = sim.get_state()
        state.position = Point(0.0, 0.0)
        assert sim.state.position == Point(3500.0, 2000.0)

    def test_time_advances(self, plain):
        sim = make_sim(plain, Point(3500.0, 2000.0), dt=0.25)
        for _ in range(4):
            sim.step()
        assert sim.time == 1.0

    def test_initial_command_holds(self, plain):
        """Without a command the vehicle keeps its attitude and power."""
        sim = make_sim(plain, Point(3500.0, 2000.0), heading=-30.0, power=2, dt=0.25)
        sim.step()
        assert sim.state.heading_deg == -30.0
        assert sim.state.power == 2

    def test_command_applied_once_per_interval(self, plain):
        """Heading slews 15 degrees per command interval, not per tick."""
        sim = make_sim(plain, Point(3500.0, 2000.0), dt=0.25, command_interval=1.0)
        sim.set_command(Command(target_angle=90.0, target_power=4))

        headings = []
        for _ in range(9):
            sim.step()
            headings.append(sim.state.heading_deg)

        assert headings == [15.0] * 4 + [30.0] * 4 + [45.0]
        assert sim.state.power == 3

    def test_run_until_time_limit(self, plain):
        sim = make_sim(plain, Point(3500.0, 2000.0), power=4, dt=0.25)
        result = sim.run(max_time=2.0)

        assert result.status is FlightStatus.FLYING
        assert result.duration == 2.0
        assert len(result.states) == 9


# =============================================================================
# Flight Termination
# =============================================================================


class TestTermination:
    """Test touchdown classification and world exit."""

    def test_soft_landing_on_flat(self, plain):
        sim = make_sim(plain, Point(3500.0, 110.0), velocity=Point(0.0, -5.0))
        result = sim.run()

        assert result.status is FlightStatus.LANDED
        assert result.duration < 5.0

    def test_hard_landing_crashes(self, plain):
        """Falling 900 m with the engine off exceeds the vertical limit."""
        sim = make_sim(plain, Point(3500.0, 1000.0))
        result = sim.run()

        assert result.status is FlightStatus.CRASHED
        assert abs(result.final_state.velocity.y) > 40.0

    def test_fast_horizontal_crashes(self, plain):
        sim = make_sim(plain, Point(3500.0, 110.0), velocity=Point(30.0, -5.0))
        assert sim.run().status is FlightStatus.CRASHED

    def test_tilted_landing_crashes(self, plain):
        """Touchdown must be level."""
        sim = make_sim(plain, Point(3500.0, 110.0), velocity=Point(0.0, -5.0), heading=15.0)
        assert sim.run().status is FlightStatus.CRASHED

    def test_slope_contact_crashes(self, slope):
        """Any contact with a non-flat segment is a crash."""
        sim = make_sim(slope, Point(5000.0, 560.0), velocity=Point(0.0, -2.0))
        assert sim.run().status is FlightStatus.CRASHED

    def test_landing_on_pad_corner(self):
        """Touching down on the vertex a pad shares with a slope lands."""
        terrain = Terrain.from_points([Point(0.0, 1000.0), Point(3000.0, 100.0), Point(6999.0, 100.0)])
        sim = make_sim(terrain, Point(3000.0, 110.0), velocity=Point(0.0, -5.0))
        assert sim.run().status is FlightStatus.LANDED

    def test_leaving_world(self, plain):
        """Crossing x = W ends the flight without raising."""
        sim = make_sim(plain, Point(6990.0, 2000.0), velocity=Point(50.0, 0.0))
        result = sim.run()

        assert result.status is FlightStatus.OUT_OF_BOUNDS
        assert result.final_state.position.x >= 7000.0

    def test_starting_outside(self, plain):
        sim = make_sim(plain, Point(-10.0, 2000.0))
        assert sim.status is FlightStatus.OUT_OF_BOUNDS
        assert sim.step() is FlightStatus.OUT_OF_BOUNDS
        assert sim.time == 0.0

    def test_terminal_is_sticky(self, plain):
        sim = make_sim(plain, Point(3500.0, 110.0), velocity=Point(0.0, -5.0))
        sim.run()
        time = sim.time
        sim.step()
        assert sim.time == time
        assert sim.status.is_terminal


# =============================================================================
# Results
# =============================================================================


class TestSimulationResult:
    """Test history arrays and export."""

    def test_arrays(self, plain):
        sim = make_sim(plain, Point(3500.0, 2000.0), power=4, dt=0.25)
        result = sim.run(max_time=1.0)

        assert result.time.shape == (5,)
        assert result.position.shape == (5, 2)
        assert result.velocity.shape == (5, 2)
        assert result.power.dtype == np.int64
        assert np.all(np.diff(result.time) > 0)

    def test_no_history(self, plain):
        sim = make_sim(plain, Point(3500.0, 2000.0), dt=0.25, record_history=False)
        result = sim.run(max_time=1.0)
        assert len(result.states) == 1
        assert result.final_state.time == 1.0

    def test_plans_default_empty(self, plain):
        result = SimulationResult.from_simulator(make_sim(plain, Point(3500.0, 2000.0)))
        assert result.plans == []

    def test_to_dataframe(self, plain):
        sim = make_sim(plain, Point(3500.0, 2000.0), dt=0.25)
        df = sim.run(max_time=1.0).to_dataframe()

        assert df.columns == ["time", "x", "y", "vx", "vy", "heading", "power"]
        assert df.height == 5
