"""Tests for the plotting helpers."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from flight import LandingPilot
from lander.dynamics import VehicleState
from lander.geometry import Point
from lander.plotting import plot_flight, plot_telemetry
from lander.simulation import SimConfig, Simulator
from lander.terrain import MARS_SURFACE, Terrain


@pytest.fixture(scope="module")
def flight():
    terrain = Terrain.from_points([Point(3700.0, 220.0), Point(4700.0, 220.0)])
    sim = Simulator(VehicleState.initial(), terrain, SimConfig(dt=0.25))
    result = LandingPilot(terrain=terrain).fly(sim, max_time=3.0)
    return terrain, result


class TestPlotFlight:
    def test_terrain_only(self):
        fig = plot_flight(Terrain.from_text(MARS_SURFACE))
        assert isinstance(fig, Figure)
        assert fig.axes[0].get_title() == "Terrain"
        plt.close(fig)

    def test_with_result(self, flight):
        """Trajectory and last plan are drawn."""
        terrain, result = flight
        fig = plot_flight(terrain, result)
        labels = fig.axes[0].get_legend_handles_labels()[1]
        assert "Trajectory" in labels
        assert "Planned path" in labels
        plt.close(fig)

    def test_explicit_unfound_plan(self, flight):
        terrain, result = flight
        plan = result.plans[0]._replace(found=False)
        fig = plot_flight(terrain, plan=plan)
        labels = fig.axes[0].get_legend_handles_labels()[1]
        assert "No safe path" in labels
        plt.close(fig)


class TestPlotTelemetry:
    def test_three_panels(self, flight):
        _, result = flight
        fig = plot_telemetry(result)
        assert len(fig.axes) == 3
        plt.close(fig)
