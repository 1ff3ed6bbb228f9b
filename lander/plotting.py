"""Visualization module for Lander.

Provides plotting functions for:
- Terrain profile with the landing zone highlighted
- Planned Bézier path (lit points) and waypoint
- Flown trajectory from a simulation result
- Telemetry time histories (velocity, heading, power)

All plots use matplotlib with a consistent, professional style.

Plans are read by attribute (`found`, `start`, `target`, `waypoint`,
`lit_points`), so any planner result with those fields can be drawn.
"""

import matplotlib.pyplot as plt
import numpy as np
from beartype import beartype
from matplotlib.figure import Figure

from lander.simulation.simulator import FlightStatus, SimulationResult
from lander.terrain import Terrain

# =============================================================================
# Plot Style Configuration
# =============================================================================

# Professional color palette
COLORS = {
    "primary": "#2E86AB",  # Steel blue
    "secondary": "#A23B72",  # Berry
    "accent": "#F18F01",  # Orange
    "ground": "#8C4A2F",  # Mars red-brown
    "pad": "#3BB273",  # Landing zone
    "fill": "#E8D5C4",  # Below-ground fill
    "grid": "#CCCCCC",  # Grid lines
    "text": "#333333",  # Text color
}

STATUS_COLORS = {
    FlightStatus.FLYING: COLORS["primary"],
    FlightStatus.LANDED: COLORS["pad"],
    FlightStatus.CRASHED: COLORS["secondary"],
    FlightStatus.OUT_OF_BOUNDS: COLORS["accent"],
}

# Default figure size (world is 7:3)
DEFAULT_FIGSIZE = (14.0, 6.0)


def _setup_style() -> None:
    """Configure matplotlib style for consistent appearance."""
    plt.rcParams.update(
        {
            "font.family": "sans-serif",
            "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
            "font.size": 11,
            "axes.titlesize": 14,
            "axes.labelsize": 12,
            "axes.linewidth": 1.2,
            "axes.edgecolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
            "xtick.labelsize": 10,
            "ytick.labelsize": 10,
            "xtick.color": COLORS["text"],
            "ytick.color": COLORS["text"],
            "legend.fontsize": 10,
            "grid.alpha": 0.5,
            "grid.linewidth": 0.8,
        }
    )


# =============================================================================
# Flight Overview
# =============================================================================


def _draw_terrain(ax: plt.Axes, terrain: Terrain) -> None:
    """Terrain profile, ground fill and landing zone."""
    points = np.array([[p.x, p.y] for p in terrain.points])
    ax.fill_between(points[:, 0], 0, points[:, 1], color=COLORS["fill"], alpha=0.6)
    ax.plot(points[:, 0], points[:, 1], color=COLORS["ground"], linewidth=2, label="Terrain")

    for i, zone in enumerate(terrain.flat_segments):
        ax.plot(
            [zone.a.x, zone.b.x],
            [zone.a.y, zone.b.y],
            color=COLORS["pad"],
            linewidth=5,
            solid_capstyle="butt",
            label="Landing zone" if i == 0 else None,
        )


def _draw_plan(ax: plt.Axes, plan) -> None:
    """Lit path points, waypoint and target of one plan."""
    lit = plan.lit_points
    if lit:
        xy = np.array([[p.x, p.y] for p in lit])
        ax.scatter(xy[:, 0], xy[:, 1], s=10, color=COLORS["accent"], label="Planned path")
        ax.plot(
            plan.waypoint.x, plan.waypoint.y, "D",
            color=COLORS["accent"], markersize=8, label="Waypoint",
        )
    else:
        # Unvalidated fallback: show the straight line the pilot steers along
        ax.plot(
            [plan.start.x, plan.target.x],
            [plan.start.y, plan.target.y],
            linestyle=":", color=COLORS["accent"], label="No safe path",
        )
    ax.plot(plan.target.x, plan.target.y, "x", color=COLORS["pad"], markersize=10, mew=2)


@beartype
def plot_flight(
    terrain: Terrain,
    result: SimulationResult | None = None,
    plan=None,
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    title: str | None = None,
) -> Figure:
    """Plot the world: terrain, landing zone, plan and flown trajectory.

    Args:
        terrain: Ground profile and world bounds
        result: Simulation result whose trajectory to draw
        plan: Plan to draw; defaults to the last plan recorded in `result`
        figsize: Figure size (width, height) in inches
        title: Optional custom title

    Returns:
        matplotlib Figure object
    """
    _setup_style()

    fig, ax = plt.subplots(figsize=figsize)
    _draw_terrain(ax, terrain)

    if plan is None and result is not None and result.plans:
        plan = result.plans[-1]
    if plan is not None:
        _draw_plan(ax, plan)

    if result is not None:
        position = result.position
        color = STATUS_COLORS[result.status]
        ax.plot(position[:, 0], position[:, 1], color=color, linewidth=2, label="Trajectory")
        ax.plot(position[0, 0], position[0, 1], "o", color=color, markersize=8)
        ax.plot(position[-1, 0], position[-1, 1], "s", color=color, markersize=8)

    ax.set_xlim(0, terrain.bounds.width)
    ax.set_ylim(0, terrain.bounds.height)
    ax.set_aspect("equal")
    ax.set_xlabel("x (m)")
    ax.set_ylabel("Altitude (m)")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")

    if title:
        ax.set_title(title)
    elif result is not None:
        ax.set_title(f"Descent: {result.status.name} after {result.duration:.1f} s")
    else:
        ax.set_title("Terrain")

    fig.tight_layout()
    return fig


# =============================================================================
# Telemetry
# =============================================================================


@beartype
def plot_telemetry(
    result: SimulationResult,
    figsize: tuple[float, float] = (12.0, 8.0),
    title: str | None = None,
) -> Figure:
    """Plot velocity, heading and thrust level against time.

    Args:
        result: Simulation result
        figsize: Figure size
        title: Optional title

    Returns:
        matplotlib Figure
    """
    _setup_style()

    fig, (ax_v, ax_h, ax_p) = plt.subplots(3, 1, figsize=figsize, sharex=True)
    t = result.time
    velocity = result.velocity

    ax_v.plot(t, velocity[:, 0], color=COLORS["primary"], linewidth=2, label="vx")
    ax_v.plot(t, velocity[:, 1], color=COLORS["secondary"], linewidth=2, label="vy")
    ax_v.axhline(y=0, color=COLORS["grid"], linewidth=1)
    ax_v.set_ylabel("Velocity (m/s)")
    ax_v.legend(loc="best")
    ax_v.grid(True, alpha=0.3)

    ax_h.plot(t, result.heading, color=COLORS["accent"], linewidth=2)
    ax_h.set_ylabel("Heading (deg)")
    ax_h.set_ylim(-95, 95)
    ax_h.grid(True, alpha=0.3)

    ax_p.step(t, result.power, where="post", color=COLORS["ground"], linewidth=2)
    ax_p.set_ylabel("Power")
    ax_p.set_xlabel("Time (s)")
    ax_p.set_ylim(-0.2, 4.2)
    ax_p.grid(True, alpha=0.3)

    ax_v.set_title(title or f"Telemetry ({result.status.name})")

    fig.tight_layout()
    return fig
