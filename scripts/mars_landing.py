#!/usr/bin/env python
"""Example: Closed-loop Mars landing on the reference terrain.

This script demonstrates the separation between:
- Simulation infrastructure (lander/) - the "plant" / truth model
- Flight software (flight/) - planner, selector and pilot

The pilot follows real flight software patterns:
1. Read state (truth in sim)
2. Plan a safe Bézier waypoint toward the landing zone
3. Select the (angle, power) command that best steers toward it
4. Step simulation until touchdown or exit

Usage:
    python scripts/mars_landing.py
    python scripts/mars_landing.py --max-time 60 --plot landing.png --csv landing.csv
"""

import argparse
import logging
from pathlib import Path

from flight import LandingPilot
from lander.dynamics import VehicleState
from lander.simulation import SimConfig, Simulator
from lander.terrain import MARS_SURFACE, Terrain


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fly the lander onto the Mars landing zone.")
    parser.add_argument("--max-time", type=float, default=300.0, help="Time limit [s]")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Physics tick [s]")
    parser.add_argument("--plan-interval", type=float, default=1.0, help="Re-plan period [s]")
    parser.add_argument("--plot", type=Path, default=None, help="Save the flight figure here")
    parser.add_argument("--csv", type=Path, default=None, help="Save the state history here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show planner/pilot logs")
    return parser.parse_args()


def run_landing(args: argparse.Namespace):
    """Fly one landing and print a summary."""
    print("=" * 60)
    print("MARS LANDING SIMULATION")
    print("=" * 60)

    terrain = Terrain.from_text(MARS_SURFACE)
    zone = terrain.landing_zone()
    target = terrain.landing_target()
    state = VehicleState.initial()

    print(f"\nTerrain: {len(terrain.segments)} segments")
    print(f"Landing zone: x = {zone.a.x:.0f} .. {zone.b.x:.0f} m at y = {zone.a.y:.0f} m")
    print(f"Target: ({target.x:.0f}, {target.y:.0f})")
    print(f"Start: ({state.position.x:.0f}, {state.position.y:.0f}), power {state.power}")

    sim = Simulator(state, terrain, SimConfig(dt=args.dt, max_time=args.max_time))
    pilot = LandingPilot(terrain=terrain, target=target, plan_interval=args.plan_interval)

    print("\nFlying...")
    result = pilot.fly(sim)
    final = result.final_state
    found = sum(1 for plan in result.plans if plan.found)

    print("\n" + "-" * 60)
    print("RESULT")
    print("-" * 60)
    print(f"  Status:        {result.status.name}")
    print(f"  Flight time:   {result.duration:.1f} s")
    print(f"  Final pos:     ({final.position.x:.0f}, {final.position.y:.0f}) m")
    print(f"  Final vel:     ({final.velocity.x:.1f}, {final.velocity.y:.1f}) m/s")
    print(f"  Final heading: {final.heading_deg:.0f} deg, power {final.power}")
    print(f"  Plans:         {len(result.plans)} ({found} with a safe path)")

    return terrain, result


def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    terrain, result = run_landing(args)

    if args.csv is not None:
        result.to_dataframe().write_csv(args.csv)
        print(f"\nHistory written to {args.csv}")

    if args.plot is not None:
        import matplotlib

        matplotlib.use("Agg")
        from lander.plotting import plot_flight

        fig = plot_flight(terrain, result)
        fig.savefig(args.plot, dpi=120)
        print(f"Figure written to {args.plot}")


if __name__ == "__main__":
    main()
