#!/usr/bin/env python3
"""Run the simulation headless for a number of days.

A simple autopilot buys the cheapest affordable listing outright, keeps
properties above a condition floor and sells anything it cannot keep up.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from estate_sim.config import SimulationConfig
from estate_sim.game import PropertyGame
from estate_sim.logging import get_logger, setup_logging
from estate_sim.sinks import ConsoleSink

logger = get_logger(__name__)


def autopilot_step(game: PropertyGame, repair_below: float) -> None:
    """Make at most one purchase and schedule any due repairs."""
    state = game.state
    affordable = sorted(
        (listing for listing in state.market if listing.cost <= state.balance),
        key=lambda listing: listing.cost,
    )
    if affordable:
        game.purchase_with_cash(affordable[0].property_id)

    for prop in game.state.portfolio:
        if prop.maintenance_work is None and prop.maintenance_percent < repair_below:
            outcome = game.schedule_maintenance(prop.property_id)
            if not outcome.success:
                logger.info("Could not repair %s: %s", prop.name, outcome.message)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the estate-sim engine headless")
    parser.add_argument("--days", type=int, default=365, help="Days to simulate (default: 365)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--repair-below",
        type=float,
        default=60.0,
        help="Schedule maintenance below this condition percent (default: 60)",
    )
    parser.add_argument("--autopilot", action="store_true", help="Let the autopilot buy and repair")
    parser.add_argument("--json", action="store_true", help="Print the final snapshot as JSON")
    parser.add_argument("--history", type=int, default=20, help="History entries to print (default: 20)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        default="standard",
        choices=["standard", "json"],
        help="Log format (default: standard)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_format)
    config = SimulationConfig.from_env()
    game = PropertyGame(config=config, seed=args.seed)
    sink = ConsoleSink(max_entries=args.history)

    for _ in range(args.days):
        if args.autopilot:
            autopilot_step(game, args.repair_below)
        game.advance_day()

    sink.write_history(game.state.history)
    if args.json:
        sink.write_snapshot(game.state)
    else:
        sink.write_summary(game.state)
    sink.close()


if __name__ == "__main__":
    main()
