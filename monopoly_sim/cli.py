"""
Command-line entry point for batch simulations.

Usage:
    # 1000 games, four default players
    monopoly-sim

    # 10000 games on 4 workers with a fixed seed
    monopoly-sim -n 10000 -w 4 --seed 42

    # Mixed lineup, per-seat statistics saved to CSV
    monopoly-sim -s greedy,cautious,random,expected_value --csv seats.csv
"""

import argparse
import logging
import sys
from typing import List, Optional

from monopoly_sim.config import MAX_PLAYERS, MIN_PLAYERS, GameConfig
from monopoly_sim.exceptions import MonopolyError
from monopoly_sim.report import format_report, summary_frame
from monopoly_sim.settings import SimulationSettings, get_settings
from monopoly_sim.simulation import run_simulations_parallel
from monopoly_sim.strategies import PROFILES

logger = logging.getLogger(__name__)


def _strategy_list(value: str) -> List[str]:
    names = [name.strip() for name in value.split(",") if name.strip()]
    unknown = [name for name in names if name not in PROFILES]
    if not names or unknown:
        raise argparse.ArgumentTypeError(
            f"unknown strategy {', '.join(unknown) or value!r}; choose from {', '.join(sorted(PROFILES))}"
        )
    return names


def build_parser(settings: SimulationSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monopoly-sim",
        description="Simulate Monopoly games and report statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-n", "--games",
        type=int,
        default=settings.games,
        help=f"Number of games to run (default: {settings.games})",
    )
    parser.add_argument(
        "-p", "--players",
        type=int,
        default=settings.players,
        choices=range(MIN_PLAYERS, MAX_PLAYERS + 1),
        help=f"Number of players (default: {settings.players})",
    )
    parser.add_argument(
        "-r", "--max-rounds",
        type=int,
        default=settings.max_rounds,
        help=f"Maximum rounds per game (default: {settings.max_rounds})",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=settings.workers,
        help=f"Number of parallel workers (default: {settings.workers} = sequential)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Seed for reproducible results",
    )
    parser.add_argument(
        "-s", "--strategies",
        type=_strategy_list,
        default=settings.strategies,
        help="Strategy profiles, one for all seats or comma-separated per seat "
        f"(available: {', '.join(sorted(PROFILES))})",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write the per-seat summary to this CSV file",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.log_level})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = GameConfig(player_count=args.players)
        strategies = args.strategies if len(args.strategies) > 1 else args.strategies * args.players
        stats = run_simulations_parallel(
            config,
            strategies,
            args.games,
            max_rounds=args.max_rounds,
            seed=args.seed,
            workers=args.workers,
        )
    except MonopolyError as e:
        logger.error("Simulation failed: %s", e)
        return 1

    print(format_report(stats, strategies))

    if args.csv:
        summary_frame(stats, strategies).to_csv(args.csv)
        logger.info("Wrote per-seat summary to %s", args.csv)

    return 0


if __name__ == "__main__":
    sys.exit(main())
