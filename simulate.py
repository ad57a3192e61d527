#!/usr/bin/env python3
"""
Headless batch of computer-vs-computer Pot Stirrers games.
Logs the win tally and per-color averages for the chosen strategies.
"""

import argparse
import os
import sys
import time

from dotenv import load_dotenv
from loguru import logger

from potstirrers import Color, Simulator
from potstirrers.config import config
from potstirrers.simulator import win_counts
from potstirrers.strategy import available

load_dotenv()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Simulate computer-controlled games",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--games",
        type=int,
        default=int(os.getenv("GAMES", 20)),
        help="Number of games to play",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for the batch")
    parser.add_argument(
        "--strategies",
        type=str,
        nargs="+",
        default=["heuristic"],
        help=f"Strategy per color in turn order, or one for all. Available: {available()}",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=config.MAX_TURNS,
        help="Maximum turns per game before stopping without a winner",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every game event"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    logger.remove()
    logger.add(sys.stderr, level="INFO" if args.verbose else "WARNING")

    strategies = args.strategies
    if len(strategies) == 1:
        strategies = strategies * config.NUM_COLORS
    if len(strategies) != config.NUM_COLORS:
        raise SystemExit(
            f"--strategies takes 1 or {config.NUM_COLORS} names, got {len(strategies)}"
        )

    simulator = Simulator(strategies=strategies, seed=args.seed, max_turns=args.max_turns)

    start_time = time.time()
    summaries = simulator.run(args.games)
    elapsed = time.time() - start_time

    # The tally is always shown, whatever the event level
    logger.remove()
    logger.add(sys.stderr, level="INFO")

    wins = win_counts(summaries)
    total_turns = sum(s.turns for s in summaries)
    logger.info(f"Played {len(summaries)} games in {elapsed:.2f}s (seed {args.seed})")
    for color, name in zip(Color, strategies):
        captures = sum(s.captures[color] for s in summaries)
        logger.info(
            f"   • {color.label:<7} {name:<10} wins {wins[color.label]:>4}  "
            f"captures {captures:>5}"
        )
    if wins["none"]:
        logger.info(f"   • Unfinished games: {wins['none']}")
    if summaries:
        logger.info(f"Average turns per game: {total_turns / len(summaries):.1f}")


if __name__ == "__main__":
    main()
