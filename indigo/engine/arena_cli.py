"""CLI for running bot-vs-bot arena matches.

Usage::

    python -m indigo.engine.arena_cli --p1 random --p2 smart --games 20

    # Three bots, shared gates
    python -m indigo.engine.arena_cli --p1 smart --p2 random --p3 random \\
        --shared-gates --games 10
"""

from __future__ import annotations

import argparse
import logging
import sys

from indigo.config import settings
from indigo.engine.arena import run_arena
from indigo.engine.bot_strategy import BotStrategy, get_strategy


def _make_strategy(name: str, seed: int, args: argparse.Namespace) -> BotStrategy:
    try:
        return get_strategy(name, seed=seed, proximity_weight=args.proximity_weight)
    except ValueError:
        print(f"Unknown strategy: {name}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Indigo Bot-vs-Bot Arena")
    parser.add_argument("--games", type=int, default=settings.arena_games)
    parser.add_argument("--seed", type=int, default=settings.random_seed or 0)
    parser.add_argument("--p1", default="random", help="Strategy for player 1")
    parser.add_argument("--p2", default="smart", help="Strategy for player 2")
    parser.add_argument("--p3", default=None, help="Strategy for player 3")
    parser.add_argument("--p4", default=None, help="Strategy for player 4")
    parser.add_argument(
        "--shared-gates",
        action="store_true",
        default=settings.shared_gates,
        help="Share gates between players (three players)",
    )
    parser.add_argument(
        "--proximity-weight",
        type=float,
        default=settings.smart_proximity_weight,
        help="Weight of the gate proximity term for smart bots",
    )
    parser.add_argument(
        "--no-seat-rotation",
        action="store_true",
        help="Keep seat order fixed instead of rotating each game",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    names = [n for n in (args.p1, args.p2, args.p3, args.p4) if n]
    strategies: dict[str, BotStrategy] = {}
    for i, name in enumerate(names):
        label = f"{name}_{i + 1}"
        strategies[label] = _make_strategy(name, args.seed + i, args)

    labels = list(strategies)
    print(f"Arena: {' vs '.join(labels)}")
    print(f"Games: {args.games}, shared gates: {args.shared_gates}")
    print()

    def progress(done: int, total: int) -> None:
        if done % 5 == 0 or done == total:
            print(f"  [{done}/{total}] games completed", flush=True)

    result = run_arena(
        strategies=strategies,
        num_games=args.games,
        base_seed=args.seed,
        num_players=len(strategies),
        shared_gates=args.shared_gates,
        alternate_seats=not args.no_seat_rotation,
        progress_callback=progress,
    )

    print()
    print(result.summary())


if __name__ == "__main__":
    main()
