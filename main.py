"""Command-line runner for Monster Gauntlet.

Generates a player, sends them through a roster of monsters, records the
game in an in-memory store and prints the end-of-game report.

Usage:
    python main.py
    python main.py --enemies 5 --seed 42
    python main.py --name "Ada the Bold" --loot-scaling random-level --json

Environment variables:
    GAUNTLET_ENEMY_COUNT  Default number of monsters (default: 10)
    GAUNTLET_LOG_LEVEL    Default log level (default: WARNING)
"""

import argparse
import logging
import random
import sys

from config import DEFAULT_ENEMY_COUNT, LOG_LEVEL
from engine.battle import GameManager, report
from engine.generators import LootScaling
from engine.store import InMemoryStore, record_battle


def play(
    enemies: int,
    seed: int | None = None,
    name: str | None = None,
    loot_scaling: LootScaling = LootScaling.ATTACK_POWER,
    as_json: bool = False,
) -> None:
    """Run one game and print its report."""
    rng = random.Random(seed) if seed is not None else None
    manager = GameManager(rng=rng, loot_scaling=loot_scaling)
    summary = manager.run(enemies, player_name=name)

    store = InMemoryStore()
    game = record_battle(store, summary)

    if as_json:
        print(summary.model_dump_json(indent=2))
        return

    for line in report(summary):
        print(line)
    print(f"Game {game.id} recorded with score {game.score}.")


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, configure logging and play one game.

    Args:
        argv: Command-line arguments; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code: 0 on success, 2 on a rejected game setup.
    """
    parser = argparse.ArgumentParser(
        description="Fight a gauntlet of procedurally generated monsters",
    )
    parser.add_argument(
        "--enemies",
        type=int,
        default=DEFAULT_ENEMY_COUNT,
        help=f"Number of monsters to fight (default: {DEFAULT_ENEMY_COUNT})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible game")
    parser.add_argument("--name", default=None, help="Player name instead of a generated one")
    parser.add_argument(
        "--loot-scaling",
        choices=[s.value for s in LootScaling],
        default=LootScaling.ATTACK_POWER.value,
        help="How monster loot value is scaled (default: attack-power)",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help=f"Logging level (default: {LOG_LEVEL}, or set GAUNTLET_LOG_LEVEL)",
    )
    parser.add_argument("--json", action="store_true", help="Print the battle summary as JSON")

    args = parser.parse_args(argv)

    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        parser.error(f"unknown log level: {args.log_level}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        play(
            args.enemies,
            seed=args.seed,
            name=args.name,
            loot_scaling=LootScaling(args.loot_scaling),
            as_json=args.json,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
