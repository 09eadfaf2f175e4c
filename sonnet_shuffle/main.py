"""
Terminal front end for Sonnet-Shuffle.

Usage:
    python -m sonnet_shuffle.main
    python -m sonnet_shuffle.main config.yaml --seed 7 --verbose
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .environment import ShuffleConfig
from .shuffle import SonnetShuffle
from .utils import render_board, setup_logging


HELP_TEXT = """Commands:
  move A B   drag the line in slot A onto slot B (use - for B to drop outside)
  check      check the current order
  new        start a new sonnet (after a passing check)
  show       redraw the board
  help       show this help
  quit       leave the game"""

OUTSIDE = ("-", "out", "none")


def load_config(config_path: str) -> ShuffleConfig:
    """Load puzzle configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return ShuffleConfig(**data)


def _parse_slot(token: str) -> Optional[int]:
    """Turn a 1-based slot number into an index; None for "outside"."""
    if token.lower() in OUTSIDE:
        return None
    return int(token) - 1


def run_command(game: SonnetShuffle, command: str) -> Optional[str]:
    """
    Execute one command against the game.

    Args:
        game: The running game
        command: A line typed by the player

    Returns:
        Text to show the player, or None when the player wants to quit
    """
    parts = command.strip().split()
    if not parts:
        return ""

    name, args = parts[0].lower(), parts[1:]

    if name in ("quit", "q", "exit"):
        return None

    if name in ("help", "h", "?"):
        return HELP_TEXT

    if name in ("show", "s"):
        return ""

    if name in ("move", "m"):
        if len(args) != 2:
            return "Usage: move A B"
        try:
            source = _parse_slot(args[0])
            target = _parse_slot(args[1])
        except ValueError:
            return "Slots are numbers from 1 to 14."
        if source is None:
            return "Pick up a line from a slot first."

        outcome = game.move(source, target)
        if outcome == "SWAP":
            return f"Swapped lines {source + 1} and {target + 1}."
        if outcome == "MOVE":
            return f"Moved line {source + 1} to slot {target + 1}."
        if outcome == "REVERT":
            return "Nothing changed."
        return f"Slot {args[0]} has no line to move."

    if name in ("check", "c"):
        if not game.can_check:
            return "Nothing to check."
        result = game.check_order()
        if result is None:
            return "Nothing to check."
        if result.all_correct:
            return f"Every line is in place! (check #{result.attempt})"
        flagged = ", ".join(str(i + 1) for i in sorted(result.flagged_indices))
        return f"{len(result.flagged_indices)} slot(s) need work: {flagged} (check #{result.attempt})"

    if name in ("new", "n"):
        if game.new_puzzle():
            return "New sonnet shuffled."
        if game.message:
            return game.message
        return "Check a correct board before starting a new sonnet."

    return f"Unknown command: {name!r}. Type 'help' for commands."


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Put the lines of a shuffled sonnet back in order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  seed: 42
  sonnets_path: my_sonnets.yaml
  compact_layout: false
  shake_duration_ms: 500
  log_level: INFO
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for sonnet choice and shuffle"
    )
    parser.add_argument(
        "--sonnets",
        help="YAML or text file of sonnets (default: bundled collection)"
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Use the narrow-viewport slot layout"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else ShuffleConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.sonnets:
        overrides["sonnets_path"] = Path(args.sonnets)
    if args.compact:
        overrides["compact_layout"] = True
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    if overrides:
        config = config.model_copy(update=overrides)

    setup_logging(config.log_level)

    try:
        game = SonnetShuffle.create(config=config)
    except (OSError, ValueError) as e:
        print(f"Error loading sonnets: {e}", file=sys.stderr)
        return 1

    if not game.new_puzzle():
        print(game.message, file=sys.stderr)
        return 1

    print(HELP_TEXT)
    output = ""
    while output is not None:
        print()
        print(render_board(game.frame()))
        if output:
            print()
            print(output)
        try:
            command = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        output = run_command(game, command)

    print()
    print("=== Summary ===")
    print(f"Checks: {game.state.attempts}")
    print(f"Solved: {'yes' if game.state.passed else 'no'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
