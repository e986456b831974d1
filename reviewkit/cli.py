"""CLI entry point: argparse, subcommand routing."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from reviewkit.core.config import CONFIG_FILE, load_config
from reviewkit.utils import PROJECT_ROOT

USAGE_EXAMPLES = """
examples:
  reviewkit check --review mypkg.reviews:NO_DEBUG_CALLS
  reviewkit check src --json
  reviewkit fix --dry-run
  reviewkit config set reviews mypkg.reviews:ALL
  reviewkit config set max_workers 4
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reviewkit",
        description="reviewkit: incremental project reviews",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, default=None,
                        help=f"Config file (default: {CONFIG_FILE})")
    parser.add_argument("--verbose", action="store_true", help="Debug logging to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Run reviews and print errors")
    p_check.add_argument("path", nargs="?", default=str(PROJECT_ROOT))
    p_check.add_argument("--review", action="append", metavar="SPEC",
                         help="Extra review to run (package.module:attribute)")
    p_check.add_argument("--json", action="store_true")
    p_check.add_argument("--details", action="store_true", help="Print error details")

    p_fix = sub.add_parser("fix", help="Apply fixes attached to reported errors")
    p_fix.add_argument("path", nargs="?", default=str(PROJECT_ROOT))
    p_fix.add_argument("--review", action="append", metavar="SPEC",
                       help="Extra review to run (package.module:attribute)")
    p_fix.add_argument("--dry-run", action="store_true",
                       help="Show what would change without modifying files")

    p_config = sub.add_parser("config", help="Show or change configuration")
    config_sub = p_config.add_subparsers(dest="config_action")
    config_sub.add_parser("show", help="Show all config keys")
    p_set = config_sub.add_parser("set", help="Set a config key")
    p_set.add_argument("config_key")
    p_set.add_argument("config_value")
    p_unset = config_sub.add_parser("unset", help="Reset a config key to its default")
    p_unset.add_argument("config_key")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    args._config_path = Path(args.config) if args.config else CONFIG_FILE
    args._config = load_config(args._config_path)

    # Lazy-load command handlers from commands/
    from reviewkit.commands.check import cmd_check
    from reviewkit.commands.config_cmd import cmd_config
    from reviewkit.commands.fix_cmd import cmd_fix

    commands = {
        "check": cmd_check,
        "fix": cmd_fix,
        "config": cmd_config,
    }
    try:
        return commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
