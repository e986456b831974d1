"""Shared helpers used by multiple command modules."""

from __future__ import annotations

import sys
from pathlib import Path

from reviewkit.core.errors import ReviewError
from reviewkit.core.fallbacks import print_error
from reviewkit.host.parsing import ModuleParseError
from reviewkit.host.session import Session
from reviewkit.plugins import load_reviews
from reviewkit.utils import colorize


def review_specs(args, config: dict) -> list[str]:
    specs = list(config.get("reviews", []))
    for spec in getattr(args, "review", None) or []:
        if spec not in specs:
            specs.append(spec)
    return specs


def open_session(args, config: dict) -> Session:
    """Load review plugins and build a session; exit with a message on failure."""
    specs = review_specs(args, config)
    if not specs:
        print_error("no reviews configured (use --review or `reviewkit config set reviews ...`)")
        sys.exit(2)
    try:
        reviews = load_reviews(specs)
        return Session(Path(args.path), reviews, config)
    except (ImportError, ValueError) as exc:
        print_error(str(exc))
        sys.exit(2)


def format_error(err: ReviewError) -> str:
    location = colorize(f"{err.path}:{err.range.start}", "cyan")
    review = colorize(f"[{err.review}]", "dim")
    fixable = colorize(" (fixable)", "green") if err.fixable else ""
    return f"  {location}  {review} {err.message}{fixable}"


def print_failures(failures: list[ModuleParseError]) -> None:
    for failure in failures:
        print(colorize(f"  {failure}", "yellow"), file=sys.stderr)
