"""Reporting for problems that do not stop a load, check or fix run.

Host code skips an unreadable file, a broken manifest or a missing
dependency and carries on; the skip is logged at debug level. Problems
the user has to act on go to stderr.
"""

from __future__ import annotations

import logging
import sys

from reviewkit.utils import colorize


def note_skipped(logger: logging.Logger, what: str, exc: Exception) -> None:
    """Debug-log an input that was left out of the project."""
    logger.debug("Skipped %s: %s: %s", what, type(exc).__name__, exc)


def warn(message: str) -> None:
    print(colorize(f"  WARNING: {message}", "yellow"), file=sys.stderr)


def print_error(message: str) -> None:
    """Print a fatal CLI error to stderr; the caller decides the exit code."""
    print(colorize(f"  Error: {message}", "red"), file=sys.stderr)


__all__ = ["note_skipped", "print_error", "warn"]
