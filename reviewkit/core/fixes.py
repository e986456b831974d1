"""Mechanical text fixes: range replacement and batch application.

A fix never knows what it means; it only splices text. ``apply_fixes``
guarantees the splice is exact and refuses batches that overlap or that
leave the source untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations

from reviewkit.core.ranges import Position, Range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplaceRange:
    """Replace the text in ``range`` with ``replacement``."""

    range: Range
    replacement: str


# The only fix variant; removal and insertion are specializations of it.
Fix = ReplaceRange


def replace_range(range_: Range, replacement: str) -> Fix:
    return ReplaceRange(range_, replacement)


def removal(range_: Range) -> Fix:
    return ReplaceRange(range_, "")


def insertion(position: Position, text: str) -> Fix:
    return ReplaceRange(Range.empty_at(position), text)


class FixError(ValueError):
    """A batch of fixes could not be applied."""


class CollisionDetected(FixError):
    """Two fixes in the same batch edit overlapping text."""

    def __init__(self, first: Fix, second: Fix):
        self.first = first
        self.second = second
        super().__init__(f"fixes collide: {first.range} overlaps {second.range}")


class ResultUnchanged(FixError):
    """Applying the fixes produced text identical to the source."""

    def __init__(self):
        super().__init__("applying the fixes did not change the source")


class FixOutOfRange(FixError):
    """A fix range that cannot be addressed in the source text."""

    def __init__(self, fix: Fix, line_count: int):
        self.fix = fix
        super().__init__(f"fix range {fix.range} is outside a source of {line_count} line(s)")


@dataclass(frozen=True)
class FixOutcome:
    """Value-style result of :func:`try_apply_fixes`: exactly one field is set."""

    source: str | None = None
    error: FixError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def find_collision(fixes: list[Fix]) -> tuple[Fix, Fix] | None:
    """Return the first pair of overlapping fixes, if any."""
    for first, second in combinations(fixes, 2):
        if first.range.overlaps(second.range):
            return first, second
    return None


def _splice(lines: list[str], fix: Fix) -> list[str]:
    start, end = fix.range.start, fix.range.end
    replacement = fix.replacement.split("\n")
    prefix = lines[start.row - 1][: start.column - 1]
    suffix = lines[end.row - 1][end.column - 1 :]

    middle = list(replacement)
    middle[0] = prefix + middle[0]
    middle[-1] = middle[-1] + suffix
    return lines[: start.row - 1] + middle + lines[end.row :]


def apply_fixes(fixes: list[Fix], source: str) -> str:
    """Apply a batch of non-overlapping fixes to *source* and return the new text.

    Raises:
        CollisionDetected: two fixes overlap (checked before any edit).
        FixOutOfRange: a fix range is reversed or points outside the
            source (missing row, column below 1).
        ResultUnchanged: the edits cancel out or do nothing.
    """
    fixes = list(fixes)
    collision = find_collision(fixes)
    if collision is not None:
        raise CollisionDetected(*collision)

    lines = source.split("\n")
    for fix in fixes:
        start, end = fix.range.start, fix.range.end
        if (
            start.row < 1
            or end.row > len(lines)
            or start.column < 1
            or end.column < 1
            or end < start
        ):
            raise FixOutOfRange(fix, len(lines))

    # Farthest edit first so earlier rows stay addressable. Ties on start are
    # broken by end, so a replacement lands before an insertion at its start.
    for fix in sorted(fixes, key=lambda f: f.range, reverse=True):
        lines = _splice(lines, fix)

    result = "\n".join(lines)
    if result == source:
        raise ResultUnchanged()
    logger.debug("Applied %d fix(es)", len(fixes))
    return result


def try_apply_fixes(fixes: list[Fix], source: str) -> FixOutcome:
    """Like :func:`apply_fixes`, but returns the failure instead of raising it."""
    try:
        return FixOutcome(source=apply_fixes(fixes, source))
    except FixError as exc:
        return FixOutcome(error=exc)


__all__ = [
    "CollisionDetected",
    "Fix",
    "FixError",
    "FixOutOfRange",
    "FixOutcome",
    "ReplaceRange",
    "ResultUnchanged",
    "apply_fixes",
    "find_collision",
    "insertion",
    "removal",
    "replace_range",
    "try_apply_fixes",
]
