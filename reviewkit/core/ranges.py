"""Source positions and ranges.

Rows and columns are 1-indexed. A range is half-open: ``end`` points at the
first character *after* the span. Both types are totally ordered, which is
what error sorting and fix collision detection rely on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Position(NamedTuple):
    """A (row, column) location; tuple ordering compares row, then column."""

    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row}:{self.column}"


@dataclass(frozen=True, order=True)
class Range:
    """Half-open span ``[start, end)``.

    Field order makes the generated comparisons lexicographic over
    ``start.row, start.column, end.row, end.column``.
    """

    start: Position
    end: Position

    @classmethod
    def of(cls, start_row: int, start_column: int, end_row: int, end_column: int) -> Range:
        return cls(Position(start_row, start_column), Position(end_row, end_column))

    @classmethod
    def empty_at(cls, position: Position) -> Range:
        return cls(position, position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: Range) -> bool:
        """True when the spans share at least one character.

        Touching endpoints (``self.end == other.start``) do not overlap.
        """
        return self.end > other.start and other.end > self.start

    def contains(self, position: Position) -> bool:
        return self.start <= position < self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def sort_by_range(items, key=lambda item: item.range) -> list:
    """Stable ascending sort by range; equal ranges keep their input order."""
    return sorted(items, key=key)


__all__ = ["Position", "Range", "sort_by_range"]
