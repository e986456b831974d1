"""Errors reported by reviews (data, not exceptions)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from reviewkit.core.fixes import Fix
from reviewkit.core.ranges import Range


@dataclass(frozen=True)
class ReviewError:
    """One reported problem: where it is, what it says, and how to fix it.

    ``path`` selects the file the underline and the fixes target. ``review``
    is filled in by the engine with the reporting review's name when left
    blank.
    """

    path: str
    range: Range
    message: str
    details: tuple[str, ...] = ()
    fixes: tuple[Fix, ...] = ()
    review: str = ""

    @property
    def fixable(self) -> bool:
        return bool(self.fixes)

    def with_details(self, *details: str) -> ReviewError:
        return replace(self, details=self.details + tuple(details))

    def with_fixes(self, fixes: list[Fix] | tuple[Fix, ...]) -> ReviewError:
        """Attach fixes; an empty list leaves the error unfixable."""
        return replace(self, fixes=tuple(fixes))

    def to_dict(self) -> dict:
        return {
            "review": self.review,
            "path": self.path,
            "range": {
                "start": {"row": self.range.start.row, "column": self.range.start.column},
                "end": {"row": self.range.end.row, "column": self.range.end.column},
            },
            "message": self.message,
            "details": list(self.details),
            "fixable": self.fixable,
        }


def error(path: str, range_: Range, message: str, *details: str) -> ReviewError:
    return ReviewError(path=path, range=range_, message=message, details=tuple(details))


@dataclass
class ErrorCounts:
    """Per-run totals, used by summaries and the CLI exit code."""

    errors: int = 0
    fixable: int = 0
    files: set[str] = field(default_factory=set)

    @classmethod
    def of(cls, errors_by_path: dict[str, list[ReviewError]]) -> ErrorCounts:
        counts = cls()
        for path, errors in errors_by_path.items():
            if not errors:
                continue
            counts.files.add(path)
            counts.errors += len(errors)
            counts.fixable += sum(1 for e in errors if e.fixable)
        return counts


__all__ = ["ErrorCounts", "ReviewError", "error"]
