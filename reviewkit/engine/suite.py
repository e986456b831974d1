"""Run several reviews side by side over the same deltas.

Each review keeps its own knowledge type inside its own ``Engine``; the
suite only sees errors and continuations.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from reviewkit.core.errors import ReviewError
from reviewkit.engine.report import merge_reports
from reviewkit.engine.review import Review
from reviewkit.engine.runner import Engine, RunOptions
from reviewkit.project import ProjectDelta


@dataclass(frozen=True)
class SuiteResult:
    errors_by_path: dict[str, list[ReviewError]]
    errors_by_review: dict[str, dict[str, list[ReviewError]]]
    next_run: ReviewSuite


@dataclass(frozen=True)
class ReviewSuite:
    engines: tuple[Engine, ...]

    @classmethod
    def of(cls, reviews: Iterable[Review], options: RunOptions | None = None) -> ReviewSuite:
        engines = tuple(Engine(review=r, options=options or RunOptions()) for r in reviews)
        names = [e.name for e in engines]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate review name(s): {', '.join(duplicates)}")
        return cls(engines)

    @property
    def names(self) -> list[str]:
        return [engine.name for engine in self.engines]

    def run(self, delta: ProjectDelta) -> SuiteResult:
        results = [engine.run(delta) for engine in self.engines]
        by_review = {
            engine.name: result.errors_by_path
            for engine, result in zip(self.engines, results)
        }
        return SuiteResult(
            errors_by_path=merge_reports(*(r.errors_by_path for r in results)),
            errors_by_review=by_review,
            next_run=ReviewSuite(tuple(r.next_run for r in results)),
        )


__all__ = ["ReviewSuite", "SuiteResult"]
