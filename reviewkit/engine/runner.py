"""Run protocol: one review, one cache, one delta in, errors and the next engine out."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from dataclasses import dataclass, field, replace

from reviewkit.core.errors import ReviewError
from reviewkit.engine.cache import ReviewCache, aggregate_knowledge, update_cache
from reviewkit.engine.report import build_report
from reviewkit.engine.review import Review
from reviewkit.project import ProjectDelta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    """Extraction parallelism; never changes results, only how they are computed."""

    max_workers: int = 0
    parallel_threshold: int = 8

    @classmethod
    def from_config(cls, config: dict) -> RunOptions:
        return cls(
            max_workers=int(config.get("max_workers", 0)),
            parallel_threshold=int(config.get("parallel_threshold", 8)),
        )

    def wants_pool(self, changed_files: int) -> bool:
        return self.max_workers > 0 and changed_files >= max(self.parallel_threshold, 2)


@dataclass(frozen=True)
class RunResult:
    errors_by_path: dict[str, list[ReviewError]]
    next_run: Engine

    @property
    def errors(self) -> list[ReviewError]:
        return [err for path in sorted(self.errors_by_path) for err in self.errors_by_path[path]]


@dataclass(frozen=True)
class Engine:
    """A review together with the cache left by its previous run.

    ``run`` never changes this object; it returns the engine to use for the
    next delta in ``RunResult.next_run``. Keeping an older engine around and
    running it again is allowed and yields an independent fork.
    """

    review: Review
    cache: ReviewCache = field(default_factory=ReviewCache.empty)
    options: RunOptions = field(default_factory=RunOptions)

    @property
    def name(self) -> str:
        return self.review.name

    def run(self, delta: ProjectDelta) -> RunResult:
        changed = len(delta.added_or_changed_modules) + len(delta.added_or_changed_extra_files)
        pool = (
            ThreadPoolExecutor(max_workers=self.options.max_workers)
            if self.options.wants_pool(changed)
            else nullcontext()
        )
        with pool as executor:
            next_cache = update_cache(self.review, self.cache, delta, executor=executor)

        knowledge = aggregate_knowledge(self.review, next_cache)
        if knowledge is None:
            logger.debug("Review %s: no knowledge, resetting cache", self.review.name)
            return RunResult({}, replace(self, cache=ReviewCache.empty()))

        errors_by_path = build_report(self.review, knowledge)
        logger.debug(
            "Review %s: %d error(s) in %d file(s)",
            self.review.name,
            sum(len(errors) for errors in errors_by_path.values()),
            len(errors_by_path),
        )
        return RunResult(errors_by_path, replace(self, cache=next_cache))


def start(review: Review, options: RunOptions | None = None) -> Engine:
    """An engine with an empty cache, ready for its first delta."""
    return Engine(review=review, options=options or RunOptions())


def run_once(review: Review, delta: ProjectDelta) -> dict[str, list[ReviewError]]:
    """From-scratch run: empty cache, result only."""
    return start(review).run(delta).errors_by_path


__all__ = ["Engine", "RunOptions", "RunResult", "run_once", "start"]
