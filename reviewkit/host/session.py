"""A host session: a project directory, a review suite, and the last snapshot.

Each ``refresh`` reloads only what changed on disk since the previous one
and feeds that delta to the suite, keeping the suite's continuation for
the next refresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from reviewkit.core.errors import ReviewError
from reviewkit.engine.review import Review
from reviewkit.engine.runner import RunOptions
from reviewkit.engine.suite import ReviewSuite
from reviewkit.host.parsing import ModuleParseError
from reviewkit.host.snapshot import ProjectSnapshot, load_delta
from reviewkit.utils import matches_exclusion

logger = logging.getLogger(__name__)


@dataclass
class SessionResult:
    errors_by_path: dict[str, list[ReviewError]]
    failures: list[ModuleParseError] = field(default_factory=list)

    def fixable_errors(self) -> list[ReviewError]:
        return [
            err
            for path in sorted(self.errors_by_path)
            for err in self.errors_by_path[path]
            if err.fixable
        ]


def with_config_ignores(review: Review, patterns: list[str]) -> Review:
    """Hide the config's ``ignore`` paths for *review* on top of its own ignores."""
    if not patterns:
        return review
    return review.ignore_errors_for_paths_where(
        lambda path: any(matches_exclusion(path, pattern) for pattern in patterns)
    )


class Session:
    def __init__(self, root: str | Path, reviews: list[Review], config: dict):
        self.root = Path(root).resolve()
        self.config = config
        ignores = list(config.get("ignore", []))
        self.suite = ReviewSuite.of(
            [with_config_ignores(r, ignores) for r in reviews],
            RunOptions.from_config(config),
        )
        self.snapshot = ProjectSnapshot()
        self.runs = 0

    def refresh(self) -> SessionResult:
        loaded = load_delta(self.root, self.config, self.snapshot)
        result = self.suite.run(loaded.delta)
        self.suite = result.next_run
        self.snapshot = loaded.snapshot
        self.runs += 1
        return SessionResult(result.errors_by_path, loaded.failures)


__all__ = ["Session", "SessionResult", "with_config_ignores"]
