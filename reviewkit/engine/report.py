"""Turn aggregated knowledge into errors grouped by file."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from reviewkit.core.errors import ReviewError
from reviewkit.core.ranges import sort_by_range

if TYPE_CHECKING:
    from reviewkit.engine.review import Review

logger = logging.getLogger(__name__)


def group_by_path(errors: list[ReviewError]) -> dict[str, list[ReviewError]]:
    grouped: dict[str, list[ReviewError]] = {}
    for err in errors:
        grouped.setdefault(err.path, []).append(err)
    return grouped


def sort_groups(grouped: dict[str, list[ReviewError]]) -> dict[str, list[ReviewError]]:
    """Sort each path's errors by range; equal ranges keep report order."""
    return {path: sort_by_range(errors) for path, errors in grouped.items()}


def drop_ignored(review: Review, grouped: dict[str, list[ReviewError]]) -> dict[str, list[ReviewError]]:
    kept = {path: errors for path, errors in grouped.items() if not review.ignores_path(path)}
    if len(kept) != len(grouped):
        logger.debug(
            "Review %s: hid errors for %d ignored path(s)", review.name, len(grouped) - len(kept)
        )
    return kept


def build_report(review: Review, knowledge: Any) -> dict[str, list[ReviewError]]:
    """Call the review's report once with the full knowledge and post-process it."""
    errors = [
        err if err.review else replace(err, review=review.name)
        for err in review.report(knowledge)
    ]
    return drop_ignored(review, sort_groups(group_by_path(errors)))


def merge_reports(*reports: dict[str, list[ReviewError]]) -> dict[str, list[ReviewError]]:
    """Combine several reviews' errors-by-path, keeping each file's list sorted."""
    combined: dict[str, list[ReviewError]] = {}
    for report in reports:
        for path, errors in report.items():
            combined.setdefault(path, []).extend(errors)
    return sort_groups(combined)


__all__ = ["build_report", "drop_ignored", "group_by_path", "merge_reports", "sort_groups"]
