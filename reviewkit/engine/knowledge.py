"""Knowledge extraction and folding.

Knowledge is opaque: the engine only ever calls the review's ``merge`` on
it. No identity element is assumed, so a missing value is skipped rather
than substituted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from reviewkit.engine.inspectors import Inspector

_MISSING = object()


def fold_knowledge(merge: Callable[[Any, Any], Any], values: Iterable[Any]) -> Any | None:
    """Left-fold *values* with *merge*, skipping ``None``; ``None`` if nothing remains."""
    acc = _MISSING
    for value in values:
        if value is None:
            continue
        acc = value if acc is _MISSING else merge(acc, value)
    return None if acc is _MISSING else acc


def extract(
    inspectors: tuple[Inspector, ...],
    part: Any,
    merge: Callable[[Any, Any], Any],
) -> Any | None:
    """Run every inspector on *part* and fold the results in registration order.

    Returns ``None`` when there are no inspectors, so a review that never
    looks at a kind of part is unaffected by changes to it.
    """
    if not inspectors:
        return None
    return fold_knowledge(merge, (inspector(part) for inspector in inspectors))


__all__ = ["extract", "fold_knowledge"]
