"""Review plugin loading from ``package.module:attribute`` specs."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable

from reviewkit.engine.review import Review

logger = logging.getLogger(__name__)

# Broader than ImportError: plugin imports may also raise SyntaxError/TypeError.
_PLUGIN_IMPORT_ERRORS: tuple[type[Exception], ...] = (
    ImportError, SyntaxError, ValueError, TypeError, RuntimeError, OSError, AttributeError,
)


def _resolve(spec: str) -> list[Review]:
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"expected 'package.module:attribute', got {spec!r}")
    target = importlib.import_module(module_name)
    for part in attribute.split("."):
        target = getattr(target, part)
    if callable(target) and not isinstance(target, Review):
        target = target()
    if isinstance(target, Review):
        return [target]
    if isinstance(target, (list, tuple)) and all(isinstance(r, Review) for r in target):
        return list(target)
    raise TypeError(f"{spec} is not a Review or a list of Reviews")


def load_reviews(specs: Iterable[str]) -> list[Review]:
    """Import every spec; raise one ImportError listing all failures."""
    reviews: list[Review] = []
    failures: dict[str, Exception] = {}
    for spec in specs:
        try:
            reviews.extend(_resolve(spec))
        except _PLUGIN_IMPORT_ERRORS as ex:
            logger.debug("Review plugin load failed for %s: %s", spec, ex)
            failures[spec] = ex

    if failures:
        lines = ["Review plugin import failures:"]
        for spec, ex in sorted(failures.items()):
            lines.append(f"  - {spec}: {type(ex).__name__}: {ex}")
        raise ImportError("\n".join(lines))
    return reviews


__all__ = ["load_reviews"]
