"""Per-review knowledge cache and the incremental update step.

A ``ReviewCache`` is a value: ``update_cache`` never mutates the cache it
is given, it builds the next one. Holding on to an older cache is therefore
always safe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from concurrent.futures import Executor
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from reviewkit.engine.inspectors import InspectorKind
from reviewkit.engine.knowledge import extract, fold_knowledge
from reviewkit.project import ProjectDelta

if TYPE_CHECKING:
    from reviewkit.engine.review import Review

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ReviewCache:
    manifest_knowledge: Any | None = None
    dependencies_knowledge: Any | None = None
    module_knowledge_by_path: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    extra_file_knowledge_by_path: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def empty(cls) -> ReviewCache:
        return cls()

    @property
    def is_empty(self) -> bool:
        return (
            self.manifest_knowledge is None
            and self.dependencies_knowledge is None
            and not self.module_knowledge_by_path
            and not self.extra_file_knowledge_by_path
        )


@dataclass
class UpdateStats:
    recomputed: int = 0
    reused: int = 0
    dropped: int = 0


def _update_files(
    previous: Mapping[str, Any],
    changed: dict[str, Any],
    removed: frozenset[str],
    compute: Callable[[Any], Any],
    executor: Executor | None,
    stats: UpdateStats,
) -> Mapping[str, Any]:
    """Build the next path -> knowledge map for one kind of per-file part."""
    # A path both changed and removed in the same delta counts as removed.
    to_compute = {path: part for path, part in changed.items() if path not in removed}

    result: dict[str, Any] = {}
    for path, knowledge in previous.items():
        if path in removed or path in to_compute:
            if path in removed:
                stats.dropped += 1
            continue
        result[path] = knowledge
        stats.reused += 1

    paths = sorted(to_compute)
    if executor is not None and len(paths) > 1:
        computed = list(executor.map(compute, (to_compute[p] for p in paths)))
    else:
        computed = [compute(to_compute[p]) for p in paths]

    for path, knowledge in zip(paths, computed):
        stats.recomputed += 1
        if knowledge is not None:
            result[path] = knowledge
    return MappingProxyType(result)


def update_cache(
    review: Review,
    cache: ReviewCache,
    delta: ProjectDelta,
    executor: Executor | None = None,
) -> ReviewCache:
    """Derive the next cache from *cache* and *delta* for *review*.

    Manifest and dependency knowledge are recomputed every run; module and
    extra-file knowledge only for the parts the delta adds or changes.
    """
    inspectors = review.inspector_set
    merge = review.merge
    stats = UpdateStats()

    manifest_knowledge = None
    if delta.manifest is not None:
        manifest_knowledge = extract(
            inspectors.of_kind(InspectorKind.MANIFEST), delta.manifest, merge
        )
    dependencies_knowledge = extract(
        inspectors.of_kind(InspectorKind.DEPENDENCIES), delta.dependencies, merge
    )

    module_inspectors = inspectors.of_kind(InspectorKind.MODULE)
    modules = _update_files(
        cache.module_knowledge_by_path,
        {m.path: m for m in delta.added_or_changed_modules},
        delta.removed_module_paths,
        lambda module: extract(module_inspectors, module, merge),
        executor,
        stats,
    )

    extra_inspectors = inspectors.of_kind(InspectorKind.EXTRA_FILE)
    extra_files = _update_files(
        cache.extra_file_knowledge_by_path,
        {f.path: f for f in delta.added_or_changed_extra_files},
        delta.removed_extra_file_paths,
        lambda extra: extract(extra_inspectors, extra, merge),
        executor,
        stats,
    )

    logger.debug(
        "Review %s: %d part(s) recomputed, %d reused, %d dropped",
        review.name, stats.recomputed, stats.reused, stats.dropped,
    )
    return ReviewCache(
        manifest_knowledge=manifest_knowledge,
        dependencies_knowledge=dependencies_knowledge,
        module_knowledge_by_path=modules,
        extra_file_knowledge_by_path=extra_files,
    )


def aggregate_knowledge(review: Review, cache: ReviewCache) -> Any | None:
    """Fold everything in the cache: manifest, dependencies, modules, extra files."""

    def values():
        yield cache.manifest_knowledge
        yield cache.dependencies_knowledge
        for path in sorted(cache.module_knowledge_by_path):
            yield cache.module_knowledge_by_path[path]
        for path in sorted(cache.extra_file_knowledge_by_path):
            yield cache.extra_file_knowledge_by_path[path]

    return fold_knowledge(review.merge, values())


__all__ = ["ReviewCache", "UpdateStats", "aggregate_knowledge", "update_cache"]
