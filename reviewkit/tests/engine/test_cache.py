"""Tests for reviewkit.engine.cache (incremental knowledge updates)."""

import pytest

from reviewkit.engine.cache import ReviewCache, aggregate_knowledge, update_cache
from reviewkit.project import ExtraFile, Manifest, Module, ProjectDelta
from reviewkit.tests.sample_reviews import Marks, make_marker_review


def _module(path, source):
    return Module(path=path, source=source, syntax=None)


# ===========================================================================
# update_cache
# ===========================================================================


class TestUpdateCache:
    def test_first_run_populates_every_part(self):
        review = make_marker_review()
        cache = update_cache(
            review,
            ReviewCache.empty(),
            ProjectDelta(
                manifest=Manifest("bad", {}),
                added_or_changed_modules=[_module("a.py", "bad"), _module("b.py", "ok")],
                added_or_changed_extra_files=[ExtraFile("README.md", "bad")],
            ),
        )
        assert cache.manifest_knowledge == Marks((("pyproject.toml", 1, 1),))
        assert set(cache.module_knowledge_by_path) == {"a.py", "b.py"}
        assert cache.module_knowledge_by_path["b.py"] == Marks(())
        assert set(cache.extra_file_knowledge_by_path) == {"README.md"}

    def test_unchanged_paths_are_reused(self):
        calls = []
        review = make_marker_review(calls=calls, manifest=False)
        first = update_cache(
            review,
            ReviewCache.empty(),
            ProjectDelta(added_or_changed_modules=[_module("a.py", "bad"), _module("b.py", "")]),
        )
        calls.clear()
        second = update_cache(
            review, first, ProjectDelta(added_or_changed_modules=[_module("b.py", "bad")])
        )
        assert calls == ["b.py"]
        assert second.module_knowledge_by_path["a.py"] is first.module_knowledge_by_path["a.py"]
        assert second.module_knowledge_by_path["b.py"] == Marks((("b.py", 1, 1),))

    def test_removed_paths_are_omitted(self):
        review = make_marker_review()
        first = update_cache(
            review,
            ReviewCache.empty(),
            ProjectDelta(
                added_or_changed_modules=[_module("a.py", "bad")],
                added_or_changed_extra_files=[ExtraFile("notes.txt", "bad")],
            ),
        )
        second = update_cache(
            review,
            first,
            ProjectDelta(removed_module_paths={"a.py"}, removed_extra_file_paths={"notes.txt"}),
        )
        assert "a.py" not in second.module_knowledge_by_path
        assert "notes.txt" not in second.extra_file_knowledge_by_path

    def test_changed_and_removed_in_same_delta_counts_as_removed(self):
        review = make_marker_review()
        cache = update_cache(
            review,
            ReviewCache.empty(),
            ProjectDelta(
                added_or_changed_modules=[_module("a.py", "bad")],
                removed_module_paths={"a.py"},
            ),
        )
        assert cache.module_knowledge_by_path == {}

    def test_previous_cache_is_not_mutated(self):
        review = make_marker_review()
        first = update_cache(
            review, ReviewCache.empty(), ProjectDelta(added_or_changed_modules=[_module("a.py", "x")])
        )
        update_cache(review, first, ProjectDelta(removed_module_paths={"a.py"}))
        assert set(first.module_knowledge_by_path) == {"a.py"}

    def test_cache_maps_are_read_only(self):
        review = make_marker_review()
        cache = update_cache(
            review, ReviewCache.empty(), ProjectDelta(added_or_changed_modules=[_module("a.py", "x")])
        )
        with pytest.raises(TypeError):
            cache.module_knowledge_by_path["b.py"] = Marks(())

    def test_review_without_module_inspectors_stores_nothing(self):
        review = make_marker_review(modules=False)
        cache = update_cache(
            review,
            ReviewCache.empty(),
            ProjectDelta(added_or_changed_modules=[_module("a.py", "bad")]),
        )
        assert cache.module_knowledge_by_path == {}

    def test_manifest_recomputed_every_run(self):
        calls = []
        review = make_marker_review(calls=calls, modules=False, extra_files=False)
        manifest = Manifest("bad", {})
        cache = update_cache(review, ReviewCache.empty(), ProjectDelta(manifest=manifest))
        update_cache(review, cache, ProjectDelta(manifest=manifest))
        assert calls == ["pyproject.toml", "pyproject.toml"]

    def test_missing_manifest_drops_manifest_knowledge(self):
        review = make_marker_review()
        cache = update_cache(review, ReviewCache.empty(), ProjectDelta(manifest=Manifest("bad", {})))
        cache = update_cache(review, cache, ProjectDelta())
        assert cache.manifest_knowledge is None


# ===========================================================================
# aggregate_knowledge
# ===========================================================================


class TestAggregateKnowledge:
    def test_kind_order_manifest_dependencies_modules_extra_files(self):
        review = make_marker_review()
        cache = ReviewCache(
            manifest_knowledge=Marks((("m", 1, 1),)),
            dependencies_knowledge=Marks((("d", 1, 1),)),
            module_knowledge_by_path={"b.py": Marks((("b.py", 1, 1),)), "a.py": Marks((("a.py", 1, 1),))},
            extra_file_knowledge_by_path={"x.md": Marks((("x.md", 1, 1),))},
        )
        merged = aggregate_knowledge(review, cache)
        assert [hit[0] for hit in merged.hits] == ["m", "d", "a.py", "b.py", "x.md"]

    def test_empty_cache_has_no_knowledge(self):
        assert aggregate_knowledge(make_marker_review(), ReviewCache.empty()) is None
        assert ReviewCache.empty().is_empty
