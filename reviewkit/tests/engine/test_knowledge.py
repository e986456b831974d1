"""Tests for reviewkit.engine.knowledge and inspector bucketing."""

import pytest

from reviewkit.engine.inspectors import (
    InspectorKind,
    InspectorSet,
    from_dependencies,
    from_extra_file,
    from_manifest,
    from_module,
)
from reviewkit.engine.knowledge import extract, fold_knowledge
from reviewkit.project import Module


def _concat(a, b):
    return a + b


class TestFoldKnowledge:
    def test_left_fold_order(self):
        assert fold_knowledge(_concat, ["a", "b", "c"]) == "abc"

    def test_skips_missing_values(self):
        assert fold_knowledge(_concat, [None, "a", None, "b"]) == "ab"

    def test_nothing_to_fold(self):
        assert fold_knowledge(_concat, []) is None
        assert fold_knowledge(_concat, [None, None]) is None

    def test_single_value_is_not_merged(self):
        calls = []

        def merge(a, b):
            calls.append((a, b))
            return a

        assert fold_knowledge(merge, ["only"]) == "only"
        assert calls == []

    def test_falsy_knowledge_is_kept(self):
        assert fold_knowledge(_concat, ["", ""]) == ""
        assert fold_knowledge(lambda a, b: a + b, [0, 0]) == 0


class TestExtract:
    def test_no_inspectors_yields_nothing(self):
        assert extract((), Module("a.py", "x", None), _concat) is None

    def test_folds_every_inspector_in_registration_order(self):
        inspectors = (
            from_module(lambda m: m.path),
            from_module(lambda m: ":"),
            from_module(lambda m: m.source),
        )
        assert extract(inspectors, Module("a.py", "src", None), _concat) == "a.py:src"


class TestInspectorSet:
    def test_buckets_by_kind(self):
        s = InspectorSet([
            from_module(len),
            from_manifest(len),
            from_module(str),
            from_extra_file(len),
        ])
        assert len(s.of_kind(InspectorKind.MODULE)) == 2
        assert s.has(InspectorKind.MANIFEST)
        assert s.has(InspectorKind.EXTRA_FILE)
        assert not s.has(InspectorKind.DEPENDENCIES)
        assert len(s) == 4

    def test_preserves_order_within_bucket(self):
        first, second = from_module(len), from_module(str)
        assert InspectorSet([first, second]).of_kind(InspectorKind.MODULE) == (first, second)

    def test_rejects_non_inspectors(self):
        with pytest.raises(TypeError):
            InspectorSet([len])

    def test_dependencies_inspector_is_called_with_all_dependencies(self):
        inspector = from_dependencies(lambda deps: len(deps))
        assert inspector(("a", "b")) == 2
