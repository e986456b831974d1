"""Tests for reviewkit.engine.suite."""

import pytest

from reviewkit.engine.runner import run_once
from reviewkit.engine.suite import ReviewSuite
from reviewkit.project import Module, ProjectDelta
from reviewkit.tests.sample_reviews import make_marker_review


def _delta(**sources):
    return ProjectDelta(
        added_or_changed_modules=[Module(f"{name}.py", src, None) for name, src in sources.items()]
    )


def test_duplicate_names_rejected():
    with pytest.raises(ValueError, match="markers"):
        ReviewSuite.of([make_marker_review(), make_marker_review()])


def test_merges_reports_from_every_review():
    bad = make_marker_review("bad-words", "bad")
    todo = make_marker_review("todos", "TODO")
    suite = ReviewSuite.of([bad, todo])
    result = suite.run(_delta(a="bad TODO", b="fine"))
    assert suite.names == ["bad-words", "todos"]
    assert [e.review for e in result.errors_by_path["a.py"]] == ["bad-words", "todos"]
    assert set(result.errors_by_review) == {"bad-words", "todos"}
    assert result.errors_by_review["todos"] == run_once(todo, _delta(a="bad TODO", b="fine"))


def test_continuation_carries_every_engine():
    suite = ReviewSuite.of([make_marker_review("one", "x"), make_marker_review("two", "y")])
    result = suite.run(_delta(a="x y"))
    nxt = result.next_run
    assert all(not engine.cache.is_empty for engine in nxt.engines)
    again = nxt.run(ProjectDelta(removed_module_paths={"a.py"}))
    assert again.errors_by_path == {}
    assert all(engine.cache.is_empty for engine in again.next_run.engines)


def test_empty_suite():
    result = ReviewSuite.of([]).run(_delta(a="bad"))
    assert result.errors_by_path == {}
    assert result.errors_by_review == {}
