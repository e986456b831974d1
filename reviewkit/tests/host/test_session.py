"""Tests for reviewkit.host.session."""

from reviewkit.core.config import default_config
from reviewkit.host.session import Session
from reviewkit.tests.sample_reviews import UNUSED_BINDINGS, make_marker_review


def test_refresh_is_incremental(tmp_path):
    (tmp_path / "a.py").write_text("bad\n")
    (tmp_path / "b.py").write_text("ok\n")
    calls = []
    session = Session(tmp_path, [make_marker_review(calls=calls, manifest=False)], default_config())

    first = session.refresh()
    assert set(first.errors_by_path) == {"a.py"}
    assert sorted(calls) == ["a.py", "b.py"]

    calls.clear()
    (tmp_path / "b.py").write_text("bad\n")
    second = session.refresh()
    assert calls == ["b.py"]
    assert set(second.errors_by_path) == {"a.py", "b.py"}
    assert session.runs == 2


def test_unchanged_project_inspects_nothing(tmp_path):
    (tmp_path / "a.py").write_text("bad\n")
    calls = []
    session = Session(tmp_path, [make_marker_review(calls=calls, manifest=False)], default_config())
    session.refresh()
    calls.clear()
    result = session.refresh()
    assert calls == []
    assert set(result.errors_by_path) == {"a.py"}


def test_config_ignore_hides_errors(tmp_path):
    (tmp_path / "gen").mkdir()
    (tmp_path / "gen" / "out.py").write_text("bad\n")
    (tmp_path / "a.py").write_text("bad\n")
    config = default_config()
    config["ignore"] = ["gen"]
    session = Session(tmp_path, [make_marker_review()], config)
    assert set(session.refresh().errors_by_path) == {"a.py"}


def test_fixable_errors_and_parse_failures(tmp_path):
    (tmp_path / "a.py").write_text("a = 1\nb = 2\n")
    (tmp_path / "broken.py").write_text("def (:\n")
    session = Session(tmp_path, [UNUSED_BINDINGS], default_config())
    result = session.refresh()
    assert [f.path for f in result.failures] == ["broken.py"]
    assert len(result.fixable_errors()) == 2
    assert all(e.review == "unused-bindings" for e in result.fixable_errors())
