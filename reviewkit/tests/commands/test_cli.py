"""Tests for the reviewkit CLI: check, fix, config."""

import json

import pytest

from reviewkit.cli import create_parser, main

UNUSED = "reviewkit.tests.sample_reviews:UNUSED_BINDINGS"


@pytest.fixture
def project(tmp_path):
    (tmp_path / "m.py").write_text("a = 1\nb = 2\n")
    return tmp_path


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / ".reviewkit" / "config.json"


def _run(config_path, *argv):
    return main(["--config", str(config_path), *argv])


# ===========================================================================
# Parser
# ===========================================================================


class TestParser:
    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_review_is_repeatable(self):
        args = create_parser().parse_args(["check", ".", "--review", "a:b", "--review", "c:d"])
        assert args.review == ["a:b", "c:d"]


# ===========================================================================
# check
# ===========================================================================


class TestCheck:
    def test_reports_errors(self, project, config_path, capsys):
        assert _run(config_path, "check", str(project), "--review", UNUSED) == 1
        out = capsys.readouterr().out
        assert "m.py:1:1" in out
        assert "`b` is never used" in out
        assert "(fixable)" in out

    def test_json_output(self, project, config_path, capsys):
        assert _run(config_path, "check", str(project), "--review", UNUSED, "--json") == 1
        payload = json.loads(capsys.readouterr().out)
        assert [e["message"] for e in payload["errors"]] == [
            "`a` is never used",
            "`b` is never used",
        ]
        assert payload["errors"][0]["review"] == "unused-bindings"
        assert payload["parse_failures"] == []

    def test_clean_project(self, tmp_path, config_path, capsys):
        (tmp_path / "m.py").write_text("a = 1\nprint(a)\n")
        assert _run(config_path, "check", str(tmp_path), "--review", UNUSED) == 0
        assert "No errors found" in capsys.readouterr().out

    def test_parse_failures_fail_the_check(self, tmp_path, config_path, capsys):
        (tmp_path / "broken.py").write_text("def (:\n")
        assert _run(config_path, "check", str(tmp_path), "--review", UNUSED) == 1
        assert "broken.py" in capsys.readouterr().err

    def test_no_reviews_configured(self, project, config_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(config_path, "check", str(project))
        assert exc_info.value.code == 2
        assert "no reviews configured" in capsys.readouterr().err

    def test_bad_review_spec(self, project, config_path, capsys):
        with pytest.raises(SystemExit):
            _run(config_path, "check", str(project), "--review", "nope_xyz:THING")
        assert "nope_xyz:THING" in capsys.readouterr().err

    def test_reviews_from_config(self, project, config_path, capsys):
        assert _run(config_path, "config", "set", "reviews", UNUSED) == 0
        assert _run(config_path, "check", str(project)) == 1
        assert "`a` is never used" in capsys.readouterr().out


# ===========================================================================
# fix
# ===========================================================================


class TestFix:
    def test_applies_fixes_until_clean(self, project, config_path, capsys):
        assert _run(config_path, "fix", str(project), "--review", UNUSED) == 0
        assert (project / "m.py").read_text() == ""
        out = capsys.readouterr().out
        assert out.count("Fixed") == 2
        assert "Applied 2 fix(es)" in out

    def test_dry_run_leaves_files_alone(self, project, config_path, capsys):
        assert _run(config_path, "fix", str(project), "--review", UNUSED, "--dry-run") == 1
        assert (project / "m.py").read_text() == "a = 1\nb = 2\n"
        assert capsys.readouterr().out.count("Would fix") == 2

    def test_pass_limit(self, project, config_path, capsys):
        _run(config_path, "config", "set", "max_fix_passes", "1")
        assert _run(config_path, "fix", str(project), "--review", UNUSED) == 1
        assert (project / "m.py").read_text() == "b = 2\n"
        assert "stopped after 1 fix pass(es)" in capsys.readouterr().err


# ===========================================================================
# config
# ===========================================================================


class TestConfig:
    def test_show(self, config_path, capsys):
        assert _run(config_path, "config", "show") == 0
        out = capsys.readouterr().out
        assert "max_workers" in out
        assert "(default)" in out

    def test_set_and_unset(self, config_path):
        assert _run(config_path, "config", "set", "max_workers", "4") == 0
        assert json.loads(config_path.read_text())["max_workers"] == 4
        assert _run(config_path, "config", "unset", "max_workers") == 0
        assert json.loads(config_path.read_text())["max_workers"] == 0

    def test_invalid_value(self, config_path, capsys):
        assert _run(config_path, "config", "set", "max_workers", "lots") == 2
        assert "Error" in capsys.readouterr().err

    def test_unknown_key(self, config_path):
        assert _run(config_path, "config", "set", "nope", "1") == 2
