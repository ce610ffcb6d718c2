# tests/test_main.py
"""Tests for the command-line entry point."""

import json
import logging

import pytest

from errstats import analyze
from errstats.errors import EXIT_ERROR, EXIT_OK, LoadError
from errstats import main as main_mod
from errstats.main import _build_parser, _configure_logging, main

from tests.conftest import (
    CASE01_MAIN_GO,
    SCENARIO_C_GO,
    USES_UTIL,
    isolated_config,
    write_go_module,
)


@pytest.fixture
def case01(tmp_path):
    return write_go_module(tmp_path / "case01", {"main.go": CASE01_MAIN_GO})


class TestArguments:

    def test_defaults(self):
        args = _build_parser().parse_args([])
        assert args.loglevel == "info"
        assert not args.include_transitive
        assert args.format == "text"
        assert args.patterns == []

    def test_go_style_single_dash_flags(self):
        args = _build_parser().parse_args(["-all", "-loglevel", "debug", "./..."])
        assert args.include_transitive
        assert args.loglevel == "debug"
        assert args.patterns == ["./..."]

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "errstats" in capsys.readouterr().out


class TestExitCodes:

    def test_bad_log_level(self, case01, capsys):
        assert main(["--loglevel", "loud", str(case01)]) == EXIT_ERROR
        assert capsys.readouterr().err.count("Cannot parse level") == 1

    def test_no_patterns(self, capsys):
        assert main([]) == EXIT_ERROR
        assert "no packages to analyze" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent")]) == EXIT_ERROR
        err = capsys.readouterr().err
        assert err.count("does not exist") == 1

    def test_parse_error(self, tmp_path, capsys):
        root = write_go_module(tmp_path / "bad", {"main.go": "package main\n\nfunc {\n"})
        assert main([str(root)]) == EXIT_ERROR
        assert "main.go" in capsys.readouterr().err

    def test_invalid_error_name(self, case01, capsys):
        assert main(["--err-name", "not-a-name", str(case01)]) == EXIT_ERROR
        assert "not an identifier" in capsys.readouterr().err


class TestReports:

    def test_text_report(self, case01, capsys):
        assert main([str(case01)]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("Statistics about your go files:\n")
        assert "\tTotal conditionals: \t3\n" in out
        assert "\tTotal conditionals that were error checks: \t2\n" in out
        assert "\tPercent of err != nil checks using the var 'err': \t100\n" in out

    def test_json_report(self, case01, capsys):
        assert main(["--format", "json", str(case01)]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["condition_count"] == 3
        assert data["named_err_count"] == 2

    def test_named_file_relative_to_cwd(self, case01, capsys, monkeypatch):
        monkeypatch.chdir(case01)
        assert main(["main.go"]) == EXIT_OK
        assert "\tTotal lines: \t" in capsys.readouterr().out

    def test_double_nil_anomaly(self, tmp_path, capsys):
        root = write_go_module(tmp_path / "nil", {"main.go": SCENARIO_C_GO})
        assert main([str(root)]) == EXIT_OK
        out = capsys.readouterr().out
        assert out == "\tNumber of 'nil != nil' and 'nil == nil' conditionals. FIX THIS: \t1\n"

    def test_full_report(self, tmp_path, capsys):
        root = write_go_module(tmp_path / "nil", {"main.go": SCENARIO_C_GO})
        assert main(["--full-report", str(root)]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("Statistics about your go files:\n")
        assert out.endswith("FIX THIS: \t1\n")

    def test_all_includes_dependencies(self, tmp_path, capsys):
        root = write_go_module(tmp_path / "dep", USES_UTIL)
        assert main(["--format", "json", str(root)]) == EXIT_OK
        initial = json.loads(capsys.readouterr().out)
        assert main(["--format", "json", "--all", str(root)]) == EXIT_OK
        everything = json.loads(capsys.readouterr().out)
        assert everything["line_count"] > initial["line_count"]
        assert everything["error_check_count"] == initial["error_check_count"] == 1


class TestAnalyze:

    def test_library_entry_point(self, case01, tmp_path):
        counters = analyze([str(case01)], isolated_config(tmp_path))
        assert counters.error_check_count == 2

    def test_errors_propagate(self, tmp_path):
        with pytest.raises(LoadError):
            analyze([], isolated_config(tmp_path))


class TestLogging:

    def test_reconfiguring_keeps_one_handler(self, monkeypatch):
        monkeypatch.setattr(main_mod, "_cli_handler", None)
        logger = logging.getLogger("errstats")
        before = list(logger.handlers)
        _configure_logging(logging.INFO)
        first = main_mod._cli_handler
        _configure_logging(logging.DEBUG)
        try:
            assert first not in logger.handlers
            assert [h for h in logger.handlers if h not in before] == [main_mod._cli_handler]
            assert logger.level == logging.DEBUG
        finally:
            logger.removeHandler(main_mod._cli_handler)
