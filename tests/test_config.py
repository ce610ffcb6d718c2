# tests/test_config.py
"""Tests for run configuration and the Go environment defaults."""

import logging
import subprocess
from pathlib import Path

import pytest

from errstats import config as config_mod
from errstats.config import AnalysisConfig, go_env, parse_log_level
from errstats.errors import ConfigError


def _fake_go(monkeypatch, stdout="", returncode=0, exc=None):
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        if exc is not None:
            raise exc
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="boom")

    monkeypatch.setattr(config_mod, "_go_tool", lambda: "/opt/go/bin/go")
    monkeypatch.setattr(config_mod.subprocess, "run", run)
    return calls


class TestGoroot:

    def test_falls_back_to_go_env(self, monkeypatch, caplog):
        calls = _fake_go(monkeypatch, stdout="/opt/go\n")
        with caplog.at_level(logging.DEBUG, logger="errstats.config"):
            cfg = AnalysisConfig()
        assert cfg.goroot == Path("/opt/go")
        assert calls == [["/opt/go/bin/go", "env", "GOROOT"]]
        assert "GOROOT from go env" in caplog.text

    def test_environment_wins(self, monkeypatch):
        calls = _fake_go(monkeypatch, stdout="/opt/go\n")
        monkeypatch.setenv("GOROOT", "/usr/local/go")
        assert AnalysisConfig().goroot == Path("/usr/local/go")
        assert calls == []

    def test_no_go_tool(self):
        assert go_env("GOROOT") is None
        assert AnalysisConfig().goroot is None

    @pytest.mark.parametrize("kwargs", [
        {"returncode": 1},
        {"stdout": "  \n"},
        {"exc": FileNotFoundError("go")},
        {"exc": subprocess.TimeoutExpired("go", 30)},
    ])
    def test_failed_lookup_gives_none(self, monkeypatch, kwargs):
        _fake_go(monkeypatch, **kwargs)
        assert go_env("GOROOT") is None
        assert AnalysisConfig().goroot is None

    def test_explicit_goroot_skips_lookup(self, monkeypatch):
        calls = _fake_go(monkeypatch, stdout="/opt/go\n")
        assert AnalysisConfig(goroot=None).goroot is None
        assert calls == []


class TestLogLevel:

    @pytest.mark.parametrize("name, level", [
        ("info", logging.INFO),
        ("WARN", logging.WARNING),
        (" debug ", logging.DEBUG),
        ("panic", logging.CRITICAL),
    ])
    def test_known_levels(self, name, level):
        assert parse_log_level(name) == level

    def test_unknown_level(self):
        with pytest.raises(ConfigError, match="Cannot parse level"):
            parse_log_level("loud")

    def test_validate(self):
        cfg = AnalysisConfig(log_level="loud", output_format="xml", error_var_name="1x")
        assert len(cfg.validate()) == 3
        assert AnalysisConfig().validate() == []
