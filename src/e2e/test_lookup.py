import subprocess

import pytest

from lexcore import lookup
from lexcore.errors import LookupFailed


def _fake_run(returncode=0, stdout="", stderr=""):
    def run(cmd, **kw):
        run.cmd = cmd
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)
    return run


def test_success_returns_stdout(monkeypatch):
    run = _fake_run(stdout="-->Dict\n-->word\n")
    monkeypatch.setattr(lookup.subprocess, "run", run)
    assert lookup.run_lookup("word", ["-c", "-n"]) == "-->Dict\n-->word\n"
    assert run.cmd == ["sdcv", "-c", "-n", "word"]


def test_nonzero_exit_is_reported(monkeypatch):
    monkeypatch.setattr(lookup.subprocess, "run", _fake_run(2, stderr="warn\ncannot open dict\n"))
    with pytest.raises(LookupFailed, match="cannot open dict"):
        lookup.run_lookup("word")


def test_missing_program(monkeypatch):
    def run(cmd, **kw):
        raise FileNotFoundError(cmd[0])
    monkeypatch.setattr(lookup.subprocess, "run", run)
    with pytest.raises(LookupFailed, match="not found"):
        lookup.run_lookup("word", executable="no-such-sdcv")


def test_blank_word_does_not_run(monkeypatch):
    def run(cmd, **kw):
        raise AssertionError("should not run")
    monkeypatch.setattr(lookup.subprocess, "run", run)
    assert lookup.run_lookup("   ") == ""
