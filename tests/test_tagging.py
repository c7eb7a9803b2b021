#!/usr/bin/env python3
"""
Tests for CCSID tagging of output files
"""

import os
import subprocess
import sys

import pytest

# Add the parent directory to Python path so ccsid_scrubber can be imported
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ccsid_scrubber import tagging
from ccsid_scrubber.tagging import DEFAULT_TAG_TOOL, CcsidTagger, is_ibm_i


@pytest.fixture
def commands(monkeypatch):
    """Record subprocess.run calls instead of running anything"""
    calls = []
    outcome = {"returncode": 0, "kwargs": []}

    def fake_run(command, **kwargs):
        calls.append(command)
        outcome["kwargs"].append(kwargs)
        if "raise" in outcome:
            raise outcome["raise"]
        return subprocess.CompletedProcess(command, outcome["returncode"])

    monkeypatch.setattr(tagging.subprocess, "run", fake_run)
    return calls, outcome


@pytest.fixture
def on_ibm_i(monkeypatch):
    monkeypatch.setattr(tagging.platform, "system", lambda: "OS400")


@pytest.mark.parametrize("system, expected", [
    ("OS400", True),
    ("OS/400", True),
    ("os400", True),
    ("Linux", False),
    ("Windows", False),
    ("AIX", False),
])
def test_is_ibm_i(monkeypatch, system, expected):
    monkeypatch.setattr(tagging.platform, "system", lambda: system)
    assert is_ibm_i() is expected


def test_no_tagging_off_ibm_i(monkeypatch, commands, tmp_path):
    calls, _ = commands
    monkeypatch.setattr(tagging.platform, "system", lambda: "Linux")

    assert not CcsidTagger().tag(str(tmp_path / "out.txt"), 37)
    assert calls == []


def test_tag_command(on_ibm_i, commands, tmp_path):
    calls, outcome = commands
    target = tmp_path / "out.txt"

    assert CcsidTagger().tag(str(target), 37)
    assert calls == [[DEFAULT_TAG_TOOL, "37", os.path.abspath(str(target))]]
    # Output goes straight to this process's stdout/stderr
    assert outcome["kwargs"][0].get("stdout") is None
    assert outcome["kwargs"][0].get("stderr") is None


def test_tag_uses_configured_tool(on_ibm_i, commands, tmp_path):
    calls, _ = commands
    CcsidTagger({"tool": "/usr/local/bin/setccsid"}).tag(str(tmp_path / "f"), 1208)
    assert calls[0][:2] == ["/usr/local/bin/setccsid", "1208"]


@pytest.mark.parametrize("ccsid", [None, -1])
def test_no_ccsid_means_no_tag(on_ibm_i, commands, tmp_path, ccsid):
    calls, _ = commands
    assert not CcsidTagger().tag(str(tmp_path / "out.txt"), ccsid)
    assert calls == []


def test_tagging_disabled(on_ibm_i, commands, tmp_path):
    calls, _ = commands
    assert not CcsidTagger({"enabled": False}).tag(str(tmp_path / "out.txt"), 37)
    assert calls == []


def test_nonzero_exit_is_logged(on_ibm_i, commands, tmp_path, caplog):
    _, outcome = commands
    outcome["returncode"] = 1

    assert not CcsidTagger().tag(str(tmp_path / "out.txt"), 37)
    assert "exit code 1" in caplog.text


def test_missing_tool_is_logged(on_ibm_i, commands, tmp_path, caplog):
    _, outcome = commands
    outcome["raise"] = FileNotFoundError(2, "No such file or directory")

    assert not CcsidTagger().tag(str(tmp_path / "out.txt"), 37)
    assert "Could not run tagging command" in caplog.text
