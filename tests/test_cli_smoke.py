"""Smoke tests for the minifmt CLI entry point."""

from __future__ import annotations

import json

from minifmt import __version__


def test_help_lists_command_groups(run_minifmt) -> None:
    result = run_minifmt(["--help"])
    assert result.returncode == 0
    for expected in ["render", "config"]:
        assert expected in result.stdout


def test_version_flag_prints_package_version(run_minifmt) -> None:
    result = run_minifmt(["--version"])
    assert result.returncode == 0
    assert __version__ in result.stdout


def test_render_format_writes_raw_output(run_minifmt) -> None:
    result = run_minifmt(["render", "format", "%5d|%-3s|", "42", "ab"])
    assert result.returncode == 0
    assert result.stdout == "   42|ab |"


def test_render_format_accepts_negative_numbers_after_separator(run_minifmt) -> None:
    result = run_minifmt(["render", "format", "--", "%05d", "-7"])
    assert result.returncode == 0
    assert result.stdout == "-0007"


def test_render_format_json_reports_length(run_minifmt) -> None:
    result = run_minifmt(["--json", "render", "format", "%08X", "255"])
    assert result.returncode == 0
    assert "Traceback" not in result.stderr
    payload = json.loads(result.stdout)
    assert payload == {"length": 8, "text": "000000FF"}


def test_render_into_json_reports_truncation(run_minifmt) -> None:
    result = run_minifmt(["--json", "render", "into", "--capacity", "4", "%d", "12345"])
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert payload["text"] == "123"
    assert payload["length"] == 5
    assert payload["written"] == 3
    assert payload["truncated"] is True


def test_bad_argument_exits_with_error(run_minifmt) -> None:
    result = run_minifmt(["render", "format", "%d", "abc"])
    assert result.returncode == 1
    assert "error: argument 0: expected integer" in result.stderr
    assert "Traceback" not in result.stderr


def test_missing_argument_exits_with_error(run_minifmt) -> None:
    result = run_minifmt(["render", "format", "%d %d", "1"])
    assert result.returncode == 1
    assert "error: argument 1: missing integer argument" in result.stderr


def test_literal_dash_arguments_follow_separator(run_minifmt) -> None:
    result = run_minifmt(["render", "format", "--", "%s|%s", "-v", "--json"])
    assert result.returncode == 0
    assert result.stdout == "-v|--json"


def test_render_help_explains_separator(run_minifmt) -> None:
    result = run_minifmt(["render", "format", "--help"])
    assert result.returncode == 0
    assert "after '--'" in " ".join(result.stdout.split())
