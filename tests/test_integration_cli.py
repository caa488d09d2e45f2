"""Integration tests for CLI functionality."""

import json
import subprocess
import sys

import pytest


def run_cli(*args, stdin=None):
    return subprocess.run(
        [sys.executable, "-m", "kalkulang_pkg.cli", *args],
        input=stdin,
        capture_output=True,
        text=True,
        timeout=30,
    )


def test_cli_version():
    """Test --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_health_check():
    """Test --health-check command."""
    result = run_cli("--health-check")
    assert result.returncode == 0
    assert "health check" in result.stdout.lower()
    assert "[OK] Evaluation works" in result.stdout


def test_cli_eval_human():
    """Test CLI evaluation with human output."""
    result = run_cli("--eval", "1 + 2 * 3")
    assert result.returncode == 0
    assert result.stdout.strip() == "$0 = 7"


def test_cli_eval_shares_one_session():
    """Repeated -e lines run against one context."""
    result = run_cli("-e", "v = 3 - 2", "-e", "v + 10", "--format", "json")
    assert result.returncode == 0
    lines = [json.loads(line) for line in result.stdout.strip().splitlines()]
    assert lines == [
        {"ok": True, "name": "v", "value": 1.0},
        {"ok": True, "name": "$0", "value": 11.0},
    ]


def test_cli_eval_error_sets_exit_code():
    """A failing line is reported and the exit code is non-zero."""
    result = run_cli("-e", "5 / 0", "-e", "1 + 1")
    assert result.returncode == 1
    out = result.stdout.strip().splitlines()
    assert out[0].startswith("Error: Division by zero")
    # the failed anonymous command still consumed $0
    assert out[1] == "$1 = 2"


def test_cli_eval_json_error():
    result = run_cli("-e", "1 +", "--format", "json")
    assert result.returncode == 1
    data = json.loads(result.stdout.strip())
    assert data["ok"] is False
    assert data["error_code"] == "SYNTAX_ERROR"


def test_cli_precision():
    result = run_cli("-p", "3", "-e", "1 / 3")
    assert result.returncode == 0
    assert result.stdout.strip() == "$0 = 0.333"


def test_cli_show_tree():
    result = run_cli("--show-tree", "-e", "2 ^ 3 ^ 2")
    assert result.returncode == 0
    assert "Tree: (2 ^ (3 ^ 2))" in result.stdout
    assert "$0 = 512" in result.stdout


def test_cli_repl_session():
    """Drive the REPL through stdin."""
    result = run_cli(stdin="x = 4\nx ^ 0.5\n5 / 0\nvars\ntree 1 - 2 - 3\nquit\n")
    assert result.returncode == 0
    assert "x = 4" in result.stdout
    assert "$0 = 2" in result.stdout
    assert "Error: Division by zero" in result.stdout
    assert "Tree: ((1 - 2) - 3)" in result.stdout
    assert "Goodbye." in result.stdout


def test_cli_repl_ends_on_eof():
    result = run_cli(stdin="1 + 1\n")
    assert result.returncode == 0
    assert "$0 = 2" in result.stdout


@pytest.mark.slow
def test_cli_module_entry_point():
    result = subprocess.run(
        [sys.executable, "-m", "kalkulang_pkg", "-e", "2 * 21"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "$0 = 42"


def test_cli_help():
    """Test --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "kalkulang" in result.stdout.lower() or "usage" in result.stdout.lower()
