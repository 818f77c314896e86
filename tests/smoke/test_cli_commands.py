"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli_command(
    args: list[str], timeout: int = 60, extra_env: dict[str, str] | None = None
) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        args: Arguments after 'python -m geolearn.cli'
        timeout: Maximum time to wait
        extra_env: GEOLEARN_* overrides for this run

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    env = {k: v for k, v in os.environ.items() if not k.upper().startswith("GEOLEARN_")}
    env["COLUMNS"] = "160"
    env.update(extra_env or {})

    result = subprocess.run(
        [sys.executable, "-m", "geolearn.cli", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=env,
    )

    return result.returncode, result.stdout, result.stderr


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        code, stdout, stderr = run_cli_command(["--help"])

        assert code == 0, f"Help failed: {stderr}"
        assert "simulate" in stdout
        assert "info" in stdout

    def test_simulate_help(self):
        code, stdout, stderr = run_cli_command(["simulate", "--help"])

        assert code == 0, f"Help failed: {stderr}"
        assert "--estimator" in stdout


class TestSimulate:
    """Test simulated sessions."""

    def test_frequency_session(self):
        code, stdout, stderr = run_cli_command(["simulate", "--seed", "1", "--questions", "30"])

        assert code == 0, f"Simulate failed: {stderr}"
        assert "Learner Profile (frequency)" in stdout
        assert "Total correct" in stdout

    def test_bkt_session_shows_belief(self):
        code, stdout, stderr = run_cli_command(
            ["simulate", "--estimator", "bkt", "--seed", "2", "--questions", "30"]
        )

        assert code == 0, f"Simulate failed: {stderr}"
        assert "Learner Profile (bkt)" in stdout
        assert "P(L)" in stdout

    def test_badges_announced(self):
        code, stdout, stderr = run_cli_command(
            ["simulate", "--seed", "3", "--questions", "120", "--default-skill", "1.0"]
        )

        assert code == 0, f"Simulate failed: {stderr}"
        assert "Badge earned" in stdout
        assert "Expert" in stdout

    def test_unknown_skill_domain_rejected(self):
        code, stdout, stderr = run_cli_command(["simulate", "--skill", "Atlantis=0.5"])

        assert code != 0
        assert "Atlantis" in stdout + stderr

    def test_duplicate_domains_reported(self):
        code, stdout, stderr = run_cli_command(
            ["simulate", "--seed", "1"], extra_env={"GEOLEARN_DOMAINS": '["Asia", "Asia"]'}
        )

        assert code == 1
        assert "Duplicate domains in registry: Asia" in stdout
        assert "Traceback" not in stdout + stderr


class TestInfo:
    def test_info_shows_configuration(self):
        code, stdout, stderr = run_cli_command(["info"])

        assert code == 0, f"Info failed: {stderr}"
        assert "GeoLearn Configuration" in stdout
        assert "Europe" in stdout

    def test_info_rejects_empty_domains(self):
        code, stdout, stderr = run_cli_command(["info"], extra_env={"GEOLEARN_DOMAINS": "[]"})

        assert code == 1
        assert "Invalid configuration" in stdout
        assert "at least one domain" in stdout
        assert "Traceback" not in stdout + stderr
