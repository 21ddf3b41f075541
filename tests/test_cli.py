"""Tests for the command-line interface."""

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

from topup import cli
from topup.cli import app
from topup.config import LoggingConfig
from topup.utils import logging as topup_logging

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich from wrapping long paths and messages in captured output."""
    monkeypatch.setattr(cli, "console", Console(width=400))


@pytest.fixture
def input_files(
    write_json: Callable[[str, Any], Path],
    sample_companies: list[dict[str, Any]],
    sample_users: list[dict[str, Any]],
) -> tuple[Path, Path]:
    """Write sample inputs and return their paths."""
    return (
        write_json("companies.json", sample_companies),
        write_json("users.json", sample_users),
    )


class TestRunCommand:
    """Tests for `topup run`."""

    def test_run_writes_report(
        self, tmp_path: Path, input_files: tuple[Path, Path]
    ) -> None:
        """Test a successful run with explicit paths."""
        companies, users = input_files
        output = tmp_path / "report.txt"

        result = runner.invoke(
            app,
            [
                "run",
                "--companies",
                str(companies),
                "--users",
                str(users),
                "--output",
                str(output),
                "--log-level",
                "WARNING",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Top-up Results (strict mode)" in result.output
        assert output.read_text(encoding="utf-8").startswith("\tCompany Id: 1\n")

    def test_run_lenient(self, tmp_path: Path, input_files: tuple[Path, Path]) -> None:
        """Test that --lenient keeps inactive users."""
        companies, users = input_files
        output = tmp_path / "report.txt"

        result = runner.invoke(
            app,
            [
                "run",
                "--companies",
                str(companies),
                "--users",
                str(users),
                "-o",
                str(output),
                "--lenient",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "lenient mode" in result.output
        assert "Nichols, Tanya" in output.read_text(encoding="utf-8")

    def test_run_from_config(self, tmp_path: Path, input_files: tuple[Path, Path]) -> None:
        """Test that paths and mode come from the config file."""
        config_path = tmp_path / "topup.yaml"
        config_path.write_text(
            f"strict_mode: false\n"
            f"data:\n  root: {tmp_path}\n"
            f"output:\n  report: {tmp_path / 'from-config.txt'}\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["run", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "from-config.txt").exists()

    def test_run_failure_exits_nonzero(
        self, tmp_path: Path, write_json: Callable[[str, Any], Path]
    ) -> None:
        """Test that a pipeline error exits 1 without writing a report."""
        companies = write_json("companies.json", [{"id": 1, "bogus": True}])
        output = tmp_path / "report.txt"

        result = runner.invoke(
            app,
            [
                "run",
                "--companies",
                str(companies),
                "--users",
                str(tmp_path / "users.json"),
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 1
        assert "illegal key: bogus" in result.output
        assert not output.exists()

    def test_invalid_log_level(self) -> None:
        """Test that a bad log level is reported as a configuration error."""
        result = runner.invoke(app, ["run", "--log-level", "chatty"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestValidateCommand:
    """Tests for `topup validate`."""

    def test_validate_passes(self, input_files: tuple[Path, Path]) -> None:
        """Test that valid inputs exit 0."""
        companies, users = input_files

        result = runner.invoke(
            app, ["validate", "--companies", str(companies), "--users", str(users)]
        )

        assert result.exit_code == 0, result.output
        assert "All 2 input files are valid" in result.output

    def test_validate_fails(
        self, tmp_path: Path, write_json: Callable[[str, Any], Path]
    ) -> None:
        """Test that a bad dataset exits 1."""
        companies = write_json("companies.json", "not a list")

        result = runner.invoke(
            app,
            [
                "validate",
                "--companies",
                str(companies),
                "--users",
                str(tmp_path / "users.json"),
            ],
        )

        assert result.exit_code == 1
        assert "2 of 2 input files failed validation" in result.output
        assert "users: File not found" in result.output

    def test_logs_stay_off_stdout(
        self,
        monkeypatch: pytest.MonkeyPatch,
        write_json: Callable[[str, Any], Path],
    ) -> None:
        """Test that log events go to the configured log stream, not stdout."""
        stream = io.StringIO()

        def configure(settings: LoggingConfig) -> None:
            topup_logging.configure_logging(
                level="DEBUG", json_output=settings.json_output, stream=stream
            )

        monkeypatch.setattr(topup_logging, "configure_from_settings", configure)
        companies = write_json("companies.json", [{"id": 1, "bad": 2}])
        users = write_json("users.json", [])

        result = runner.invoke(
            app, ["validate", "--companies", str(companies), "--users", str(users)]
        )

        assert result.exit_code == 1
        logged = stream.getvalue()
        assert "Validation failed" in logged
        assert "Validation passed" in logged
        for marker in ("[debug", "[info", "[warning", "[error"):
            assert marker not in result.output


def test_version() -> None:
    """Test the version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "topup version" in result.output
