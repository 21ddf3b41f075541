"""Tests for the installed distribution and its public surface."""

import importlib
from importlib.metadata import entry_points, version

import pytest

import topup


def test_version_matches_distribution() -> None:
    """Test that __version__ is read from the installed metadata."""
    assert topup.__version__ == version("topup")


def test_console_script_points_at_cli() -> None:
    """Test that the `topup` command resolves to the typer app."""
    (script,) = entry_points(group="console_scripts", name="topup")
    assert script.value == "topup.cli:app"


@pytest.mark.parametrize(
    "module",
    [
        "topup.aggregation",
        "topup.config",
        "topup.ingestion",
        "topup.pipeline",
        "topup.reporting",
        "topup.schemas",
        "topup.validation",
    ],
)
def test_public_names_resolve(module: str) -> None:
    """Test that every name a subpackage exports actually exists."""
    package = importlib.import_module(module)
    missing = [name for name in package.__all__ if not hasattr(package, name)]
    assert missing == []
