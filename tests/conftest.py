"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from topup.config import DataPathsConfig, OutputConfig, PipelineConfig


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo any structlog configuration a test (e.g. the CLI) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_companies() -> list[dict[str, Any]]:
    """Company records, deliberately not sorted by id."""
    return [
        {"id": 2, "name": "Blue Cat Inc.", "top_up": 71, "email_status": False},
        {"id": 1, "name": "Yellow Mouse Inc.", "top_up": 37, "email_status": True},
        {"id": 3, "name": "Red Horse Inc.", "top_up": 55, "email_status": True},
    ]


@pytest.fixture
def sample_users() -> list[dict[str, Any]]:
    """User records covering inactive, unmatched and opted-out users."""
    return [
        {
            "id": 1,
            "first_name": "Tanya",
            "last_name": "Nichols",
            "email": "tanya.nichols@test.com",
            "company_id": 2,
            "email_status": True,
            "active_status": False,
            "tokens": 23,
        },
        {
            "id": 2,
            "first_name": "Brent",
            "last_name": "Rodgers",
            "email": "brent.rodgers@test.com",
            "company_id": 1,
            "email_status": True,
            "active_status": True,
            "tokens": 12,
        },
        {
            "id": 3,
            "first_name": "Amanda",
            "last_name": "Boberg",
            "email": "amanda.boberg@test.com",
            "company_id": 1,
            "email_status": False,
            "active_status": True,
            "tokens": 5,
        },
        {
            "id": 4,
            "first_name": "Edgar",
            "last_name": "Carr",
            "email": "edgar.carr@test.com",
            "company_id": 2,
            "email_status": True,
            "active_status": True,
            "tokens": 47,
        },
        {
            "id": 5,
            "first_name": "Ghost",
            "last_name": "Orphan",
            "email": "ghost.orphan@test.com",
            "company_id": 99,
            "email_status": True,
            "active_status": True,
            "tokens": 1,
        },
        {
            "id": 6,
            "first_name": "Nina",
            "last_name": "Avery",
            "email": "nina.avery@test.com",
            "company_id": 1,
            "email_status": True,
            "active_status": True,
            "tokens": 0,
        },
    ]


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Return a helper that writes a value as JSON into tmp_path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., PipelineConfig]:
    """Return a factory for configs rooted in tmp_path."""

    def _make(*, strict_mode: bool = True) -> PipelineConfig:
        return PipelineConfig(
            strict_mode=strict_mode,
            data_paths=DataPathsConfig(data_root=tmp_path),
            output=OutputConfig(report_path=tmp_path / "output.txt"),
        )

    return _make
