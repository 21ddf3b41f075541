"""
JSON source readers.

Readers return the decoded document untouched; shape and type checks are
the validator's job.
"""

import json
from pathlib import Path
from typing import Any

from topup.config.settings import PipelineConfig
from topup.errors import ParseError, SourceReadError
from topup.utils.logging import get_logger

log = get_logger(__name__)


def read_json(file_path: Path) -> Any:
    """
    Read a file and decode its JSON contents.

    Args:
        file_path: Path to the JSON document.

    Returns:
        The decoded document (for valid inputs, a list of dicts).

    Raises:
        SourceReadError: If the file does not exist or cannot be read.
        ParseError: If the contents are not valid UTF-8 JSON.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        msg = f"File '{file_path}' does not exist."
        raise SourceReadError(msg)

    try:
        raw = file_path.read_bytes()
    except OSError as e:
        msg = f"Error reading file '{file_path}': {e.strerror or e}"
        raise SourceReadError(msg) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Error parsing JSON data from file '{file_path}': {e}"
        raise ParseError(msg) from e

    log.debug("Decoded JSON source", path=str(file_path))
    return data


def load_companies(config: PipelineConfig) -> Any:
    """Read the configured companies document."""
    return _load(config.companies_path, "companies")


def load_users(config: PipelineConfig) -> Any:
    """Read the configured users document."""
    return _load(config.users_path, "users")


def _load(path: Path, dataset: str) -> Any:
    data = read_json(path)
    log.info(
        "Loaded source",
        dataset=dataset,
        path=str(path),
        records=len(data) if isinstance(data, list) else None,
    )
    return data
