"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Every key is optional; an empty file yields the default configuration.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from topup.config.settings import (
    DataPathsConfig,
    LoggingConfig,
    OutputConfig,
    PipelineConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_bool(value: Any, key: str) -> bool:
    """Parse a boolean, accepting the strings env interpolation produces."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "1", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "0", "off"}:
        return False
    msg = f"Config key '{key}' must be a boolean, got: {value!r}"
    raise ValueError(msg)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in config file '{path}': {e}"
            raise ValueError(msg) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file '{path}' must contain a mapping"
        raise ValueError(msg)
    return _process_config_values(data)


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> PipelineConfig:
    """
    Load pipeline configuration from YAML file(s).

    Recognised keys (all optional):
        - strict_mode: bool
        - data.root, data.companies, data.users: paths
        - output.report: path
        - logging.level, logging.json

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated PipelineConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and potential_base != config_path
            else {}
        )

    main_data = load_yaml(config_path)
    merged = _deep_merge(base_data, main_data)

    defaults = PipelineConfig()

    data_data = merged.get("data") or {}
    data_paths = DataPathsConfig(
        data_root=Path(data_data.get("root", defaults.data_paths.data_root)),
        companies=Path(data_data.get("companies", defaults.data_paths.companies)),
        users=Path(data_data.get("users", defaults.data_paths.users)),
    )

    output_data = merged.get("output") or {}
    output = OutputConfig(
        report_path=Path(output_data.get("report", defaults.output.report_path)),
    )

    logging_data = merged.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_data.get("level", defaults.logging.level),
        json_output=_parse_bool(
            logging_data.get("json", defaults.logging.json_output), "logging.json"
        ),
    )

    return PipelineConfig(
        strict_mode=_parse_bool(
            merged.get("strict_mode", defaults.strict_mode), "strict_mode"
        ),
        data_paths=data_paths,
        output=output,
        logging=logging_config,
    )
