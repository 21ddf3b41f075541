"""
Configuration management with typed Pydantic models.

Provides the strict/lenient policy flag, input and output paths,
and logging settings, loadable from YAML.
"""

from topup.config.loader import load_config
from topup.config.settings import (
    DataPathsConfig,
    LoggingConfig,
    OutputConfig,
    PipelineConfig,
)

__all__ = [
    "DataPathsConfig",
    "LoggingConfig",
    "OutputConfig",
    "PipelineConfig",
    "load_config",
]
