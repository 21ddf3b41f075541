"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
Every field has a default, so ``PipelineConfig()`` reproduces the classic
behaviour: strict mode, ``companies.json`` + ``users.json`` in the working
directory, report written to ``output.txt``.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataPathsConfig(BaseModel):
    """Input file paths configuration.

    Paths are relative to data_root. Use resolve() to get the full path.
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("."), description="Root directory for the input files"
    )
    companies: Path = Field(
        default=Path("companies.json"), description="JSON array of company records"
    )
    users: Path = Field(
        default=Path("users.json"), description="JSON array of user records"
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a relative path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class OutputConfig(BaseModel):
    """Report destination configuration."""

    model_config = ConfigDict(frozen=True)

    report_path: Path = Field(
        default=Path("output.txt"), description="Where the text report is written"
    )


class LoggingConfig(BaseModel):
    """structlog configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO", description="Log level name")
    json_output: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is one of the standard logging level names."""
        name = v.upper()
        if name not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return name


class PipelineConfig(BaseModel):
    """Complete pipeline configuration.

    strict_mode drives both halves of the policy:
    - schema validation of both input files
    - dropping users whose active_status is false
    """

    model_config = ConfigDict(frozen=True)

    strict_mode: bool = Field(
        default=True,
        description="Validate inputs and drop inactive users",
    )
    data_paths: DataPathsConfig = Field(default_factory=DataPathsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def companies_path(self) -> Path:
        """Resolved path of the companies file."""
        return self.data_paths.resolve("companies")

    @property
    def users_path(self) -> Path:
        """Resolved path of the users file."""
        return self.data_paths.resolve("users")

    @property
    def report_path(self) -> Path:
        """Path the report is written to."""
        return self.output.report_path
