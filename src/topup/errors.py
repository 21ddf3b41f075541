"""
Error taxonomy for the top-up pipeline.

Every failure raised by the core derives from PipelineError so the
orchestrator can catch it at a single boundary.
"""

from typing import Any


class PipelineError(Exception):
    """Base class for all errors raised by the pipeline core."""


class SourceReadError(PipelineError):
    """An input source is missing or cannot be read."""


class ParseError(PipelineError):
    """An input source does not hold well-formed JSON."""


class SchemaError(PipelineError):
    """
    A decoded record collection violates its schema.

    Attributes:
        entity: Schema name the records were checked against.
        source: Where the records came from (usually a file path).
        index: Position of the offending record, if any.
        key: Offending key, if any.
        value: Offending value, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        source: str | None = None,
        index: int | None = None,
        key: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.entity = entity
        self.source = source
        self.index = index
        self.key = key
        self.value = value


class AggregationError(PipelineError):
    """Aggregation inputs break a precondition the caller must uphold."""


class ReportWriteError(PipelineError):
    """The rendered report could not be written."""
