"""
Core validation logic for decoded record collections.

Checks raw JSON values against the registered pydantic record schemas.
Validation is fail-fast: the first violation raises a SchemaError and
nothing is accumulated.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from topup.config.settings import PipelineConfig
from topup.errors import PipelineError, SchemaError
from topup.ingestion.sources import read_json
from topup.schemas.base import RecordSchema
from topup.schemas.registry import SchemaRegistry
from topup.utils.logging import get_logger

log = get_logger(__name__)


def _first_violation(
    error: ValidationError, record: Mapping[str, Any]
) -> Mapping[str, Any]:
    """Pick the error for the key that comes first in the record."""
    position = {key: i for i, key in enumerate(record)}

    def rank(details: Mapping[str, Any]) -> int:
        loc = details["loc"]
        return position.get(loc[0], len(position)) if loc else len(position)

    return min(error.errors(), key=rank)


def _validate_record(
    schema: type[RecordSchema],
    record: Mapping[str, Any],
    schema_name: str,
    source: str,
    index: int,
) -> RecordSchema:
    try:
        return schema.model_validate(dict(record))
    except ValidationError as e:
        details = _first_violation(e, record)
        key = details["loc"][0] if details["loc"] else None
        if details["type"] == "extra_forbidden":
            problem = "illegal key"
        else:
            problem = "illegal value for key"
        msg = f"{schema_name} record {index} in '{source}' has {problem}: {key}"
        raise SchemaError(
            msg,
            entity=schema_name,
            source=source,
            index=index,
            key=key,
            value=record.get(key),
        ) from e


def parse_records(
    records: Any, schema_name: str, source: str, *, validate: bool = True
) -> list[RecordSchema]:
    """
    Turn a decoded document into schema records.

    Keys are checked in each record's insertion order. Keys the schema
    permits but the record lacks are not reported here.

    Args:
        records: Decoded JSON document, expected to be an array of objects.
        schema_name: Registered schema to parse against.
        source: Origin of the document, quoted in error messages.
        validate: Check keys and value types. When False, values are taken
            as-is and undeclared keys are dropped.

    Returns:
        One record per element, in document order.

    Raises:
        SchemaError: If the document is not an array of objects, or (when
            validating) on the first key or value violation.
    """
    schema = SchemaRegistry.get(schema_name)

    if not isinstance(records, list):
        msg = f"'{source}' is not an array of {schema_name} records"
        raise SchemaError(msg, entity=schema_name, source=source, value=records)

    parsed: list[RecordSchema] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            msg = f"{schema_name} record {index} in '{source}' is not an object"
            raise SchemaError(
                msg, entity=schema_name, source=source, index=index, value=record
            )
        if validate:
            parsed.append(_validate_record(schema, record, schema_name, source, index))
        else:
            parsed.append(schema.from_unvalidated(record))

    if validate:
        log.debug("Schema validation passed", schema=schema_name, records=len(parsed))
    return parsed


def validate_records(records: Any, schema_name: str, source: str) -> list[RecordSchema]:
    """
    Validate a decoded document against a record schema.

    Raises:
        SchemaError: On the first shape, key or value violation.
    """
    return parse_records(records, schema_name, source)


def validate_companies(
    records: Any, source: str = "companies.json"
) -> list[RecordSchema]:
    """Validate a decoded companies document."""
    return validate_records(records, "company", source)


def validate_users(records: Any, source: str = "users.json") -> list[RecordSchema]:
    """Validate a decoded users document."""
    return validate_records(records, "user", source)


@dataclass
class ValidationResult:
    """Result of validating a single dataset."""

    dataset_name: str
    schema_name: str
    file_path: Path
    exists: bool
    schema_valid: bool | None
    record_count: int | None
    error_message: str | None


# Mapping from config dataset names to schema names
DATASET_SCHEMA_MAP: dict[str, str] = {
    "companies": "company",
    "users": "user",
}


class ValidationRunner:
    """
    Runs validation for all configured datasets.

    Unlike the pipeline, which stops at the first failure, the runner
    checks every dataset and reports each outcome.
    """

    def __init__(self, config: PipelineConfig) -> None:
        """
        Initialize validation runner.

        Args:
            config: Pipeline configuration containing data paths.
        """
        self.config = config

    def run(self) -> list[ValidationResult]:
        """
        Run validation for all datasets in config.

        Returns:
            List of validation results, one per dataset.
        """
        return [
            self._validate_dataset(dataset_attr, schema_name)
            for dataset_attr, schema_name in DATASET_SCHEMA_MAP.items()
        ]

    def _validate_dataset(self, dataset_attr: str, schema_name: str) -> ValidationResult:
        """
        Validate a single dataset.

        Args:
            dataset_attr: Attribute name from DataPathsConfig.
            schema_name: Registered schema for the dataset.

        Returns:
            ValidationResult for the dataset.
        """
        file_path = self.config.data_paths.resolve(dataset_attr)

        if not file_path.exists():
            log.warning("Data file not found", dataset=dataset_attr, path=str(file_path))
            return ValidationResult(
                dataset_name=dataset_attr,
                schema_name=schema_name,
                file_path=file_path,
                exists=False,
                schema_valid=None,
                record_count=None,
                error_message="File not found",
            )

        records: Any = None
        try:
            records = read_json(file_path)
            validate_records(records, schema_name, str(file_path))
        except PipelineError as e:
            log.error(
                "Validation failed",
                dataset=dataset_attr,
                schema=schema_name,
                error=str(e),
            )
            return ValidationResult(
                dataset_name=dataset_attr,
                schema_name=schema_name,
                file_path=file_path,
                exists=True,
                schema_valid=False,
                record_count=len(records) if isinstance(records, list) else None,
                error_message=f"{type(e).__name__}: {e!s}",
            )

        log.info(
            "Validation passed",
            dataset=dataset_attr,
            schema=schema_name,
            records=len(records),
        )
        return ValidationResult(
            dataset_name=dataset_attr,
            schema_name=schema_name,
            file_path=file_path,
            exists=True,
            schema_valid=True,
            record_count=len(records),
            error_message=None,
        )
