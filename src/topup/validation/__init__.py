"""Record schema validation."""

from topup.validation.core import (
    ValidationResult,
    ValidationRunner,
    parse_records,
    validate_companies,
    validate_records,
    validate_users,
)
from topup.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "ValidationResult",
    "ValidationRunner",
    "parse_records",
    "validate_companies",
    "validate_records",
    "validate_users",
]
