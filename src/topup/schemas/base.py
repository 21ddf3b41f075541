"""
Shared base for the pydantic record schemas.

A record may omit any permitted key and still pass validation, so every
field defaults to MISSING. Defaults are never validated, which keeps an
omitted key acceptable while an explicit null is still an illegal value.
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict

from topup.errors import SchemaError


class _Missing:
    """Placeholder for a key the record did not carry."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class RecordSchema(BaseModel):
    """
    Base for company and user records.

    Validation is strict: integers reject booleans and floats, booleans
    reject 0/1 and strings, and unknown keys are forbidden.
    """

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    @classmethod
    def permitted_keys(cls) -> tuple[str, ...]:
        """Keys a record of this schema may carry, in declaration order."""
        return tuple(cls.model_fields)

    @classmethod
    def from_unvalidated(cls, record: Mapping[str, Any]) -> Self:
        """
        Build a record without checking types or keys.

        Keys the schema does not declare are dropped; values are taken as-is.
        """
        return cls.model_construct(**record)

    def missing_keys(self) -> list[str]:
        """Declared keys the source record did not carry."""
        fields_set = self.model_fields_set
        return [key for key in type(self).model_fields if key not in fields_set]

    def require_complete(self, entity: str, source: str, index: int) -> Self:
        """
        Check that every declared key was present in the source record.

        Raises:
            SchemaError: Naming the first missing key.
        """
        missing = self.missing_keys()
        if missing:
            key = missing[0]
            msg = f"{entity} record {index} in '{source}' has missing key: {key}"
            raise SchemaError(msg, entity=entity, source=source, index=index, key=key)
        return self


def join_key(value: Any) -> Any:
    """
    Key under which an id joins users to companies.

    ``True == 1`` in Python, so booleans are wrapped to keep a boolean
    company_id from matching company 1 when records were not validated.
    """
    return (bool, value) if isinstance(value, bool) else value
