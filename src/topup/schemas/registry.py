"""
Schema registry for versioning and discovery.

Provides centralized access to the record schemas with version tracking.
"""

from dataclasses import dataclass
from typing import ClassVar

from topup.schemas.base import RecordSchema
from topup.schemas.company import CompanySchema
from topup.schemas.user import UserSchema


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered record schema."""

    name: str
    schema: type[RecordSchema]
    version: str
    description: str

    @property
    def permitted_keys(self) -> tuple[str, ...]:
        """Keys a record of this schema may carry."""
        return self.schema.permitted_keys()


class SchemaRegistry:
    """
    Centralized registry for all record schemas.

    Provides version tracking and schema discovery.
    """

    _version = "1.0.0"

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "company": SchemaInfo(
            name="company",
            schema=CompanySchema,
            version="1.0.0",
            description="Companies granting token top-ups",
        ),
        "user": SchemaInfo(
            name="user",
            schema=UserSchema,
            version="1.0.0",
            description="Users holding token balances",
        ),
    }

    @classmethod
    def registry_version(cls) -> str:
        """Get the registry version."""
        return cls._version

    @classmethod
    def get(cls, name: str) -> type[RecordSchema]:
        """
        Get a schema by name.

        Args:
            name: Schema identifier.

        Returns:
            The pydantic model class for the schema.

        Raises:
            KeyError: If schema not found.
        """
        return cls.get_info(name).schema

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Get full schema info by name.

        Args:
            name: Schema identifier.

        Returns:
            SchemaInfo with metadata.
        """
        if name not in cls._schemas:
            available = ", ".join(cls._schemas.keys())
            msg = f"Unknown schema '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._schemas[name]

    @classmethod
    def list_schemas(cls) -> list[str]:
        """List all registered schema names."""
        return list(cls._schemas.keys())
