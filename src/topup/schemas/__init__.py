"""
Record schemas.

All data contracts are defined here as pydantic models: which keys a
company or user record may carry, which JSON type each key requires, and
the aggregation output built from accepted records.
"""

from topup.schemas.base import MISSING, RecordSchema, join_key
from topup.schemas.company import CompanySchema
from topup.schemas.output import CompanyAggregate
from topup.schemas.registry import SchemaInfo, SchemaRegistry
from topup.schemas.user import ToppedUpUser, UserSchema

__all__ = [
    "MISSING",
    "CompanyAggregate",
    "CompanySchema",
    "RecordSchema",
    "SchemaInfo",
    "SchemaRegistry",
    "ToppedUpUser",
    "UserSchema",
    "join_key",
]
