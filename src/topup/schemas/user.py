"""Pydantic schemas for user records."""

from pydantic import Field

from topup.schemas.base import MISSING, RecordSchema


class UserSchema(RecordSchema):
    """
    A user holding a token balance with one company.

    company_id may reference a company that does not exist; such users are
    filtered out before aggregation.
    """

    id: int = Field(default=MISSING, description="User identifier")
    first_name: str = Field(default=MISSING, description="Given name")
    last_name: str = Field(
        default=MISSING, description="Family name, secondary sort key"
    )
    email: str = Field(default=MISSING, description="Contact address")
    company_id: int = Field(default=MISSING, description="Id of the owning company")
    email_status: bool = Field(
        default=MISSING, description="Whether the user opted in to email"
    )
    active_status: bool = Field(
        default=MISSING, description="Whether the user is active"
    )
    tokens: int = Field(default=MISSING, description="Current token balance")

    def topped_up(self, amount: int) -> "ToppedUpUser":
        """Return a copy carrying ``tokens_updated = tokens + amount``."""
        return ToppedUpUser.model_construct(
            _fields_set=self.model_fields_set | {"tokens_updated"},
            **dict(self),
            tokens_updated=self.tokens + amount,
        )


class ToppedUpUser(UserSchema):
    """A user after aggregation, with the balance the top-up produced."""

    tokens_updated: int = Field(default=MISSING, description="Balance after the top-up")
