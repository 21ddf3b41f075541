"""Pydantic schema for company records."""

from pydantic import Field

from topup.schemas.base import MISSING, RecordSchema


class CompanySchema(RecordSchema):
    """
    A company granting token top-ups to its users.

    Loaded from companies.json; ids are unique across the file.
    """

    id: int = Field(default=MISSING, description="Unique company identifier")
    name: str = Field(default=MISSING, description="Display name")
    top_up: int = Field(
        default=MISSING, description="Tokens granted to each joined user per run"
    )
    email_status: bool = Field(
        default=MISSING, description="Whether the company permits emailing its users"
    )
