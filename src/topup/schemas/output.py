"""
Aggregation output record.
"""

from dataclasses import dataclass

from topup.schemas.user import ToppedUpUser


@dataclass(frozen=True)
class CompanyAggregate:
    """
    Per-company result of joining users to their company.

    Attributes:
        company_id: Id of the company.
        company_name: Name of the company.
        users_emailed: Joined users eligible for email, input order kept.
        users_not_emailed: All other joined users, input order kept.
        total_top_ups: top_up multiplied by the number of joined users.
    """

    company_id: int
    company_name: str
    users_emailed: tuple[ToppedUpUser, ...] = ()
    users_not_emailed: tuple[ToppedUpUser, ...] = ()
    total_top_ups: int = 0

    @property
    def user_count(self) -> int:
        """Number of users joined to this company."""
        return len(self.users_emailed) + len(self.users_not_emailed)
