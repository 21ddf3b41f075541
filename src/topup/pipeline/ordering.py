"""
Ordering and filtering rules applied before aggregation.

These rules make the report reproducible: companies by ascending id,
users by ascending (company_id, last_name). Both sorts are stable.
"""

from collections.abc import Iterable, Sequence

from topup.schemas.base import join_key
from topup.schemas.company import CompanySchema
from topup.schemas.user import UserSchema


def sort_companies(companies: Iterable[CompanySchema]) -> list[CompanySchema]:
    """Sort companies ascending by id."""
    return sorted(companies, key=lambda company: company.id)


def filter_users(
    users: Iterable[UserSchema],
    companies: Sequence[CompanySchema],
    *,
    require_active: bool,
) -> list[UserSchema]:
    """
    Keep users that belong to a known company.

    Args:
        users: Candidate users.
        companies: Known companies.
        require_active: Also drop users whose active_status is not true.

    Returns:
        Users that may be handed to aggregate(), in input order.
    """
    company_ids = {join_key(company.id) for company in companies}
    return [
        user
        for user in users
        if join_key(user.company_id) in company_ids
        and (user.active_status or not require_active)
    ]


def sort_users(users: Iterable[UserSchema]) -> list[UserSchema]:
    """Sort users ascending by (company_id, last_name)."""
    return sorted(users, key=lambda user: (user.company_id, user.last_name))
