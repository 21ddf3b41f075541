"""
Join users to their companies and total the top-ups.

The accumulator is created inside each aggregate() call, threaded through
a fold over the users and frozen into CompanyAggregate values at the end.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import reduce
from typing import Any

from topup.errors import AggregationError
from topup.schemas.base import join_key
from topup.schemas.company import CompanySchema
from topup.schemas.output import CompanyAggregate
from topup.schemas.user import ToppedUpUser, UserSchema
from topup.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class _CompanyTally:
    """Running totals for one company while users are folded in."""

    company: CompanySchema
    emailed: list[ToppedUpUser] = field(default_factory=list)
    not_emailed: list[ToppedUpUser] = field(default_factory=list)
    total_top_ups: int = 0

    def freeze(self) -> CompanyAggregate:
        return CompanyAggregate(
            company_id=self.company.id,
            company_name=self.company.name,
            users_emailed=tuple(self.emailed),
            users_not_emailed=tuple(self.not_emailed),
            total_top_ups=self.total_top_ups,
        )


def _index_companies(companies: Sequence[CompanySchema]) -> dict[Any, _CompanyTally]:
    """Create one empty tally per company, keyed by id, in supplied order."""
    tallies: dict[Any, _CompanyTally] = {}
    for company in companies:
        key = join_key(company.id)
        if key in tallies:
            msg = f"Duplicate company id: {company.id}"
            raise AggregationError(msg)
        tallies[key] = _CompanyTally(company=company)
    return tallies


def _join_user(
    tallies: dict[Any, _CompanyTally], user: UserSchema
) -> dict[Any, _CompanyTally]:
    """Fold step: credit one user's top-up to its company."""
    tally = tallies.get(join_key(user.company_id))
    if tally is None:
        msg = (
            f"User {user.id} references unknown company_id {user.company_id}; "
            "users must be filtered to known companies before aggregation"
        )
        raise AggregationError(msg)

    company = tally.company
    if isinstance(user.tokens, bool) or isinstance(company.top_up, bool):
        msg = f"User {user.id}: tokens and top_up must be integers, not booleans"
        raise AggregationError(msg)
    topped_up = user.topped_up(company.top_up)
    tally.total_top_ups += company.top_up

    if company.email_status and user.email_status:
        tally.emailed.append(topped_up)
    else:
        tally.not_emailed.append(topped_up)
    return tallies


def aggregate(
    users: Sequence[UserSchema],
    companies: Sequence[CompanySchema],
) -> tuple[CompanyAggregate, ...]:
    """
    Build one aggregate per company from the joined users.

    Each user gets ``tokens_updated = tokens + company.top_up`` and lands in
    ``users_emailed`` when both the company and the user allow email, in
    ``users_not_emailed`` otherwise. Users keep the order they were given in;
    companies keep the order they were given in.

    Args:
        users: Users whose company_id is known to ``companies``.
        companies: Companies with unique ids.

    Returns:
        Frozen aggregates, one per company, in company order.

    Raises:
        AggregationError: If company ids repeat, a user references a
            company that is not in ``companies``, or a balance or top-up
            is a boolean.
    """
    tallies = reduce(_join_user, users, _index_companies(companies))
    aggregates = tuple(tally.freeze() for tally in tallies.values())

    log.debug(
        "Aggregated users",
        companies=len(aggregates),
        users=sum(a.user_count for a in aggregates),
    )
    return aggregates
