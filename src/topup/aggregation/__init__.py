"""Per-company token top-up aggregation."""

from topup.aggregation.core import aggregate

__all__ = ["aggregate"]
