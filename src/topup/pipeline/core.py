"""
Top-up pipeline implementation.

Sequences read -> validate -> filter/sort -> aggregate -> report, and owns
the single boundary where pipeline errors are caught.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from topup.aggregation.core import aggregate
from topup.config.settings import PipelineConfig
from topup.errors import AggregationError, PipelineError
from topup.ingestion.sources import load_companies, load_users
from topup.pipeline.ordering import filter_users, sort_companies, sort_users
from topup.reporting.text import render, write_report
from topup.schemas.company import CompanySchema
from topup.schemas.output import CompanyAggregate
from topup.schemas.user import UserSchema
from topup.utils.logging import get_logger, log_context
from topup.validation.core import parse_records

log = get_logger(__name__)


@dataclass
class PipelineResult:
    """
    Result of a pipeline run.

    Attributes:
        aggregates: Per-company aggregates in report order.
        n_companies: Number of companies loaded.
        n_users_loaded: Number of user records loaded.
        n_users_joined: Number of users that survived filtering.
        strict_mode: Policy the run used.
        report_path: Where the report was written (None on failure).
        error: Failure message (None on success).
    """

    aggregates: tuple[CompanyAggregate, ...] = ()
    n_companies: int = 0
    n_users_loaded: int = 0
    n_users_joined: int = 0
    strict_mode: bool = True
    report_path: Path | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """True if the run produced a report."""
        return self.error is None


def _complete_records(
    raw: Any, schema_name: str, source: str, *, validate: bool
) -> list[Any]:
    """Parse a decoded document and require every declared key on each record."""
    records = parse_records(raw, schema_name, source, validate=validate)
    return [
        record.require_complete(schema_name, source, index)
        for index, record in enumerate(records)
    ]


class TopUpPipeline:
    """
    Pipeline producing the company token top-up report.

    strict_mode decides whether inputs are schema-validated and whether
    inactive users are dropped; everything else runs the same either way.
    """

    def __init__(self, config: PipelineConfig) -> None:
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config

    @property
    def strict_mode(self) -> bool:
        return self.config.strict_mode

    def load_companies(self) -> list[CompanySchema]:
        """Step 1: read, validate (strict) and sort companies."""
        source = str(self.config.companies_path)
        raw = load_companies(self.config)
        companies: list[CompanySchema] = _complete_records(
            raw, "company", source, validate=self.strict_mode
        )
        return self._ordered(sort_companies, companies)

    def load_users(
        self, companies: list[CompanySchema]
    ) -> tuple[list[UserSchema], int]:
        """
        Steps 2-3: read, validate (strict), filter and sort users.

        Returns:
            Joinable users in report order, and the number of users loaded.
        """
        source = str(self.config.users_path)
        raw = load_users(self.config)
        users: list[UserSchema] = _complete_records(
            raw, "user", source, validate=self.strict_mode
        )

        joined = self._ordered(
            lambda items: filter_users(
                items, companies, require_active=self.strict_mode
            ),
            users,
        )
        log.info(
            "Filtered users",
            loaded=len(users),
            joined=len(joined),
            dropped=len(users) - len(joined),
        )
        return self._ordered(sort_users, joined), len(users)

    def run(self) -> PipelineResult:
        """
        Run the full pipeline and write the report.

        Returns:
            PipelineResult with the aggregates and the report path.

        Raises:
            PipelineError: On the first failure of any step.
        """
        with log_context(strict_mode=self.strict_mode):
            log.info("Starting top-up pipeline")

            companies = self.load_companies()
            users, n_users_loaded = self.load_users(companies)

            try:
                aggregates = aggregate(users, companies)
            except TypeError as e:
                msg = f"Cannot aggregate unvalidated records: {e}"
                raise AggregationError(msg) from e

            report_path = write_report(render(aggregates), self.config.report_path)

            log.info(
                "Pipeline complete",
                companies=len(aggregates),
                users=len(users),
                report=str(report_path),
            )

        return PipelineResult(
            aggregates=aggregates,
            n_companies=len(companies),
            n_users_loaded=n_users_loaded,
            n_users_joined=len(users),
            strict_mode=self.strict_mode,
            report_path=report_path,
        )

    def _ordered(self, step: Callable[[Any], list[Any]], items: list[Any]) -> list[Any]:
        """
        Apply a filter or sort step.

        Unvalidated (lenient) records may hold values that cannot be hashed
        or compared; that surfaces as an AggregationError.
        """
        try:
            return step(items)
        except TypeError as e:
            msg = f"Cannot order unvalidated records: {e}"
            raise AggregationError(msg) from e


def run_topup(config: PipelineConfig) -> PipelineResult:
    """
    Run the pipeline, catching any pipeline error.

    This is the single place pipeline errors are handled: the error is
    logged once and returned on the result. No report is written.

    Args:
        config: Pipeline configuration.

    Returns:
        PipelineResult; check ``succeeded`` before using the aggregates.
    """
    try:
        return TopUpPipeline(config).run()
    except PipelineError as e:
        log.error("Pipeline failed", error=str(e), error_type=type(e).__name__)
        return PipelineResult(strict_mode=config.strict_mode, error=str(e))
