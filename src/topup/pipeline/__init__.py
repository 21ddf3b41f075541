"""
Top-up pipeline.

Orchestrates ingestion, validation, ordering, aggregation and reporting.
"""

from topup.pipeline.core import PipelineResult, TopUpPipeline, run_topup
from topup.pipeline.ordering import filter_users, sort_companies, sort_users

__all__ = [
    "PipelineResult",
    "TopUpPipeline",
    "filter_users",
    "run_topup",
    "sort_companies",
    "sort_users",
]
