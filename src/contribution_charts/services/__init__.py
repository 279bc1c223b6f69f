"""Contribution aggregation services."""

from contribution_charts.services.engine import ContributionEngine, build_owner_series
from contribution_charts.services.project_charts import project_owner_charts
from contribution_charts.services.report_builder import build_contribution_result

__all__ = [
    "ContributionEngine",
    "build_owner_series",
    "project_owner_charts",
    "build_contribution_result",
]
