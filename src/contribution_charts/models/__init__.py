"""Data models for Contribution Charts."""

from contribution_charts.models.chart import Color, Dataset, OwnerSeries
from contribution_charts.models.commit import CommitRecord
from contribution_charts.models.contribution import (
    ContributionCount,
    ContributionResponse,
    ContributionResult,
    Contributions,
    Granularity,
)

__all__ = [
    "Granularity",
    "ContributionCount",
    "Contributions",
    "ContributionResponse",
    "ContributionResult",
    "CommitRecord",
    "Color",
    "Dataset",
    "OwnerSeries",
]
