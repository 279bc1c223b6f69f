"""Contribution Charts - per-owner commit time series for line charts.

Takes per-project contribution reports (commit counts per owner per time
bucket) and produces dense, aligned, per-owner datasets:
- One label axis shared by every dataset (every day for daily reports)
- Zero-filled buckets where an owner made no commits
- One dataset per project an owner contributed to, colored by project
- Owners ordered by total contributions, highest first

Example usage:
    ```python
    from contribution_charts import ContributionEngine, ContributionResult

    result = ContributionResult.from_api(payload)
    for series in ContributionEngine().build(result):
        print(series.owner_handle, series.total)
    ```
"""

__version__ = "0.1.0"

from contribution_charts.config import Config
from contribution_charts.exceptions import (
    ConfigError,
    ContributionChartsError,
    MixedGranularityError,
    PaletteError,
    ProjectNotFoundError,
    ReportParseError,
)
from contribution_charts.models import (
    Color,
    CommitRecord,
    ContributionCount,
    ContributionResponse,
    ContributionResult,
    Contributions,
    Dataset,
    Granularity,
    OwnerSeries,
)
from contribution_charts.services import (
    ContributionEngine,
    build_contribution_result,
    build_owner_series,
    project_owner_charts,
)

__all__ = [
    # Engine
    "ContributionEngine",
    "build_owner_series",
    "project_owner_charts",
    "build_contribution_result",
    # Configuration
    "Config",
    # Exceptions
    "ContributionChartsError",
    "ConfigError",
    "MixedGranularityError",
    "ReportParseError",
    "PaletteError",
    "ProjectNotFoundError",
    # Models - Reports
    "Granularity",
    "ContributionCount",
    "Contributions",
    "ContributionResponse",
    "ContributionResult",
    "CommitRecord",
    # Models - Charts
    "Color",
    "Dataset",
    "OwnerSeries",
]
