"""Exceptions for Contribution Charts.

Exception Hierarchy:
    ContributionChartsError (base)
    ├── MixedGranularityError (reports do not share one breakdown)
    ├── ReportParseError (input JSON does not match the report contract)
    ├── PaletteError (empty or malformed color palette)
    ├── ConfigError (invalid configuration setting)
    └── ProjectNotFoundError (project id absent from a contribution result)

Usage:
    - MixedGranularityError is the only error the aggregation engine raises
      for well-formed input. Missing numbers and missing buckets are filled
      with zero instead of raising.
    - ReportParseError is raised while loading JSON, before the engine runs.
"""

__all__ = [
    "ContributionChartsError",
    "MixedGranularityError",
    "ReportParseError",
    "PaletteError",
    "ConfigError",
    "ProjectNotFoundError",
]


class ContributionChartsError(Exception):
    """Base exception for all Contribution Charts errors."""

    pass


class MixedGranularityError(ContributionChartsError):
    """Raised when contribution reports use more than one granularity."""

    def __init__(self, granularities: list):
        names = ", ".join(str(getattr(g, "value", g)) for g in granularities)
        super().__init__(f"Contribution reports mix granularities: {names}")
        self.granularities = list(granularities)


class ReportParseError(ContributionChartsError):
    """Raised when input data cannot be parsed into contribution models."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class PaletteError(ContributionChartsError):
    """Raised when a color palette is empty or cannot be parsed."""

    pass


class ConfigError(ContributionChartsError):
    """Raised when a configuration setting is invalid."""

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


class ProjectNotFoundError(ContributionChartsError):
    """Raised when a project is not present in a contribution result."""

    def __init__(self, project_id: int | str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
