"""Contribution report models.

These mirror the JSON returned by the stats endpoint of the tracking backend:
a mapping of project id to a per-project report, each report holding one
entry per owner with that owner's commit counts per time bucket.
"""

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from contribution_charts.exceptions import ReportParseError


class Granularity(str, Enum):
    """Time-bucket size of a contribution report ("breakdown")."""

    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Any) -> "Granularity":
        """Parse a breakdown name. Unknown or missing values mean daily."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DAILY

    @property
    def label_format(self) -> str:
        """strftime format of this granularity's bucket labels."""
        return _LABEL_FORMATS[self]

    def bucket_label(self, moment: date) -> str:
        return moment.strftime(self.label_format)

    def bucket_date(self, label: str) -> date:
        """Date a bucket label stands for (first day of its month or year)."""
        if self is Granularity.MONTHLY:
            label = f"{label}-01"
        elif self is Granularity.YEARLY:
            label = f"{label}-01-01"
        return date.fromisoformat(label)


_LABEL_FORMATS = {
    Granularity.DAILY: "%Y-%m-%d",
    Granularity.MONTHLY: "%Y-%m",
    Granularity.YEARLY: "%Y",
}


class ContributionCount(BaseModel):
    """Commits attributed to one owner in one time bucket."""

    model_config = ConfigDict(frozen=True)

    bucket_label: str
    commit_count: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ContributionCount":
        """Create from API response."""
        return cls(
            bucket_label=str(data.get("commit_time") or ""),
            commit_count=data.get("commit_count") or 0,
        )

    def to_api(self) -> dict[str, Any]:
        return {"commit_time": self.bucket_label, "commit_count": self.commit_count}


class Contributions(BaseModel):
    """One owner's contributions to one project.

    ``total_contributions`` is supplied by the source and trusted as-is; it is
    not recomputed from ``contribution_counts``.
    """

    model_config = ConfigDict(frozen=True)

    owner_id: int | str
    owner_handle: str = ""
    total_contributions: int = 0
    contribution_counts: tuple[ContributionCount, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any], owner_id: int | str | None = None) -> "Contributions":
        """Create from API response.

        Args:
            data: Owner entry of a report's ``contributions`` mapping
            owner_id: Mapping key, used when the entry carries no owner_id
        """
        counts = tuple(
            ContributionCount.from_api(count)
            for count in data.get("contribution_counts") or []
        )
        return cls(
            owner_id=coerce_id(_present_or(data.get("owner_id"), owner_id)),
            owner_handle=data.get("owner_handle") or "",
            total_contributions=data.get("total_contributions") or 0,
            contribution_counts=counts,
        )

    def counts_by_label(self) -> dict[str, int]:
        """Map bucket label to commit count (last duplicate wins)."""
        return {count.bucket_label: count.commit_count for count in self.contribution_counts}

    def to_api(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "owner_handle": self.owner_handle,
            "total_contributions": self.total_contributions,
            "contribution_counts": [count.to_api() for count in self.contribution_counts],
        }


class ContributionResponse(BaseModel):
    """One project's contribution report over one time window."""

    model_config = ConfigDict(frozen=True)

    project_id: int | str
    project_name: str = ""
    start: date
    end: date
    granularity: Granularity = Granularity.DAILY
    # Owner entries in report order; owner ids are unique
    contributions: tuple[Contributions, ...] = ()

    @classmethod
    def from_api(
        cls, data: dict[str, Any], project_id: int | str | None = None
    ) -> "ContributionResponse":
        """Create from API response.

        Raises:
            ReportParseError: If start/end are missing or are not dates
        """
        raw_contributions = data.get("contributions") or {}
        if not isinstance(raw_contributions, Mapping):
            raise ReportParseError("'contributions' must be a mapping of owner id to entry")

        contributions = tuple(
            Contributions.from_api(entry, owner_id=key)
            for key, entry in raw_contributions.items()
        )
        return cls(
            project_id=coerce_id(_present_or(data.get("project_id"), project_id)),
            project_name=data.get("project_name") or "",
            start=_parse_date(data.get("start"), "start"),
            end=_parse_date(data.get("end"), "end"),
            granularity=Granularity.parse(data.get("breakdown")),
            contributions=contributions,
        )

    def owner_ids(self) -> list[int | str]:
        return [c.owner_id for c in self.contributions]

    def to_api(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "project_name": self.project_name,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "breakdown": self.granularity.value,
            "contributions": {str(c.owner_id): c.to_api() for c in self.contributions},
        }


class ContributionResult(BaseModel):
    """Per-project reports in fetch order.

    Order is significant: a project's position selects its chart color. The
    entries are kept as an explicit sequence rather than relying on mapping
    iteration order.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[tuple[int | str, ContributionResponse], ...] = ()

    @classmethod
    def from_api(cls, data: Any) -> "ContributionResult":
        """Create from the stats endpoint's JSON object.

        Raises:
            ReportParseError: If the payload is not a mapping of project reports
        """
        if not isinstance(data, Mapping):
            raise ReportParseError("Contribution result must be a JSON object")

        entries = []
        for key, value in data.items():
            if not isinstance(value, Mapping):
                raise ReportParseError(f"Report for project {key} must be a JSON object")
            try:
                response = ContributionResponse.from_api(value, project_id=key)
            except (AttributeError, TypeError, ValidationError) as e:
                raise ReportParseError(f"Malformed report for project {key}: {e}") from e
            entries.append((response.project_id, response))
        return cls(entries=tuple(entries))

    @classmethod
    def from_responses(cls, responses: list[ContributionResponse]) -> "ContributionResult":
        return cls(entries=tuple((r.project_id, r) for r in responses))

    def responses(self) -> list[ContributionResponse]:
        return [response for _, response in self.entries]

    def get(self, project_id: int | str) -> ContributionResponse | None:
        """Find a project's report, matching ids by their string form."""
        for key, response in self.entries:
            if str(key) == str(project_id):
                return response
        return None

    def to_api(self) -> dict[str, Any]:
        return {str(key): response.to_api() for key, response in self.entries}

    def __len__(self) -> int:
        return len(self.entries)


def _present_or(value: Any, fallback: Any) -> Any:
    """Use the mapping key when an id field is absent or null."""
    return fallback if value is None else value


def coerce_id(value: Any) -> int | str:
    """JSON object keys arrive as strings; keep ids numeric where possible."""
    if isinstance(value, int):
        return value
    try:
        return int(str(value))
    except (TypeError, ValueError):
        return str(value)


def _parse_date(value: Any, field_name: str) -> date:
    """Parse an ISO date (a datetime string is truncated to its date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ReportParseError(f"Missing '{field_name}' date in contribution report")
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise ReportParseError(f"Invalid '{field_name}' date: {value!r}") from e
