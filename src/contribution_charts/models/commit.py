"""Commit records, the raw input of contribution reports."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict

from contribution_charts.models.contribution import coerce_id


class CommitRecord(BaseModel):
    """A single commit attributed to an owner of a project.

    Owners can be aliases of a primary owner (the same person committing
    under several identities). Contributions are credited to the primary
    owner when one is set.
    """

    model_config = ConfigDict(frozen=True)

    project_id: int | str
    project_name: str = ""
    owner_id: int | str
    owner_handle: str = ""
    primary_owner_id: int | str | None = None
    primary_owner_handle: str | None = None
    commit_time: datetime

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CommitRecord":
        """Create from a commit listing entry.

        ``commit_time`` may be a unix timestamp or an ISO datetime string.
        """
        return cls(
            project_id=coerce_id(data.get("project_id") or 0),
            project_name=data.get("project_name") or "",
            owner_id=coerce_id(data.get("owner_id") or 0),
            owner_handle=data.get("owner_handle") or "",
            primary_owner_id=_optional_id(data.get("primary_owner_id")),
            primary_owner_handle=data.get("primary_owner_handle"),
            commit_time=_parse_commit_time(data.get("commit_time")),
        )

    @property
    def effective_owner_id(self) -> int | str:
        if self.primary_owner_id is not None:
            return self.primary_owner_id
        return self.owner_id

    @property
    def effective_owner_handle(self) -> str:
        if self.primary_owner_id is not None and self.primary_owner_handle:
            return self.primary_owner_handle
        return self.owner_handle

    @property
    def commit_time_utc(self) -> datetime:
        """Commit time as an aware UTC datetime (naive times are UTC)."""
        if self.commit_time.tzinfo is None:
            return self.commit_time.replace(tzinfo=timezone.utc)
        return self.commit_time.astimezone(timezone.utc)


def _optional_id(value: Any) -> int | str | None:
    return None if value is None else coerce_id(value)


def _parse_commit_time(value: Any) -> datetime:
    """Parse a unix timestamp or ISO datetime string."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str) and value:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    raise ValueError(f"Invalid commit_time: {value!r}")
