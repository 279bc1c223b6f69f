"""Build contribution reports from raw commit records.

Commits are counted per project, per owner and per time bucket. Aliased
owners are credited to their primary owner.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timezone

from contribution_charts.models.commit import CommitRecord
from contribution_charts.models.contribution import (
    ContributionCount,
    ContributionResponse,
    ContributionResult,
    Contributions,
    Granularity,
)

logger = logging.getLogger(__name__)


def _window_start(start: date | None) -> datetime | None:
    if start is None:
        return None
    return datetime.combine(start, time.min, tzinfo=timezone.utc)


def _window_end(end: date | None) -> datetime | None:
    if end is None:
        return None
    return datetime.combine(end, time(23, 59, 59), tzinfo=timezone.utc)


def filter_commits(
    commits: Iterable[CommitRecord],
    owner_id: int | str | None = None,
    project_id: int | str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> list[CommitRecord]:
    """Select commits matching every given filter.

    The owner filter matches an owner and all of its aliases. ``start`` and
    ``end`` are whole days, both inclusive.
    """
    lower = _window_start(start)
    upper = _window_end(end)

    selected = []
    for commit in commits:
        if owner_id is not None and owner_id not in (commit.owner_id, commit.primary_owner_id):
            continue
        if project_id is not None and commit.project_id != project_id:
            continue
        moment = commit.commit_time_utc
        if lower is not None and moment < lower:
            continue
        if upper is not None and moment > upper:
            continue
        selected.append(commit)
    return selected


class _ProjectBuckets:
    """Mutable per-project tally used while scanning commits."""

    def __init__(self, commit: CommitRecord, bucket_date: date):
        self.project_id = commit.project_id
        self.project_name = commit.project_name
        self.start = bucket_date
        self.end = bucket_date
        # owner id -> (handle, {bucket label: count}), insertion ordered
        self.owners: dict[int | str, tuple[str, dict[str, int]]] = {}

    def add(self, commit: CommitRecord, label: str, bucket_date: date) -> None:
        self.start = min(self.start, bucket_date)
        self.end = max(self.end, bucket_date)
        owner_id = commit.effective_owner_id
        if owner_id not in self.owners:
            self.owners[owner_id] = (commit.effective_owner_handle, {})
        counts = self.owners[owner_id][1]
        counts[label] = counts.get(label, 0) + 1

    def to_response(self, granularity: Granularity) -> ContributionResponse:
        contributions = tuple(
            Contributions(
                owner_id=owner_id,
                owner_handle=handle,
                total_contributions=sum(counts.values()),
                contribution_counts=tuple(
                    ContributionCount(bucket_label=label, commit_count=count)
                    for label, count in counts.items()
                ),
            )
            for owner_id, (handle, counts) in self.owners.items()
        )
        return ContributionResponse(
            project_id=self.project_id,
            project_name=self.project_name,
            start=self.start,
            end=self.end,
            granularity=granularity,
            contributions=contributions,
        )


def build_contribution_result(
    commits: Iterable[CommitRecord],
    granularity: Granularity = Granularity.DAILY,
    owner_id: int | str | None = None,
    project_id: int | str | None = None,
    start: date | None = None,
    end: date | None = None,
) -> ContributionResult:
    """Count commits into per-project contribution reports.

    Args:
        commits: Commit records, in any order
        granularity: Bucket size for the counts
        owner_id: Only count this owner (and its aliases)
        project_id: Only count this project
        start: First day to count (inclusive)
        end: Last day to count (inclusive)

    Returns:
        ContributionResult with projects and owners in first-commit order and
        each owner's buckets in chronological order
    """
    selected = filter_commits(commits, owner_id, project_id, start, end)
    selected.sort(key=lambda commit: commit.commit_time_utc)
    logger.debug("Counting %d commits by %s buckets", len(selected), granularity.value)

    projects: dict[int | str, _ProjectBuckets] = {}
    for commit in selected:
        label = granularity.bucket_label(commit.commit_time_utc)
        bucket_date = granularity.bucket_date(label)
        if commit.project_id not in projects:
            projects[commit.project_id] = _ProjectBuckets(commit, bucket_date)
        projects[commit.project_id].add(commit, label, bucket_date)

    return ContributionResult.from_responses(
        [project.to_response(granularity) for project in projects.values()]
    )
