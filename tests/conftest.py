"""Pytest configuration and fixtures."""

import pytest

from contribution_charts.config import Config, set_config
from contribution_charts.models.contribution import ContributionResult


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state before each test."""
    set_config(Config())
    yield
    set_config(None)


def make_report(
    project_id,
    name,
    start,
    end,
    owners,
    breakdown="daily",
):
    """Build one project's report in API shape.

    ``owners`` is a list of (owner_id, handle, total, [(label, count), ...]).
    """
    return {
        "project_id": project_id,
        "project_name": name,
        "start": start,
        "end": end,
        "breakdown": breakdown,
        "contributions": {
            str(owner_id): {
                "owner_id": owner_id,
                "owner_handle": handle,
                "total_contributions": total,
                "contribution_counts": [
                    {"commit_time": label, "commit_count": count} for label, count in counts
                ],
            }
            for owner_id, handle, total, counts in owners
        },
    }


@pytest.fixture
def two_project_payload():
    """Two overlapping daily projects; owner 1 in both, owner 2 only in the second."""
    return {
        "10": make_report(
            10,
            "P1",
            "2023-01-01",
            "2023-01-03",
            [(1, "alice", 3, [("2023-01-01", 2), ("2023-01-03", 1)])],
        ),
        "20": make_report(
            20,
            "P2",
            "2023-01-02",
            "2023-01-04",
            [
                (1, "alice", 5, [("2023-01-02", 5)]),
                (2, "bob", 1, [("2023-01-04", 1)]),
            ],
        ),
    }


@pytest.fixture
def two_project_result(two_project_payload):
    return ContributionResult.from_api(two_project_payload)


@pytest.fixture
def report_factory():
    """Factory for API-shaped project reports."""
    return make_report
