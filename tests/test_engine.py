"""Tests for the contribution aggregation engine."""

from datetime import date

import pytest

from contribution_charts.exceptions import MixedGranularityError, PaletteError
from contribution_charts.models.chart import Color
from contribution_charts.models.contribution import ContributionResult, Granularity
from contribution_charts.services.calendar_sequencer import (
    daily_labels,
    monthly_labels,
    sequence_labels,
    yearly_labels,
)
from contribution_charts.services.engine import (
    ContributionEngine,
    build_owner_series,
    observed_labels,
)
from contribution_charts.services.owner_aggregator import (
    OwnerAggregator,
    align_counts,
    aggregate_owners,
    dataset_label,
    order_series,
)
from contribution_charts.services.range_resolver import resolve_range
from contribution_charts.utils.colors import DEFAULT_PALETTE

LABELS = ("2023-01-01", "2023-01-02", "2023-01-03", "2023-01-04")


class TestRangeResolver:
    """Tests for resolve_range."""

    def test_span_covers_all_reports(self, two_project_result):
        """Test the range runs from the earliest start to the latest end."""
        date_range = resolve_range(two_project_result.responses())

        assert date_range.start == date(2023, 1, 1)
        assert date_range.end == date(2023, 1, 4)
        assert date_range.granularity is Granularity.DAILY

    def test_empty_input(self):
        """Test no reports resolve to no range."""
        assert resolve_range([]) is None

    def test_mixed_granularity(self, report_factory):
        """Test reports with different breakdowns are rejected."""
        result = ContributionResult.from_api(
            {
                "1": report_factory(1, "a", "2023-01-01", "2023-01-02", [], "daily"),
                "2": report_factory(2, "b", "2023-01-01", "2023-02-01", [], "monthly"),
            }
        )

        with pytest.raises(MixedGranularityError) as exc_info:
            resolve_range(result.responses())

        assert exc_info.value.granularities == [Granularity.DAILY, Granularity.MONTHLY]
        assert "daily, monthly" in str(exc_info.value)


class TestCalendarSequencer:
    """Tests for label sequence generation."""

    def test_daily_labels_cross_year(self):
        """Test daily labels run across month and year boundaries."""
        labels = daily_labels(date(2022, 12, 30), date(2023, 1, 2))

        assert labels == ("2022-12-30", "2022-12-31", "2023-01-01", "2023-01-02")

    def test_daily_labels_leap_day(self):
        """Test February 29th is included in leap years."""
        labels = daily_labels(date(2024, 2, 28), date(2024, 3, 1))

        assert labels == ("2024-02-28", "2024-02-29", "2024-03-01")

    def test_daily_single_day(self):
        """Test a one-day range has one label."""
        assert daily_labels(date(2023, 5, 5), date(2023, 5, 5)) == ("2023-05-05",)

    def test_daily_sequence_tick_interval(self):
        """Test daily axes are thinned to every fifth label."""
        sequence = sequence_labels(date(2023, 1, 1), date(2023, 1, 10), Granularity.DAILY)

        assert len(sequence.labels) == 10
        assert sequence.tick_interval == 5

    def test_daily_ignores_observed(self):
        """Test daily axes are generated, not taken from observed buckets."""
        sequence = sequence_labels(
            date(2023, 1, 1), date(2023, 1, 2), Granularity.DAILY, observed=["2023-01-09"]
        )

        assert sequence.labels == ("2023-01-01", "2023-01-02")

    def test_monthly_uses_observed_labels(self):
        """Test monthly axes are the sorted union of observed buckets."""
        sequence = sequence_labels(
            date(2023, 1, 1),
            date(2023, 6, 1),
            Granularity.MONTHLY,
            observed=["2023-06", "2023-01", "2023-06"],
        )

        assert sequence.labels == ("2023-01", "2023-06")
        assert sequence.tick_interval == 1

    def test_monthly_dense(self):
        """Test dense monthly axes include months without data."""
        sequence = sequence_labels(
            date(2022, 11, 1),
            date(2023, 2, 1),
            Granularity.MONTHLY,
            observed=["2022-11"],
            dense=True,
        )

        assert sequence.labels == ("2022-11", "2022-12", "2023-01", "2023-02")

    def test_yearly_dense(self):
        """Test dense yearly axes include every year in range."""
        assert yearly_labels(date(2020, 1, 1), date(2022, 1, 1)) == ("2020", "2021", "2022")
        sequence = sequence_labels(
            date(2020, 1, 1), date(2022, 1, 1), Granularity.YEARLY, dense=True
        )
        assert sequence.labels == ("2020", "2021", "2022")

    def test_monthly_labels_same_month(self):
        """Test a range inside one month yields that month."""
        assert monthly_labels(date(2023, 3, 2), date(2023, 3, 30)) == ("2023-03",)

    def test_deterministic(self):
        """Test identical input gives identical output."""
        first = sequence_labels(date(2023, 1, 1), date(2023, 3, 1), Granularity.DAILY)
        second = sequence_labels(date(2023, 1, 1), date(2023, 3, 1), Granularity.DAILY)

        assert first == second


class TestOwnerAggregator:
    """Tests for the per-owner fold."""

    def test_align_counts_zero_fills(self, two_project_result):
        """Test labels without a bucket are zero."""
        alice = two_project_result.get(10).contributions[0]

        assert align_counts(alice, LABELS) == (2, 0, 1, 0)

    def test_dataset_label(self):
        """Test dataset labels name the project, range and total."""
        assert dataset_label("P1", LABELS, 3) == "P1 2023-01-01-2023-01-04 (3)"

    def test_dataset_label_empty_axis(self):
        """Test an empty axis renders an empty range."""
        assert dataset_label("P1", (), 0) == "P1 - (0)"

    def test_aggregate(self, two_project_result):
        """Test owners accumulate totals and one dataset per project."""
        owners = OwnerAggregator(LABELS, 5, DEFAULT_PALETTE).aggregate(two_project_result)

        assert list(owners) == [1, 2]
        alice = owners[1]
        assert alice.total == 8
        assert [d.data for d in alice.datasets] == [(2, 0, 1, 0), (0, 5, 0, 0)]
        assert alice.labels == LABELS
        assert owners[2].total == 1
        assert owners[2].datasets[0].data == (0, 0, 0, 1)

    def test_aggregate_owners_shortcut(self, two_project_result):
        """Test the functional shortcut matches the aggregator."""
        owners = aggregate_owners(two_project_result, LABELS, 5, DEFAULT_PALETTE)

        assert owners == OwnerAggregator(LABELS, 5, DEFAULT_PALETTE).aggregate(two_project_result)

    def test_colors_follow_project_position(self, two_project_result):
        """Test a project's dataset color is picked by its position."""
        palette = (Color(1, 1, 1), Color(2, 2, 2))
        owners = OwnerAggregator(LABELS, 5, palette).aggregate(two_project_result)

        assert [d.color for d in owners[1].datasets] == [Color(1, 1, 1), Color(2, 2, 2)]
        assert owners[2].datasets[0].color == Color(2, 2, 2)

    def test_palette_wraps(self, two_project_result):
        """Test projects beyond the palette size reuse colors."""
        owners = OwnerAggregator(LABELS, 5, (Color(9, 9, 9),)).aggregate(two_project_result)

        assert {d.color for d in owners[1].datasets} == {Color(9, 9, 9)}

    def test_empty_palette(self):
        """Test an empty palette is rejected."""
        with pytest.raises(PaletteError):
            OwnerAggregator(LABELS, 5, ())

    def test_project_without_contributions(self, report_factory):
        """Test a project with no owners adds nothing."""
        result = ContributionResult.from_api(
            {"1": report_factory(1, "empty", "2023-01-01", "2023-01-02", [])}
        )

        assert OwnerAggregator(LABELS, 5, DEFAULT_PALETTE).aggregate(result) == {}

    def test_input_not_mutated(self, two_project_result):
        """Test the fold leaves its input untouched."""
        before = two_project_result.model_dump()
        OwnerAggregator(LABELS, 5, DEFAULT_PALETTE).aggregate(two_project_result)

        assert two_project_result.model_dump() == before

    def test_order_series_stable(self, report_factory):
        """Test ties keep first-seen order."""
        result = ContributionResult.from_api(
            {
                "1": report_factory(
                    1,
                    "a",
                    "2023-01-01",
                    "2023-01-01",
                    [(3, "carol", 2, []), (1, "alice", 5, []), (2, "bob", 2, [])],
                )
            }
        )
        owners = OwnerAggregator(("2023-01-01",), 5, DEFAULT_PALETTE).aggregate(result)

        ordered = order_series(owners)

        assert [s.owner_handle for s in ordered] == ["alice", "carol", "bob"]


class TestContributionEngine:
    """Tests for the full pipeline."""

    def test_two_projects(self, two_project_result):
        """Test the overlapping daily projects example end to end."""
        series = ContributionEngine().build(two_project_result)

        assert [s.owner_handle for s in series] == ["alice", "bob"]
        alice, bob = series
        assert alice.labels == LABELS
        assert alice.total == 8
        assert [d.data for d in alice.datasets] == [(2, 0, 1, 0), (0, 5, 0, 0)]
        assert [d.label for d in alice.datasets] == [
            "P1 2023-01-01-2023-01-04 (3)",
            "P2 2023-01-01-2023-01-04 (5)",
        ]
        assert bob.total == 1
        assert bob.datasets[0].data == (0, 0, 0, 1)
        assert alice.tick_interval == 5

    def test_every_dataset_aligned(self, two_project_result):
        """Test every dataset has one value per label."""
        for series in ContributionEngine().build(two_project_result):
            for dataset in series.datasets:
                assert len(dataset.data) == len(series.labels)

    def test_totals_sum_reported_totals(self, two_project_result):
        """Test owner totals are the sum of per-project totals."""
        series = ContributionEngine().build(two_project_result)
        expected = {}
        for response in two_project_result.responses():
            for c in response.contributions:
                expected[c.owner_id] = expected.get(c.owner_id, 0) + c.total_contributions

        assert {s.owner_id: s.total for s in series} == expected

    def test_ordering_non_increasing(self, two_project_result):
        """Test output is ordered by total, highest first."""
        totals = [s.total for s in ContributionEngine().build(two_project_result)]

        assert totals == sorted(totals, reverse=True)

    def test_idempotent(self, two_project_result):
        """Test repeated runs give identical output."""
        engine = ContributionEngine()

        assert engine.build(two_project_result) == engine.build(two_project_result)
        assert engine.build_chart_payload(two_project_result) == engine.build_chart_payload(
            two_project_result
        )

    def test_null_owner_ids_stay_distinct(self, report_factory):
        """Test owners with null ids in different projects are not merged."""
        first = report_factory(1, "a", "2023-01-01", "2023-01-01", [(5, "alice", 2, [])])
        second = report_factory(2, "b", "2023-01-01", "2023-01-01", [(6, "bob", 3, [])])
        first["contributions"]["5"]["owner_id"] = None
        second["contributions"]["6"]["owner_id"] = None
        result = ContributionResult.from_api({"1": first, "2": second})

        series = ContributionEngine().build(result)

        assert [(s.owner_id, s.owner_handle, s.total) for s in series] == [
            (6, "bob", 3),
            (5, "alice", 2),
        ]

    def test_empty_result(self):
        """Test an empty result gives an empty sequence."""
        assert ContributionEngine().build(ContributionResult()) == []

    def test_monthly_observed(self, report_factory):
        """Test monthly reports align on observed buckets only."""
        result = ContributionResult.from_api(
            {
                "1": report_factory(
                    1,
                    "core",
                    "2023-01-01",
                    "2023-04-01",
                    [
                        (1, "alice", 3, [("2023-01", 1), ("2023-04", 2)]),
                        (2, "bob", 4, [("2023-02", 4)]),
                    ],
                    breakdown="monthly",
                )
            }
        )

        bob, alice = ContributionEngine().build(result)

        assert alice.labels == ("2023-01", "2023-02", "2023-04")
        assert alice.datasets[0].data == (1, 0, 2)
        assert bob.datasets[0].data == (0, 4, 0)
        assert alice.tick_interval == 1

    def test_monthly_dense(self, report_factory):
        """Test dense monthly reports zero-fill absent months."""
        result = ContributionResult.from_api(
            {
                "1": report_factory(
                    1,
                    "core",
                    "2023-01-01",
                    "2023-04-01",
                    [(1, "alice", 3, [("2023-01", 1), ("2023-04", 2)])],
                    breakdown="monthly",
                )
            }
        )

        (alice,) = ContributionEngine(dense_calendar=True).build(result)

        assert alice.labels == ("2023-01", "2023-02", "2023-03", "2023-04")
        assert alice.datasets[0].data == (1, 0, 0, 2)

    def test_chart_payload(self, two_project_result):
        """Test chart payload shape for the line-chart component."""
        payload = ContributionEngine().build_chart_payload(two_project_result)

        first = payload[0]
        assert first["owner_handle"] == "alice"
        assert first["tickMod"] == 5
        assert first["datasets"][0]["borderColor"] == "rgb(0, 152, 121)"
        assert first["datasets"][1]["borderColor"] == "rgb(54, 162, 235)"
        assert first["datasets"][0]["line"] == {"tension": 0.1}

    def test_from_config(self):
        """Test engine settings come from configuration."""
        from contribution_charts.config import Config

        config = Config(palette=(Color(1, 2, 3),), daily_tick_interval=7, dense_calendar=True)
        engine = ContributionEngine.from_config(config)

        assert engine.palette == (Color(1, 2, 3),)
        assert engine.daily_tick_interval == 7
        assert engine.dense_calendar is True

    def test_build_owner_series(self, two_project_result):
        """Test the functional shortcut."""
        series = build_owner_series(two_project_result, palette=(Color(5, 5, 5),))

        assert series[0].datasets[0].color == Color(5, 5, 5)

    def test_observed_labels(self, two_project_result):
        """Test observed labels collect every bucket."""
        assert observed_labels(two_project_result) == {
            "2023-01-01",
            "2023-01-02",
            "2023-01-03",
            "2023-01-04",
        }
