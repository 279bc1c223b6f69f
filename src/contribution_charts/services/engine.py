"""Contribution time-series aggregation engine.

Turns a snapshot of per-project contribution reports into dense, aligned,
per-owner series ready for a line chart:

    reports -> range -> label axis -> per-owner fold -> ordered series

The engine is a pure function of its input. It performs no I/O and keeps no
state between calls, so calling it again on the same snapshot yields an
identical result.
"""

import logging
from collections.abc import Sequence
from typing import Any

from contribution_charts.config import Config
from contribution_charts.models.chart import Color, OwnerSeries
from contribution_charts.models.contribution import ContributionResult
from contribution_charts.services.calendar_sequencer import (
    DAILY_TICK_INTERVAL,
    sequence_labels,
)
from contribution_charts.services.owner_aggregator import OwnerAggregator, order_series
from contribution_charts.services.range_resolver import resolve_range
from contribution_charts.utils.colors import DEFAULT_PALETTE

logger = logging.getLogger(__name__)


def observed_labels(result: ContributionResult) -> set[str]:
    """Every non-empty bucket label present in any owner's counts."""
    return {
        count.bucket_label
        for response in result.responses()
        for contributions in response.contributions
        for count in contributions.contribution_counts
        if count.bucket_label
    }


class ContributionEngine:
    """Aggregates contribution reports into per-owner chart series.

    Example usage:
        ```python
        result = ContributionResult.from_api(payload)
        series = ContributionEngine().build(result)
        ```

    Args:
        palette: Colors assigned to projects by position
        dense_calendar: Generate every month/year in range for coarse reports
        daily_tick_interval: Axis tick interval for daily reports
        border_width: Dataset line width
        line_tension: Dataset line tension
    """

    def __init__(
        self,
        palette: Sequence[Color] = DEFAULT_PALETTE,
        dense_calendar: bool = False,
        daily_tick_interval: int = DAILY_TICK_INTERVAL,
        border_width: int = 1,
        line_tension: float = 0.1,
    ):
        self.palette = tuple(palette)
        self.dense_calendar = dense_calendar
        self.daily_tick_interval = daily_tick_interval
        self.border_width = border_width
        self.line_tension = line_tension

    @classmethod
    def from_config(cls, config: Config) -> "ContributionEngine":
        return cls(
            palette=config.palette,
            dense_calendar=config.dense_calendar,
            daily_tick_interval=config.daily_tick_interval,
            border_width=config.border_width,
            line_tension=config.line_tension,
        )

    def build(self, result: ContributionResult) -> list[OwnerSeries]:
        """Run the full pipeline.

        Returns:
            Owner series ordered by total descending (ties in first-seen order);
            empty when the result holds no reports

        Raises:
            MixedGranularityError: If the reports do not share one granularity
            PaletteError: If the palette is empty
        """
        date_range = resolve_range(result.responses())
        if date_range is None:
            logger.debug("No contribution reports to aggregate")
            return []

        sequence = sequence_labels(
            date_range.start,
            date_range.end,
            date_range.granularity,
            observed=observed_labels(result),
            dense=self.dense_calendar,
            daily_tick_interval=self.daily_tick_interval,
        )
        logger.debug(
            "Aligning series on %d labels (tick interval %d)",
            len(sequence.labels),
            sequence.tick_interval,
        )

        aggregator = OwnerAggregator(
            sequence.labels,
            sequence.tick_interval,
            self.palette,
            border_width=self.border_width,
            line_tension=self.line_tension,
        )
        return order_series(aggregator.aggregate(result))

    def build_chart_payload(self, result: ContributionResult) -> list[dict[str, Any]]:
        """Run the pipeline and render each series for the chart component."""
        return [series.to_chart() for series in self.build(result)]


def build_owner_series(
    result: ContributionResult, palette: Sequence[Color] = DEFAULT_PALETTE
) -> list[OwnerSeries]:
    """Aggregate with default settings and the given palette."""
    return ContributionEngine(palette=palette).build(result)
