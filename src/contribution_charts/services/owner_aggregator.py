"""Fold per-project contribution reports into per-owner chart series."""

import logging
from collections.abc import Sequence
from functools import reduce

from contribution_charts.exceptions import PaletteError
from contribution_charts.models.chart import Color, Dataset, OwnerSeries
from contribution_charts.models.contribution import (
    ContributionResponse,
    ContributionResult,
    Contributions,
)
from contribution_charts.utils.colors import pick_color

logger = logging.getLogger(__name__)

OwnerMap = dict[int | str, OwnerSeries]


def align_counts(contributions: Contributions, labels: Sequence[str]) -> tuple[int, ...]:
    """Commit count for every label, zero where the owner has no bucket."""
    lookup = contributions.counts_by_label()
    return tuple(lookup.get(label, 0) for label in labels)


def dataset_label(project_name: str, labels: Sequence[str], total: int) -> str:
    """``<project> <first>-<last> (<total>)``; an empty axis gives an empty range."""
    first = labels[0] if labels else ""
    last = labels[-1] if labels else ""
    return f"{project_name} {first}-{last} ({total})"


class OwnerAggregator:
    """Builds one series per owner, with one dataset per project they touched.

    Projects are visited in result order; a project's position picks its
    color, so every owner's line for the same project has the same color.
    """

    def __init__(
        self,
        labels: Sequence[str],
        tick_interval: int,
        palette: Sequence[Color],
        border_width: int = 1,
        line_tension: float = 0.1,
    ):
        if not palette:
            raise PaletteError("Palette must contain at least one color")
        self.labels = tuple(labels)
        self.tick_interval = tick_interval
        self.palette = tuple(palette)
        self.border_width = border_width
        self.line_tension = line_tension

    def aggregate(self, result: ContributionResult) -> OwnerMap:
        """Fold every (project, owner) record into the owner map.

        Returns:
            Mapping owner id -> OwnerSeries, in first-seen owner order
        """
        owners = reduce(self._fold_project, enumerate(result.responses()), {})
        logger.debug(
            "Aggregated %d projects into %d owner series", len(result), len(owners)
        )
        return owners

    def _fold_project(
        self, owners: OwnerMap, indexed: tuple[int, ContributionResponse]
    ) -> OwnerMap:
        project_index, response = indexed
        color = pick_color(self.palette, project_index)

        folded = dict(owners)
        for contributions in response.contributions:
            series = folded.get(contributions.owner_id)
            if series is None:
                series = self._empty_series(contributions)
            dataset = self._build_dataset(response, contributions, color)
            folded[contributions.owner_id] = series.model_copy(
                update={
                    "total": series.total + contributions.total_contributions,
                    "datasets": series.datasets + (dataset,),
                }
            )
        return folded

    def _empty_series(self, contributions: Contributions) -> OwnerSeries:
        return OwnerSeries(
            owner_id=contributions.owner_id,
            owner_handle=contributions.owner_handle,
            total=0,
            labels=self.labels,
            datasets=(),
            tick_interval=self.tick_interval,
        )

    def _build_dataset(
        self, response: ContributionResponse, contributions: Contributions, color: Color
    ) -> Dataset:
        return Dataset(
            label=dataset_label(
                response.project_name, self.labels, contributions.total_contributions
            ),
            data=align_counts(contributions, self.labels),
            color=color,
            fill=True,
            border_width=self.border_width,
            line_tension=self.line_tension,
        )


def aggregate_owners(
    result: ContributionResult,
    labels: Sequence[str],
    tick_interval: int,
    palette: Sequence[Color],
) -> OwnerMap:
    """Functional shortcut for ``OwnerAggregator(...).aggregate(result)``."""
    return OwnerAggregator(labels, tick_interval, palette).aggregate(result)


def order_series(owners: OwnerMap) -> list[OwnerSeries]:
    """Sort owner series by total, highest first.

    The sort is stable, so owners with equal totals keep first-seen order.
    """
    return sorted(owners.values(), key=lambda series: series.total, reverse=True)
