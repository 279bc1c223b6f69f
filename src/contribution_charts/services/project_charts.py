"""Per-owner charts of a single project report."""

from contribution_charts.models.chart import Color, Dataset, OwnerSeries
from contribution_charts.models.contribution import ContributionResponse, Contributions
from contribution_charts.services.calendar_sequencer import DAILY_TICK_INTERVAL
from contribution_charts.utils.colors import PROJECT_BACKGROUND, PROJECT_BORDER


def owner_chart(
    contributions: Contributions,
    tick_interval: int = DAILY_TICK_INTERVAL,
    color: Color = PROJECT_BORDER,
    background: Color = PROJECT_BACKGROUND,
) -> OwnerSeries:
    """Chart one owner's counts as reported, without zero-filling."""
    labels = tuple(count.bucket_label for count in contributions.contribution_counts)
    first = labels[0] if labels else ""
    last = labels[-1] if labels else ""
    dataset = Dataset(
        label=f"Commits {first} - {last}",
        data=tuple(count.commit_count for count in contributions.contribution_counts),
        color=color,
        background_color=background,
    )
    return OwnerSeries(
        owner_id=contributions.owner_id,
        owner_handle=contributions.owner_handle,
        total=contributions.total_contributions,
        labels=labels,
        datasets=(dataset,),
        tick_interval=tick_interval,
    )


def project_owner_charts(
    response: ContributionResponse, tick_interval: int = DAILY_TICK_INTERVAL
) -> list[OwnerSeries]:
    """One chart per owner of a project, most active owner first."""
    charts = [owner_chart(c, tick_interval) for c in response.contributions]
    return sorted(charts, key=lambda chart: chart.total, reverse=True)
