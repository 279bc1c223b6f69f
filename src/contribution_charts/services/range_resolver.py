"""Global date span and granularity of a set of contribution reports."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from contribution_charts.exceptions import MixedGranularityError
from contribution_charts.models.contribution import ContributionResponse, Granularity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """Span covered by all reports, and their shared granularity."""

    start: date
    end: date
    granularity: Granularity


def resolve_range(responses: Iterable[ContributionResponse]) -> DateRange | None:
    """Compute the earliest start, latest end and common granularity.

    Args:
        responses: Project reports in fetch order

    Returns:
        The combined range, or None when there are no reports

    Raises:
        MixedGranularityError: If the reports do not share one granularity
    """
    responses = list(responses)
    if not responses:
        return None

    granularities: list[Granularity] = []
    for response in responses:
        if response.granularity not in granularities:
            granularities.append(response.granularity)
    if len(granularities) > 1:
        raise MixedGranularityError(granularities)

    date_range = DateRange(
        start=min(r.start for r in responses),
        end=max(r.end for r in responses),
        granularity=granularities[0],
    )
    logger.debug(
        "Resolved %d reports to %s..%s (%s)",
        len(responses),
        date_range.start,
        date_range.end,
        date_range.granularity.value,
    )
    return date_range
