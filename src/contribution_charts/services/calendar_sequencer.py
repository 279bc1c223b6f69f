"""Bucket label sequences that all series of a chart are aligned against."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from contribution_charts.models.contribution import Granularity

DAILY_TICK_INTERVAL = 5
COARSE_TICK_INTERVAL = 1


@dataclass(frozen=True)
class CalendarSequence:
    """Ordered bucket labels plus the axis tick interval to render them with."""

    labels: tuple[str, ...]
    tick_interval: int


def daily_labels(start: date, end: date) -> tuple[str, ...]:
    """Every calendar day from start to end inclusive, as YYYY-MM-DD."""
    labels = []
    day = start
    while day <= end:
        labels.append(day.isoformat())
        day += timedelta(days=1)
    return tuple(labels)


def monthly_labels(start: date, end: date) -> tuple[str, ...]:
    """Every month touching start..end inclusive, as YYYY-MM."""
    labels = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        labels.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return tuple(labels)


def yearly_labels(start: date, end: date) -> tuple[str, ...]:
    """Every year touching start..end inclusive, as YYYY."""
    return tuple(f"{year:04d}" for year in range(start.year, end.year + 1))


_GENERATORS: dict[Granularity, Callable[[date, date], tuple[str, ...]]] = {
    Granularity.DAILY: daily_labels,
    Granularity.MONTHLY: monthly_labels,
    Granularity.YEARLY: yearly_labels,
}


def sequence_labels(
    start: date,
    end: date,
    granularity: Granularity,
    observed: Iterable[str] = (),
    dense: bool = False,
    daily_tick_interval: int = DAILY_TICK_INTERVAL,
) -> CalendarSequence:
    """Build the label axis for a date range.

    Daily ranges always get one label per day. Monthly and yearly ranges use
    the bucket labels observed in the data, sorted, unless ``dense`` is set,
    in which case every month or year in the range is generated as well.

    Args:
        start: First day of the range
        end: Last day of the range (inclusive)
        granularity: Bucket size
        observed: Bucket labels present in the underlying counts
        dense: Generate every month/year instead of only observed buckets
        daily_tick_interval: Tick interval for daily axes

    Returns:
        CalendarSequence with labels and tick interval
    """
    if granularity is Granularity.DAILY:
        return CalendarSequence(daily_labels(start, end), daily_tick_interval)

    if dense:
        generated = _GENERATORS[granularity](start, end)
        labels = tuple(sorted(set(generated) | set(observed)))
    else:
        labels = tuple(sorted(set(observed)))
    return CalendarSequence(labels, COARSE_TICK_INTERVAL)
