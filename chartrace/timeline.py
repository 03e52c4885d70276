"""Rebuild a gapless weekly timeline from the weeks a chart was observed."""

from collections.abc import Iterable
from datetime import date, timedelta

ONE_WEEK = timedelta(weeks=1)


def reconstruct_timeline(weeks: Iterable[date]) -> list[date]:
    """Return every week from the first to the last observed week-stamp.

    Between two consecutive observed stamps, step forward one week at a time
    from the earlier one and emit each stamp strictly before the later one.
    Observed stamps are always emitted as-is, so if the source shifts its
    chart day the timeline re-synchronizes at the next observation.
    """
    observed = sorted(set(weeks))
    if not observed:
        return []

    timeline = [observed[0]]
    for later in observed[1:]:
        current = timeline[-1] + ONE_WEEK
        while current < later:
            timeline.append(current)
            current += ONE_WEEK
        timeline.append(later)
    return timeline


def missing_weeks(weeks: Iterable[date]) -> list[date]:
    """Weeks the reconstructed timeline had to fill in."""
    weeks = list(weeks)
    present = set(weeks)
    return [w for w in reconstruct_timeline(weeks) if w not in present]
