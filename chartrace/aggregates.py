"""Whole-history per-entity totals: carry-in window and lifetime appearances.

No date filtering is applied to the input. Both counts come from the full
record set so that entities charting before the visible range still carry
their history into it.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import date, timedelta

from chartrace.models import EntityAggregates, NormalizedRecord

logger = logging.getLogger(__name__)


def carry_in_counts(
    records: Iterable[NormalizedRecord],
    boundary: date | None,
    window_weeks: int | None,
) -> dict[str, int]:
    """Count observations in [boundary - window_weeks, boundary) per entity.

    Empty when either input is unset or the window is not positive, which
    makes the window metric equal to the year-to-date metric.
    """
    if boundary is None or window_weeks is None or window_weeks <= 0:
        return {}

    window_start = boundary - timedelta(weeks=window_weeks)
    counts: Counter[str] = Counter()
    for r in records:
        if r.week is not None and window_start <= r.week < boundary:
            counts[r.entity_id] += 1
    return dict(counts)


def lifetime_counts(records: Iterable[NormalizedRecord]) -> dict[str, int]:
    """Count every dated observation per entity.

    Duplicate rows for the same entity and week each count: this is a raw
    appearance count, not a count of distinct weeks.
    """
    counts: Counter[str] = Counter()
    for r in records:
        if r.week is not None:
            counts[r.entity_id] += 1
    return dict(counts)


def compute_aggregates(
    records: list[NormalizedRecord],
    boundary: date | None,
    window_weeks: int | None,
) -> EntityAggregates:
    aggregates = EntityAggregates(
        boundary=boundary,
        window_weeks=window_weeks,
        carry_in=carry_in_counts(records, boundary, window_weeks),
        lifetime=lifetime_counts(records),
    )
    logger.debug(
        "Aggregates for boundary=%s window=%s: %d carried in, %d lifetime",
        boundary, window_weeks, len(aggregates.carry_in), len(aggregates.lifetime),
    )
    return aggregates
