"""Frame generator: walk the weekly timeline and emit ranked top-N frames.

Each run owns a YearState holding the year-to-date counters and last-known
ranks. The state resets whenever the timeline crosses into a new calendar
year, so two runs with different settings never share counters.
"""

import bisect
import heapq
import logging
from collections import Counter, defaultdict
from collections.abc import Iterator, Sequence
from datetime import date

from chartrace.aggregates import compute_aggregates
from chartrace.config import FrameSettings
from chartrace.models import (
    EntityAggregates,
    Frame,
    FrameEntry,
    MetricMode,
    NormalizedRecord,
    PoolMode,
)
from chartrace.timeline import reconstruct_timeline

logger = logging.getLogger(__name__)


class FrameBuildResult:
    """Summary of one frame generation run."""

    def __init__(self, settings: FrameSettings) -> None:
        self.settings = settings
        self.start_year: int | None = None
        self.start_year_clamped = False
        self.records_used = 0
        self.entities = 0
        self.frames_emitted = 0
        self.gap_frames = 0
        self.year_resets = 0

    def __repr__(self) -> str:
        clamped = " (clamped)" if self.start_year_clamped else ""
        return (
            f"FrameBuildResult({self.frames_emitted} frames, {self.gap_frames} gap-filled, "
            f"{self.year_resets} year resets, {self.records_used} records, "
            f"{self.entities} entities, metric={self.settings.metric_mode.value}, "
            f"pool={self.settings.pool_mode.value}, start_year={self.start_year}{clamped})"
        )


class FrameSequence(Sequence):
    """Read-only, replayable timeline of frames. Supports random seek."""

    def __init__(
        self,
        frames: Sequence[Frame] = (),
        result: FrameBuildResult | None = None,
    ) -> None:
        self._frames: tuple[Frame, ...] = tuple(frames)
        self._weeks: list[date] = [f.week for f in self._frames]
        self.result = result

    def __getitem__(self, index):
        if isinstance(index, slice):
            return list(self._frames[index])
        return self._frames[index]

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    @property
    def is_empty(self) -> bool:
        return not self._frames

    @property
    def weeks(self) -> list[date]:
        return list(self._weeks)

    def seek(self, week: date) -> Frame | None:
        """Frame for the given week, or the latest one before it."""
        i = bisect.bisect_right(self._weeks, week) - 1
        if i < 0:
            return None
        return self._frames[i]


class YearState:
    """Year-scoped running counters for a single run."""

    def __init__(self) -> None:
        self.year: int | None = None
        self.ytd: Counter[str] = Counter()
        self.last_rank: dict[str, int] = {}

    def advance(self, week: date) -> bool:
        """Move to a timeline week. Returns True if the counters were reset."""
        if week.year == self.year:
            return False
        self.year = week.year
        self.ytd.clear()
        self.last_rank.clear()
        return True

    def observe(self, record: NormalizedRecord) -> None:
        self.last_rank[record.entity_id] = record.rank
        self.ytd[record.entity_id] += 1


def resolve_start_year(
    start_year: int | None,
    first_year: int,
    last_year: int,
) -> tuple[int | None, bool]:
    """Clamp a requested start year to the observed span.

    Returns (year, clamped). None means no start boundary.
    """
    if start_year is None:
        return None, False
    if start_year < first_year:
        return first_year, True
    if start_year > last_year:
        return last_year, True
    return start_year, False


def _sort_key(candidate: tuple) -> tuple:
    entity_id, value, tiebreak = candidate[0], candidate[1], candidate[2]
    # Unknown rank sorts after every known one; id makes the order total
    return (-value, tiebreak is None, tiebreak or 0, entity_id)


def generate_frames(
    records: list[NormalizedRecord],
    settings: FrameSettings | None = None,
) -> FrameSequence:
    """Build the frame sequence for one configuration.

    Aggregates are computed over every dated record. The timeline and the
    year-to-date counters only cover records on or after January 1 of the
    effective start year (all records when no start year is set).
    """
    settings = settings or FrameSettings()
    result = FrameBuildResult(settings)

    dated = [r for r in records if r.week is not None]
    if not dated:
        logger.info("No dated records; nothing to animate")
        return FrameSequence((), result)

    years = sorted({r.week.year for r in dated})
    start_year, clamped = resolve_start_year(settings.start_year, years[0], years[-1])
    if clamped:
        logger.warning(
            "Start year %s outside observed span %d-%d; using %d",
            settings.start_year, years[0], years[-1], start_year,
        )
    result.start_year = start_year
    result.start_year_clamped = clamped

    boundary = date(start_year, 1, 1) if start_year is not None else None
    aggregates = compute_aggregates(dated, boundary, settings.carry_in_weeks)

    by_week: dict[date, list[NormalizedRecord]] = defaultdict(list)
    for r in dated:
        if boundary is None or r.week >= boundary:
            by_week[r.week].append(r)
            result.records_used += 1

    display: dict[str, tuple[str, str]] = {}
    for r in dated:
        display.setdefault(r.entity_id, (r.title, r.artist))
    all_ids = sorted(display)
    result.entities = len(all_ids)

    timeline = reconstruct_timeline(by_week.keys())
    state = YearState()
    frames: list[Frame] = []

    for index, week in enumerate(timeline):
        if state.advance(week) and index > 0:
            result.year_resets += 1

        observed: dict[str, int] = {}
        week_records = by_week.get(week, [])
        if not week_records:
            result.gap_frames += 1
        for r in week_records:
            state.observe(r)
            observed[r.entity_id] = r.rank

        frames.append(_build_frame(
            index, week, state, observed, aggregates, all_ids, display, settings,
        ))

    result.frames_emitted = len(frames)
    logger.info("Frame generation complete: %s", result)
    return FrameSequence(frames, result)


def _candidate_pool(
    state: YearState,
    aggregates: EntityAggregates,
    all_ids: list[str],
    pool_mode: PoolMode,
) -> list[str]:
    if pool_mode == PoolMode.FULL_HISTORY:
        return all_ids
    ids = {eid for eid, n in state.ytd.items() if n > 0}
    ids.update(aggregates.carry_in)
    return sorted(ids)


def _build_frame(
    index: int,
    week: date,
    state: YearState,
    observed: dict[str, int],
    aggregates: EntityAggregates,
    all_ids: list[str],
    display: dict[str, tuple[str, str]],
    settings: FrameSettings,
) -> Frame:
    candidates = []
    for eid in _candidate_pool(state, aggregates, all_ids, settings.pool_mode):
        ytd = state.ytd.get(eid, 0)
        window = aggregates.carry_in.get(eid, 0) + ytd
        lifetime = aggregates.lifetime.get(eid, window)
        if settings.metric_mode == MetricMode.WINDOW:
            value = window
        elif settings.metric_mode == MetricMode.LIFETIME:
            value = lifetime
        else:
            value = ytd
        # this week's rank when observed, else last-known rank this year
        tiebreak = observed.get(eid, state.last_rank.get(eid))
        candidates.append((eid, value, tiebreak, ytd, window, lifetime))

    top = heapq.nsmallest(settings.top_n, candidates, key=_sort_key)

    entries = []
    for eid, value, tiebreak, ytd, window, lifetime in top:
        title, artist = display[eid]
        entries.append(FrameEntry(
            entity_id=eid,
            title=title,
            artist=artist,
            value=value,
            tiebreak_rank=tiebreak,
            rank=observed.get(eid),
            ytd=ytd,
            window=window,
            lifetime=lifetime,
        ))
    return Frame(index=index, week=week, entries=entries)
