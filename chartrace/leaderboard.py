"""Artist leaderboard by cumulative chart residency (total weeks on chart)."""

import logging
from collections import Counter
from collections.abc import Iterable

from chartrace.models import ArtistWeeks, NormalizedRecord
from chartrace.normalize import normalize_artist

logger = logging.getLogger(__name__)


def artist_leaderboard(
    records: Iterable[NormalizedRecord],
    limit: int = 50,
) -> list[ArtistWeeks]:
    """Rank artists by how many chart entries they have accumulated.

    Credits are grouped by their normalized form; the first display
    spelling seen is kept for presentation.
    """
    weeks: Counter[str] = Counter()
    display: dict[str, str] = {}
    for r in records:
        if r.week is None:
            continue
        key = normalize_artist(r.artist)
        if not key:
            continue
        weeks[key] += 1
        display.setdefault(key, r.artist.strip())

    ranked = sorted(
        (k for k, n in weeks.items() if n > 0),
        key=lambda k: (-weeks[k], k),
    )[:limit]

    board = [ArtistWeeks(artist_key=k, artist=display[k], weeks=weeks[k]) for k in ranked]
    logger.info("Leaderboard: %d of %d artists", len(board), len(weeks))
    return board


def concentration(board: list[ArtistWeeks], top: int = 10) -> float:
    """Share of the board's total weeks held by its first `top` artists."""
    total = sum(a.weeks for a in board)
    if total == 0:
        return 0.0
    return sum(a.weeks for a in board[:top]) / total
