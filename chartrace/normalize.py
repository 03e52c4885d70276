"""Row normalizer: validate raw chart rows and canonicalize entity identity.

Credit strings on weekly charts drift between weeks ("A feat. B", "A Ft B",
"A (featuring B)", "A x B"). Lifetime and carry-in counts are keyed by
canonical id, so every spelling of one credit must collapse to the same key.
"""

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime

from chartrace.models import NormalizedRecord, RawRow

logger = logging.getLogger(__name__)

CONNECTOR = "feat"
ID_SEPARATOR = "|"

_TOKEN = r"(?:feat\.?|ft\.?|featuring|with|x)"
# A clause whose first word is a connector, e.g. "(ft. B)" or "(with B)"
_PAREN_FEATURE = re.compile(r"\(\s*" + _TOKEN + r"(?![^\s)])[^)]*\)")
_CONNECTOR_TOKEN = re.compile(r"(?<!\S)" + _TOKEN + r"(?![^\s)])")
_AMPERSAND = re.compile(r"\s*&\s*")
_WHITESPACE = re.compile(r"\s+")

_DATE_FORMATS = ("%m/%d/%Y", "%Y/%m/%d", "%m/%d/%y")


def normalize_artist(text: str) -> str:
    """Reduce a credit string to its comparison form. Idempotent.

    Commas and ampersands are respaced first, so every connector is a
    whitespace-delimited token before clauses and tokens are rewritten.
    """
    s = text.lower().replace("×", " x ").replace(",", " ")
    s = _AMPERSAND.sub(" & ", s)
    s = _PAREN_FEATURE.sub(" ", s)
    s = _CONNECTOR_TOKEN.sub(CONNECTOR, s)
    return _WHITESPACE.sub(" ", s).strip()


def normalize_title(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip().casefold()


def canonical_id(title: str, artist: str) -> str:
    return f"{normalize_title(title)}{ID_SEPARATOR}{normalize_artist(artist)}"


def parse_week(text: str | None) -> date | None:
    """Parse a week-stamp. Returns None if it is not a recognizable date."""
    if not text:
        return None
    text = text.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_int(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def normalize_rows(rows: Iterable[RawRow], chart_size: int = 100) -> list[NormalizedRecord]:
    """Validate raw rows and attach canonical ids.

    Rows whose rank is not a positive integer are dropped: chart dumps carry
    footer and note rows, so this is not an error. Unparseable week-stamps
    keep the row with week=None; downstream stages skip such records.
    Order is preserved.
    """
    records: list[NormalizedRecord] = []
    dropped = 0
    undated = 0

    for row in rows:
        rank = parse_int(row.rank)
        if rank is None or rank < 1:
            dropped += 1
            logger.debug("Dropping row with rank %r (%s)", row.rank, row.title)
            continue

        week = parse_week(row.week)
        if week is None:
            undated += 1

        records.append(NormalizedRecord(
            week=week,
            rank=rank,
            entity_id=canonical_id(row.title, row.artist),
            title=row.title.strip(),
            artist=row.artist,
            points=max(chart_size + 1 - rank, 0),
            last_week=parse_int(row.last_week),
            peak_rank=parse_int(row.peak_rank),
            weeks_on_chart=parse_int(row.weeks_on_chart),
        ))

    logger.info(
        "Normalized %d rows (%d dropped, %d undated)", len(records), dropped, undated,
    )
    return records
