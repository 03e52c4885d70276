"""Read chart rows from a CSV export (Billboard-style weekly chart dumps)."""

import csv
import logging
from pathlib import Path

from chartrace.models import RawRow
from chartrace.sources.base import BaseRowSource, SourceError

logger = logging.getLogger(__name__)

# RawRow field -> accepted header names, matched case-insensitively
DEFAULT_COLUMNS: dict[str, list[str]] = {
    "week": ["date", "chart_date", "week", "week_id", "chart_week"],
    "rank": ["rank", "position", "week_position", "this_week"],
    "title": ["song", "title", "track", "song_title"],
    "artist": ["artist", "performer", "artists", "credit"],
    "last_week": ["last-week", "last_week", "previous_week", "prev_rank"],
    "peak_rank": ["peak-rank", "peak_rank", "peak_position", "peak"],
    "weeks_on_chart": ["weeks-on-board", "weeks_on_board", "weeks_on_chart", "weeks"],
}

REQUIRED_FIELDS = ("week", "rank", "title", "artist")


def _resolve_columns(
    header: list[str],
    aliases: dict[str, list[str]],
) -> dict[str, str | None]:
    """Map each RawRow field to the actual header name present in the file."""
    by_lower = {h.strip().lower(): h for h in header}
    resolved: dict[str, str | None] = {}
    for field, candidates in aliases.items():
        resolved[field] = None
        for c in candidates:
            if c.lower() in by_lower:
                resolved[field] = by_lower[c.lower()]
                break
    return resolved


class CsvRowSource(BaseRowSource):
    """Read raw chart rows from a CSV file with a header line."""

    def __init__(
        self,
        path: Path,
        column_aliases: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(path)
        self.columns = {k: list(v) for k, v in DEFAULT_COLUMNS.items()}
        # Configured aliases take precedence over the defaults
        for field, extra in (column_aliases or {}).items():
            if field not in self.columns:
                raise SourceError(f"Unknown chart field in column aliases: {field}")
            self.columns[field] = list(extra) + self.columns[field]

    def read(self) -> list[RawRow]:
        try:
            with open(self.path, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f)
                header = reader.fieldnames or []
                mapping = _resolve_columns(header, self.columns)

                missing = [name for name in REQUIRED_FIELDS if mapping[name] is None]
                if missing:
                    raise SourceError(
                        f"{self.source_name}: missing required column(s) {', '.join(missing)}"
                    )

                rows: list[RawRow] = []
                for record in reader:
                    rows.append(_to_raw_row(record, mapping))
        except OSError as e:
            raise SourceError(f"Cannot read {self.path}: {e}") from e

        logger.info("Read %d rows from %s", len(rows), self.source_name)
        return rows


def _to_raw_row(record: dict[str, str | None], mapping: dict[str, str | None]) -> RawRow:
    values: dict[str, str | None] = {}
    for field, column in mapping.items():
        value = record.get(column) if column else None
        if field in REQUIRED_FIELDS:
            values[field] = (value or "").strip()
        else:
            values[field] = value.strip() if value and value.strip() else None
    return RawRow(**values)
