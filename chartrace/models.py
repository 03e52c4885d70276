"""Pydantic models for chartrace."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MetricMode(str, Enum):
    YTD = "ytd"
    WINDOW = "window"
    LIFETIME = "lifetime"


class PoolMode(str, Enum):
    CURRENT_YEAR = "current_year"
    FULL_HISTORY = "full_history"


# --- Input models (what comes out of a row source) ---


class RawRow(BaseModel):
    """One chart observation exactly as read from the source, all text."""
    model_config = ConfigDict(frozen=True)

    week: str
    rank: str
    title: str
    artist: str
    last_week: str | None = None
    peak_rank: str | None = None
    weeks_on_chart: str | None = None


class NormalizedRecord(BaseModel):
    """A RawRow after validation and identity normalization."""
    model_config = ConfigDict(frozen=True)

    week: date | None  # None when the week-stamp could not be parsed
    rank: int
    entity_id: str
    title: str
    artist: str  # unnormalized credit string, for display
    points: int
    last_week: int | None = None
    peak_rank: int | None = None
    weeks_on_chart: int | None = None


# --- Derived models ---


class EntityAggregates(BaseModel):
    """Per-entity totals over the whole history for one (boundary, window) pair."""
    boundary: date | None = None
    window_weeks: int | None = None
    carry_in: dict[str, int] = Field(default_factory=dict)
    lifetime: dict[str, int] = Field(default_factory=dict)

    def matches(self, boundary: date | None, window_weeks: int | None) -> bool:
        return self.boundary == boundary and self.window_weeks == window_weeks


# --- Output models (what goes to the renderer) ---


class FrameEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entity_id: str
    title: str
    artist: str
    value: int
    tiebreak_rank: int | None = None  # None sorts after every known rank
    rank: int | None = None  # observed rank this week, None if absent
    ytd: int
    window: int
    lifetime: int


class Frame(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int
    week: date
    entries: list[FrameEntry]


class ArtistWeeks(BaseModel):
    """Cumulative chart residency for one artist."""
    artist_key: str
    artist: str
    weeks: int
