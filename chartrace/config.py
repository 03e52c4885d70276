"""Configuration loading for chartrace."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from chartrace.models import MetricMode, PoolMode


class FrameSettings(BaseModel):
    top_n: int = Field(default=10, ge=1)
    metric_mode: MetricMode = MetricMode.YTD
    pool_mode: PoolMode = PoolMode.CURRENT_YEAR
    start_year: int | None = None
    carry_in_weeks: int = Field(default=0, ge=0)


class SourceConfig(BaseModel):
    path: str | None = None
    chart_size: int = Field(default=100, ge=1)
    # field name -> extra header names accepted for it
    column_aliases: dict[str, list[str]] = Field(default_factory=dict)


class LeaderboardConfig(BaseModel):
    limit: int = Field(default=50, ge=1)


class Config(BaseModel):
    output_dir: str = "output"
    source: SourceConfig = Field(default_factory=SourceConfig)
    frames: FrameSettings = Field(default_factory=FrameSettings)
    leaderboard: LeaderboardConfig = Field(default_factory=LeaderboardConfig)

    @property
    def resolved_output_dir(self) -> Path:
        """Resolve output_dir relative to project root."""
        p = Path(self.output_dir)
        if p.is_absolute():
            return p
        return _project_root() / p


def _project_root() -> Path:
    """Return the chartrace project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
