"""Write frame sequences and leaderboards as JSON for the renderer."""

import json
import logging
from pathlib import Path
from typing import Any

from chartrace.config import FrameSettings
from chartrace.frames import FrameSequence
from chartrace.models import ArtistWeeks

logger = logging.getLogger(__name__)


def frames_to_dict(sequence: FrameSequence, settings: FrameSettings) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "settings": settings.model_dump(mode="json"),
        "frames": [f.model_dump(mode="json") for f in sequence],
    }
    if sequence.result is not None:
        payload["start_year"] = sequence.result.start_year
    return payload


def write_frames_json(
    sequence: FrameSequence,
    settings: FrameSettings,
    output_path: Path,
) -> Path:
    """Serialize frames to output_path, creating parent dirs."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(frames_to_dict(sequence, settings), indent=2, sort_keys=True)
    )
    logger.info("Wrote %d frames to %s", len(sequence), output_path)
    return output_path


def write_leaderboard_json(board: list[ArtistWeeks], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps([a.model_dump() for a in board], indent=2, sort_keys=True)
    )
    logger.info("Wrote %d leaderboard rows to %s", len(board), output_path)
    return output_path
