"""Persistent reading position for the Catechism CLI.

Tracks the paragraph the reader last looked at.
Stored in `~/.catechism/position.json`.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from catechism.config import settings


@dataclass
class ReadingPosition:
    paragraph: int | None = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: str) -> ReadingPosition:
        try:
            raw = json.loads(data)
            position = cls(**raw)
        except (json.JSONDecodeError, TypeError):
            return cls()
        if not isinstance(position.paragraph, int) or isinstance(position.paragraph, bool):
            return cls()
        return position


def _get_position_path() -> Path:
    """Return the path to the position JSON file."""
    return settings.position_path


def load_position() -> ReadingPosition:
    """Load the reading position from disk. Returns an empty one if missing/corrupt."""
    path = _get_position_path()
    if not path.exists():
        return ReadingPosition()

    try:
        return ReadingPosition.from_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        return ReadingPosition()


def save_position(position: ReadingPosition) -> None:
    """Save the reading position to disk."""
    path = _get_position_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(position.to_json(), encoding="utf-8")
