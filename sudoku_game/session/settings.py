"""Tunable game settings."""

from __future__ import annotations
import json
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional


@dataclass
class GameSettings:
    """Scoring and hint configuration for a game session."""
    max_hints: int = 3
    base_score: int = 1000
    hint_penalty: int = 50
    error_penalty: int = 0
    history_limit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameSettings:
        """Build settings from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def load(cls, path: str) -> GameSettings:
        """Load settings from a JSON file."""
        with open(path, "r") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
