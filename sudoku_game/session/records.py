"""High-score records persisted per difficulty in a JSON file."""

from __future__ import annotations
import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from ..generator import Difficulty

KEY_PREFIX = "sudokuRecords_"
MAX_RECORDS = 10


@dataclass
class ScoreRecord:
    """A finished game."""
    difficulty: str
    score: int
    date: str
    time_spent: int
    name: Optional[str] = None

    @classmethod
    def create(
        cls,
        difficulty: Union[str, Difficulty],
        score: int,
        time_spent: int,
        name: Optional[str] = None,
    ) -> ScoreRecord:
        """Record stamped with the current UTC time."""
        return cls(
            difficulty=Difficulty.parse(difficulty).value,
            score=score,
            date=datetime.now(timezone.utc).isoformat(),
            time_spent=time_spent,
            name=name,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "difficulty": self.difficulty,
            "score": self.score,
            "date": self.date,
            "time_spent": self.time_spent,
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ScoreRecord:
        return cls(
            difficulty=data["difficulty"],
            score=int(data["score"]),
            date=data.get("date", ""),
            time_spent=int(data.get("time_spent", 0)),
            name=data.get("name"),
        )


class RecordStore:
    """
    Best scores per difficulty, kept sorted descending and truncated.

    Each difficulty is stored under its own key so that one corrupt list
    does not take the others with it.
    """

    def __init__(self, path: str, max_records: int = MAX_RECORDS):
        """
        Args:
            path: JSON file holding the records. Created on first save.
            max_records: How many records to keep per difficulty.
        """
        self.path = path
        self.max_records = max_records

    @staticmethod
    def key_for(difficulty: Union[str, Difficulty]) -> str:
        return f"{KEY_PREFIX}{Difficulty.parse(difficulty).value}"

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Warning: Could not load records from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            print(f"Warning: Ignoring malformed records file {self.path}")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_scores(self, difficulty: Union[str, Difficulty]) -> List[ScoreRecord]:
        """Records for one difficulty, best first."""
        key = self.key_for(difficulty)
        raw = self._read().get(key, [])
        if not isinstance(raw, list):
            print(f"Warning: Ignoring malformed records under {key} in {self.path}")
            raw = []
        records = []
        for item in raw:
            try:
                records.append(ScoreRecord.from_dict(item))
            except (KeyError, TypeError, ValueError):
                continue
        records.sort(key=lambda r: r.score, reverse=True)
        return records

    def add_record(self, record: ScoreRecord) -> List[ScoreRecord]:
        """
        Insert a record and persist the top scores for its difficulty.

        Returns:
            The stored list after sorting and truncation.
        """
        records = self.get_scores(record.difficulty)
        records.append(record)
        records.sort(key=lambda r: r.score, reverse=True)
        del records[self.max_records:]

        data = self._read()
        data[self.key_for(record.difficulty)] = [r.to_dict() for r in records]
        self._write(data)
        return records

    def load_all(self) -> List[ScoreRecord]:
        """All stored records, grouped by difficulty in tier order."""
        return [r for difficulty in Difficulty for r in self.get_scores(difficulty)]

    def best_score(self, difficulty: Union[str, Difficulty]) -> Optional[int]:
        records = self.get_scores(difficulty)
        return records[0].score if records else None

    def clear(self, difficulty: Optional[Union[str, Difficulty]] = None) -> None:
        """Remove the records of one difficulty, or all of them."""
        if difficulty is None:
            self._write({})
            return
        data = self._read()
        data.pop(self.key_for(difficulty), None)
        self._write(data)
