"""
High-score table kept outside the engine.

Entries are stored as a JSON list of {name, score, timestamp}. Anything
missing or malformed on disk reads back as an empty table.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional


DEFAULT_NAME = "Anonymous"


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    timestamp: str

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["ScoreEntry"]:
        if not isinstance(raw, dict):
            return None
        name, score, timestamp = raw.get("name"), raw.get("score"), raw.get("timestamp")
        if not isinstance(name, str) or not isinstance(timestamp, str):
            return None
        if isinstance(score, bool) or not isinstance(score, int):
            return None
        return cls(name=name, score=score, timestamp=timestamp)


class Leaderboard:
    def __init__(self, path: str, retention: int = 100) -> None:
        self.path = path
        self.retention = retention
        self.entries: List[ScoreEntry] = self.load()

    def load(self) -> List[ScoreEntry]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError):
            return []
        if not isinstance(raw, list):
            return []
        entries = [e for e in (ScoreEntry.from_dict(item) for item in raw) if e is not None]
        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[: self.retention]

    def save(self, entries: Optional[List[ScoreEntry]] = None) -> None:
        if entries is None:
            entries = self.entries
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump([asdict(e) for e in entries], fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def record(self, name: str, score: int) -> ScoreEntry:
        entry = ScoreEntry(
            name=name.strip() or DEFAULT_NAME,
            score=int(score),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        # Stable sort keeps earlier entries ahead on ties
        entries = sorted(self.entries + [entry], key=lambda e: e.score, reverse=True)
        entries = entries[: self.retention]
        self.save(entries)
        self.entries = entries
        return entry

    def top(self, n: int = 10) -> List[ScoreEntry]:
        return list(self.entries[:n])
