"""Caller-owned memoisation of segmentation results."""

from __future__ import annotations

import hashlib
import json
from collections import OrderedDict
from datetime import date, tzinfo
from typing import Sequence

from ..commits import Commit
from .models import WorkSession
from .segmenter import segment_commits


def session_cache_key(
    commits: Sequence[Commit],
    day: date | str,
    day_start: str,
    day_end: str,
    task_id_pattern: str,
    tz: tzinfo | None = None,
) -> str:
    """Content hash of every input that influences segmentation."""

    document = {
        "commits": [commit.to_payload() for commit in commits],
        "date": day.isoformat() if isinstance(day, date) else str(day),
        "day_start": day_start,
        "day_end": day_end,
        "pattern": task_id_pattern,
        "tz": str(tz) if tz is not None else None,
    }
    encoded = json.dumps(document, sort_keys=True).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class SessionMemo:
    """Small LRU of segmentation results keyed by input content."""

    def __init__(self, max_entries: int = 64) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, tuple[WorkSession, ...]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def segment(
        self,
        commits: Sequence[Commit],
        day: date | str,
        day_start: str,
        day_end: str,
        task_id_pattern: str,
        *,
        tz: tzinfo | None = None,
    ) -> list[WorkSession]:
        key = session_cache_key(commits, day, day_start, day_end, task_id_pattern, tz)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            return list(cached)

        self.misses += 1
        sessions = segment_commits(commits, day, day_start, day_end, task_id_pattern, tz=tz)
        self._entries[key] = tuple(sessions)
        if len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        return sessions

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["SessionMemo", "session_cache_key"]
