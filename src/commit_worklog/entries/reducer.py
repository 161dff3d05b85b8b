"""Reduce work sessions to billable log entries."""

from __future__ import annotations

import math
from datetime import date
from typing import Iterable

from ..sessions import WorkSession
from .models import LogEntry

QUARTER_HOUR_MINUTES = 15


def round_up_to_quarter_hour(minutes: int | float) -> float:
    """Convert minutes to hours, rounded up to the next quarter hour."""

    if minutes <= 0:
        return 0.0
    return math.ceil(minutes / QUARTER_HOUR_MINUTES) * 0.25


def describe_task(task_id: str, sessions: list[WorkSession]) -> str:
    pr_session = next((session for session in sessions if session.pr_title), None)
    if pr_session is not None:
        return f"{task_id}: {pr_session.pr_title}"

    branches = list(dict.fromkeys(session.branch for session in sessions))
    if len(branches) == 1:
        return f"{task_id}: Work on {branches[0]}"
    return f"{task_id}: Work on {len(branches)} branches"


def reduce_sessions(sessions: Iterable[WorkSession], day: date | str) -> list[LogEntry]:
    """Merge sessions sharing a task id into one entry per task.

    Sessions without a task id are not billable and are dropped. Entries come
    out in the order their task id was first seen.
    """

    day_iso = day.isoformat() if isinstance(day, date) else str(day)

    groups: dict[str, list[WorkSession]] = {}
    for session in sessions:
        if session.task_id is None:
            continue
        groups.setdefault(session.task_id, []).append(session)

    entries: list[LogEntry] = []
    for task_id, task_sessions in groups.items():
        total_minutes = sum(session.duration_minutes for session in task_sessions)
        entries.append(
            LogEntry(
                date=day_iso,
                task_id=task_id,
                duration=round_up_to_quarter_hour(total_minutes),
                description=describe_task(task_id, task_sessions),
            )
        )
    return entries


__all__ = ["QUARTER_HOUR_MINUTES", "describe_task", "reduce_sessions", "round_up_to_quarter_hour"]
