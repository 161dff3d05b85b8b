"""Data models for derived work sessions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from ..commits import Commit

TaskIdSource = Literal["branch", "pr"]


@dataclass(slots=True, frozen=True)
class TaskIdMatch:
    task_id: str | None
    source: TaskIdSource | None

    @property
    def found(self) -> bool:
        return self.task_id is not None


@dataclass(slots=True, frozen=True)
class WorkSession:
    """A contiguous block of time attributed to one branch run."""

    task_id: str | None
    task_id_source: TaskIdSource | None
    branch: str
    pr_title: str | None
    pr_number: int | None
    start_time: datetime
    end_time: datetime
    commits: tuple[Commit, ...]
    duration_minutes: int
    starts_before_work_hours: bool
    ends_after_work_hours: bool

    def to_payload(self) -> dict[str, Any]:
        return {
            "taskId": self.task_id,
            "taskIdSource": self.task_id_source,
            "branch": self.branch,
            "prTitle": self.pr_title,
            "prNumber": self.pr_number,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "commits": [commit.short_sha for commit in self.commits],
            "durationMinutes": self.duration_minutes,
            "startsBeforeWorkHours": self.starts_before_work_hours,
            "endsAfterWorkHours": self.ends_after_work_hours,
        }


__all__ = ["TaskIdMatch", "TaskIdSource", "WorkSession"]
