"""Partition a day's commits into contiguous work sessions."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Sequence

from ..commits import Commit
from .extractor import extract_task_id
from .models import TaskIdSource, WorkSession

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BranchRun:
    branch: str
    commits: list[Commit]

    @property
    def last_commit_time(self) -> datetime:
        return self.commits[-1].timestamp

    def first_pull_request_commit(self) -> Commit | None:
        return next((commit for commit in self.commits if commit.pull_request), None)


def parse_clock(value: str) -> time:
    """Parse a 24-hour ``HH:MM`` wall-clock value."""

    hours, _, minutes = value.strip().partition(":")
    try:
        return time(int(hours), int(minutes or 0))
    except ValueError as exc:
        raise ValueError(f"Invalid HH:MM time '{value}'") from exc


def _coerce_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def split_branch_runs(commits: Sequence[Commit]) -> list[BranchRun]:
    """Group time-ordered commits into maximal runs sharing a branch.

    Returning to an earlier branch after a different one opens a new run.
    """

    runs: list[BranchRun] = []
    for commit in commits:
        if runs and runs[-1].branch == commit.branch:
            runs[-1].commits.append(commit)
        else:
            runs.append(BranchRun(branch=commit.branch, commits=[commit]))
    return runs


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, halves rounded up."""

    return int(math.floor((end - start).total_seconds() / 60 + 0.5))


def classify_task_id_source(task_id: str | None, branch: str) -> TaskIdSource | None:
    """Label where a task id appears to come from for display purposes.

    Anything that is a substring of the branch name counts as "branch",
    whichever text the extractor actually matched.
    """

    if task_id is None:
        return None
    return "branch" if task_id in branch else "pr"


def segment_commits(
    commits: Sequence[Commit],
    day: date | str,
    day_start: str,
    day_end: str,
    task_id_pattern: str,
    *,
    tz: tzinfo | None = None,
) -> list[WorkSession]:
    """Reconstruct the work sessions of one calendar day.

    Sessions tile the timeline from the day start to the day end without
    gaps. Commits before the nominal start or after the nominal end stretch
    the first and last session outward instead of being clipped. Trailing
    time up to the nominal end is absorbed by the final session only when
    the day switched branches at least once. When ``tz`` is omitted the
    nominal boundaries are placed in the timezone of the earliest commit.
    """

    if not commits:
        return []

    ordered = sorted(commits, key=lambda commit: commit.timestamp)
    first_time = ordered[0].timestamp
    last_time = ordered[-1].timestamp

    zone = tz if tz is not None else first_time.tzinfo
    calendar_day = _coerce_date(day)
    nominal_start = datetime.combine(calendar_day, parse_clock(day_start), tzinfo=zone)
    nominal_end = datetime.combine(calendar_day, parse_clock(day_end), tzinfo=zone)

    timeline_start = first_time if first_time < nominal_start else nominal_start
    timeline_end = last_time if last_time > nominal_end else nominal_end

    runs = split_branch_runs(ordered)
    # A day spent on a single branch is bounded by its own last commit.
    if len(runs) == 1:
        timeline_end = last_time
    sessions: list[WorkSession] = []
    session_start = timeline_start

    for index, run in enumerate(runs):
        is_last = index == len(runs) - 1
        session_end = timeline_end if is_last else run.last_commit_time

        pr_commit = run.first_pull_request_commit()
        pr_title = pr_commit.pr_title if pr_commit else None
        pr_number = pr_commit.pull_request.number if pr_commit else None
        match = extract_task_id(run.branch, pr_title, task_id_pattern)

        sessions.append(
            WorkSession(
                task_id=match.task_id,
                task_id_source=classify_task_id_source(match.task_id, run.branch),
                branch=run.branch,
                pr_title=pr_title,
                pr_number=pr_number,
                start_time=session_start,
                end_time=session_end,
                commits=tuple(run.commits),
                duration_minutes=elapsed_minutes(session_start, session_end),
                starts_before_work_hours=session_start < nominal_start,
                ends_after_work_hours=session_end > nominal_end,
            )
        )
        session_start = session_end

    logger.debug(
        "Segmented commits into sessions",
        extra={"date": calendar_day.isoformat(), "commits": len(ordered), "sessions": len(sessions)},
    )
    return sessions


__all__ = [
    "BranchRun",
    "classify_task_id_source",
    "elapsed_minutes",
    "parse_clock",
    "segment_commits",
    "split_branch_runs",
]
