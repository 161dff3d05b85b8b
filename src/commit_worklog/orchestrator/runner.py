"""Drive segmentation and reduction across a range of dates."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Awaitable, Callable, Iterable, Iterator, Mapping, Sequence, Union

from ..commits import Commit
from ..config import WorklogSettings
from ..entries import LogEntry, reduce_sessions
from ..sessions import segment_commits

logger = logging.getLogger(__name__)

FetchResult = Union[Sequence[Commit], Awaitable[Sequence[Commit]]]
FetchCommits = Callable[[str], FetchResult]
OnEntry = Callable[[LogEntry], Any]


@dataclass(slots=True)
class RangeResult:
    """Counters reported at the end of a run."""

    processed: int = 0
    added: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"processed": self.processed, "added": self.added}


def _coerce_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def iter_dates(start: date | str, end: date | str) -> Iterator[date]:
    """Yield every calendar date from ``start`` to ``end`` inclusive."""

    current = _coerce_date(start)
    last = _coerce_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def week_dates(start: date | str) -> list[date]:
    """Seven consecutive dates beginning at ``start``."""

    first = _coerce_date(start)
    return [first + timedelta(days=offset) for offset in range(7)]


class RangeOrchestrator:
    """Fetch, segment and reduce one date at a time.

    ``fetch_commits`` receives an ISO date string and may be a plain function
    or a coroutine function. Dates are processed strictly in order.
    """

    def __init__(self, fetch_commits: FetchCommits, settings: WorklogSettings) -> None:
        self._fetch_commits = fetch_commits
        self._settings = settings

    async def _fetch(self, day_iso: str) -> list[Commit]:
        result = self._fetch_commits(day_iso)
        if inspect.isawaitable(result):
            result = await result
        return list(result or [])

    def entries_for(self, commits: Sequence[Commit], day: date | str) -> list[LogEntry]:
        """Segment and reduce a single day's commits."""

        settings = self._settings
        sessions = segment_commits(
            commits,
            day,
            settings.day_start_time,
            settings.day_end_time,
            settings.task_id_regex,
            tz=settings.tzinfo,
        )
        return reduce_sessions(sessions, day)

    async def run(
        self,
        dates: Iterable[date | str],
        on_entry: OnEntry,
        *,
        should_stop: Callable[[], bool] | None = None,
    ) -> RangeResult:
        """Process every date and hand each log entry to ``on_entry``.

        A failed fetch is logged and the date contributes nothing; a failure
        while processing a date is logged and keeps the entries already
        handed over. Either way the run carries on with the next date.
        ``should_stop`` is consulted before each fetch.
        """

        result = RangeResult()
        for day in dates:
            if should_stop is not None and should_stop():
                logger.info("Range run stopped early", extra=result.as_dict())
                break

            day_iso = _coerce_date(day).isoformat()
            try:
                commits = await self._fetch(day_iso)
            except Exception as exc:
                logger.warning(
                    "Failed to fetch commits for %s: %s",
                    day_iso,
                    exc,
                    extra={"date": day_iso},
                )
                continue

            result.processed += 1
            if not commits:
                continue

            try:
                for entry in self.entries_for(commits, day_iso):
                    on_entry(entry)
                    result.added += 1
            except Exception as exc:
                logger.warning(
                    "Failed to process commits for %s: %s",
                    day_iso,
                    exc,
                    extra={"date": day_iso},
                )

        logger.info("Range run finished", extra=result.as_dict())
        return result

    def run_sync(
        self,
        dates: Iterable[date | str],
        on_entry: OnEntry,
        *,
        should_stop: Callable[[], bool] | None = None,
    ) -> RangeResult:
        """Blocking wrapper around :meth:`run` for synchronous callers."""

        return asyncio.run(self.run(dates, on_entry, should_stop=should_stop))

    async def fetch_range(self, dates: Iterable[date | str]) -> dict[str, list[Commit]]:
        """Fetch commits for each date; failed dates map to an empty list."""

        commits_by_date: dict[str, list[Commit]] = {}
        for day in dates:
            day_iso = _coerce_date(day).isoformat()
            try:
                commits_by_date[day_iso] = await self._fetch(day_iso)
            except Exception as exc:
                logger.warning(
                    "Failed to fetch commits for %s: %s",
                    day_iso,
                    exc,
                    extra={"date": day_iso},
                )
                commits_by_date[day_iso] = []
        return commits_by_date


class StaticCommitSource:
    """Serves pre-loaded commits by ISO date, as a stand-in for a live host."""

    def __init__(self, commits_by_date: Mapping[str, Sequence[Commit]]) -> None:
        self._commits_by_date = {key: list(value) for key, value in commits_by_date.items()}
        self._requests: list[str] = []

    def __call__(self, day_iso: str) -> list[Commit]:
        self._requests.append(day_iso)
        return list(self._commits_by_date.get(day_iso, []))

    @property
    def requests(self) -> list[str]:
        return list(self._requests)


__all__ = [
    "FetchCommits",
    "RangeOrchestrator",
    "RangeResult",
    "StaticCommitSource",
    "iter_dates",
    "week_dates",
]
