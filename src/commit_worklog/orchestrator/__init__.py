"""Date-range orchestration utilities."""

from .runner import (
    FetchCommits,
    RangeOrchestrator,
    RangeResult,
    StaticCommitSource,
    iter_dates,
    week_dates,
)

__all__ = [
    "FetchCommits",
    "RangeOrchestrator",
    "RangeResult",
    "StaticCommitSource",
    "iter_dates",
    "week_dates",
]
