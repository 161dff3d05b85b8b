"""Work session segmentation."""

from .extractor import extract_task_id, validate_task_id_pattern
from .memo import SessionMemo, session_cache_key
from .models import TaskIdMatch, WorkSession
from .segmenter import segment_commits, split_branch_runs

__all__ = [
    "SessionMemo",
    "TaskIdMatch",
    "WorkSession",
    "extract_task_id",
    "segment_commits",
    "session_cache_key",
    "split_branch_runs",
    "validate_task_id_pattern",
]
