"""Task identifier extraction from branch names and pull-request titles."""

from __future__ import annotations

import logging
import re

from .models import TaskIdMatch

logger = logging.getLogger(__name__)

NO_MATCH = TaskIdMatch(task_id=None, source=None)


def extract_task_id(branch_name: str, pr_title: str | None, pattern: str) -> TaskIdMatch:
    """Search the branch name, then the PR title, for ``pattern``.

    The full matched text is returned, not a capture group. A pattern that
    fails to compile is logged and treated as matching nothing.
    """

    try:
        compiled = re.compile(pattern)
    except (re.error, TypeError) as exc:
        logger.warning(
            "Invalid task id pattern, attribution disabled",
            extra={"pattern": pattern, "error": str(exc)},
        )
        return NO_MATCH

    branch_match = compiled.search(branch_name)
    if branch_match:
        return TaskIdMatch(task_id=branch_match.group(0), source="branch")

    if pr_title is not None:
        title_match = compiled.search(pr_title)
        if title_match:
            return TaskIdMatch(task_id=title_match.group(0), source="pr")

    return NO_MATCH


def validate_task_id_pattern(pattern: str) -> str | None:
    """Return a human-readable problem with ``pattern``, or None when usable."""

    if not pattern.strip():
        return "Regex pattern cannot be empty"
    try:
        re.compile(pattern)
    except re.error:
        return "Invalid regex pattern"
    return None


__all__ = ["NO_MATCH", "extract_task_id", "validate_task_id_pattern"]
