from __future__ import annotations

import logging

import pytest

from commit_worklog.sessions import extract_task_id, validate_task_id_pattern


def test_branch_match_wins_over_pr_title() -> None:
    match = extract_task_id("feature/DMO-12-login", "DMO-99: unrelated", r"DMO-\d+")

    assert match.task_id == "DMO-12"
    assert match.source == "branch"


def test_falls_back_to_pr_title() -> None:
    match = extract_task_id("hotfix-999", "Fixes DMO-77 bug", r"DMO-\d+")

    assert match.task_id == "DMO-77"
    assert match.source == "pr"


def test_returns_full_match_not_capture_group() -> None:
    match = extract_task_id("feature/DFO-5678-x", None, r"(DMO|DFO)-(\d+)")

    assert match.task_id == "DFO-5678"


def test_no_match_returns_nulls() -> None:
    match = extract_task_id("main", None, r"DMO-\d+")

    assert match.task_id is None
    assert match.source is None
    assert not match.found


@pytest.mark.parametrize("branch,title", [("DMO-1", None), ("x", "DMO-2"), ("[", "(")])
def test_invalid_pattern_never_raises(branch: str, title: str | None) -> None:
    match = extract_task_id(branch, title, r"DMO-(\d+")

    assert match.task_id is None
    assert match.source is None


def test_invalid_pattern_logs_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="commit_worklog.sessions.extractor"):
        extract_task_id("feature/DMO-1", None, "[unclosed")

    assert any("Invalid task id pattern" in record.getMessage() for record in caplog.records)


def test_validate_task_id_pattern() -> None:
    assert validate_task_id_pattern(r"DMO-\d+") is None
    assert validate_task_id_pattern("   ") == "Regex pattern cannot be empty"
    assert validate_task_id_pattern("(") == "Invalid regex pattern"
