from __future__ import annotations

import json
from pathlib import Path
import textwrap

import pytest

from commit_worklog import cli
from commit_worklog.config import WorklogSettings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "get_settings", lambda: WorklogSettings(timezone=None))
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


def write_dump(path: Path) -> Path:
    path.write_text(
        textwrap.dedent(
            """
            "2024-01-01":
              - sha: aaaaaaaa1
                date: "2024-01-01T08:30:00Z"
                branch: feature/DMO-12-x
              - sha: bbbbbbbb2
                date: "2024-01-01T09:15:00Z"
                branch: feature/DMO-12-x
            "2024-01-02":
              - sha: cccccccc3
                date: "2024-01-02T10:00:00Z"
                branch: hotfix-999
                pullRequest:
                  number: 5
                  title: Fixes DMO-77 bug
                  branchDeleted: true
                  url: https://example.test/pr/5
              - sha: dddddddd4
                date: "2024-01-02T11:30:00Z"
                branch: chore/cleanup
            """
        ).strip(),
        encoding="utf-8",
    )
    return path


def test_sessions_command_prints_sessions(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dump = write_dump(tmp_path / "commits.yaml")

    cli.main(["sessions", str(dump), "--date", "2024-01-01"])

    payload = json.loads(capsys.readouterr().out)
    assert len(payload) == 1
    assert payload[0]["taskId"] == "DMO-12"
    assert payload[0]["durationMinutes"] == 45
    assert payload[0]["startsBeforeWorkHours"] is True
    assert payload[0]["commits"] == ["aaaaaaa", "bbbbbbb"]


def test_entries_command_runs_range(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dump = write_dump(tmp_path / "commits.yaml")

    cli.main(["entries", str(dump), "--start", "2024-01-01", "--end", "2024-01-02"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["processed"] == 2
    assert payload["summary"]["added"] == 2
    assert payload["entries"][0] == {
        "date": "2024-01-01",
        "taskId": "DMO-12",
        "duration": 0.75,
        "description": "DMO-12: Work on feature/DMO-12-x",
    }
    second = payload["entries"][1]
    assert second["taskId"] == "DMO-77"
    assert second["description"] == "DMO-77: Fixes DMO-77 bug"
    assert second["duration"] == 1.0


def test_entries_command_week(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dump = write_dump(tmp_path / "commits.yaml")

    cli.main(["entries", str(dump), "--start", "2024-01-01", "--week"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["processed"] == 7
    assert payload["summary"]["total_hours"] == 1.75


def test_overrides_apply_to_run(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dump = write_dump(tmp_path / "commits.yaml")

    cli.main(["entries", str(dump), "--start", "2024-01-02", "--pattern", r"NOPE-\d+"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["entries"] == []
    assert payload["summary"]["processed"] == 1


def test_missing_file_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        cli.main(["sessions", str(tmp_path / "missing.yaml"), "--date", "2024-01-01"])

    assert "Cannot load commits" in capsys.readouterr().out


def test_check_pattern(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["check-pattern", r"(DMO|DFO)-\d+"])
    assert "Pattern OK" in capsys.readouterr().out

    with pytest.raises(SystemExit):
        cli.main(["check-pattern", "DMO-("])
    assert "Invalid regex pattern" in capsys.readouterr().out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main([])

    assert "usage" in capsys.readouterr().out.lower()
