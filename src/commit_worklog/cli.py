"""commit-worklog command line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from . import __version__
from .commits import CommitLoadError, CommitLoader
from .config import WorklogSettings, get_settings
from .entries import LogEntry
from .orchestrator import RangeOrchestrator, StaticCommitSource, iter_dates, week_dates
from .sessions import segment_commits, validate_task_id_pattern

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the CLI."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def _apply_overrides(settings: WorklogSettings, args: argparse.Namespace) -> WorklogSettings:
    overrides = {
        "day_start_time": getattr(args, "day_start", None),
        "day_end_time": getattr(args, "day_end", None),
        "task_id_regex": getattr(args, "pattern", None),
        "timezone": getattr(args, "timezone", None),
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return settings
    return WorklogSettings.model_validate({**settings.model_dump(), **overrides})


def _warn_on_pattern(settings: WorklogSettings) -> None:
    problem = validate_task_id_pattern(settings.task_id_regex)
    if problem:
        logger.warning(
            "%s: %r; sessions will not be attributed to tasks",
            problem,
            settings.task_id_regex,
        )


def load_commits(path: Path, settings: WorklogSettings) -> dict[str, list]:
    try:
        return CommitLoader(path, tz=settings.tzinfo).load_by_date()
    except CommitLoadError as exc:
        print(f"Cannot load commits: {exc}")
        raise SystemExit(1)


def cmd_sessions(args: argparse.Namespace) -> None:
    settings = _apply_overrides(get_settings(), args)
    _warn_on_pattern(settings)
    commits_by_date = load_commits(Path(args.file), settings)
    sessions = segment_commits(
        commits_by_date.get(args.date, []),
        args.date,
        settings.day_start_time,
        settings.day_end_time,
        settings.task_id_regex,
        tz=settings.tzinfo,
    )
    print(json.dumps([session.to_payload() for session in sessions], indent=2))


def cmd_entries(args: argparse.Namespace) -> None:
    settings = _apply_overrides(get_settings(), args)
    _warn_on_pattern(settings)
    commits_by_date = load_commits(Path(args.file), settings)

    if args.week:
        dates = week_dates(args.start)
    else:
        dates = list(iter_dates(args.start, args.end or args.start))

    entries: list[LogEntry] = []
    orchestrator = RangeOrchestrator(StaticCommitSource(commits_by_date), settings)
    result = orchestrator.run_sync(dates, entries.append)

    payload = {
        "entries": [entry.to_payload() for entry in entries],
        "summary": {
            **result.as_dict(),
            "total_hours": sum(entry.duration for entry in entries),
        },
    }
    print(json.dumps(payload, indent=2))


def cmd_check_pattern(args: argparse.Namespace) -> None:
    pattern = args.pattern if args.pattern is not None else get_settings().task_id_regex
    problem = validate_task_id_pattern(pattern)
    if problem:
        print(f"{problem}: {pattern}")
        raise SystemExit(1)
    print(f"Pattern OK: {pattern}")


def _add_setting_overrides(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--day-start", help="Override the working day start (HH:MM)")
    parser.add_argument("--day-end", help="Override the working day end (HH:MM)")
    parser.add_argument("--pattern", help="Override the task id regex")
    parser.add_argument("--timezone", help="IANA timezone for working hours")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn commits into work-log entries")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    p_sessions = sub.add_parser("sessions", help="Show the work sessions for one date")
    p_sessions.add_argument("file", help="YAML or JSON commit dump")
    p_sessions.add_argument("--date", required=True, help="Date to segment (YYYY-MM-DD)")
    _add_setting_overrides(p_sessions)
    p_sessions.set_defaults(func=cmd_sessions)

    p_entries = sub.add_parser("entries", help="Produce log entries for a date range")
    p_entries.add_argument("file", help="YAML or JSON commit dump")
    p_entries.add_argument("--start", required=True, help="First date (YYYY-MM-DD)")
    group = p_entries.add_mutually_exclusive_group()
    group.add_argument("--end", help="Last date, inclusive (YYYY-MM-DD)")
    group.add_argument("--week", action="store_true", help="Process seven days from --start")
    _add_setting_overrides(p_entries)
    p_entries.set_defaults(func=cmd_entries)

    p_check = sub.add_parser("check-pattern", help="Validate a task id regex")
    p_check.add_argument("pattern", nargs="?", help="Pattern to check (defaults to settings)")
    p_check.set_defaults(func=cmd_check_pattern)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the commit-worklog console script."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return
    configure_logging(get_settings().log_level)
    args.func(args)


if __name__ == "__main__":
    main()
