"""Commit loading utilities."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, tzinfo
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import ValidationError

from .models import Commit


class CommitLoadError(RuntimeError):
    """Raised when a commit dump cannot be parsed."""


def parse_commits(records: Iterable[Any]) -> list[Commit]:
    """Validate raw commit records, collecting every error before failing."""

    commits: list[Commit] = []
    errors: list[str] = []
    for index, record in enumerate(records):
        try:
            commits.append(Commit.model_validate(record))
        except ValidationError as exc:
            errors.append(f"Commit #{index} is invalid: {exc}")
    if errors:
        raise CommitLoadError("; ".join(errors))
    return commits


def group_commits_by_date(
    commits: Iterable[Commit], tz: tzinfo | None = None
) -> dict[str, list[Commit]]:
    """Bucket commits by calendar date, optionally in a given timezone.

    Input order is preserved within each bucket.
    """

    grouped: dict[str, list[Commit]] = defaultdict(list)
    for commit in commits:
        moment = commit.timestamp.astimezone(tz) if tz is not None else commit.timestamp
        grouped[moment.date().isoformat()].append(commit)
    return dict(grouped)


class CommitLoader:
    """Loads commit dumps (YAML or JSON) from disk.

    A document is either a list of commit records or a mapping of
    ``YYYY-MM-DD`` to a list of commit records.
    """

    def __init__(self, path: Path, *, tz: tzinfo | None = None) -> None:
        self._path = Path(path)
        self._tz = tz

    def _read_document(self) -> Any:
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CommitLoadError(f"Cannot read commit file {self._path}: {exc}") from exc
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:  # pragma: no cover - library type
            raise CommitLoadError(f"Failed to parse {self._path}: {exc}") from exc

    def load_by_date(self) -> dict[str, list[Commit]]:
        """Return commits keyed by ISO date."""

        document = self._read_document()
        if document is None:
            return {}

        if isinstance(document, list):
            return group_commits_by_date(parse_commits(document), self._tz)

        if isinstance(document, dict):
            grouped: dict[str, list[Commit]] = {}
            for key, records in document.items():
                day = key.isoformat() if isinstance(key, date) else str(key)
                if records is None:
                    grouped[day] = []
                    continue
                if not isinstance(records, list):
                    raise CommitLoadError(f"Commits for {day} in {self._path} must be a list")
                grouped[day] = parse_commits(records)
            return grouped

        raise CommitLoadError(
            f"{self._path} must contain a list of commits or a mapping of dates to commits"
        )

    def load_all(self) -> list[Commit]:
        """Return every commit in the file, flattened."""

        return [commit for commits in self.load_by_date().values() for commit in commits]


__all__ = ["CommitLoadError", "CommitLoader", "group_commits_by_date", "parse_commits"]
