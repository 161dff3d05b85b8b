"""Commit models and loader exports."""

from .loader import CommitLoadError, CommitLoader, group_commits_by_date, parse_commits
from .models import DEFAULT_BRANCH, Commit, CommitAuthor, PullRequest, Repository

__all__ = [
    "Commit",
    "CommitAuthor",
    "CommitLoadError",
    "CommitLoader",
    "DEFAULT_BRANCH",
    "PullRequest",
    "Repository",
    "group_commits_by_date",
    "parse_commits",
]
