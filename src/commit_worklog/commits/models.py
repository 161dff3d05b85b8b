"""Commit models as delivered by the source-control collaborator."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_BRANCH = "main"
SHORT_SHA_LENGTH = 7


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Repository(_WireModel):
    """Repository a commit belongs to."""

    name: str
    full_name: str = Field(..., alias="fullName")


class CommitAuthor(_WireModel):
    name: str = ""
    email: str = ""
    date: datetime | None = None


class PullRequest(_WireModel):
    """Pull request associated with a commit's branch."""

    number: int
    title: str
    branch_deleted: bool = Field(default=False, alias="branchDeleted")
    url: str = ""


class Commit(_WireModel):
    """A single commit with branch and pull-request metadata."""

    sha: str = Field(..., description="Full commit hash.")
    short_sha: str = Field(default="", alias="shortSha")
    message: str = ""
    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices("date", "timestamp"),
        description="Author date of the commit as an absolute instant.",
    )
    url: str = ""
    repository: Repository | None = None
    author: CommitAuthor | None = None
    branch: str = Field(default=DEFAULT_BRANCH)
    pull_request: PullRequest | None = Field(default=None, alias="pullRequest")

    @field_validator("sha")
    @classmethod
    def _normalize_sha(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Commit sha must not be empty")
        return normalized

    @field_validator("timestamp")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("branch", mode="before")
    @classmethod
    def _default_branch(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_BRANCH
        return str(value)

    @model_validator(mode="before")
    @classmethod
    def _derive_short_sha(cls, data: Any) -> Any:
        if isinstance(data, dict) and not (data.get("shortSha") or data.get("short_sha")):
            sha = str(data.get("sha") or "").strip()
            data = {**data, "shortSha": sha[:SHORT_SHA_LENGTH]}
        return data

    @property
    def pr_title(self) -> str | None:
        return self.pull_request.title if self.pull_request else None

    def to_payload(self) -> dict[str, Any]:
        """Render the commit in the collaborator's camelCase shape."""

        payload = self.model_dump(by_alias=True, mode="json", exclude={"timestamp"})
        payload["date"] = self.timestamp.isoformat()
        return payload


__all__ = ["Commit", "CommitAuthor", "DEFAULT_BRANCH", "PullRequest", "Repository"]
