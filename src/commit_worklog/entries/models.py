"""Log entry model handed to the work-tracking collaborator."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogEntry(BaseModel):
    """One billable entry: a task's time on a single date."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = Field(..., description="Calendar date as YYYY-MM-DD.")
    task_id: str = Field(..., alias="taskId", description="Work-tracking task identifier.")
    duration: float = Field(..., ge=0, description="Hours, in quarter-hour steps.")
    description: str = Field(default="", description="Human-readable summary of the work.")

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: str) -> str:
        return date.fromisoformat(value.strip()).isoformat()

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = ["LogEntry"]
