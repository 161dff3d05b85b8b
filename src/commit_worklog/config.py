"""Configuration management for commit-worklog."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DAY_START_TIME = "09:00"
DEFAULT_DAY_END_TIME = "17:00"
DEFAULT_TASK_ID_REGEX = r"DMO-\d+"

_CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class WorklogSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    day_start_time: str = Field(
        default=DEFAULT_DAY_START_TIME,
        validation_alias=AliasChoices("WORKLOG_DAY_START_TIME", "dayStartTime"),
    )
    day_end_time: str = Field(
        default=DEFAULT_DAY_END_TIME,
        validation_alias=AliasChoices("WORKLOG_DAY_END_TIME", "dayEndTime"),
    )
    task_id_regex: str = Field(
        default=DEFAULT_TASK_ID_REGEX,
        validation_alias=AliasChoices("WORKLOG_TASK_ID_REGEX", "taskIdRegex"),
    )
    timezone: str | None = Field(default=None, validation_alias="WORKLOG_TIMEZONE")
    log_level: str = Field(default="INFO", validation_alias="WORKLOG_LOG_LEVEL")

    @field_validator("day_start_time", "day_end_time")
    @classmethod
    def _validate_clock(cls, value: str) -> str:
        normalized = value.strip()
        if not _CLOCK_PATTERN.match(normalized):
            raise ValueError("Working day boundaries must use 24-hour HH:MM format")
        return normalized

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            ZoneInfo(value.strip())
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "WORKLOG_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @property
    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "WorklogSettings":
        """Build settings from a string-keyed settings store.

        Missing or blank values fall back to the defaults, the same way the
        settings screen does.
        """

        cleaned = {key: value for key, value in values.items() if value not in (None, "")}
        return cls(**cleaned)


@lru_cache(maxsize=1)
def get_settings() -> WorklogSettings:
    """Return cached settings instance."""

    return WorklogSettings()


__all__ = [
    "DEFAULT_DAY_END_TIME",
    "DEFAULT_DAY_START_TIME",
    "DEFAULT_TASK_ID_REGEX",
    "WorklogSettings",
    "get_settings",
]
