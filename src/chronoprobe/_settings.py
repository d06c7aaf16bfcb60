"""Configuration via pydantic-settings.

Configuration is loaded from environment variables and/or ``.env``
files.  Nested models use ``__`` as the delimiter in env var names,
e.g. ``LOGGING__LEVEL=DEBUG``.  List fields are given as JSON::

    TIMER__PREFERENCE='["perf_counter", "monotonic"]'

The schema covers:

* **Timer**: clock preference order used by :meth:`Timer.from_settings`.
* **Logging**: level, format, optional file sink, rotation.

Timestamps and durations reported by chronoprobe are in **milliseconds**.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings; nested via composition)
# -------------------------------------------------------------------


class TimerSettings(BaseModel):
    """Clock selection configuration.

    Environment variables (with ``__`` nesting)::

        TIMER__PREFERENCE='["perf_counter_ns", "time"]'
    """

    preference: list[str] = Field(
        default_factory=list,
        description=(
            "Clock names in order of preference. "
            "Empty means the registry's declaration order."
        ),
    )

    @field_validator("preference")
    @classmethod
    def _strip_names(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if any(not name for name in names):
            msg = "clock names must be non-empty"
            raise ValueError(msg)
        return names


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    ``format`` selects ``"text"`` (default, human-readable) or
    ``"json"`` (one JSON object per line, including any calibration
    fields attached to the record).
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format: 'json' lines or plain 'text'.",
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description="Maximum log file size in megabytes before rotation.",
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for chronoprobe.

    Loaded from environment variables with the nested delimiter
    ``__`` and an optional ``.env`` file in the working directory.

    Example ``.env``::

        TIMER__PREFERENCE='["monotonic"]'
        LOGGING__LEVEL=DEBUG
        LOGGING__FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    """No ``env_prefix`` is set, so every environment variable is
    visible; ``extra="ignore"`` keeps unrelated ones from failing
    validation.
    """

    timer: TimerSettings = Field(
        default_factory=TimerSettings,
        description="Clock selection settings.",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
