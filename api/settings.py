"""Environment-driven settings for the HTTP API."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field

ENV_PREFIX = "CHESSRULES_"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class ApiSettings(BaseModel):
    max_sessions: int = Field(default=256, ge=1, le=100_000)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: LogLevel = Field(default="INFO")


def load_settings(environ: dict[str, str] | None = None) -> ApiSettings:
    """Build settings from ``CHESSRULES_*`` variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    max_sessions = env.get(f"{ENV_PREFIX}MAX_SESSIONS")
    if max_sessions:
        values["max_sessions"] = max_sessions

    origins = env.get(f"{ENV_PREFIX}CORS_ORIGINS")
    if origins:
        values["cors_origins"] = [origin.strip() for origin in origins.split(",") if origin.strip()]

    log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level.upper()

    return ApiSettings(**values)
