"""Simple configuration management.

This module defines a ``Settings`` class that reads configuration
values from environment variables and provides sensible defaults.
``.env`` support is implemented by loading files from the repository
root in a defined order.  You can override any value via environment
variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv, find_dotenv

from duplicate_detector.models.enums import GroupingMode

# -----------------------------------------------------------------------------
# .env loading
#
# Prefer a .env in the repository root but allow fallback to whatever
# python-dotenv discovers from the current working directory.  As a last
# resort, a .env in the backend directory may be used.  Files are loaded in
# order without overriding already-set variables.

_THIS_FILE = Path(__file__).resolve()
_REPO_ROOT = _THIS_FILE.parents[3]
_ROOT_ENV = _REPO_ROOT / ".env"

_candidate_envs: list[str] = []
if _ROOT_ENV.exists():
    _candidate_envs.append(str(_ROOT_ENV))

_FOUND_ENV = find_dotenv(usecwd=True)
if _FOUND_ENV and _FOUND_ENV not in _candidate_envs:
    _candidate_envs.append(_FOUND_ENV)

_LOCAL_ENV = (_THIS_FILE.parents[2] / ".env").as_posix()
if os.path.exists(_LOCAL_ENV) and _LOCAL_ENV not in _candidate_envs:
    _candidate_envs.append(_LOCAL_ENV)

for _env_path in _candidate_envs:
    load_dotenv(dotenv_path=_env_path, override=False)


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from the environment with sensible defaults.  Any
    attribute defined here can be overridden by setting the corresponding
    environment variable.
    """

    model_config = SettingsConfigDict(
        env_file=tuple(_candidate_envs) if _candidate_envs else (".env",),
        case_sensitive=True,
        extra="allow",
    )

    # Service
    PROJECT_NAME: str = "Duplicate Detector Microservice"
    SERVICE_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5004)
    LOG_LEVEL: str = Field(default="INFO")

    # Detection
    # Batches above this size are rejected before any comparison runs.
    MAX_BATCH_SIZE: int = Field(default=1000)
    # See duplicate_detector.services.duplicate_service for the two modes.
    GROUPING_MODE: GroupingMode = Field(default=GroupingMode.ANCHOR)

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
    )

    # Sentry
    SENTRY_DSN: Optional[str] = Field(default=None)
    SENTRY_TRACES_SAMPLE_RATE: float = Field(default=0.0)
    # Optional Sentry release name to tag events
    SENTRY_RELEASE: Optional[str] = Field(default=None)


# Instantiate global settings
settings = Settings()
