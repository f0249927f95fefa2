from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

from pydantic import AnyUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OUT_PATH = Path("dist/publish")


class Settings(BaseSettings):
    """Central application configuration parsed from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PUBLISH_",
        extra="ignore",
        validate_default=True,
    )

    out_path: Path = Field(DEFAULT_OUT_PATH, description="Local output root that published builds are written to.")
    remote_url: Optional[str] = Field(
        None,
        description="Public base URL under which the output root is served. Required to derive file URLs.",
    )

    api_host: str = Field("0.0.0.0", description="Host interface for the API server.")
    api_port: int = Field(8080, description="Port for the API server.")
    api_token: str = Field("changeme", description="Bearer token required for API access.")

    redis_url: AnyUrl = Field("redis://redis:6379/0", description="Redis connection for RQ.")
    job_timeout_seconds: Optional[int] = Field(
        600,
        description="Maximum number of seconds a publish job may run before timing out. Set to 0 to disable.",
    )

    copy_chunk_size: Annotated[int, Field(ge=1)] = Field(
        1024 * 1024, description="Buffer size in bytes used when streaming artifacts into the output root."
    )
    log_level: str = Field("INFO", description="Logging level for the worker process.")

    @field_validator("out_path", mode="before")
    @classmethod
    def default_out_path(cls, value: object) -> object:
        """Fall back to the default output root for empty values."""
        if not value:
            return DEFAULT_OUT_PATH
        return value

    @field_validator("remote_url", mode="before")
    @classmethod
    def blank_remote_url(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        return value

    @field_validator("job_timeout_seconds", mode="before")
    @classmethod
    def normalize_job_timeout(cls, value: Optional[int]) -> Optional[int]:
        """Interpret falsy values as disabling timeouts."""
        if value in (None, "", "None", 0, "0"):
            return None
        return int(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance to avoid reparsing the environment."""
    return Settings()


settings = get_settings()
