"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://wiki.wlin.workers.dev",
        description="Edge search worker serving the term index.",
    )
    max_query_terms: int = Field(default=50, ge=1)
    max_query_bytes: int = Field(default=1024, ge=16)
    max_attempts: int = Field(default=1, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)


class SummarySettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://en.wikipedia.org/api/rest_v1",
        description="REST endpoint exposing /page/summary/{title}.",
    )
    user_agent: str | None = None


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEARCHBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debounce_seconds: float = Field(default=0.25, ge=0)
    cancel_in_flight: bool = False
    request_timeout_seconds: float = Field(default=10, gt=0, le=120)

    index: IndexSettings = Field(default_factory=IndexSettings)
    summaries: SummarySettings = Field(default_factory=SummarySettings)


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "IndexSettings",
    "SummarySettings",
    "SearchSettings",
    "get_settings",
]
