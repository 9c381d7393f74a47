"""Pydantic models shared across the search pipeline and its callers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IndexResponse(BaseModel):
    """Ranked identifiers returned by the term index for one query."""

    model_config = ConfigDict(frozen=True)

    results: tuple[str, ...] = ()
    more: bool = False
    continuation: int | None = None


class ContentSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    title_html: str
    url: str
    image: str | None = None
    extract: str = ""
    extract_html: str = ""

    @field_validator("image", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_image(self) -> bool:
        return self.image is not None


class FulfilledResult(BaseModel):
    """Deduplicated summaries split by whether they carry a thumbnail."""

    model_config = ConfigDict(frozen=True)

    with_image: tuple[ContentSummary, ...] = ()
    without_image: tuple[ContentSummary, ...] = ()
    count: int = Field(default=0, ge=0)
    more: bool = False


class QuerySnapshot(BaseModel):
    """Observable state of the search box.

    ``results`` is ``None`` while an attempt is pending or after it failed;
    ``error`` carries the failure message of the current attempt, if any.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    results: FulfilledResult | None = None
    error: str | None = None

    @property
    def pending(self) -> bool:
        return self.results is None and self.error is None


__all__ = [
    "IndexResponse",
    "ContentSummary",
    "FulfilledResult",
    "QuerySnapshot",
]
