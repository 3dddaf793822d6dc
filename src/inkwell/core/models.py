"""Data models for Inkwell."""

import math
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

WORDS_PER_MINUTE = 200

HeaderValue = str | list[Any] | dict[Any, Any] | None


def scalar_to_str(value: Any) -> Any:
    """Render a YAML scalar (bool, number, date, ...) as a string.

    Strings, lists, mappings and None are returned unchanged.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if value is None or isinstance(value, (str, list, dict)):
        return value
    return str(value)


class PostMetadata(BaseModel):
    """Metadata extracted from post frontmatter, plus the derived slug.

    Unknown header keys are kept as extra fields.
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
    )

    slug: str
    # Lists and mappings are kept as written; other scalars become strings
    title: HeaderValue = None
    summary: HeaderValue = None
    published_at: HeaderValue = Field(default=None, alias="publishedAt")
    image: HeaderValue = None

    @field_validator("title", "summary", "published_at", "image", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        return scalar_to_str(value)

    @property
    def display_title(self) -> str:
        """Return title from metadata or derive from slug."""
        if isinstance(self.title, str) and self.title:
            return self.title
        return self.slug.replace("-", " ").replace("_", " ")

    def dump(self) -> dict[str, Any]:
        """Return the header keys as written, plus the slug."""
        keys = self.model_fields_set | set(self.model_extra or {})
        return self.model_dump(by_alias=True, include=keys)


class Post(BaseModel):
    """A single blog post: metadata and the raw markdown body."""

    model_config = ConfigDict(frozen=True)

    metadata: PostMetadata
    content: str

    @property
    def slug(self) -> str:
        return self.metadata.slug

    @property
    def word_count(self) -> int:
        """Approximate word count of post content."""
        return len(self.content.split())

    @property
    def reading_time(self) -> int:
        """Estimated reading time in minutes."""
        return max(1, math.ceil(self.word_count / WORDS_PER_MINUTE))


class Found(BaseModel):
    """Lookup succeeded."""

    status: Literal["found"] = "found"
    post: Post


class NotFound(BaseModel):
    """No readable file exists for the slug."""

    status: Literal["not_found"] = "not_found"
    slug: str


class ParseFailed(BaseModel):
    """The file exists but its header could not be parsed."""

    status: Literal["parse_failed"] = "parse_failed"
    slug: str
    detail: str


LookupResult = Found | NotFound | ParseFailed
