"""Read-only storage for blog posts."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from inkwell.core.dates import sort_timestamp
from inkwell.core.frontmatter import FrontmatterError, parse_frontmatter
from inkwell.core.models import (
    Found,
    LookupResult,
    NotFound,
    ParseFailed,
    Post,
    PostMetadata,
)

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".md"


def slug_from_filename(filename: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Strip the content suffix from a filename. No other normalization."""
    return filename.removesuffix(suffix)


def filename_from_slug(slug: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Convert slug to filename."""
    return slug + suffix


def is_valid_slug(slug: str) -> bool:
    """True if the slug names a plain file inside the store."""
    if not slug or slug.startswith("."):
        return False
    return not any(c in slug for c in ("/", "\\", "\x00"))


class PostStorage(ABC):
    """Abstract base class for post storage."""

    @abstractmethod
    async def get_post(self, slug: str) -> LookupResult:
        """Look up a post by slug. Never raises."""
        ...

    @abstractmethod
    async def list_posts(self, limit: int | None = None) -> list[PostMetadata]:
        """List post metadata, newest first.

        A truthy ``limit`` keeps only the first ``limit`` posts.
        """
        ...

    @abstractmethod
    async def search_posts(
        self, query: str, limit: int | None = None
    ) -> list[PostMetadata]:
        """Filter the listing by case-insensitive substring match on title."""
        ...

    @abstractmethod
    async def post_exists(self, slug: str) -> bool:
        """Check if a post exists."""
        ...


class FileStorage(PostStorage):
    """File-based storage implementation.

    Posts are Markdown files with optional YAML frontmatter, stored flat
    in ``base_path``. File naming: <slug>.md. The directory is only ever
    read; nothing is cached between calls.
    """

    def __init__(self, base_path: Path, suffix: str = DEFAULT_SUFFIX):
        self.base_path = Path(base_path)
        self.suffix = suffix

    def _get_path(self, slug: str) -> Path | None:
        """Get full path for a post, or None if the slug is not a plain name."""
        if not is_valid_slug(slug):
            return None
        return self.base_path / filename_from_slug(slug, self.suffix)

    def _content_files(self) -> list[Path]:
        """Post files in the store, in filename order."""
        if not self.base_path.is_dir():
            return []
        return sorted(
            path
            for path in self.base_path.iterdir()
            if path.name.endswith(self.suffix)
            and is_valid_slug(slug_from_filename(path.name, self.suffix))
            and path.is_file()
        )

    def _load(self, slug: str, path: Path) -> Post:
        """Read and parse one file.

        Raises OSError/UnicodeDecodeError on read failure and
        FrontmatterError/ValidationError on parse failure.
        """
        raw = path.read_text(encoding="utf-8")
        data, body = parse_frontmatter(raw)
        metadata = PostMetadata.model_validate({**data, "slug": slug})
        return Post(metadata=metadata, content=body)

    async def get_post(self, slug: str) -> LookupResult:
        """Look up a post by slug."""
        path = self._get_path(slug)
        if path is None:
            return NotFound(slug=slug)

        try:
            post = self._load(slug, path)
        except (OSError, UnicodeDecodeError):
            return NotFound(slug=slug)
        except FrontmatterError as e:
            logger.warning("Could not parse frontmatter of %s: %s", path, e.detail)
            return ParseFailed(slug=slug, detail=e.detail)
        except ValidationError as e:
            detail = f"Invalid frontmatter values: {e.error_count()} error(s)"
            logger.warning("Invalid metadata in %s: %s", path, e)
            return ParseFailed(slug=slug, detail=detail)

        return Found(post=post)

    async def list_posts(self, limit: int | None = None) -> list[PostMetadata]:
        """List post metadata sorted by publishedAt, newest first.

        Files that cannot be read or parsed are skipped.
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")

        posts = []
        for path in self._content_files():
            slug = slug_from_filename(path.name, self.suffix)
            try:
                posts.append(self._load(slug, path).metadata)
            except (
                OSError,
                UnicodeDecodeError,
                FrontmatterError,
                ValidationError,
            ) as e:
                logger.warning("Skipping %s: %s", path.name, e)

        posts.sort(key=lambda p: sort_timestamp(p.published_at), reverse=True)
        if limit:
            return posts[:limit]
        return posts

    async def search_posts(
        self, query: str, limit: int | None = None
    ) -> list[PostMetadata]:
        """Search posts by title."""
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")

        posts = await self.list_posts()
        query_lower = query.strip().lower()
        if query_lower:
            posts = [
                p
                for p in posts
                if isinstance(p.title, str) and query_lower in p.title.lower()
            ]
        if limit:
            return posts[:limit]
        return posts

    async def post_exists(self, slug: str) -> bool:
        """Check if a post exists."""
        path = self._get_path(slug)
        return path is not None and path.is_file()
