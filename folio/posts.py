"""Post loading for Folio.

This module turns the Markdown files of the content directory into Post
records. Field defaults are applied here, at load time, so every Post handed
to the rest of the pipeline has all five fields set.

Key classes:
- Post: Immutable record of one published article.
- PostLoadError: A content file could not be read or parsed.
- PostRepository: Loads, converts and sorts all posts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .config import SiteConfig
from .extractors import default_frontmatter_parser
from .protocols import FrontMatterParser, MarkdownConverter
from .renderers import default_markdown_converter
from .utils import is_markdown, parse_iso_date, today_iso

DEFAULT_TITLE = "Untitled"

MISSING_CONTENT_NOTICE = "No content/posts directory found. Creating empty posts list."


@dataclass(frozen=True)
class Post:
    """Represents one published article.

    Attributes:
        title: Display title.
        date: ISO calendar date (``YYYY-MM-DD``).
        description: Plain-text summary.
        slug: URL path segment under ``/blog/``.
        content: HTML converted from the Markdown body.
    """

    title: str
    date: str
    description: str
    slug: str
    content: str


class PostLoadError(Exception):
    """Error while loading a single content file.

    Attributes:
        source_path: Path to the offending file.
        message: Human-readable error message.
    """

    def __init__(self, source_path: Path, message: str):
        self.source_path = source_path
        self.message = message
        super().__init__(f"{source_path}: {message}")


def _as_text(value: Any) -> str:
    """Normalise a front-matter value to a string."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _slug_from_filename(filename: str) -> str:
    return filename[: -len(".md")] if filename.endswith(".md") else filename


def _sort_key(post: Post) -> date:
    return parse_iso_date(post.date) or date.min


def sort_posts(posts: list[Post]) -> list[Post]:
    """Sort posts newest first.

    Dates are compared as dates, not strings. Posts sharing a date are
    ordered by slug; posts with an unparseable date go last.
    """
    by_slug = sorted(posts, key=lambda post: post.slug)
    return sorted(by_slug, key=_sort_key, reverse=True)


class PostRepository:
    """Loads all posts from the content directory.

    Attributes:
        content_dir: Directory containing ``*.md`` posts.
        frontmatter_parser: Splits files into metadata and body.
        markdown_converter: Converts bodies to HTML.
    """

    def __init__(
        self,
        config: SiteConfig,
        frontmatter_parser: FrontMatterParser | None = None,
        markdown_converter: MarkdownConverter | None = None,
    ):
        self.content_dir = config.content_dir
        self.frontmatter_parser = frontmatter_parser or default_frontmatter_parser
        self.markdown_converter = markdown_converter or default_markdown_converter

    def iter_files(self) -> list[Path]:
        """Return the Markdown files of the content directory in name order."""
        return sorted(
            path
            for path in self.content_dir.iterdir()
            if path.is_file() and is_markdown(path)
        )

    def get_posts(self) -> list[Post]:
        """Load every post, newest first.

        Returns:
            Sorted list of Post objects; empty if the content directory is missing.

        Raises:
            PostLoadError: If any file cannot be decoded or its front-matter is malformed.
        """
        if not self.content_dir.is_dir():
            print(MISSING_CONTENT_NOTICE)
            return []
        posts = [self.load(path) for path in self.iter_files()]
        return sort_posts(posts)

    def load(self, path: Path) -> Post:
        """Build a Post from a single Markdown file.

        Args:
            path: Path to the source file.

        Returns:
            Post with defaults applied.
        """
        try:
            raw = path.read_text(encoding="utf-8")
            metadata, body = self.frontmatter_parser.parse(raw)
        except (UnicodeDecodeError, ValueError) as exc:
            raise PostLoadError(path, str(exc)) from exc

        def field_or(key: str, default: str) -> str:
            value = metadata.get(key)
            return _as_text(value) if value else default

        return Post(
            title=field_or("title", DEFAULT_TITLE),
            date=field_or("date", today_iso()),
            description=field_or("description", ""),
            slug=field_or("slug", _slug_from_filename(path.name)),
            content=self.markdown_converter.convert(body),
        )
