"""Protocol definitions for Folio.

Front-matter parsing and Markdown conversion are delegated to third-party
libraries. The post repository only depends on these two small interfaces,
so any compliant implementation can be swapped in (for example in tests).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FrontMatterParser(Protocol):
    """Protocol for splitting a content file into metadata and body."""

    @abstractmethod
    def parse(self, text: str) -> tuple[dict[str, Any], str]:
        """Split raw file text into front-matter metadata and body.

        Args:
            text: Full content file text.

        Returns:
            Tuple of (metadata mapping, body text). Files without a
            front-matter block yield an empty mapping and the full text.

        Raises:
            FrontMatterError: If a front-matter block is present but malformed.
        """
        ...


@runtime_checkable
class MarkdownConverter(Protocol):
    """Protocol for converting Markdown to HTML."""

    @abstractmethod
    def convert(self, text: str) -> str:
        """Convert Markdown source to an HTML string.

        Args:
            text: Markdown source.

        Returns:
            Rendered HTML.
        """
        ...
