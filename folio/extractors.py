"""Front-matter extraction for Folio.

Content files may start with a YAML block delimited by ``---`` lines::

    ---
    title: Hello
    date: 2025-01-17
    ---
    Body text...

Unlike a lenient extractor, a block that is present but cannot be parsed is
an error: a broken post should stop the build rather than be published with
its metadata silently dropped.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


class FrontMatterError(ValueError):
    """Raised when a front-matter block cannot be parsed into a mapping."""


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML front-matter from content.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (front-matter dict, remaining content).

    Raises:
        FrontMatterError: If the YAML is invalid or is not a mapping.
    """
    text = text.lstrip("\ufeff")
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front-matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front-matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end() :]


class YamlFrontMatterParser:
    """FrontMatterParser implementation backed by PyYAML."""

    def parse(self, text: str) -> tuple[dict[str, Any], str]:
        return extract_frontmatter(text)


default_frontmatter_parser = YamlFrontMatterParser()
