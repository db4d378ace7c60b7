"""Template rendering for Folio.

Templates are plain HTML files with ``{{name}}`` placeholders. Rendering is a
single pass of flat key substitution: no escaping, no loops, no nesting.

Key pieces:
- render_template: Substitute placeholders from a mapping.
- TemplateLoader: Read ``<name>.html`` files from the templates directory.
- TemplateNotFoundError: Raised when a required template is missing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path

__all__ = ["PLACEHOLDER_RE", "TemplateLoader", "TemplateNotFoundError", "render_template"]

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}", re.ASCII)


class TemplateNotFoundError(FileNotFoundError):
    """Raised when a named template does not exist in the templates directory.

    Attributes:
        name: Template name without extension.
        path: Path that was looked up.
    """

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = path
        super().__init__(f"Template not found: {path}")


def render_template(template: str, data: Mapping[str, str]) -> str:
    """Replace ``{{key}}`` placeholders with values from ``data``.

    Placeholders whose key is missing from ``data`` are left untouched.
    Substituted values are inserted verbatim and never re-scanned, so a value
    containing ``{{...}}`` comes through as literal text.

    Args:
        template: Template source.
        data: Flat mapping of placeholder name to replacement string.

    Returns:
        The rendered string.

    Examples:
        >>> render_template("<h1>{{title}}</h1>", {"title": "Hello World"})
        '<h1>Hello World</h1>'

        >>> render_template("<p>{{missing}}</p>", {})
        '<p>{{missing}}</p>'
    """

    def repl(match: re.Match) -> str:
        key = match.group(1)
        if key in data:
            return data[key]
        return match.group(0)

    return PLACEHOLDER_RE.sub(repl, template)


class TemplateLoader:
    """Loads templates by name from a directory.

    Attributes:
        templates_dir: Directory containing ``<name>.html`` files.
    """

    suffix = ".html"

    def __init__(self, templates_dir: Path):
        self.templates_dir = templates_dir

    def path_for(self, name: str) -> Path:
        return self.templates_dir / f"{name}{self.suffix}"

    def read(self, name: str) -> str:
        """Read a template's source.

        Args:
            name: Template name without extension (e.g. ``"base"``).

        Returns:
            Template text.

        Raises:
            TemplateNotFoundError: If the template file does not exist.
        """
        path = self.path_for(name)
        if not path.is_file():
            raise TemplateNotFoundError(name, path)
        return path.read_text(encoding="utf-8")

    def render(self, name: str, data: Mapping[str, str]) -> str:
        """Read the named template and render it with ``data``."""
        return render_template(self.read(name), data)
