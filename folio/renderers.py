"""Markdown conversion for Folio.

Post bodies are converted with mistune. Raw HTML in the Markdown passes
through untouched, and fenced code blocks with a language are highlighted
with Pygments.

Key classes:
- MistuneMarkdownConverter: MarkdownConverter implementation.
"""

from __future__ import annotations

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]


def _escape_code(code: str) -> str:
    return code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer with Pygments syntax highlighting for fenced code."""

    def __init__(self):
        super().__init__(escape=False)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code.
        """
        lang = info.split()[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{_escape_code(code)}</code></pre>\n"


class MistuneMarkdownConverter:
    """Converts Markdown to HTML with mistune."""

    def __init__(self, plugins: list[str] | None = None):
        self.plugins = list(MARKDOWN_PLUGINS if plugins is None else plugins)

    def convert(self, text: str) -> str:
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(), plugins=self.plugins
        )
        return markdown(text)


default_markdown_converter = MistuneMarkdownConverter()
