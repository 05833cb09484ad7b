"""Render guide markdown to HTML and code samples to coloured terminal output.

Fenced blocks are found with :func:`~learning_guides.markdown_parser.iter_fences`
so HTML rendering and the linter agree on what counts as code. Every closed
block is highlighted by Pygments and tagged with its language; unclosed
blocks are left to Markdown as ordinary text.
"""

from __future__ import annotations

import typing as typ
from html import escape

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .markdown_parser import iter_fences

if typ.TYPE_CHECKING:
    from pygments.lexer import Lexer

CODE_CSS_CLASS = "codehilite"


def _lexer_for(language: str) -> Lexer:
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        return get_lexer_by_name("text")


class GuideFenceExtension(Extension):
    """Replace fenced code blocks with Pygments HTML before Markdown parsing."""

    def __init__(self, formatter: HtmlFormatter) -> None:
        super().__init__()
        self.formatter = formatter

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the fence preprocessor on the Markdown instance."""
        md.preprocessors.register(
            GuideFencePreprocessor(md, self.formatter), "guide_fences", 25
        )


class GuideFencePreprocessor(Preprocessor):
    """Stash highlighted HTML for each closed fence and leave a placeholder."""

    def __init__(self, md: Markdown, formatter: HtmlFormatter) -> None:
        super().__init__(md)
        self.formatter = formatter

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with every closed fenced block swapped for HTML."""
        output: list[str] = []
        cursor = 0
        for block in iter_fences(lines):
            if block.end is None:
                continue
            output.extend(lines[cursor : block.start])
            placeholder = self.md.htmlStash.store(
                self._highlight(block.code, block.language)
            )
            output.extend(["", placeholder, ""])
            cursor = block.end + 1
        output.extend(lines[cursor:])
        return output

    def _highlight(self, code: str, language: str) -> str:
        html = highlight(code, _lexer_for(language), self.formatter)
        tagged = (
            f'<div class="{CODE_CSS_CLASS}" '
            f'data-language="{escape(language, quote=True)}">'
        )
        return html.replace(f'<div class="{CODE_CSS_CLASS}">', tagged, 1)


class GuideRenderer:
    """Render guide markdown with highlighted code in one Pygments style."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Create the formatter and the Markdown converter.

        Parameters
        ----------
        pygments_style : str, optional
            Pygments style used for HTML highlighting and the stylesheet.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass=CODE_CSS_CLASS)
        self._md = Markdown(
            extensions=[GuideFenceExtension(self._formatter), "tables", "sane_lists"]
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS rules for highlighted blocks."""
        return self._formatter.get_style_defs(f".{CODE_CSS_CLASS}")

    def markdown(self, text: str) -> str:
        """Return ``text`` converted to HTML; blank input gives ``""``."""
        if not text.strip():
            return ""
        self._md.reset()
        return self._md.convert(text)


def highlight_terminal(code: str, language: str | None = None) -> str:
    """Return ``code`` with ANSI colours for the given language.

    Unknown languages fall back to the plain-text lexer, so the code is always
    returned.
    """
    return highlight(code, _lexer_for(language or "text"), TerminalFormatter())


__all__ = ["GuideFenceExtension", "GuideRenderer", "highlight_terminal"]
