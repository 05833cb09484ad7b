"""Guide documents identified by a ``(topic, language)`` pair.

A :class:`Guide` is the parsed, immutable form of one ``<topic>-<lang>.md``
file. Guides are built once from Markdown and never mutated; callers that need
a different view (index entries, concepts, quiz items) derive new objects.

Examples
--------
>>> from learning_guides.guides import guide_filename, parse_guide_filename
>>> guide_filename("next", "es")
'next-es.md'
>>> parse_guide_filename("css-en.md")
('css', 'en')
"""

from __future__ import annotations

import dataclasses as dc

from ._constants import (
    GUIDE_FILENAME_PATTERN,
    GUIDE_FILENAME_TEMPLATE,
    SUPPORTED_LANGUAGES,
)
from .markdown_parser import Section, parse_sections, parse_title


class GuideNameError(ValueError):
    """Raised when a file name does not follow ``<topic>-<lang>.md``."""


@dc.dataclass(frozen=True, slots=True)
class Guide:
    """One Markdown guide covering a single topic in one language.

    Attributes
    ----------
    topic : str
        Topic identifier, e.g. ``"git"``.
    language : str
        Two-letter language code, e.g. ``"en"``.
    title : str
        First ``#`` heading of the document, or the topic id when absent.
    sections : tuple[Section, ...]
        Sections in reading order.
    source : str
        Path or URL the Markdown was read from.
    markdown : str
        Raw Markdown of the whole guide.
    """

    topic: str
    language: str
    title: str
    sections: tuple[Section, ...]
    source: str = ""
    markdown: str = ""

    @property
    def headings(self) -> list[str]:
        """Return the section headings in reading order."""
        return [section.title for section in self.sections]

    @property
    def filename(self) -> str:
        """Return the conventional file name of this guide."""
        return guide_filename(self.topic, self.language)

    def get_section(self, title: str) -> Section:
        """Return the section whose heading is exactly ``title``."""
        for section in self.sections:
            if section.title == title:
                return section
        msg = f"Guide '{self.filename}' has no section titled '{title}'."
        raise KeyError(msg)


def guide_filename(topic: str, language: str) -> str:
    """Return the file name for ``topic`` in ``language``."""
    return GUIDE_FILENAME_TEMPLATE.format(topic=topic, language=language)


def parse_guide_filename(
    name: str, *, languages: tuple[str, ...] = SUPPORTED_LANGUAGES
) -> tuple[str, str]:
    """Split a guide file name into its topic and language.

    Parameters
    ----------
    name : str
        Base file name such as ``"git-en.md"``.
    languages : tuple[str, ...], optional
        Accepted language codes; defaults to English and Spanish.

    Returns
    -------
    tuple[str, str]
        ``(topic, language)`` parsed from the name.

    Raises
    ------
    GuideNameError
        If the name does not match the convention or uses an unsupported
        language code.
    """
    match = GUIDE_FILENAME_PATTERN.match(name)
    if not match:
        msg = f"'{name}' does not match the '<topic>-<lang>.md' naming convention."
        raise GuideNameError(msg)
    language = match.group("language")
    if language not in languages:
        supported = ", ".join(languages)
        msg = f"'{name}' uses unsupported language '{language}' (expected {supported})."
        raise GuideNameError(msg)
    return match.group("topic"), language


def parse_guide(
    markdown_text: str, *, topic: str, language: str, source: str = ""
) -> Guide:
    """Build a :class:`Guide` from raw Markdown."""
    return Guide(
        topic=topic,
        language=language,
        title=parse_title(markdown_text) or topic,
        sections=tuple(parse_sections(markdown_text)),
        source=source,
        markdown=markdown_text,
    )


def empty_guide(topic: str, language: str, *, source: str = "") -> Guide:
    """Return a guide without sections, used when a guide cannot be loaded."""
    return Guide(topic=topic, language=language, title=topic, sections=(), source=source)


__all__ = [
    "Guide",
    "GuideNameError",
    "empty_guide",
    "guide_filename",
    "parse_guide",
    "parse_guide_filename",
]
