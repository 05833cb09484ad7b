"""Table of contents, search, and navigation across selected guides.

:class:`ContentIndex` lists every ``##`` section of the selected guides in
topic-selection order, finds sections whose heading contains a query, and
steps forwards or backwards through the entries with wrap-around.

Example
-------
>>> from learning_guides.content_index import ContentIndex
>>> from learning_guides.guides import parse_guide
>>> guide = parse_guide("## Git vs GitHub\\nBody\\n", topic="git", language="en")
>>> index = ContentIndex.from_guides({"git": guide}, {"git": "Git"})
>>> index.entries[0].id
'git-git-vs-github'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .guides import Guide

_WHITESPACE = re.compile(r"\s+")


@dc.dataclass(frozen=True, slots=True)
class IndexEntry:
    """One section listed in the content index.

    Attributes
    ----------
    title : str
        Section heading.
    line : int
        1-based line number of the heading in the guide.
    id : str
        Identifier unique across topics: ``<topic>-<heading-slug>``.
    topic_id : str
        Topic the section belongs to.
    topic_name : str
        Display name of the topic.
    """

    title: str
    line: int
    id: str
    topic_id: str
    topic_name: str


@dc.dataclass(frozen=True, slots=True)
class SearchResult:
    """A section matched by :meth:`ContentIndex.search`."""

    entry: IndexEntry
    content: str

    @property
    def title(self) -> str:
        """Return the matched section heading."""
        return self.entry.title


def entry_id(topic_id: str, title: str) -> str:
    """Return the index identifier for ``title`` within ``topic_id``."""
    return f"{topic_id}-{_WHITESPACE.sub('-', title.lower())}"


class ContentIndex:
    """Ordered index over the sections of several guides."""

    def __init__(
        self, entries: cabc.Sequence[IndexEntry], guides: cabc.Mapping[str, Guide]
    ) -> None:
        self._entries = list(entries)
        self._guides = dict(guides)
        self._positions = {entry.id: pos for pos, entry in enumerate(self._entries)}

    @classmethod
    def from_guides(
        cls,
        guides: cabc.Mapping[str, Guide],
        topic_names: cabc.Mapping[str, str] | None = None,
    ) -> ContentIndex:
        """Build an index from guides keyed by topic, keeping mapping order."""
        names = topic_names or {}
        entries = [
            IndexEntry(
                title=section.title,
                line=section.line,
                id=entry_id(topic_id, section.title),
                topic_id=topic_id,
                topic_name=names.get(topic_id, topic_id),
            )
            for topic_id, guide in guides.items()
            for section in guide.sections
        ]
        return cls(entries, guides)

    @property
    def entries(self) -> list[IndexEntry]:
        """Return every entry in index order."""
        return list(self._entries)

    def for_topic(self, topic_id: str) -> list[IndexEntry]:
        """Return the entries of a single topic."""
        return [entry for entry in self._entries if entry.topic_id == topic_id]

    def get(self, entry_id: str) -> IndexEntry:
        """Return the entry with ``entry_id`` or raise ``KeyError``."""
        try:
            return self._entries[self._positions[entry_id]]
        except KeyError as exc:
            msg = f"Unknown index entry '{entry_id}'."
            raise KeyError(msg) from exc

    def section_markdown(self, entry: IndexEntry) -> str:
        """Return the Markdown from the entry heading up to the next heading."""
        guide = self._guides[entry.topic_id]
        lines = guide.markdown.splitlines()
        following = [
            section.line
            for section in guide.sections
            if section.line > entry.line
        ]
        end = following[0] - 1 if following else len(lines)
        return "\n".join(lines[entry.line - 1 : end]).rstrip()

    def search(self, query: str) -> list[SearchResult]:
        """Return sections whose heading contains ``query``, ignoring case.

        Blank queries return an empty list.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        return [
            SearchResult(entry=entry, content=self.section_markdown(entry))
            for entry in self._entries
            if needle in entry.title.lower()
        ]

    def neighbour(self, entry_id: str, direction: str = "next") -> IndexEntry:
        """Return the entry after or before ``entry_id``, wrapping at the ends.

        Parameters
        ----------
        entry_id : str
            Identifier of the current entry.
        direction : str, optional
            ``"next"`` (default) or ``"previous"``.

        Raises
        ------
        KeyError
            If ``entry_id`` is not in the index.
        ValueError
            If ``direction`` is not recognised.
        """
        if direction not in ("next", "previous"):
            msg = f"Unknown direction '{direction}'; expected 'next' or 'previous'."
            raise ValueError(msg)
        current = self._positions.get(entry_id)
        if current is None:
            msg = f"Unknown index entry '{entry_id}'."
            raise KeyError(msg)
        step = 1 if direction == "next" else -1
        return self._entries[(current + step) % len(self._entries)]

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ContentIndex", "IndexEntry", "SearchResult", "entry_id"]
