r"""Parse guide Markdown into structured sections.

This module powers the guide loader by splitting Markdown into ordered
``##`` sections, locating the bilingual ``**Description:**``,
``**Example:**`` and ``**Comparison:**`` labels inside each one, and returning
dataclasses that the linter, index, and quiz builders consume. Lines inside
fenced code blocks are never treated as headings or labels.

Example
-------
>>> from learning_guides.markdown_parser import parse_sections
>>> sections = parse_sections("## Intro\n**Description:** Body text\n")
>>> sections[0].title
'Intro'
>>> sections[0].description
'Body text'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
import unicodedata

from ._constants import COMPARISON_LABELS, DESCRIPTION_LABELS, EXAMPLE_LABELS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TITLE_PATTERN = re.compile(r"^#\s+(.*)$")
SECTION_PATTERN = re.compile(r"^##\s+(.*)$")
FENCE_OPEN_PATTERN = re.compile(
    r"^\s*(?P<fence>`{3,}|~{3,})\s*(?P<language>[A-Za-z0-9_+#.-]+)?"
)
LABEL_PATTERN = re.compile(
    r"\*\*(?P<label>"
    + "|".join((*DESCRIPTION_LABELS, *EXAMPLE_LABELS, *COMPARISON_LABELS))
    + r"):\*\*"
)

_LABEL_KINDS: dict[str, str] = {
    **dict.fromkeys(DESCRIPTION_LABELS, "description"),
    **dict.fromkeys(EXAMPLE_LABELS, "example"),
    **dict.fromkeys(COMPARISON_LABELS, "comparison"),
}


@dc.dataclass(frozen=True, slots=True)
class FencedBlock:
    """A fenced code block located in a list of Markdown lines.

    Attributes
    ----------
    start : int
        0-based index of the opening fence line.
    end : int | None
        0-based index of the closing fence line, or ``None`` when the
        document ends before the fence is closed.
    language : str
        Language tag from the info string; ``"text"`` when absent.
    code : str
        Lines between the fences joined with newlines.
    """

    start: int
    end: int | None
    language: str
    code: str

    @property
    def closed(self) -> bool:
        """Return whether the block has a closing fence."""
        return self.end is not None


@dc.dataclass(frozen=True, slots=True)
class CodeExample:
    """Illustrative code sample tagged with a display language."""

    language: str
    code: str
    line: int
    closed: bool = True


@dc.dataclass(frozen=True, slots=True)
class Comparison:
    """Closing comparison block of a section.

    Attributes
    ----------
    markdown : str
        Markdown following the comparison label, label excluded.
    is_table : bool
        ``True`` when the block contains a Markdown table row.
    """

    markdown: str
    is_table: bool


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Second-level heading and the labelled parts beneath it.

    Attributes
    ----------
    title : str
        Heading text with escapes and surrounding whitespace removed.
    slug : str
        URL-safe identifier unique within the document.
    order : int
        1-based order of the section in the document.
    line : int
        1-based line number of the heading.
    markdown : str
        Markdown content for the section (excluding the heading itself).
    description : str
        Markdown after the description label; empty when the label is absent.
    examples : tuple[CodeExample, ...]
        Every fenced block found in the section, in order.
    comparison : Comparison | None
        Closing comparison block, if the section has one.
    example_label_lines : tuple[int, ...]
        1-based line numbers of every example label in the section.
    """

    title: str
    slug: str
    order: int
    line: int
    markdown: str
    description: str = ""
    examples: tuple[CodeExample, ...] = ()
    comparison: Comparison | None = None
    example_label_lines: tuple[int, ...] = ()


def iter_fences(lines: cabc.Sequence[str]) -> cabc.Iterator[FencedBlock]:
    """Yield every fenced code block found in ``lines``.

    Parameters
    ----------
    lines : Sequence[str]
        Markdown split into lines without trailing newlines.

    Yields
    ------
    FencedBlock
        Blocks in document order. An unclosed block runs to the end of the
        document and is yielded last.
    """
    idx = 0
    total = len(lines)
    while idx < total:
        match = FENCE_OPEN_PATTERN.match(lines[idx])
        if not match:
            idx += 1
            continue
        fence = match.group("fence")
        language = match.group("language") or "text"
        start = idx
        body: list[str] = []
        idx += 1
        end: int | None = None
        while idx < total:
            if _closes_fence(lines[idx], fence):
                end = idx
                break
            body.append(lines[idx])
            idx += 1
        yield FencedBlock(start=start, end=end, language=language, code="\n".join(body))
        idx += 1


def fenced_line_mask(
    lines: cabc.Sequence[str], fences: cabc.Iterable[FencedBlock] | None = None
) -> list[bool]:
    """Return a per-line flag marking lines that belong to fenced blocks."""
    mask = [False] * len(lines)
    blocks = iter_fences(lines) if fences is None else fences
    for block in blocks:
        stop = block.end if block.end is not None else len(lines) - 1
        for idx in range(block.start, stop + 1):
            mask[idx] = True
    return mask


def scan_headings(markdown_text: str) -> list[str]:
    """Return ordered ``##`` heading texts, ignoring fenced regions.

    Examples
    --------
    >>> scan_headings("## One\\n```md\\n## not a heading\\n```\\n## Two\\n")
    ['One', 'Two']
    """
    lines = markdown_text.splitlines()
    return [_clean_heading(match.group(1)) for _, match in _heading_rows(lines)]


def parse_title(markdown_text: str) -> str | None:
    """Return the first ``#`` title preceding the first section, if any."""
    lines = markdown_text.splitlines()
    mask = fenced_line_mask(lines)
    for idx, line in enumerate(lines):
        if mask[idx]:
            continue
        if SECTION_PATTERN.match(line):
            return None
        match = TITLE_PATTERN.match(line)
        if match:
            return _clean_heading(match.group(1)) or None
    return None


def parse_sections(markdown_text: str) -> list[Section]:
    """Split markdown into ordered Section objects with their labelled parts.

    Parameters
    ----------
    markdown_text : str
        Raw guide markdown with ``##`` section headings.

    Returns
    -------
    list[Section]
        Parsed sections including titles, slugs, line numbers, descriptions,
        code examples, and comparisons. Returns an empty list when no
        second-level headings are present.
    """
    lines = markdown_text.splitlines()
    fences = list(iter_fences(lines))
    mask = fenced_line_mask(lines, fences)
    rows = list(_heading_rows(lines, mask))
    if not rows:
        return []

    sections: list[Section] = []
    used_slugs: set[str] = set()
    for idx, (row, match) in enumerate(rows):
        end = rows[idx + 1][0] if idx + 1 < len(rows) else len(lines)
        heading = _clean_heading(match.group(1))
        parts = _split_parts(lines, mask, row + 1, end)
        examples = tuple(
            CodeExample(
                language=block.language,
                code=block.code,
                line=block.start + 1,
                closed=block.closed,
            )
            for block in fences
            if row < block.start < end
        )
        sections.append(
            Section(
                title=heading,
                slug=_unique_slug(_slugify(heading), used_slugs),
                order=idx + 1,
                line=row + 1,
                markdown="\n".join(lines[row + 1 : end]).strip(),
                description=parts.description,
                examples=examples,
                comparison=parts.comparison,
                example_label_lines=parts.example_label_lines,
            )
        )
    return sections


@dc.dataclass(slots=True)
class _SectionParts:
    description: str = ""
    comparison: Comparison | None = None
    example_label_lines: tuple[int, ...] = ()


def _split_parts(
    lines: cabc.Sequence[str], mask: cabc.Sequence[bool], start: int, end: int
) -> _SectionParts:
    """Group section lines under the label that most recently preceded them."""
    buckets: dict[str, list[str]] = {"description": [], "comparison": []}
    seen: set[str] = set()
    example_lines: list[int] = []
    current: str | None = None
    for idx in range(start, end):
        line = lines[idx]
        match = None if mask[idx] else LABEL_PATTERN.search(line)
        if match:
            current = _LABEL_KINDS[match.group("label")]
            seen.add(current)
            if current == "example":
                example_lines.append(idx + 1)
                continue
            remainder = line[match.end() :].strip()
            if remainder:
                buckets[current].append(remainder)
            continue
        if current in buckets:
            buckets[current].append(line)

    comparison = None
    if "comparison" in seen:
        comparison_md = "\n".join(buckets["comparison"]).strip()
        comparison = Comparison(
            markdown=comparison_md,
            is_table=any(
                row.lstrip().startswith("|") for row in buckets["comparison"]
            ),
        )
    return _SectionParts(
        description="\n".join(buckets["description"]).strip(),
        comparison=comparison,
        example_label_lines=tuple(example_lines),
    )


def _heading_rows(
    lines: cabc.Sequence[str], mask: cabc.Sequence[bool] | None = None
) -> cabc.Iterator[tuple[int, re.Match[str]]]:
    """Yield ``(index, match)`` for every ``##`` heading outside fences."""
    flags = fenced_line_mask(lines) if mask is None else mask
    for idx, line in enumerate(lines):
        if flags[idx]:
            continue
        match = SECTION_PATTERN.match(line)
        if match:
            yield idx, match


def _closes_fence(line: str, fence: str) -> bool:
    """Return whether ``line`` closes a block opened with ``fence``."""
    stripped = line.strip()
    return len(stripped) >= len(fence) and set(stripped) == {fence[0]}


def _clean_heading(text: str) -> str:
    """Return a cleaned heading, removing escapes and whitespace."""
    return text.replace("\\", "").strip()


def _slugify(title: str) -> str:
    ascii_title = (
        unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    )
    no_number = re.sub(r"^\d+\.?\s*", "", ascii_title.lower())
    slug = re.sub(r"[^a-z0-9]+", "-", no_number).strip("-")
    return slug or "section"


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "CodeExample",
    "Comparison",
    "FencedBlock",
    "Section",
    "fenced_line_mask",
    "iter_fences",
    "parse_sections",
    "parse_title",
    "scan_headings",
]
