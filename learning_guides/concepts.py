"""Study views derived from guide sections.

A :class:`Concept` is the flattened, single-line form of a section used for
flashcards and multiple-choice questions. :func:`split_concept_view` separates
a section into its reading body and its example region so the example can be
shown on demand.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import COMPARISON_LABELS, EXAMPLE_LABELS
from .markdown_parser import LABEL_PATTERN, fenced_line_mask

if typ.TYPE_CHECKING:
    from .guides import Guide
    from .markdown_parser import Section


@dc.dataclass(frozen=True, slots=True)
class Concept:
    """A section reduced to its name, description, and comparison prose."""

    name: str
    description: str
    comparison: str = ""
    topic: str = ""


@dc.dataclass(frozen=True, slots=True)
class ConceptView:
    """A section split into reading body and example region."""

    body: str
    example: str

    @property
    def has_example(self) -> bool:
        """Return whether the section carries an example region."""
        return bool(self.example.strip())


def flatten_prose(markdown_text: str) -> str:
    """Collapse Markdown prose into one line.

    Blank lines, fence markers, fenced code, and bold-prefixed lines are
    dropped; the remaining lines are stripped and joined with single spaces.
    """
    lines = markdown_text.splitlines()
    mask = fenced_line_mask(lines)
    kept = [
        line.strip()
        for idx, line in enumerate(lines)
        if not mask[idx] and line.strip() and not line.lstrip().startswith("**")
    ]
    return " ".join(kept)


def concept_from_section(section: Section, topic: str = "") -> Concept:
    """Return the flattened concept for ``section``."""
    comparison = section.comparison.markdown if section.comparison else ""
    return Concept(
        name=section.title,
        description=flatten_prose(section.description),
        comparison=flatten_prose(comparison),
        topic=topic,
    )


def extract_concepts(guide: Guide) -> list[Concept]:
    """Return the concepts of ``guide``, skipping sections without a description."""
    concepts: list[Concept] = []
    for section in guide.sections:
        concept = concept_from_section(section, guide.topic)
        if concept.description:
            concepts.append(concept)
    return concepts


def split_concept_view(section: Section) -> ConceptView:
    """Split a section into its body and example region.

    The example region starts at an example label and runs until the next
    comparison label (or the end of the section). The body is everything
    else, so descriptions and comparisons stay readable without the code.

    Examples
    --------
    >>> from learning_guides.markdown_parser import parse_sections
    >>> md = "## Box\\n**Description:** A box.\\n**Example:**\\n```css\\na{}\\n```\\n**Comparison:** Grid."
    >>> view = split_concept_view(parse_sections(md)[0])
    >>> view.body
    '**Description:** A box.\\n**Comparison:** Grid.'
    """
    lines = section.markdown.splitlines()
    mask = fenced_line_mask(lines)
    body: list[str] = []
    example: list[str] = []
    in_example = False
    for idx, line in enumerate(lines):
        match = None if mask[idx] else LABEL_PATTERN.search(line)
        label = match.group("label") if match else None
        if label in EXAMPLE_LABELS:
            in_example = True
            example.append(line)
            continue
        if label in COMPARISON_LABELS:
            in_example = False
        if in_example:
            example.append(line)
        else:
            body.append(line)
    return ConceptView(body="\n".join(body).strip(), example="\n".join(example).strip())


__all__ = [
    "Concept",
    "ConceptView",
    "concept_from_section",
    "extract_concepts",
    "flatten_prose",
    "split_concept_view",
]
