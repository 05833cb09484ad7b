"""Unit tests for the content index, search, and navigation."""

from __future__ import annotations

import pytest

from learning_guides.content_index import ContentIndex, entry_id
from learning_guides.guides import parse_guide

CSS_MD = (
    "# CSS\n"
    "## Box Model\n"
    "**Description:** Boxes.\n"
    "## Flexbox\n"
    "**Description:** One axis.\n"
    "\n"
)
GIT_MD = (
    "## Git vs GitHub\n"
    "**Description:** Tool vs platform.\n"
    "## Branching  Strategies\n"
    "**Description:** Team conventions.\n"
)


@pytest.fixture
def index() -> ContentIndex:
    """Return an index over a CSS guide followed by a Git guide."""
    guides = {
        "css": parse_guide(CSS_MD, topic="css", language="en"),
        "git": parse_guide(GIT_MD, topic="git", language="en"),
    }
    return ContentIndex.from_guides(guides, {"css": "CSS", "git": "Git"})


def test_entry_ids_join_topic_and_title() -> None:
    assert entry_id("git", "Git vs GitHub") == "git-git-vs-github", "unexpected id"
    assert entry_id("git", "Branching  Strategies") == "git-branching-strategies", (
        "whitespace runs should collapse into one dash"
    )


def test_entries_keep_topic_selection_order(index: ContentIndex) -> None:
    assert [entry.id for entry in index.entries] == [
        "css-box-model",
        "css-flexbox",
        "git-git-vs-github",
        "git-branching-strategies",
    ], "entries should follow topic order, then document order"
    assert len(index) == 4, "index length should count every section"
    assert index.entries[2].topic_name == "Git", "display names should be attached"
    assert index.entries[0].line == 2, "entries should record the heading line"


def test_for_topic(index: ContentIndex) -> None:
    titles = [entry.title for entry in index.for_topic("git")]
    assert titles == ["Git vs GitHub", "Branching  Strategies"], f"got {titles!r}"


def test_search_is_case_insensitive_substring(index: ContentIndex) -> None:
    results = index.search("GIT")
    assert [result.title for result in results] == ["Git vs GitHub"], (
        "search should match headings regardless of case"
    )
    assert results[0].content == (
        "## Git vs GitHub\n**Description:** Tool vs platform."
    ), f"content should stop before the next heading, got {results[0].content!r}"


def test_search_last_section_runs_to_end(index: ContentIndex) -> None:
    (result,) = index.search("flex")
    assert result.content == "## Flexbox\n**Description:** One axis.", (
        "trailing blank lines should be trimmed"
    )


@pytest.mark.parametrize("query", ["", "   "])
def test_blank_search_returns_nothing(index: ContentIndex, query: str) -> None:
    assert index.search(query) == [], "blank queries should not match everything"


def test_neighbour_wraps_around(index: ContentIndex) -> None:
    assert index.neighbour("css-flexbox").id == "git-git-vs-github", (
        "next should cross into the following topic"
    )
    assert index.neighbour("git-branching-strategies").id == "css-box-model", (
        "next from the last entry should wrap to the first"
    )
    assert index.neighbour("css-box-model", "previous").id == "git-branching-strategies", (
        "previous from the first entry should wrap to the last"
    )


def test_neighbour_rejects_unknown_ids(index: ContentIndex) -> None:
    with pytest.raises(KeyError):
        index.neighbour("css-missing")
    with pytest.raises(ValueError, match="direction"):
        index.neighbour("css-flexbox", "sideways")


def test_get_returns_entry(index: ContentIndex) -> None:
    assert index.get("css-flexbox").title == "Flexbox", "lookup by id should work"
    with pytest.raises(KeyError):
        index.get("nope")
