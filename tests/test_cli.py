"""Tests for the ``guides`` command-line interface."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path
from textwrap import dedent

import msgspec.json as msgspec_json
import pytest

from learning_guides import cli
from learning_guides.quiz import QuizError

REPO_ROOT = Path(__file__).resolve().parents[1]
GUIDES_DIR = REPO_ROOT / "public" / "guides"
ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _write_config(tmp_path: Path, guides_dir: Path = GUIDES_DIR) -> Path:
    path = tmp_path / "guides.yaml"
    path.write_text(
        dedent(
            f"""
            defaults:
              guides_dir: {guides_dir}
              languages: [en, es]
            topics:
              css: CSS
              git: Git
              html: HTML
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    return path


def _output_lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


def test_lint_shipped_guides(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.lint(config=_write_config(tmp_path))
    assert _output_lines(capsys) == ["checked 14 files, 0 issues"], (
        "the shipped corpus should lint clean"
    )


def test_lint_reports_issues_and_fails(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / "css-en.md").write_text("## A\n**Example:**\n```css\na {}\n", encoding="utf-8")
    (broken / "css-es.md").write_text("## A\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.lint(config=_write_config(tmp_path, broken))

    assert excinfo.value.code == 1, "lint issues should exit with status 1"
    lines = _output_lines(capsys)
    expected = (
        "css-en.md:3: [unclosed-fence] "
        "Fenced 'css' block after an example label is never closed."
    )
    assert lines[0].endswith(expected), (
        f"unexpected issue line {lines[0]!r}"
    )
    assert lines[-1] == "checked 2 files, 1 issues", "summary should count issues"


def test_lint_root_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    cli.lint(root=empty, config=_write_config(tmp_path))
    assert _output_lines(capsys) == ["checked 0 files, 0 issues"], "--root should win"


def test_headings_git_english(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.headings("git", config=_write_config(tmp_path))
    assert _output_lines(capsys) == [
        "Git vs GitHub",
        "Repositories",
        "Staging and Commits",
        "Remote Repositories",
        "Merging vs Rebasing",
        "Undoing Changes",
        "Branching Strategies",
    ], "git-en.md headings should be printed in document order"


def test_headings_git_spanish(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.headings("git", language="ES", config=_write_config(tmp_path))
    lines = _output_lines(capsys)
    assert len(lines) == 7, "the translation should have the same number of sections"
    assert (lines[0], lines[-1]) == ("Git vs GitHub", "Estrategias de Ramificación"), (
        f"unexpected Spanish headings {lines!r}"
    )


def test_unsupported_language(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unsupported language 'fr'"):
        cli.headings("git", language="fr", config=_write_config(tmp_path))


def test_search_across_topics(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.search("GIT", topics=["css", "git"], config=_write_config(tmp_path))
    assert _output_lines(capsys) == ["[Git] Git vs GitHub (git-git-vs-github)"], (
        "search should match headings case-insensitively"
    )


def test_search_without_matches(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.search("kubernetes", config=_write_config(tmp_path))
    assert _output_lines(capsys) == ["no sections match 'kubernetes'"], "no-match message"


def test_search_rejects_unknown_topics(tmp_path: Path) -> None:
    with pytest.raises(KeyError, match="svelte"):
        cli.search("git", topics=["svelte"], config=_write_config(tmp_path))


def test_show_body_hides_example(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.show("css", "Flexbox", config=_write_config(tmp_path))
    out = capsys.readouterr().out
    assert out.startswith("## Flexbox\n**Description:** Flexbox is"), f"got {out[:60]!r}"
    assert "**Comparison:**" in out, "comparison belongs to the body"
    assert "justify-content" not in out, "example code should be hidden"


def test_show_example_is_highlighted(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.show("css", "Flexbox", example=True, config=_write_config(tmp_path))
    out = capsys.readouterr().out
    assert "\x1b[" in out, "example should carry ANSI colours"
    assert "justify-content: space-between;" in ANSI_ESCAPE.sub("", out), (
        "highlighted code should keep its text"
    )


def test_show_missing_heading(tmp_path: Path) -> None:
    with pytest.raises(KeyError, match="Grid Areas"):
        cli.show("css", "Grid Areas", config=_write_config(tmp_path))


def test_quiz_flashcards_write_reports(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt="": "y")
    json_path = tmp_path / "reports" / "session.json"
    html_path = tmp_path / "reports" / "session.html"

    cli.quiz(
        topics=["html"],
        mode="flashcard",
        seed=3,
        report_json=json_path,
        report_html=html_path,
        config=_write_config(tmp_path),
    )

    payload = msgspec_json.decode(json_path.read_bytes())
    assert payload["total_questions"] == 10, "five concepts with comparisons make 10 cards"
    assert payload["overall_score"] == 100, "every card was known"
    assert payload["recommendations"] == ["Great job with: HTML"], "praise expected"
    assert html_path.is_file(), "HTML report should be written"
    out = capsys.readouterr().out
    assert f"wrote {json_path}" in out and f"wrote {html_path}" in out, (
        "written report paths should be printed"
    )


def test_quiz_mixed_sequential_multiple_choice(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt="": "1")
    json_path = tmp_path / "mixed.json"

    cli.quiz(
        topics=["css", "git"],
        questions_per_topic=2,
        session_mode="sequential",
        question_types="multiple-choice",
        seed=11,
        report_json=json_path,
        config=_write_config(tmp_path),
    )

    payload = msgspec_json.decode(json_path.read_bytes())
    assert payload["total_questions"] == 4, "two questions from each topic"
    assert list(payload["topics"]) == ["css", "git"], "topics keep selection order"


def test_quiz_mixed_needs_two_topics(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt="": "y")
    with pytest.raises(QuizError, match="at least 2 topics"):
        cli.quiz(topics=["css"], config=_write_config(tmp_path))


@pytest.mark.parametrize(
    ("overrides", "match"),
    [
        ({"questions_per_topic": 0}, "questions_per_topic"),
        ({"session_mode": ""}, "session_mode"),
        ({"question_types": ""}, "question_types"),
    ],
)
def test_quiz_rejects_falsy_overrides(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    overrides: dict[str, typ.Any],
    match: str,
) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt="": "y")
    with pytest.raises(QuizError, match=match):
        cli.quiz(topics=["css", "git"], config=_write_config(tmp_path), **overrides)


def test_quiz_prints_estimated_time(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt="": "y")
    cli.quiz(
        topics=["css", "git"],
        questions_per_topic=2,
        question_types="flashcard",
        config=_write_config(tmp_path),
    )
    lines = _output_lines(capsys)
    assert lines[0] == "Estimated time: ~2 min", (
        "four flashcards at half a minute each should be announced first"
    )


def test_lint_reports_undecodable_guide(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    broken = tmp_path / "broken"
    broken.mkdir()
    (broken / "css-en.md").write_bytes(b"## Caf\xe9\n")
    (broken / "css-es.md").write_text("## A\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.lint(config=_write_config(tmp_path, broken))

    assert excinfo.value.code == 1, "an undecodable guide should fail the run"
    lines = _output_lines(capsys)
    expected = "css-en.md:0: [invalid-encoding] File is not valid UTF-8 (byte 6)."
    assert lines[0].endswith(expected), (
        f"unexpected issue line {lines[0]!r}"
    )
