"""Cyclopts CLI entrypoint for linting, browsing, and studying the guides.

The ``guides`` console script defined here checks the guide corpus for
structural defects, lists and searches section headings, prints a single
concept (or its highlighted example), and runs interactive flashcard and
multiple-choice sessions that can export a scored report.

Examples
--------
Lint the configured guides directory:

>>> from learning_guides.cli import main
>>> main()  # doctest: +SKIP

Run a reproducible mixed quiz and keep the HTML report:

>>> from learning_guides.cli import app
>>> app.run(
...     ["quiz", "--topics", "css", "--topics", "git", "--seed", "7",
...      "--report-html", "report.html"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import random
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .concepts import extract_concepts, split_concept_view
from .config import GuidesConfig, load_guides_config
from .content_index import ContentIndex
from .lint import GuideLinter
from .quiz import (
    QuestionGenerator,
    QuizItem,
    QuizSession,
    SessionSettings,
    estimated_minutes,
)
from .renderer import GuideRenderer, highlight_terminal
from .report import ReportWriter, build_session_report
from .sources import GuideLoader
from .terminal import run_terminal_session
from .texts import text

DEFAULT_CONFIG = Path("config/guides.yaml")

app = App(name="guides", config=cyclopts.config.Env("GUIDES_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to guides config", env_var="GUIDES_CONFIG")
]
LanguageOption = typ.Annotated[
    str | None, Parameter(help="Guide language (defaults to the configured one)")
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log progress to stderr")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:  # noqa: FBT001
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_language(site: GuidesConfig, language: str | None) -> str:
    resolved = (language or site.default_language).lower()
    if resolved not in site.languages:
        msg = f"Unsupported language '{resolved}' (expected {', '.join(site.languages)})."
        raise ValueError(msg)
    return resolved


def _resolve_topics(site: GuidesConfig, topics: list[str] | None) -> list[str]:
    selected = list(dict.fromkeys(topics)) if topics else list(site.topics)
    for topic in selected:
        site.get_topic(topic)
    return selected


@app.command(help="Check guide file names, fences, headings, and translations.")
def lint(
    *,
    root: typ.Annotated[
        Path | None, Parameter(help="Override the guides directory")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Lint every guide and exit with status 1 when issues are found.

    Parameters
    ----------
    root : Path or None, optional
        Directory to lint; defaults to ``guides_dir`` from the configuration.
    config : Path, optional
        Path to the ``guides.yaml`` configuration file (overridable via
        ``GUIDES_CONFIG``).
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    SystemExit
        With status 1 when at least one issue is reported.
    """
    _configure_logging(verbose)
    site = load_guides_config(config)
    linter = GuideLinter(root or site.guides_dir, languages=site.languages)
    report = linter.run()
    for issue in report.issues:
        print(issue.format())
    print(f"checked {report.files_checked} files, {len(report.issues)} issues")
    if not report.ok:
        raise SystemExit(1)


@app.command(help="Print the ordered section headings of a guide.")
def headings(
    topic: str,
    *,
    language: LanguageOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print each ``##`` heading of ``topic`` on its own line."""
    _configure_logging(verbose)
    site = load_guides_config(config)
    guide = GuideLoader(site.source()).load(topic, _resolve_language(site, language))
    for heading in guide.headings:
        print(heading)


@app.command(help="Search section headings across the selected topics.")
def search(
    query: str,
    *,
    topics: typ.Annotated[
        list[str] | None, Parameter(help="Topics to search (defaults to all)")
    ] = None,
    language: LanguageOption = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print every section whose heading contains ``query``."""
    _configure_logging(verbose)
    site = load_guides_config(config)
    lang = _resolve_language(site, language)
    guides = GuideLoader(site.source()).load_many(_resolve_topics(site, topics), lang)
    index = ContentIndex.from_guides(guides, site.topic_names)
    results = index.search(query)
    for result in results:
        entry = result.entry
        print(f"[{entry.topic_name}] {entry.title} ({entry.id})")
    if not results:
        print(f"no sections match '{query}'")


@app.command(help="Print a concept, or its highlighted example.")
def show(
    topic: str,
    heading: str,
    *,
    language: LanguageOption = None,
    example: typ.Annotated[
        bool, Parameter(help="Print the example code instead of the body")
    ] = False,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print the body of the section titled ``heading`` in ``topic``.

    Raises
    ------
    KeyError
        If the guide has no section with that exact heading.
    """
    _configure_logging(verbose)
    site = load_guides_config(config)
    guide = GuideLoader(site.source()).load(topic, _resolve_language(site, language))
    section = guide.get_section(heading)
    print(f"## {section.title}")
    if not example:
        print(split_concept_view(section).body)
        return
    if not section.examples:
        print("(no example)")
        return
    for sample in section.examples:
        print(highlight_terminal(sample.code, sample.language).rstrip("\n"))


@app.command(help="Run an interactive flashcard or multiple-choice session.")
def quiz(  # noqa: PLR0913 - mirrors the session options
    *,
    topics: typ.Annotated[
        list[str] | None, Parameter(help="Topics to study (defaults to all)")
    ] = None,
    language: LanguageOption = None,
    mode: typ.Annotated[
        typ.Literal["flashcard", "multiple-choice", "mixed"],
        Parameter(help="Single-topic flashcards, multiple choice, or a mixed session"),
    ] = "mixed",
    questions_per_topic: int | None = None,
    session_mode: typ.Literal["mixed", "sequential"] | None = None,
    question_types: typ.Literal["flashcard", "multiple-choice", "both"] | None = None,
    seed: typ.Annotated[
        int | None, Parameter(help="Seed for reproducible shuffles")
    ] = None,
    report_json: typ.Annotated[
        Path | None, Parameter(help="Write the session report as JSON")
    ] = None,
    report_html: typ.Annotated[
        Path | None, Parameter(help="Write the session report as HTML")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Study the selected topics and optionally export the report.

    Parameters
    ----------
    topics : list[str] or None, optional
        Topic ids to include. ``flashcard`` and ``multiple-choice`` modes use
        the first topic only; ``mixed`` needs at least two.
    language : str or None, optional
        Guide language; defaults to the configured default language.
    mode : str, optional
        ``"flashcard"``, ``"multiple-choice"`` or ``"mixed"`` (default).
    questions_per_topic, session_mode, question_types : optional
        Overrides for the configured mixed-session settings.
    seed : int or None, optional
        Seed for the random source so the session can be replayed.
    report_json, report_html : Path or None, optional
        Destinations for the exported report.
    config : Path, optional
        Path to the ``guides.yaml`` configuration file.
    verbose : bool, optional
        Enable debug logging.

    Raises
    ------
    QuizError
        If the settings are invalid or a mixed session has fewer than two
        topics.
    """
    _configure_logging(verbose)
    site = load_guides_config(config)
    lang = _resolve_language(site, language)
    selected = _resolve_topics(site, topics)
    if mode != "mixed":
        selected = selected[:1]
    guides = GuideLoader(site.source()).load_many(selected, lang)
    concepts = {topic: extract_concepts(guide) for topic, guide in guides.items()}

    rng = random.Random(seed)
    generator = QuestionGenerator(lang, rng)
    items: list[QuizItem]
    if mode == "flashcard":
        items = generator.shuffle(generator.flashcards(concepts[selected[0]]))
    elif mode == "multiple-choice":
        items = generator.shuffle(generator.multiple_choice(concepts[selected[0]]))
    else:
        defaults = site.quiz
        settings = SessionSettings(
            questions_per_topic=defaults.questions_per_topic
            if questions_per_topic is None
            else questions_per_topic,
            session_mode=defaults.session_mode if session_mode is None else session_mode,
            question_types=defaults.question_types
            if question_types is None
            else question_types,
        )
        items = generator.mixed(concepts, settings)
        minutes = estimated_minutes(settings, len(selected))
        print(text(lang, "estimated_time", minutes=minutes))

    session = run_terminal_session(QuizSession(items), language=lang)
    if not (report_json or report_html) or not session.reviewed:
        return
    report = build_session_report(
        session.reviewed, selected, site.topic_names, language=lang
    )
    writer = ReportWriter(renderer=GuideRenderer(site.pygments_style))
    if report_json:
        print(f"wrote {_format_path(writer.write_json(report, report_json))}")
    if report_html:
        path = writer.write_html(
            report, report_html, reviewed=session.reviewed, topic_names=site.topic_names
        )
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``guides`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
