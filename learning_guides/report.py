"""Summarise a finished study session and export it as JSON or HTML.

:func:`build_session_report` turns the reviewed items of a
:class:`~learning_guides.quiz.QuizSession` into per-topic statistics,
recommendations, and strong/weak areas. :class:`ReportWriter` persists that
report as JSON (via msgspec) or as a standalone HTML page rendered from the
``session_report.jinja`` template.

Typical usage after a session:

>>> from learning_guides.report import ReportWriter, build_session_report
>>> report = build_session_report(session.reviewed, ["css", "git"])  # doctest: +SKIP
>>> ReportWriter().write_html(report, Path("report.html"))  # doctest: +SKIP
PosixPath('report.html')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import math
import typing as typ
from pathlib import Path

import msgspec.json
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .quiz import MultipleChoiceQuestion, score_message
from .renderer import GuideRenderer
from .texts import labels, text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .quiz import ReviewedItem

WEAK_THRESHOLD = 70
STRONG_THRESHOLD = 80


@dc.dataclass(frozen=True, slots=True)
class TopicStats:
    """Correct answers, total answers, and rounded percentage for one topic."""

    correct: int
    total: int
    percentage: int


@dc.dataclass(frozen=True, slots=True)
class SessionReport:
    """Aggregated outcome of a study session.

    Attributes
    ----------
    total_questions : int
        Number of answered items.
    total_correct : int
        Number of items answered correctly.
    overall_score : int
        Rounded percentage of correct answers.
    topics : dict[str, TopicStats]
        Statistics per selected topic, in selection order.
    recommendations : list[str]
        Localised advice lines derived from the topic statistics.
    strong_areas : list[str]
        Topics at or above the weak threshold, best first.
    areas_to_improve : list[str]
        Topics below the weak threshold, weakest first.
    language : str
        Language used for recommendations and labels.
    generated_at : datetime
        UTC timestamp of the report.
    """

    total_questions: int
    total_correct: int
    overall_score: int
    topics: dict[str, TopicStats]
    recommendations: list[str]
    strong_areas: list[str]
    areas_to_improve: list[str]
    language: str
    generated_at: dt.datetime


def percentage(correct: int, total: int) -> int:
    """Return ``correct / total`` as a percentage rounded half up; 0 when empty."""
    if total <= 0:
        return 0
    return math.floor(correct * 100 / total + 0.5)


def build_session_report(
    reviewed: cabc.Sequence[ReviewedItem],
    topics: cabc.Sequence[str] | None = None,
    topic_names: cabc.Mapping[str, str] | None = None,
    *,
    language: str = "en",
    generated_at: dt.datetime | None = None,
) -> SessionReport:
    """Aggregate reviewed items into a :class:`SessionReport`.

    Parameters
    ----------
    reviewed : Sequence[ReviewedItem]
        Answers recorded during the session.
    topics : Sequence[str], optional
        Selected topic ids; defaults to the topics seen in ``reviewed``.
        Selected topics without answers report 0%.
    topic_names : Mapping[str, str], optional
        Display names used in recommendations.
    language : str, optional
        Language of the recommendation lines.
    generated_at : datetime, optional
        Override for the report timestamp.
    """
    names = topic_names or {}
    selected = list(topics) if topics else list(dict.fromkeys(r.topic for r in reviewed))

    stats: dict[str, TopicStats] = {}
    for topic in selected:
        answers = [review for review in reviewed if review.topic == topic]
        correct = sum(1 for review in answers if review.is_correct)
        stats[topic] = TopicStats(
            correct=correct, total=len(answers), percentage=percentage(correct, len(answers))
        )

    total_correct = sum(1 for review in reviewed if review.is_correct)
    strong = sorted(
        (topic for topic, data in stats.items() if data.percentage >= WEAK_THRESHOLD),
        key=lambda topic: -stats[topic].percentage,
    )
    weak = sorted(
        (topic for topic, data in stats.items() if data.percentage < WEAK_THRESHOLD),
        key=lambda topic: stats[topic].percentage,
    )
    return SessionReport(
        total_questions=len(reviewed),
        total_correct=total_correct,
        overall_score=percentage(total_correct, len(reviewed)),
        topics=stats,
        recommendations=_recommendations(stats, names, language),
        strong_areas=strong,
        areas_to_improve=weak,
        language=language,
        generated_at=generated_at or dt.datetime.now(dt.UTC),
    )


def _recommendations(
    stats: cabc.Mapping[str, TopicStats],
    names: cabc.Mapping[str, str],
    language: str,
) -> list[str]:
    """Return focus and praise lines for weak and strong topics."""
    weak = [
        names.get(topic, topic)
        for topic, data in stats.items()
        if data.percentage < WEAK_THRESHOLD
    ]
    strong = [
        names.get(topic, topic)
        for topic, data in stats.items()
        if data.percentage >= STRONG_THRESHOLD
    ]
    lines: list[str] = []
    if weak:
        lines.append(text(language, "focus", topics=", ".join(weak)))
    if strong:
        lines.append(text(language, "praise", topics=", ".join(strong)))
    return lines


class ReportWriter:
    """Persist session reports as JSON or standalone HTML."""

    def __init__(
        self,
        *,
        renderer: GuideRenderer | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the writer and its Jinja environment.

        Parameters
        ----------
        renderer : GuideRenderer, optional
            Renderer used for answer markdown; defaults to the ``monokai``
            style.
        templates_dir : Path, optional
            Directory containing ``session_report.jinja``. Defaults to the
            package templates.
        """
        self.renderer = renderer or GuideRenderer()
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("session_report.jinja")

    def write_json(self, report: SessionReport, path: Path) -> Path:
        """Write ``report`` as JSON and return ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(msgspec.json.format(msgspec.json.encode(report), indent=2))
        return path

    def write_html(
        self,
        report: SessionReport,
        path: Path,
        *,
        reviewed: cabc.Sequence[ReviewedItem] = (),
        topic_names: cabc.Mapping[str, str] | None = None,
    ) -> Path:
        """Render ``report`` (and optionally each answer) into an HTML page."""
        names = topic_names or {}
        context = {
            "report": report,
            "texts": labels(report.language),
            "score_message": score_message(report.overall_score / 100, report.language),
            "topic_rows": [
                {
                    "id": topic,
                    "name": names.get(topic, topic),
                    "stats": data,
                    "level": _level(data.percentage),
                }
                for topic, data in report.topics.items()
            ],
            "strong_areas": [names.get(topic, topic) for topic in report.strong_areas],
            "areas_to_improve": [
                names.get(topic, topic) for topic in report.areas_to_improve
            ],
            "reviewed": [self._review_row(review, report.language) for review in reviewed],
            "pygments_css": self.renderer.stylesheet,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path

    def _review_row(self, review: ReviewedItem, language: str) -> dict[str, typ.Any]:
        item = review.item
        if isinstance(item, MultipleChoiceQuestion):
            prompt = item.prompt
            kind = text(language, "comparison" if item.kind == "comparison" else "definition")
        else:
            prompt = item.prompt(language)
            kind = text(language, item.kind if item.kind == "comparison" else "definition")
        return {
            "topic": item.topic,
            "concept": item.concept,
            "kind": kind,
            "prompt": prompt,
            "answer_html": self.renderer.markdown(item.answer),
            "is_correct": review.is_correct,
        }


def _level(value: int) -> str:
    """Return the CSS level name used to colour a percentage."""
    if value >= STRONG_THRESHOLD:
        return "strong"
    if value >= 60:  # noqa: PLR2004 - matches the "good" score band
        return "fair"
    return "weak"


__all__ = [
    "ReportWriter",
    "SessionReport",
    "TopicStats",
    "build_session_report",
    "percentage",
]
