r"""Flashcards, multiple-choice questions, and scored study sessions.

Concepts extracted from the guides become two kinds of study items:

* :class:`Flashcard` items are self-graded: the learner reveals the answer and
  reports whether they knew it.
* :class:`MultipleChoiceQuestion` items offer the correct description or
  comparison alongside up to three distractors taken from other concepts.

:class:`QuestionGenerator` builds single-topic decks and mixed multi-topic
sessions; :class:`QuizSession` walks the items and tracks the score. A seeded
``random.Random`` makes every shuffle reproducible.

Example
-------
>>> import random
>>> from learning_guides.concepts import Concept
>>> from learning_guides.quiz import QuestionGenerator
>>> concepts = [Concept("Flexbox", "One-dimensional layout.", "Grid is 2D.", "css")]
>>> cards = QuestionGenerator("en", random.Random(1)).flashcards(concepts)
>>> [card.kind for card in cards]
['description', 'comparison']
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import math
import random
import typing as typ

from .texts import text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .concepts import Concept

SESSION_MODES = ("mixed", "sequential")
QUESTION_TYPES = ("flashcard", "multiple-choice", "both")
DISTRACTOR_COUNT = 3
EXCELLENT_RATIO = 0.8
GOOD_RATIO = 0.6
_MINUTES_PER_QUESTION = {"flashcard": 0.5, "multiple-choice": 0.75, "both": 0.6}


class QuizError(ValueError):
    """Raised for invalid quiz settings or misuse of a session."""


@dc.dataclass(frozen=True, slots=True)
class SessionSettings:
    """How a mixed session selects and orders its questions.

    Attributes
    ----------
    questions_per_topic : int
        Number of concepts taken from the start of each topic.
    session_mode : str
        ``"mixed"`` shuffles all items; ``"sequential"`` keeps topic order.
    question_types : str
        ``"flashcard"``, ``"multiple-choice"`` or ``"both"``.
    """

    questions_per_topic: int = 5
    session_mode: str = "mixed"
    question_types: str = "both"

    def __post_init__(self) -> None:
        if self.questions_per_topic < 1:
            msg = "'questions_per_topic' must be at least 1."
            raise QuizError(msg)
        if self.session_mode not in SESSION_MODES:
            msg = f"'session_mode' must be one of {', '.join(SESSION_MODES)}."
            raise QuizError(msg)
        if self.question_types not in QUESTION_TYPES:
            msg = f"'question_types' must be one of {', '.join(QUESTION_TYPES)}."
            raise QuizError(msg)

    @property
    def includes_flashcards(self) -> bool:
        """Return whether flashcards are part of the session."""
        return self.question_types in ("flashcard", "both")

    @property
    def includes_multiple_choice(self) -> bool:
        """Return whether multiple-choice questions are part of the session."""
        return self.question_types in ("multiple-choice", "both")


@dc.dataclass(frozen=True, slots=True)
class Flashcard:
    """Self-graded card asking for a concept's description or comparison."""

    id: int
    topic: str
    concept: str
    description: str
    comparison: str
    kind: str = "description"

    def prompt(self, language: str) -> str:
        """Return the localised question shown on the front of the card."""
        key = "comparison_prompt" if self.kind == "comparison" else "definition_prompt"
        return text(language, key, name=self.concept)

    @property
    def answer(self) -> str:
        """Return the text revealed on the back of the card."""
        return self.comparison if self.kind == "comparison" else self.description


@dc.dataclass(frozen=True, slots=True)
class MultipleChoiceQuestion:
    """Question with one correct option among shuffled distractors."""

    id: int
    topic: str
    concept: str
    kind: str
    prompt: str
    correct_answer: str
    options: tuple[str, ...]

    def is_correct(self, option: str) -> bool:
        """Return whether ``option`` is the correct answer."""
        return option == self.correct_answer

    @property
    def answer(self) -> str:
        """Return the correct answer."""
        return self.correct_answer


QuizItem = Flashcard | MultipleChoiceQuestion


@dc.dataclass(frozen=True, slots=True)
class ReviewedItem:
    """Outcome of answering one item."""

    item: QuizItem
    is_correct: bool
    answered_at: dt.datetime

    @property
    def topic(self) -> str:
        """Return the topic of the answered item."""
        return self.item.topic


class QuestionGenerator:
    """Build study items from concepts with a reproducible random source."""

    def __init__(self, language: str = "en", rng: random.Random | None = None) -> None:
        self.language = language
        self.rng = rng or random.Random()

    def shuffle(self, items: cabc.Sequence[typ.Any]) -> list[typ.Any]:
        """Return a shuffled copy of ``items``."""
        shuffled = list(items)
        self.rng.shuffle(shuffled)
        return shuffled

    def flashcards(
        self, concepts: cabc.Sequence[Concept], *, start_id: int = 0
    ) -> list[Flashcard]:
        """Return a description card per concept plus a card per comparison."""
        cards: list[Flashcard] = []
        for concept in concepts:
            kinds = [
                kind
                for kind, value in (
                    ("description", concept.description),
                    ("comparison", concept.comparison),
                )
                if value
            ]
            for kind in kinds:
                cards.append(
                    Flashcard(
                        id=start_id + len(cards),
                        topic=concept.topic,
                        concept=concept.name,
                        description=concept.description,
                        comparison=concept.comparison,
                        kind=kind,
                    )
                )
        return cards

    def multiple_choice(
        self,
        concepts: cabc.Sequence[Concept],
        *,
        kinds: tuple[str, ...] = ("definition", "comparison"),
        require_full_options: bool = False,
        start_id: int = 0,
    ) -> list[MultipleChoiceQuestion]:
        """Return definition and comparison questions for ``concepts``.

        Parameters
        ----------
        concepts : Sequence[Concept]
            Concepts of one guide; distractors are drawn from this sequence.
        kinds : tuple[str, ...], optional
            Question kinds to generate.
        require_full_options : bool, optional
            Skip questions that cannot be given three distractors.
        start_id : int, optional
            Identifier assigned to the first generated question.
        """
        questions: list[MultipleChoiceQuestion] = []
        for concept in concepts:
            for kind in kinds:
                question = self._question(
                    concept, concepts, kind, start_id + len(questions)
                )
                if question is None:
                    continue
                if require_full_options and len(question.options) <= DISTRACTOR_COUNT:
                    continue
                questions.append(question)
        return questions

    def mixed(
        self,
        concepts_by_topic: cabc.Mapping[str, cabc.Sequence[Concept]],
        settings: SessionSettings,
    ) -> list[QuizItem]:
        """Build a multi-topic session.

        Each topic contributes its first ``questions_per_topic`` concepts; a
        concept yields a flashcard and, when three distractors exist, a
        definition question, depending on ``settings.question_types``.

        Raises
        ------
        QuizError
            If fewer than two topics are selected.
        """
        if len(concepts_by_topic) < 2:  # noqa: PLR2004 - a mix needs two topics
            msg = "Select at least 2 topics for a mixed session."
            raise QuizError(msg)

        items: list[QuizItem] = []
        for concepts in concepts_by_topic.values():
            for concept in concepts[: settings.questions_per_topic]:
                if not concept.description:
                    continue
                if settings.includes_flashcards:
                    items.append(
                        Flashcard(
                            id=len(items),
                            topic=concept.topic,
                            concept=concept.name,
                            description=concept.description,
                            comparison=concept.comparison,
                        )
                    )
                if settings.includes_multiple_choice:
                    question = self._question(concept, concepts, "definition", len(items))
                    if question and len(question.options) > DISTRACTOR_COUNT:
                        items.append(question)
        if settings.session_mode == "mixed":
            return self.shuffle(items)
        return items

    def _question(
        self,
        concept: Concept,
        pool: cabc.Sequence[Concept],
        kind: str,
        question_id: int,
    ) -> MultipleChoiceQuestion | None:
        """Return one question of ``kind`` or ``None`` if the concept lacks the field."""
        field = "comparison" if kind == "comparison" else "description"
        correct = getattr(concept, field)
        if not correct:
            return None
        candidates = [
            getattr(other, field)
            for other in pool
            if other.name != concept.name and getattr(other, field)
        ]
        distractors = self.shuffle(dict.fromkeys(c for c in candidates if c != correct))
        options = self.shuffle([correct, *distractors[:DISTRACTOR_COUNT]])
        prompt_key = "comparison_prompt" if kind == "comparison" else "definition_prompt"
        return MultipleChoiceQuestion(
            id=question_id,
            topic=concept.topic,
            concept=concept.name,
            kind=kind,
            prompt=text(self.language, prompt_key, name=concept.name),
            correct_answer=correct,
            options=tuple(options),
        )


class QuizSession:
    """Walk through study items in order while tracking the score."""

    def __init__(self, items: cabc.Sequence[QuizItem]) -> None:
        self.items: list[QuizItem] = list(items)
        self.index = 0
        self.reviewed: list[ReviewedItem] = []

    @property
    def total(self) -> int:
        """Return the number of items in the session."""
        return len(self.items)

    @property
    def current(self) -> QuizItem | None:
        """Return the item awaiting an answer, or ``None`` when complete."""
        if self.is_complete:
            return None
        return self.items[self.index]

    @property
    def is_complete(self) -> bool:
        """Return whether every item has been answered."""
        return self.index >= len(self.items)

    @property
    def score(self) -> tuple[int, int]:
        """Return ``(correct, answered)``."""
        correct = sum(1 for review in self.reviewed if review.is_correct)
        return correct, len(self.reviewed)

    @property
    def accuracy(self) -> float:
        """Return the ratio of correct answers, ``0.0`` before any answer."""
        correct, answered = self.score
        return correct / answered if answered else 0.0

    def record(self, is_correct: bool) -> ReviewedItem:  # noqa: FBT001
        """Record the answer to the current item and advance.

        Raises
        ------
        QuizError
            If the session is already complete.
        """
        item = self.current
        if item is None:
            msg = "The session is already complete."
            raise QuizError(msg)
        review = ReviewedItem(
            item=item, is_correct=is_correct, answered_at=dt.datetime.now(dt.UTC)
        )
        self.reviewed.append(review)
        self.index += 1
        return review

    def answer(self, option: str) -> ReviewedItem:
        """Answer the current multiple-choice question with ``option``."""
        item = self.current
        if not isinstance(item, MultipleChoiceQuestion):
            msg = "The current item is not a multiple-choice question."
            raise QuizError(msg)
        return self.record(item.is_correct(option))

    def restart(self, rng: random.Random | None = None) -> None:
        """Reset the score and, when ``rng`` is given, reshuffle the items."""
        if rng is not None:
            rng.shuffle(self.items)
        self.index = 0
        self.reviewed = []


def score_message(ratio: float, language: str = "en") -> str:
    """Return the encouragement line for a score ratio between 0 and 1."""
    if ratio >= EXCELLENT_RATIO:
        return text(language, "excellent")
    if ratio >= GOOD_RATIO:
        return text(language, "good")
    return text(language, "practice")


def estimated_minutes(settings: SessionSettings, topic_count: int) -> int:
    """Return the estimated session length in whole minutes."""
    total = topic_count * settings.questions_per_topic
    return math.ceil(round(total * _MINUTES_PER_QUESTION[settings.question_types], 6))


__all__ = [
    "QUESTION_TYPES",
    "SESSION_MODES",
    "Flashcard",
    "MultipleChoiceQuestion",
    "QuestionGenerator",
    "QuizError",
    "QuizItem",
    "QuizSession",
    "ReviewedItem",
    "SessionSettings",
    "estimated_minutes",
    "score_message",
]
