"""Unit tests for flashcards, multiple-choice questions, and sessions."""

from __future__ import annotations

import random

import pytest

from learning_guides.concepts import Concept
from learning_guides.quiz import (
    Flashcard,
    MultipleChoiceQuestion,
    QuestionGenerator,
    QuizError,
    QuizSession,
    SessionSettings,
    estimated_minutes,
    score_message,
)


def _concepts(topic: str, count: int = 5) -> list[Concept]:
    return [
        Concept(
            name=f"{topic} concept {idx}",
            description=f"{topic} description {idx}",
            comparison=f"{topic} comparison {idx}" if idx % 2 == 0 else "",
            topic=topic,
        )
        for idx in range(count)
    ]


@pytest.fixture
def generator() -> QuestionGenerator:
    """Return an English generator with a fixed seed."""
    return QuestionGenerator("en", random.Random(42))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"questions_per_topic": 0},
        {"session_mode": "random"},
        {"question_types": "essay"},
    ],
)
def test_invalid_settings_raise(kwargs: dict[str, object]) -> None:
    with pytest.raises(QuizError):
        SessionSettings(**kwargs)  # type: ignore[arg-type]


def test_settings_defaults() -> None:
    settings = SessionSettings()
    assert (settings.questions_per_topic, settings.session_mode, settings.question_types) == (
        5,
        "mixed",
        "both",
    ), "defaults should match the session configuration screen"
    assert settings.includes_flashcards and settings.includes_multiple_choice, (
        "'both' should include every question type"
    )


def test_flashcards_add_comparison_cards(generator: QuestionGenerator) -> None:
    cards = generator.flashcards(_concepts("css", 2))
    assert [(card.concept, card.kind) for card in cards] == [
        ("css concept 0", "description"),
        ("css concept 0", "comparison"),
        ("css concept 1", "description"),
    ], "a comparison card should follow concepts that have a comparison"
    assert [card.id for card in cards] == [0, 1, 2], "ids should be sequential"
    assert cards[1].answer == "css comparison 0", "comparison cards reveal the comparison"


def test_flashcard_prompts_are_localised() -> None:
    card = Flashcard(0, "css", "Flexbox", "desc", "comp", kind="comparison")
    assert card.prompt("en") == "How does Flexbox compare to other concepts?", "en prompt"
    assert card.prompt("es") == "¿Cómo se compara Flexbox con otros conceptos?", "es prompt"
    assert card.prompt("fr") == card.prompt("en"), "unknown languages fall back to English"


def test_multiple_choice_options(generator: QuestionGenerator) -> None:
    concepts = _concepts("git")
    questions = generator.multiple_choice(concepts, kinds=("definition",))
    assert len(questions) == 5, "one definition question per concept"
    for question in questions:
        assert len(question.options) == 4, "three distractors plus the answer"
        assert question.options.count(question.correct_answer) == 1, (
            "the correct answer must appear exactly once"
        )
        assert len(set(question.options)) == 4, "options should be distinct"
        assert all(option.startswith("git description") for option in question.options), (
            "distractors should come from the same field of other concepts"
        )
        assert question.prompt == f"What is {question.concept}?", "definition prompt"


def test_comparison_questions_only_for_concepts_with_comparisons(
    generator: QuestionGenerator,
) -> None:
    questions = generator.multiple_choice(_concepts("git"), kinds=("comparison",))
    assert [question.concept for question in questions] == [
        "git concept 0",
        "git concept 2",
        "git concept 4",
    ], "concepts without a comparison cannot produce comparison questions"
    assert all(len(question.options) == 3 for question in questions), (
        "only two other comparisons exist as distractors"
    )


def test_require_full_options_skips_small_pools(generator: QuestionGenerator) -> None:
    concepts = _concepts("html", 2)
    assert generator.multiple_choice(concepts, require_full_options=True) == [], (
        "two concepts cannot supply three distractors"
    )


def test_mixed_session_needs_two_topics(generator: QuestionGenerator) -> None:
    with pytest.raises(QuizError, match="at least 2 topics"):
        generator.mixed({"css": _concepts("css")}, SessionSettings())


def test_sequential_mixed_session_keeps_topic_order(generator: QuestionGenerator) -> None:
    settings = SessionSettings(questions_per_topic=2, session_mode="sequential")
    items = generator.mixed(
        {"css": _concepts("css"), "git": _concepts("git")}, settings
    )
    assert [item.topic for item in items] == ["css"] * 4 + ["git"] * 4, (
        "sequential sessions keep topic order"
    )
    assert [type(item) for item in items[:2]] == [Flashcard, MultipleChoiceQuestion], (
        "each concept yields a flashcard followed by a definition question"
    )
    assert [item.id for item in items] == list(range(8)), "ids should be sequential"


def test_mixed_session_respects_question_types(generator: QuestionGenerator) -> None:
    pools = {"css": _concepts("css"), "git": _concepts("git", 3)}
    flash_only = generator.mixed(pools, SessionSettings(question_types="flashcard"))
    assert all(isinstance(item, Flashcard) for item in flash_only), "flashcards only"
    assert len(flash_only) == 8, "five css concepts plus three git concepts"

    mc_only = generator.mixed(pools, SessionSettings(question_types="multiple-choice"))
    assert {item.topic for item in mc_only} == {"css"}, (
        "git has only three concepts, too few for three distractors"
    )


def test_mixed_shuffle_is_reproducible() -> None:
    pools = {"css": _concepts("css"), "git": _concepts("git")}
    first = QuestionGenerator("en", random.Random(7)).mixed(pools, SessionSettings())
    second = QuestionGenerator("en", random.Random(7)).mixed(pools, SessionSettings())
    assert [item.id for item in first] == [item.id for item in second], (
        "the same seed should produce the same order"
    )
    assert sorted(item.id for item in first) == list(range(20)), "no item may be lost"


def test_session_tracks_score() -> None:
    cards = QuestionGenerator("en", random.Random(1)).flashcards(_concepts("css", 3))
    session = QuizSession(cards)
    assert session.total == 5, "three description cards plus two comparison cards"
    session.record(True)
    session.record(False)
    assert session.score == (1, 2), f"unexpected score {session.score}"
    assert session.accuracy == 0.5, "accuracy is correct over answered"
    for _ in range(3):
        session.record(True)
    assert session.is_complete and session.current is None, "session should be done"
    with pytest.raises(QuizError):
        session.record(True)

    session.restart(random.Random(3))
    assert session.score == (0, 0) and session.index == 0, "restart resets progress"
    assert sorted(item.id for item in session.items) == [0, 1, 2, 3, 4], (
        "restart keeps every item"
    )


def test_session_answer_checks_multiple_choice(generator: QuestionGenerator) -> None:
    question = generator.multiple_choice(_concepts("git"), kinds=("definition",))[0]
    session = QuizSession([question])
    wrong = next(option for option in question.options if option != question.correct_answer)
    review = session.answer(wrong)
    assert not review.is_correct, "a distractor is not the answer"
    assert review.topic == "git", "reviews expose the item topic"

    card = generator.flashcards(_concepts("git", 1))[0]
    with pytest.raises(QuizError, match="not a multiple-choice"):
        QuizSession([card]).answer("anything")


def test_empty_session_accuracy() -> None:
    session = QuizSession([])
    assert session.is_complete, "an empty session is complete immediately"
    assert session.accuracy == 0.0, "no answers means zero accuracy"


@pytest.mark.parametrize(
    ("ratio", "language", "expected"),
    [
        (0.8, "en", "Excellent work!"),
        (0.79, "en", "Good job!"),
        (0.6, "en", "Good job!"),
        (0.59, "en", "Keep practicing!"),
        (1.0, "es", "¡Excelente trabajo!"),
        (0.0, "es", "¡Sigue practicando!"),
    ],
)
def test_score_message(ratio: float, language: str, expected: str) -> None:
    assert score_message(ratio, language) == expected, f"wrong message for {ratio}"


@pytest.mark.parametrize(
    ("question_types", "topics", "expected"),
    [
        ("flashcard", 2, 5),
        ("multiple-choice", 3, 12),
        ("both", 2, 6),
    ],
)
def test_estimated_minutes(question_types: str, topics: int, expected: int) -> None:
    settings = SessionSettings(question_types=question_types)
    assert estimated_minutes(settings, topics) == expected, (
        f"unexpected estimate for {question_types} over {topics} topics"
    )
