"""Drive a :class:`~learning_guides.quiz.QuizSession` from a terminal.

Input and output are injected so the loop can be exercised without a TTY:
``prompt`` behaves like :func:`input` and ``out`` like :func:`print`.
"""

from __future__ import annotations

import typing as typ

from .quiz import MultipleChoiceQuestion, QuizSession, score_message
from .report import percentage
from .texts import AFFIRMATIVE_ANSWERS, text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .quiz import Flashcard


def run_terminal_session(
    session: QuizSession,
    *,
    language: str = "en",
    prompt: cabc.Callable[[str], str] | None = None,
    out: cabc.Callable[[str], None] = print,
) -> QuizSession:
    """Ask every remaining item of ``session`` and return the session.

    ``prompt`` defaults to :func:`input`, looked up when the session starts.
    """
    prompt = prompt or input
    while not session.is_complete:
        item = session.current
        out(
            f"\n{text(language, 'card')} {session.index + 1} "
            f"{text(language, 'of')} {session.total}"
        )
        if isinstance(item, MultipleChoiceQuestion):
            _ask_multiple_choice(session, item, language, prompt, out)
        else:
            _ask_flashcard(session, typ.cast("Flashcard", item), language, prompt, out)
        correct, answered = session.score
        out(f"{text(language, 'score')}: {correct}/{answered}")

    correct, answered = session.score
    if answered:
        out(
            f"\n{text(language, 'session_complete')} {correct}/{answered} "
            f"({percentage(correct, answered)}%) {score_message(session.accuracy, language)}"
        )
    else:
        out(text(language, "no_items"))
    return session


def _ask_flashcard(
    session: QuizSession,
    card: Flashcard,
    language: str,
    prompt: cabc.Callable[[str], str],
    out: cabc.Callable[[str], None],
) -> None:
    kind = "comparison" if card.kind == "comparison" else "definition"
    out(f"[{text(language, kind)}] {card.concept}")
    out(f"{text(language, 'question')} {card.prompt(language)}")
    prompt(f"{text(language, 'reveal')} ")
    out(f"{text(language, 'answer')} {card.answer}")
    reply = prompt(f"{text(language, 'did_you_know')} ")
    session.record(reply.strip().lower() in AFFIRMATIVE_ANSWERS)


def _ask_multiple_choice(
    session: QuizSession,
    question: MultipleChoiceQuestion,
    language: str,
    prompt: cabc.Callable[[str], str],
    out: cabc.Callable[[str], None],
) -> None:
    out(f"{text(language, 'question')} {question.prompt}")
    out(text(language, "select_answer"))
    for number, option in enumerate(question.options, start=1):
        out(f"  {number}. {option}")
    choice = _read_choice(prompt, len(question.options))
    review = session.answer(question.options[choice - 1])
    if review.is_correct:
        out(text(language, "correct"))
    else:
        out(f"{text(language, 'incorrect')}. {text(language, 'correct_answer')}")
        out(f"  {question.correct_answer}")


def _read_choice(prompt: cabc.Callable[[str], str], count: int) -> int:
    """Prompt until the reply is an option number between 1 and ``count``."""
    while True:
        reply = prompt(f"[1-{count}] ").strip()
        if reply.isdigit() and 1 <= int(reply) <= count:
            return int(reply)


__all__ = ["run_terminal_session"]
