"""Utility helpers shared by the guides configuration loader."""

from __future__ import annotations

import typing as typ

from learning_guides.quiz import QuizError, SessionSettings

from .models import GuidesConfigError, TopicConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_topics(payload: typ.Mapping[str, typ.Any]) -> dict[str, TopicConfig]:
    """Build topic configs, accepting either mappings or bare display names."""
    topics: dict[str, TopicConfig] = {}
    for key, value in payload.items():
        topic_id = str(key).strip()
        match value:
            case dict():
                name = _optional_str(value.get("name"))
            case str() | None:
                name = _optional_str(value)
            case _:
                msg = f"Topic '{topic_id}' must map to a name or a mapping."
                raise GuidesConfigError(msg)
        topics[topic_id] = TopicConfig(
            id=topic_id, name=name or topic_id.replace("-", " ").title()
        )
    return topics


def _build_languages(value: object) -> tuple[str, ...]:
    """Normalise the configured language list into lowercase codes."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        msg = "'languages' must be a non-empty list of two-letter codes."
        raise GuidesConfigError(msg)
    languages: list[str] = []
    for item in value:
        code = str(item).strip().lower()
        if len(code) != 2 or not code.isalpha():  # noqa: PLR2004 - ISO 639-1
            msg = f"Invalid language code '{item}'."
            raise GuidesConfigError(msg)
        if code not in languages:
            languages.append(code)
    return tuple(languages)


def _build_quiz_settings(payload: typ.Mapping[str, typ.Any]) -> SessionSettings:
    """Build validated quiz defaults from the ``quiz`` mapping."""
    base = SessionSettings()
    raw_count = payload.get("questions_per_topic", base.questions_per_topic)
    try:
        questions_per_topic = int(raw_count)
    except (TypeError, ValueError) as exc:
        msg = f"'questions_per_topic' must be an integer, got {raw_count!r}."
        raise GuidesConfigError(msg) from exc
    try:
        return SessionSettings(
            questions_per_topic=questions_per_topic,
            session_mode=str(payload.get("session_mode", base.session_mode)),
            question_types=str(payload.get("question_types", base.question_types)),
        )
    except QuizError as exc:
        raise GuidesConfigError(str(exc)) from exc


__all__ = [
    "_build_languages",
    "_build_quiz_settings",
    "_build_topics",
    "_optional_str",
]
