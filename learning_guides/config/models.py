"""Typed dataclasses describing guides configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from learning_guides._constants import DEFAULT_GUIDES_DIR, SUPPORTED_LANGUAGES
from learning_guides.quiz import SessionSettings
from learning_guides.sources import DirectoryGuideSource, GuideSource, HttpGuideSource


class GuidesConfigError(ValueError):
    """Raised when the guides configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class TopicConfig:
    """Display metadata for a guide topic."""

    id: str
    name: str


@dc.dataclass(slots=True)
class GuidesConfig:
    """A fully resolved guides configuration sourced from YAML."""

    topics: dict[str, TopicConfig]
    guides_dir: Path = DEFAULT_GUIDES_DIR
    base_url: str | None = None
    languages: tuple[str, ...] = SUPPORTED_LANGUAGES
    default_language: str = "en"
    pygments_style: str = "monokai"
    quiz: SessionSettings = dc.field(default_factory=SessionSettings)

    def topic_name(self, topic_id: str) -> str:
        """Return the display name of ``topic_id``, falling back to the id."""
        topic = self.topics.get(topic_id)
        return topic.name if topic else topic_id

    @property
    def topic_names(self) -> dict[str, str]:
        """Return a mapping of topic ids to display names."""
        return {key: topic.name for key, topic in self.topics.items()}

    def get_topic(self, topic_id: str) -> TopicConfig:
        """Return the configured topic or raise with the known ids."""
        try:
            return self.topics[topic_id]
        except KeyError as exc:
            available = ", ".join(sorted(self.topics))
            msg = f"Unknown topic '{topic_id}'. Known topics: {available}"
            raise KeyError(msg) from exc

    def source(self) -> GuideSource:
        """Return the guide source described by this configuration."""
        if self.base_url:
            return HttpGuideSource(self.base_url)
        return DirectoryGuideSource(self.guides_dir, languages=self.languages)


__all__ = ["GuidesConfig", "GuidesConfigError", "TopicConfig"]
