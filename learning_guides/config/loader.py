"""Load guides configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from learning_guides._constants import DEFAULT_GUIDES_DIR

from .helpers import (
    _build_languages,
    _build_quiz_settings,
    _build_topics,
    _optional_str,
)
from .models import GuidesConfig, GuidesConfigError


def load_guides_config(path: Path) -> GuidesConfig:
    """Load the YAML configuration describing the guide corpus and quiz defaults.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/guides.yaml``). Relative ``guides_dir`` values are kept as
        written and therefore resolve against the working directory.

    Returns
    -------
    GuidesConfig
        Parsed configuration including the topic catalogue, languages, guide
        location, and quiz defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    GuidesConfigError
        If required sections or fields are missing or invalid (for example,
        no topics are defined or the default language is not configured).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from learning_guides.config import load_guides_config
    >>> config = load_guides_config(Path("config/guides.yaml"))  # doctest: +SKIP
    >>> config.topic_name("next")  # doctest: +SKIP
    'Next.js'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}

    topics_raw = raw.get("topics") or {}
    if not isinstance(topics_raw, dict) or not topics_raw:
        msg = "No topics defined in guides configuration."
        raise GuidesConfigError(msg)
    topics = _build_topics(topics_raw)

    languages = _build_languages(defaults.get("languages", ["en", "es"]))
    default_language = str(defaults.get("default_language", languages[0])).lower()
    if default_language not in languages:
        msg = (
            f"Default language '{default_language}' is not one of the configured "
            f"languages ({', '.join(languages)})."
        )
        raise GuidesConfigError(msg)

    return GuidesConfig(
        topics=topics,
        guides_dir=Path(defaults.get("guides_dir", DEFAULT_GUIDES_DIR)),
        base_url=_optional_str(defaults.get("base_url")),
        languages=languages,
        default_language=default_language,
        pygments_style=defaults.get("pygments_style", "monokai"),
        quiz=_build_quiz_settings(raw.get("quiz", {}) or {}),
    )


__all__ = ["load_guides_config"]
