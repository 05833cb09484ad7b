"""Load and validate the guides configuration YAML.

This subpackage parses the project's ``guides.yaml`` file, applies defaults to
the guide location, language list, and quiz settings, and produces typed
dataclasses (:class:`GuidesConfig`, :class:`TopicConfig`) that the CLI and
loaders consume. The primary entry point is :func:`load_guides_config`.

Examples
--------
>>> from pathlib import Path
>>> from learning_guides.config import load_guides_config
>>> config = load_guides_config(Path("config/guides.yaml"))  # doctest: +SKIP
>>> config.guides_dir  # doctest: +SKIP
PosixPath('public/guides')
"""

from .loader import load_guides_config
from .models import GuidesConfig, GuidesConfigError, TopicConfig

__all__ = [
    "GuidesConfig",
    "GuidesConfigError",
    "TopicConfig",
    "load_guides_config",
]
