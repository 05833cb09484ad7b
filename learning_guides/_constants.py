"""Common literal values used across learning_guides.

These constants keep the guide naming convention and the bilingual section
labels centralized so the parser, linter, and tests can import the same values
without drifting. Intended for internal use within the learning_guides package.

Examples
--------
>>> from learning_guides import _constants
>>> _constants.GUIDE_FILENAME_TEMPLATE.format(topic="git", language="es")
'git-es.md'
>>> bool(_constants.GUIDE_FILENAME_PATTERN.match("css-en.md"))
True
"""

import re
from pathlib import Path

GUIDE_FILENAME_TEMPLATE = "{topic}-{language}.md"
GUIDE_FILENAME_PATTERN = re.compile(
    r"^(?P<topic>[a-z0-9]+(?:-[a-z0-9]+)*)-(?P<language>[a-z]{2})\.md$"
)
SUPPORTED_LANGUAGES = ("en", "es")
DEFAULT_GUIDES_DIR = Path("public/guides")

DESCRIPTION_LABELS = ("Description", "Descripción")
EXAMPLE_LABELS = ("Example", "Ejemplo")
COMPARISON_LABELS = ("Comparison", "Comparación")
