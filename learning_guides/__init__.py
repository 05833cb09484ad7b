"""Load, lint, and study the bilingual web-development guides.

This package exposes the CLI entry points used by ``guides`` to check the
Markdown corpus under ``public/guides`` and to run flashcard and
multiple-choice sessions built from it.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from learning_guides import main
>>> main()  # doctest: +SKIP
>>> from learning_guides import app
>>> app.name[0]
'guides'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
