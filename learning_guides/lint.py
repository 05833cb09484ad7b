"""Structural checks for the guide corpus.

The guides carry no executable logic, so their only verifiable properties are
structural: file names follow ``<topic>-<lang>.md``, every example label is
followed by a closed fenced block, headings are unique, each topic exists in
every configured language, files decode as UTF-8, and reading a file twice
yields the same bytes.
:class:`GuideLinter` runs every rule over a guides directory and returns a
:class:`LintReport`.

Examples
--------
>>> from learning_guides.lint import lint_text
>>> [issue.rule for issue in lint_text("## Intro\\n**Example:**\\n```css\\na {}\\n", "x.md")]
['unclosed-fence']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import EXAMPLE_LABELS, SUPPORTED_LANGUAGES
from .guides import GuideNameError, guide_filename, parse_guide_filename
from .markdown_parser import (
    LABEL_PATTERN,
    SECTION_PATTERN,
    fenced_line_mask,
    iter_fences,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

RULE_FILE_NAME = "file-name"
RULE_UNCLOSED_FENCE = "unclosed-fence"
RULE_EXAMPLE_WITHOUT_CODE = "example-without-code"
RULE_DUPLICATE_HEADING = "duplicate-heading"
RULE_NO_SECTIONS = "no-sections"
RULE_MISSING_TRANSLATION = "missing-translation"
RULE_UNSTABLE_READ = "unstable-read"
RULE_INVALID_ENCODING = "invalid-encoding"


@dc.dataclass(frozen=True, slots=True)
class LintIssue:
    """A single rule violation.

    Attributes
    ----------
    rule : str
        Identifier of the violated rule, e.g. ``"unclosed-fence"``.
    path : str
        File the issue was found in (or the missing companion file).
    line : int
        1-based line number; ``0`` for file-level issues.
    message : str
        Human-readable explanation.
    """

    rule: str
    path: str
    line: int
    message: str

    def format(self) -> str:
        """Return the ``path:line: [rule] message`` form used by the CLI."""
        return f"{self.path}:{self.line}: [{self.rule}] {self.message}"


@dc.dataclass(slots=True)
class LintReport:
    """Outcome of a linter run."""

    issues: list[LintIssue] = dc.field(default_factory=list)
    files_checked: int = 0

    @property
    def ok(self) -> bool:
        """Return ``True`` when no issue was reported."""
        return not self.issues

    def by_rule(self, rule: str) -> list[LintIssue]:
        """Return the issues reported for ``rule``."""
        return [issue for issue in self.issues if issue.rule == rule]


def lint_text(markdown_text: str, path: str) -> list[LintIssue]:
    """Check the in-document rules for one guide.

    Parameters
    ----------
    markdown_text : str
        Raw guide markdown.
    path : str
        Path used in the reported issues.

    Returns
    -------
    list[LintIssue]
        Issues ordered by line number.
    """
    lines = markdown_text.splitlines()
    fences = list(iter_fences(lines))
    mask = fenced_line_mask(lines, fences)
    issues: list[LintIssue] = []

    headings: dict[str, int] = {}
    label_rows: list[tuple[int, str]] = []
    for idx, line in enumerate(lines):
        if mask[idx]:
            continue
        heading = SECTION_PATTERN.match(line)
        if heading:
            title = heading.group(1).replace("\\", "").strip()
            label_rows.append((idx, "heading"))
            if title in headings:
                issues.append(
                    LintIssue(
                        RULE_DUPLICATE_HEADING,
                        path,
                        idx + 1,
                        f"Heading '{title}' already used on line {headings[title]}.",
                    )
                )
            else:
                headings[title] = idx + 1
            continue
        label = LABEL_PATTERN.search(line)
        if label:
            label_rows.append((idx, label.group("label")))

    if not headings:
        issues.append(
            LintIssue(RULE_NO_SECTIONS, path, 0, "Guide has no '## ' section headings.")
        )

    fence_starts = [block.start for block in fences]
    for pos, (idx, label) in enumerate(label_rows):
        if label not in EXAMPLE_LABELS:
            continue
        stop = label_rows[pos + 1][0] if pos + 1 < len(label_rows) else len(lines)
        if not any(idx < start < stop for start in fence_starts):
            issues.append(
                LintIssue(
                    RULE_EXAMPLE_WITHOUT_CODE,
                    path,
                    idx + 1,
                    f"'**{label}:**' is not followed by a fenced code block.",
                )
            )

    example_rows = [idx for idx, label in label_rows if label in EXAMPLE_LABELS]
    for block in fences:
        if block.closed:
            continue
        after_example = any(row < block.start for row in example_rows)
        context = " after an example label" if after_example else ""
        issues.append(
            LintIssue(
                RULE_UNCLOSED_FENCE,
                path,
                block.start + 1,
                f"Fenced '{block.language}' block{context} is never closed.",
            )
        )

    return sorted(issues, key=lambda issue: issue.line)


class GuideLinter:
    """Run every structural rule over a directory of guides."""

    def __init__(
        self, root: Path, *, languages: tuple[str, ...] = SUPPORTED_LANGUAGES
    ) -> None:
        self.root = root
        self.languages = languages

    def run(self) -> LintReport:
        """Lint every Markdown file under ``root``.

        Returns
        -------
        LintReport
            Collected issues and the number of files checked.

        Raises
        ------
        FileNotFoundError
            If ``root`` is not a directory.
        """
        if not self.root.is_dir():
            msg = f"Guides directory '{self.root}' not found."
            raise FileNotFoundError(msg)

        report = LintReport()
        present: dict[str, set[str]] = {}
        for path in sorted(self.root.glob("*.md")):
            report.files_checked += 1
            display = str(path)
            try:
                topic, language = parse_guide_filename(path.name, languages=self.languages)
            except GuideNameError as exc:
                report.issues.append(LintIssue(RULE_FILE_NAME, display, 0, str(exc)))
            else:
                present.setdefault(topic, set()).add(language)

            raw = path.read_bytes()
            if path.read_bytes() != raw:
                report.issues.append(
                    LintIssue(
                        RULE_UNSTABLE_READ,
                        display,
                        0,
                        "Re-reading the file returned different content.",
                    )
                )
            try:
                markdown_text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                report.issues.append(
                    LintIssue(
                        RULE_INVALID_ENCODING,
                        display,
                        0,
                        f"File is not valid UTF-8 (byte {exc.start}).",
                    )
                )
                continue
            report.issues.extend(lint_text(markdown_text, display))

        report.issues.extend(self._missing_translations(present))
        logger.info(
            "Linted %d files under %s: %d issues",
            report.files_checked,
            self.root,
            len(report.issues),
        )
        return report

    def _missing_translations(self, present: dict[str, set[str]]) -> list[LintIssue]:
        """Return an issue for every topic lacking one of the configured languages."""
        issues: list[LintIssue] = []
        for topic in sorted(present):
            for language in self.languages:
                if language in present[topic]:
                    continue
                companions = ", ".join(
                    guide_filename(topic, other) for other in sorted(present[topic])
                )
                missing = self.root / guide_filename(topic, language)
                issues.append(
                    LintIssue(
                        RULE_MISSING_TRANSLATION,
                        str(missing),
                        0,
                        f"Missing translation of {companions}.",
                    )
                )
        return issues


__all__ = [
    "RULE_DUPLICATE_HEADING",
    "RULE_EXAMPLE_WITHOUT_CODE",
    "RULE_FILE_NAME",
    "RULE_INVALID_ENCODING",
    "RULE_MISSING_TRANSLATION",
    "RULE_NO_SECTIONS",
    "RULE_UNCLOSED_FENCE",
    "RULE_UNSTABLE_READ",
    "GuideLinter",
    "LintIssue",
    "LintReport",
    "lint_text",
]
