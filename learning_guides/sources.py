r"""Read guide Markdown from a local directory or an HTTP mirror.

Guides are plain files named ``<topic>-<lang>.md``. The learning app served
them from ``/learning/guides/``; this module reads the same files either from
disk (:class:`DirectoryGuideSource`) or over HTTP (:class:`HttpGuideSource`),
and :class:`GuideLoader` turns the raw text into :class:`~learning_guides.guides.Guide`
objects.

Example
-------
>>> from pathlib import Path
>>> from learning_guides.sources import DirectoryGuideSource, GuideLoader
>>> loader = GuideLoader(DirectoryGuideSource(Path("public/guides")))  # doctest: +SKIP
>>> loader.load("git", "en").headings[0]  # doctest: +SKIP
'Git vs GitHub'
"""

from __future__ import annotations

import logging
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._constants import SUPPORTED_LANGUAGES
from .guides import (
    Guide,
    GuideNameError,
    empty_guide,
    guide_filename,
    parse_guide,
    parse_guide_filename,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


class GuideNotFoundError(LookupError):
    """Raised when a source holds no guide for the requested topic/language."""


class GuideSourceError(RuntimeError):
    """Raised when a guide source fails for reasons other than a missing guide."""


class GuideSource(typ.Protocol):
    """Anything able to return the raw Markdown of a guide."""

    def read(self, topic: str, language: str) -> str: ...

    def locate(self, topic: str, language: str) -> str: ...


class DirectoryGuideSource:
    """Serve guides from a directory of ``<topic>-<lang>.md`` files."""

    def __init__(
        self, root: Path, *, languages: tuple[str, ...] = SUPPORTED_LANGUAGES
    ) -> None:
        self.root = root
        self.languages = languages

    def path_for(self, topic: str, language: str) -> Path:
        """Return the on-disk path of the guide for ``topic`` in ``language``."""
        return self.root / guide_filename(topic, language)

    def locate(self, topic: str, language: str) -> str:
        """Return the guide location as a string for diagnostics."""
        return str(self.path_for(topic, language))

    def read(self, topic: str, language: str) -> str:
        """Return the UTF-8 Markdown of a guide.

        Raises
        ------
        GuideNotFoundError
            If the guide file does not exist under ``root``.
        GuideSourceError
            If the file is not valid UTF-8.
        """
        path = self.path_for(topic, language)
        if not path.is_file():
            msg = f"Guide '{path.name}' not found in '{self.root}'."
            raise GuideNotFoundError(msg)
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Guide '{path.name}' is not valid UTF-8 (byte {exc.start})."
            raise GuideSourceError(msg) from exc

    def available(self) -> list[tuple[str, str]]:
        """Return sorted ``(topic, language)`` pairs present on disk.

        Files that break the naming convention are skipped; the linter reports
        them separately.
        """
        pairs: list[tuple[str, str]] = []
        if not self.root.is_dir():
            return pairs
        for path in sorted(self.root.glob("*.md")):
            try:
                pairs.append(parse_guide_filename(path.name, languages=self.languages))
            except GuideNameError:
                logger.debug("Skipping non-guide file %s", path)
        return pairs


class HttpGuideSource:
    """Fetch guides from a web server exposing ``<base_url>/<topic>-<lang>.md``."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialise the source with an optional preconfigured session.

        Parameters
        ----------
        base_url : str
            Directory URL holding the guide files, with or without a trailing
            slash.
        session : requests.Session, optional
            Session reused for every request. Defaults to a new session with
            retries on transient server errors.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``30.0``.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or _build_retrying_session()

    def locate(self, topic: str, language: str) -> str:
        """Return the URL of the guide for ``topic`` in ``language``."""
        return f"{self.base_url}/{guide_filename(topic, language)}"

    def read(self, topic: str, language: str) -> str:
        """Download the Markdown of a guide.

        Raises
        ------
        GuideNotFoundError
            If the server answers with HTTP 404.
        GuideSourceError
            If the request fails or the server answers with another error.
        """
        url = self.locate(topic, language)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"Failed to fetch guide from '{url}': {exc}"
            raise GuideSourceError(msg) from exc

        if response.status_code == HTTPStatus.NOT_FOUND:
            msg = f"Guide not found at '{url}'."
            raise GuideNotFoundError(msg)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            msg = f"Fetching '{url}' failed with status {response.status_code}."
            raise GuideSourceError(msg)
        # Guides are always UTF-8 whatever charset the server declares.
        response.encoding = "utf-8"
        return response.text

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()


def _build_retrying_session() -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class GuideLoader:
    """Turn raw Markdown from a :class:`GuideSource` into parsed guides."""

    def __init__(self, source: GuideSource) -> None:
        self.source = source

    def load(self, topic: str, language: str) -> Guide:
        """Load and parse one guide, propagating source errors."""
        markdown_text = self.source.read(topic, language)
        guide = parse_guide(
            markdown_text,
            topic=topic,
            language=language,
            source=self.source.locate(topic, language),
        )
        logger.debug(
            "Loaded %s with %d sections", guide.filename, len(guide.sections)
        )
        return guide

    def load_many(
        self, topics: cabc.Iterable[str], language: str
    ) -> dict[str, Guide]:
        """Load several topics in one language, keeping selection order.

        A guide that cannot be loaded is logged and replaced by an empty guide
        so one missing translation does not block the others.
        """
        guides: dict[str, Guide] = {}
        for topic in topics:
            try:
                guides[topic] = self.load(topic, language)
            except (GuideNotFoundError, GuideSourceError, OSError) as exc:
                logger.error("Error loading %s: %s", guide_filename(topic, language), exc)
                guides[topic] = empty_guide(
                    topic, language, source=self.source.locate(topic, language)
                )
        return guides


__all__ = [
    "DirectoryGuideSource",
    "GuideLoader",
    "GuideNotFoundError",
    "GuideSource",
    "GuideSourceError",
    "HttpGuideSource",
]
