#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/ao3kit/client.py
"""HTTP client for archive chapter pages.

This module fetches chapter pages over HTTP and scrapes the pieces the
document model needs: the chapter body, notes, summary and the work skin
stylesheet. Fetching is deliberately thin; there is no retry or back-off.

Key Functions
-------------
- Ao3Client.get_document: Fetch a page, passing the adult-content interstitial
- Ao3Client.get_chapter: Fetch and scrape a single chapter

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Optional

import httpx
from bs4 import BeautifulSoup, Tag

from ao3kit.constants import (
    ADULT_CONTENT_MARKER,
    DEFAULT_HTML_PARSER,
    REGISTERED_USERS_ONLY_MARKER,
    VIEW_ADULT_PARAMETER,
)
from ao3kit.document.builder import parse_chapter_html
from ao3kit.document.nodes import DocumentNode
from ao3kit.document.skin import WorkSkin
from ao3kit.exceptions import (
    FetchError,
    InvalidStatusCodeError,
    ParsingError,
    RestrictedWorkError,
    TooManyRedirectsError,
    ValidationError,
)
from ao3kit.options.client import ClientOptions
from ao3kit.options.html import HtmlParserOptions

logger = logging.getLogger(__name__)


def append_view_adult(url: str) -> str:
    """Append the adult-content confirmation parameter to ``url`` once.

    Parameters
    ----------
    url : str
        Page URL

    Returns
    -------
    str
        URL carrying ``view_adult=true`` exactly once

    Examples
    --------
    >>> append_view_adult("https://archiveofourown.org/works/1")
    'https://archiveofourown.org/works/1?view_adult=true'
    >>> append_view_adult("https://archiveofourown.org/works/1?page=2")
    'https://archiveofourown.org/works/1?page=2&view_adult=true'

    """
    if VIEW_ADULT_PARAMETER in url:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{VIEW_ADULT_PARAMETER}"


@dataclass(frozen=True)
class Chapter:
    """A scraped chapter page.

    Parameters
    ----------
    work_id : int
        Work identifier
    chapter_id : int
        Chapter identifier
    title : str, default ""
        Chapter title from the preface heading
    content_html : str, default ""
        Outer HTML of every paragraph in the chapter body, newline-joined
    content : str, default ""
        Text of every paragraph in the chapter body, newline-joined
    notes : tuple of str, default empty
        Text of each non-empty notes module
    summary : str, default ""
        Inner HTML of the summary paragraphs, newline-joined
    work_skin_css : str or None, default None
        Work skin stylesheet, when the work has one

    """

    work_id: int
    chapter_id: int
    title: str = ""
    content_html: str = ""
    content: str = ""
    notes: tuple[str, ...] = field(default_factory=tuple)
    summary: str = ""
    work_skin_css: Optional[str] = None

    @property
    def work_skin(self) -> WorkSkin:
        """Class colors scraped from the work skin stylesheet."""
        return WorkSkin.from_css(self.work_skin_css)

    def to_document(self, options: Optional[HtmlParserOptions] = None) -> tuple[DocumentNode, ...]:
        """Convert the chapter body to a document tree."""
        return parse_chapter_html(self.content_html, options)


class Ao3Client:
    """Fetch and scrape archive pages.

    The client owns one ``httpx.Client``. Close it with :meth:`close` or use
    the client as a context manager.

    Parameters
    ----------
    options : ClientOptions or None, default None
        Base URL, User-Agent, timeout and adult-content hop limit
    transport : httpx.BaseTransport or None, default None
        Custom transport, e.g. ``httpx.MockTransport`` in tests

    Examples
    --------
    >>> with Ao3Client() as client:  # doctest: +SKIP
    ...     chapter = client.get_chapter(123, 456)
    ...     print(chapter.title)

    """

    def __init__(self, options: Optional[ClientOptions] = None, transport: Optional[httpx.BaseTransport] = None):
        self.options = options or ClientOptions()
        self._client = httpx.Client(
            timeout=self.options.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.options.user_agent},
            transport=transport,
        )

    def __enter__(self) -> Ao3Client:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def fetch_text(self, url: str) -> tuple[str, int]:
        """GET ``url`` and return its decoded body and status code.

        Raises
        ------
        FetchError
            If the request fails at the transport level

        """
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"HTTP request failed for {url}: {e}", url=url, original_error=e) from e

        logger.debug(f"Fetched {url} ({response.status_code}, {len(response.content)} bytes)")
        return response.text, response.status_code

    def get_document(self, url: str) -> BeautifulSoup:
        """Fetch a page and parse it, passing the adult-content interstitial.

        Parameters
        ----------
        url : str
            Page URL

        Returns
        -------
        BeautifulSoup
            Parsed page

        Raises
        ------
        InvalidStatusCodeError
            If the archive answers with anything but 200
        TooManyRedirectsError
            If the interstitial is still shown after the configured number of hops
        RestrictedWorkError
            If the work is only available to registered users
        FetchError
            If the request fails at the transport level

        """
        current_url = url
        for depth in range(self.options.max_adult_redirects + 1):
            body, status_code = self.fetch_text(current_url)
            if status_code != 200:
                raise InvalidStatusCodeError(status_code, url=current_url)

            lowered = body.lower()
            if ADULT_CONTENT_MARKER in lowered:
                logger.debug(f"Adult content confirmation on {current_url} (hop {depth})")
                current_url = append_view_adult(current_url)
                continue

            if REGISTERED_USERS_ONLY_MARKER in lowered:
                raise RestrictedWorkError(url=current_url)

            return BeautifulSoup(body, DEFAULT_HTML_PARSER)

        raise TooManyRedirectsError(url=url)

    def chapter_url(self, work_id: int, chapter_id: int) -> str:
        """Build the URL of a chapter page."""
        return f"{self.options.base_url.rstrip('/')}/works/{work_id}/chapters/{chapter_id}"

    def get_chapter(self, work_id: int, chapter_id: int) -> Chapter:
        """Fetch and scrape a chapter.

        Parameters
        ----------
        work_id : int
            Work identifier
        chapter_id : int
            Chapter identifier

        Returns
        -------
        Chapter
            Scraped chapter

        Raises
        ------
        ValidationError
            If either identifier is not a positive integer
        ParsingError
            If the page has no chapter body
        FetchError
            If fetching fails (see :meth:`get_document`)

        """
        for name, value in (("work_id", work_id), ("chapter_id", chapter_id)):
            if value <= 0:
                raise ValidationError(
                    f"{name} must be positive, got {value}", parameter_name=name, parameter_value=value
                )

        url = self.chapter_url(work_id, chapter_id)
        document = self.get_document(url)
        return parse_chapter_page(document, work_id, chapter_id)


def parse_chapter_page(document: BeautifulSoup, work_id: int, chapter_id: int) -> Chapter:
    """Scrape a parsed chapter page.

    Raises
    ------
    ParsingError
        If the page has no ``[role=article]`` chapter body

    """
    article = document.select_one("[role=article]")
    if article is None:
        raise ParsingError(f"No chapter body found for work {work_id}, chapter {chapter_id}")

    paragraphs = article.select("p")
    return Chapter(
        work_id=work_id,
        chapter_id=chapter_id,
        title=_parse_title(document),
        content_html="\n".join(str(p) for p in paragraphs),
        content="\n".join(p.get_text() for p in paragraphs),
        notes=_parse_notes(document),
        summary=_parse_summary(document),
        work_skin_css=_parse_work_skin_css(document),
    )


def _own_text(tag: Tag) -> str:
    return "".join(child for child in tag.find_all(string=True, recursive=False))


def _parse_title(document: BeautifulSoup) -> str:
    heading = document.select_one("div.chapter.preface.group h3")
    if heading is None:
        return ""
    return _own_text(heading).replace(": ", "").strip()


def _parse_notes(document: BeautifulSoup) -> tuple[str, ...]:
    notes = []
    for module in document.select("div.notes.module"):
        userstuff = module.select_one(".userstuff")
        if userstuff is None:
            continue
        text = "\n".join(p.get_text() for p in userstuff.select("p"))
        if text:
            notes.append(text)
    return tuple(notes)


def _parse_summary(document: BeautifulSoup) -> str:
    blockquote = document.select_one("div.summary.module blockquote.userstuff")
    if blockquote is None:
        return ""
    return "\n".join(p.decode_contents() for p in blockquote.select("p"))


def _parse_work_skin_css(document: BeautifulSoup) -> Optional[str]:
    for style in document.find_all("style"):
        css = style.get_text()
        if "#workskin" in css:
            return css
    return None
