"""Heuristics for pulling a representative text snippet out of an HTML page."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

NO_CONTENT_FOUND = "No meaningful content found"

MIN_PARAGRAPH_LENGTH = 30
MIN_META_DESCRIPTION_LENGTH = 20
MIN_HEADING_LENGTH = 10
MIN_CONTAINER_LENGTH = 40
CONTENT_CONTAINER_SNIPPET_LENGTH = 300

HEADING_TAGS = ("h1", "h2", "h3")
CONTENT_CONTAINER_SELECTORS = (
    "div.content",
    "div.main",
    "div.about",
    "div#content",
    "div#main",
    "div.description",
    "div.company-info",
)


def _text(node: Tag) -> str:
    return node.get_text().strip()


def _first_longer_than(nodes: Iterable[Tag], min_length: int) -> Optional[str]:
    for node in nodes:
        text = _text(node)
        if len(text) > min_length:
            return text
    return None


class HtmlContentExtractor:
    """Apply ordered strategies to a parsed page; the first satisfied one wins.

    1. first ``<p>`` longer than 30 characters
    2. ``<meta name="description">`` longer than 20 characters
    3. first ``h1``/``h2``/``h3`` longer than 10 characters
    4. first curated content container longer than 40 characters, cut to 300
    5. first ``<div>`` longer than 40 characters, else a sentinel string
    """

    def extract(self, soup: BeautifulSoup) -> str:
        paragraph = _first_longer_than(soup.find_all("p"), MIN_PARAGRAPH_LENGTH)
        if paragraph:
            return paragraph

        description = self._meta_description(soup)
        if description:
            return description

        heading = _first_longer_than(soup.find_all(HEADING_TAGS), MIN_HEADING_LENGTH)
        if heading:
            return heading

        selector = ", ".join(CONTENT_CONTAINER_SELECTORS)
        container = _first_longer_than(soup.select(selector), MIN_CONTAINER_LENGTH)
        if container:
            return container[:CONTENT_CONTAINER_SNIPPET_LENGTH]

        fallback = _first_longer_than(soup.find_all("div"), MIN_CONTAINER_LENGTH)
        if fallback:
            return fallback

        logger.debug("No strategy matched; returning sentinel snippet")
        return NO_CONTENT_FOUND

    @staticmethod
    def _meta_description(soup: BeautifulSoup) -> Optional[str]:
        meta = soup.find("meta", attrs={"name": "description"})
        if meta is None:
            return None
        content = meta.get("content")
        if content and len(content) > MIN_META_DESCRIPTION_LENGTH:
            return content.strip()
        return None


def extract_snippet(html: str) -> str:
    """Parse raw HTML and return its representative snippet."""
    return HtmlContentExtractor().extract(BeautifulSoup(html, "html.parser"))
