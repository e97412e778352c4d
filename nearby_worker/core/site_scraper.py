"""Best-effort website scraping used to enrich company records."""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

import requests
from bs4 import BeautifulSoup
from urllib3.exceptions import (
    DecodeError,
    MaxRetryError,
    NameResolutionError,
    ProtocolError,
    ReadTimeoutError,
)

from nearby_worker.core.config import Settings, get_settings
from nearby_worker.core.content_extractor import HtmlContentExtractor
from nearby_worker.models import ScrapeOutcome

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
REQUEST_TIMEOUT = 15
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 1.0
MAX_CONTENT_BYTES = 2 * 1024 * 1024
CHUNK_SIZE = 16 * 1024


class UnsupportedContentError(Exception):
    """Raised when a site answers with something other than an HTML page."""


def normalize_url(raw_url: str) -> str:
    """Prepend https:// when the value carries no scheme."""

    url = raw_url.strip()
    if url.startswith("http"):
        return url
    return f"https://{url}"


def _underlying_reason(exc: BaseException) -> Optional[BaseException]:
    for arg in getattr(exc, "args", ()):
        if isinstance(arg, MaxRetryError):
            return arg.reason
        if isinstance(arg, BaseException):
            return arg
    return None


def classify_request_error(exc: requests.RequestException) -> Tuple[str, bool]:
    """Map a requests failure to ``(error_code, retryable)``.

    Only timeouts and plain connection errors are worth another attempt;
    DNS, TLS and HTTP status failures are deterministic.
    """

    if isinstance(exc, requests.Timeout):
        return "TIMEOUT", True
    if isinstance(exc, requests.exceptions.SSLError):
        return "TLS", False
    if isinstance(exc, requests.ConnectionError):
        if isinstance(_underlying_reason(exc), NameResolutionError):
            return "DNS", False
        return "CONNECTION", True
    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code if exc.response is not None else None
        return (f"HTTP_{status}" if status else "HTTP"), False
    return "REQUEST", False


class WebsiteScraper:
    """Fetch a company website and reduce it to a short text snippet."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        extractor: Optional[HtmlContentExtractor] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session = session
        self.extractor = extractor or HtmlContentExtractor()
        self.timeout = self.settings.scrape_timeout_seconds or REQUEST_TIMEOUT
        self.max_attempts = self.settings.scrape_max_attempts or MAX_ATTEMPTS
        retry_delay = self.settings.scrape_retry_delay_seconds
        self.retry_delay = RETRY_DELAY_SECONDS if retry_delay is None else retry_delay

    def scrape(self, website: str) -> ScrapeOutcome:
        """Scrape ``website``; every failure is returned, never raised."""

        if not website:
            return ScrapeOutcome.not_attempted()

        url = normalize_url(website)
        if self.session is not None:
            return self._scrape_with(self.session, url)

        # One session per site keeps concurrent scrapes on separate connections.
        with requests.Session() as session:
            return self._scrape_with(session, url)

    def _scrape_with(self, session: requests.Session, url: str) -> ScrapeOutcome:
        error_code = "UNKNOWN"
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                html = self._fetch(session, url)
                return ScrapeOutcome.content(self.extractor.extract(BeautifulSoup(html, "html.parser")))
            except requests.RequestException as exc:
                last_error = exc
                error_code, retryable = classify_request_error(exc)
                if not retryable:
                    break
                logger.warning(
                    "%s scraping %s (attempt %d/%d): %s", error_code, url, attempt, self.max_attempts, exc
                )
                if attempt < self.max_attempts:
                    time.sleep(self.retry_delay)
            except UnsupportedContentError as exc:
                last_error = exc
                error_code = "CONTENT_TYPE"
                break
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                error_code = "PARSE"
                break

        logger.warning("Error scraping website %s: %s", url, last_error)
        return ScrapeOutcome.failed(error_code, str(last_error))

    def _fetch(self, session: requests.Session, url: str) -> str:
        """Download one page within ``self.timeout`` seconds in total.

        The socket timeout alone does not bound a site that keeps trickling
        bytes, so the body is read against a wall-clock deadline and cut
        off after ``MAX_CONTENT_BYTES``.
        """

        deadline = time.monotonic() + self.timeout
        with session.get(
            url,
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
            allow_redirects=True,
            stream=True,
        ) as response:
            response.raise_for_status()

            content_type = response.headers.get("Content-Type", "").lower()
            if content_type and "html" not in content_type:
                raise UnsupportedContentError(f"Unsupported content type: {content_type}")

            body = bytearray()
            while len(body) < MAX_CONTENT_BYTES:
                if time.monotonic() > deadline:
                    raise requests.ReadTimeout(f"Read exceeded {self.timeout}s deadline for {url}")
                chunk = _read_chunk(response)
                if not chunk:
                    break
                body.extend(chunk)
            if len(body) > MAX_CONTENT_BYTES:
                logger.debug("Truncating %s at %d bytes", url, MAX_CONTENT_BYTES)
                del body[MAX_CONTENT_BYTES:]

            return body.decode(response.encoding or "utf-8", errors="replace")


def _read_chunk(response: requests.Response) -> bytes:
    # read1 returns after at most one socket read.
    try:
        return response.raw.read1(CHUNK_SIZE, decode_content=True)
    except ReadTimeoutError as exc:
        raise requests.ReadTimeout(exc) from exc
    except ProtocolError as exc:
        raise requests.ConnectionError(exc) from exc
    except DecodeError as exc:
        raise requests.exceptions.ContentDecodingError(exc) from exc


def scrape_website(website: Optional[str], settings: Optional[Settings] = None) -> Optional[str]:
    """Return the wire-encoded ``scrapedContent`` for a single website."""

    if not website:
        return None
    return WebsiteScraper(settings=settings).scrape(website).to_wire()
