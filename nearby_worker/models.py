"""Core data models shared by the nearby-companies enrichment pipeline."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

DEFAULT_RADIUS_KM = 2.5
SCRAPE_FAILURE_PREFIX = "Failed to scrape: "

_ERROR_CODE_PATTERN = re.compile(r"ERROR:\s*(\w+)")


@dataclass(frozen=True)
class SearchQuery:
    """A single nearby search, built from the inbound request."""

    latitude: float
    longitude: float
    radius_km: float = DEFAULT_RADIUS_KM

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError("Latitude and longitude must be finite numbers")
        if not math.isfinite(self.radius_km) or self.radius_km <= 0:
            raise ValueError("Radius must be a positive number")


@dataclass(frozen=True, slots=True)
class ScrapeOutcome:
    """Result of scraping one website: content, failure, or not attempted."""

    status: str
    text: Optional[str] = None
    error_code: Optional[str] = None

    CONTENT = "content"
    FAILED = "failed"
    NOT_ATTEMPTED = "not_attempted"

    @classmethod
    def content(cls, text: str) -> "ScrapeOutcome":
        return cls(status=cls.CONTENT, text=text)

    @classmethod
    def failed(cls, error_code: str, message: str) -> "ScrapeOutcome":
        return cls(status=cls.FAILED, text=message, error_code=error_code)

    @classmethod
    def not_attempted(cls) -> "ScrapeOutcome":
        return cls(status=cls.NOT_ATTEMPTED)

    @property
    def succeeded(self) -> bool:
        return self.status == self.CONTENT

    def to_wire(self) -> Optional[str]:
        """Encode as the ``scrapedContent`` string consumed by the UI."""
        if self.status == self.CONTENT:
            return self.text
        if self.status == self.FAILED:
            return f"{SCRAPE_FAILURE_PREFIX}{self.text} (ERROR: {self.error_code})"
        return None


@dataclass(frozen=True, slots=True)
class Location:
    lat: Optional[float]
    lon: Optional[float]


@dataclass(frozen=True, slots=True)
class CompanyRecord:
    """Normalized establishment with a published email address."""

    name: Optional[str]
    address: Optional[str]
    location: Location
    website: Optional[str]
    email: Optional[str]
    scrape: ScrapeOutcome = field(default_factory=ScrapeOutcome.not_attempted)

    @property
    def scraped_content(self) -> Optional[str]:
        return self.scrape.to_wire()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys of the HTTP response."""
        return {
            "name": self.name,
            "address": self.address,
            "location": {"lat": self.location.lat, "lon": self.location.lon},
            "website": self.website,
            "email": self.email,
            "scrapedContent": self.scraped_content,
        }


def classify_scraped_content(content: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Return ``(success, error_code)`` for a wire-encoded ``scrapedContent``."""
    if content is None:
        return False, "NOT_ATTEMPTED"
    if "ERROR:" in content:
        match = _ERROR_CODE_PATTERN.search(content)
        return False, match.group(1) if match else "UNKNOWN"
    if content.startswith(SCRAPE_FAILURE_PREFIX):
        return False, "UNKNOWN"
    if not content.strip():
        return False, "EMPTY_CONTENT"
    return True, None
