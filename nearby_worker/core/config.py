"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from nearby_worker.models import DEFAULT_RADIUS_KM

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    geoapify_api_key: str
    worker_port: int = 8080
    places_limit: int = 500
    default_radius_km: float = DEFAULT_RADIUS_KM
    scrape_timeout_seconds: float = 15.0
    scrape_max_attempts: int = 3
    scrape_retry_delay_seconds: float = 1.0
    scrape_max_workers: int = 16


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    geoapify_api_key = os.getenv("GEOAPIFY_API_KEY", "")
    worker_port = int(os.getenv("PORT") or os.getenv("WORKER_PORT", "8080"))
    places_limit = int(os.getenv("PLACES_LIMIT", "500"))
    default_radius_km = float(os.getenv("DEFAULT_RADIUS_KM", str(DEFAULT_RADIUS_KM)))
    scrape_timeout_seconds = float(os.getenv("SCRAPE_TIMEOUT_SECONDS", "15"))
    scrape_max_attempts = max(1, int(os.getenv("SCRAPE_MAX_ATTEMPTS", "3")))
    scrape_retry_delay_seconds = float(os.getenv("SCRAPE_RETRY_DELAY_SECONDS", "1.0"))
    scrape_max_workers = max(1, int(os.getenv("SCRAPE_MAX_WORKERS", "16")))

    if not geoapify_api_key:
        logger.warning("GEOAPIFY_API_KEY is not configured; Geoapify Places requests will fail.")

    return Settings(
        geoapify_api_key=geoapify_api_key,
        worker_port=worker_port,
        places_limit=places_limit,
        default_radius_km=default_radius_km,
        scrape_timeout_seconds=scrape_timeout_seconds,
        scrape_max_attempts=scrape_max_attempts,
        scrape_retry_delay_seconds=scrape_retry_delay_seconds,
        scrape_max_workers=scrape_max_workers,
    )
