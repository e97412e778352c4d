"""Client utilities for the Geoapify Places API."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://api.geoapify.com/v2"

PLACES_CATEGORY = "commercial"
MAX_RESULTS = 500
REQUEST_TIMEOUT = 30


class GeoapifyError(RuntimeError):
    """Raised when the Places API returns an error payload."""


@dataclass(frozen=True)
class NearbyResult:
    """Places found around a point, or the reason the lookup failed."""

    places: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_params(lat: float, lon: float, radius_km: float, api_key: str, limit: int = MAX_RESULTS) -> Dict[str, Any]:
    radius_meters = _format_number(radius_km * 1000)
    return {
        "categories": PLACES_CATEGORY,
        "filter": f"circle:{lon},{lat},{radius_meters}",
        "bias": f"proximity:{lon},{lat}",
        "limit": limit,
        "apiKey": api_key,
    }


def search_places(
    lat: float, lon: float, radius_km: float, api_key: str, limit: int = MAX_RESULTS
) -> List[Dict[str, Any]]:
    """Return the raw GeoJSON features around ``(lat, lon)``; raises on failure."""
    params = build_params(lat, lon, radius_km, api_key, limit)
    logger.info("Making Geoapify request: %s", params["filter"])
    response = _SESSION.get(f"{_BASE_URL}/places", params=params, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    payload = response.json()
    features = payload.get("features") if isinstance(payload, dict) else None
    if not isinstance(features, list):
        message = payload.get("message") if isinstance(payload, dict) else None
        logger.error("places search failed: error_message=%s", message)
        raise GeoapifyError(message or "Geoapify response is missing features")
    return features


def fetch_nearby(
    lat: float, lon: float, radius_km: float, api_key: str, limit: int = MAX_RESULTS
) -> NearbyResult:
    """Like :func:`search_places`, but failures come back as ``NearbyResult.error``."""
    try:
        places = search_places(lat, lon, radius_km, api_key, limit)
    except (requests.RequestException, ValueError, GeoapifyError) as exc:
        logger.error("Error fetching nearby companies: %s", exc)
        return NearbyResult(error=str(exc))
    logger.info("Geoapify returned %d places", len(places))
    return NearbyResult(places=places)
