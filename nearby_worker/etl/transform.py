"""Utilities for transforming Geoapify place features into company records."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from nearby_worker.models import CompanyRecord, Location

logger = logging.getLogger(__name__)

Lookup = Callable[[Dict[str, Any]], Any]


def _properties(place: Dict[str, Any]) -> Dict[str, Any]:
    return place.get("properties") or {}


def _raw(properties: Dict[str, Any]) -> Dict[str, Any]:
    return (properties.get("datasource") or {}).get("raw") or {}


def _contact(properties: Dict[str, Any], key: str) -> Any:
    return (properties.get("contact") or {}).get(key)


def _raw_contact(properties: Dict[str, Any], key: str) -> Any:
    return (_raw(properties).get("contact") or {}).get(key)


# Ordered by priority; the first truthy value wins.
EMAIL_LOOKUPS: Sequence[Lookup] = (
    lambda props: _contact(props, "email"),
    lambda props: _raw_contact(props, "email"),
    lambda props: _raw(props).get("contact:email"),
)

WEBSITE_LOOKUPS: Sequence[Lookup] = (
    lambda props: _contact(props, "website"),
    lambda props: _raw_contact(props, "website"),
    lambda props: _raw(props).get("contact:website"),
    lambda props: _raw(props).get("website"),
)


def _first_match(place: Dict[str, Any], lookups: Iterable[Lookup]) -> Optional[Any]:
    properties = _properties(place)
    for lookup in lookups:
        value = lookup(properties)
        if value:
            return value
    return None


def extract_email(place: Dict[str, Any]) -> Optional[str]:
    return _first_match(place, EMAIL_LOOKUPS)


def extract_website(place: Dict[str, Any]) -> Optional[str]:
    return _first_match(place, WEBSITE_LOOKUPS)


def filter_with_email(places: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep only the places that publish a contact email."""
    kept = [place for place in places if extract_email(place)]
    logger.debug("Kept %d places with an email address", len(kept))
    return kept


def to_company_record(place: Dict[str, Any]) -> CompanyRecord:
    """Map a place feature to a record whose scrape is still pending."""
    properties = _properties(place)
    return CompanyRecord(
        name=properties.get("name"),
        address=properties.get("formatted"),
        location=Location(lat=properties.get("lat"), lon=properties.get("lon")),
        website=extract_website(place),
        email=extract_email(place),
    )
