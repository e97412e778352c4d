"""Nearby-company search with website enrichment, usable as a CLI job."""

import argparse
import dataclasses
import json
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from nearby_worker.core.config import Settings, get_settings
from nearby_worker.core.site_scraper import WebsiteScraper
from nearby_worker.etl.transform import filter_with_email, to_company_record
from nearby_worker.models import CompanyRecord, SearchQuery, classify_scraped_content
from nearby_worker.vendors import geoapify

logger = logging.getLogger(__name__)


def _enrich(record: CompanyRecord, scraper: WebsiteScraper) -> CompanyRecord:
    if not record.website:
        return record
    return dataclasses.replace(record, scrape=scraper.scrape(record.website))


def run_enrichment(
    query: SearchQuery,
    *,
    settings: Optional[Settings] = None,
    scraper: Optional[WebsiteScraper] = None,
) -> List[CompanyRecord]:
    """Find companies with an email near ``query`` and scrape their websites."""
    settings = settings or get_settings()
    scraper = scraper or WebsiteScraper(settings=settings)

    result = geoapify.fetch_nearby(
        query.latitude,
        query.longitude,
        query.radius_km,
        api_key=settings.geoapify_api_key,
        limit=settings.places_limit,
    )
    if not result.ok:
        # Reported to callers as an empty search, same as no matches.
        logger.warning("Places lookup failed, returning no companies: %s", result.error)
        return []

    places = filter_with_email(result.places)
    logger.info("Found %d places, %d with an email address", len(result.places), len(places))
    records = [to_company_record(place) for place in places]

    to_scrape = sum(1 for record in records if record.website)
    if not to_scrape:
        return records

    workers = min(settings.scrape_max_workers, to_scrape)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        enriched = list(executor.map(lambda record: _enrich(record, scraper), records))

    logger.info("Scraped %d websites", to_scrape)
    return enriched


def summarize(records: List[CompanyRecord]) -> Counter:
    """Count scrape results by status (``OK`` or the error code)."""
    counts: Counter = Counter()
    for record in records:
        success, error_code = classify_scraped_content(record.scraped_content)
        counts["OK" if success else error_code] += 1
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find nearby companies with emails and scrape their websites")
    parser.add_argument("--lat", dest="latitude", type=float, required=True, help="Latitude of the search center")
    parser.add_argument("--lon", dest="longitude", type=float, required=True, help="Longitude of the search center")
    parser.add_argument(
        "--radius",
        dest="radius",
        type=float,
        default=get_settings().default_radius_km,
        help="Search radius in kilometers",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        query = SearchQuery(latitude=args.latitude, longitude=args.longitude, radius_km=args.radius)
    except ValueError as exc:
        parser.error(str(exc))

    records = run_enrichment(query)
    print(json.dumps({"companies": [record.to_dict() for record in records]}, ensure_ascii=False, indent=2))

    counts = summarize(records)
    logger.info(
        "Completed search: companies=%d %s",
        len(records),
        " ".join(f"{status}={count}" for status, count in sorted(counts.items())),
    )


if __name__ == "__main__":
    main()
