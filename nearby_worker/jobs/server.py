"""HTTP entrypoint for the nearby-companies search."""

from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from nearby_worker.core.config import get_settings
from nearby_worker.jobs.enrich_companies import run_enrichment
from nearby_worker.models import SearchQuery

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

USAGE_MESSAGE = "Use POST method with latitude and longitude to search for companies"

# ---------- Routes ----------


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; only reads env-based settings."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "places_api_configured": bool(settings.geoapify_api_key),
            }
        ),
        200,
    )


@app.get("/api/companies")
def usage() -> Any:
    return jsonify({"message": USAGE_MESSAGE}), 200


@app.post("/api/companies")
def search_companies() -> Any:
    """
    Search companies with an email address around a point.
    Required JSON fields: latitude, longitude
    Optional: radius (km, default 2.5)
    """
    try:
        payload = request.get_json(force=True)
    except BadRequest as exc:
        logger.error("Error processing request: invalid JSON body: %s", exc)
        return jsonify({"error": "Failed to process request"}), 500
    if not isinstance(payload, dict):
        payload = {}

    latitude_raw = payload.get("latitude")
    longitude_raw = payload.get("longitude")
    if latitude_raw is None or longitude_raw is None:
        return jsonify({"error": "Latitude and longitude are required"}), 400

    try:
        latitude = _to_float(latitude_raw)
        longitude = _to_float(longitude_raw)
    except (TypeError, ValueError):
        return jsonify({"error": "Latitude and longitude must be numeric"}), 400

    radius_raw = payload.get("radius")
    if radius_raw is None:
        radius_km = get_settings().default_radius_km
    else:
        try:
            radius_km = _to_float(radius_raw)
        except (TypeError, ValueError):
            return jsonify({"error": "Radius must be numeric"}), 400

    try:
        query = SearchQuery(latitude=latitude, longitude=longitude, radius_km=radius_km)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        companies = run_enrichment(query)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error processing request: %s", exc)
        return jsonify({"error": "Failed to process request"}), 500

    return jsonify({"companies": [company.to_dict() for company in companies]}), 200


# ---------- Internals ----------


def _to_float(value: Any) -> float:
    # bool is an int subclass; reject it like any other non-number.
    if isinstance(value, bool):
        raise TypeError("boolean is not a coordinate")
    return float(value)


def main(port: Optional[int] = None) -> None:
    """Bind on 0.0.0.0 using PORT (or WORKER_PORT), falling back to 8080."""
    port = port or get_settings().worker_port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
