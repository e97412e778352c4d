import io
import sys
from pathlib import Path

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers
from urllib3.response import HTTPResponse

# Ensure `nearby_worker` is importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nearby_worker.core.config import Settings  # noqa: E402


@pytest.fixture
def settings():
    return Settings(geoapify_api_key="test-key", scrape_max_workers=4)


def make_place(name="Acme", email=None, website=None, raw=None, lat=52.52, lon=13.405):
    contact = {}
    if email:
        contact["email"] = email
    if website:
        contact["website"] = website
    properties = {
        "name": name,
        "formatted": f"{name} Strasse 1, Berlin",
        "lat": lat,
        "lon": lon,
        "contact": contact,
        "datasource": {"raw": raw or {}},
    }
    return {"type": "Feature", "properties": properties}


def make_response(status_code=200, text="", url="https://example.com/", content_type="text/html; charset=utf-8"):
    """Build a streamed requests.Response the way the HTTP adapter does."""
    body = text.encode("utf-8")
    headers = {"Content-Length": str(len(body))}
    if content_type:
        headers["Content-Type"] = content_type
    raw = HTTPResponse(
        body=io.BytesIO(body),
        headers=headers,
        status=status_code,
        preload_content=False,
        decode_content=False,
    )
    response = requests.Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers)
    response.raw = raw
    response.encoding = get_encoding_from_headers(response.headers)
    response.url = url
    return response
