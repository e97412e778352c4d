import pytest

from nearby_worker.core import config


def setup_function(function):
    config.get_settings.cache_clear()


def teardown_function(function):
    config.get_settings.cache_clear()


_ENV_VARS = (
    "PORT",
    "WORKER_PORT",
    "PLACES_LIMIT",
    "DEFAULT_RADIUS_KM",
    "SCRAPE_MAX_ATTEMPTS",
    "SCRAPE_MAX_WORKERS",
    "SCRAPE_RETRY_DELAY_SECONDS",
)


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GEOAPIFY_API_KEY", "abc123")
    monkeypatch.setenv("WORKER_PORT", "9100")
    monkeypatch.setenv("PLACES_LIMIT", "50")
    monkeypatch.setenv("SCRAPE_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("SCRAPE_MAX_WORKERS", "2")

    settings = config.get_settings()

    assert settings.geoapify_api_key == "abc123"
    assert settings.worker_port == 9100
    assert settings.places_limit == 50
    assert settings.scrape_timeout_seconds == 5.0
    assert settings.scrape_max_workers == 2


def test_port_takes_precedence_over_worker_port(monkeypatch):
    monkeypatch.setenv("PORT", "8081")
    monkeypatch.setenv("WORKER_PORT", "9100")

    assert config.get_settings().worker_port == 8081


def test_get_settings_warns_when_missing(monkeypatch, caplog):
    monkeypatch.delenv("GEOAPIFY_API_KEY", raising=False)
    monkeypatch.delenv("SCRAPE_TIMEOUT_SECONDS", raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "GEOAPIFY_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.geoapify_api_key == ""
    assert settings.worker_port == 8080
    assert settings.places_limit == 500
    assert settings.default_radius_km == 2.5
    assert settings.scrape_timeout_seconds == 15.0
    assert settings.scrape_max_attempts == 3
