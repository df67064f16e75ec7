# tests/conftest.py
from collections.abc import Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

import petcare_api.api.dependencies as _deps
from petcare_api.core.config import Settings, get_settings
from petcare_api.core.rate_limit import limiter
from petcare_api.main import app


@pytest.fixture
def test_settings() -> Settings:
    # Explizit leere Credentials, damit keine lokale .env echte Amazon-Calls auslöst
    return Settings(
        api_keys={"test-key-alice": "user_alice", "test-key-bob": "user_bob"},
        amazon_access_key="",
        amazon_secret_key="",
        amazon_partner_tag="",
        provider_cooldown_ms=0,
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    # Reset the singletons so each test starts with an empty search cache and
    # an empty in-memory SQLite database.
    _deps._product_search_service = None
    _deps._click_repository = None
    limiter.reset()
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        with patch("petcare_api.core.config.get_settings", return_value=test_settings), TestClient(
            app
        ) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_settings, None)
        _deps._product_search_service = None
        _deps._click_repository = None


@pytest.fixture
def alice_headers() -> dict:
    return {"X-API-Key": "test-key-alice"}


@pytest.fixture
def bob_headers() -> dict:
    return {"X-API-Key": "test-key-bob"}
