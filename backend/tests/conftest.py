"""
Shared pytest fixtures.

Every test gets Settings built from explicit values (never the developer's
.env), so demo/live mode is decided by the test, not the machine.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from alternative_finder.core.config import Settings, get_settings
from alternative_finder.main import create_app


def make_settings(**overrides) -> Settings:
    values = {
        "SUPABASE_URL": "",
        "SUPABASE_ANON_KEY": "",
        "GOOGLE_VISION_API_KEY": "",
        "DEMO_SCAN_DELAY_SECONDS": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def demo_settings() -> Settings:
    return make_settings()


@pytest.fixture
def live_settings() -> Settings:
    return make_settings(
        SUPABASE_URL="https://proj.supabase.co",
        SUPABASE_ANON_KEY="anon-key",
        GOOGLE_VISION_API_KEY="vision-key",
    )


@pytest.fixture
def app(live_settings):
    application = create_app()
    application.dependency_overrides[get_settings] = lambda: live_settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def settings_factory():
    return make_settings
