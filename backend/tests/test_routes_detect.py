"""
Tests for api/routes_detect.py and the meta routes.

Covers:
  - OPTIONS preflight: 200, empty body, CORS headers
  - POST verdicts: Pepsi -> true, Local Fizz Cola -> false, no labels -> false
  - prefixed path /functions/v1/detect-product
  - failures: malformed JSON, missing image, provider error/timeout -> 500 {"error"}
  - labels come back exactly as the provider sent them
"""
from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

import alternative_finder.api.routes_detect as routes_detect
from alternative_finder.core.vision import VisionRequestError

PATHS = ["/detect-product", "/functions/v1/detect-product"]


@pytest.fixture
def fake_labels(monkeypatch):
    """Replace the provider call; set .return_value / .side_effect per test."""
    mock = AsyncMock(return_value=[])
    monkeypatch.setattr(routes_detect, "detect_labels", mock)
    return mock


def assert_cors(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
    assert "Content-Type" in response.headers["access-control-allow-headers"]


# ── OPTIONS ────────────────────────────────────────────────────────────────────

class TestPreflight:
    @pytest.mark.parametrize("path", PATHS)
    def test_options_empty_with_cors(self, client, path):
        r = client.options(path)
        assert r.status_code == 200
        assert r.content == b""
        assert_cors(r)

    def test_browser_preflight(self, client):
        r = client.options(
            "/detect-product",
            headers={
                "Origin": "https://scanner.example",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert r.status_code == 200
        assert r.content == b""
        assert_cors(r)


# ── POST success ───────────────────────────────────────────────────────────────

class TestDetect:
    @pytest.mark.parametrize("path", PATHS)
    def test_pepsi_is_american(self, client, fake_labels, path):
        fake_labels.return_value = [{"description": "Pepsi Max 500ml", "score": 0.9}]

        r = client.post(path, json={"image": "data:image/jpeg;base64,QUJD"})

        assert r.status_code == 200
        assert r.headers["content-type"].startswith("application/json")
        assert_cors(r)
        body = r.json()
        assert body["isAmerican"] is True
        assert body["labels"] == [{"description": "Pepsi Max 500ml", "score": 0.9}]

    def test_local_fizz_is_not(self, client, fake_labels):
        fake_labels.return_value = [{"description": "Local Fizz Cola", "score": 0.8}]
        r = client.post("/detect-product", json={"image": "QUJD"})
        assert r.status_code == 200
        assert r.json()["isAmerican"] is False

    def test_no_labels(self, client, fake_labels):
        r = client.post("/detect-product", json={"image": "QUJD"})
        assert r.json() == {"isAmerican": False, "labels": []}

    def test_extra_label_fields_pass_through(self, client, fake_labels):
        fake_labels.return_value = [
            {"mid": "/m/01", "description": "Kraft", "score": 0.7, "topicality": 0.7, "locations": []}
        ]
        r = client.post("/detect-product", json={"image": "QUJD"})
        assert r.json()["labels"][0]["locations"] == []

    def test_labels_returned_verbatim(self, client, fake_labels):
        raw = [{"description": "Pepsi", "score": 1, "locale": None, "boundingPoly": None}]
        fake_labels.return_value = raw

        r = client.post("/detect-product", json={"image": "QUJD"})

        assert r.status_code == 200
        labels = r.json()["labels"]
        assert labels == raw
        assert isinstance(labels[0]["score"], int)

    def test_image_forwarded_with_settings(self, client, fake_labels, live_settings):
        client.post("/detect-product", json={"image": "QUJD"})
        fake_labels.assert_awaited_once_with("QUJD", settings=live_settings)


# ── POST failures ──────────────────────────────────────────────────────────────

class TestDetectErrors:
    def test_malformed_json(self, client, fake_labels):
        r = client.post(
            "/detect-product",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 500
        assert isinstance(r.json()["error"], str)
        assert_cors(r)
        fake_labels.assert_not_awaited()

    def test_missing_image(self, client, fake_labels):
        r = client.post("/detect-product", json={"picture": "QUJD"})
        assert r.status_code == 500
        assert "image" in r.json()["error"]

    def test_provider_error(self, client, fake_labels):
        fake_labels.side_effect = VisionRequestError("Vision request failed: 403")
        r = client.post("/detect-product", json={"image": "QUJD"})
        assert r.status_code == 500
        assert r.json() == {"error": "Vision request failed: 403"}

    def test_label_without_description_fails_whole_response(self, client, fake_labels):
        fake_labels.return_value = [{"description": "Pepsi"}, {"score": 0.3}]
        r = client.post("/detect-product", json={"image": "QUJD"})
        assert r.status_code == 500
        assert "isAmerican" not in r.json()

    def test_provider_timeout(self, client, monkeypatch):
        real_client = httpx.AsyncClient

        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        def timing_out_client(*args, **kwargs):
            return real_client(*args, transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", timing_out_client)

        r = client.post("/detect-product", json={"image": "QUJD"})

        assert r.status_code == 500
        assert "read timed out" in r.json()["error"]
        assert_cors(r)


# ── meta ───────────────────────────────────────────────────────────────────────

class TestMeta:
    def test_health(self, client):
        assert client.get("/health").json() == {"ok": True}

    def test_version(self, client, live_settings):
        body = client.get("/version").json()
        assert body["version"] == live_settings.APP_VERSION
        assert body["build"] == live_settings.BUILD_ID
