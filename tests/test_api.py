"""Tests for the HTTP endpoints."""
import base64
from contextlib import asynccontextmanager

import httpx
import pytest
from fastapi.testclient import TestClient

from codesync import __version__
from codesync import main
from codesync.adapters.page_fetcher import PageFetcher
from codesync.config import Config
from codesync.errors import BrowserUnavailableError
from tests.conftest import LEETCODE_HTML, LEETCODE_URL

GITHUB_SETTINGS = {"token": "ghp_test", "username": "octocat", "repo": "solutions"}


@pytest.fixture
def client(monkeypatch, sync_layer) -> TestClient:
    monkeypatch.setattr(main, "sync_layer", sync_layer)
    monkeypatch.setattr(main.capture_pipeline, "sync_layer", sync_layer)
    return TestClient(main.app)


@pytest.fixture
def fetched_pages(monkeypatch):
    """Serve page fetches from a dict of url -> (status, html)."""
    pages = {}

    def handler(request: httpx.Request) -> httpx.Response:
        status, html = pages.get(str(request.url), (404, "<html></html>"))
        return httpx.Response(status, text=html)

    monkeypatch.setattr(main, "page_fetcher", PageFetcher(transport=httpx.MockTransport(handler)))
    monkeypatch.setattr(Config, "BRIDGE_TIMEOUT_SECONDS", 0.01)
    return pages


@pytest.fixture
def no_browser(monkeypatch):
    """Headless browser that cannot start."""
    @asynccontextmanager
    async def unavailable(url, timeout_ms=30000, settle_seconds=2.0):
        raise BrowserUnavailableError("Headless browser unavailable: install the 'browser' extra")
        yield

    monkeypatch.setattr(main.BrowserPageSource, "open", unavailable)


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == __version__

    def test_reports_stored_settings(self, client, no_stored_settings):
        assert client.get("/api/health").json()["github_configured"] is False


class TestDetectPlatform:

    def test_supported(self, client):
        body = client.get("/api/detect-platform", params={"url": LEETCODE_URL}).json()

        assert body["platform"] == "leetcode"
        assert body["display_name"] == "LeetCode"
        assert body["supported"] is True
        assert body["message"] is None
        assert body["trace_id"]

    def test_unsupported(self, client):
        body = client.get("/api/detect-platform", params={"url": "https://example.com"}).json()

        assert body["platform"] == "unknown"
        assert body["supported"] is False
        assert body["message"] == main.UNSUPPORTED_MESSAGE


class TestExtract:

    def test_snapshot_with_editor_values(self, client):
        response = client.post("/api/extract", json={
            "url": LEETCODE_URL,
            "html": LEETCODE_HTML,
            "editor_values": ["class Solution:\n    pass"],
        })
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"]["problemNumber"] == "1"
        assert body["data"]["language"] == "python"
        assert body["data"]["code"] == "class Solution:\n    pass"

    def test_unsupported_page(self, client):
        body = client.post("/api/extract", json={"url": "https://example.com", "html": "<p>hi</p>"}).json()

        assert body["success"] is False
        assert body["data"] is None


class TestSync:

    def test_push(self, client, store, two_sum):
        response = client.post("/api/sync", json={
            "problemData": two_sum.to_message(),
            "githubConfig": {"token": "ghp_test", "username": "octocat", "repo": "solutions"},
        })
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["result"]["path"] == "leetcode/1_Two_Sum.py"
        assert "error" not in body
        assert len(store.put_payloads()) == 1

    def test_incomplete_settings(self, client, store, two_sum, no_stored_settings):
        body = client.post("/api/sync", json={"problemData": two_sum.to_message()}).json()

        assert body["success"] is False
        assert body["error"].startswith("GitHub configuration incomplete")
        assert "result" not in body
        assert store.requests == []

    def test_invalid_payload(self, client):
        response = client.post("/api/sync", json={"problemData": {"title": "no platform"}})
        assert response.status_code == 422


class TestCapture:

    def test_incomplete_settings_checked_first(self, client, store, no_stored_settings):
        body = client.post("/api/capture", json={"url": LEETCODE_URL, "use_browser": False}).json()

        assert body["success"] is False
        assert body["error"].startswith("GitHub configuration incomplete")
        assert store.requests == []

    def test_fetched_page_is_pushed(self, client, store, fetched_pages):
        fetched_pages[LEETCODE_URL] = (200, LEETCODE_HTML)

        body = client.post("/api/capture", json={
            "url": LEETCODE_URL,
            "githubConfig": GITHUB_SETTINGS,
            "use_browser": False,
        }).json()

        assert body["success"] is True
        assert body["data"]["title"] == "1. Two Sum"
        assert body["result"]["path"] == "leetcode/1_Two_Sum.py"

        payload = store.put_payloads()[0]
        content = base64.b64decode(payload["content"]).decode("utf-8")
        assert payload["message"] == "Add solution: 1. Two Sum"
        assert content.endswith("class Solution:\n    def twoSum(self, nums, target):")

    def test_default_settings_without_browser_use_fetched_page(self, client, store, fetched_pages, no_browser):
        fetched_pages[LEETCODE_URL] = (200, LEETCODE_HTML)

        response = client.post("/api/capture", json={"url": LEETCODE_URL, "githubConfig": GITHUB_SETTINGS})
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is True
        assert body["result"]["url"] == "https://github.com/octocat/solutions/blob/main/leetcode/1_Two_Sum.py"
        assert len(store.put_payloads()) == 1

    def test_unsupported_page_reports_no_data(self, client, store, fetched_pages):
        fetched_pages["https://example.com/problems/1"] = (200, LEETCODE_HTML)

        body = client.post("/api/capture", json={
            "url": "https://example.com/problems/1",
            "githubConfig": GITHUB_SETTINGS,
            "use_browser": False,
        }).json()

        assert body["success"] is False
        assert body["error"].startswith("No problem data found")
        assert store.requests == []

    def test_unreachable_page_reports_error(self, client, store, fetched_pages):
        fetched_pages[LEETCODE_URL] = (503, "<html>down</html>")

        response = client.post("/api/capture", json={
            "url": LEETCODE_URL,
            "githubConfig": GITHUB_SETTINGS,
            "use_browser": False,
        })
        body = response.json()

        assert response.status_code == 200
        assert body["success"] is False
        assert body["error"].startswith("Extraction failed")
        assert store.requests == []
