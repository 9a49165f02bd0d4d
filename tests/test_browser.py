"""Tests for the headless browser page source."""
import sys

import pytest

from codesync.adapters.browser import BrowserPageSource
from codesync.errors import BrowserUnavailableError


class TestBrowserPageSource:

    @pytest.mark.asyncio
    async def test_missing_playwright_is_reported(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "playwright", None)
        monkeypatch.setitem(sys.modules, "playwright.async_api", None)

        with pytest.raises(BrowserUnavailableError, match="browser"):
            async with BrowserPageSource.open("https://leetcode.com/problems/two-sum/"):
                pass

    @pytest.mark.asyncio
    async def test_snapshot_reads_markup_and_editors(self):
        class FakePage:
            url = "https://leetcode.com/problems/two-sum/"

            async def content(self):
                return "<html><body><div data-cy='question-title'>1. Two Sum</div></body></html>"

            async def evaluate(self, script):
                return ["class Solution:\n    pass"]

        document = await BrowserPageSource(FakePage()).snapshot()

        assert document.url == "https://leetcode.com/problems/two-sum/"
        assert document.has_live_state
        assert document.editor_values == ["class Solution:\n    pass"]
