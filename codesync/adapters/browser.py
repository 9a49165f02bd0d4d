"""
Headless browser page source.

Opens the problem page in Chromium through Playwright and snapshots it from
inside the page: rendered markup plus the values of every live Monaco
editor model. Requires the optional "browser" extra.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from codesync.errors import BrowserUnavailableError
from codesync.extraction.document import PageDocument
from codesync.utils.logger import LayerLogger

EDITOR_VALUES_SCRIPT = """() => {
    try {
        if (!window.monaco || !window.monaco.editor) return [];
        return window.monaco.editor.getEditors()
            .map((editor) => editor.getModel())
            .filter((model) => model)
            .map((model) => model.getValue());
    } catch (e) {
        return [];
    }
}"""


class BrowserPageSource:
    """Snapshot provider bound to one open Playwright page."""
    
    def __init__(self, page):
        self.page = page
        self.logger = LayerLogger("browser_page")
    
    async def snapshot(self) -> PageDocument:
        html = await self.page.content()
        editor_values: List[str] = await self.page.evaluate(EDITOR_VALUES_SCRIPT)
        self.logger.log_action(
            "page_snapshot",
            "completed",
            url=self.page.url,
            content_length=len(html),
            editors=len(editor_values),
        )
        return PageDocument(self.page.url, html, editor_values)
    
    @classmethod
    @asynccontextmanager
    async def open(
        cls,
        url: str,
        timeout_ms: int = 30000,
        settle_seconds: float = 2.0,
    ) -> AsyncIterator["BrowserPageSource"]:
        """
        Launch headless Chromium, load url and yield a source for it.

        Raises:
            BrowserUnavailableError: Playwright is missing, Chromium did not
                launch, or the page did not load
        """
        try:
            from playwright.async_api import Error as PlaywrightError
            from playwright.async_api import async_playwright
        except ImportError as e:
            raise BrowserUnavailableError(
                "Headless browser unavailable: install the 'browser' extra"
            ) from e

        try:
            playwright = await async_playwright().start()
        except PlaywrightError as e:
            raise BrowserUnavailableError(f"Headless browser unavailable: {e}") from e

        try:
            try:
                browser = await playwright.chromium.launch(headless=True)
            except PlaywrightError as e:
                raise BrowserUnavailableError(f"Chromium failed to launch: {e}") from e

            try:
                try:
                    page = await browser.new_page()
                    await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
                except PlaywrightError as e:
                    raise BrowserUnavailableError(f"Could not load {url}: {e}") from e
                # Editors mount after the initial document load
                await asyncio.sleep(settle_seconds)
                yield cls(page)
            finally:
                await browser.close()
        finally:
            await playwright.stop()
