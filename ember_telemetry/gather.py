"""
Orchestrator: opens the Ember app in Chromium, runs the extractor and caches
the snapshot.
"""

import json
import sys
from typing import Any, Callable, Optional

try:
    from playwright.async_api import async_playwright, Page
except ImportError:
    print("ERROR: playwright not installed. Run: pip install playwright && playwright install chromium")
    raise SystemExit(1)

from .cache import DiskCache
from .extractor import Snapshot, TelemetryExtractor
from .probe import ERROR_CHANNEL

CACHE_KEY = "telemetry"
DEFAULT_TIMEOUT_MS = 30000


def fail(message: str, error: BaseException) -> None:
    print(message, file=sys.stderr)
    print(f"{type(error).__name__}: {error}", file=sys.stderr)
    raise SystemExit(1)


class TelemetryGatherer:
    def __init__(
        self,
        url: str,
        cache: Optional[DiskCache] = None,
        headless: bool = True,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        extractor: Optional[TelemetryExtractor] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        self.url = url
        self.cache = cache or DiskCache()
        self.headless = headless
        self.timeout_ms = timeout_ms
        self.extractor = extractor or TelemetryExtractor()
        self.diagnostics = self.extractor.diagnostics
        self.playwright_factory = playwright_factory

    def forward_console(self, msg) -> None:
        print(f"PAGE LOG: {msg.text}")

    async def open_page(self, browser) -> Page:
        context = await browser.new_context(ignore_https_errors=True)
        page = await context.new_page()
        await page.expose_function(ERROR_CHANNEL, self.diagnostics)
        page.on("console", self.forward_console)
        await page.goto(self.url, timeout=self.timeout_ms)
        return page

    async def gather(self) -> Snapshot:
        async with self.playwright_factory() as p:
            try:
                browser = await p.chromium.launch(headless=self.headless)
                page = await self.open_page(browser)
            except Exception as e:
                fail("Failed to visit Ember App", e)

            try:
                telemetry = await self.extractor.extract(page)
            except Exception as e:
                fail("Failed to build telemetry", e)

            self.cache.set(CACHE_KEY, json.dumps(telemetry))
            await browser.close()

        print(json.dumps(telemetry, indent=2))
        print("finished gathering telemetry")
        return telemetry


async def gather_telemetry(url: str, **kwargs) -> Snapshot:
    return await TelemetryGatherer(url, **kwargs).gather()
