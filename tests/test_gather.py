import asyncio
import json

import pytest

from ember_telemetry.cache import DiskCache
from ember_telemetry.extractor import TelemetryExtractor
from ember_telemetry.gather import CACHE_KEY, TelemetryGatherer
from ember_telemetry.walker import DiagnosticSink

from .test_probe import route_payload


class FakeMessage:
    def __init__(self, text):
        self.text = text


class FakePage:
    def __init__(self, result=None, goto_error=None, evaluate_error=None):
        self.result = result
        self.goto_error = goto_error
        self.evaluate_error = evaluate_error
        self.exposed = {}
        self.handlers = {}
        self.visited = []

    async def expose_function(self, name, callback):
        self.exposed[name] = callback

    def on(self, event, handler):
        self.handlers[event] = handler

    async def goto(self, url, timeout=None):
        if self.goto_error:
            raise self.goto_error
        self.visited.append(url)

    async def evaluate(self, script, arg=None):
        if self.evaluate_error:
            raise self.evaluate_error
        return self.result


class FakeContext:
    def __init__(self, page):
        self.page = page

    async def new_page(self):
        return self.page


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False
        self.context_options = None

    async def new_context(self, **options):
        self.context_options = options
        return FakeContext(self.page)

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser):
        self.browser = browser
        self.launch_options = None

    async def launch(self, **options):
        self.launch_options = options
        return self.browser


class FakePlaywright:
    def __init__(self, page):
        self.browser = FakeBrowser(page)
        self.chromium = FakeChromium(self.browser)

    def __call__(self):
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def make_gatherer(tmp_path, page, **kwargs):
    playwright = FakePlaywright(page)
    gatherer = TelemetryGatherer(
        "http://localhost:4200",
        cache=DiskCache(tmp_path),
        extractor=TelemetryExtractor(diagnostics=DiagnosticSink(echo=False)),
        playwright_factory=playwright,
        **kwargs,
    )
    return gatherer, playwright


def test_successful_gather_caches_and_prints(tmp_path, capsys):
    page = FakePage({"paths": ["app/routes/index"], "modules": {"app/routes/index": route_payload()}})
    gatherer, playwright = make_gatherer(tmp_path, page)

    telemetry = asyncio.run(gatherer.gather())

    assert list(telemetry) == ["app/routes/index"]
    assert json.loads(DiskCache(tmp_path).get(CACHE_KEY)) == telemetry
    assert playwright.browser.closed
    assert playwright.browser.context_options == {"ignore_https_errors": True}
    assert playwright.chromium.launch_options == {"headless": True}
    assert page.visited == ["http://localhost:4200"]
    assert page.exposed["logErrorInNodeProcess"] is gatherer.diagnostics
    out = capsys.readouterr().out
    assert out.rstrip().endswith("finished gathering telemetry")


def test_console_messages_forwarded(tmp_path, capsys):
    page = FakePage({"paths": [], "modules": {}})
    gatherer, _ = make_gatherer(tmp_path, page)
    asyncio.run(gatherer.gather())
    capsys.readouterr()

    page.handlers["console"](FakeMessage("hello"))

    assert capsys.readouterr().out == "PAGE LOG: hello\n"


def test_navigation_failure_exits_without_caching(tmp_path, capsys):
    page = FakePage(goto_error=RuntimeError("net::ERR_CONNECTION_REFUSED"))
    gatherer, _ = make_gatherer(tmp_path, page)

    with pytest.raises(SystemExit) as excinfo:
        asyncio.run(gatherer.gather())

    assert excinfo.value.code == 1
    assert "Failed to visit Ember App" in capsys.readouterr().err
    assert not DiskCache(tmp_path).has(CACHE_KEY)


def test_extraction_failure_exits_without_caching(tmp_path, capsys):
    page = FakePage(evaluate_error=RuntimeError("window.require is undefined"))
    gatherer, _ = make_gatherer(tmp_path, page)

    with pytest.raises(SystemExit) as excinfo:
        asyncio.run(gatherer.gather())

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Failed to build telemetry" in err
    assert "window.require is undefined" in err
    assert not DiskCache(tmp_path).has(CACHE_KEY)


def test_headed_launch(tmp_path):
    page = FakePage({"paths": [], "modules": {}})
    gatherer, playwright = make_gatherer(tmp_path, page, headless=False)
    asyncio.run(gatherer.gather())
    assert playwright.chromium.launch_options == {"headless": False}
