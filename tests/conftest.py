# File: tests/conftest.py
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import pytest
from aiohttp import web

from a11y_scout.config import AuditConfig
from a11y_scout.storage import Run

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

RUN_STARTED = datetime(2024, 7, 24, 10, 34, 20)


def urlset(*locs: str) -> str:
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{entries}</urlset>'


def sitemapindex(*locs: str) -> str:
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="{SITEMAP_NS}">{entries}</sitemapindex>'
    )


def make_audit(
    mode: str = "binary",
    score: Optional[float] = 0,
    title: str = "Check",
    description: str = "",
    nodes: Optional[list] = None,
) -> Dict[str, Any]:
    audit: Dict[str, Any] = {
        "title": title,
        "description": description,
        "score": score,
        "scoreDisplayMode": mode,
    }
    if nodes is not None:
        audit["details"] = {"type": "table", "items": [{"node": n} for n in nodes]}
    return audit


def make_raw(url: str, score: Optional[float], audits: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Minimal Lighthouse-shaped result."""
    raw: Dict[str, Any] = {
        "requestedUrl": url,
        "finalUrl": url,
        "categories": {"accessibility": {"id": "accessibility", "score": score}},
        "audits": audits or {},
    }
    return raw


@pytest.fixture()
def raw_factory() -> Callable[..., Dict[str, Any]]:
    return make_raw


@pytest.fixture()
def audit_config(tmp_path) -> AuditConfig:
    """Config pointing reports into a temporary directory, no retries."""
    return AuditConfig(
        reports_dir=tmp_path / "reports",
        timeout=2.0,
        user_agent="TestAgent/1.0",
        retry_times=0,
    )


@pytest.fixture()
def run(tmp_path) -> Run:
    """Empty run directory with a fixed start time."""
    return Run.create(tmp_path / "reports", now=RUN_STARTED)


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def xml_response(body: str) -> web.Response:
    return web.Response(text=body, content_type="application/xml")


class FakePage:
    """Stand-in for a Playwright page; records calls and close()."""

    def __init__(self, goto_error: Optional[BaseException] = None) -> None:
        self.goto_error = goto_error
        self.visited: list = []
        self.clicked: list = []
        self.closed = False

    async def goto(self, url: str, timeout: float = 0) -> None:
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error

    async def click(self, selector: str, timeout: float = 0) -> None:
        self.clicked.append(selector)

    async def close(self) -> None:
        self.closed = True


class FakeContext:
    def __init__(self, page: Optional[FakePage] = None, close_error: Optional[BaseException] = None) -> None:
        self.page = page or FakePage()
        self.close_error = close_error
        self.closed = False

    async def new_page(self) -> FakePage:
        return self.page

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakePlaywright:
    """``async_playwright()`` replacement whose chromium launch fails with *launch_error*."""

    def __init__(self, launch_error: Optional[BaseException] = None, context: Optional[FakeContext] = None) -> None:
        self.launch_error = launch_error
        self.context = context or FakeContext()
        self.chromium = self
        self.launched_with: Optional[dict] = None
        self.stopped = False

    def __call__(self) -> "FakePlaywright":
        return self

    async def start(self) -> "FakePlaywright":
        return self

    async def launch_persistent_context(self, user_data_dir: str, **kwargs: Any) -> FakeContext:
        self.launched_with = {"user_data_dir": user_data_dir, **kwargs}
        if self.launch_error is not None:
            raise self.launch_error
        return self.context

    async def stop(self) -> None:
        self.stopped = True
