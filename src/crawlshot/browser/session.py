"""Chromium session helpers shared by the crawl workers."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import Browser, Page, Playwright

from ..core.config import CrawlConfig

# Keep each seed's browser quiet and free of cross-request state.
LAUNCH_ARGS = (
    "--incognito",
    "--no-experiments",
    "--no-pings",
    "--no-referrers",
    "--dns-prefetch-disable",
    "--disable-preconnect",
)


def page_options(config: CrawlConfig) -> dict[str, Any]:
    """Keyword arguments for ``Browser.new_page`` derived from the config."""

    options: dict[str, Any] = {
        "viewport": config.viewport.size,
        "device_scale_factor": config.viewport.device_scale_factor,
        "is_mobile": config.viewport.is_mobile,
        "has_touch": config.viewport.has_touch,
        "java_script_enabled": config.javascript_enabled,
    }
    if config.user_agent:
        options["user_agent"] = config.user_agent
    return options


async def launch_session(playwright: Playwright, config: CrawlConfig) -> Browser:
    return await playwright.chromium.launch(
        headless=config.headless,
        args=list(LAUNCH_ARGS),
    )


@asynccontextmanager
async def open_tab(browser: Any, config: CrawlConfig) -> AsyncIterator[Page]:
    """Open one tab for a worker and always close it afterwards."""

    page = await browser.new_page(**page_options(config))
    try:
        yield page
    finally:
        await page.close()
