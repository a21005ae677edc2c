"""Tab pool that crawls each seed and captures every visited page."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, List
from urllib.parse import urlsplit

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Playwright, async_playwright

from ..browser.session import launch_session, open_tab
from ..core.artifacts import SeedCrawlResult, WorkerFailure
from ..core.config import ConfigurationError, CrawlConfig
from .capture import CaptureOrchestrator
from .link_filter import discover_links
from .paths import PathMapper
from .state import CrawlState

logger = logging.getLogger(__name__)

# Failures tied to a single URL. Anything else is a bug and ends the worker.
# ValueError covers URLs the path mapper cannot place (no host).
PAGE_ERRORS = (PlaywrightError, OSError, ValueError)


def validate_seed(url: str) -> str:
    parsed = urlsplit(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(f"Invalid seed URL: {url!r}")
    return url


@dataclass
class SeedCrawler:
    """Runs ``config.tabs`` workers over the frontier of a single seed."""

    config: CrawlConfig
    seed_url: str
    result: SeedCrawlResult = field(init=False)

    def __post_init__(self) -> None:
        self.result = SeedCrawlResult(seed_url=self.seed_url)
        self._state = CrawlState(
            self.seed_url,
            max_depth=self.config.max_depth,
            recursive=self.config.recursive,
        )
        self._paths = PathMapper(self.config.output_dir)
        self._capture = CaptureOrchestrator(self.config.capture, self.config.viewport)

    @property
    def state(self) -> CrawlState:
        return self._state

    async def run(self, browser: Any) -> SeedCrawlResult:
        workers = [
            asyncio.create_task(self._worker(browser, index))
            for index in range(self.config.tabs)
        ]
        outcomes = await asyncio.gather(*workers, return_exceptions=True)

        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "%s: tab %d stopped unexpectedly",
                    self.seed_url,
                    index,
                    exc_info=outcome,
                )
                self.result.failures.append(
                    WorkerFailure(worker=index, url=None, error=repr(outcome))
                )

        self.result.visited = list(self._state.dispatched)
        logger.debug(
            "%s: %d page(s) visited, %d artifact(s) written",
            self.seed_url,
            len(self.result.visited),
            len(self.result.artifacts),
        )
        return self.result

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------
    async def _worker(self, browser: Any, index: int) -> None:
        async with open_tab(browser, self.config) as page:
            while True:
                url = await self._state.next_url()
                if url is None:
                    return

                try:
                    await self._visit(page, url)
                except PAGE_ERRORS as exc:
                    logger.error("%s failed: %s", url, exc)
                    self.result.failures.append(
                        WorkerFailure(worker=index, url=url, error=str(exc))
                    )
                    if not self.config.keep_going:
                        return

    async def _visit(self, page: Any, url: str) -> None:
        links: List[str] = []
        try:
            logger.info("%s", url)
            await page.goto(url)
            base_path = self._paths.path_for(url)
            self.result.artifacts.extend(await self._capture.capture(page, url, base_path))

            if self._state.accepts_links:
                links = await discover_links(
                    page,
                    self.config.link_filter,
                    javascript_enabled=self.config.javascript_enabled,
                )
        finally:
            await self._state.finish(url, links)


async def crawl_seed(playwright: Playwright, config: CrawlConfig, seed_url: str) -> SeedCrawlResult:
    """Crawl one seed in its own browser. Errors never leak to other seeds."""

    try:
        validate_seed(seed_url)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return SeedCrawlResult(seed_url=seed_url, configuration_error=str(exc))

    try:
        browser = await launch_session(playwright, config)
    except PlaywrightError as exc:
        logger.error("Could not start a browser for %s: %s", seed_url, exc)
        result = SeedCrawlResult(seed_url=seed_url)
        result.failures.append(WorkerFailure(worker=None, url=None, error=str(exc)))
        return result

    try:
        return await SeedCrawler(config, seed_url).run(browser)
    finally:
        await browser.close()


async def crawl(config: CrawlConfig) -> List[SeedCrawlResult]:
    """Crawl every seed of ``config`` concurrently."""

    async with async_playwright() as playwright:
        results = await asyncio.gather(
            *(crawl_seed(playwright, config, seed_url) for seed_url in config.seed_urls)
        )
    return list(results)


def run_crawl(config: CrawlConfig) -> List[SeedCrawlResult]:
    """Sync wrapper used by the CLI."""

    return asyncio.run(crawl(config))
