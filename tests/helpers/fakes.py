"""In-memory stand-ins for the Playwright browser used by the crawl tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set
from urllib.parse import urljoin

from playwright.async_api import Error as PlaywrightError


@dataclass
class FakeSite:
    """A tiny web: each URL maps to the raw hrefs of the anchors on it."""

    links: Dict[str, List[str]] = field(default_factory=dict)
    failures: Set[str] = field(default_factory=set)
    delays: Dict[str, float] = field(default_factory=dict)
    navigations: List[str] = field(default_factory=list)
    evaluations: int = 0
    content_reads: int = 0

    def html_for(self, url: str) -> str:
        anchors = "".join(f'<a href="{raw}">link</a>' for raw in self.links.get(url, []))
        return f"<html><body>{anchors}</body></html>"


class FakePage:
    def __init__(self, site: FakeSite, options: dict) -> None:
        self.site = site
        self.options = options
        self.url = "about:blank"
        self.closed = False
        self.screenshots: List[dict] = []
        self.pdfs: List[dict] = []

    async def goto(self, url: str) -> None:
        self.site.navigations.append(url)
        await asyncio.sleep(self.site.delays.get(url, 0))
        if url in self.site.failures:
            raise PlaywrightError(f"net::ERR_CONNECTION_REFUSED at {url}")
        self.url = url

    async def screenshot(self, *, path: str, type: str, full_page: bool) -> bytes:
        self.screenshots.append({"path": path, "type": type, "full_page": full_page})
        Path(path).write_bytes(b"\x89PNG")
        return b"\x89PNG"

    async def pdf(self, *, path: str, width: str, height: str) -> bytes:
        self.pdfs.append({"path": path, "width": width, "height": height})
        Path(path).write_bytes(b"%PDF")
        return b"%PDF"

    async def evaluate(self, script: str) -> dict:
        self.site.evaluations += 1
        anchors = [
            {"href": urljoin(self.url, raw), "raw": raw}
            for raw in self.site.links.get(self.url, [])
        ]
        return {"pageUrl": self.url, "anchors": anchors}

    async def content(self) -> str:
        self.site.content_reads += 1
        return self.site.html_for(self.url)

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, site: Optional[FakeSite] = None) -> None:
        self.site = site or FakeSite()
        self.pages: List[FakePage] = []
        self.closed = False

    async def new_page(self, **options) -> FakePage:
        page = FakePage(self.site, options)
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True
