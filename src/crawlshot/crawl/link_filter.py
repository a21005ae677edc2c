"""Link discovery and the predicate pipeline deciding what gets enqueued."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

DEFAULT_PORTS = {"http": 80, "https": 443}

# Runs inside the page. Returns plain data only: every anchor in the light DOM
# followed by the anchors of each shadow root, depth first.
COLLECT_ANCHORS_SCRIPT = """
() => {
    const elements = [];

    function collect(found) {
        elements.push(...found);
        for (const element of found) {
            if (element.shadowRoot) {
                collect(element.shadowRoot.querySelectorAll('*'));
            }
        }
    }

    collect(document.querySelectorAll('*'));

    const anchors = elements
        .filter(el => el.localName === 'a' && typeof el.href === 'string' && el.hasAttribute('href'))
        .map(el => ({ href: el.href, raw: el.getAttribute('href') }));

    return { pageUrl: location.href, anchors };
}
"""


@dataclass(frozen=True, slots=True)
class AnchorCandidate:
    """A hyperlink as found in the page: resolved target plus raw attribute."""

    href: str
    raw: str


def origin_of(url: str) -> str:
    parsed = urlsplit(url)
    scheme = parsed.scheme.lower()
    hostname = (parsed.hostname or "").lower()
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port is None or port == DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{hostname}"
    return f"{scheme}://{hostname}:{port}"


def is_relative_reference(raw: str) -> bool:
    """True when the raw href is syntactically relative (``//`` counts as absolute)."""

    return raw.find("://") < 1 and not raw.startswith("//")


@dataclass(frozen=True, slots=True)
class LinkFilter:
    """Filters discovered anchors. Built only from primitive options.

    Filters are applied in a fixed order and combine as an intersection; an
    unset option skips its filter entirely. Duplicates are preserved.
    """

    same_origin: bool = False
    https_only: bool = False
    relative_only: bool = False
    pattern: Optional[str] = None

    def apply(self, candidates: Iterable[AnchorCandidate], page_url: str) -> List[str]:
        links = [candidate for candidate in candidates if self._is_followable(candidate, page_url)]

        if self.same_origin:
            page_origin = origin_of(page_url)
            links = [link for link in links if origin_of(link.href) == page_origin]

        if self.https_only:
            links = [link for link in links if urlsplit(link.href).scheme == "https"]

        if self.relative_only:
            links = [link for link in links if is_relative_reference(link.raw)]

        if self.pattern:
            matcher = re.compile(self.pattern)
            links = [link for link in links if matcher.search(link.href)]

        return [link.href for link in links]

    @staticmethod
    def _is_followable(candidate: AnchorCandidate, page_url: str) -> bool:
        if not candidate.href or candidate.href == page_url:
            return False
        # mailto:, about:, data:, file: and friends have no page to capture.
        parsed = urlsplit(candidate.href)
        return parsed.scheme.lower() in DEFAULT_PORTS and bool(parsed.netloc)


def candidates_from_evaluation(result: Any) -> tuple[str, List[AnchorCandidate]]:
    """Convert the payload returned by ``COLLECT_ANCHORS_SCRIPT``."""

    page_url = result.get("pageUrl") or ""
    anchors = [
        AnchorCandidate(href=entry.get("href") or "", raw=entry.get("raw") or "")
        for entry in result.get("anchors", [])
    ]
    return page_url, anchors


def candidates_from_html(html: str, page_url: str) -> List[AnchorCandidate]:
    """Collect anchors from a served document without running page script."""

    soup = BeautifulSoup(html, "html.parser")
    base = soup.find("base", href=True)
    base_url = urljoin(page_url, base["href"].strip()) if base else page_url

    candidates: List[AnchorCandidate] = []
    for anchor in soup.find_all("a", href=True):
        raw = anchor["href"]
        candidates.append(AnchorCandidate(href=urljoin(base_url, raw.strip()), raw=raw))
    return candidates


async def discover_links(page: Any, link_filter: LinkFilter, *, javascript_enabled: bool) -> List[str]:
    """Collect the anchors of a loaded page and return the qualifying URLs."""

    if javascript_enabled:
        page_url, candidates = candidates_from_evaluation(
            await page.evaluate(COLLECT_ANCHORS_SCRIPT)
        )
    else:
        page_url = page.url
        candidates = candidates_from_html(await page.content(), page_url)
    return link_filter.apply(candidates, page_url)
