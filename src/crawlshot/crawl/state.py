from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class CrawlState:
    """Frontier, visited set and depth tracker shared by the workers of one seed.

    Every mutation happens under a single condition, so dequeueing (pop plus
    visited check/insert) and completion (push plus tier countdown) are atomic
    with respect to the other workers of the same seed.

    Frontier entries remember the tier they belong to. An entry of the next
    tier is only handed out once the current tier has fully drained, which
    keeps the tier countdown exact while several tabs run at once.
    """

    def __init__(self, seed_url: str, *, max_depth: int, recursive: bool) -> None:
        self.seed_url = seed_url
        self.max_depth = max_depth
        self.recursive = recursive

        self.frontier: Deque[Tuple[str, int]] = deque([(seed_url, 0)])
        self.visited: set[str] = set()
        self.dispatched: List[str] = []
        self.current_depth = 0
        self.remaining = 1
        self.in_flight = 0
        self._condition = asyncio.Condition()

    @property
    def depth_exhausted(self) -> bool:
        return self.recursive and self.current_depth >= self.max_depth

    @property
    def accepts_links(self) -> bool:
        """Whether links found on a page of the current tier may be enqueued."""

        return self.recursive and self.current_depth + 1 < self.max_depth

    async def next_url(self) -> Optional[str]:
        """Hand out the next unvisited URL, or ``None`` once the crawl is over."""

        async with self._condition:
            while True:
                if self.depth_exhausted:
                    return None

                while self.frontier and self.frontier[0][0] in self.visited:
                    self.frontier.popleft()

                if self.frontier and self.frontier[0][1] <= self.current_depth:
                    url, _ = self.frontier.popleft()
                    self.visited.add(url)
                    self.dispatched.append(url)
                    self.in_flight += 1
                    return url

                if self.in_flight == 0 or not self.recursive:
                    return None

                await self._condition.wait()

    async def finish(self, url: str, links: Iterable[str] = ()) -> None:
        """Record that ``url`` is done, enqueueing the links found on it.

        Called exactly once per URL returned by :meth:`next_url`, including
        when processing failed (with no links).
        """

        async with self._condition:
            self.in_flight -= 1
            if self.recursive:
                if self.accepts_links:
                    tier = self.current_depth + 1
                    self.frontier.extend((link, tier) for link in links)
                self._drain()
            self._condition.notify_all()

    def _drain(self) -> None:
        self.remaining -= 1
        if self.remaining > 0:
            return

        self.current_depth += 1
        self.remaining = len({url for url, _ in self.frontier if url not in self.visited})
        logger.debug(
            "%s: depth %d reached with %d page(s) queued",
            self.seed_url,
            self.current_depth,
            self.remaining,
        )
