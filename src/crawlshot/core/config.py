"""Configuration loading and validation for crawl runs."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..crawl.link_filter import LinkFilter

DEFAULT_TABS = 2
DEFAULT_LEVEL = 1
DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080


class ConfigurationError(ValueError):
    """Raised when crawl options or a seed URL cannot be used."""


@dataclass(frozen=True, slots=True)
class ViewportOptions:
    """Viewport emulation applied to every tab."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    device_scale_factor: float = 1
    is_mobile: bool = False
    has_touch: bool = False
    is_landscape: bool = False

    @property
    def size(self) -> dict[str, int]:
        # Playwright has no landscape flag, so a portrait size is rotated.
        width, height = self.width, self.height
        if self.is_landscape and height > width:
            width, height = height, width
        return {"width": width, "height": height}


@dataclass(frozen=True, slots=True)
class CaptureOptions:
    """Which artifacts are requested for every visited page."""

    screenshot: bool = False
    full_page: bool = False
    pdf: bool = False

    @property
    def enabled(self) -> bool:
        return self.screenshot or self.pdf


@dataclass(frozen=True, slots=True)
class CrawlConfig:
    """Holds runtime options shared read-only by every worker of a run."""

    seed_urls: tuple[str, ...]
    output_dir: Path
    tabs: int = DEFAULT_TABS
    recursive: bool = False
    max_depth: int = DEFAULT_LEVEL
    viewport: ViewportOptions = field(default_factory=ViewportOptions)
    capture: CaptureOptions = field(default_factory=CaptureOptions)
    link_filter: LinkFilter = field(default_factory=LinkFilter)
    user_agent: Optional[str] = None
    javascript_enabled: bool = True
    headless: bool = True
    keep_going: bool = False

    def __post_init__(self) -> None:
        if self.tabs < 1:
            raise ConfigurationError(f"tabs must be at least 1, got {self.tabs}")
        if self.max_depth < 1:
            raise ConfigurationError(f"level must be at least 1, got {self.max_depth}")
        if self.link_filter.pattern is not None:
            try:
                re.compile(self.link_filter.pattern)
            except re.error as exc:
                raise ConfigurationError(
                    f"Invalid pattern {self.link_filter.pattern!r}: {exc}"
                ) from exc


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def load_configuration(
    seed_urls: list[str] | tuple[str, ...],
    *,
    output_dir: Optional[str] = None,
    tabs: int = DEFAULT_TABS,
    recursive: bool = False,
    max_depth: int = DEFAULT_LEVEL,
    viewport: Optional[ViewportOptions] = None,
    capture: Optional[CaptureOptions] = None,
    link_filter: Optional[LinkFilter] = None,
    user_agent: Optional[str] = None,
    javascript_enabled: bool = True,
    keep_going: bool = False,
) -> CrawlConfig:
    """Builds a ``CrawlConfig`` from CLI input and environment variables."""

    load_dotenv()  # Loads .env values if present

    output_root = output_dir or os.getenv("CRAWLSHOT_OUTPUT_DIR") or "."

    return CrawlConfig(
        seed_urls=tuple(seed_urls),
        output_dir=Path(output_root).resolve(),
        tabs=tabs,
        recursive=recursive,
        max_depth=max_depth,
        viewport=viewport or ViewportOptions(),
        capture=capture or CaptureOptions(),
        link_filter=link_filter or LinkFilter(),
        user_agent=user_agent or os.getenv("CRAWLSHOT_USER_AGENT") or None,
        javascript_enabled=javascript_enabled,
        headless=_env_flag("HEADLESS", "true"),
        keep_going=keep_going,
    )
