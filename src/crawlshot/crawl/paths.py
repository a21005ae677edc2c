"""Maps page URLs to artifact paths that mirror the URL segments."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from slugify import slugify


def url_segments(url: str) -> list[str]:
    """Return the slugified, non-empty segments of ``url`` after its scheme.

    The host is the first segment; query and fragment stay attached to the
    last path segment.
    """

    parsed = urlsplit(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Cannot map a URL without scheme and host: {url!r}")

    _, _, remainder = url.partition("://")
    segments = [slugify(part) for part in remainder.split("/") if part]
    return [segment for segment in segments if segment]


def relative_path_for(url: str) -> Path:
    """Relative artifact base path for ``url`` (no extension).

    Bare-host URLs yield a single segment, so a random token is appended to
    keep two such captures apart. That branch is not reproducible.
    """

    segments = url_segments(url)
    if len(segments) < 2:
        segments.append(str(uuid.uuid4())[:8])
    return Path(*segments)


@dataclass(frozen=True, slots=True)
class PathMapper:
    """Resolves artifact base paths under ``root`` and creates their folders."""

    root: Path

    def path_for(self, url: str) -> Path:
        path = self.root / relative_path_for(url)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
