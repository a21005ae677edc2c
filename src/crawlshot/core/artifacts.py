"""Result data structures produced by a crawl run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

SCREENSHOT = "png"
PDF = "pdf"


@dataclass(frozen=True)
class CaptureArtifact:
    """A file written for one visited page."""

    url: str
    kind: str
    path: Path


@dataclass(frozen=True)
class WorkerFailure:
    """Error that ended a worker loop, or a skipped URL with ``keep_going``.

    ``worker`` is ``None`` when the browser for the seed could not start.
    """

    worker: Optional[int]
    url: Optional[str]
    error: str


@dataclass
class SeedCrawlResult:
    """Outcome of crawling one seed URL. Kept in memory only."""

    seed_url: str
    visited: List[str] = field(default_factory=list)
    artifacts: List[CaptureArtifact] = field(default_factory=list)
    failures: List[WorkerFailure] = field(default_factory=list)
    configuration_error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.configuration_error is None and not self.failures

    @property
    def artifact_paths(self) -> Tuple[Path, ...]:
        return tuple(artifact.path for artifact in self.artifacts)
