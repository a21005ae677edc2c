"""Per-page artifact capture."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from ..core.artifacts import PDF, SCREENSHOT, CaptureArtifact
from ..core.config import CaptureOptions, ViewportOptions


@dataclass(frozen=True, slots=True)
class CaptureOrchestrator:
    """Requests the enabled artifacts for a loaded page.

    Screenshot and PDF share the mapped base path and differ by extension.
    """

    options: CaptureOptions
    viewport: ViewportOptions

    async def capture(self, page: Any, url: str, base_path: Path) -> List[CaptureArtifact]:
        artifacts: List[CaptureArtifact] = []

        if self.options.screenshot:
            path = base_path.with_name(f"{base_path.name}.{SCREENSHOT}")
            await page.screenshot(path=str(path), type="png", full_page=self.options.full_page)
            artifacts.append(CaptureArtifact(url=url, kind=SCREENSHOT, path=path))

        if self.options.pdf:
            path = base_path.with_name(f"{base_path.name}.{PDF}")
            await page.pdf(
                path=str(path),
                width=f"{self.viewport.width}px",
                height=f"{self.viewport.height}px",
            )
            artifacts.append(CaptureArtifact(url=url, kind=PDF, path=path))

        return artifacts
