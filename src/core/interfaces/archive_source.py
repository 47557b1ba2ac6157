"""Contract for screenshot archive sources.

The pipeline depends on this Protocol, not on the LambdaTest adapter, so a
source can be swapped (or faked in tests) without touching the orchestration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class ScreenshotArchiveSource(Protocol):
    """Minimal contract for something that can deliver a session archive.

    Design rules:
    - `download_archive` is async because it performs network I/O.
    - `on_download` is called once the archive location is known, right
      before bytes start being written to `destination`.
    - On failure it raises a `PipelineError` and leaves no file at `destination`.
    """

    async def download_archive(
        self,
        session_id: str,
        destination: Path,
        *,
        on_download: Callable[[], None] | None = None,
    ) -> Path:
        """Store the ZIP archive of `session_id` at `destination` and return it."""

        ...
