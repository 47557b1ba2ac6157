"""Screenshot-to-PDF orchestration.

Runs fetch → extract → assemble strictly in order and removes the temporary
archive on every exit path. Side-effects meant for the user (printing,
progress) go through `PipelineHooks` so the CLI owns the presentation.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from adapters.archive_extractor import extract_archive
from adapters.pdf_assembler import assemble_screenshots_pdf
from core.domain.models import AssemblyResult, ScreenshotRequest
from core.interfaces.archive_source import ScreenshotArchiveSource


logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (stages, progress, warnings)."""

    stage: Callable[[str, str], None] | None = None
    page_added: Callable[[int, int, str], None] | None = None
    warning: Callable[[str], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    request: ScreenshotRequest
    extract_dir: Path
    assembly: AssemblyResult
    warnings: list[str] = field(default_factory=list)

    @property
    def pdf_path(self) -> Path:
        return self.assembly.pdf_path


def remove_archive(path: Path) -> str | None:
    """Delete the temporary archive; return a warning instead of raising."""

    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.debug("Cannot remove %s: %s", path, exc)
        return f"Cleanup warning: Could not remove ZIP file ({exc})."
    return None


async def run_screenshot_pipeline(
    request: ScreenshotRequest,
    *,
    source: ScreenshotArchiveSource,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    """Download, extract and render the screenshots of `request.session_id`."""

    hooks = hooks or PipelineHooks()
    warnings: list[str] = []

    def _stage(name: str, detail: str) -> None:
        logger.debug("stage=%s %s", name, detail)
        if hooks.stage:
            hooks.stage(name, detail)

    def _warn(message: str) -> None:
        warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    def _on_skip(filename: str, reason: str) -> None:
        logger.debug("Skipped %s: %s", filename, reason)
        _warn(f"Skipping {filename}: Invalid image file.")

    archive_path = request.archive_path
    try:
        _stage("fetch", request.session_id)
        await source.download_archive(
            request.session_id,
            archive_path,
            on_download=lambda: _stage("download", str(archive_path)),
        )

        _stage("extract", str(request.extract_dir))
        extract_dir = await asyncio.to_thread(extract_archive, archive_path, request.extract_dir)

        _stage("render", str(request.pdf_path))
        assembly = await asyncio.to_thread(
            assemble_screenshots_pdf,
            images_dir=extract_dir,
            output_path=request.pdf_path,
            on_page=hooks.page_added,
            on_skip=_on_skip,
        )
    finally:
        existed = archive_path.exists()
        cleanup_warning = remove_archive(archive_path)
        if cleanup_warning:
            _warn(cleanup_warning)
        elif existed:
            _stage("cleanup", str(archive_path))

    return PipelineResult(
        request=request,
        extract_dir=extract_dir,
        assembly=assembly,
        warnings=warnings,
    )
