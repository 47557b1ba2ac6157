"""Archive source: LambdaTest mobile automation API.

Two sequential requests:
1. `GET <base>/<session_id>/screenshots` returns JSON with a signed `url`.
2. `GET <url>` streams the ZIP archive, written chunk by chunk to disk.

No retries: every failure is raised as a `PipelineError`.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Any, Callable

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import ArchiveError, NetworkError
from core.interfaces.archive_source import ScreenshotArchiveSource


logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    text = str(exc).strip()
    return text or exc.__class__.__name__


def _discard(path: Path) -> None:
    with contextlib.suppress(OSError):
        path.unlink(missing_ok=True)


class LambdaTestArchiveSource(ScreenshotArchiveSource):
    """Downloads the screenshots archive of a session."""

    def __init__(
        self,
        auth_header: str,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth_header = auth_header
        self._settings = settings or AppSettings()
        self._transport = transport

    def screenshots_endpoint(self, session_id: str) -> str:
        return f"{self._settings.api_base_url.rstrip('/')}/{session_id}/screenshots"

    async def download_archive(
        self,
        session_id: str,
        destination: Path,
        *,
        on_download: Callable[[], None] | None = None,
    ) -> Path:
        async with build_async_client(self._settings, transport=self._transport) as client:
            url = await self.fetch_archive_url(client, session_id)
            if on_download:
                on_download()
            await self._stream_to_file(client, url, destination)
        return destination

    async def fetch_archive_url(self, client: httpx.AsyncClient, session_id: str) -> str:
        endpoint = self.screenshots_endpoint(session_id)
        logger.debug("GET %s", endpoint)
        try:
            response = await client.get(
                endpoint,
                headers={
                    "Accept": "application/json",
                    "Authorization": self._auth_header,
                },
                timeout=self._settings.api_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NetworkError(_describe(exc)) from exc

        try:
            payload: Any = response.json()
        except ValueError:
            payload = None

        url = payload.get("url") if isinstance(payload, dict) else None
        if not isinstance(url, str) or not url.strip():
            raise NetworkError("Screenshot ZIP URL not found.")
        return url

    async def _stream_to_file(self, client: httpx.AsyncClient, url: str, destination: Path) -> None:
        logger.debug("Streaming archive to %s", destination)
        written = 0
        try:
            async with client.stream("GET", url, timeout=self._settings.download_timeout_seconds) as response:
                response.raise_for_status()
                with destination.open("wb") as fh:
                    async for chunk in response.aiter_bytes(self._settings.download_chunk_size):
                        fh.write(chunk)
                        written += len(chunk)
        except httpx.HTTPError as exc:
            _discard(destination)
            raise NetworkError(_describe(exc)) from exc
        except OSError as exc:
            _discard(destination)
            raise ArchiveError(f"Failed to write ZIP file: {_describe(exc)}") from exc

        logger.debug("Downloaded %d bytes", written)
