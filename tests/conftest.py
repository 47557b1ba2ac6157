from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Callable

import httpx
import pytest
from PIL import Image

from core.config import AppSettings


SESSION_ID = "123e4567-e89b-12d3-a456-426614174000"
API_BASE = "https://api.test/sessions"
DOWNLOAD_URL = "https://downloads.test/screenshots.zip?signature=abc"


def image_bytes(size: tuple[int, int], fmt: str = "PNG") -> bytes:
    """Encode a solid-colour image of `size` pixels."""

    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 40, 40)).save(buffer, format=fmt)
    return buffer.getvalue()


def zip_bytes(entries: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


class FakeScreenshotsApi:
    """In-memory stand-in for the sessions API and the signed download host."""

    def __init__(
        self,
        *,
        archive: bytes = b"",
        payload: object | None = None,
        api_status: int = 200,
        download_status: int = 200,
        api_error: Exception | None = None,
    ) -> None:
        self.archive = archive
        self.payload = {"url": DOWNLOAD_URL} if payload is None else payload
        self.api_status = api_status
        self.download_status = download_status
        self.api_error = api_error
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.test":
            if self.api_error is not None:
                raise self.api_error
            return httpx.Response(self.api_status, json=self.payload)
        if request.url.host == "downloads.test":
            return httpx.Response(self.download_status, content=self.archive)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(auth_header="Basic abc123", api_base_url=API_BASE)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated cwd with no credential leaking in from the host environment."""

    monkeypatch.chdir(tmp_path)
    for key in ("AUTH_HEADER", "SCREENSHOTS_PDF_AUTH_HEADER", "SCREENSHOTS_PDF_API_BASE_URL"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


@pytest.fixture
def make_images() -> Callable[[Path, dict[str, object]], Path]:
    """Write files into a folder: a (w, h) tuple becomes an image, bytes are written as-is."""

    def _make(folder: Path, files: dict[str, object]) -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            if isinstance(content, tuple):
                fmt = "JPEG" if name.lower().endswith((".jpg", ".jpeg")) else "PNG"
                (folder / name).write_bytes(image_bytes(content, fmt))
            else:
                (folder / name).write_bytes(content)  # type: ignore[arg-type]
        return folder

    return _make
