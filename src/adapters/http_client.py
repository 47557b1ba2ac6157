"""httpx wrapper.

Standardizes timeouts, headers and redirects for every request the tool makes.
Tests pass an `httpx.MockTransport` through `transport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the tool's defaults.

    No credential is set at client level: the signed download URL must not
    receive the Authorization header, so callers add it per request.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.download_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
