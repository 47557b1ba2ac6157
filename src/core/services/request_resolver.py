"""Turns raw process inputs into a validated `ScreenshotRequest`.

The CLI hands over whatever it parsed; every rejection happens here, before
any network client or file is created.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.errors import UsageError
from core.domain.models import SESSION_ID_LENGTH, ScreenshotRequest


PROGRAM_NAME = "screenshots-pdf"
USAGE = f"{PROGRAM_NAME} <session_id> [--output <output_directory>]"


def _usage_hint() -> str:
    return f"👉 Usage: {USAGE}"


def _auth_hint() -> str:
    return "\n".join(
        [
            "👉 Run the command like this:",
            f'   AUTH_HEADER="Basic your_encoded_auth_string" {USAGE}',
        ]
    )


def resolve_request(
    *,
    session_id: str | None,
    output_dir: str | Path | None,
    auth_header: str | None,
    work_dir: Path,
) -> ScreenshotRequest:
    """Validate the invocation and build the request.

    Rules:
    - `session_id` is trimmed and must be exactly 36 characters long (no
      character-set check).
    - `auth_header` only has to be present and non-empty.
    - `output_dir` is made absolute relative to `work_dir`; defaults to it.
    """

    cleaned = (session_id or "").strip()
    if len(cleaned) != SESSION_ID_LENGTH:
        raise UsageError("Invalid or missing session ID.", hint=_usage_hint())

    if not auth_header:
        raise UsageError("AUTH_HEADER is missing.", hint=_auth_hint())

    base = Path(work_dir).resolve()
    output = (base / Path(output_dir)).resolve() if output_dir else base

    return ScreenshotRequest(
        session_id=cleaned,
        auth_header=auth_header,
        output_dir=output,
        work_dir=base,
    )
