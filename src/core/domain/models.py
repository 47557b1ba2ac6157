"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Constraints (36-character session id, positive page sizes) are checked at
  the edge, before any I/O happens.
- Artifact paths are derived from the request in one place, so the fetcher,
  extractor and assembler cannot disagree on file names.

Note:
- These models describe *what* a run works on, not *how* it is fetched or
  rendered.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


SESSION_ID_LENGTH = 36
ARTIFACT_PREFIX = "screenshots_"


class ScreenshotRequest(BaseModel):
    """Validated input of a single run.

    All temporary artifacts live in `work_dir`; only the PDF goes to
    `output_dir`.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(
        ...,
        min_length=SESSION_ID_LENGTH,
        max_length=SESSION_ID_LENGTH,
        description="Session identifier (canonical UUID shape).",
    )
    auth_header: str = Field(
        ...,
        min_length=1,
        description="Authorization header value, passed verbatim.",
    )
    output_dir: Path = Field(
        ...,
        description="Absolute directory where the PDF is written.",
    )
    work_dir: Path = Field(
        ...,
        description="Absolute directory holding the archive and extracted files.",
    )

    @property
    def artifact_stem(self) -> str:
        return f"{ARTIFACT_PREFIX}{self.session_id}"

    @property
    def archive_path(self) -> Path:
        return self.work_dir / f"{self.artifact_stem}.zip"

    @property
    def extract_dir(self) -> Path:
        return self.work_dir / self.artifact_stem

    @property
    def pdf_path(self) -> Path:
        return self.output_dir / f"{self.artifact_stem}.pdf"


class ScreenshotPage(BaseModel):
    """One decoded screenshot, i.e. one page of the output document."""

    filename: str = Field(..., min_length=1)
    path: Path
    width: int = Field(..., gt=0, description="Pixel width (page width in points).")
    height: int = Field(..., gt=0, description="Pixel height (page height in points).")

    @property
    def uri(self) -> str:
        return self.path.resolve().as_uri()

    @property
    def page_name(self) -> str:
        """CSS named-page identifier shared by pages of equal size."""

        return f"shot-{self.width}x{self.height}"


class AssemblyResult(BaseModel):
    pdf_path: Path
    pages: list[ScreenshotPage] = Field(default_factory=list)
    skipped: list[str] = Field(
        default_factory=list,
        description="Filenames that could not be decoded and were left out.",
    )
