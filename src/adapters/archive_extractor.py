"""ZIP extraction of the downloaded archive."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from core.domain.errors import ArchiveError


logger = logging.getLogger(__name__)


def extract_archive(archive_path: Path, destination: Path) -> Path:
    """Extract every entry of `archive_path` into `destination`.

    The destination is created if needed and reused otherwise; existing files
    with the same name are overwritten.
    """

    if not archive_path.is_file():
        raise ArchiveError("ZIP file not found.")

    try:
        destination.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path) as archive:
            names = archive.namelist()
            archive.extractall(destination)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Invalid ZIP file: {exc}") from exc
    except (OSError, RuntimeError, NotImplementedError) as exc:
        raise ArchiveError(f"Could not extract ZIP file: {exc}") from exc

    logger.debug("Extracted %d entries into %s", len(names), destination)
    return destination
