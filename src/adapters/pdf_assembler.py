"""Screenshot PDF assembly.

Why it lives in adapters:
- PDF rendering is an infrastructure detail (WeasyPrint/Jinja2); the core
  only knows `ScreenshotPage` and `AssemblyResult`.

Layout:
- Every image becomes one page whose size in points equals the image size in
  pixels, with the image drawn at the origin filling the page.
- Synchronous: the pipeline runs it in a worker thread.
"""

from __future__ import annotations

import contextlib
import logging
import re
from pathlib import Path
from typing import Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from PIL import Image
from weasyprint import HTML

from core.domain.errors import ContentError, DocumentError
from core.domain.models import AssemblyResult, ScreenshotPage


logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

# Lowercase only: `shot.PNG` is not picked up.
IMAGE_NAME_PATTERN = re.compile(r"\.(png|jpg|jpeg)$")

PageCallback = Callable[[int, int, str], None]
SkipCallback = Callable[[str, str], None]


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def list_screenshot_images(folder: Path) -> list[Path]:
    """Supported image files directly inside `folder`, sorted by filename."""

    names = sorted(
        entry.name
        for entry in folder.iterdir()
        if entry.is_file() and IMAGE_NAME_PATTERN.search(entry.name)
    )
    return [folder / name for name in names]


def probe_image(path: Path) -> ScreenshotPage:
    """Decode `path` fully and read its pixel size.

    Raises `OSError`/`ValueError` (or Pillow's decompression bomb error) when
    the file is not a readable image.
    """

    with Image.open(path) as image:
        image.load()
        width, height = image.size
    return ScreenshotPage(filename=path.name, path=path, width=width, height=height)


def render_screenshots_html(pages: list[ScreenshotPage], *, title: str = "Screenshots") -> str:
    """Render the self-contained HTML that WeasyPrint turns into the PDF."""

    page_sizes: dict[str, ScreenshotPage] = {}
    for page in pages:
        page_sizes.setdefault(page.page_name, page)

    template = _get_env().get_template("screenshots.html")
    return template.render(
        title=title,
        pages=pages,
        page_sizes=list(page_sizes.values()),
    )


def _write_pdf(*, html: str, base_dir: Path, output_path: Path) -> None:
    try:
        HTML(string=html, base_url=str(base_dir)).write_pdf(str(output_path))
    except Exception as exc:
        with contextlib.suppress(OSError):
            output_path.unlink(missing_ok=True)
        raise DocumentError(f"Could not write PDF: {exc}") from exc


def assemble_screenshots_pdf(
    *,
    images_dir: Path,
    output_path: Path,
    on_page: PageCallback | None = None,
    on_skip: SkipCallback | None = None,
) -> AssemblyResult:
    """Build the PDF at `output_path` from the images in `images_dir`.

    An image that cannot be decoded is reported through `on_skip` and left out;
    every other failure is fatal.
    """

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        images = list_screenshot_images(images_dir)
    except OSError as exc:
        raise DocumentError(str(exc)) from exc

    if not images:
        raise ContentError("No valid screenshots found.")

    pages: list[ScreenshotPage] = []
    skipped: list[str] = []
    total = len(images)
    for index, path in enumerate(images, start=1):
        try:
            page = probe_image(path)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            logger.debug("Cannot decode %s: %s", path, exc)
            skipped.append(path.name)
            if on_skip:
                on_skip(path.name, str(exc) or exc.__class__.__name__)
            continue

        pages.append(page)
        logger.debug("Page %d: %s (%dx%d)", index, page.filename, page.width, page.height)
        if on_page:
            on_page(index, total, page.filename)

    if not pages:
        raise ContentError("No valid screenshots found.")

    html = render_screenshots_html(pages, title=output_path.stem)
    _write_pdf(html=html, base_dir=images_dir, output_path=output_path)
    return AssemblyResult(pdf_path=output_path, pages=pages, skipped=skipped)
