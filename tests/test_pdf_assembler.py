from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader

from adapters.pdf_assembler import (
    assemble_screenshots_pdf,
    list_screenshot_images,
    probe_image,
    render_screenshots_html,
)
from core.domain.errors import ContentError


def _page_sizes(path: Path) -> list[tuple[float, float]]:
    reader = PdfReader(str(path))
    return [(float(page.mediabox.width), float(page.mediabox.height)) for page in reader.pages]


def test_lists_supported_images_in_filename_order(tmp_path: Path, make_images) -> None:
    folder = make_images(
        tmp_path / "shots",
        {
            "b.jpg": (10, 10),
            "a.png": (10, 10),
            "c.jpeg": (10, 10),
            "notes.txt": b"hello",
            "upper.PNG": (10, 10),
            "anim.gif": b"GIF89a",
        },
    )
    (folder / "dir.png").mkdir()

    names = [p.name for p in list_screenshot_images(folder)]

    assert names == ["a.png", "b.jpg", "c.jpeg"]


def test_probe_reads_pixel_size(tmp_path: Path, make_images) -> None:
    folder = make_images(tmp_path, {"shot.png": (120, 45)})

    page = probe_image(folder / "shot.png")

    assert (page.width, page.height) == (120, 45)
    assert page.filename == "shot.png"
    assert page.page_name == "shot-120x45"
    assert page.uri.startswith("file://")


def test_probe_rejects_garbage(tmp_path: Path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")

    with pytest.raises(OSError):
        probe_image(path)


def test_html_declares_one_page_rule_per_size(tmp_path: Path, make_images) -> None:
    folder = make_images(tmp_path, {"a.png": (100, 200), "b.png": (100, 200), "c.png": (50, 50)})
    pages = [probe_image(folder / name) for name in ("a.png", "b.png", "c.png")]

    html = render_screenshots_html(pages)

    assert html.count("@page shot-100x200") == 1
    assert html.count("@page shot-50x50") == 1
    assert "size: 100pt 200pt" in html
    assert html.count("<img ") == 3


def test_one_page_per_image_sized_to_pixels(tmp_path: Path, make_images) -> None:
    folder = make_images(
        tmp_path / "shots",
        {"b.jpg": (50, 50), "a.png": (100, 200), "c.jpeg": (80, 30), "readme.txt": b"skip me"},
    )
    output = tmp_path / "out" / "nested" / "doc.pdf"
    added: list[tuple[int, int, str]] = []

    result = assemble_screenshots_pdf(
        images_dir=folder,
        output_path=output,
        on_page=lambda i, n, name: added.append((i, n, name)),
    )

    assert output.read_bytes()[:5] == b"%PDF-"
    assert [p.filename for p in result.pages] == ["a.png", "b.jpg", "c.jpeg"]
    assert result.skipped == []
    assert added == [(1, 3, "a.png"), (2, 3, "b.jpg"), (3, 3, "c.jpeg")]
    sizes = _page_sizes(output)
    assert len(sizes) == 3
    for (width, height), expected in zip(sizes, [(100, 200), (50, 50), (80, 30)]):
        assert width == pytest.approx(expected[0], abs=0.5)
        assert height == pytest.approx(expected[1], abs=0.5)


def test_corrupt_image_is_skipped(tmp_path: Path, make_images) -> None:
    folder = make_images(
        tmp_path / "shots",
        {"a.png": (30, 60), "b.png": b"corrupt bytes", "c.jpg": (40, 20)},
    )
    skipped: list[str] = []

    result = assemble_screenshots_pdf(
        images_dir=folder,
        output_path=tmp_path / "doc.pdf",
        on_skip=lambda name, reason: skipped.append(name),
    )

    assert skipped == ["b.png"]
    assert result.skipped == ["b.png"]
    assert [p.filename for p in result.pages] == ["a.png", "c.jpg"]
    assert len(_page_sizes(tmp_path / "doc.pdf")) == 2


def test_no_supported_images(tmp_path: Path, make_images) -> None:
    folder = make_images(tmp_path / "shots", {"notes.txt": b"x", "shot.PNG": (10, 10)})
    output = tmp_path / "out" / "doc.pdf"

    with pytest.raises(ContentError, match="No valid screenshots found"):
        assemble_screenshots_pdf(images_dir=folder, output_path=output)

    assert output.parent.is_dir()
    assert not output.exists()


def test_only_corrupt_images(tmp_path: Path, make_images) -> None:
    folder = make_images(tmp_path / "shots", {"a.png": b"nope", "b.jpg": b"nope"})

    with pytest.raises(ContentError):
        assemble_screenshots_pdf(images_dir=folder, output_path=tmp_path / "doc.pdf")

    assert not (tmp_path / "doc.pdf").exists()
