"""Command-line entry point (Typer).

`screenshots-pdf <session_id> [--output <dir>]` downloads the screenshots
archive of a session and turns it into a single PDF. This module is the only
place where a `PipelineError` becomes a message and an exit code.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from typer.core import TyperCommand

from adapters.screenshot_api import LambdaTestArchiveSource
from cli.ui_components import build_pages_table, print_banner
from core.config import AppSettings
from core.domain.errors import EXIT_CODES, ErrorKind, PipelineError, UsageError
from core.interfaces.archive_source import ScreenshotArchiveSource
from core.services.request_resolver import resolve_request
from core.services.screenshot_pipeline import PipelineHooks, run_screenshot_pipeline

app = typer.Typer(
    add_completion=False,
    help="Download a session's screenshots archive and assemble it into a PDF.",
)

_console = Console()
_err_console = Console(stderr=True)

_STAGE_MESSAGES: dict[str, str] = {
    "fetch": "📡 Fetching screenshot ZIP for session: {detail}...",
    "download": "⬇️  Downloading ZIP file...",
    "extract": "📂 Extracting screenshots...",
    "render": "📄 Generating PDF at: {detail}",
    "cleanup": "🗑️  Cleanup complete: Removed temporary ZIP file.",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # WeasyPrint and fontTools are very chatty about CSS and font subsetting.
    for name in ("weasyprint", "fontTools"):
        logging.getLogger(name).setLevel(logging.ERROR)


def build_archive_source(auth_header: str, settings: AppSettings) -> ScreenshotArchiveSource:
    return LambdaTestArchiveSource(auth_header, settings)


def _print_stage(name: str, detail: str) -> None:
    template = _STAGE_MESSAGES.get(name)
    if template:
        _console.print(template.format(detail=detail), markup=False, highlight=False)


def _print_page(index: int, total: int, filename: str) -> None:
    _console.print(f"🖼️  Added image {index}/{total} to PDF.", highlight=False)


def _print_warning(message: str) -> None:
    _err_console.print(f"⚠️  {message}", style="yellow", markup=False, highlight=False)


def _fail(message: str, *, code: int, hint: str = "") -> typer.Exit:
    _err_console.print(f"\n❌ {message}", style="red", markup=False, highlight=False)
    if hint:
        _err_console.print(hint, markup=False, highlight=False)
    return typer.Exit(code=code)


class ScreenshotsCommand(TyperCommand):
    """Typer command whose argument-parsing errors exit with the usage code.

    Click reports bad invocations (`--output` without a value, extra
    arguments, unknown options) with exit status 2; the tool's contract is 1
    for every fatal error.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = EXIT_CODES[ErrorKind.USAGE]
            raise


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise UsageError(
            f"Invalid configuration: {problems}",
            hint="👉 Check the SCREENSHOTS_PDF_* environment variables and the .env file.",
        ) from exc


@app.command(cls=ScreenshotsCommand)
def screenshots(
    session_id: Optional[str] = typer.Argument(
        None,
        metavar="SESSION_ID",
        help="Session identifier (36 characters).",
        show_default=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory for the generated PDF (default: current directory).",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Download the screenshots of SESSION_ID and write screenshots_<id>.pdf."""

    _configure_logging(verbose)

    try:
        settings = _load_settings()
        request = resolve_request(
            session_id=session_id,
            output_dir=output,
            auth_header=settings.auth_header,
            work_dir=Path.cwd(),
        )
    except UsageError as exc:
        raise _fail(exc.message, code=exc.exit_code, hint=exc.hint)

    print_banner(_console, request.session_id)
    hooks = PipelineHooks(stage=_print_stage, page_added=_print_page, warning=_print_warning)
    source = build_archive_source(request.auth_header, settings)

    try:
        result = asyncio.run(run_screenshot_pipeline(request, source=source, hooks=hooks))
    except PipelineError as exc:
        raise _fail(f"Error: {exc.message}", code=exc.exit_code)
    except Exception as exc:
        logging.getLogger(__name__).debug("Unexpected failure", exc_info=True)
        raise _fail(f"Unexpected Error: {exc}", code=1)

    _console.print(build_pages_table(result.assembly))
    _console.print(f"\n✅ PDF successfully generated at: {result.pdf_path}", markup=False, highlight=False)
    _console.print("\n🎉 All tasks completed successfully! Your PDF is ready. 🚀\n")


def run() -> None:
    app()
