"""Pipeline error taxonomy.

Every stage either returns a usable value or raises a `PipelineError`. The
CLI is the only place that turns an error into a message and an exit code.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Error categories surfaced to the user."""

    USAGE = "usage"
    NETWORK = "network"
    FILESYSTEM = "filesystem"
    CONTENT = "content"


EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.USAGE: 1,
    ErrorKind.NETWORK: 1,
    ErrorKind.FILESYSTEM: 1,
    ErrorKind.CONTENT: 1,
}


class PipelineError(Exception):
    """Base error for every fatal failure of the tool."""

    kind: ErrorKind = ErrorKind.FILESYSTEM

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    @property
    def exit_code(self) -> int:
        return EXIT_CODES.get(self.kind, 1)


class UsageError(PipelineError):
    """Invalid invocation, detected before any I/O."""

    kind = ErrorKind.USAGE

    def __init__(self, message: str, *, hint: str = "") -> None:
        super().__init__(message)
        self.hint = hint


class NetworkError(PipelineError):
    kind = ErrorKind.NETWORK


class ArchiveError(PipelineError):
    """Archive could not be written, found or extracted."""

    kind = ErrorKind.FILESYSTEM


class ContentError(PipelineError):
    kind = ErrorKind.CONTENT


class DocumentError(PipelineError):
    """The PDF (or its output directory) could not be produced."""

    kind = ErrorKind.FILESYSTEM
