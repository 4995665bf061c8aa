"""Exception taxonomy for tape persistence.

Every failure raised by tapedeck derives from TapeError so callers
can catch the whole family at once. Filesystem errors are wrapped in
IOFailure with the original OSError chained as __cause__.
"""

from __future__ import annotations

from pathlib import Path


class TapeError(Exception):
    """Base class for all tapedeck errors."""


class TapeNotFound(TapeError):
    """Raised when a requested tape has no file on disk."""

    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(f"No tape found with name {name!r} (looked in {path})")


class InvalidTapeName(TapeError, ValueError):
    """Raised when a tape name would resolve outside the tape directory."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid tape name {name!r}: must stay inside the tape directory")


class UnsupportedEncoding(TapeError):
    """Raised when a persisted body uses an encoding other than utf8/base64."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"Unsupported body encoding {encoding!r}")


class RecompressionFailure(TapeError):
    """Raised when a stored text body cannot be compressed back to wire form."""

    def __init__(self, compression: str, reason: str = "") -> None:
        self.compression = compression
        message = f"Failed to re-apply {compression} compression"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IOFailure(TapeError):
    """Raised when reading or writing a file on disk fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"I/O failure on {path}: {reason}")


class TapeFormatError(TapeError):
    """Raised when a tape file is not a valid tape document.

    Attributes:
        message: Human-readable description of the problem.
        line: 1-indexed line number where the error occurred, if known.
        column: 1-indexed column number where the error occurred, if known.
        filename: Name of the file being parsed, or '<string>'.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        filename: str = "<string>",
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename
        super().__init__(message)
