"""ignorescan — list the files a dockerignore-style build context would include."""

from __future__ import annotations

from pathlib import Path

__version__ = "0.1.0"


class IgnorescanError(Exception):
    """User-facing error.

    Base class for every failure raised by ignorescan. The CLI prints
    the message to stderr and exits with code 1.
    """


class CompilationError(IgnorescanError):
    """An ignore-file line could not be compiled into a matcher.

    Attributes:
        line: The offending raw line.
        cause: The underlying regular expression error.
    """

    def __init__(self, line: str, cause: Exception) -> None:
        self.line = line
        self.cause = cause
        super().__init__(f"invalid pattern {line!r}: {cause}")


class WalkError(IgnorescanError):
    """The directory walk failed; no partial result is returned.

    Attributes:
        path: Path being visited or enumerated when the walk failed.
        cause: The underlying ``OSError``, if any.
    """

    reason = "walk aborted"

    def __init__(self, path: Path | str, cause: BaseException | None = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = cause if cause is not None else self.reason
        super().__init__(f"cannot scan '{path}': {detail}")


class ScanCancelledError(WalkError):
    """The walk was stopped through its cancellation event."""

    reason = "scan cancelled"


class IgnoreFileError(IgnorescanError):
    """The ignore file exists but could not be read."""

    def __init__(self, path: Path | str, cause: Exception) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"cannot read ignore file '{path}': {cause}")
