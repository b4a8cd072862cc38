"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for errors raised while rendering a source file.

    `render` itself never raises; these errors come from the file-level
    helpers that feed it.
    """


class FileTooLargeError(RenderError):
    """Raised when a source file exceeds the configured size limit.

    Args:
        size: Size of the file in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"File size {self.size} bytes exceeds the maximum allowed size of {self.limit} bytes"


class RenderFileError(Exception):
    """Raised when rendering a source file fails."""
