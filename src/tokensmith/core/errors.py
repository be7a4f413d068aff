"""
Error types for tokensmith configuration, source loading, and caching.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokensmithError(Exception):
    """Base exception for all tokensmith errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(TokensmithError):
    """
    Raised when tokensmith.toml cannot be read or contains invalid values.

    Examples:
    - Malformed TOML
    - Unknown cache backend
    - Breakpoint or spacing entries missing required keys
    """

    pass


class SourceUnavailableError(TokensmithError):
    """
    Raised when the upstream preset document cannot be used.

    Only the loading step raises this; the preset registry catches it and
    records the reason so callers can show a diagnostic.
    """

    def __init__(self, path: Path | None, reason: str, message: str | None = None):
        self.path = path
        self.reason = reason
        where = str(path) if path is not None else "<document>"
        super().__init__(message or f"Preset source unavailable ({reason}): {where}")


class CacheUnavailableError(TokensmithError):
    """
    Raised by a cache store when its backend cannot be reached.

    The content-addressed cache treats this as a miss and falls back to
    direct generation.
    """

    pass


class ConformanceError(TokensmithError):
    """Raised when a conformance runner cannot execute (e.g. no node binary)."""

    pass


@dataclass
class ErrorContext:
    """
    Location information for configuration errors.

    Attributes:
        file: Path to the file being read
        key: Dotted key path inside the file, if known
    """

    file: Path
    key: str | None = None

    def format(self) -> str:
        """Format as "file" or "file [key]"."""
        if self.key:
            return f"{self.file} [{self.key}]"
        return str(self.file)
