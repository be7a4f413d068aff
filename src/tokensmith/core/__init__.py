"""Core types, configuration and errors for tokensmith."""

from .errors import (
    CacheUnavailableError,
    ConfigError,
    ConformanceError,
    ErrorContext,
    SourceUnavailableError,
    TokensmithError,
)

__all__ = [
    "TokensmithError",
    "ConfigError",
    "SourceUnavailableError",
    "CacheUnavailableError",
    "ConformanceError",
    "ErrorContext",
]
