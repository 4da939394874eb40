"""
invokekit error types

Every failure surfaced by collection, rendering or writing derives from
ExportError so callers can catch the whole family at once.
"""

from typing import Any, Optional


class ExportError(Exception):
    """Base class for all invokekit failures."""


class ConfigError(ExportError, ValueError):
    """Invalid configuration file or configuration value."""


class CollectionError(ExportError):
    """A Python callable could not be described as a command."""


class UpstreamModelError(ExportError):
    """The reflection step failed before a model was produced."""


class TypeFormattingError(ExportError):
    """A type descriptor cannot be rendered under the active configuration."""

    def __init__(self, message: str, datatype: Any = None, context: Optional[str] = None):
        self.datatype = datatype
        self.context = context
        if context:
            message = f"{context}: {message}"
        super().__init__(message)

    def with_context(self, context: str) -> "TypeFormattingError":
        """Return a copy naming the command or type being rendered."""
        return TypeFormattingError(str(self), self.datatype, context)


class StorageError(ExportError, OSError):
    """Creating the output directory or writing the output file failed."""
