"""
Exception types for document parsing, corpus loading, and export.
"""

from typing import List, Tuple


class GameStatsError(Exception):
    """Base class for all processor errors."""


class MalformedDocumentError(GameStatsError):
    """Frontmatter block is missing, unterminated, or undecodable."""

    def __init__(self, message: str, source: str = ''):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ValidationError(GameStatsError):
    """Frontmatter failed schema validation."""

    def __init__(
        self,
        missing_fields: List[str] = None,
        invalid_fields: List[Tuple[str, str]] = None,
        source: str = '',
    ):
        self.missing_fields = list(missing_fields or [])
        self.invalid_fields = list(invalid_fields or [])
        self.source = source
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        parts = []
        if self.missing_fields:
            parts.append(f"missing fields: {', '.join(self.missing_fields)}")
        for field, message in self.invalid_fields:
            parts.append(f"[{field}] {message}")
        text = 'Frontmatter validation failed: ' + '; '.join(parts or ['unknown error'])
        if self.source:
            text = f"{self.source}: {text}"
        return text


class DocumentNotFound(GameStatsError):
    """Document store has no document for the requested slug."""


class BadRequestError(GameStatsError):
    """Export request is malformed or names an unsupported option."""


class NotFoundError(GameStatsError):
    """Well-formed request resolved to an empty result."""


class InternalError(GameStatsError):
    """Unexpected failure. The message is safe to show to clients."""

    GENERIC_MESSAGE = 'Failed to export data'

    def __init__(self, message: str = GENERIC_MESSAGE):
        super().__init__(message)
