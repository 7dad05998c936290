# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Identifier normalization and the error base class for code that runs
# outside the HTTP layer (backend wrapper, story helper agent).
# =============================================================================

from typing import Any
from uuid import UUID


def normalize_uuid(value: str | UUID) -> str:
    """
    Comic, page and user IDs as query strings.

    Route parameters arrive as strings and the auth gate hands out UUID
    objects; PostgREST filters want the string form of either.
    """
    return str(value) if isinstance(value, UUID) else value


class ApplicationError(Exception):
    """
    Error raised below the HTTP layer.

    Services catch these and re-raise the matching PanelPlayException, so
    `code` and `details` end up in logs rather than in responses.
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        if self.suggestion:
            return f"[{self.code}] {self.message} ({self.suggestion})"
        return f"[{self.code}] {self.message}"
