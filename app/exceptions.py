# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and, where it helps, a suggestion on
# how to fix the request.
# =============================================================================

from typing import Any
from urllib.parse import urlencode

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

# Route of the frontend login view
LOGIN_ROUTE = "/auth"


class PanelPlayException(Exception):
    """
    Base exception for the PanelPlay API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "PANELPLAY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthRequiredError(PanelPlayException):
    """
    Raised when a protected endpoint is called without a live session.

    The response tells the client where to send the user to log in, with the
    refused path as the return target.
    """

    def __init__(self, return_path: str = "/dashboard", reason: str | None = None):
        super().__init__(
            message="Authentication required",
            code="AUTH_REQUIRED",
            status_code=401,
            suggestion="Log in and retry with 'Authorization: Bearer <access_token>'",
            details={"reason": reason} if reason else None,
        )
        self.return_path = return_path

    @property
    def redirect(self) -> str:
        return f"{LOGIN_ROUTE}?{urlencode({'redirect': self.return_path}, safe='/')}"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["redirect"] = self.redirect
        return result


class AuthFailedError(PanelPlayException):
    """Raised when the auth service rejects a sign-up or sign-in."""

    def __init__(self, message: str):
        super().__init__(
            message=message or "Something went wrong",
            code="AUTH_FAILED",
            status_code=400,
        )


# =============================================================================
# Comic Exceptions
# =============================================================================

class ComicNotFoundError(PanelPlayException):
    """Raised when a comic ID doesn't exist (or isn't visible to the caller)."""

    def __init__(self, comic_id: str):
        super().__init__(
            message="Comic not found.",
            code="COMIC_NOT_FOUND",
            status_code=404,
            suggestion="Check that the comic_id is correct",
            details={"comic_id": comic_id}
        )


class ComicAccessDeniedError(PanelPlayException):
    """Raised when a user tries to manage another creator's comic."""

    def __init__(self, comic_id: str):
        super().__init__(
            message="You can only manage pages of your own comics",
            code="COMIC_ACCESS_DENIED",
            status_code=403,
            details={"comic_id": comic_id}
        )


class ComicSaveError(PanelPlayException):
    """Raised when a comic record cannot be inserted."""

    def __init__(self):
        super().__init__(
            message="Error saving comic.",
            code="COMIC_SAVE_FAILED",
            status_code=500,
            suggestion="Your input was not saved. Submit the form again",
        )


# =============================================================================
# Page Exceptions
# =============================================================================

class PageNotFoundError(PanelPlayException):
    """Raised when a page ID doesn't exist in the given comic."""

    def __init__(self, page_id: str):
        super().__init__(
            message=f"Page not found: {page_id}",
            code="PAGE_NOT_FOUND",
            status_code=404,
            details={"page_id": page_id}
        )


class PageNumberConflictError(PanelPlayException):
    """Raised when a concurrent upload already took the computed page number."""

    def __init__(self, comic_id: str, page_number: int):
        super().__init__(
            message=f"Page {page_number} was added by another upload",
            code="PAGE_NUMBER_CONFLICT",
            status_code=409,
            suggestion="Upload the image again to append it after the latest page",
            details={"comic_id": comic_id, "page_number": page_number}
        )


class PageSaveError(PanelPlayException):
    """Raised when a page record cannot be inserted after the image upload."""

    def __init__(self, comic_id: str, page_number: int):
        super().__init__(
            message="Failed to upload: the page could not be saved.",
            code="PAGE_SAVE_FAILED",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"comic_id": comic_id, "page_number": page_number}
        )


class PageDeleteError(PanelPlayException):
    """Raised when a page record cannot be deleted."""

    def __init__(self, page_id: str):
        super().__init__(
            message="Failed to delete page. Please try again.",
            code="PAGE_DELETE_FAILED",
            status_code=500,
            details={"page_id": page_id}
        )


class ConfirmationRequiredError(PanelPlayException):
    """Raised when a destructive request arrives without confirm=true."""

    def __init__(self, prompt: str):
        super().__init__(
            message=prompt,
            code="CONFIRMATION_REQUIRED",
            status_code=400,
            suggestion="Repeat the request with ?confirm=true",
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(PanelPlayException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these image types are supported: {', '.join(allowed)}",
            details={"filename": filename, "content_type": content_type, "allowed_types": allowed}
        )


class FileTooLargeError(PanelPlayException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(PanelPlayException):
    """Raised when file upload to storage fails."""

    def __init__(self):
        super().__init__(
            message="Failed to upload: the image could not be stored.",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


# =============================================================================
# Backend Exceptions
# =============================================================================

class BackendUnavailableError(PanelPlayException):
    """
    Raised when a read against the backend fails.

    The backend's own error text is logged by the caller, never returned.
    """

    def __init__(self, resource: str = "comics"):
        super().__init__(
            message=f"Unable to load {resource} right now.",
            code="BACKEND_UNAVAILABLE",
            status_code=502,
            suggestion="Try again later",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def panelplay_exception_handler(
    request: Request,
    exc: PanelPlayException
) -> JSONResponse:
    """
    Convert PanelPlayException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Convert request validation errors to the API error shape."""
    errors = jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
