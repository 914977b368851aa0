# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error a route can produce is one of the classes below; the handlers
# at the bottom turn them into a single JSON response shape:
#   {"detail": ..., "code": ..., "suggestion"?: ..., "details"?: ...}
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DripJournalException(Exception):
    """
    Base exception for the Drip Journal API.

    All custom exceptions inherit from this class.
    Provides structured error responses with optional suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DRIP_JOURNAL_ERROR",
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
# Validation Exceptions
# =============================================================================

@dataclass(frozen=True)
class FieldViolation:
    """One rejected field of a request payload."""
    field: str
    message: str


class ValidationError(DripJournalException):
    """
    Raised when a payload has missing, malformed or out-of-range fields.

    The first violation becomes the response detail; all of them are
    listed under details.errors.
    """

    def __init__(self, violations: list[FieldViolation]):
        if not violations:
            raise ValueError("ValidationError needs at least one violation")
        self.violations = list(violations)
        super().__init__(
            message=violations[0].message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={
                "errors": [
                    {"field": v.field, "message": v.message}
                    for v in self.violations
                ]
            },
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldViolation(field, message)])

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class ConflictError(DripJournalException):
    """Raised when a write would break a uniqueness or reference rule."""

    def __init__(self, message: str, code: str = "DUPLICATE_NAME", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details=details,
        )


# =============================================================================
# Lookup Exceptions
# =============================================================================

class NotFoundError(DripJournalException):
    """Raised when a record or an image file doesn't exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


# =============================================================================
# Image Exceptions
# =============================================================================

class PathSafetyError(DripJournalException):
    """Raised when an image path tries to leave the upload directory."""

    def __init__(self, path: str):
        super().__init__(
            message="無効なパスです",
            code="INVALID_PATH",
            status_code=400,
            suggestion="Use the imagePath returned by POST /api/upload",
            details={"path": path},
        )


class InvalidFileTypeError(DripJournalException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"許可されていないファイル形式です。許可形式: {', '.join(allowed)}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            details={"content_type": content_type, "allowed_types": allowed},
        )


class FileTooLargeError(DripJournalException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        size_mb = size_bytes / (1024 * 1024)
        max_mb = max_bytes / (1024 * 1024)
        super().__init__(
            message=f"ファイルサイズが大きすぎます: {size_mb:.1f}MB (上限: {max_mb:.0f}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb:.0f}MB",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


# =============================================================================
# Store Exceptions
# =============================================================================

class StoreError(DripJournalException):
    """
    Raised when the database or filesystem fails underneath a request.

    The message is the generic user-facing one; the cause is logged by
    the service that raised it and never put in the response.
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def drip_journal_exception_handler(
    request: Request,
    exc: DripJournalException
) -> JSONResponse:
    """Convert DripJournalException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    These come from malformed JSON bodies or non-integer path ids and are
    reported with the same 400 shape as payload validation.
    """
    errors = []
    in_path = False
    for error in exc.errors():
        loc = error.get("loc", ())
        in_path = in_path or (bool(loc) and loc[0] == "path")
        location = [str(part) for part in loc if part not in ("body", "path", "query")]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })

    return JSONResponse(
        status_code=400,
        content={
            "detail": "無効なIDです" if in_path else "無効なリクエストです",
            "code": "VALIDATION_ERROR",
            "details": {"errors": errors},
        }
    )
