"""Error Hierarchy - typed, categorized exceptions for every request failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (401/403/404/409) are terminal per request, never retried
    - to_response() produces the public {"message": ...} envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StaysError base: one global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    spot_id: int | None = None
    image_id: int | None = None
    debug_info: dict[str, Any] | None = None


class StaysError(Exception):
    """Base exception for all Stays errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the public REST error body."""
        return {"message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class AuthenticationRequiredError(StaysError):
    """No authenticated user attached to the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required", "AUTHENTICATION_REQUIRED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(StaysError):
    """Authenticated user does not own the target resource."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Forbidden", "FORBIDDEN",
            ErrorCategory.AUTHORIZATION, ErrorSeverity.WARNING, context, 403,
        )


class SpotNotFoundError(StaysError):
    def __init__(self, spot_id: int | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.spot_id = spot_id
        super().__init__(
            "Spot couldn't be found", "SPOT_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )


class SpotImageNotFoundError(StaysError):
    def __init__(self, image_id: int | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.image_id = image_id
        super().__init__(
            "Spot Image couldn't be found", "SPOT_IMAGE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )


class ReviewAlreadyExistsError(StaysError):
    """User already reviewed this spot."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User already has a review for this spot", "REVIEW_EXISTS",
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(StaysError):
    """Database operation failed. Detail goes to logs, never to the client."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"message": "Internal server error"}
