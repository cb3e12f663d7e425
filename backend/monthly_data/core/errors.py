"""Error Hierarchy — typed, categorized exceptions for every Monthly Data failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"message", "code"}
    - Infrastructure errors never expose their internal detail in to_response()

Design Decisions:
    - Single hierarchy with MonthlyDataError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


# ─── User-facing messages ───────────────────────────────────────

DATA_NOT_FOUND = "Data not found"
RECORD_EXISTS = "Record already exists for this username and mobile number"
ANOTHER_RECORD_EXISTS = (
    "Another record already exists for this username and mobile number"
)


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    record_id: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class MonthlyDataError(Exception):
    """Base exception for all Monthly Data errors."""

    public_message: str | None = None

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
        """Convert to the REST error body."""
        return {
            "message": self.public_message or self.message,
            "code": self.code,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DuplicateRecordError(MonthlyDataError):
    """Another record already holds the (username, mobile) pair."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_RECORD", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class ResourceNotFoundError(MonthlyDataError):
    """Requested resource does not exist."""
    def __init__(
        self, message: str = DATA_NOT_FOUND, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class AuthenticationError(MonthlyDataError):
    """Caller identity could not be established."""
    def __init__(
        self, message: str = "Token is not valid", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(MonthlyDataError):
    """Caller is authenticated but lacks the required role."""
    def __init__(
        self, message: str = "Access denied. Admin only.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MonthlyDataError):
    """Database operation failed."""

    public_message = "Server error"

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
