"""Error Hierarchy — typed, categorized exceptions for all Postboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised by validators, guards and handlers;
      infrastructure errors (500-level) are wrapped at the boundary
    - InputValidationError carries the accumulated list of {"message": ...} entries
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with PostboardError base: one global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    """High-level error categories surfaced to clients."""
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class PostboardError(Exception):
    """Base exception for all Postboard errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        data: list[dict] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.data = data

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "status": self.http_status,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.data is not None:
            body["data"] = self.data
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class AuthenticationRequiredError(PostboardError):
    """Caller is anonymous or presented bad credentials."""
    def __init__(
        self, message: str = "Not authenticated.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(PostboardError):
    """Caller is authenticated but does not own the resource."""
    def __init__(
        self, message: str = "Not authorized.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(PostboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InputValidationError(PostboardError):
    """User-supplied fields failed validation. data lists every violation."""
    def __init__(
        self, message: str, data: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
            data=data if data is not None else [{"message": message}],
        )


class ConflictError(PostboardError):
    """Write would violate a uniqueness rule (e.g. duplicate email)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PostboardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "INTERNAL_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


# ─── Field error formatting ─────────────────────────────────────

_REQUEST_PARTS = frozenset({"body", "query", "path", "header", "form", "cookie"})


def field_errors(errors: list[dict]) -> list[dict]:
    """Pydantic error dicts → [{"message": "<field>: <msg>"}] data entries.

    A leading request-part location ("body", "query", ...) is dropped.
    """
    data = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        field = ".".join(loc)
        message = err.get("msg", "Invalid value")
        data.append({"message": f"{field}: {message}" if field else message})
    return data
