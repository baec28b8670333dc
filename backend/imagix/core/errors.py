"""Error Hierarchy — typed, categorized exceptions for all Imagix failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"message", "code"} and nothing else
    - "Does not exist" and "exists but belongs to someone else" are both NotFoundError

Design Decisions:
    - Single hierarchy with ImagixError base: one global handler catches all (ADR: uniform error shape)
    - No separate not-authorized kind: a 403 would confirm that a foreign id exists
      (ADR: merged not-found signal)
"""

from enum import Enum


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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORE = "store"
    INTERNAL = "internal"


class ImagixError(Exception):
    """Base exception for all Imagix errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"message": self.message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class BadRequestError(ImagixError):
    """Malformed or missing input."""
    def __init__(self, message: str):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )


class AuthenticationError(ImagixError):
    """No usable credential on the request."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class NotFoundError(ImagixError):
    """Target absent, or present but not owned by the caller."""
    def __init__(self, resource_type: str):
        super().__init__(
            f"{resource_type} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type


class ConditionFailedError(ImagixError):
    """A conditional write found the item in an unexpected state."""
    def __init__(self, pk: str, sk: str):
        super().__init__(
            "Item was modified concurrently",
            "CONDITION_FAILED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, 409,
        )
        self.pk = pk
        self.sk = sk


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(ImagixError):
    """Backing store operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.STORE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation
