"""Error Hierarchy: typed, categorized exceptions for every request-time failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - severity picks the level the API error handler logs at
    - Client errors (400/404) never reach or originate from the database
    - DatabaseError carries the raw driver message; it is what the client sees
    - to_response() produces the `{"error": message}` REST envelope

Design Decisions:
    - Single hierarchy with UserApiError base: one FastAPI handler catches all
    - Connectivity failures are not part of this hierarchy: the connection
      supervisor logs and retries them, requests only ever see DatabaseError
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class UserApiError(Exception):
    """Base exception for all Users API errors."""

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
        """Convert to REST error response."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingFieldError(UserApiError):
    """Required request field missing or empty."""
    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.fields = fields


class ResourceNotFoundError(UserApiError):
    """Mutation matched no row."""
    def __init__(self, resource_type: str, resource_id: int | str):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserApiError):
    """Database operation failed. Message is the driver's own text."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
