"""Error Hierarchy — typed exceptions carrying their HTTP status and envelope.

Invariants:
    - Every CatalogError has code, category, severity and http_status
    - 4xx errors are caller-caused; DatabaseError is the only 5xx
    - to_response() yields {"message", "error"}; messages never embed driver text

Design Decisions:
    - Classification lives on class attributes; instances add message and context
    - One base class: a single FastAPI handler renders every subclass
"""

from dataclasses import dataclass, field as dc_field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORE = "store"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened; rendered into the response envelope."""
    resource_id: str | None = None
    operation: str | None = None
    field: str | None = None
    timestamp: datetime = dc_field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> dict:
        return {
            key: value
            for key, value in (
                ("resource_id", self.resource_id),
                ("operation", self.operation),
                ("field", self.field),
            )
            if value is not None
        }


class CatalogError(Exception):
    """Base for every error the API turns into a structured response."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "message": self.message,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.as_dict(),
            },
        }


# ─── Caller errors (4xx) ────────────────────────────────────────

class InvalidRequestError(CatalogError):
    """Input rejected outside the schema layer (e.g. a blank path id)."""
    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(self, message: str, field: str):
        super().__init__(message, ErrorContext(field=field))
        self.field = field


class ResourceNotFoundError(CatalogError):
    """Absent, or soft-deleted, which callers cannot tell apart."""
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    severity = ErrorSeverity.INFO
    http_status = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found", ErrorContext(resource_id=resource_id),
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class StoreFailureError(CatalogError):
    """The store call returned without touching a row."""
    code = "STORE_FAILURE"
    category = ErrorCategory.STORE
    http_status = 400

    def __init__(self, message: str, operation: str):
        super().__init__(message, ErrorContext(operation=operation))
        self.operation = operation


# ─── Infrastructure errors (5xx) ────────────────────────────────

class DatabaseError(CatalogError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 500

    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorContext(operation=operation),
        )
        self.operation = operation
