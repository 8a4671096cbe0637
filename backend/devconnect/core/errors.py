"""Error Hierarchy — typed, categorized exceptions for all DevConnect failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400/401) are recoverable; ServerError (500) is critical
    - to_response() produces one of the two envelopes clients already parse:
      {"errors": [{"msg": ...}]} or {"msg": ...}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DevConnectError base: FastAPI global handler catches all
    - Envelope chosen per error, not per route: the same failure always has the same shape
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from devconnect.core.domain_types import AuthFailure


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
    OWNERSHIP = "ownership"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorEnvelope(str, Enum):
    """Response body shape for an error."""
    ERRORS = "errors"
    MESSAGE = "msg"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identity_id: str | None = None
    resource_id: str | None = None
    step: str | None = None
    debug_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class FieldFailure:
    """One failed field rule: the field name and the message shown to the client."""
    param: str
    msg: str
    location: str = "body"

    def to_dict(self) -> dict:
        return {"msg": self.msg, "param": self.param, "location": self.location}


class DevConnectError(Exception):
    """Base exception for all DevConnect errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        envelope: ErrorEnvelope = ErrorEnvelope.ERRORS,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.envelope = envelope

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        if self.envelope is ErrorEnvelope.MESSAGE:
            return {"msg": self.message}
        return {"errors": [{"msg": self.message}]}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(DevConnectError):
    """One or more request fields failed their rules."""
    def __init__(
        self, failures: list[FieldFailure], context: ErrorContext | None = None,
    ):
        super().__init__(
            "; ".join(f.msg for f in failures) or "Invalid request data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.failures = failures

    def to_response(self) -> dict:
        return {"errors": [f.to_dict() for f in self.failures]}


_AUTH_MESSAGES = {
    AuthFailure.MISSING: "No token, authorization denied.",
    AuthFailure.INVALID: "Authorization not valid.",
    AuthFailure.INVALID_SIGNATURE: "Token signature does not match.",
    AuthFailure.EXPIRED: "Token has expired.",
    AuthFailure.MALFORMED: "Token could not be decoded.",
}


class AuthError(DevConnectError):
    """Request could not be tied to a caller identity."""
    def __init__(
        self,
        reason: AuthFailure,
        cause: AuthFailure | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            _AUTH_MESSAGES[reason], "AUTH_" + reason.name,
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
            ErrorEnvelope.ERRORS if reason is AuthFailure.MISSING
            else ErrorEnvelope.MESSAGE,
        )
        self.reason = reason
        self.cause = cause


class OwnershipError(DevConnectError):
    """Caller does not own the resource (or collection) being mutated."""
    def __init__(
        self,
        message: str = "User authorization failed.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "OWNERSHIP_REQUIRED", ErrorCategory.OWNERSHIP,
            ErrorSeverity.WARNING, context, 400,
        )


class NotFoundError(DevConnectError):
    """Target id is malformed, or well-formed but absent."""
    def __init__(
        self,
        resource_type: str,
        message: str,
        envelope: ErrorEnvelope = ErrorEnvelope.ERRORS,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 400, envelope,
        )
        self.resource_type = resource_type


class PostNotFoundError(NotFoundError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Post", "Post not found", ErrorEnvelope.MESSAGE, context)


class ProfileNotFoundError(NotFoundError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Profile", "There is no profile for this user.",
            ErrorEnvelope.ERRORS, context,
        )


class IdentityNotFoundError(NotFoundError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Identity", "User not found", ErrorEnvelope.MESSAGE, context)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ServerError(DevConnectError):
    """Unexpected storage/runtime failure. Details are logged, never returned."""
    def __init__(
        self,
        detail: str,
        code: str = "SERVER_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            "Server error", code, category,
            ErrorSeverity.CRITICAL, context, 500, ErrorEnvelope.MESSAGE,
        )
        self.detail = detail


class DatabaseError(ServerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation


class CascadeDeleteError(ServerError):
    """A cascade step failed; the steps before it stay deleted."""
    def __init__(self, step: str, completed: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.step = step
        super().__init__(
            f"Cascade delete failed at '{step}' after {completed or 'no steps'}",
            "CASCADE_DELETE_FAILED", ErrorCategory.DATABASE, ctx,
        )
        self.step = step
        self.completed = completed
