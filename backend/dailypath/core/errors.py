"""Error Hierarchy — typed, categorized exceptions for every daily-puzzle failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by the caller or an operator;
      infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every endpoint
    - Losing a first-writer-wins race is never an error (no class for it)

Design Decisions:
    - Single hierarchy with DailyPathError base: FastAPI global handler catches all
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
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


@dataclass
class ErrorContext:
    """Context attached to an error for clients and logs."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    date_iso: str | None = None
    game_number: int | None = None
    level_index: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class DailyPathError(Exception):
    """Base exception for all daily-puzzle errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "date_iso": self.context.date_iso,
                    "game_number": self.context.game_number,
                    "level_index": self.context.level_index,
                    "details": self.context.debug_info,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UncommittedPastGameError(DailyPathError):
    """A past date has neither a commit nor an override; it is never regenerated."""
    def __init__(
        self, date_iso: str, game_number: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.date_iso = date_iso
        ctx.game_number = game_number
        ctx.user_message = (
            "This date cannot be replayed or generated retroactively. "
            "An operator override is required to restore it."
        )
        super().__init__(
            f"Past date {date_iso} has no committed or overridden puzzle set",
            "UNCOMMITTED_PAST_GAME", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class UnresolvedOverrideIdentityError(DailyPathError):
    """One or more operator-supplied identities do not exist in the catalog."""
    def __init__(self, names: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"unresolved": names}
        super().__init__(
            f"Could not resolve identities to path keys: {', '.join(names)}",
            "UNRESOLVED_OVERRIDE_IDENTITY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.names = names


class InvalidOverrideError(DailyPathError):
    """Override request cannot produce exactly five keys."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_OVERRIDE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidDateError(DailyPathError):
    """Date parameter is not a YYYY-MM-DD calendar date."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"value": value}
        super().__init__(
            f"Invalid date {value!r}; expected YYYY-MM-DD",
            "INVALID_DATE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )


class UnauthorizedError(DailyPathError):
    """Missing or wrong admin bearer token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class SessionStateError(DailyPathError):
    """Operation not allowed in the game session's current state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SESSION_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CatalogUnavailableError(DailyPathError):
    """Candidate catalog could not be loaded (transient; retry on reload)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Catalog unavailable: {message}",
            "CATALOG_UNAVAILABLE", ErrorCategory.UNAVAILABLE,
            ErrorSeverity.CRITICAL, context, 503,
        )


class StoreUnavailableError(DailyPathError):
    """Distribution store or counter database could not be reached."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ResultServiceError(DailyPathError):
    """Remote game API call failed after retries."""
    def __init__(
        self, message: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Game API error: {message}",
            "RESULT_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.status_code = status_code
