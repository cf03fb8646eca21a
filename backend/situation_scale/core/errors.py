"""Error Hierarchy — typed, categorized exceptions for every game failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; persistence errors (500-level) are critical
    - to_response() always carries a top-level "message" for clients
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GameError base: one FastAPI handler catches all
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERMISSION = "permission"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    room_code: str | None = None
    round_number: int | None = None
    debug_info: dict[str, Any] | None = None


class GameError(Exception):
    """Base exception for all game errors."""

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
            "message": self.message,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "room_code": self.context.room_code,
                    "round_number": self.context.round_number,
                },
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(GameError):
    """Malformed or out-of-range input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class NotFoundError(GameError):
    """Requested game, player, round or situation does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidStateError(GameError):
    """Command attempted in a phase that forbids it."""
    def __init__(
        self, command: str, status: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot {command.replace('_', ' ')} while game is {status}",
            "INVALID_STATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.command = command
        self.status = status


class CapacityError(GameError):
    """Player limit reached."""
    def __init__(self, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Game is full ({limit} players)",
            "GAME_FULL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.limit = limit


class InsufficientPlayersError(GameError):
    """Not enough players to start."""
    def __init__(self, required: int, actual: int, context: ErrorContext | None = None):
        super().__init__(
            f"Need at least {required} players to start (have {actual})",
            "INSUFFICIENT_PLAYERS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.required = required
        self.actual = actual


class NoPromptsError(GameError):
    """No unused prompts remain to build a round from."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No prompts available",
            "NO_PROMPTS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class AlreadySubmittedError(GameError):
    """Player already has a situation in the current round."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Player already submitted a situation this round",
            "ALREADY_SUBMITTED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class PermissionDeniedError(GameError):
    """Caller may not move this situation in the current phase."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(GameError):
    """Entity store operation failed. Client sees a generic message; operation is for logs."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "A storage error occurred, please retry",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
