"""Error Hierarchy — typed, categorized exceptions for site collection failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Expected absence (missing list, missing target) never raises
    - UrlNormalizationError is always recovered locally with the raw string
    - to_dict() produces a JSON-safe envelope for logs

Design Decisions:
    - Single hierarchy with SiteCollectionError base: callers catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INVARIANT = "invariant"
    EXTERNAL = "external"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    location: str | None = None
    folder_id: int | None = None
    debug_info: dict[str, Any] | None = None


class SiteCollectionError(Exception):
    """Base exception for all site collection errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a JSON-safe error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "location": self.context.location,
                    "folder_id": self.context.folder_id,
                },
            }
        }


# ─── Boundary Errors ────────────────────────────────────────────

class InvalidSiteDetailError(SiteCollectionError):
    """A raw site detail failed schema validation at the boundary."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SITE_DETAIL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class UrlNormalizationError(SiteCollectionError, ValueError):
    """URL normalizer could not canonicalize its input."""
    def __init__(self, raw_url: object, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot normalize {raw_url!r}: {reason}",
            "URL_NORMALIZATION_FAILED", ErrorCategory.EXTERNAL,
            ErrorSeverity.WARNING, context,
        )
        self.raw_url = raw_url


# ─── Invariant Errors ───────────────────────────────────────────

class SiteInvariantError(SiteCollectionError):
    """A mutation produced a site list that violates a structural invariant."""
    def __init__(self, violation: dict, context: ErrorContext | None = None):
        super().__init__(
            violation["message"], violation["error_code"], ErrorCategory.INVARIANT,
            ErrorSeverity.CRITICAL, context,
        )
        self.violation = violation
