"""Error Hierarchy — typed, categorized exceptions for heartbeat failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - BalanceRetrievalError is WARNING severity: the cycle degrades, it never fails
    - to_log_extra() only emits keys the JSON log formatter knows how to surface

Design Decisions:
    - Single hierarchy with HeartbeatError base: callers absorb one type per concern
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
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cycle_id: str | None = None
    wallet_address: str | None = None
    network: str | None = None
    debug_info: dict[str, Any] | None = None


class HeartbeatError(Exception):
    """Base exception for all heartbeat errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_log_extra(self) -> dict:
        """Fields for logger `extra=` — None values dropped."""
        extra = {
            "error_code": self.code,
            "cycle_id": self.context.cycle_id,
            "wallet_address": self.context.wallet_address,
            "network": self.context.network,
        }
        return {k: v for k, v in extra.items() if v is not None}


# ─── Infrastructure Errors ──────────────────────────────────────

_REASON_CATEGORIES = {
    "timeout": ErrorCategory.TIMEOUT,
    "invalid_address": ErrorCategory.VALIDATION,
    "unsupported_network": ErrorCategory.VALIDATION,
}


class BalanceRetrievalError(HeartbeatError):
    """USDC balance could not be read (network, RPC, or address problem)."""
    def __init__(self, message: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"USDC balance lookup failed ({reason}): {message}",
            "BALANCE_RETRIEVAL_ERROR",
            _REASON_CATEGORIES.get(reason, ErrorCategory.EXTERNAL_API),
            ErrorSeverity.WARNING, context,
        )
        self.reason = reason

    def to_log_extra(self) -> dict:
        extra = super().to_log_extra()
        extra["reason"] = self.reason
        return extra
