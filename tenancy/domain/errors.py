"""
Domain error taxonomy.

Raised inside domain helpers and converted into Result errors at the use
case boundary. Only storage/infrastructure failures escape as exceptions.
"""

from typing import Optional

from tenancy.libs.result import Error


class TenancyError(Exception):
    """Base class for expected business failures"""

    default_code = "TENANCY_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, reason: Optional[str] = None):
        self.message = message
        self.code = code or self.default_code
        self.reason = reason
        super().__init__(message)

    def to_error(self) -> Error:
        return Error(self.code, self.message, reason=self.reason)


class ValidationError(TenancyError):
    """Bad input shape or range - never retried automatically"""

    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, field_errors: Optional[dict] = None):
        super().__init__(message, code)
        self.field_errors = field_errors or {}

    def to_error(self) -> Error:
        return Error(self.code, self.message, details={"fields": self.field_errors})


class ConflictError(TenancyError):
    """Conflicting state (slug taken, concurrent change) - retry only with new input"""

    default_code = "CONFLICT"


class InvalidTransition(ConflictError):
    """Requested tenant status change is not in the transition table"""

    default_code = "INVALID_TRANSITION"

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot transition tenant from {_value(current)} to {_value(requested)}",
            reason=f"current={_value(current)}, requested={_value(requested)}",
        )

    def to_error(self) -> Error:
        return Error(
            self.code,
            self.message,
            reason=self.reason,
            details={"current": _value(self.current), "requested": _value(self.requested)},
        )


class TransientError(TenancyError):
    """Downstream timeout or 5xx - safe to retry with backoff"""

    default_code = "TRANSIENT_ERROR"


def _value(status) -> str:
    return getattr(status, "value", str(status))
