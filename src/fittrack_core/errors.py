"""
Error taxonomy for the FitTrack Pro client.

Field validation failures, failed backend requests and unexpected exceptions
are all represented by subclasses of BaseAppError so that every layer can log
and display them the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error type categories for consistent error handling."""

    VALIDATION = "validation"
    REQUEST = "request"
    STORAGE = "storage"
    SYSTEM = "system"


class ErrorCode(Enum):
    """Specific error codes for common scenarios."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_FORMAT = "INVALID_FORMAT"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # Request errors
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_RESPONSE = "INVALID_RESPONSE"

    # Storage errors
    STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # System errors
    OS_ERROR = "OS_ERROR"
    TIMEOUT = "TIMEOUT"
    MEMORY_ERROR = "MEMORY_ERROR"

    # Generic
    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Base application error with structured metadata.

    The user_message is always safe to show in a toast; technical details go
    to technical_message and context, which only reach the log.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retriable: bool = False
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return user-friendly error message."""
        return self.user_message

    def __repr__(self) -> str:
        """Return detailed error representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"type={self.type.value}, "
            f"code={self.code.value}, "
            f"message='{self.user_message}'"
            f")"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "retriable": self.retriable,
            "context": self.context,
        }


class ValidationError(BaseAppError):
    """A field failed one of its rules. Always user-correctable."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.LOW,
        context: dict[str, Any] | None = None,
    ):
        context = context or {}
        if field:
            context["field"] = field

        super().__init__(
            type=ErrorType.VALIDATION,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=False,
            context=context,
        )

    @property
    def field(self) -> str | None:
        """Get the field that caused the validation error."""
        return self.context.get("field")


class RequestError(BaseAppError):
    """The backend returned a non-success response or could not be reached."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        status_code: int | None = None,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: dict[str, Any] | None = None,
    ):
        context = context or {}
        if status_code is not None:
            context["status_code"] = status_code

        # Recovery is always a user-initiated resubmit
        super().__init__(
            type=ErrorType.REQUEST,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=True,
            context=context,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


class StorageError(BaseAppError):
    """Client-local storage could not be read or written."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.LOW,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.STORAGE,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=False,
            context=context or {},
        )


class UnexpectedError(BaseAppError):
    """Anything raised while handling a submission that nobody anticipated."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str = "An unexpected error occurred",
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            retriable=False,
            context=context or {},
        )


# Built-in exception -> (error class, code, default message)
_EXCEPTION_MAPPING: dict[type[Exception], tuple[type[BaseAppError], ErrorCode, str]] = {
    ValueError: (ValidationError, ErrorCode.INVALID_INPUT, "Invalid input provided"),
    TimeoutError: (UnexpectedError, ErrorCode.TIMEOUT, "Operation timed out"),
    MemoryError: (UnexpectedError, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
    OSError: (UnexpectedError, ErrorCode.OS_ERROR, "System error occurred"),
}


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Map a built-in exception to an application error.

    Args:
        exc: The exception to map
        context: Optional context information

    Returns:
        BaseAppError instance with appropriate type and metadata
    """
    context = context or {}

    if isinstance(exc, BaseAppError):
        return exc

    exc_type = type(exc)
    if exc_type in _EXCEPTION_MAPPING:
        error_class, error_code, default_message = _EXCEPTION_MAPPING[exc_type]
        result: BaseAppError = error_class(
            code=error_code,
            user_message=str(exc) if str(exc) else default_message,
            technical_message=f"{exc_type.__name__}: {exc}",
            context=context,
        )
        return result

    logger.warning(f"Unknown exception type: {exc_type.__name__}: {exc}")
    return UnexpectedError(
        code=ErrorCode.UNKNOWN,
        technical_message=f"{exc_type.__name__}: {exc}",
        context=context,
    )


def from_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """Alias for map_exception."""
    return map_exception(exc, context)
