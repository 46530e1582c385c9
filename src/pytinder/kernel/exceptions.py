"""Unified exception hierarchy for pytinder.

All client exceptions inherit from PyTinderException and carry an
:class:`~pytinder.kernel.types.ErrorKind` tag, enabling unified error
handling: catch PyTinderException to handle every client failure, or catch
specific subclasses for targeted handling.

Categories:
- BusinessException: Caller input errors and account quota conditions
- SecurityException: Missing or rejected session credentials
- InfrastructureException: Circuit breaker, timeouts, retry exhaustion
- ExternalServiceException: Error responses from the remote API
"""

from __future__ import annotations

from typing import Any

from pytinder.kernel.types import ErrorKind, FieldError

# =============================================================================
# Base Exception
# =============================================================================


class PyTinderException(Exception):
    """Base exception for all pytinder errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "NOT_AUTHORIZED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.kind.value
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(PyTinderException):
    """Caller-side and account-level errors."""


class InvalidArgumentsException(BusinessException):
    """A required argument is missing or malformed.

    Raised synchronously, before any network attempt.
    """

    kind = ErrorKind.INVALID_ARGUMENTS

    def __init__(self, field: str, rejected_value: Any = None, message: str = "invalid arguments") -> None:
        self.field_error = FieldError(field=field, message=message, rejected_value=rejected_value)
        super().__init__(f"{message}: {field}", context={"field": field})

    @property
    def field(self) -> str:
        return self.field_error.field

    @property
    def rejected_value(self) -> Any:
        return self.field_error.rejected_value


class OutOfLikesException(BusinessException):
    """The account has no likes remaining."""

    kind = ErrorKind.OUT_OF_LIKES

    def __init__(self, message: str = "out of likes", rate_limited_until: Any = None) -> None:
        context = {"rate_limited_until": rate_limited_until} if rate_limited_until is not None else {}
        super().__init__(message, context=context)
        self.rate_limited_until = rate_limited_until


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(PyTinderException):
    """Authentication errors."""


class NotAuthorizedException(SecurityException):
    """No session credential is held, or the remote API rejected it (401)."""

    kind = ErrorKind.NOT_AUTHORIZED

    def __init__(self, message: str = "not authorized") -> None:
        super().__init__(message)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(PyTinderException):
    """Resilience-layer failures: open circuits, timeouts, exhausted retries."""


class CircuitBreakerException(InfrastructureException):
    """Circuit breaker is open, operation rejected."""

    kind = ErrorKind.CIRCUIT_OPEN


class OperationTimeoutException(InfrastructureException):
    """Operation exceeded its allowed time limit."""

    kind = ErrorKind.TIMEOUT


class RetryExhaustedException(InfrastructureException):
    """All retry attempts have been exhausted without success."""

    kind = ErrorKind.RETRY_EXHAUSTED

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        super().__init__(
            f"operation failed after {attempts} attempt(s): {last_error}",
            context={"attempts": attempts},
        )
        self.attempts = attempts
        self.last_error = last_error


# =============================================================================
# External Service Exceptions
# =============================================================================


class ExternalServiceException(InfrastructureException):
    """Failure reported by the remote API."""


class HttpException(ExternalServiceException):
    """The remote API answered with an error status.

    Args:
        status_code: HTTP status code (or the application-level status).
        status_message: Reason phrase (or the application-level error text).
    """

    kind = ErrorKind.GENERIC_HTTP

    def __init__(self, status_code: int, status_message: str | None = None) -> None:
        super().__init__(
            f"{status_code} {status_message or ''}".rstrip(),
            context={"status_code": status_code, "status_message": status_message},
        )
        self.status_code = status_code
        self.status_message = status_message


class TransientHttpException(HttpException):
    """Server-side (5xx) failure; the dispatcher retries these."""

    kind = ErrorKind.TRANSIENT_HTTP


class ApplicationException(HttpException):
    """A successful HTTP response whose body carries an error ``status``."""

    def __init__(self, status: Any, error: Any = None) -> None:
        super().__init__(status, None if error is None else str(error))
        self.error = error
