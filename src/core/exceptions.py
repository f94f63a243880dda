"""
Application exceptions for the SWIFT codes service.

Every exception carries an HTTP status, a machine-readable error code and a
details dict naming the failing field, offending value or code, so any
transport can build a precise client message from it.

Exception hierarchy:
    AppException (base)
    ├── NotFoundError (404)
    ├── AlreadyExistsError (409)
    ├── ValidationError (422)
    │   └── InvalidInputError (400)
    ├── StoreError (500)
    ├── PartialBatchLoadError (500)
    └── OperationTimeoutError (504)
"""

from typing import Any


class AppException(Exception):
    """
    Base class for errors surfaced to API callers.

    Subclasses set status_code and error_code as class attributes and only
    override __init__ when they add structured details.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code
        error_code: Machine-readable error code
        details: Additional error details
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_message: str = "Internal error"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = dict(details or {})
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Error body shared by every JSON error response."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


class NotFoundError(AppException):
    """A looked-up SWIFT code or country has no rows."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(
        self,
        resource: str = "Resource",
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or f"{resource} not found", details=details)


class AlreadyExistsError(AppException):
    """A SWIFT code being created is already stored."""

    status_code = 409
    error_code = "ALREADY_EXISTS"

    def __init__(
        self,
        resource: str = "Resource",
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message or f"{resource} already exists", details=details)


class ValidationError(AppException):
    """Base class for rejected input."""

    status_code = 422
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class InvalidInputError(ValidationError):
    """
    Caller-supplied input is malformed, empty or oversize.

    field and value are kept as attributes and copied into details.
    """

    status_code = 400
    error_code = "INVALID_INPUT"

    def __init__(
        self,
        field: str | None = None,
        message: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if field is not None:
            details.setdefault("field", field)
            details.setdefault("value", value)
            message = message or f"Invalid input for field: {field}"
        super().__init__(message or "Invalid input", details=details)
        self.field = field
        self.value = value


class StoreError(AppException):
    """The database failed to execute a statement."""

    error_code = "DATABASE_ERROR"
    default_message = "Database operation failed"


class PartialBatchLoadError(AppException):
    """
    A batch load stopped part way through.

    Rows of chunks that finished before the failure stay committed.
    """

    error_code = "PARTIAL_BATCH_LOAD"

    def __init__(
        self,
        committed: int,
        requested: int,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = {**(details or {}), "committed": committed, "requested": requested}
        super().__init__(
            message or f"Batch load failed after committing {committed} of {requested} rows",
            details=details,
        )
        self.committed = committed
        self.requested = requested


class OperationTimeoutError(AppException):
    """An operation did not finish before its deadline."""

    status_code = 504
    error_code = "OPERATION_TIMEOUT"

    def __init__(
        self,
        operation: str,
        timeout: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = {**(details or {}), "operation": operation, "timeout_seconds": timeout}
        super().__init__(
            f"Operation '{operation}' timed out after {timeout}s", details=details
        )
