"""
Errors raised while reading and validating SWIFT bank source files.

Exception hierarchy:
    IngestionError (base)
    ├── EmptySourceError
    ├── HeaderMismatchError
    ├── RowShapeError
    ├── SourceReadError
    ├── RecordValidationError
    └── NoValidRecordsError
"""

from typing import Any


class IngestionError(Exception):
    """Base class for ingestion failures."""


class EmptySourceError(IngestionError):
    """The source holds zero bytes: there is not even a header row."""

    def __init__(self, message: str = "source is empty") -> None:
        super().__init__(message)


class HeaderMismatchError(IngestionError):
    """The header row is not exactly the expected column set."""

    def __init__(
        self,
        message: str,
        expected: list[str],
        actual: list[str],
        column: str | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.column = column


class RowShapeError(IngestionError):
    """A data row does not have the header's field count."""

    def __init__(self, row_index: int, kind: str = "invalid length") -> None:
        super().__init__(f"row {row_index}: {kind}")
        self.row_index = row_index
        self.kind = kind


class SourceReadError(IngestionError):
    """The underlying stream failed; wraps the original error and the phase."""

    def __init__(self, phase: str, cause: BaseException) -> None:
        super().__init__(f"{phase}: {cause}")
        self.phase = phase
        self.cause = cause


class RecordValidationError(IngestionError):
    """A record broke a domain rule; names the field, value and row."""

    def __init__(self, field: str, value: Any, row_index: int, reason: str) -> None:
        super().__init__(
            f"validation error: {field} '{value}' at row {row_index} {reason}"
        )
        self.field = field
        self.value = value
        self.row_index = row_index
        self.reason = reason


class NoValidRecordsError(IngestionError):
    """Lenient validation skipped every record in a non-empty batch."""

    def __init__(self, total: int) -> None:
        super().__init__(f"no valid records among {total} input rows")
        self.total = total
