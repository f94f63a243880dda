"""
Errors raised by repositories.

The service layer translates these into core.exceptions types; nothing
outside services/ should need to catch them.
"""


class RepositoryError(Exception):
    """Base class for repository failures."""


class RecordNotFoundError(RepositoryError):
    """No row matches the requested key."""

    def __init__(self, key: str, resource: str = "SWIFT code") -> None:
        super().__init__(f"{resource} {key} not found")
        self.key = key
        self.resource = resource


class DuplicateRecordError(RepositoryError):
    """A row with the same primary key already exists."""

    def __init__(self, key: str, resource: str = "SWIFT code") -> None:
        super().__init__(f"{resource} {key} already exists")
        self.key = key
        self.resource = resource


class UnsupportedDialectError(RepositoryError):
    """The bound database has no conditional insert support here."""


class BatchInsertError(RepositoryError):
    """
    A chunk of a batch insert failed.

    Chunks before the failed one stay committed.

    Attributes:
        committed: Rows inserted by the chunks that completed
        requested: Rows passed to the batch call
        failed_chunk: 1-based number of the chunk that failed
        cause: The store error raised by that chunk
    """

    def __init__(
        self,
        committed: int,
        requested: int,
        failed_chunk: int,
        cause: BaseException,
    ) -> None:
        super().__init__(
            f"batch insert failed at chunk {failed_chunk}: "
            f"{committed} of {requested} rows committed ({cause})"
        )
        self.committed = committed
        self.requested = requested
        self.failed_chunk = failed_chunk
        self.cause = cause
