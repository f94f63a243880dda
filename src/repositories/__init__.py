"""
Database repositories for the SWIFT codes service.

This module exports all repository classes for database operations.
"""

from repositories.base import BaseRepository
from repositories.exceptions import (
    BatchInsertError,
    DuplicateRecordError,
    RecordNotFoundError,
    RepositoryError,
)
from repositories.swift_bank_repository import (
    BatchInsertResult,
    CountrySwiftCodes,
    SwiftBankDetail,
    SwiftBankRepository,
)

__all__ = [
    "BaseRepository",
    "SwiftBankRepository",
    "SwiftBankDetail",
    "CountrySwiftCodes",
    "BatchInsertResult",
    "RepositoryError",
    "RecordNotFoundError",
    "DuplicateRecordError",
    "BatchInsertError",
]
