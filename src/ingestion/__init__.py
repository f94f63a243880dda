"""
Ingestion of SWIFT bank source files.

This package provides:
- CSV reading with header and row shape checks
- Domain validation under a strict or lenient policy
- The load pipeline that hands validated entities to SwiftService
"""

from ingestion.exceptions import (
    EmptySourceError,
    HeaderMismatchError,
    IngestionError,
    NoValidRecordsError,
    RecordValidationError,
    RowShapeError,
    SourceReadError,
)
from ingestion.parser import (
    ParseResult,
    RecordRejection,
    SwiftBankParser,
    ValidationPolicy,
)
from ingestion.reader import EXPECTED_COLUMNS, CsvSwiftBankReader, SwiftBankRecord

__all__ = [
    "EXPECTED_COLUMNS",
    "CsvSwiftBankReader",
    "EmptySourceError",
    "HeaderMismatchError",
    "IngestionError",
    "NoValidRecordsError",
    "ParseResult",
    "RecordRejection",
    "RecordValidationError",
    "RowShapeError",
    "SourceReadError",
    "SwiftBankParser",
    "SwiftBankRecord",
    "ValidationPolicy",
]
