"""
CSV reader for SWIFT bank source files.

The reader only checks shape: the header must name exactly the expected
columns and every row must carry one value per column. Domain rules are
applied later by SwiftBankParser.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from ingestion.exceptions import (
    EmptySourceError,
    HeaderMismatchError,
    RowShapeError,
    SourceReadError,
)

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = [
    "COUNTRY ISO2 CODE",
    "SWIFT CODE",
    "CODE TYPE",
    "NAME",
    "ADDRESS",
    "TOWN NAME",
    "COUNTRY NAME",
    "TIME ZONE",
]

# Errors the csv module and the text stream raise on broken input
_READ_ERRORS = (OSError, UnicodeDecodeError, csv.Error)


@dataclass(frozen=True)
class SwiftBankRecord:
    """
    One data row, loosely typed.

    Values are trimmed strings exactly as read. CODE TYPE, TOWN NAME and
    TIME ZONE are carried along but not mapped into the entity.
    """

    index: int
    country_iso_code: str
    swift_code: str
    code_type: str
    bank_name: str
    address: str
    town_name: str
    country_name: str
    time_zone: str


def _normalize_column(name: str) -> str:
    return name.strip().upper()


class CsvSwiftBankReader:
    """Read SWIFT bank records from CSV text."""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def read_path(self, path: str | Path) -> list[SwiftBankRecord]:
        """Open a UTF-8 file and read it."""
        try:
            handle = open(path, encoding="utf-8", newline="")
        except OSError as exc:
            raise SourceReadError(f"opening {path}", exc) from exc
        with handle:
            return self.read(handle)

    def read(self, stream: TextIO) -> list[SwiftBankRecord]:
        """
        Read every non-empty data row from a CSV stream.

        Args:
            stream: Text stream positioned at the header row

        Returns:
            Records in file order; row indexes are 1-based

        Raises:
            EmptySourceError: If the stream holds zero bytes
            HeaderMismatchError: If the header is not the expected column set
            RowShapeError: If a row's field count differs from the header's
            SourceReadError: If the stream itself fails
        """
        reader = csv.reader(stream, delimiter=self.delimiter, skipinitialspace=True)

        try:
            header = next(reader)
        except StopIteration:
            raise EmptySourceError() from None
        except _READ_ERRORS as exc:
            raise SourceReadError("reading header", exc) from exc

        column_map = self._validate_header(header)

        records: list[SwiftBankRecord] = []
        row_index = 0
        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except _READ_ERRORS as exc:
                raise SourceReadError(f"row {row_index + 1}", exc) from exc

            if not any(value.strip() for value in row):
                continue

            row_index += 1
            if len(row) != len(EXPECTED_COLUMNS):
                raise RowShapeError(row_index)

            def field(column: str) -> str:
                return row[column_map[column]].strip()

            records.append(
                SwiftBankRecord(
                    index=row_index,
                    country_iso_code=field("COUNTRY ISO2 CODE"),
                    swift_code=field("SWIFT CODE"),
                    code_type=field("CODE TYPE"),
                    bank_name=field("NAME"),
                    address=field("ADDRESS"),
                    town_name=field("TOWN NAME"),
                    country_name=field("COUNTRY NAME"),
                    time_zone=field("TIME ZONE"),
                )
            )

        logger.debug(f"Read {len(records)} SWIFT bank records")
        return records

    @staticmethod
    def _validate_header(header: list[str]) -> dict[str, int]:
        """
        Check the header against EXPECTED_COLUMNS.

        Comparison is case-insensitive and whitespace-trimmed; column order
        is free.

        Returns:
            Mapping of expected column name to its position in the file
        """
        if len(header) != len(EXPECTED_COLUMNS):
            raise HeaderMismatchError(
                f"invalid header length: expected {len(EXPECTED_COLUMNS)}, got {len(header)}",
                expected=EXPECTED_COLUMNS,
                actual=header,
            )

        column_map: dict[str, int] = {}
        for position, raw in enumerate(header):
            column = _normalize_column(raw)
            if column not in EXPECTED_COLUMNS:
                raise HeaderMismatchError(
                    f"invalid header: unexpected column '{raw}' at index {position}",
                    expected=EXPECTED_COLUMNS,
                    actual=header,
                    column=raw,
                )
            if column in column_map:
                raise HeaderMismatchError(
                    f"invalid header: duplicated column '{raw}' at index {position}",
                    expected=EXPECTED_COLUMNS,
                    actual=header,
                    column=raw,
                )
            column_map[column] = position

        return column_map
