"""
Bulk load pipeline: CSV source -> records -> entities -> store.

Reading and validation finish before anything is written, so a strict
batch that fails validation writes nothing.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from ingestion.parser import RecordRejection, SwiftBankParser, ValidationPolicy
from ingestion.reader import CsvSwiftBankReader, SwiftBankRecord
from services.swift_service import SwiftService

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """
    Counts for one load run.

    Attributes:
        read: Data rows read from the source
        valid: Rows that passed validation
        rejected: Rows skipped by the lenient policy
        inserted: New rows written to the store
        skipped: Valid rows whose code was already stored
        rejections: Details of the rejected rows
    """

    read: int = 0
    valid: int = 0
    rejected: int = 0
    inserted: int = 0
    skipped: int = 0
    rejections: list[RecordRejection] = field(default_factory=list)


async def _load_records(
    records: list[SwiftBankRecord],
    service: SwiftService,
    policy: ValidationPolicy | None,
) -> LoadReport:
    report = LoadReport(read=len(records))
    if not records:
        logger.info("Source has a header but no data rows, nothing to load")
        return report

    parsed = SwiftBankParser(policy).parse(records)
    report.valid = len(parsed.entities)
    report.rejected = len(parsed.rejections)
    report.rejections = parsed.rejections

    result = await service.load_batch(parsed.entities)
    report.inserted = result.inserted
    report.skipped = result.skipped

    logger.info(
        f"SWIFT load finished: read={report.read} valid={report.valid} "
        f"rejected={report.rejected} inserted={report.inserted} skipped={report.skipped}"
    )
    return report


async def load_swift_banks(
    stream: TextIO,
    service: SwiftService,
    policy: ValidationPolicy | None = None,
    delimiter: str = ",",
) -> LoadReport:
    """
    Read, validate and store SWIFT banks from a CSV stream.

    Args:
        stream: Text stream positioned at the header row
        service: Service bound to an open session
        policy: Reaction to invalid records (default: settings.ingestion_policy)
        delimiter: CSV field delimiter

    Returns:
        LoadReport

    Raises:
        IngestionError: Subclasses for empty sources, bad headers, bad rows,
            stream failures and (strict policy) invalid records
        PartialBatchLoadError: If the store fails part way through
    """
    records = CsvSwiftBankReader(delimiter=delimiter).read(stream)
    return await _load_records(records, service, policy)


async def load_swift_banks_from_file(
    path: str | Path,
    service: SwiftService,
    policy: ValidationPolicy | None = None,
    delimiter: str = ",",
) -> LoadReport:
    """Same as load_swift_banks, reading a UTF-8 file at path."""
    logger.info(f"Loading SWIFT banks from {path}")
    records = CsvSwiftBankReader(delimiter=delimiter).read_path(path)
    return await _load_records(records, service, policy)
