"""
Domain validation for SWIFT bank records.

Turns SwiftBankRecord rows into SwiftBankEntity objects. Rules run in a
fixed order and stop at the first failing field:

1. swift_code: non-empty, BIC format, at most 15 characters
2. bank_name: non-empty, at most 100 characters
3. country_iso_code: non-empty, two letters
4. address: non-empty, at most 200 characters
5. country_name: non-empty, at most 100 characters

A swift_code seen earlier in the same batch counts as a failure of rule 1,
so the first occurrence always wins.
"""

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from core.config import settings
from domain import FieldValidationError, SwiftBankEntity, SwiftCode
from domain.validators import (
    validate_address,
    validate_bank_name,
    validate_country_iso_code,
    validate_country_name,
    validate_swift_code,
)
from ingestion.exceptions import NoValidRecordsError, RecordValidationError
from ingestion.reader import SwiftBankRecord

logger = logging.getLogger(__name__)

DUPLICATE_IN_BATCH = "duplicate swift_code in batch"


class ValidationPolicy(str, enum.Enum):
    """
    How a batch reacts to an invalid record.

    Attributes:
        STRICT: The first invalid record aborts the whole batch
        LENIENT: Invalid records are logged and skipped
    """

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class RecordRejection:
    """A record skipped under the lenient policy."""

    row_index: int
    field: str
    value: str
    reason: str


@dataclass
class ParseResult:
    entities: list[SwiftBankEntity] = field(default_factory=list)
    rejections: list[RecordRejection] = field(default_factory=list)


class SwiftBankParser:
    """Validate and convert SwiftBankRecord rows into canonical entities."""

    def __init__(self, policy: ValidationPolicy | str | None = None):
        self.policy = ValidationPolicy(policy or settings.ingestion_policy)

    def validate(self, record: SwiftBankRecord) -> SwiftBankEntity:
        """
        Convert one record into an entity.

        Raises:
            RecordValidationError: Naming the first failing field, its value
                and the record's row index
        """
        try:
            swift_code = validate_swift_code(record.swift_code)
            bank_name = validate_bank_name(record.bank_name)
            country_iso_code = validate_country_iso_code(record.country_iso_code)
            address = validate_address(record.address)
            country_name = validate_country_name(record.country_name)

            return SwiftBankEntity(
                swift_code=SwiftCode(swift_code),
                country_iso_code=country_iso_code,
                bank_name=bank_name,
                address=address,
                country_name=country_name,
            )
        except FieldValidationError as exc:
            raise RecordValidationError(
                field=exc.field,
                value=exc.value,
                row_index=record.index,
                reason=exc.reason,
            ) from exc

    def parse(self, records: Iterable[SwiftBankRecord]) -> ParseResult:
        """
        Validate a batch of records under the configured policy.

        Returns:
            ParseResult with entities in input order and, under the lenient
            policy, one rejection per skipped record

        Raises:
            RecordValidationError: First invalid record (strict policy)
            NoValidRecordsError: Every record was rejected (lenient policy)
        """
        result = ParseResult()
        seen: set[str] = set()
        total = 0

        for record in records:
            total += 1
            try:
                entity = self.validate(record)
                if entity.code in seen:
                    raise RecordValidationError(
                        field="swift_code",
                        value=record.swift_code,
                        row_index=record.index,
                        reason=DUPLICATE_IN_BATCH,
                    )
            except RecordValidationError as exc:
                if self.policy is ValidationPolicy.STRICT:
                    raise
                logger.warning(f"Skipping invalid record: {exc}")
                result.rejections.append(
                    RecordRejection(
                        row_index=exc.row_index,
                        field=exc.field,
                        value=str(exc.value),
                        reason=exc.reason,
                    )
                )
                continue

            seen.add(entity.code)
            result.entities.append(entity)

        if total and not result.entities:
            raise NoValidRecordsError(total)

        logger.info(
            f"Validated {total} records: {len(result.entities)} valid, "
            f"{len(result.rejections)} rejected (policy={self.policy.value})"
        )
        return result
