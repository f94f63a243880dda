"""
SWIFT code service for lookups, creation, deletion and bulk loading.

This module provides:
- Get a SWIFT code with its branches
- List SWIFT codes of a country
- Create a SWIFT code
- Delete a SWIFT code
- Load a batch of validated entities

Identifiers are checked with the same rules as bulk ingestion before the
repository is touched, so malformed lookups fail fast with
InvalidInputError. Repository and store errors are translated into
core.exceptions types. Every operation runs under a deadline.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    NotFoundError,
    OperationTimeoutError,
    PartialBatchLoadError,
    StoreError,
)
from domain import FieldValidationError, SwiftBankEntity, SwiftCode
from domain.validators import validate_country_iso_code, normalize_code
from repositories import (
    BatchInsertError,
    BatchInsertResult,
    DuplicateRecordError,
    RecordNotFoundError,
    SwiftBankRepository,
)
from schemas.swift_bank import (
    BatchLoadResult,
    CountrySwiftCodesResponse,
    SwiftBankCreate,
    SwiftBankDetailResponse,
    SwiftBankResponse,
)

logger = logging.getLogger(__name__)


def _invalid_input(exc: FieldValidationError) -> InvalidInputError:
    return InvalidInputError(field=exc.field, message=str(exc.message), value=exc.value)


class SwiftService:
    """
    Service class for SWIFT code operations.

    This service handles:
    - Input validation and uppercase normalization
    - Defaulting of derived fields (base code, headquarters flag)
    - Transaction commit/rollback around repository writes
    - Error translation (repository/store -> application exceptions)
    - Per-operation deadlines

    All methods require an active database session.
    """

    def __init__(
        self,
        session: AsyncSession,
        chunk_size: int | None = None,
        timeout: float | None = None,
        load_timeout: float | None = None,
    ):
        """
        Initialize SwiftService with database session.

        Args:
            session: Async database session
            chunk_size: Rows per batch INSERT (default: settings.batch_chunk_size)
            timeout: Deadline in seconds for single operations
            load_timeout: Deadline in seconds for load_batch
        """
        self.session = session
        self.swift_repo = SwiftBankRepository(session)
        self.chunk_size = chunk_size or settings.batch_chunk_size
        self.timeout = timeout or settings.operation_timeout_seconds
        self.load_timeout = load_timeout or settings.load_timeout_seconds

    @asynccontextmanager
    async def _deadline(
        self,
        operation: str,
        timeout: float,
        progress: BatchInsertResult | None = None,
    ) -> AsyncIterator[None]:
        """
        Run a block under a deadline and translate store failures.

        Cancellation is not caught and reaches the caller unchanged. When a
        batch progress record is given, a timeout reports how many rows were
        already committed.

        Raises:
            OperationTimeoutError: If the deadline expires
            StoreError: If the store raises SQLAlchemyError
        """
        try:
            async with asyncio.timeout(timeout):
                yield
        except TimeoutError as exc:
            await self.session.rollback()
            details = None
            message = f"{operation} timed out after {timeout}s"
            if progress is not None:
                details = {"committed": len(progress.inserted), "requested": progress.requested}
                message += f" with {details['committed']} of {details['requested']} rows committed"
            logger.warning(message)
            raise OperationTimeoutError(operation, timeout, details=details) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error(f"{operation} failed in the store: {exc}")
            raise StoreError(f"{operation} failed", details={"operation": operation}) from exc

    @staticmethod
    def _validate_code(code: str) -> SwiftCode:
        try:
            return SwiftCode(code)
        except FieldValidationError as exc:
            logger.info(f"Invalid SWIFT code format: {code!r}")
            raise _invalid_input(exc) from exc

    async def get_swift_code_details(self, swift_code: str) -> SwiftBankDetailResponse:
        """
        Get a SWIFT code and, for a headquarters, its branches.

        Args:
            swift_code: SWIFT/BIC code (case-insensitive)

        Returns:
            SwiftBankDetailResponse

        Raises:
            InvalidInputError: If the code is malformed
            NotFoundError: If the code is not stored

        Example:
            detail = await service.get_swift_code_details("ABCDUS33XXX")
        """
        code = self._validate_code(swift_code)

        async with self._deadline("get_swift_code_details", self.timeout):
            try:
                detail = await self.swift_repo.get_by_code(code.value)
            except RecordNotFoundError as exc:
                logger.info(f"SWIFT code not found: {code}")
                raise NotFoundError(
                    message=f"SWIFT code {code} not found",
                    details={"swift_code": code.value},
                ) from exc

        logger.debug(f"Retrieved SWIFT code {code} with {len(detail.branches)} branches")
        return SwiftBankDetailResponse.from_detail(detail)

    async def get_swift_codes_by_country(
        self,
        country_iso_code: str,
    ) -> CountrySwiftCodesResponse:
        """
        List every SWIFT code of a country.

        Args:
            country_iso_code: ISO 3166-1 alpha-2 code (case-insensitive)

        Returns:
            CountrySwiftCodesResponse

        Raises:
            InvalidInputError: If the country code is malformed
            NotFoundError: If the country has no SWIFT codes
        """
        try:
            country = validate_country_iso_code(country_iso_code)
        except FieldValidationError as exc:
            raise _invalid_input(exc) from exc

        async with self._deadline("get_swift_codes_by_country", self.timeout):
            try:
                result = await self.swift_repo.get_by_country(country)
            except RecordNotFoundError as exc:
                raise NotFoundError(
                    message=f"No SWIFT codes found for country {country}",
                    details={"country_iso_code": country},
                ) from exc

        return CountrySwiftCodesResponse.from_country(result)

    async def create_swift_code(self, data: SwiftBankCreate) -> SwiftBankResponse:
        """
        Create a SWIFT code.

        swift_code and country_iso_code are uppercased. is_headquarters and
        swift_code_base are derived from the code; values supplied by the
        caller must agree with them.

        Args:
            data: Creation payload

        Returns:
            SwiftBankResponse with the stored values

        Raises:
            InvalidInputError: If a field is malformed, empty or oversize
            AlreadyExistsError: If the code is already stored
        """
        code = self._validate_code(data.swift_code)
        try:
            entity = SwiftBankEntity(
                swift_code=code,
                country_iso_code=data.country_iso_code,
                bank_name=data.bank_name,
                address=data.address,
                country_name=data.country_name,
            )
        except FieldValidationError as exc:
            raise _invalid_input(exc) from exc

        if data.swift_code_base and normalize_code(data.swift_code_base) != entity.swift_code_base:
            raise InvalidInputError(
                field="swift_code_base",
                message=f"swift_code_base must equal {entity.swift_code_base}",
                value=data.swift_code_base,
            )
        if data.is_headquarters is not None and data.is_headquarters != entity.is_headquarters:
            raise InvalidInputError(
                field="is_headquarters",
                message="is_headquarters must match the XXX suffix of swift_code",
                value=data.is_headquarters,
            )

        async with self._deadline("create_swift_code", self.timeout):
            try:
                await self.swift_repo.create(entity)
            except DuplicateRecordError as exc:
                await self.session.rollback()
                logger.warning(f"SWIFT code creation failed: {entity.code} already exists")
                raise AlreadyExistsError(
                    message=f"SWIFT code {entity.code} already exists",
                    details={"swift_code": entity.code},
                ) from exc
            await self.session.commit()

        logger.info(f"SWIFT code created: {entity.code} ({entity.entity_type.value})")
        return SwiftBankResponse.from_entity(entity)

    async def delete_swift_code(self, swift_code: str) -> None:
        """
        Delete a SWIFT code.

        Args:
            swift_code: SWIFT/BIC code (case-insensitive)

        Raises:
            InvalidInputError: If the code is malformed
            NotFoundError: If the code is not stored
        """
        code = self._validate_code(swift_code)

        async with self._deadline("delete_swift_code", self.timeout):
            try:
                await self.swift_repo.delete(code.value)
            except RecordNotFoundError as exc:
                await self.session.rollback()
                raise NotFoundError(
                    message=f"SWIFT code {code} not found",
                    details={"swift_code": code.value},
                ) from exc
            await self.session.commit()

        logger.info(f"SWIFT code deleted: {code}")

    async def load_batch(self, entities: Sequence[SwiftBankEntity]) -> BatchLoadResult:
        """
        Insert validated entities in chunks.

        Codes already stored are skipped, never overwritten.

        Args:
            entities: Entities produced by SwiftBankParser

        Returns:
            BatchLoadResult with inserted/skipped counts

        Raises:
            PartialBatchLoadError: If a chunk fails; earlier chunks stay
                committed and the error carries the committed count
            OperationTimeoutError: If the load outlives load_timeout; details
                carry the committed and requested counts
        """
        progress = BatchInsertResult(requested=len(entities))
        async with self._deadline("load_batch", self.load_timeout, progress):
            try:
                result = await self.swift_repo.create_batch(
                    entities, self.chunk_size, progress
                )
            except BatchInsertError as exc:
                raise PartialBatchLoadError(
                    committed=exc.committed,
                    requested=exc.requested,
                    details={"failed_chunk": exc.failed_chunk},
                ) from exc

        logger.info(
            f"Batch loaded: {len(result.inserted)} inserted, "
            f"{len(result.skipped)} already present, {result.requested} requested"
        )
        return BatchLoadResult.from_insert_result(result)
