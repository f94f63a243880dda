"""
SWIFT bank repository for database operations.

This module provides database operations for the SwiftBank model:
- Point lookup by SWIFT code, with branches for a headquarters
- Listing by country
- Insert-if-absent for single rows and chunked batches
- Delete by code

Writes are single conditional statements (INSERT ... ON CONFLICT DO NOTHING
RETURNING, DELETE ... RETURNING). The primary key constraint decides
duplicates, so there is no separate existence check that a concurrent
writer could slip past.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from domain import SwiftBankEntity
from domain.validators import normalize_code
from models.swift_bank import SwiftBank
from repositories.base import BaseRepository
from repositories.exceptions import (
    BatchInsertError,
    DuplicateRecordError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100


@dataclass
class SwiftBankDetail:
    """A SWIFT bank plus, for a headquarters, its branches."""

    bank: SwiftBankEntity
    branches: list[SwiftBankEntity] = field(default_factory=list)


@dataclass
class CountrySwiftCodes:
    """
    All SWIFT banks registered in one country.

    country_name is copied from one of the rows, not from a canonical
    country table, so rows that disagree on the name yield either value.
    """

    country_iso2: str
    country_name: str
    swift_codes: list[SwiftBankEntity] = field(default_factory=list)


@dataclass
class BatchInsertResult:
    """Outcome of create_batch: which codes were inserted and which already existed."""

    requested: int
    inserted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class SwiftBankRepository(BaseRepository[SwiftBank]):
    """
    Repository for SwiftBank model operations.

    Reads return domain entities, never ORM rows. Results are ordered by
    swift_code.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize SwiftBankRepository.

        Args:
            session: Async database session
        """
        super().__init__(SwiftBank, session)

    async def get_by_code(self, code: str) -> SwiftBankDetail:
        """
        Get a SWIFT bank by exact code.

        For a headquarters the detail also carries every branch sharing its
        base code. Case-insensitive (stored uppercase in DB).

        Args:
            code: SWIFT/BIC code (8 or 11 characters)

        Returns:
            SwiftBankDetail

        Raises:
            RecordNotFoundError: If no row matches

        Example:
            detail = await repo.get_by_code("ABCDUS33XXX")
        """
        code = normalize_code(code)
        query = select(SwiftBank).where(SwiftBank.swift_code == code)
        result = await self.session.execute(query)
        row = result.scalar_one_or_none()
        if row is None:
            raise RecordNotFoundError(code)

        bank = row.to_entity()
        detail = SwiftBankDetail(bank=bank)
        if bank.is_headquarters:
            detail.branches = await self.get_branches_by_base(bank.swift_code_base)
        return detail

    async def get_branches_by_base(self, swift_code_base: str) -> list[SwiftBankEntity]:
        """
        Get all branches (non-headquarters rows) sharing a base code.

        Args:
            swift_code_base: First 8 characters of a SWIFT code

        Returns:
            Branch entities, possibly empty
        """
        query = (
            select(SwiftBank)
            .where(
                SwiftBank.swift_code_base == normalize_code(swift_code_base),
                SwiftBank.is_headquarters.is_(False),
            )
            .order_by(SwiftBank.swift_code)
        )
        result = await self.session.execute(query)
        return [row.to_entity() for row in result.scalars().all()]

    async def get_by_country(self, country_iso_code: str) -> CountrySwiftCodes:
        """
        Get every SWIFT bank in a country.

        Args:
            country_iso_code: ISO 3166-1 alpha-2 code (any case)

        Returns:
            CountrySwiftCodes

        Raises:
            RecordNotFoundError: If the country has no rows
        """
        country = normalize_code(country_iso_code)
        query = (
            select(SwiftBank)
            .where(SwiftBank.country_iso_code == country)
            .order_by(SwiftBank.swift_code)
        )
        result = await self.session.execute(query)
        rows = list(result.scalars().all())
        if not rows:
            raise RecordNotFoundError(country, resource="Country")

        return CountrySwiftCodes(
            country_iso2=country,
            country_name=rows[0].country_name,
            swift_codes=[row.to_entity() for row in rows],
        )

    async def exists(self, code: str) -> bool:
        """
        Check if a SWIFT code is stored.

        Args:
            code: SWIFT/BIC code (any case)

        Returns:
            True if exists, False otherwise
        """
        query = select(SwiftBank.swift_code).where(
            SwiftBank.swift_code == normalize_code(code)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none() is not None

    async def create(self, entity: SwiftBankEntity) -> None:
        """
        Insert one SWIFT bank unless the code is already stored.

        Does not commit; the caller owns the transaction.

        Args:
            entity: Validated entity (derived fields come from its code)

        Raises:
            DuplicateRecordError: If the code already exists
        """
        stmt = (
            self.conditional_insert()
            .values(entity.to_dict())
            .on_conflict_do_nothing(index_elements=[SwiftBank.swift_code])
            .returning(SwiftBank.swift_code)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise DuplicateRecordError(entity.code)

    async def create_batch(
        self,
        entities: Sequence[SwiftBankEntity],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        result: BatchInsertResult | None = None,
    ) -> BatchInsertResult:
        """
        Insert many SWIFT banks in fixed-size chunks.

        Each chunk is one multi-row conditional INSERT and is committed on
        its own. Codes that already exist are reported as skipped and left
        untouched, so re-running a load is safe. A code repeated in the input
        is inserted once; later occurrences count as skipped.

        Args:
            entities: Validated entities
            chunk_size: Rows per INSERT statement
            result: Filled in as chunks commit, so a caller that cancels the
                load still sees what was written (default: a fresh one)

        Returns:
            BatchInsertResult with inserted and skipped codes

        Raises:
            ValueError: If chunk_size is not positive
            BatchInsertError: If a chunk fails; earlier chunks stay committed
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")

        if result is None:
            result = BatchInsertResult(requested=0)
        result.requested = len(entities)
        if not entities:
            return result

        total_chunks = (len(entities) + chunk_size - 1) // chunk_size
        for number, start in enumerate(range(0, len(entities), chunk_size), start=1):
            chunk = entities[start : start + chunk_size]
            stmt = (
                self.conditional_insert()
                .values([entity.to_dict() for entity in chunk])
                .on_conflict_do_nothing(index_elements=[SwiftBank.swift_code])
                .returning(SwiftBank.swift_code)
            )
            try:
                returned = set((await self.session.execute(stmt)).scalars().all())
                await self.session.commit()
            except SQLAlchemyError as exc:
                await self.session.rollback()
                logger.error(
                    f"Batch insert failed at chunk {number}/{total_chunks}: "
                    f"{len(result.inserted)} of {result.requested} rows committed"
                )
                raise BatchInsertError(
                    committed=len(result.inserted),
                    requested=result.requested,
                    failed_chunk=number,
                    cause=exc,
                ) from exc

            written = len(returned)
            for entity in chunk:
                if entity.code in returned:
                    returned.discard(entity.code)
                    result.inserted.append(entity.code)
                else:
                    result.skipped.append(entity.code)

            logger.debug(
                f"Committed chunk {number}/{total_chunks}: "
                f"{written} inserted, {len(chunk) - written} skipped"
            )

        logger.info(
            f"Batch insert finished: {len(result.inserted)} inserted, "
            f"{len(result.skipped)} skipped of {result.requested}"
        )
        return result

    async def delete(self, code: str) -> None:
        """
        Delete a SWIFT bank by exact code.

        Does not commit; the caller owns the transaction.

        Args:
            code: SWIFT/BIC code (any case)

        Raises:
            RecordNotFoundError: If no row matches
        """
        code = normalize_code(code)
        stmt = (
            delete(SwiftBank)
            .where(SwiftBank.swift_code == code)
            .returning(SwiftBank.swift_code)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise RecordNotFoundError(code)
