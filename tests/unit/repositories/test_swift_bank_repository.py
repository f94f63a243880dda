"""
Unit tests for SwiftBankRepository.

Tests:
- Point lookup with headquarters branches
- Listing by country
- Insert-if-absent for single rows
- Chunked batch insert, re-runs and partial failures
- Delete by code
"""

import pytest
from sqlalchemy.exc import OperationalError

from domain import SwiftBankEntity
from repositories import (
    BatchInsertError,
    BatchInsertResult,
    DuplicateRecordError,
    RecordNotFoundError,
    SwiftBankRepository,
)


def make_entity(code, country="US", bank_name="Test Bank", country_name="UNITED STATES"):
    """Helper to create SwiftBankEntity instances for tests."""
    return SwiftBankEntity(
        swift_code=code,
        country_iso_code=country,
        bank_name=bank_name,
        address="1 Test Street",
        country_name=country_name,
    )


@pytest.mark.asyncio
class TestSwiftBankRepositoryReads:
    """Test suite for SwiftBankRepository lookups."""

    async def test_get_headquarters_with_branches(self, db_session):
        """Test a headquarters lists exactly its branches, ordered by code."""
        repo = SwiftBankRepository(db_session)
        await repo.create_batch(
            [
                make_entity("ABCDUS33XXX"),
                make_entity("ABCDUS33ZZZ"),
                make_entity("ABCDUS33123"),
                make_entity("WXYZUS33456"),
            ]
        )

        detail = await repo.get_by_code("ABCDUS33XXX")

        assert detail.bank.code == "ABCDUS33XXX"
        assert detail.bank.is_headquarters is True
        assert [b.code for b in detail.branches] == ["ABCDUS33123", "ABCDUS33ZZZ"]
        assert all(not b.is_headquarters for b in detail.branches)

    async def test_get_branch_has_no_branches(self, db_session):
        """Test a branch lookup does not collect siblings."""
        repo = SwiftBankRepository(db_session)
        await repo.create_batch([make_entity("ABCDUS33XXX"), make_entity("ABCDUS33123")])

        detail = await repo.get_by_code("ABCDUS33123")

        assert detail.bank.is_headquarters is False
        assert detail.branches == []

    async def test_get_by_code_is_case_insensitive(self, db_session):
        """Test lookup normalizes the code."""
        repo = SwiftBankRepository(db_session)
        await repo.create(make_entity("ABCDUS33XXX"))

        detail = await repo.get_by_code("abcdus33xxx")

        assert detail.bank.code == "ABCDUS33XXX"

    async def test_get_by_code_not_found(self, db_session):
        """Test a missing code raises RecordNotFoundError."""
        repo = SwiftBankRepository(db_session)

        with pytest.raises(RecordNotFoundError) as exc_info:
            await repo.get_by_code("NONEUS33XXX")

        assert exc_info.value.key == "NONEUS33XXX"

    async def test_get_by_country(self, db_session):
        """Test listing a country returns its rows ordered by code."""
        repo = SwiftBankRepository(db_session)
        await repo.create_batch(
            [
                make_entity("WXYZPLPWXXX", country="PL", country_name="POLAND"),
                make_entity("ABCDPLPW123", country="PL", country_name="POLAND"),
                make_entity("ABCDUS33XXX"),
            ]
        )

        result = await repo.get_by_country("pl")

        assert result.country_iso2 == "PL"
        assert result.country_name == "POLAND"
        assert [e.code for e in result.swift_codes] == ["ABCDPLPW123", "WXYZPLPWXXX"]

    async def test_get_by_country_not_found(self, db_session):
        """Test a country without rows raises RecordNotFoundError."""
        repo = SwiftBankRepository(db_session)

        with pytest.raises(RecordNotFoundError) as exc_info:
            await repo.get_by_country("DE")

        assert exc_info.value.resource == "Country"

    async def test_exists(self, db_session):
        """Test existence check."""
        repo = SwiftBankRepository(db_session)
        await repo.create(make_entity("ABCDUS33XXX"))

        assert await repo.exists("abcdus33xxx") is True
        assert await repo.exists("ABCDUS33123") is False


@pytest.mark.asyncio
class TestSwiftBankRepositoryWrites:
    """Test suite for SwiftBankRepository writes."""

    async def test_create_stores_derived_fields(self, db_session):
        """Test base code and headquarters flag are persisted."""
        repo = SwiftBankRepository(db_session)

        await repo.create(make_entity("ABCDUS33XXX"))
        detail = await repo.get_by_code("ABCDUS33XXX")

        assert detail.bank.swift_code_base == "ABCDUS33"
        assert detail.bank.is_headquarters is True
        assert await repo.count() == 1

    async def test_create_duplicate_raises(self, db_session):
        """Test a second insert of the same code is rejected."""
        repo = SwiftBankRepository(db_session)
        await repo.create(make_entity("ABCDUS33XXX", bank_name="Original"))

        with pytest.raises(DuplicateRecordError) as exc_info:
            await repo.create(make_entity("ABCDUS33XXX", bank_name="Replacement"))

        assert exc_info.value.key == "ABCDUS33XXX"
        detail = await repo.get_by_code("ABCDUS33XXX")
        assert detail.bank.bank_name == "Original"

    async def test_create_batch_in_chunks(self, db_session):
        """Test a batch spanning several chunks is fully inserted."""
        repo = SwiftBankRepository(db_session)
        entities = [make_entity(f"BANKUS33{n:03d}") for n in range(5)]

        result = await repo.create_batch(entities, chunk_size=2)

        assert result.requested == 5
        assert result.inserted == [e.code for e in entities]
        assert result.skipped == []
        assert await repo.count() == 5

    async def test_create_batch_rerun_is_idempotent(self, db_session):
        """Test loading the same batch twice writes nothing the second time."""
        repo = SwiftBankRepository(db_session)
        entities = [make_entity("ABCDUS33XXX"), make_entity("ABCDUS33123")]
        await repo.create_batch(entities)

        result = await repo.create_batch(entities)

        assert result.inserted == []
        assert result.skipped == ["ABCDUS33XXX", "ABCDUS33123"]
        assert await repo.count() == 2

    async def test_create_batch_does_not_overwrite(self, db_session):
        """Test existing rows keep their values when a batch repeats them."""
        repo = SwiftBankRepository(db_session)
        await repo.create_batch([make_entity("ABCDUS33XXX", bank_name="Original")])

        result = await repo.create_batch(
            [
                make_entity("ABCDUS33XXX", bank_name="Replacement"),
                make_entity("ABCDUS33123"),
            ]
        )

        assert result.inserted == ["ABCDUS33123"]
        assert result.skipped == ["ABCDUS33XXX"]
        detail = await repo.get_by_code("ABCDUS33XXX")
        assert detail.bank.bank_name == "Original"

    async def test_create_batch_repeated_code_counted_once(self, db_session):
        """Test a code repeated within one chunk is inserted once and then skipped."""
        repo = SwiftBankRepository(db_session)
        entities = [make_entity("ABCDUS33XXX"), make_entity("ABCDUS33XXX", bank_name="Other")]

        result = await repo.create_batch(entities, chunk_size=10)

        assert result.inserted == ["ABCDUS33XXX"]
        assert result.skipped == ["ABCDUS33XXX"]
        assert await repo.count() == 1

    async def test_create_batch_fills_given_result(self, db_session):
        """Test progress is recorded on a caller-supplied result."""
        repo = SwiftBankRepository(db_session)
        progress = BatchInsertResult(requested=0)

        entities = [make_entity("ABCDUS33XXX"), make_entity("ABCDUS33123")]

        returned = await repo.create_batch(entities, chunk_size=1, result=progress)

        assert returned is progress
        assert progress.requested == 2
        assert progress.inserted == ["ABCDUS33XXX", "ABCDUS33123"]

    async def test_create_batch_empty(self, db_session):
        """Test an empty batch is a no-op."""
        repo = SwiftBankRepository(db_session)

        result = await repo.create_batch([])

        assert result.requested == 0
        assert result.inserted == []

    async def test_create_batch_rejects_bad_chunk_size(self, db_session):
        """Test chunk_size must be positive."""
        repo = SwiftBankRepository(db_session)

        with pytest.raises(ValueError):
            await repo.create_batch([make_entity("ABCDUS33XXX")], chunk_size=0)

    async def test_create_batch_partial_failure(self, db_session, session_factory, monkeypatch):
        """Test a failing chunk reports how many rows earlier chunks committed."""
        repo = SwiftBankRepository(db_session)
        entities = [make_entity(f"BANKUS33{n:03d}") for n in range(5)]

        real_execute = db_session.execute
        calls = 0

        async def flaky_execute(statement, *args, **kwargs):
            nonlocal calls
            calls += 1
            if calls == 2:
                raise OperationalError("INSERT", {}, Exception("disk I/O error"))
            return await real_execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", flaky_execute)

        with pytest.raises(BatchInsertError) as exc_info:
            await repo.create_batch(entities, chunk_size=2)

        error = exc_info.value
        assert error.committed == 2
        assert error.requested == 5
        assert error.failed_chunk == 2
        assert isinstance(error.cause, OperationalError)

        async with session_factory() as session:
            assert await SwiftBankRepository(session).count() == 2

    async def test_delete(self, db_session):
        """Test deleting an existing code removes it."""
        repo = SwiftBankRepository(db_session)
        await repo.create(make_entity("ABCDUS33XXX"))

        await repo.delete("abcdus33xxx")

        assert await repo.exists("ABCDUS33XXX") is False

    async def test_delete_not_found(self, db_session):
        """Test deleting a missing code raises RecordNotFoundError."""
        repo = SwiftBankRepository(db_session)

        with pytest.raises(RecordNotFoundError):
            await repo.delete("ABCDUS33XXX")
