"""
Shared repository plumbing.

Concrete repositories subclass BaseRepository with their model and get the
bound session, a row count and an insert construct that can skip conflicting
rows on whichever backend the session talks to.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import Base
from repositories.exceptions import UnsupportedDialectError

ModelType = TypeVar("ModelType", bound=Base)

# Backends whose INSERT has ON CONFLICT DO NOTHING and RETURNING
_CONDITIONAL_INSERT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseRepository(Generic[ModelType]):
    """Holds the model class and the session a repository works on."""

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    @property
    def dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    def conditional_insert(self) -> Any:
        """
        Dialect-specific INSERT on self.model.

        Callers chain on_conflict_do_nothing() and returning() to insert rows
        only when absent and learn which ones were written.

        Raises:
            UnsupportedDialectError: If the backend is neither PostgreSQL nor SQLite
        """
        insert = _CONDITIONAL_INSERT.get(self.dialect_name)
        if insert is None:
            raise UnsupportedDialectError(
                f"conditional insert is not supported for dialect '{self.dialect_name}'"
            )
        return insert(self.model)

    async def count(self) -> int:
        """Number of rows in the model's table."""
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
