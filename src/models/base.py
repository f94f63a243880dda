"""Declarative base shared by the ORM models."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic names for indexes and keys created by create_all
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """No surrogate id column: SWIFT rows are keyed by the code itself."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
