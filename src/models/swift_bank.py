"""
SwiftBank model.

This module defines:
- SwiftBank: one row per SWIFT/BIC code, headquarters and branches alike

Architecture:
- swift_code is the natural primary key, so uniqueness is enforced by the store
- swift_code_base groups a headquarters with its branches
- The headquarters/branch variant is stored as the is_headquarters boolean
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from core.config import settings
from domain import SwiftBankEntity, SwiftCode, SwiftCodeEntity
from models.base import Base
from models.mixins import TimestampMixin


class SwiftBank(Base, TimestampMixin):
    """
    SWIFT bank row.

    Attributes:
        swift_code: 8 or 11 character BIC, uppercase (primary key)
        swift_code_base: First 8 characters of swift_code
        country_iso_code: ISO 3166-1 alpha-2 code, uppercase
        bank_name: Display name (max 100 chars)
        is_headquarters: True iff swift_code ends with "XXX"
        address: Street address (max 200 chars)
        country_name: Country display name (max 100 chars)
        created_at: When the row was inserted

    Indexes:
        - swift_code_base (branch lookup for a headquarters)
        - country_iso_code (listing by country)

    The table name and schema come from settings.
    """

    __tablename__ = settings.swift_table_name
    __table_args__ = {"schema": settings.swift_schema} if settings.swift_schema else {}

    swift_code: Mapped[str] = mapped_column(
        String(11),
        primary_key=True,
        comment="BIC/SWIFT code (8 or 11 alphanumeric characters)",
    )

    swift_code_base: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        index=True,
        comment="First 8 characters of swift_code",
    )

    country_iso_code: Mapped[str] = mapped_column(
        String(2),
        nullable=False,
        index=True,
        comment="ISO 3166-1 alpha-2 country code",
    )

    bank_name: Mapped[str] = mapped_column(String(100), nullable=False)

    is_headquarters: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Headquarters (code ends with XXX) or branch",
    )

    address: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    country_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    @property
    def entity_type(self) -> SwiftCodeEntity:
        if self.is_headquarters:
            return SwiftCodeEntity.HEADQUARTERS
        return SwiftCodeEntity.BRANCH

    def to_entity(self) -> SwiftBankEntity:
        """Convert the row back into the domain entity."""
        return SwiftBankEntity(
            swift_code=SwiftCode(self.swift_code),
            country_iso_code=self.country_iso_code,
            bank_name=self.bank_name,
            address=self.address,
            country_name=self.country_name,
        )

    def __repr__(self) -> str:
        """String representation of SwiftBank."""
        return (
            f"SwiftBank(swift_code={self.swift_code}, "
            f"type={self.entity_type.value}, "
            f"country={self.country_iso_code})"
        )
