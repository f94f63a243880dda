"""SWIFT bank domain entity."""

from dataclasses import dataclass

from domain.swift_code import SwiftCode, SwiftCodeEntity
from domain.validators import (
    MAX_ADDRESS_LENGTH,
    MAX_COUNTRY_NAME_LENGTH,
    validate_bank_name,
    validate_country_iso_code,
    validate_text,
)


@dataclass(frozen=True)
class SwiftBankEntity:
    """
    Canonical SWIFT bank record.

    Built by the validator (bulk ingestion) or the service (single
    creation) and handed to the repository, which owns persisted state.
    swift_code_base, entity_type and is_headquarters are read-only views
    of swift_code, so the headquarters flag always agrees with the "XXX"
    suffix.

    Attributes:
        swift_code: Validated SWIFT code (primary identity)
        country_iso_code: ISO 3166-1 alpha-2 code, uppercase
        bank_name: Display name (1-100 chars)
        address: Street address (max 200 chars)
        country_name: Country display name (max 100 chars)
    """

    swift_code: SwiftCode
    country_iso_code: str
    bank_name: str
    address: str = ""
    country_name: str = ""

    def __post_init__(self) -> None:
        """Normalize and bound-check the descriptive fields."""
        if not isinstance(self.swift_code, SwiftCode):
            object.__setattr__(self, "swift_code", SwiftCode(self.swift_code))
        object.__setattr__(self, "bank_name", validate_bank_name(self.bank_name))
        object.__setattr__(
            self, "country_iso_code", validate_country_iso_code(self.country_iso_code)
        )
        object.__setattr__(
            self,
            "address",
            validate_text("address", self.address, MAX_ADDRESS_LENGTH, required=False),
        )
        object.__setattr__(
            self,
            "country_name",
            validate_text(
                "country_name", self.country_name, MAX_COUNTRY_NAME_LENGTH, required=False
            ),
        )

    @property
    def code(self) -> str:
        """SWIFT code as a plain string."""
        return self.swift_code.value

    @property
    def swift_code_base(self) -> str:
        return self.swift_code.base

    @property
    def entity_type(self) -> SwiftCodeEntity:
        return self.swift_code.entity_type

    @property
    def is_headquarters(self) -> bool:
        return self.swift_code.is_headquarters

    def to_dict(self) -> dict[str, str | bool]:
        """Flat representation with the derived fields filled in."""
        return {
            "swift_code": self.code,
            "swift_code_base": self.swift_code_base,
            "country_iso_code": self.country_iso_code,
            "bank_name": self.bank_name,
            "is_headquarters": self.is_headquarters,
            "address": self.address,
            "country_name": self.country_name,
        }
