"""
SWIFT bank Pydantic schemas for API request/response handling.

This module provides:
- SWIFT bank creation schema
- SWIFT bank response schemas (single, with branches, by country)
- Batch load result schema
- Generic message response

Request schemas only bound field sizes; format rules (BIC pattern, ISO2
country) are enforced by SwiftService so that direct callers and HTTP
callers get the same InvalidInputError.
"""

from pydantic import BaseModel, ConfigDict, Field

from domain import SwiftBankEntity
from repositories import BatchInsertResult, CountrySwiftCodes, SwiftBankDetail


class SwiftBankCreate(BaseModel):
    """
    Schema for creating a SWIFT bank.

    Used in POST /v1/swift-codes requests.

    Attributes:
        swift_code: 8 or 11 character BIC (any case)
        bank_name: Display name
        country_iso_code: ISO 3166-1 alpha-2 country code (any case)
        address: Street address
        country_name: Country display name
        is_headquarters: Optional; derived from the code when omitted
        swift_code_base: Optional; derived from the code when omitted
    """

    swift_code: str = Field(
        max_length=64,
        description="BIC/SWIFT code (8 or 11 alphanumeric characters)",
        examples=["ABCDUS33XXX"],
    )
    bank_name: str = Field(
        max_length=256,
        description="Bank display name",
        examples=["Chase Bank"],
    )
    country_iso_code: str = Field(
        max_length=16,
        description="ISO 3166-1 alpha-2 country code",
        examples=["US"],
    )
    address: str = Field(default="", max_length=512, examples=["123 Main St"])
    country_name: str = Field(default="", max_length=256, examples=["United States"])
    is_headquarters: bool | None = Field(
        default=None,
        description="Must match the code's XXX suffix when given",
    )
    swift_code_base: str | None = Field(
        default=None,
        max_length=64,
        description="Must equal the first 8 characters of swift_code when given",
    )


class SwiftBankResponse(BaseModel):
    """
    Schema for a SWIFT bank in responses.

    Attributes:
        swift_code: Uppercase BIC
        swift_code_base: First 8 characters of swift_code
        country_iso_code: Uppercase ISO2 country code
        bank_name: Display name
        is_headquarters: True iff the code ends with XXX
        address: Street address
        country_name: Country display name
    """

    model_config = ConfigDict(frozen=True)

    swift_code: str
    swift_code_base: str
    country_iso_code: str
    bank_name: str
    is_headquarters: bool
    address: str
    country_name: str

    @classmethod
    def from_entity(cls, entity: SwiftBankEntity) -> "SwiftBankResponse":
        return cls(**entity.to_dict())


class SwiftBankDetailResponse(BaseModel):
    """
    A SWIFT bank with its branches.

    branches is a list (possibly empty) for a headquarters and None for a
    branch.
    """

    bank: SwiftBankResponse
    branches: list[SwiftBankResponse] | None = None

    @classmethod
    def from_detail(cls, detail: SwiftBankDetail) -> "SwiftBankDetailResponse":
        branches = None
        if detail.bank.is_headquarters:
            branches = [SwiftBankResponse.from_entity(b) for b in detail.branches]
        return cls(bank=SwiftBankResponse.from_entity(detail.bank), branches=branches)


class CountrySwiftCodesResponse(BaseModel):
    """All SWIFT banks of one country."""

    country_iso2: str
    country_name: str
    swift_codes: list[SwiftBankResponse]

    @classmethod
    def from_country(cls, country: CountrySwiftCodes) -> "CountrySwiftCodesResponse":
        return cls(
            country_iso2=country.country_iso2,
            country_name=country.country_name,
            swift_codes=[SwiftBankResponse.from_entity(e) for e in country.swift_codes],
        )


class BatchLoadResult(BaseModel):
    """
    Outcome of a batch load.

    Attributes:
        requested: Entities passed in
        inserted: New rows written
        skipped: Entities whose code was already stored
        skipped_codes: Those codes, in input order
    """

    requested: int
    inserted: int
    skipped: int
    skipped_codes: list[str] = Field(default_factory=list)

    @classmethod
    def from_insert_result(cls, result: BatchInsertResult) -> "BatchLoadResult":
        return cls(
            requested=result.requested,
            inserted=len(result.inserted),
            skipped=len(result.skipped),
            skipped_codes=list(result.skipped),
        )


class MessageResponse(BaseModel):
    message: str
