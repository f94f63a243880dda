"""
SWIFT code API routes.

This module provides:
- GET /v1/swift-codes/{swift_code} - Get a code, with branches for a headquarters
- GET /v1/swift-codes/country/{country_iso2} - List every code of a country
- POST /v1/swift-codes - Create a code
- DELETE /v1/swift-codes/{swift_code} - Delete a code
"""

import logging

from fastapi import APIRouter, status

from api.dependencies import SwiftServiceDep
from schemas.swift_bank import (
    CountrySwiftCodesResponse,
    MessageResponse,
    SwiftBankCreate,
    SwiftBankDetailResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/swift-codes", tags=["SWIFT Codes"])


@router.get(
    "/country/{country_iso2}",
    response_model=CountrySwiftCodesResponse,
    summary="List SWIFT codes by country",
    description="Get every SWIFT code registered in a country",
)
async def get_swift_codes_by_country(
    country_iso2: str,
    service: SwiftServiceDep,
) -> CountrySwiftCodesResponse:
    """
    List SWIFT codes of a country.

    Path parameters:
        - country_iso2: ISO 3166-1 alpha-2 code (case-insensitive)

    Raises:
        - 400 Bad Request: If the country code is malformed
        - 404 Not Found: If the country has no SWIFT codes
    """
    return await service.get_swift_codes_by_country(country_iso2)


@router.get(
    "/{swift_code}",
    response_model=SwiftBankDetailResponse,
    response_model_exclude_none=True,
    summary="Get SWIFT code",
    description="Get a SWIFT code; a headquarters also lists its branches",
)
async def get_swift_code(
    swift_code: str,
    service: SwiftServiceDep,
) -> SwiftBankDetailResponse:
    """
    Get SWIFT code details.

    Path parameters:
        - swift_code: 8 or 11 character BIC (case-insensitive)

    Returns:
        SwiftBankDetailResponse; ``branches`` is present only for a headquarters

    Raises:
        - 400 Bad Request: If the code is malformed
        - 404 Not Found: If the code is not stored
    """
    return await service.get_swift_code_details(swift_code)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create SWIFT code",
    description="Create a new SWIFT code entry",
)
async def create_swift_code(
    data: SwiftBankCreate,
    service: SwiftServiceDep,
) -> MessageResponse:
    """
    Create a SWIFT code.

    Request body:
        - swift_code: BIC (required)
        - bank_name: Bank name (required)
        - country_iso_code: ISO 3166-1 alpha-2 code (required)
        - address: Street address (optional)
        - country_name: Country name (optional)
        - is_headquarters: Must match the XXX suffix (optional)
        - swift_code_base: Must equal the first 8 characters (optional)

    Raises:
        - 400 Bad Request: If a field is malformed or inconsistent
        - 409 Conflict: If the code already exists
    """
    await service.create_swift_code(data)
    return MessageResponse(message="SWIFT code created successfully")


@router.delete(
    "/{swift_code}",
    response_model=MessageResponse,
    summary="Delete SWIFT code",
    description="Delete a SWIFT code entry",
)
async def delete_swift_code(
    swift_code: str,
    service: SwiftServiceDep,
) -> MessageResponse:
    """
    Delete a SWIFT code.

    Raises:
        - 400 Bad Request: If the code is malformed
        - 404 Not Found: If the code is not stored
    """
    await service.delete_swift_code(swift_code)
    return MessageResponse(message="SWIFT code deleted successfully")
