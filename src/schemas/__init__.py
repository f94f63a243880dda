"""
Pydantic schemas for API request/response validation.

This package provides all Pydantic models used for:
- Request validation
- Response serialization
- API documentation
"""

from schemas.swift_bank import (
    BatchLoadResult,
    CountrySwiftCodesResponse,
    MessageResponse,
    SwiftBankCreate,
    SwiftBankDetailResponse,
    SwiftBankResponse,
)

__all__ = [
    "SwiftBankCreate",
    "SwiftBankResponse",
    "SwiftBankDetailResponse",
    "CountrySwiftCodesResponse",
    "BatchLoadResult",
    "MessageResponse",
]
