"""
Domain layer for the SWIFT codes service.

Pure value objects and entities with no persistence or transport concerns.
"""

from domain.exceptions import DomainException, FieldValidationError
from domain.swift_bank import SwiftBankEntity
from domain.swift_code import SwiftCode, SwiftCodeEntity

__all__ = [
    "DomainException",
    "FieldValidationError",
    "SwiftBankEntity",
    "SwiftCode",
    "SwiftCodeEntity",
]
