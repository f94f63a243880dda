"""
Business logic services.

This package contains service classes that implement business logic
and orchestrate repository operations.
"""

from services.swift_service import SwiftService

__all__ = ["SwiftService"]
