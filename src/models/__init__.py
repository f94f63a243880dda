"""
Database models for the SWIFT codes service.

This module exports all SQLAlchemy models and the declarative base.
Import models from this module to ensure proper initialization.
"""

from models.base import Base
from models.mixins import TimestampMixin
from models.swift_bank import SwiftBank

__all__ = [
    # Base
    "Base",
    # Mixins
    "TimestampMixin",
    # SWIFT models
    "SwiftBank",
]
