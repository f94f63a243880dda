"""
Core module for the SWIFT codes service.

Exports the main configuration; database, logging and error handling live
in their own submodules.
"""

from core.config import settings

__all__ = [
    # Config
    "settings",
]
