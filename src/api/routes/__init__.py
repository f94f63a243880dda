"""
API routes for the SWIFT codes service.

This package contains all API endpoint definitions organized by feature.
"""

from api.routes import health, swift_codes

__all__ = ["health", "swift_codes"]
