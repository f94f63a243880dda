"""Request-scoped dependencies for the API routes."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from services import SwiftService


def get_swift_service(db: AsyncSession = Depends(get_db)) -> SwiftService:
    """SwiftService bound to the request's session."""
    return SwiftService(db)


SwiftServiceDep = Annotated[SwiftService, Depends(get_swift_service)]
