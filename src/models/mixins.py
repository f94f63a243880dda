"""Column mixins shared by models."""

from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column


class TimestampMixin:
    """
    created_at filled in by the database.

    A server default keeps multi-row INSERTs free of per-row callbacks.
    SWIFT rows are inserted or deleted, never updated, so there is no
    updated_at.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
