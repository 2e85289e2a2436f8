"""
gratitude.database.models — SQLAlchemy 2.0 Data Models
=======================================================

Tables:
- recognitions   — Append-only ledger, one row per recognition unit
- user_settings  — Per-user preferences (timezone for the daily allowance)

User ids are stored as strings: the engine treats them as opaque platform
identifiers.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Gratitude ORM models."""


# ---------------------------------------------------------------------------
# Recognition — one row per unit given
# ---------------------------------------------------------------------------
class Recognition(Base):
    __tablename__ = "recognitions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    giver_id: Mapped[str] = mapped_column(String(64), nullable=False)
    receiver_id: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    channel_id: Mapped[str] = mapped_column(String(64), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        # Daily allowance lookups: units given by a giver since local midnight
        Index("ix_recognitions_giver_time", "giver_id", "created_at"),
        Index("ix_recognitions_receiver", "receiver_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Recognition id={self.id} giver={self.giver_id} "
            f"receiver={self.receiver_id}>"
        )


# ---------------------------------------------------------------------------
# UserSettings — per-user preferences
# ---------------------------------------------------------------------------
class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserSettings user={self.user_id} tz={self.timezone!r}>"
