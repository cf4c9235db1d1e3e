"""
SQLAlchemy ORM models for persistent storage.

Deck state is stored as the compact text encoding, one row per storage key.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SavedDeckDB(Base):
    """
    Encoded deck state (contents plus undo/redo history) under a storage key.

    The encoding names cards by password, so stored decks survive catalog rebuilds.
    """

    __tablename__ = "saved_decks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    storage_key: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    encoded: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SavedDeckDB(storage_key={self.storage_key})>"
