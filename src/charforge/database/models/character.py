"""Character record model: one row per character, sheet stored as a JSON document."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base holding the charforge table metadata."""


class CharacterRecord(Base):
    """Persisted character sheet.

    ``name`` and ``level`` are copied out of the document so listings can be
    sorted and filtered without decoding JSON. The row timestamps are kept by
    the database; the sheet's own ``createdAt``/``updatedAt`` live in the
    document.
    """

    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Character identifier assigned by the service layer",
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Character name",
    )

    level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
        comment="Character level",
    )

    # Full character document in camelCase form
    # Example: {"id": "...", "name": "Mira", "abilityScores": {...}, "calculatedStats": {...}}
    document: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Complete character sheet document",
    )

    # Row bookkeeping, used to order listings
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<CharacterRecord(id={self.id}, name='{self.name}', level={self.level})>"
