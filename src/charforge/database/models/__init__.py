"""SQLAlchemy models for charforge."""

from charforge.database.models.character import Base, CharacterRecord

__all__ = [
    "Base",
    "CharacterRecord",
]
