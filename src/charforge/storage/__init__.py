"""Character persistence."""

from .base import CharacterDocument, CharacterStore, DocumentChange, merge_document
from .memory import MemoryCharacterStore
from .sql import SqlCharacterStore

__all__ = [
    "CharacterDocument",
    "CharacterStore",
    "DocumentChange",
    "MemoryCharacterStore",
    "SqlCharacterStore",
    "merge_document",
]
