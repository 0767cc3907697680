"""In-process character store, used for tests and the command line."""

import asyncio
import copy

import structlog

from charforge.errors import DuplicateCharacterError

from .base import CharacterDocument, DocumentChange, merge_document

logger = structlog.get_logger(__name__)


class MemoryCharacterStore:
    """
    Dict-backed character store.

    Documents are deep-copied on the way in and out so callers never share
    state with the store. A single lock serializes writes.
    """

    def __init__(self) -> None:
        self._documents: dict[str, CharacterDocument] = {}
        self._lock = asyncio.Lock()

    async def create(self, document: CharacterDocument) -> CharacterDocument:
        character_id = document["id"]
        async with self._lock:
            if character_id in self._documents:
                raise DuplicateCharacterError(character_id)
            self._documents[character_id] = copy.deepcopy(document)
        logger.debug("memory_store_created", character_id=character_id)
        return copy.deepcopy(document)

    async def get(self, character_id: str) -> CharacterDocument | None:
        document = self._documents.get(character_id)
        return copy.deepcopy(document) if document is not None else None

    async def list_all(self) -> list[CharacterDocument]:
        return [copy.deepcopy(document) for document in self._documents.values()]

    async def modify(
        self, character_id: str, change: DocumentChange
    ) -> CharacterDocument | None:
        async with self._lock:
            existing = self._documents.get(character_id)
            if existing is None:
                return None
            updates = change(copy.deepcopy(existing))
            merged = merge_document(existing, copy.deepcopy(updates))
            self._documents[character_id] = merged
        return copy.deepcopy(merged)

    async def update(
        self, character_id: str, updates: CharacterDocument
    ) -> CharacterDocument | None:
        return await self.modify(character_id, lambda _existing: updates)

    async def delete(self, character_id: str) -> bool:
        async with self._lock:
            return self._documents.pop(character_id, None) is not None
