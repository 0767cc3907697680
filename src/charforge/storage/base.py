"""Character store interface and the shared merge rule."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Protocol

CharacterDocument = dict[str, Any]

# Builds the fields to write from the stored document
DocumentChange = Callable[[CharacterDocument], CharacterDocument]

# Fields a store update can never overwrite
IMMUTABLE_FIELDS = ("id", "createdAt")


class CharacterStore(Protocol):
    """Key-value store of character documents keyed by character id.

    Documents use the camelCase field names of ``Character.to_document()``.
    ``create`` raises ``DuplicateCharacterError`` when the id is taken.

    ``modify`` reads the stored document, passes a copy to ``change`` and
    merges the returned fields back, all while holding the store's write
    lock, so no other write to the store lands between the read and the
    write. An exception from ``change`` leaves the record untouched.
    """

    async def create(self, document: CharacterDocument) -> CharacterDocument: ...

    async def get(self, character_id: str) -> CharacterDocument | None: ...

    async def list_all(self) -> list[CharacterDocument]: ...

    async def modify(
        self, character_id: str, change: DocumentChange
    ) -> CharacterDocument | None: ...

    async def update(
        self, character_id: str, updates: CharacterDocument
    ) -> CharacterDocument | None: ...

    async def delete(self, character_id: str) -> bool: ...


def merge_document(existing: CharacterDocument, updates: CharacterDocument) -> CharacterDocument:
    """
    Shallow-merge updates into an existing document.

    Top-level keys in ``updates`` replace existing ones, except ``id`` and
    ``createdAt`` which always keep their stored values. ``updatedAt`` is
    refreshed.

    Args:
        existing: The stored document
        updates: Fields to overwrite

    Returns:
        A new merged document
    """
    merged = {**existing, **updates}
    for field in IMMUTABLE_FIELDS:
        if field in existing:
            merged[field] = existing[field]
    merged["updatedAt"] = datetime.now(timezone.utc).isoformat()
    return merged
