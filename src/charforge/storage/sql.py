"""SQLAlchemy-backed character store."""

import asyncio

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from charforge.database.engine import get_session
from charforge.database.models import CharacterRecord
from charforge.errors import DuplicateCharacterError

from .base import CharacterDocument, DocumentChange, merge_document

logger = structlog.get_logger(__name__)


class SqlCharacterStore:
    """
    Character store over the ``characters`` table.

    Each operation runs in its own session. Writes hold a per-store lock for
    the whole session: a modify reads, merges and commits before any other
    write from this store starts.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        # None uses the global engine from settings
        self._session_factory = session_factory
        self._write_lock = asyncio.Lock()

    async def create(self, document: CharacterDocument) -> CharacterDocument:
        character_id = document["id"]
        async with self._write_lock, get_session(self._session_factory) as session:
            if await session.get(CharacterRecord, character_id) is not None:
                raise DuplicateCharacterError(character_id)
            session.add(
                CharacterRecord(
                    id=character_id,
                    name=document["name"],
                    level=document["level"],
                    document=dict(document),
                )
            )
        logger.debug("sql_store_created", character_id=character_id)
        return document

    async def get(self, character_id: str) -> CharacterDocument | None:
        async with get_session(self._session_factory) as session:
            record = await session.get(CharacterRecord, character_id)
            return dict(record.document) if record is not None else None

    async def list_all(self) -> list[CharacterDocument]:
        async with get_session(self._session_factory) as session:
            result = await session.execute(
                select(CharacterRecord).order_by(CharacterRecord.created_at, CharacterRecord.name)
            )
            return [dict(record.document) for record in result.scalars()]

    async def modify(
        self, character_id: str, change: DocumentChange
    ) -> CharacterDocument | None:
        async with self._write_lock, get_session(self._session_factory) as session:
            record = await session.get(CharacterRecord, character_id)
            if record is None:
                return None

            merged = merge_document(record.document, change(dict(record.document)))
            # Reassign so SQLAlchemy tracks the JSON change
            record.document = merged
            record.name = merged["name"]
            record.level = merged["level"]
        logger.debug("sql_store_modified", character_id=character_id)
        return dict(merged)

    async def update(
        self, character_id: str, updates: CharacterDocument
    ) -> CharacterDocument | None:
        return await self.modify(character_id, lambda _existing: updates)

    async def delete(self, character_id: str) -> bool:
        async with self._write_lock, get_session(self._session_factory) as session:
            record = await session.get(CharacterRecord, character_id)
            if record is None:
                return False
            await session.delete(record)
            return True
