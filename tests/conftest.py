"""Shared fixtures for all tests."""

import copy
import os
from collections.abc import Callable
from typing import Any

import pytest
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from charforge.character.models import Character
from charforge.database.models import Base
from charforge.services import CharacterService
from charforge.storage import MemoryCharacterStore, SqlCharacterStore


# Set the test database URL before anything caches settings or the engine
@pytest.fixture(scope="session", autouse=True)
def use_test_database(tmp_path_factory):
    """Force all tests to use a temporary database instead of ./data."""
    test_db_path = tmp_path_factory.mktemp("charforge_test") / "test_charforge.db"
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

    import charforge.database.engine as engine_module

    engine_module._engine = None
    engine_module._async_session_factory = None

    from charforge.config import get_settings

    get_settings.cache_clear()

    yield

    engine_module._engine = None
    engine_module._async_session_factory = None
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration bound to a test's captured stderr."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def character_payload() -> dict[str, Any]:
    """A level 1 half-elf wizard in document (camelCase) form."""
    return {
        "name": "Mira",
        "race": {
            "name": "Half-Elf",
            "index": "half-elf",
            "abilityBonuses": [{"abilityScore": "charisma", "bonus": 2}],
            "size": "Medium",
            "speed": 30,
        },
        "class": {
            "name": "Wizard",
            "index": "wizard",
            "hitDie": 6,
            "savingThrows": ["intelligence", "wisdom"],
        },
        "level": 1,
        "abilityScores": {
            "strength": 8,  # -1 mod
            "dexterity": 14,  # +2 mod
            "constitution": 12,  # +1 mod
            "intelligence": 16,  # +3 mod
            "wisdom": 10,  # 0 mod
            "charisma": 15,  # 17 with racial bonus, +3 mod
        },
    }


@pytest.fixture
def make_character(character_payload) -> Callable[..., Character]:
    """Factory building a Character from the payload with top-level overrides."""

    def _make(**overrides: Any) -> Character:
        payload = copy.deepcopy(character_payload)
        payload.update(overrides)
        return Character.model_validate(payload)

    return _make


@pytest.fixture
def memory_store() -> MemoryCharacterStore:
    return MemoryCharacterStore()


@pytest.fixture
def service(memory_store) -> CharacterService:
    return CharacterService(memory_store)


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory over a fresh file-backed SQLite database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'store.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def sql_service(session_factory) -> CharacterService:
    return CharacterService(SqlCharacterStore(session_factory))
