"""Fixtures for store tests."""

import pytest

from charforge.storage import MemoryCharacterStore, SqlCharacterStore


@pytest.fixture(params=["memory", "sql"])
async def store(request, session_factory):
    """Each store implementation in turn."""
    if request.param == "memory":
        return MemoryCharacterStore()
    return SqlCharacterStore(session_factory)


@pytest.fixture
def document():
    return {
        "id": "4b3c1a52-0c0e-4b8e-9d41-1d2f2b6d8c11",
        "name": "Bram",
        "level": 3,
        "notes": "",
        "createdAt": "2026-01-01T00:00:00+00:00",
        "updatedAt": "2026-01-01T00:00:00+00:00",
    }
