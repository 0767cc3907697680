"""Character service: create, read, update and delete characters.

Owns the rules for when derived stats are recomputed. Creation always
recomputes; an update recomputes only when it touches a field that feeds
the calculator. Free-text, HP and spell-slot updates write straight through.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from charforge.character.calculator import DEFAULT_HIT_DIE, recompute
from charforge.character.models import Character, SpellSlot
from charforge.errors import (
    CharacterNotFoundError,
    CharacterValidationError,
    NotASpellcasterError,
)
from charforge.storage.base import CharacterDocument, CharacterStore

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("name", "race", "class", "level", "abilityScores")

# Document fields whose change invalidates calculated stats
RECOMPUTE_TRIGGER_FIELDS = frozenset({"level", "abilityScores", "race", "class", "equipment"})


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def find_missing_fields(data: dict[str, Any]) -> list[str]:
    """List required creation fields that are absent or empty."""
    return [field for field in REQUIRED_FIELDS if not data.get(field)]


def needs_recompute(updates: dict[str, Any]) -> bool:
    """Check whether an update touches any field the calculator depends on."""
    return not RECOMPUTE_TRIGGER_FIELDS.isdisjoint(updates)


def _validate(document: CharacterDocument) -> Character:
    try:
        return Character.model_validate(document)
    except ValidationError as e:
        raise CharacterValidationError(f"Invalid character data: {e}") from e


class CharacterService:
    """
    Character CRUD over a CharacterStore.

    Attributes:
        store: Persistence backend holding character documents
    """

    def __init__(self, store: CharacterStore) -> None:
        self.store = store

    async def create_character(self, data: dict[str, Any]) -> Character:
        """
        Create a character from a camelCase payload and compute its stats.

        Args:
            data: Character payload; name, race, class, level and abilityScores
                are required

        Returns:
            The stored character with id, timestamps and calculated stats

        Raises:
            CharacterValidationError: If required fields are missing or invalid
        """
        missing = find_missing_fields(data)
        if missing:
            logger.warning("character_create_rejected", missing_fields=missing)
            raise CharacterValidationError(
                f"Missing required fields: {', '.join(missing)}", missing_fields=missing
            )

        now = _utc_now()
        level = data["level"]
        class_data = data["class"] if isinstance(data["class"], dict) else {}
        hit_die = class_data.get("hitDie") or DEFAULT_HIT_DIE

        document: CharacterDocument = {
            "id": str(uuid.uuid4()),
            "name": data["name"],
            "race": data["race"],
            "class": data["class"],
            "level": level,
            "abilityScores": data["abilityScores"],
            "background": data.get("background"),
            "skills": data.get("skills") or [],
            "equipment": data.get("equipment") or [],
            "spellcasting": data.get("spellcasting"),
            "features": data.get("features") or [],
            "hitDice": data.get("hitDice")
            or {"total": level, "current": level, "type": f"d{hit_die}"},
            "backstory": data.get("backstory") or "",
            "notes": data.get("notes") or "",
            "createdAt": now,
            "updatedAt": now,
        }

        character = recompute(_validate(document))
        saved = await self.store.create(character.to_document())

        logger.info(
            "character_created",
            character_id=character.id,
            name=character.name,
            level=character.level,
        )
        return Character.model_validate(saved)

    async def get_character(self, character_id: str) -> Character:
        """
        Get a character by id.

        Raises:
            CharacterNotFoundError: If no character has this id
        """
        document = await self.store.get(character_id)
        if document is None:
            raise CharacterNotFoundError(character_id)
        return Character.model_validate(document)

    async def list_characters(self) -> list[Character]:
        return [Character.model_validate(document) for document in await self.store.list_all()]

    async def update_character(self, character_id: str, updates: dict[str, Any]) -> Character:
        """
        Apply a partial camelCase update to a character.

        ``id`` and ``createdAt`` in the update are ignored. Stats are
        recomputed when the update touches level, ability scores, race,
        class or equipment. The merge and recompute run against the stored
        document inside the store's write, so concurrent updates do not
        overwrite each other.

        Args:
            character_id: Character to update
            updates: Top-level fields to replace

        Returns:
            The updated character

        Raises:
            CharacterNotFoundError: If no character has this id
            CharacterValidationError: If the merged character is invalid
        """
        recomputed = needs_recompute(updates)

        def apply_updates(existing: CharacterDocument) -> CharacterDocument:
            merged: CharacterDocument = {
                **existing,
                **updates,
                "id": character_id,
                "createdAt": existing.get("createdAt"),
            }
            character = _validate(merged)
            if recomputed:
                character = recompute(character)
            return character.to_document()

        saved = await self.store.modify(character_id, apply_updates)
        if saved is None:
            raise CharacterNotFoundError(character_id)

        logger.info(
            "character_updated",
            character_id=character_id,
            fields=sorted(updates),
            recomputed=recomputed,
        )
        return Character.model_validate(saved)

    async def delete_character(self, character_id: str) -> None:
        """
        Delete a character.

        Raises:
            CharacterNotFoundError: If no character has this id
        """
        if not await self.store.delete(character_id):
            raise CharacterNotFoundError(character_id)
        logger.info("character_deleted", character_id=character_id)

    async def update_hit_points(
        self,
        character_id: str,
        current_hit_points: int | None = None,
        temporary_hit_points: int | None = None,
    ) -> Character:
        """
        Set current and/or temporary hit points without recomputing stats.

        Arguments left as None keep their stored value.

        Raises:
            CharacterNotFoundError: If no character has this id
        """
        changes: dict[str, int] = {}
        if current_hit_points is not None:
            changes["current_hit_points"] = current_hit_points
        if temporary_hit_points is not None:
            changes["temporary_hit_points"] = temporary_hit_points

        def apply_hit_points(existing: CharacterDocument) -> CharacterDocument:
            stats = _validate(existing).calculated_stats
            if stats is None:
                # Never recomputed; nothing to track HP against
                raise CharacterValidationError(
                    f'Character with ID "{character_id}" has no calculated stats'
                )
            return {"calculatedStats": stats.model_copy(update=changes).to_document()}

        saved = await self.store.modify(character_id, apply_hit_points)
        if saved is None:
            raise CharacterNotFoundError(character_id)

        logger.info("hit_points_updated", character_id=character_id, **changes)
        return Character.model_validate(saved)

    async def update_spell_slots(
        self, character_id: str, spell_slots: list[dict[str, Any]]
    ) -> Character:
        """
        Replace a spellcaster's spell slots without recomputing stats.

        Raises:
            CharacterNotFoundError: If no character has this id
            NotASpellcasterError: If the character has no spellcasting block
            CharacterValidationError: If a slot entry is malformed
        """

        def apply_spell_slots(existing: CharacterDocument) -> CharacterDocument:
            spellcasting = _validate(existing).spellcasting
            if spellcasting is None:
                raise NotASpellcasterError(character_id)
            try:
                slots = [SpellSlot.model_validate(slot) for slot in spell_slots]
            except ValidationError as e:
                raise CharacterValidationError(f"Invalid spell slots: {e}") from e
            updated = spellcasting.model_copy(update={"spell_slots": slots})
            return {"spellcasting": updated.to_document()}

        saved = await self.store.modify(character_id, apply_spell_slots)
        if saved is None:
            raise CharacterNotFoundError(character_id)

        logger.info(
            "spell_slots_updated", character_id=character_id, total_levels=len(spell_slots)
        )
        return Character.model_validate(saved)
