"""
Character data models for charforge.

Every model reads and writes the camelCase document shape used by stored
characters (``abilityScores``, ``calculatedStats``...) while exposing
snake_case attributes in Python.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from charforge.character.abilities import ABILITY_NAMES


class DocumentModel(BaseModel):
    """Base model for the camelCase character document format."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict using the document field names."""
        return self.model_dump(mode="json", by_alias=True)


class AbilityScores(DocumentModel):
    """Six ability scores. Used for both base and final (racially adjusted) scores."""

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    @field_validator(*ABILITY_NAMES, mode="before")
    @classmethod
    def _default_missing(cls, value: Any) -> Any:
        # Explicit nulls count as omitted
        return 10 if value is None else value

    def get(self, ability: str) -> int:
        """Get a score by ability name."""
        return getattr(self, ability)


class AbilityModifiers(DocumentModel):
    """Modifiers derived from final ability scores."""

    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int

    def get(self, ability: str) -> int:
        """Get a modifier by ability name."""
        return getattr(self, ability)


class AbilityBonus(DocumentModel):
    """A racial bonus to one ability score."""

    ability_score: str
    bonus: int


class RaceTrait(DocumentModel):
    name: str
    description: str = ""


class Race(DocumentModel):
    """
    Race reference data.

    Attributes:
        name: Display name (e.g., "Half-Elf")
        index: Reference slug (e.g., "half-elf")
        ability_bonuses: Ordered bonus list; an ability may repeat in malformed data
        size: Size category
        speed: Base walking speed, None when the reference data omits it
    """

    name: str
    index: str = ""
    ability_bonuses: list[AbilityBonus] = Field(default_factory=list)
    size: str = "Medium"
    speed: int | None = None
    traits: list[RaceTrait] = Field(default_factory=list)


class CharacterClass(DocumentModel):
    """
    Class reference data.

    Attributes:
        name: Display name (e.g., "Wizard")
        index: Reference slug (e.g., "wizard")
        hit_die: Hit die size, None when the reference data omits it
        proficiencies: Armor/weapon/tool proficiency names
        saving_throws: Ability names granting saving-throw proficiency
    """

    name: str
    index: str = ""
    hit_die: int | None = None
    proficiencies: list[str] = Field(default_factory=list)
    saving_throws: list[str] = Field(default_factory=list)


class Background(DocumentModel):
    name: str
    feature: dict[str, Any] = Field(default_factory=dict)
    proficiencies: list[str] = Field(default_factory=list)


class Skill(DocumentModel):
    """A skill entry; ``ability_score`` and ``value`` are filled in by recompute."""

    name: str
    ability_score: str | None = None
    proficient: bool = False
    expertise: bool = False
    value: int = 0


class SavingThrow(DocumentModel):
    value: int
    proficient: bool


class SavingThrows(DocumentModel):
    strength: SavingThrow
    dexterity: SavingThrow
    constitution: SavingThrow
    intelligence: SavingThrow
    wisdom: SavingThrow
    charisma: SavingThrow

    def get(self, ability: str) -> SavingThrow:
        return getattr(self, ability)


class Equipment(DocumentModel):
    """
    An inventory item.

    ``type`` is a free-form category string; any equipped item whose type
    contains "armor" counts as worn armor when it carries an ``ac`` value.
    """

    name: str
    index: str = ""
    quantity: int = 1
    equipped: bool = False
    type: str | None = None
    description: str | None = None
    ac: int | None = None


class SpellSlot(DocumentModel):
    level: int
    total: int
    used: int = 0


class Spell(DocumentModel):
    name: str
    index: str = ""
    level: int = 0
    prepared: bool = False


class Spellcasting(DocumentModel):
    """Spellcasting block. Slots and known spells are never computed, only preserved."""

    spellcasting_ability: str | None = None
    spell_save_dc: int | None = Field(default=None, alias="spellSaveDC")
    spell_attack_bonus: int | None = None
    spell_slots: list[SpellSlot] = Field(default_factory=list)
    spells_known: list[Spell] = Field(default_factory=list)

    @field_validator("spellcasting_ability", mode="before")
    @classmethod
    def _normalize_ability(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized not in ABILITY_NAMES:
                raise ValueError(f"Unknown spellcasting ability: {value}")
            return normalized
        return value


class Feature(DocumentModel):
    name: str
    source: str = ""
    description: str = ""


class HitDice(DocumentModel):
    total: int
    current: int
    type: str


class CalculatedStats(DocumentModel):
    """Aggregate of every derived value. Only HP fields survive a recompute."""

    proficiency_bonus: int
    final_ability_scores: AbilityScores
    ability_modifiers: AbilityModifiers
    saving_throws: SavingThrows
    initiative: int
    armor_class: int
    speed: int
    max_hit_points: int
    current_hit_points: int
    temporary_hit_points: int | None = None


class Character(DocumentModel):
    """
    Aggregate root for a player character.

    ``id`` and ``created_at`` are assigned once by the service layer and never
    change afterwards.
    """

    id: str | None = None
    name: str
    race: Race
    character_class: CharacterClass = Field(alias="class")
    level: int = Field(ge=1, le=20)
    ability_scores: AbilityScores
    background: Background | None = None
    skills: list[Skill] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=list)
    spellcasting: Spellcasting | None = None
    features: list[Feature] = Field(default_factory=list)
    hit_dice: HitDice | None = None
    backstory: str = ""
    notes: str = ""
    calculated_stats: CalculatedStats | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __repr__(self) -> str:
        return (
            f"<Character(id={self.id}, name='{self.name}', "
            f"class={self.character_class.name}, level={self.level})>"
        )
