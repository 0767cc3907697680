"""Derived-stat calculation for charforge characters.

Everything on a character sheet that is not typed in by the player is
computed here from race, class, level, base ability scores and equipment:

- Final ability scores: base score + racial bonus
- Hit points: full hit die at level 1, average roll per level after that
- Armor class: 10 + DEX modifier, or the literal AC of worn armor
- Saving throws and skills: modifier + proficiency bonus where proficient
- Spellcasting: save DC and attack bonus from the casting ability

All functions are pure. ``recompute`` is the single entry point used by the
service layer.
"""

from datetime import datetime, timezone

import structlog

from charforge.character.abilities import (
    ABILITY_NAMES,
    AbilityName,
    build_racial_bonus_map,
    get_modifier,
    get_proficiency_bonus,
)
from charforge.character.models import (
    AbilityModifiers,
    AbilityScores,
    CalculatedStats,
    Character,
    CharacterClass,
    Equipment,
    Race,
    SavingThrow,
    SavingThrows,
    Spellcasting,
)
from charforge.character.skills import calculate_skills

logger = structlog.get_logger(__name__)

DEFAULT_HIT_DIE = 8
DEFAULT_SPEED = 30
BASE_ARMOR_CLASS = 10
BASE_SPELL_SAVE_DC = 8


def calculate_final_ability_scores(base: AbilityScores, race: Race | None) -> AbilityScores:
    """Apply racial bonuses to base ability scores.

    Args:
        base: Ability scores as entered by the player
        race: The character's race, or None

    Returns:
        Final ability scores (base + racial bonus for each ability)
    """
    bonuses = build_racial_bonus_map(race)
    return AbilityScores(
        **{ability: base.get(ability) + bonuses.get(ability, 0) for ability in ABILITY_NAMES}
    )


def calculate_ability_modifiers(final_scores: AbilityScores) -> AbilityModifiers:
    """Calculate the modifier for each final ability score."""
    return AbilityModifiers(
        **{ability: get_modifier(final_scores.get(ability)) for ability in ABILITY_NAMES}
    )


def calculate_max_hit_points(hit_die: int | None, con_modifier: int, level: int) -> int:
    """Calculate maximum hit points.

    Level 1 gets the full hit die. Each later level adds the fixed average
    roll (half the die, rounded down, plus one) and the CON modifier.

    Args:
        hit_die: Class hit die size (e.g., 10 for d10), None for the default d8
        con_modifier: Modifier of final constitution
        level: Character level

    Returns:
        Maximum HP, never below 1 at level 1 and never below ``level`` after that

    Examples:
        >>> calculate_max_hit_points(8, -2, 1)
        6
        >>> calculate_max_hit_points(10, 2, 5)
        44
    """
    die = hit_die or DEFAULT_HIT_DIE
    first_level_hp = die + con_modifier

    if level <= 1:
        return max(1, first_level_hp)

    average_roll = die // 2 + 1
    additional_hp = (level - 1) * (average_roll + con_modifier)
    return max(level, first_level_hp + additional_hp)


def find_equipped_armor(equipment: list[Equipment]) -> Equipment | None:
    """Get the first equipped item whose type mentions armor, if any."""
    for item in equipment:
        if item.equipped and item.type and "armor" in item.type.lower():
            return item
    return None


def calculate_armor_class(equipment: list[Equipment], dex_modifier: int) -> int:
    """Calculate armor class.

    Worn armor with an ``ac`` value replaces the unarmored formula outright;
    the DEX modifier is not added on top and armor weight is not considered.

    Args:
        equipment: The character's equipment list
        dex_modifier: Modifier of final dexterity

    Returns:
        Armor class
    """
    armor = find_equipped_armor(equipment)
    if armor is not None and armor.ac:
        return armor.ac
    return BASE_ARMOR_CLASS + dex_modifier


def calculate_initiative(modifiers: AbilityModifiers) -> int:
    return modifiers.dexterity


def calculate_saving_throws(
    character_class: CharacterClass | None,
    modifiers: AbilityModifiers,
    proficiency_bonus: int,
) -> SavingThrows:
    """Calculate all six saving throws.

    Class saving-throw names are matched exactly as supplied by reference data.
    """
    proficient_in = set(character_class.saving_throws) if character_class else set()
    throws: dict[str, SavingThrow] = {}

    for ability in ABILITY_NAMES:
        proficient = ability in proficient_in
        value = modifiers.get(ability) + (proficiency_bonus if proficient else 0)
        throws[ability] = SavingThrow(value=value, proficient=proficient)

    return SavingThrows(**throws)


def calculate_spellcasting(
    spellcasting: Spellcasting | None,
    modifiers: AbilityModifiers,
    proficiency_bonus: int,
) -> Spellcasting | None:
    """Calculate spell save DC and spell attack bonus.

    Args:
        spellcasting: Existing spellcasting block, or None for non-casters
        modifiers: Ability modifiers from final ability scores
        proficiency_bonus: Proficiency bonus for the character's level

    Returns:
        The input unchanged when there is no casting ability, otherwise a copy
        with DC and attack bonus recomputed and slots/spells preserved
    """
    if spellcasting is None or not spellcasting.spellcasting_ability:
        return spellcasting

    ability_mod = modifiers.get(AbilityName(spellcasting.spellcasting_ability))
    return spellcasting.model_copy(
        deep=True,
        update={
            "spell_save_dc": BASE_SPELL_SAVE_DC + ability_mod + proficiency_bonus,
            "spell_attack_bonus": ability_mod + proficiency_bonus,
        },
    )


def calculate_speed(race: Race | None) -> int:
    if race is not None and race.speed:
        return race.speed
    return DEFAULT_SPEED


def carry_forward_stats(
    fresh: CalculatedStats, previous: CalculatedStats | None
) -> CalculatedStats:
    """Overlay player-tracked fields from the previous stats onto fresh ones.

    Current and temporary HP are state, not derived values: they are kept as
    they were (including 0). With no previous stats current HP starts at max.

    Args:
        fresh: Newly computed stats, current HP already set to max HP
        previous: Stats from before the recompute, if any

    Returns:
        Stats with preserved mutable fields
    """
    if previous is None:
        return fresh

    return fresh.model_copy(
        update={
            "current_hit_points": previous.current_hit_points,
            "temporary_hit_points": previous.temporary_hit_points,
        }
    )


def recompute(character: Character, now: datetime | None = None) -> Character:
    """Recompute every derived field of a character.

    Args:
        character: Character snapshot with level, race, class and ability scores set
        now: Timestamp to stamp as ``updated_at`` (defaults to the current UTC time)

    Returns:
        A new Character with fresh calculated stats, the full skill table, the
        recomputed spellcasting block and a refreshed ``updated_at``
    """
    final_scores = calculate_final_ability_scores(character.ability_scores, character.race)
    modifiers = calculate_ability_modifiers(final_scores)

    proficiency_bonus = get_proficiency_bonus(character.level)
    max_hp = calculate_max_hit_points(
        character.character_class.hit_die, modifiers.constitution, character.level
    )
    armor_class = calculate_armor_class(character.equipment, modifiers.dexterity)
    initiative = calculate_initiative(modifiers)
    saving_throws = calculate_saving_throws(
        character.character_class, modifiers, proficiency_bonus
    )
    skills = calculate_skills(character.skills, modifiers, proficiency_bonus)
    spellcasting = calculate_spellcasting(character.spellcasting, modifiers, proficiency_bonus)
    speed = calculate_speed(character.race)

    fresh = CalculatedStats(
        proficiency_bonus=proficiency_bonus,
        final_ability_scores=final_scores,
        ability_modifiers=modifiers,
        saving_throws=saving_throws,
        initiative=initiative,
        armor_class=armor_class,
        speed=speed,
        max_hit_points=max_hp,
        current_hit_points=max_hp,
    )
    stats = carry_forward_stats(fresh, character.calculated_stats)

    logger.debug(
        "character_recomputed",
        character_id=character.id,
        level=character.level,
        max_hit_points=max_hp,
        armor_class=armor_class,
    )

    return character.model_copy(
        deep=True,
        update={
            "calculated_stats": stats,
            "skills": skills,
            "spellcasting": spellcasting,
            "updated_at": now or datetime.now(timezone.utc),
        },
    )
