"""Ability scores, modifiers, proficiency tiers and racial bonuses.

This module holds the fixed ability vocabulary plus the small pure functions
every other derived stat is built from.
"""

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from charforge.character.models import Race


class AbilityName(StrEnum):
    """The six core abilities."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


# Constant ability names in canonical order for easy import
ABILITY_NAMES = tuple(ability.value for ability in AbilityName)

# (minimum level, bonus), highest tier first
PROFICIENCY_TIERS: tuple[tuple[int, int], ...] = (
    (17, 6),
    (13, 5),
    (9, 4),
    (5, 3),
)
BASE_PROFICIENCY_BONUS = 2


def get_modifier(score: int) -> int:
    """Calculate the ability modifier for a score.

    Args:
        score: The ability score (typically 1-30)

    Returns:
        The modifier: (score - 10) // 2, rounded toward negative infinity

    Examples:
        >>> get_modifier(10)
        0
        >>> get_modifier(17)
        3
        >>> get_modifier(9)
        -1
    """
    return (score - 10) // 2


def get_proficiency_bonus(level: int) -> int:
    """Get the proficiency bonus for a character level.

    Tier lower bounds are inclusive: levels 1-4 give +2, 5-8 +3, 9-12 +4,
    13-16 +5 and 17+ +6.

    Args:
        level: Character level (1-20)

    Returns:
        The proficiency bonus
    """
    for min_level, bonus in PROFICIENCY_TIERS:
        if level >= min_level:
            return bonus
    return BASE_PROFICIENCY_BONUS


def build_racial_bonus_map(race: "Race | None") -> dict[str, int]:
    """Index a race's ability bonus list by lowercase ability name.

    When reference data lists the same ability twice, the first entry wins
    and later duplicates are ignored.

    Args:
        race: The race, or None when the character has none

    Returns:
        Dictionary mapping lowercase ability names to bonus values
    """
    if race is None:
        return {}

    bonuses: dict[str, int] = {}
    for entry in race.ability_bonuses:
        key = entry.ability_score.lower()
        if key not in bonuses:
            bonuses[key] = entry.bonus
    return bonuses


def get_racial_bonus(race: "Race | None", ability: str) -> int:
    """Get the racial bonus a race grants to one ability (0 if none)."""
    return build_racial_bonus_map(race).get(ability.lower(), 0)
