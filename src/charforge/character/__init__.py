"""Character models and the derived-stat calculator."""

from .abilities import ABILITY_NAMES, AbilityName, get_modifier, get_proficiency_bonus
from .calculator import recompute
from .models import Character, CharacterClass, Race
from .skills import SKILL_ABILITIES

__all__ = [
    "ABILITY_NAMES",
    "AbilityName",
    "Character",
    "CharacterClass",
    "Race",
    "SKILL_ABILITIES",
    "get_modifier",
    "get_proficiency_bonus",
    "recompute",
]
