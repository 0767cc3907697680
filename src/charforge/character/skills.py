"""Skill table and skill value calculation.

The eighteen skills and their governing abilities are fixed rules data.
"""

from types import MappingProxyType

from charforge.character.abilities import AbilityName
from charforge.character.models import AbilityModifiers, Skill

# Skill name -> governing ability, in canonical sheet order
SKILL_ABILITIES: MappingProxyType[str, AbilityName] = MappingProxyType(
    {
        "acrobatics": AbilityName.DEXTERITY,
        "animal handling": AbilityName.WISDOM,
        "arcana": AbilityName.INTELLIGENCE,
        "athletics": AbilityName.STRENGTH,
        "deception": AbilityName.CHARISMA,
        "history": AbilityName.INTELLIGENCE,
        "insight": AbilityName.WISDOM,
        "intimidation": AbilityName.CHARISMA,
        "investigation": AbilityName.INTELLIGENCE,
        "medicine": AbilityName.WISDOM,
        "nature": AbilityName.INTELLIGENCE,
        "perception": AbilityName.WISDOM,
        "performance": AbilityName.CHARISMA,
        "persuasion": AbilityName.CHARISMA,
        "religion": AbilityName.INTELLIGENCE,
        "sleight of hand": AbilityName.DEXTERITY,
        "stealth": AbilityName.DEXTERITY,
        "survival": AbilityName.WISDOM,
    }
)

SKILL_NAMES = tuple(SKILL_ABILITIES)


def _index_declared(declared: list[Skill]) -> dict[str, Skill]:
    # First declaration of a name wins, matching list scan order
    index: dict[str, Skill] = {}
    for skill in declared:
        index.setdefault(skill.name.lower(), skill)
    return index


def calculate_skills(
    declared: list[Skill],
    modifiers: AbilityModifiers,
    proficiency_bonus: int,
) -> list[Skill]:
    """Calculate every skill value for a character.

    Expertise adds the proficiency bonus a second time on top of proficiency.

    Args:
        declared: Skills the character declared, with proficiency/expertise flags
        modifiers: Ability modifiers from final ability scores
        proficiency_bonus: Proficiency bonus for the character's level

    Returns:
        All eighteen skills in table order, whatever subset was declared
    """
    declared_by_name = _index_declared(declared)
    skills: list[Skill] = []

    for skill_name, ability in SKILL_ABILITIES.items():
        entry = declared_by_name.get(skill_name)
        proficient = entry.proficient if entry is not None else False
        expertise = entry.expertise if entry is not None else False

        value = modifiers.get(ability)
        if proficient:
            value += proficiency_bonus
        if expertise:
            value += proficiency_bonus

        skills.append(
            Skill(
                name=skill_name,
                ability_score=ability.value,
                proficient=proficient,
                expertise=expertise,
                value=value,
            )
        )

    return skills
