"""Tests for the skill table and skill value calculation."""

import pytest

from charforge.character.abilities import AbilityName
from charforge.character.models import AbilityModifiers, Skill
from charforge.character.skills import SKILL_ABILITIES, SKILL_NAMES, calculate_skills


@pytest.fixture
def modifiers() -> AbilityModifiers:
    return AbilityModifiers(
        strength=-1,
        dexterity=1,
        constitution=0,
        intelligence=3,
        wisdom=2,
        charisma=-2,
    )


class TestSkillTable:
    """Tests for the fixed skill-to-ability table."""

    def test_eighteen_skills(self):
        assert len(SKILL_ABILITIES) == 18

    def test_table_order(self):
        assert SKILL_NAMES == (
            "acrobatics",
            "animal handling",
            "arcana",
            "athletics",
            "deception",
            "history",
            "insight",
            "intimidation",
            "investigation",
            "medicine",
            "nature",
            "perception",
            "performance",
            "persuasion",
            "religion",
            "sleight of hand",
            "stealth",
            "survival",
        )

    def test_governing_abilities(self):
        assert SKILL_ABILITIES["stealth"] == AbilityName.DEXTERITY
        assert SKILL_ABILITIES["athletics"] == AbilityName.STRENGTH
        assert SKILL_ABILITIES["animal handling"] == AbilityName.WISDOM
        assert SKILL_ABILITIES["persuasion"] == AbilityName.CHARISMA
        assert SKILL_ABILITIES["religion"] == AbilityName.INTELLIGENCE
        assert not any(ability == AbilityName.CONSTITUTION for ability in SKILL_ABILITIES.values())

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SKILL_ABILITIES["stealth"] = AbilityName.WISDOM  # type: ignore[index]


class TestCalculateSkills:
    """Tests for skill values from modifiers and proficiency."""

    def test_undeclared_skills_use_modifier(self, modifiers):
        skills = calculate_skills([], modifiers, 2)
        assert [skill.name for skill in skills] == list(SKILL_NAMES)
        by_name = {skill.name: skill for skill in skills}
        assert by_name["arcana"].value == 3
        assert by_name["athletics"].value == -1
        assert by_name["deception"].value == -2
        assert all(not skill.proficient and not skill.expertise for skill in skills)

    def test_proficient_skill(self, modifiers):
        skills = calculate_skills([Skill(name="arcana", proficient=True)], modifiers, 2)
        arcana = next(skill for skill in skills if skill.name == "arcana")
        assert arcana.proficient is True
        assert arcana.value == 5  # 3 + 2

    def test_expertise_adds_bonus_twice(self, modifiers):
        """Modifier +1 with proficiency bonus 3 and expertise gives 1 + 3 + 3."""
        skills = calculate_skills(
            [Skill(name="stealth", proficient=True, expertise=True)], modifiers, 3
        )
        stealth = next(skill for skill in skills if skill.name == "stealth")
        assert stealth.value == 7
        assert stealth.ability_score == "dexterity"

    def test_declared_name_case_insensitive(self, modifiers):
        skills = calculate_skills(
            [Skill(name="Sleight of Hand", proficient=True)], modifiers, 2
        )
        sleight = next(skill for skill in skills if skill.name == "sleight of hand")
        assert sleight.proficient is True
        assert sleight.value == 3  # 1 + 2

    def test_unknown_declared_skill_dropped(self, modifiers):
        """Skills outside the table are not carried into the output."""
        skills = calculate_skills([Skill(name="juggling", proficient=True)], modifiers, 2)
        assert len(skills) == 18
        assert "juggling" not in {skill.name for skill in skills}

    def test_stale_value_overwritten(self, modifiers):
        """A declared skill's old value is replaced by the computed one."""
        skills = calculate_skills([Skill(name="insight", value=99)], modifiers, 2)
        insight = next(skill for skill in skills if skill.name == "insight")
        assert insight.value == 2
