"""Tests for ability modifiers, proficiency tiers and racial bonuses."""

from charforge.character.abilities import (
    ABILITY_NAMES,
    build_racial_bonus_map,
    get_modifier,
    get_proficiency_bonus,
    get_racial_bonus,
)
from charforge.character.models import AbilityBonus, Race


class TestAbilityModifiers:
    """Tests for ability modifier calculations."""

    def test_modifier_reference_points(self):
        """Modifiers at the reference scores, including the odd-below-10 floor case."""
        expected = {1: -5, 8: -1, 9: -1, 10: 0, 11: 0, 20: 5, 30: 10}
        for score, modifier in expected.items():
            assert get_modifier(score) == modifier

    def test_modifier_rounds_toward_negative_infinity(self):
        """A score of 9 gives -1, not 0."""
        assert get_modifier(9) == -1
        assert get_modifier(7) == -2
        assert get_modifier(3) == -4

    def test_modifier_formula(self):
        """Verify modifier follows (score - 10) // 2 for the full range."""
        for score in range(1, 31):
            assert get_modifier(score) == (score - 10) // 2

    def test_ability_names_order(self):
        assert ABILITY_NAMES == (
            "strength",
            "dexterity",
            "constitution",
            "intelligence",
            "wisdom",
            "charisma",
        )


class TestProficiencyBonus:
    """Tests for level-tiered proficiency bonus."""

    def test_tier_boundaries(self):
        """Each tier starts at its listed level, inclusive."""
        assert get_proficiency_bonus(1) == 2
        assert get_proficiency_bonus(4) == 2
        assert get_proficiency_bonus(5) == 3
        assert get_proficiency_bonus(8) == 3
        assert get_proficiency_bonus(9) == 4
        assert get_proficiency_bonus(12) == 4
        assert get_proficiency_bonus(13) == 5
        assert get_proficiency_bonus(16) == 5
        assert get_proficiency_bonus(17) == 6
        assert get_proficiency_bonus(20) == 6

    def test_non_decreasing_over_levels(self):
        """Bonus never drops as level rises and only takes the five tier values."""
        bonuses = [get_proficiency_bonus(level) for level in range(1, 21)]
        assert bonuses == sorted(bonuses)
        assert set(bonuses) == {2, 3, 4, 5, 6}


class TestRacialBonuses:
    """Tests for racial ability bonus lookup."""

    def test_no_race(self):
        assert build_racial_bonus_map(None) == {}
        assert get_racial_bonus(None, "strength") == 0

    def test_listed_bonus(self):
        race = Race(
            name="Half-Orc",
            ability_bonuses=[
                AbilityBonus(ability_score="strength", bonus=2),
                AbilityBonus(ability_score="constitution", bonus=1),
            ],
        )
        assert get_racial_bonus(race, "strength") == 2
        assert get_racial_bonus(race, "constitution") == 1
        assert get_racial_bonus(race, "wisdom") == 0

    def test_case_insensitive_match(self):
        """Reference data may capitalize ability names."""
        race = Race(name="Elf", ability_bonuses=[AbilityBonus(ability_score="Dexterity", bonus=2)])
        assert get_racial_bonus(race, "dexterity") == 2
        assert get_racial_bonus(race, "DEXTERITY") == 2

    def test_duplicate_entries_first_wins(self):
        """When an ability is listed twice the first entry is used."""
        race = Race(
            name="Odd",
            ability_bonuses=[
                AbilityBonus(ability_score="charisma", bonus=2),
                AbilityBonus(ability_score="Charisma", bonus=1),
            ],
        )
        assert build_racial_bonus_map(race) == {"charisma": 2}
        assert get_racial_bonus(race, "charisma") == 2
