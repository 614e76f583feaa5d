"""Tests for experience curve and level-ups."""

from kroniki.core.progression import (
    apply_level_ups,
    calculate_total_experience,
    experience_to_next_level,
)
from kroniki.data.models import Character, Race


def create_character(level: int = 1, experience: int = 0) -> Character:
    return Character(
        id="char_1",
        name="Hero",
        race=Race.HUMAN,
        level=level,
        experience=experience,
        experience_to_next_level=experience_to_next_level(level),
    )


class TestExperienceCurve:
    """Tests for the experience curve."""

    def test_level_one(self):
        assert experience_to_next_level(1) == 100

    def test_curve_grows(self):
        assert experience_to_next_level(2) == 246
        assert experience_to_next_level(10) == 1995
        assert experience_to_next_level(5) > experience_to_next_level(4)

    def test_total_experience(self):
        assert calculate_total_experience(1, 40) == 40
        assert calculate_total_experience(3, 10) == 100 + 246 + 10


class TestLevelUps:
    """Tests for applying level-ups."""

    def test_no_level_up_below_threshold(self):
        character = create_character(experience=99)

        assert apply_level_ups(character) == 0
        assert character.level == 1
        assert character.experience == 99

    def test_exact_threshold_levels_once(self):
        character = create_character(experience=100)

        gained = apply_level_ups(character)

        assert gained == 1
        assert character.level == 2
        assert character.experience == 0
        assert character.experience_to_next_level == 246

    def test_single_level_up_keeps_overflow(self):
        character = create_character(experience=130)

        gained = apply_level_ups(character)

        assert gained == 1
        assert character.level == 2
        assert character.experience == 30
        assert character.experience_to_next_level == 246
        assert character.stat_points == 1

    def test_multiple_level_ups(self):
        character = create_character(experience=100 + 246 + 5)

        gained = apply_level_ups(character)

        assert gained == 2
        assert character.level == 3
        assert character.experience == 5
        assert character.stat_points == 2
