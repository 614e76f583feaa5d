"""Experience curve and level-ups."""

import logging
import math

from kroniki.data.models.character import Character
from .constants import EXPERIENCE_BASE, EXPERIENCE_EXPONENT, STAT_POINTS_PER_LEVEL

logger = logging.getLogger(__name__)


def experience_to_next_level(level: int) -> int:
    """Experience needed to go from `level` to `level + 1`."""
    return math.floor(EXPERIENCE_BASE * math.pow(level, EXPERIENCE_EXPONENT))


def calculate_total_experience(level: int, current_experience: int) -> int:
    """Lifetime experience: all completed levels plus progress in the current one."""
    total = current_experience
    for i in range(1, level):
        total += experience_to_next_level(i)
    return total


def apply_level_ups(character: Character) -> int:
    """
    Level the character up while it has enough experience.

    Mutates `character` in place; callers pass a working copy.

    Returns:
        Number of levels gained.
    """
    gained = 0
    while character.experience >= character.experience_to_next_level:
        character.experience -= character.experience_to_next_level
        character.level += 1
        character.stat_points += STAT_POINTS_PER_LEVEL
        character.experience_to_next_level = experience_to_next_level(character.level)
        gained += 1

    if gained:
        logger.info("%s reached level %d (+%d)", character.name, character.level, gained)
    return gained
