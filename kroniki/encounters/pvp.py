"""PvP duels between two characters."""

import logging
import math
import random
from typing import Optional

from pydantic import BaseModel, Field

from kroniki.combat.combat_engine import CombatEngine
from kroniki.combat.combat_log import CombatLogEntry
from kroniki.combat.combatant import Combatant
from kroniki.core.constants import (
    HUMAN_EXPERIENCE_MULTIPLIER,
    PVP_ENERGY_COST,
    PVP_EXPERIENCE_RATIO,
    PVP_GOLD_STEAL_RATIO,
    PVP_MAX_HONOR_CHANGE,
)
from kroniki.core.exceptions import InvalidRunStateError
from kroniki.core.progression import apply_level_ups
from kroniki.data.models.character import Character, Race
from kroniki.data.models.game_data import GameData
from kroniki.data.models.guild import GuildContext
from .fighters import character_as_enemy, derive_character_stats, player_combatant

logger = logging.getLogger(__name__)


def calculate_honor_change(attacker_level: int, defender_level: int) -> int:
    """Honor for beating a defender: more for stronger targets, negative for weaker ones."""
    diff = defender_level - attacker_level
    if diff >= 0:
        return min(PVP_MAX_HONOR_CHANGE, diff + 1)
    return max(-PVP_MAX_HONOR_CHANGE, diff)


class PvpResult(BaseModel):
    """Outcome of a duel."""
    is_victory: bool
    gold_stolen: int = 0
    experience_gained: int = 0
    honor_change: int = 0
    combat_log: list[CombatLogEntry] = Field(default_factory=list)
    attacker: Character
    defender: Character
    levels_gained: int = 0


class PvpSystem:
    """
    Resolves PvP duels.

    The defender is converted into an enemy-kind combatant at full
    health; only the attacker can gain rewards or levels.
    """

    def __init__(self, game_data: GameData, rng: Optional[random.Random] = None):
        self.game_data = game_data
        self.rng = rng or random.Random()
        self.engine = CombatEngine(rng=self.rng)

    def duel(
        self,
        attacker: Character,
        defender: Character,
        attacker_guild: Optional[GuildContext] = None,
        defender_guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> PvpResult:
        """
        Fight a duel and settle gold, experience, honor and records.

        Raises:
            InvalidRunStateError: If the attacker lacks the energy to attack.
        """
        attacker_stats = derive_character_stats(attacker, self.game_data, attacker_guild, now_ms)
        defender_stats = derive_character_stats(defender, self.game_data, defender_guild, now_ms)

        if attacker_stats.current_energy < PVP_ENERGY_COST:
            raise InvalidRunStateError(f"{attacker.name} does not have enough energy to attack")

        result = self.engine.resolve(
            player_combatant(attacker, attacker_stats, self.game_data),
            Combatant.from_enemy(character_as_enemy(defender, defender_stats)),
        )

        updated_attacker = attacker.model_copy(deep=True)
        updated_defender = defender.model_copy(deep=True)
        updated_attacker.current_energy = attacker_stats.current_energy - PVP_ENERGY_COST
        updated_attacker.current_health = result.final_attacker_health
        updated_attacker.current_mana = result.final_attacker_mana

        gold = experience = honor = levels = 0
        if result.is_victory:
            gold = min(defender.resources.gold, math.floor(defender.resources.gold * PVP_GOLD_STEAL_RATIO))
            experience = math.floor(defender.experience_to_next_level * PVP_EXPERIENCE_RATIO)
            if attacker.race == Race.HUMAN:
                experience = math.floor(experience * HUMAN_EXPERIENCE_MULTIPLIER)
            honor = calculate_honor_change(attacker.level, defender.level)

            updated_attacker.resources.gold += gold
            updated_attacker.experience += experience
            updated_attacker.pvp.wins += 1
            updated_attacker.pvp.honor += honor
            updated_defender.resources.gold -= gold
            updated_defender.pvp.losses += 1
        else:
            updated_attacker.pvp.losses += 1
            updated_defender.pvp.wins += 1

        levels = apply_level_ups(updated_attacker)

        logger.info(
            "PvP %s vs %s: %s (%d gold, %d xp, %+d honor)",
            attacker.name,
            defender.name,
            "victory" if result.is_victory else "defeat",
            gold,
            experience,
            honor,
        )

        return PvpResult(
            is_victory=result.is_victory,
            gold_stolen=gold,
            experience_gained=experience,
            honor_change=honor,
            combat_log=result.log,
            attacker=updated_attacker,
            defender=updated_defender,
            levels_gained=levels,
        )
