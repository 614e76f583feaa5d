"""
Stat, combat and encounter service.
"""

import random
from typing import Dict, Optional, Tuple

from kroniki.combat import CombatEngine, Combatant, FightResult
from kroniki.core.stat_calculator import CharacterStats, StatCalculator
from kroniki.data.models import Character, EquipmentSlot, GuildContext, ItemInstance
from kroniki.encounters import (
    ExpeditionResult,
    ExpeditionSystem,
    FloorResult,
    RetreatResult,
    PvpResult,
    PvpSystem,
    TowerRun,
    TowerSystem,
    derive_character_stats,
    player_combatant,
    spawn_enemy,
)
from .game_data_service import GameDataService


class EncounterService:
    """
    Runs engine operations against the loaded catalogs.

    Every call builds its own random source, so a request seed makes
    the outcome reproducible. Tower runs are not stored server side:
    the client sends the run back with each floor.
    """

    def __init__(self, game_data_service: GameDataService):
        self.game_data_service = game_data_service

    @property
    def game_data(self):
        return self.game_data_service.game_data

    @staticmethod
    def _rng(seed: Optional[int]) -> random.Random:
        return random.Random(seed)

    def calculate_stats(
        self,
        character: Character,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> CharacterStats:
        return derive_character_stats(character, self.game_data, guild, now_ms)

    def preview_equip(
        self,
        character: Character,
        slot: EquipmentSlot,
        item: ItemInstance,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> Tuple[CharacterStats, Dict[str, float]]:
        """
        Stats after putting `item` into `slot` and the change against now.

        Raises:
            UnknownEntityError: If the item's template is not in the catalog.
        """
        self.game_data_service.get_item(item.template_id)
        before = self.calculate_stats(character, guild, now_ms)

        equipped = character.model_copy(deep=True)
        equipped.equipment[slot] = item
        if slot == EquipmentSlot.TWO_HAND:
            equipped.equipment.pop(EquipmentSlot.MAIN_HAND, None)
            equipped.equipment.pop(EquipmentSlot.OFF_HAND, None)
        elif slot in (EquipmentSlot.MAIN_HAND, EquipmentSlot.OFF_HAND):
            equipped.equipment.pop(EquipmentSlot.TWO_HAND, None)

        after = self.calculate_stats(equipped, guild, now_ms)
        return after, StatCalculator().compare(before, after)

    def fight_enemy(
        self,
        character: Character,
        enemy_id: str,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> FightResult:
        """Single fight against a catalog enemy; the character is not changed."""
        rng = self._rng(seed)
        template = self.game_data_service.get_enemy(enemy_id)
        stats = self.calculate_stats(character, guild, now_ms)
        engine = CombatEngine(rng=rng)
        return engine.resolve(
            player_combatant(character, stats, self.game_data),
            Combatant.from_enemy(spawn_enemy(template, rng)),
        )

    def run_expedition(
        self,
        character: Character,
        expedition_id: str,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> ExpeditionResult:
        system = ExpeditionSystem(self.game_data, rng=self._rng(seed))
        return system.run(character, expedition_id, guild, now_ms)

    def start_tower(
        self,
        character: Character,
        tower_id: str,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> TowerRun:
        return TowerSystem(self.game_data).start(character, tower_id, guild, now_ms)

    def fight_tower_floor(
        self,
        run: TowerRun,
        character: Character,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> FloorResult:
        system = TowerSystem(self.game_data, rng=self._rng(seed))
        return system.fight(run, character, guild, now_ms)

    def retreat_tower(self, run: TowerRun, character: Character) -> RetreatResult:
        return TowerSystem(self.game_data).retreat(run, character)

    def duel(
        self,
        attacker: Character,
        defender: Character,
        attacker_guild: Optional[GuildContext] = None,
        defender_guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> PvpResult:
        system = PvpSystem(self.game_data, rng=self._rng(seed))
        return system.duel(attacker, defender, attacker_guild, defender_guild, now_ms)
