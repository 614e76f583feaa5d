"""Expedition System for Kroniki Mroku.

An expedition spawns a random group of enemies from its candidate list,
fights them one after another with health and mana carried between
fights, and on full success rolls gold, experience, loot and essences.
Thief, Engineer, Druid and DungeonHunter characters get class bonuses
on those rewards.
"""

import logging
import math
import random
from typing import Optional

from pydantic import BaseModel, Field

from kroniki.combat.combat_engine import CombatEngine
from kroniki.combat.combat_log import CombatLogEntry
from kroniki.combat.combatant import Combatant
from kroniki.core.constants import (
    DRUID_EXPEDITION_HEAL_RATIO,
    DUNGEON_HUNTER_BONUS_LOOT_CHANCES,
    ENGINEER_DOUBLE_ESSENCE_CHANCE,
    THOROUGH_SEARCH_SKILL_ID,
)
from kroniki.core.exceptions import UnknownEntityError
from kroniki.core.items import ItemFactory
from kroniki.core.probability import roll_percent, roll_range
from kroniki.core.rewards import (
    RewardBundle,
    RewardSource,
    apply_class_multipliers,
    apply_experience_buffs,
    apply_race_multipliers,
    backpack_capacity,
    bank_rewards,
    roll_loot,
    roll_resources,
)
from kroniki.data.models.character import Character, CharacterClass
from kroniki.data.models.enemy import Enemy
from kroniki.data.models.game_data import GameData
from kroniki.data.models.guild import GuildContext
from kroniki.data.models.item import LootDrop
from kroniki.data.models.world import Expedition
from .fighters import derive_character_stats, player_combatant, spawn_enemy

logger = logging.getLogger(__name__)


class ExpeditionResult(BaseModel):
    """Outcome of a completed expedition."""
    expedition_id: str
    expedition_name: str
    is_victory: bool
    encountered_enemies: list[Enemy] = Field(default_factory=list)
    combat_logs: list[list[CombatLogEntry]] = Field(default_factory=list, description="One log per fight")
    rewards: RewardBundle = Field(default_factory=RewardBundle)
    character: Character
    levels_gained: int = 0


class ExpeditionSystem:
    """
    Runs expeditions.

    Usage:
        system = ExpeditionSystem(game_data, rng=random.Random(42))
        result = system.run(character, "dark_forest", guild)
    """

    def __init__(self, game_data: GameData, rng: Optional[random.Random] = None):
        self.game_data = game_data
        self.rng = rng or random.Random()
        self.engine = CombatEngine(rng=self.rng)
        self.items = ItemFactory(game_data, self.rng)

    def spawn_enemies(self, expedition: Expedition) -> list[Enemy]:
        """
        Draw the enemy group for one run.

        Candidates are shuffled, then each is rolled against its spawn
        chance until `max_enemies` spawned (0 means no cap).
        """
        candidates = list(expedition.enemies)
        self.rng.shuffle(candidates)
        cap = expedition.max_enemies or len(candidates)

        spawned: list[Enemy] = []
        for candidate in candidates:
            if len(spawned) >= cap:
                break
            if not roll_percent(self.rng, candidate.spawn_chance):
                continue
            template = self.game_data.get_enemy(candidate.enemy_id)
            if template is None:
                logger.warning(
                    "Expedition %s references unknown enemy %s", expedition.id, candidate.enemy_id
                )
                continue
            spawned.append(spawn_enemy(template, self.rng))
        return spawned

    def run(
        self,
        character: Character,
        expedition_id: str,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> ExpeditionResult:
        """
        Run an expedition to completion.

        Args:
            character: Character document (not mutated)
            expedition_id: Expedition to run
            guild: Guild buildings and buffs of the character
            now_ms: Current epoch milliseconds for buff expiry

        Returns:
            ExpeditionResult with the updated character

        Raises:
            UnknownEntityError: If the expedition does not exist.
        """
        expedition = self.game_data.get_expedition(expedition_id)
        if expedition is None:
            raise UnknownEntityError("expedition", expedition_id)
        guild = guild or GuildContext()

        enemies = self.spawn_enemies(expedition)
        stats = derive_character_stats(character, self.game_data, guild, now_ms)

        # Mana is refilled for the trip; health carries over from before
        health = stats.current_health
        mana = stats.max_mana
        is_victory = health > 0
        logs: list[list[CombatLogEntry]] = []

        for enemy in enemies:
            fighter = player_combatant(character, stats, self.game_data, health=health, mana=mana)
            result = self.engine.resolve(fighter, Combatant.from_enemy(enemy))
            logs.append(result.log)
            health = result.final_attacker_health
            mana = result.final_attacker_mana
            if not result.is_victory:
                is_victory = False
                break

        updated = character.model_copy(deep=True)
        updated.current_health = health
        updated.current_mana = mana

        rewards = RewardBundle()
        levels = 0
        if is_victory:
            rewards = self._roll_rewards(expedition, enemies, updated, stats.luck, guild, now_ms)
            if character.character_class == CharacterClass.DRUID:
                heal = math.floor(stats.max_health * DRUID_EXPEDITION_HEAL_RATIO)
                updated.current_health = min(stats.max_health, health + heal)
            updated, levels, dropped = bank_rewards(updated, rewards)
            rewards.items_lost_count += dropped

        logger.info(
            "%s finished expedition %s: %s, %d enemies, %d gold, %d xp",
            character.name,
            expedition.id,
            "victory" if is_victory else "defeat",
            len(enemies),
            rewards.gold,
            rewards.experience,
        )

        return ExpeditionResult(
            expedition_id=expedition.id,
            expedition_name=expedition.name,
            is_victory=is_victory,
            encountered_enemies=enemies,
            combat_logs=logs,
            rewards=rewards,
            character=updated,
            levels_gained=levels,
        )

    def _roll_rewards(
        self,
        expedition: Expedition,
        enemies: list[Enemy],
        character: Character,
        luck: int,
        guild: GuildContext,
        now_ms: Optional[int],
    ) -> RewardBundle:
        bundle = RewardBundle()

        bundle.breakdown.append(
            RewardSource(
                source=f"Expedition: {expedition.name}",
                gold=roll_range(self.rng, expedition.min_base_gold_reward, expedition.max_base_gold_reward),
                experience=roll_range(
                    self.rng,
                    expedition.min_base_experience_reward,
                    expedition.max_base_experience_reward,
                ),
            )
        )
        for enemy in enemies:
            bundle.breakdown.append(
                RewardSource(
                    source=f"Defeated: {enemy.name}",
                    gold=roll_range(self.rng, enemy.min_gold, enemy.max_gold),
                    experience=roll_range(self.rng, enemy.min_experience, enemy.max_experience),
                )
            )

        gold = sum(line.gold for line in bundle.breakdown)
        experience = sum(line.experience for line in bundle.breakdown)
        gold, experience = apply_race_multipliers(character.race, gold, experience)
        bundle.gold = apply_class_multipliers(character.character_class, gold)
        bundle.experience = apply_experience_buffs(experience, guild.active_buffs, now_ms)

        drops = list(expedition.loot_table)
        for enemy in enemies:
            drops.extend(enemy.loot_table)
        if character.character_class == CharacterClass.DUNGEON_HUNTER:
            drops.extend(self._bonus_drops(drops))

        max_items = expedition.max_items
        if max_items > 0 and THOROUGH_SEARCH_SKILL_ID in character.active_skills:
            max_items += 1

        free_slots = backpack_capacity(character.backpack_level) - len(character.inventory)
        bundle.items, bundle.items_lost_count = roll_loot(
            self.rng,
            drops,
            lambda template_id: self.items.create(template_id, luck=luck, finder_level=character.level),
            max_items=max_items,
            free_slots=max(0, free_slots),
        )

        resources = list(expedition.resource_loot_table)
        for enemy in enemies:
            resources.extend(enemy.resource_loot_table)
        double_chance = 0.0
        if character.character_class == CharacterClass.ENGINEER:
            double_chance = ENGINEER_DOUBLE_ESSENCE_CHANCE
        bundle.add_essences(roll_resources(self.rng, resources, double_chance=double_chance))

        return bundle

    def _bonus_drops(self, drops: list[LootDrop]) -> list[LootDrop]:
        """Extra guaranteed copies of random loot entries."""
        bonus: list[LootDrop] = []
        if not drops:
            return bonus
        for chance in DUNGEON_HUNTER_BONUS_LOOT_CHANCES:
            if roll_percent(self.rng, chance):
                pick = drops[roll_range(self.rng, 0, len(drops) - 1)]
                bonus.append(pick.model_copy(update={"chance": 100}))
        return bonus
