"""Tower System for Kroniki Mroku.

Towers are fought one floor per activation. Rewards accumulate on the
run and are only banked when the top floor falls or the character
retreats; a defeat loses everything gathered so far.
"""

import logging
import random
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from kroniki.combat.combat_engine import CombatEngine
from kroniki.combat.combat_log import CombatLogEntry
from kroniki.combat.combatant import Combatant
from kroniki.core.exceptions import InvalidRunStateError, UnknownEntityError
from kroniki.core.items import ItemFactory
from kroniki.core.probability import pick_weighted, roll_percent, roll_range
from kroniki.core.rewards import RewardBundle, RewardSource, bank_rewards, roll_resources
from kroniki.data.models.character import Character
from kroniki.data.models.enemy import Enemy
from kroniki.data.models.game_data import GameData
from kroniki.data.models.guild import GuildContext
from kroniki.data.models.world import Tower, TowerFloor
from .fighters import derive_character_stats, player_combatant, spawn_enemy

logger = logging.getLogger(__name__)


class TowerRunStatus(StrEnum):
    """Lifecycle of a tower run."""
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    RETREATED = "RETREATED"


class TowerRun(BaseModel):
    """Persisted state of an active tower attempt."""
    tower_id: str
    current_floor: int = Field(default=1, ge=1)
    current_health: int = Field(..., ge=0)
    current_mana: int = Field(default=0, ge=0)
    accumulated: RewardBundle = Field(default_factory=RewardBundle)
    status: TowerRunStatus = TowerRunStatus.IN_PROGRESS

    model_config = {"use_enum_values": True}

    @property
    def is_active(self) -> bool:
        return self.status == TowerRunStatus.IN_PROGRESS


class FloorResult(BaseModel):
    """Outcome of fighting one floor."""
    run: TowerRun
    character: Character
    floor_number: int
    enemy: Enemy
    is_victory: bool
    combat_log: list[CombatLogEntry] = Field(default_factory=list)
    floor_rewards: RewardBundle = Field(default_factory=RewardBundle)
    banked: Optional[RewardBundle] = Field(default=None, description="Set when the tower was completed")
    levels_gained: int = 0


class RetreatResult(BaseModel):
    """Outcome of leaving a tower early."""
    run: TowerRun
    character: Character
    banked: RewardBundle
    levels_gained: int = 0


class TowerSystem:
    """
    Runs tower attempts floor by floor.

    Usage:
        towers = TowerSystem(game_data, rng=random.Random(42))
        run = towers.start(character, "shadow_spire")
        result = towers.fight(run, character)  # continue to next floor
        retreat = towers.retreat(result.run, result.character)  # stop and bank
    """

    def __init__(self, game_data: GameData, rng: Optional[random.Random] = None):
        self.game_data = game_data
        self.rng = rng or random.Random()
        self.engine = CombatEngine(rng=self.rng)
        self.items = ItemFactory(game_data, self.rng)

    def _get_tower(self, tower_id: str) -> Tower:
        tower = self.game_data.get_tower(tower_id)
        if tower is None or not tower.is_active:
            raise UnknownEntityError("tower", tower_id)
        return tower

    def start(
        self,
        character: Character,
        tower_id: str,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> TowerRun:
        """
        Begin a run at floor 1 with a snapshot of the character's pools.

        Raises:
            UnknownEntityError: If the tower does not exist or is inactive.
            InvalidRunStateError: If the character has no health left.
        """
        tower = self._get_tower(tower_id)
        stats = derive_character_stats(character, self.game_data, guild, now_ms)
        if stats.current_health <= 0:
            raise InvalidRunStateError(f"{character.name} is too wounded to enter {tower.name}")

        logger.info("%s entered tower %s", character.name, tower.id)
        return TowerRun(
            tower_id=tower.id,
            current_floor=1,
            current_health=stats.current_health,
            current_mana=stats.current_mana,
        )

    def fight(
        self,
        run: TowerRun,
        character: Character,
        guild: Optional[GuildContext] = None,
        now_ms: Optional[int] = None,
    ) -> FloorResult:
        """
        Fight the current floor.

        Victory adds the floor's rewards to the run and moves to the next
        floor, or banks everything and completes the run on the top floor.
        Defeat fails the run: accumulated rewards are lost and the
        character is left at zero health.

        Raises:
            InvalidRunStateError: If the run is finished or the floor has no enemies.
        """
        self._require_active(run)
        tower = self._get_tower(run.tower_id)
        floor = tower.get_floor(run.current_floor)
        if floor is None or not floor.enemies:
            raise InvalidRunStateError(f"Tower {tower.id} has no enemies on floor {run.current_floor}")

        enemy = self._pick_enemy(floor)
        stats = derive_character_stats(character, self.game_data, guild, now_ms)
        fighter = player_combatant(
            character, stats, self.game_data, health=run.current_health, mana=run.current_mana
        )
        result = self.engine.resolve(fighter, Combatant.from_enemy(enemy))

        updated_run = run.model_copy(deep=True)
        updated_run.current_health = result.final_attacker_health
        updated_run.current_mana = result.final_attacker_mana
        updated_char = character.model_copy(deep=True)
        floor_number = run.current_floor

        if not result.is_victory:
            updated_run.status = TowerRunStatus.FAILED
            updated_char.current_health = 0
            updated_char.current_mana = result.final_attacker_mana
            logger.info(
                "%s fell on floor %d of %s; %d gold lost",
                character.name,
                floor_number,
                tower.id,
                run.accumulated.gold,
            )
            return FloorResult(
                run=updated_run,
                character=updated_char,
                floor_number=floor_number,
                enemy=enemy,
                is_victory=False,
                combat_log=result.log,
            )

        floor_rewards = self._roll_floor_rewards(floor, enemy)
        updated_run.accumulated.merge(floor_rewards)

        if floor_number >= tower.total_floors:
            self._add_grand_prize(tower, updated_run.accumulated)
            updated_run.status = TowerRunStatus.COMPLETED
            banked, updated_char, levels = self._bank(updated_run, updated_char)
            logger.info("%s conquered tower %s", character.name, tower.id)
            return FloorResult(
                run=updated_run,
                character=updated_char,
                floor_number=floor_number,
                enemy=enemy,
                is_victory=True,
                combat_log=result.log,
                floor_rewards=floor_rewards,
                banked=banked,
                levels_gained=levels,
            )

        updated_run.current_floor += 1
        return FloorResult(
            run=updated_run,
            character=updated_char,
            floor_number=floor_number,
            enemy=enemy,
            is_victory=True,
            combat_log=result.log,
            floor_rewards=floor_rewards,
        )

    def retreat(self, run: TowerRun, character: Character) -> RetreatResult:
        """
        Leave the tower and keep everything gathered so far.

        The returned run is RETREATED, so it cannot be fought or banked again.

        Raises:
            InvalidRunStateError: If the run is already finished.
        """
        self._require_active(run)
        updated_run = run.model_copy(deep=True)
        updated_run.status = TowerRunStatus.RETREATED
        banked, updated_char, levels = self._bank(updated_run, character.model_copy(deep=True))
        logger.info(
            "%s retreated from %s on floor %d with %d gold",
            character.name,
            run.tower_id,
            run.current_floor,
            banked.gold,
        )
        return RetreatResult(
            run=updated_run,
            character=updated_char,
            banked=banked,
            levels_gained=levels,
        )

    @staticmethod
    def _require_active(run: TowerRun) -> None:
        if not run.is_active:
            raise InvalidRunStateError(f"Tower run is already {run.status}")

    def _pick_enemy(self, floor: TowerFloor) -> Enemy:
        """Cumulative spawn-chance pick; a roll past every bucket takes the first enemy."""
        index = pick_weighted(self.rng, [spawn.spawn_chance for spawn in floor.enemies])
        for spawn in [floor.enemies[index], floor.enemies[0]]:
            template = self.game_data.get_enemy(spawn.enemy_id)
            if template is not None:
                return spawn_enemy(template, self.rng)
        raise UnknownEntityError("enemy", floor.enemies[index].enemy_id)

    def _roll_floor_rewards(self, floor: TowerFloor, enemy: Enemy) -> RewardBundle:
        bundle = RewardBundle()
        gold = roll_range(self.rng, enemy.min_gold, enemy.max_gold)
        experience = roll_range(self.rng, enemy.min_experience, enemy.max_experience)
        bundle.breakdown.append(RewardSource(source=f"Defeated: {enemy.name}", gold=gold, experience=experience))

        if floor.guaranteed_reward is not None:
            bundle.breakdown.append(
                RewardSource(
                    source=f"Floor {floor.floor_number}",
                    gold=floor.guaranteed_reward.gold,
                    experience=floor.guaranteed_reward.experience,
                )
            )

        bundle.gold = sum(line.gold for line in bundle.breakdown)
        bundle.experience = sum(line.experience for line in bundle.breakdown)

        for drop in floor.loot_table:
            if roll_percent(self.rng, drop.chance):
                bundle.items.append(self.items.create(drop.template_id))
        bundle.add_essences(roll_resources(self.rng, floor.resource_loot_table))
        return bundle

    def _add_grand_prize(self, tower: Tower, bundle: RewardBundle) -> None:
        prize = tower.grand_prize
        if prize is None:
            return
        bundle.gold += prize.gold
        bundle.experience += prize.experience
        bundle.breakdown.append(
            RewardSource(source=f"Grand prize: {tower.name}", gold=prize.gold, experience=prize.experience)
        )
        bundle.add_essences(prize.essences)
        for template_id in prize.items:
            bundle.items.append(self.items.create(template_id, allow_affixes=False))

    @staticmethod
    def _bank(run: TowerRun, character: Character) -> tuple[RewardBundle, Character, int]:
        """Bank the run's rewards and copy its pools onto the character."""
        banked = run.accumulated.model_copy(deep=True)
        character.current_health = run.current_health
        character.current_mana = run.current_mana
        updated, levels, dropped = bank_rewards(character, banked)
        banked.items_lost_count += dropped
        return banked, updated, levels
