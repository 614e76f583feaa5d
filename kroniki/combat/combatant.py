"""Combatant representation for 1v1 fights.

A fight only needs a flat view of each side's numbers plus a few tags
(player or enemy, race, class and learned skills, weapon). Both derived character stats and enemy
templates are converted into this shape before the fight starts.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from kroniki.core.stat_calculator import CharacterStats
from kroniki.data.models.enemy import Enemy
from kroniki.data.models.item import ItemTemplate


class CombatantKind(Enum):
    """Which rules apply to a combatant."""

    PLAYER = "player"
    ENEMY = "enemy"


@dataclass(frozen=True)
class CombatantMeta:
    """Identity of a combatant as shown in the log."""

    name: str
    race: Optional[str] = None
    character_class: Optional[str] = None
    learned_skills: frozenset[str] = frozenset()


@dataclass(frozen=True)
class WeaponProfile:
    """Magic and range metadata of a player's weapon."""

    name: Optional[str] = None
    is_magical: bool = False
    is_ranged: bool = False
    magic_attack_type: Optional[str] = None
    mana_cost_min: int = 0
    mana_cost_max: int = 0

    @property
    def can_cast(self) -> bool:
        return self.is_magical and self.magic_attack_type is not None


@dataclass(frozen=True)
class CombatantStats:
    """Numbers the combat engine reads from a combatant."""

    max_health: int
    current_health: int
    max_mana: int = 0
    current_mana: int = 0
    min_damage: int = 1
    max_damage: int = 1
    magic_damage_min: int = 0
    magic_damage_max: int = 0
    armor: int = 0
    crit_chance: float = 0.0
    crit_damage_modifier: int = 150
    attacks_per_round: float = 1.0
    agility: int = 0
    accuracy: int = 0
    mana_regen: int = 0
    armor_penetration_percent: float = 0
    armor_penetration_flat: int = 0
    life_steal_percent: float = 0
    life_steal_flat: int = 0
    mana_steal_percent: float = 0
    mana_steal_flat: int = 0

    # Enemy casting
    magic_attack_chance: float = 0
    magic_attack_mana_cost: int = 0
    magic_attack_type: Optional[str] = None

    @property
    def attack_count(self) -> int:
        """Sub-attacks per phase; fractional rates round up, minimum one."""
        return max(1, math.ceil(self.attacks_per_round))


@dataclass(frozen=True)
class Combatant:
    """One side of a fight."""

    kind: CombatantKind
    stats: CombatantStats
    meta: CombatantMeta
    weapon: WeaponProfile = WeaponProfile()
    # Used in logs for encounter spawns
    unique_id: Optional[str] = None

    @property
    def is_player(self) -> bool:
        return self.kind is CombatantKind.PLAYER

    @property
    def name(self) -> str:
        return self.meta.name

    @property
    def race(self) -> Optional[str]:
        return self.meta.race

    def has_class(self, character_class: str) -> bool:
        """Class powers only apply to player-kind combatants."""
        return self.is_player and self.meta.character_class == character_class

    def has_skill(self, skill_id: str) -> bool:
        return self.is_player and skill_id in self.meta.learned_skills

    @classmethod
    def from_character(
        cls,
        name: str,
        race: Optional[str],
        stats: CharacterStats,
        weapon_template: Optional[ItemTemplate] = None,
        weapon_name: Optional[str] = None,
        character_class: Optional[str] = None,
        learned_skills: Iterable[str] = (),
    ) -> "Combatant":
        """Build a player combatant from derived character stats."""
        weapon = WeaponProfile()
        if weapon_template is not None:
            cost = weapon_template.mana_cost
            weapon = WeaponProfile(
                name=weapon_name or weapon_template.name,
                is_magical=weapon_template.is_magical,
                is_ranged=weapon_template.is_ranged,
                magic_attack_type=weapon_template.magic_attack_type,
                mana_cost_min=int(cost.min) if cost else 0,
                mana_cost_max=int(cost.max) if cost else 0,
            )

        return cls(
            kind=CombatantKind.PLAYER,
            meta=CombatantMeta(
                name=name,
                race=race,
                character_class=character_class,
                learned_skills=frozenset(learned_skills),
            ),
            weapon=weapon,
            stats=CombatantStats(
                max_health=stats.max_health,
                current_health=stats.current_health,
                max_mana=stats.max_mana,
                current_mana=stats.current_mana,
                min_damage=stats.min_damage,
                max_damage=stats.max_damage,
                magic_damage_min=stats.magic_damage_min,
                magic_damage_max=stats.magic_damage_max,
                armor=stats.armor,
                crit_chance=stats.crit_chance,
                crit_damage_modifier=stats.crit_damage_modifier,
                attacks_per_round=stats.attacks_per_round,
                agility=stats.agility,
                accuracy=stats.accuracy,
                mana_regen=stats.mana_regen,
                armor_penetration_percent=stats.armor_penetration_percent,
                armor_penetration_flat=stats.armor_penetration_flat,
                life_steal_percent=stats.life_steal_percent,
                life_steal_flat=stats.life_steal_flat,
                mana_steal_percent=stats.mana_steal_percent,
                mana_steal_flat=stats.mana_steal_flat,
            ),
        )

    @classmethod
    def from_enemy(cls, enemy: Enemy) -> "Combatant":
        """Build an enemy combatant at full health and mana."""
        s = enemy.stats
        return cls(
            kind=CombatantKind.ENEMY,
            meta=CombatantMeta(name=enemy.name, race=enemy.race),
            unique_id=enemy.unique_id,
            stats=CombatantStats(
                max_health=s.max_health,
                current_health=s.max_health,
                max_mana=s.max_mana,
                current_mana=s.max_mana,
                min_damage=s.min_damage,
                max_damage=s.max_damage,
                magic_damage_min=s.magic_damage_min,
                magic_damage_max=s.magic_damage_max,
                armor=s.armor,
                crit_chance=s.crit_chance,
                crit_damage_modifier=s.crit_damage_modifier,
                attacks_per_round=s.attacks_per_turn,
                agility=s.agility,
                accuracy=s.accuracy,
                mana_regen=s.mana_regen,
                armor_penetration_percent=s.armor_penetration_percent,
                armor_penetration_flat=s.armor_penetration_flat,
                magic_attack_chance=s.magic_attack_chance,
                magic_attack_mana_cost=s.magic_attack_mana_cost,
                magic_attack_type=s.magic_attack_type,
            ),
        )
