"""Attack System for Kroniki Mroku combat.

Resolves a single sub-attack:
- Dodge check
- Magic vs physical selection and mana spending
- Damage roll, critical strikes and armor
- Race effects (Orc fury, Dwarf resilience)
- Hard Skin on the first critical hit a player takes
- Life and mana steal
"""

import math
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from kroniki.core.constants import (
    ARMOR_REDUCTION_FACTOR,
    DODGE_PER_AGILITY_OVER_ACCURACY,
    DWARF_RESILIENCE_HEALTH_THRESHOLD,
    DWARF_RESILIENCE_REDUCTION,
    GNOME_ENEMY_DODGE_CHANCE,
    HARD_SKIN_CRIT_REDUCTION,
    HARD_SKIN_SKILL_ID,
    ORC_FURY_DAMAGE_MULTIPLIER,
    ORC_FURY_HEALTH_THRESHOLD,
)
from kroniki.core.probability import roll_percent, roll_range
from kroniki.data.models.character import Race
from .combat_log import CombatAction, CombatLogEntry
from .combatant import Combatant


class Slot(Enum):
    """Position in the fight state; the initiator holds PLAYER."""

    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def other(self) -> "Slot":
        return Slot.ENEMY if self is Slot.PLAYER else Slot.PLAYER


@dataclass(frozen=True)
class FightState:
    """Pools of both sides plus the turn counter.

    Health may dip below zero between steps; log snapshots and results
    are floored at zero.
    """

    player_health: int
    player_mana: int
    enemy_health: int
    enemy_mana: int
    turn: int = 0
    # Slots whose Hard Skin already absorbed a crit this fight
    hard_skin_spent: frozenset[Slot] = frozenset()

    def health(self, slot: Slot) -> int:
        return self.player_health if slot is Slot.PLAYER else self.enemy_health

    def mana(self, slot: Slot) -> int:
        return self.player_mana if slot is Slot.PLAYER else self.enemy_mana

    def with_pools(
        self, slot: Slot, health: Optional[int] = None, mana: Optional[int] = None
    ) -> "FightState":
        changes = {}
        if health is not None:
            changes[f"{slot.value}_health"] = health
        if mana is not None:
            changes[f"{slot.value}_mana"] = mana
        return replace(self, **changes)

    @property
    def both_alive(self) -> bool:
        return self.player_health > 0 and self.enemy_health > 0

    def snapshot(self) -> dict[str, int]:
        """Zero-floored pool values for a log entry."""
        return {
            "player_health": max(0, self.player_health),
            "player_mana": max(0, self.player_mana),
            "enemy_health": max(0, self.enemy_health),
            "enemy_mana": max(0, self.enemy_mana),
        }


def calculate_dodge_chance(attacker: Combatant, defender: Combatant) -> float:
    """
    Percent chance for `defender` to dodge `attacker`.

    Gnome enemies dodge a flat 10%; everyone else dodges on agility in
    excess of the attacker's accuracy.
    """
    if not defender.is_player and defender.race == Race.GNOME:
        return GNOME_ENEMY_DODGE_CHANCE
    return max(0.0, (defender.stats.agility - attacker.stats.accuracy) * DODGE_PER_AGILITY_OVER_ACCURACY)


def calculate_armor_reduction(
    armor: int, penetration_percent: float, penetration_flat: int
) -> int:
    """Flat damage absorbed by armor after penetration."""
    effective = max(0.0, armor * (1 - penetration_percent / 100) - penetration_flat)
    return math.floor(effective * ARMOR_REDUCTION_FACTOR)


class AttackSystem:
    """
    Executes single sub-attacks.

    Usage:
        attack_system = AttackSystem(rng=random.Random(42))
        state, entries = attack_system.execute(attacker, defender, state, Slot.PLAYER)
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def execute(
        self,
        attacker: Combatant,
        defender: Combatant,
        state: FightState,
        slot: Slot,
        ignore_dodge: bool = False,
        crit_chance: Optional[float] = None,
        damage_ratio: float = 1.0,
        action: CombatAction = CombatAction.ATTACK,
    ) -> tuple[FightState, list[CombatLogEntry]]:
        """
        Resolve one sub-attack.

        Args:
            attacker: Acting combatant
            defender: Target
            state: Current fight state
            slot: Fight-state slot of the attacker
            ignore_dodge: Skip the defender's dodge roll
            crit_chance: Replaces the attacker's crit chance for this hit
            damage_ratio: Multiplier on the final damage, before steal
            action: Log action of the landed hit

        Returns:
            (new state, log entries produced)
        """
        target = slot.other

        if not ignore_dodge and roll_percent(self.rng, calculate_dodge_chance(attacker, defender)):
            return state, [self._entry(attacker, defender, state, CombatAction.DODGE, is_dodge=True)]

        attacker_mana = state.mana(slot)
        use_magic = False
        mana_spent = 0

        if attacker.is_player:
            if attacker.weapon.can_cast:
                cost = roll_range(self.rng, attacker.weapon.mana_cost_min, attacker.weapon.mana_cost_max)
                if attacker_mana < cost:
                    return state, [self._entry(attacker, defender, state, CombatAction.NOT_ENOUGH_MANA)]
                use_magic = True
                mana_spent = cost
        elif roll_percent(self.rng, attacker.stats.magic_attack_chance):
            cost = attacker.stats.magic_attack_mana_cost
            if attacker_mana < cost:
                return state, [self._entry(attacker, defender, state, CombatAction.NOT_ENOUGH_MANA)]
            use_magic = True
            mana_spent = cost

        stats = attacker.stats
        is_crit = False
        damage_reduced = 0

        if use_magic:
            # Magic ignores armor and cannot crit
            damage = roll_range(self.rng, stats.magic_damage_min, stats.magic_damage_max)
            attacker_mana -= mana_spent
        else:
            damage = roll_range(self.rng, stats.min_damage, stats.max_damage)
            chance = stats.crit_chance if crit_chance is None else crit_chance
            if roll_percent(self.rng, chance):
                is_crit = True
                damage = math.floor(damage * stats.crit_damage_modifier / 100)
            reduction = calculate_armor_reduction(
                defender.stats.armor,
                stats.armor_penetration_percent,
                stats.armor_penetration_flat,
            )
            damage_reduced = min(damage, reduction)
            damage -= damage_reduced

        attacker_health = state.health(slot)
        defender_health = state.health(target)

        if attacker.race == Race.ORC and attacker_health < stats.max_health * ORC_FURY_HEALTH_THRESHOLD:
            damage = math.floor(damage * ORC_FURY_DAMAGE_MULTIPLIER)

        if (
            not attacker.is_player
            and defender.race == Race.DWARF
            and defender_health < defender.stats.max_health * DWARF_RESILIENCE_HEALTH_THRESHOLD
        ):
            resilience = math.floor(damage * DWARF_RESILIENCE_REDUCTION)
            damage -= resilience
            damage_reduced += resilience

        entries: list[CombatLogEntry] = []
        if (
            is_crit
            and target not in state.hard_skin_spent
            and defender.has_skill(HARD_SKIN_SKILL_ID)
        ):
            absorbed = math.floor(damage * HARD_SKIN_CRIT_REDUCTION)
            damage -= absorbed
            damage_reduced += absorbed
            state = replace(state, hard_skin_spent=state.hard_skin_spent | {target})
            entries.append(
                self._entry(attacker, defender, state, CombatAction.HARD_SKIN, damage_reduced=absorbed)
            )

        if damage_ratio != 1.0:
            damage = math.floor(damage * damage_ratio)

        health_gained = 0
        mana_gained = 0
        if attacker.is_player:
            life_steal = math.floor(damage * stats.life_steal_percent / 100) + stats.life_steal_flat
            if life_steal > 0:
                healed = min(stats.max_health, attacker_health + life_steal)
                health_gained = max(0, healed - attacker_health)
                attacker_health += health_gained
            mana_steal = math.floor(damage * stats.mana_steal_percent / 100) + stats.mana_steal_flat
            if mana_steal > 0:
                restored = min(stats.max_mana, attacker_mana + mana_steal)
                mana_gained = max(0, restored - attacker_mana)
                attacker_mana += mana_gained

        defender_health -= damage

        state = state.with_pools(slot, health=attacker_health, mana=attacker_mana)
        state = state.with_pools(target, health=defender_health)

        entry = self._entry(
            attacker,
            defender,
            state,
            action,
            damage=damage,
            is_crit=is_crit,
            damage_reduced=damage_reduced or None,
            health_gained=health_gained or None,
            mana_gained=mana_gained or None,
            mana_spent=mana_spent or None,
            magic_attack_type=self._magic_type(attacker) if use_magic else None,
            weapon_name=attacker.weapon.name if attacker.is_player else None,
        )
        entries.append(entry)
        return state, entries

    @staticmethod
    def _magic_type(attacker: Combatant) -> Optional[str]:
        if attacker.is_player:
            return attacker.weapon.magic_attack_type
        return attacker.stats.magic_attack_type

    @staticmethod
    def _entry(
        attacker: Combatant,
        defender: Combatant,
        state: FightState,
        action: CombatAction,
        **fields,
    ) -> CombatLogEntry:
        return CombatLogEntry(
            turn=state.turn,
            attacker=attacker.name,
            defender=defender.name,
            action=action,
            **fields,
            **state.snapshot(),
        )
