"""Reward rolls, bundles and banking."""

import math
import random
from typing import Callable, Iterable, Optional

from pydantic import BaseModel, Field

from kroniki.data.models.character import Character, CharacterClass, Race
from kroniki.data.models.guild import GuildBuff
from kroniki.data.models.item import ItemInstance, LootDrop, ResourceDrop
from .constants import (
    BACKPACK_BASE_CAPACITY,
    BACKPACK_CAPACITY_PER_LEVEL,
    GNOME_GOLD_MULTIPLIER,
    HUMAN_EXPERIENCE_MULTIPLIER,
    THIEF_GOLD_MULTIPLIER,
)
from .probability import roll_percent, roll_range
from .progression import apply_level_ups


class RewardSource(BaseModel):
    """One line of the reward breakdown."""
    source: str
    gold: int = 0
    experience: int = 0


class RewardBundle(BaseModel):
    """Everything an encounter hands to the persistence layer."""
    gold: int = 0
    experience: int = 0
    items: list[ItemInstance] = Field(default_factory=list)
    essences: dict[str, int] = Field(default_factory=dict)
    breakdown: list[RewardSource] = Field(default_factory=list)
    items_lost_count: int = 0

    def add_essences(self, essences: dict[str, int]) -> None:
        for key, amount in essences.items():
            self.essences[key] = self.essences.get(key, 0) + amount

    def merge(self, other: "RewardBundle") -> None:
        """Fold another bundle into this one."""
        self.gold += other.gold
        self.experience += other.experience
        self.items.extend(other.items)
        self.add_essences(other.essences)
        self.breakdown.extend(other.breakdown)
        self.items_lost_count += other.items_lost_count


def backpack_capacity(backpack_level: int) -> int:
    return BACKPACK_BASE_CAPACITY + (backpack_level - 1) * BACKPACK_CAPACITY_PER_LEVEL


def apply_race_multipliers(race: str, gold: int, experience: int) -> tuple[int, int]:
    """Human earns more experience, Gnome more gold."""
    if race == Race.HUMAN:
        experience = math.floor(experience * HUMAN_EXPERIENCE_MULTIPLIER)
    if race == Race.GNOME:
        gold = math.floor(gold * GNOME_GOLD_MULTIPLIER)
    return gold, experience


def apply_class_multipliers(character_class: Optional[str], gold: int) -> int:
    """Thieves earn more gold."""
    if character_class == CharacterClass.THIEF:
        gold = math.floor(gold * THIEF_GOLD_MULTIPLIER)
    return gold


def apply_experience_buffs(
    experience: int, buffs: Iterable[GuildBuff], now_ms: Optional[int] = None
) -> int:
    """Apply each active guild buff's experience percentage in turn."""
    for buff in buffs:
        if buff.exp_bonus and buff.is_active(now_ms):
            experience += math.floor(experience * buff.exp_bonus / 100)
    return experience


def roll_loot(
    rng: random.Random,
    drops: Iterable[LootDrop],
    make_item: Callable[[str], ItemInstance],
    max_items: int = 0,
    free_slots: Optional[int] = None,
) -> tuple[list[ItemInstance], int]:
    """
    Roll a loot table.

    Each entry is an independent percent roll. Rolling stops once
    `max_items` drops happened (0 means uncapped). Drops that do not fit
    in `free_slots` are counted as lost instead of created.

    Returns:
        (items, items_lost_count)
    """
    items: list[ItemInstance] = []
    lost = 0
    for drop in drops:
        if max_items > 0 and len(items) >= max_items:
            break
        if not roll_percent(rng, drop.chance):
            continue
        if free_slots is not None and len(items) >= free_slots:
            lost += 1
            continue
        items.append(make_item(drop.template_id))
    return items, lost


def roll_resources(
    rng: random.Random, drops: Iterable[ResourceDrop], double_chance: float = 0
) -> dict[str, int]:
    """
    Roll essence drops: a percent chance, then an amount in [min, max].

    With `double_chance`, each landed drop may additionally be doubled.
    """
    found: dict[str, int] = {}
    for drop in drops:
        if roll_percent(rng, drop.chance):
            amount = roll_range(rng, drop.min, drop.max)
            if double_chance and roll_percent(rng, double_chance):
                amount *= 2
            found[drop.resource] = found.get(drop.resource, 0) + amount
    return found


def bank_rewards(character: Character, bundle: RewardBundle) -> tuple[Character, int, int]:
    """
    Apply a bundle to a copy of the character and run level-ups.

    Items that do not fit in the backpack are dropped.

    Returns:
        (updated character, levels gained, items dropped)
    """
    updated = character.model_copy(deep=True)
    updated.resources.gold += bundle.gold
    updated.experience += bundle.experience
    for key, amount in bundle.essences.items():
        updated.resources.essences[key] = updated.resources.essences.get(key, 0) + amount

    room = max(0, backpack_capacity(updated.backpack_level) - len(updated.inventory))
    kept = bundle.items[:room]
    updated.inventory.extend(item.model_copy(deep=True) for item in kept)

    levels = apply_level_ups(updated)
    return updated, levels, len(bundle.items) - len(kept)
