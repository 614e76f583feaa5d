"""Item instance creation for loot drops.

Rolls template and affix ranges into concrete values, weighted by the
finder's luck, and may bump the drop to a higher rarity or a pre-upgraded
level.
"""

import random
import uuid
from typing import Optional

from kroniki.data.models.game_data import GameData
from kroniki.data.models.item import (
    RARITY_ORDER,
    Affix,
    AffixType,
    ItemBonuses,
    ItemInstance,
    ItemTemplate,
    StatRange,
)
from .constants import (
    LUCK_ROLL_CAP,
    RARITY_UPGRADE_CHANCE_PER_LUCK,
    AFFIX_SECOND_CHANCE_PER_LUCK,
    PRE_UPGRADE_CHANCE_PER_LUCK,
)

# Bonus fields rolled on templates and affixes
_ROLLED_FIELDS = [
    "damage_min",
    "damage_max",
    "magic_damage_min",
    "magic_damage_max",
    "armor_bonus",
    "crit_chance_bonus",
    "max_health_bonus",
    "crit_damage_modifier_bonus",
    "armor_penetration_percent",
    "armor_penetration_flat",
    "life_steal_percent",
    "life_steal_flat",
    "mana_steal_percent",
    "mana_steal_flat",
]
_AFFIX_ONLY_FIELDS = ["attacks_per_round_bonus", "dodge_chance_bonus"]


def new_unique_id(rng: random.Random) -> str:
    """UUID drawn from the injected RNG so spawns and drops are replayable."""
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def roll_value_with_luck(value, luck: int, rng: random.Random) -> Optional[float]:
    """
    Roll a catalog bonus.

    Fixed numbers are returned as-is. Ranges roll an integer in
    [min, max]; luck raises the floor of the roll (1000 luck always
    lands on max).
    """
    if value is None:
        return None
    if not isinstance(value, StatRange):
        return value

    low = min(value.min, value.max)
    high = max(value.min, value.max)
    if low == high:
        return low

    luck_factor = min(1, luck / LUCK_ROLL_CAP)
    weighted = rng.random() * (1 - luck_factor) + luck_factor
    # weighted can reach 1.0 at max luck
    return min(high, low + int(weighted * (high - low + 1)))


def _roll_bonuses(source: ItemBonuses, fields: list[str], luck: int, rng: random.Random) -> ItemBonuses:
    rolled: dict = {}

    stats = {}
    for key, value in source.stats_bonus.items():
        stat = roll_value_with_luck(value, luck, rng)
        if stat is not None:
            stats[key] = stat
    if stats:
        rolled["stats_bonus"] = stats

    for name in fields:
        value = roll_value_with_luck(getattr(source, name), luck, rng)
        if value is not None:
            rolled[name] = value

    return ItemBonuses(**rolled)


def roll_template_stats(template: ItemTemplate, luck: int, rng: random.Random) -> ItemBonuses:
    """Concrete base stats for a new instance of `template`."""
    return _roll_bonuses(template, _ROLLED_FIELDS, luck, rng)


def roll_affix_stats(affix: Affix, luck: int, rng: random.Random) -> ItemBonuses:
    """Concrete bonuses for an affix attached to a new item."""
    return _roll_bonuses(affix, _ROLLED_FIELDS + _AFFIX_ONLY_FIELDS, luck, rng)


class ItemFactory:
    """
    Create item instances from loot drops.

    Usage:
        factory = ItemFactory(game_data, rng)
        item = factory.create("iron_sword", luck=40, finder_level=5)
    """

    def __init__(self, game_data: GameData, rng: random.Random):
        self.game_data = game_data
        self.rng = rng

    def create(
        self,
        template_id: str,
        luck: int = 0,
        finder_level: Optional[int] = None,
        allow_affixes: bool = True,
    ) -> ItemInstance:
        """
        Create a new item instance.

        Args:
            template_id: Template to instantiate
            luck: Finder's luck (weights rolls, drives rarity/affix/upgrade chances)
            finder_level: Finder's level; None for items without a finder
                (no rarity upgrade, no affix second chance, no pre-upgrade)
            allow_affixes: Whether prefixes/suffixes may roll

        Returns:
            New ItemInstance (bare if the template is unknown)
        """
        template = self.game_data.get_item_template(template_id)
        if template is None:
            return ItemInstance(unique_id=new_unique_id(self.rng), template_id=template_id)

        if finder_level is not None:
            upgraded = self._roll_rarity_upgrade(template, luck, finder_level)
            if upgraded is not None:
                return self.create(upgraded.id, luck, finder_level, allow_affixes)

        instance = ItemInstance(
            unique_id=new_unique_id(self.rng),
            template_id=template.id,
            rolled_base_stats=roll_template_stats(template, luck, self.rng),
        )

        if allow_affixes:
            self._roll_affixes(instance, template, luck, second_chance=finder_level is not None)

        if finder_level is not None:
            instance.upgrade_level = self._roll_pre_upgrade(luck)

        return instance

    def _roll_rarity_upgrade(
        self, template: ItemTemplate, luck: int, finder_level: int
    ) -> Optional[ItemTemplate]:
        index = RARITY_ORDER.index(template.rarity)
        if index >= len(RARITY_ORDER) - 1:
            return None
        if self.rng.random() * 100 >= luck * RARITY_UPGRADE_CHANCE_PER_LUCK:
            return None

        next_rarity = RARITY_ORDER[index + 1]
        candidates = [
            t
            for t in self.game_data.item_templates
            if t.rarity == next_rarity
            and t.category == template.category
            and t.slot == template.slot
            and template.required_level <= t.required_level <= finder_level
        ]
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def _roll_affixes(
        self, instance: ItemInstance, template: ItemTemplate, luck: int, second_chance: bool
    ) -> None:
        category = template.category
        prefixes = [
            a for a in self.game_data.affixes
            if a.type == AffixType.PREFIX and a.spawn_chances.get(category)
        ]
        suffixes = [
            a for a in self.game_data.affixes
            if a.type == AffixType.SUFFIX and a.spawn_chances.get(category)
        ]

        prefix = self._first_spawning(prefixes, category)
        suffix = self._first_spawning(suffixes, category)

        if second_chance:
            if prefix is None and prefixes and self.rng.random() * 100 < luck * AFFIX_SECOND_CHANCE_PER_LUCK:
                prefix = self.rng.choice(prefixes)
            if suffix is None and suffixes and self.rng.random() * 100 < luck * AFFIX_SECOND_CHANCE_PER_LUCK:
                suffix = self.rng.choice(suffixes)

        if prefix is not None:
            instance.prefix_id = prefix.id
            instance.rolled_prefix = roll_affix_stats(prefix, luck, self.rng)
        if suffix is not None:
            instance.suffix_id = suffix.id
            instance.rolled_suffix = roll_affix_stats(suffix, luck, self.rng)

    def _first_spawning(self, candidates: list[Affix], category: str) -> Optional[Affix]:
        for affix in candidates:
            if self.rng.random() * 100 < affix.spawn_chances.get(category, 0):
                return affix
        return None

    def _roll_pre_upgrade(self, luck: int) -> int:
        level = 0
        for chance_per_luck in PRE_UPGRADE_CHANCE_PER_LUCK:
            if self.rng.random() * 100 < luck * chance_per_luck:
                level += 1
            else:
                break
        return level
