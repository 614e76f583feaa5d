"""Stat Calculator for Kroniki Mroku.

Derive final character stats from base attributes, equipment, race,
guild buildings, guild buffs and active skills.
"""

import logging
import math
from dataclasses import dataclass, field, asdict
from typing import Iterable, Mapping, Optional

from kroniki.data.models.character import Character, Race
from kroniki.data.models.guild import GuildBuff, Skill
from kroniki.data.models.item import (
    Affix,
    Attribute,
    EquipmentSlot,
    ItemBonuses,
    ItemTemplate,
    resolve_stat,
)
from .constants import (
    BASE_HEALTH,
    BASE_MANA,
    BASE_ENERGY,
    BASE_MIN_DAMAGE,
    BASE_MAX_DAMAGE,
    BASE_CRIT_DAMAGE_MODIFIER,
    HEALTH_PER_STAMINA,
    MANA_PER_INTELLIGENCE,
    MANA_REGEN_PER_INTELLIGENCE,
    CRIT_CHANCE_PER_ACCURACY,
    DODGE_CHANCE_PER_AGILITY,
    MAGIC_DAMAGE_PER_INTELLIGENCE,
    UPGRADE_FACTOR_PER_LEVEL,
    MAX_AFFIX_UPGRADE_LEVEL,
    DWARF_ARMOR_BONUS,
    ELF_MANA_REGEN_BONUS,
    GNOME_DODGE_BONUS,
    BARRACKS_DAMAGE_PER_LEVEL,
    SHRINE_LUCK_PER_LEVEL,
)

logger = logging.getLogger(__name__)


def js_round(value: float) -> int:
    """Round half up, matching the game's client-side rounding."""
    return math.floor(value + 0.5)


@dataclass
class CharacterStats:
    """Complete derived stats for a character."""

    # Primary attribute totals
    strength: int = 0
    agility: int = 0
    accuracy: int = 0
    stamina: int = 0
    intelligence: int = 0
    energy: int = 0
    luck: int = 0

    # Pools
    max_health: int = BASE_HEALTH
    max_mana: int = BASE_MANA
    max_energy: int = BASE_ENERGY
    current_health: int = BASE_HEALTH
    current_mana: int = BASE_MANA
    current_energy: int = BASE_ENERGY

    # Offense
    min_damage: int = BASE_MIN_DAMAGE
    max_damage: int = BASE_MAX_DAMAGE
    magic_damage_min: int = 0
    magic_damage_max: int = 0
    crit_chance: float = 0.0
    crit_damage_modifier: int = BASE_CRIT_DAMAGE_MODIFIER
    attacks_per_round: float = 1.0
    armor_penetration_percent: float = 0
    armor_penetration_flat: int = 0
    life_steal_percent: float = 0
    life_steal_flat: int = 0
    mana_steal_percent: float = 0
    mana_steal_flat: int = 0

    # Defense
    armor: int = 0
    dodge_chance: float = 0.0
    mana_regen: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class _BonusTotals:
    """Accumulator for equipment bonuses."""

    primary: dict[str, float] = field(default_factory=dict)
    damage_min: float = 0
    damage_max: float = 0
    magic_damage_min: float = 0
    magic_damage_max: float = 0
    armor: float = 0
    crit_chance: float = 0
    max_health: float = 0
    crit_damage_modifier: float = 0
    armor_penetration_percent: float = 0
    armor_penetration_flat: float = 0
    life_steal_percent: float = 0
    life_steal_flat: float = 0
    mana_steal_percent: float = 0
    mana_steal_flat: float = 0
    attacks_per_round: float = 0
    dodge_chance: float = 0


class StatCalculator:
    """
    Calculate derived stats for a character from:
    - Base primary attributes
    - Equipped items (upgrade-scaled), including rolled affixes
    - Race bonuses
    - Guild barracks/shrine levels and timed guild buffs
    - Mana reserved by active skills

    The calculator is pure: inputs are never mutated and no randomness
    is involved, so equal inputs always produce equal stats.
    """

    def calculate_stats(
        self,
        character: Character,
        item_templates: Mapping[str, ItemTemplate],
        affixes: Optional[Mapping[str, Affix]] = None,
        guild_barracks_level: int = 0,
        guild_shrine_level: int = 0,
        skills: Iterable[Skill] = (),
        active_guild_buffs: Iterable[GuildBuff] = (),
        now_ms: Optional[int] = None,
    ) -> CharacterStats:
        """
        Calculate complete stats for a character.

        Args:
            character: The character document
            item_templates: Item templates keyed by ID
            affixes: Affix definitions keyed by ID, used when an item lacks rolled values
            guild_barracks_level: Barracks level (physical/magic damage multiplier)
            guild_shrine_level: Shrine level (luck bonus)
            skills: Skill catalog, used for active-skill mana reservation
            active_guild_buffs: Guild buffs; expired ones are ignored
            now_ms: Current epoch milliseconds; None treats every buff as active

        Returns:
            CharacterStats with all bonuses applied
        """
        primary = {attr.value: getattr(character.stats, attr.value) for attr in Attribute}

        if guild_shrine_level > 0:
            primary[Attribute.LUCK.value] += guild_shrine_level * SHRINE_LUCK_PER_LEVEL

        buff_attacks = 0.0
        for buff in active_guild_buffs:
            if not buff.is_active(now_ms):
                continue
            for key, value in buff.stats.items():
                primary[key] += value
            buff_attacks += buff.attacks_per_round_bonus

        bonus = _BonusTotals()
        for slot, item in character.equipment.items():
            template = item_templates.get(item.template_id)
            if template is None:
                logger.warning(
                    "Character %s has %s in slot %s with unknown template %s; ignoring it",
                    character.id,
                    item.unique_id,
                    slot,
                    item.template_id,
                )
                continue

            factor = item.upgrade_level * UPGRADE_FACTOR_PER_LEVEL
            affix_factor = min(item.upgrade_level, MAX_AFFIX_UPGRADE_LEVEL) * UPGRADE_FACTOR_PER_LEVEL

            base_source = item.rolled_base_stats if item.rolled_base_stats is not None else template
            self._apply_item_bonuses(bonus, base_source, factor)

            for rolled, affix_id in (
                (item.rolled_prefix, item.prefix_id),
                (item.rolled_suffix, item.suffix_id),
            ):
                # Items without rolled values fall back to the affix definition
                if rolled is None and affix_id and affixes:
                    rolled = affixes.get(affix_id)
                if rolled is not None:
                    self._apply_affix_bonuses(bonus, rolled, affix_factor)

        for key, value in bonus.primary.items():
            primary[key] += value

        weapon = self.get_main_hand_template(character, item_templates)

        base_attacks = weapon.attacks_per_round if weapon and weapon.attacks_per_round else 1
        attacks_per_round = round(base_attacks + bonus.attacks_per_round + buff_attacks, 2)

        max_health = BASE_HEALTH + primary["stamina"] * HEALTH_PER_STAMINA + int(bonus.max_health)
        if max_health < 1:
            max_health = BASE_HEALTH

        max_energy = BASE_ENERGY + primary["energy"] // 2

        max_mana = BASE_MANA + primary["intelligence"] * MANA_PER_INTELLIGENCE
        active = set(character.active_skills)
        for skill in skills:
            if skill.id in active:
                max_mana -= skill.mana_maintenance_cost
        max_mana = max(0, max_mana)

        if weapon is not None and weapon.is_magical:
            min_damage = BASE_MIN_DAMAGE + bonus.damage_min
            max_damage = BASE_MAX_DAMAGE + bonus.damage_max
        elif weapon is not None and weapon.is_ranged:
            min_damage = BASE_MIN_DAMAGE + primary["agility"] + bonus.damage_min
            max_damage = BASE_MAX_DAMAGE + primary["agility"] * 2 + bonus.damage_max
        else:
            min_damage = BASE_MIN_DAMAGE + primary["strength"] + bonus.damage_min
            max_damage = BASE_MAX_DAMAGE + primary["strength"] * 2 + bonus.damage_max

        crit_chance = primary["accuracy"] * CRIT_CHANCE_PER_ACCURACY + bonus.crit_chance
        crit_damage_modifier = BASE_CRIT_DAMAGE_MODIFIER + bonus.crit_damage_modifier
        dodge_chance = primary["agility"] * DODGE_CHANCE_PER_AGILITY + bonus.dodge_chance

        armor = bonus.armor
        mana_regen = primary["intelligence"] * MANA_REGEN_PER_INTELLIGENCE

        if character.race == Race.DWARF:
            armor += DWARF_ARMOR_BONUS
        if character.race == Race.ELF:
            mana_regen += ELF_MANA_REGEN_BONUS
        if character.race == Race.GNOME:
            dodge_chance += GNOME_DODGE_BONUS

        intelligence_bonus = math.floor(primary["intelligence"] * MAGIC_DAMAGE_PER_INTELLIGENCE)
        magic_min = bonus.magic_damage_min + intelligence_bonus if bonus.magic_damage_min > 0 else 0
        magic_max = bonus.magic_damage_max + intelligence_bonus if bonus.magic_damage_max > 0 else 0

        # Barracks multiplier goes last
        if guild_barracks_level > 0:
            multiplier = 1 + guild_barracks_level * BARRACKS_DAMAGE_PER_LEVEL
            min_damage = math.floor(min_damage * multiplier)
            max_damage = math.floor(max_damage * multiplier)
            magic_min = math.floor(magic_min * multiplier)
            magic_max = math.floor(magic_max * multiplier)

        return CharacterStats(
            strength=int(primary["strength"]),
            agility=int(primary["agility"]),
            accuracy=int(primary["accuracy"]),
            stamina=int(primary["stamina"]),
            intelligence=int(primary["intelligence"]),
            energy=int(primary["energy"]),
            luck=int(primary["luck"]),
            max_health=int(max_health),
            max_mana=int(max_mana),
            max_energy=int(max_energy),
            current_health=self._current_pool(character.current_health, int(max_health)),
            current_mana=self._current_pool(character.current_mana, int(max_mana)),
            current_energy=self._current_pool(character.current_energy, int(max_energy)),
            min_damage=int(min_damage),
            max_damage=int(max_damage),
            magic_damage_min=int(magic_min),
            magic_damage_max=int(magic_max),
            crit_chance=crit_chance,
            crit_damage_modifier=int(crit_damage_modifier),
            attacks_per_round=attacks_per_round,
            armor_penetration_percent=bonus.armor_penetration_percent,
            armor_penetration_flat=int(bonus.armor_penetration_flat),
            life_steal_percent=bonus.life_steal_percent,
            life_steal_flat=int(bonus.life_steal_flat),
            mana_steal_percent=bonus.mana_steal_percent,
            mana_steal_flat=int(bonus.mana_steal_flat),
            armor=int(armor),
            dodge_chance=dodge_chance,
            mana_regen=int(mana_regen),
        )

    @staticmethod
    def get_main_hand_template(
        character: Character,
        item_templates: Mapping[str, ItemTemplate],
    ) -> Optional[ItemTemplate]:
        """Template of the weapon used for attacks (two-handed wins over main hand)."""
        item = character.equipment.get(EquipmentSlot.TWO_HAND) or character.equipment.get(
            EquipmentSlot.MAIN_HAND
        )
        if item is None:
            return None
        return item_templates.get(item.template_id)

    @staticmethod
    def _apply_item_bonuses(bonus: _BonusTotals, source: ItemBonuses, factor: float) -> None:
        """Add template (or rolled base) bonuses scaled by the item's upgrade level."""

        def scaled(value) -> float:
            v = resolve_stat(value)
            return v + js_round(v * factor)

        for key, value in source.stats_bonus.items():
            bonus.primary[key] = bonus.primary.get(key, 0) + scaled(value)

        bonus.damage_min += scaled(source.damage_min)
        bonus.damage_max += scaled(source.damage_max)
        bonus.magic_damage_min += scaled(source.magic_damage_min)
        bonus.magic_damage_max += scaled(source.magic_damage_max)
        bonus.armor += scaled(source.armor_bonus)
        bonus.max_health += scaled(source.max_health_bonus)

        crit = resolve_stat(source.crit_chance_bonus)
        bonus.crit_chance += crit + crit * factor

        bonus.crit_damage_modifier += scaled(source.crit_damage_modifier_bonus)
        bonus.armor_penetration_flat += scaled(source.armor_penetration_flat)
        bonus.life_steal_flat += scaled(source.life_steal_flat)
        bonus.mana_steal_flat += scaled(source.mana_steal_flat)

        # Percent bonuses do not scale with upgrades
        bonus.armor_penetration_percent += resolve_stat(source.armor_penetration_percent)
        bonus.life_steal_percent += resolve_stat(source.life_steal_percent)
        bonus.mana_steal_percent += resolve_stat(source.mana_steal_percent)

    @staticmethod
    def _apply_affix_bonuses(bonus: _BonusTotals, source: ItemBonuses, factor: float) -> None:
        """Add rolled prefix/suffix bonuses; upgrade scaling is capped at +5."""

        def scaled(value) -> float:
            v = resolve_stat(value)
            return v + js_round(v * factor)

        def scaled_float(value) -> float:
            v = resolve_stat(value)
            return v + v * factor

        for key, value in source.stats_bonus.items():
            bonus.primary[key] = bonus.primary.get(key, 0) + scaled(value)

        bonus.damage_min += scaled(source.damage_min)
        bonus.damage_max += scaled(source.damage_max)
        bonus.magic_damage_min += scaled(source.magic_damage_min)
        bonus.magic_damage_max += scaled(source.magic_damage_max)
        bonus.armor += scaled(source.armor_bonus)
        bonus.crit_chance += scaled_float(source.crit_chance_bonus)
        bonus.max_health += scaled(source.max_health_bonus)
        bonus.crit_damage_modifier += scaled(source.crit_damage_modifier_bonus)
        bonus.armor_penetration_percent += scaled(source.armor_penetration_percent)
        bonus.armor_penetration_flat += scaled(source.armor_penetration_flat)
        bonus.life_steal_percent += scaled(source.life_steal_percent)
        bonus.life_steal_flat += scaled(source.life_steal_flat)
        bonus.mana_steal_percent += scaled(source.mana_steal_percent)
        bonus.mana_steal_flat += scaled(source.mana_steal_flat)
        bonus.attacks_per_round += resolve_stat(source.attacks_per_round_bonus)
        bonus.dodge_chance += scaled_float(source.dodge_chance_bonus)

    @staticmethod
    def _current_pool(value: Optional[int], maximum: int) -> int:
        if value is None:
            return maximum
        return min(value, maximum)

    def compare(self, before: CharacterStats, after: CharacterStats) -> dict[str, float]:
        """
        Per-stat difference between two stat sets (after - before).

        Used by the equipment screen to preview an item swap. Only
        changed stats are returned.
        """
        before_d = before.to_dict()
        after_d = after.to_dict()
        return {
            key: after_d[key] - before_d[key]
            for key in before_d
            if after_d[key] != before_d[key]
        }


def derive_stats(
    character: Character,
    item_templates: Mapping[str, ItemTemplate],
    affixes: Optional[Mapping[str, Affix]] = None,
    guild_barracks_level: int = 0,
    guild_shrine_level: int = 0,
    skills: Iterable[Skill] = (),
    active_guild_buffs: Iterable[GuildBuff] = (),
    now_ms: Optional[int] = None,
) -> CharacterStats:
    """Convenience wrapper around StatCalculator.calculate_stats."""
    return StatCalculator().calculate_stats(
        character,
        item_templates,
        affixes,
        guild_barracks_level=guild_barracks_level,
        guild_shrine_level=guild_shrine_level,
        skills=skills,
        active_guild_buffs=active_guild_buffs,
        now_ms=now_ms,
    )
