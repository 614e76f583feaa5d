"""Turn character documents and enemy templates into combatants."""

import random
from dataclasses import replace
from typing import Optional

from kroniki.combat.combatant import Combatant
from kroniki.core.items import new_unique_id
from kroniki.core.stat_calculator import CharacterStats, StatCalculator
from kroniki.data.models.character import Character
from kroniki.data.models.enemy import Enemy, EnemyStats
from kroniki.data.models.game_data import GameData
from kroniki.data.models.guild import GuildContext
from kroniki.data.models.item import EquipmentSlot


def derive_character_stats(
    character: Character,
    game_data: GameData,
    guild: Optional[GuildContext] = None,
    now_ms: Optional[int] = None,
) -> CharacterStats:
    """Derived stats of a character with its guild context."""
    guild = guild or GuildContext()
    return StatCalculator().calculate_stats(
        character,
        game_data.item_index,
        game_data.affix_index,
        guild_barracks_level=guild.barracks_level,
        guild_shrine_level=guild.shrine_level,
        skills=game_data.skills,
        active_guild_buffs=guild.active_buffs,
        now_ms=now_ms,
    )


def weapon_display_name(character: Character, game_data: GameData) -> Optional[str]:
    """Full weapon name with affixes and upgrade level, e.g. "Sharp Sword of Fury +3"."""
    item = character.equipment.get(EquipmentSlot.TWO_HAND) or character.equipment.get(
        EquipmentSlot.MAIN_HAND
    )
    if item is None:
        return None
    template = game_data.get_item_template(item.template_id)
    if template is None:
        return None

    prefix = game_data.get_affix(item.prefix_id) if item.prefix_id else None
    suffix = game_data.get_affix(item.suffix_id) if item.suffix_id else None
    parts = [prefix.name if prefix else "", template.name, suffix.name if suffix else ""]
    name = " ".join(p for p in parts if p)
    if item.upgrade_level > 0:
        name = f"{name} +{item.upgrade_level}"
    return name


def player_combatant(
    character: Character,
    stats: CharacterStats,
    game_data: GameData,
    health: Optional[int] = None,
    mana: Optional[int] = None,
) -> Combatant:
    """
    Player-kind combatant for a character.

    Args:
        health: Override for the starting health (carried between fights)
        mana: Override for the starting mana
    """
    if health is not None:
        stats = replace(stats, current_health=min(health, stats.max_health))
    if mana is not None:
        stats = replace(stats, current_mana=min(mana, stats.max_mana))

    return Combatant.from_character(
        name=character.name,
        race=character.race,
        stats=stats,
        weapon_template=StatCalculator.get_main_hand_template(character, game_data.item_index),
        weapon_name=weapon_display_name(character, game_data),
        character_class=character.character_class,
        learned_skills=character.learned_skills,
    )


def character_as_enemy(character: Character, stats: CharacterStats) -> Enemy:
    """
    Convert a PvP defender into an enemy template.

    The defender fights at full health, keeps its race and never casts.
    """
    return Enemy(
        id=character.id,
        name=character.name,
        level=character.level,
        race=character.race,
        stats=EnemyStats(
            max_health=stats.max_health,
            min_damage=stats.min_damage,
            max_damage=stats.max_damage,
            armor=stats.armor,
            crit_chance=stats.crit_chance,
            crit_damage_modifier=stats.crit_damage_modifier,
            agility=stats.agility,
            accuracy=stats.accuracy,
            dodge_chance=stats.dodge_chance,
            max_mana=stats.max_mana,
            mana_regen=stats.mana_regen,
            magic_damage_min=stats.magic_damage_min,
            magic_damage_max=stats.magic_damage_max,
            magic_attack_chance=0,
            magic_attack_mana_cost=0,
            attacks_per_turn=stats.attacks_per_round,
            armor_penetration_percent=stats.armor_penetration_percent,
            armor_penetration_flat=stats.armor_penetration_flat,
        ),
    )


def spawn_enemy(template: Enemy, rng: random.Random) -> Enemy:
    """Per-encounter copy of an enemy template with its own unique id."""
    return template.model_copy(update={"unique_id": new_unique_id(rng)}, deep=True)
