# Data Models
from .item import (
    Attribute,
    ItemRarity,
    ItemCategory,
    EquipmentSlot,
    EssenceType,
    MagicAttackType,
    AffixType,
    StatRange,
    ItemBonuses,
    ItemTemplate,
    Affix,
    ItemInstance,
    LootDrop,
    ResourceDrop,
)
from .character import Race, CharacterClass, PrimaryAttributes, Resources, PvpRecord, Character
from .enemy import Enemy, EnemyStats
from .world import EnemySpawn, Expedition, FloorReward, TowerFloor, GrandPrize, Tower
from .guild import GuildBuff, GuildContext, Skill
from .game_data import GameData

__all__ = [
    "Attribute",
    "ItemRarity",
    "ItemCategory",
    "EquipmentSlot",
    "EssenceType",
    "MagicAttackType",
    "AffixType",
    "StatRange",
    "ItemBonuses",
    "ItemTemplate",
    "Affix",
    "ItemInstance",
    "LootDrop",
    "ResourceDrop",
    "Race",
    "CharacterClass",
    "PrimaryAttributes",
    "Resources",
    "PvpRecord",
    "Character",
    "Enemy",
    "EnemyStats",
    "EnemySpawn",
    "Expedition",
    "FloorReward",
    "TowerFloor",
    "GrandPrize",
    "Tower",
    "GuildBuff",
    "GuildContext",
    "Skill",
    "GameData",
]
