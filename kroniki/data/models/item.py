"""Item, affix and loot data models for Kroniki Mroku."""

from enum import StrEnum
from typing import Optional, Union

from pydantic import BaseModel, Field


class Attribute(StrEnum):
    """Primary attribute names."""
    STRENGTH = "strength"
    AGILITY = "agility"
    ACCURACY = "accuracy"
    STAMINA = "stamina"
    INTELLIGENCE = "intelligence"
    ENERGY = "energy"
    LUCK = "luck"


class ItemRarity(StrEnum):
    """Item rarity tiers, lowest first."""
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


RARITY_ORDER: list[ItemRarity] = [
    ItemRarity.COMMON,
    ItemRarity.UNCOMMON,
    ItemRarity.RARE,
    ItemRarity.EPIC,
    ItemRarity.LEGENDARY,
]


class ItemCategory(StrEnum):
    """Item category (drives affix spawn chances)."""
    WEAPON = "Weapon"
    ARMOR = "Armor"
    JEWELRY = "Jewelry"


class EquipmentSlot(StrEnum):
    """Equipment slots on a character."""
    HEAD = "head"
    NECK = "neck"
    CHEST = "chest"
    HANDS = "hands"
    WAIST = "waist"
    LEGS = "legs"
    FEET = "feet"
    RING1 = "ring1"
    RING2 = "ring2"
    MAIN_HAND = "mainHand"
    OFF_HAND = "offHand"
    TWO_HAND = "twoHand"


class EssenceType(StrEnum):
    """Crafting essences, lowest tier first."""
    COMMON = "commonEssence"
    UNCOMMON = "uncommonEssence"
    RARE = "rareEssence"
    EPIC = "epicEssence"
    LEGENDARY = "legendaryEssence"


class MagicAttackType(StrEnum):
    """Spell names used by magical weapons and enemy casters."""
    FIREBALL = "Fireball"
    LIGHTNING_STRIKE = "LightningStrike"
    SHADOW_BOLT = "ShadowBolt"
    FROST_WAVE = "FrostWave"
    CHAIN_LIGHTNING = "ChainLightning"
    ICE_LANCE = "IceLance"
    ARCANE_MISSILE = "ArcaneMissile"
    LIFE_DRAIN = "LifeDrain"
    METEOR_SWARM = "MeteorSwarm"
    EARTHQUAKE = "Earthquake"


class AffixType(StrEnum):
    """Where an affix sits in the item name."""
    PREFIX = "Prefix"
    SUFFIX = "Suffix"


class StatRange(BaseModel):
    """Inclusive integer range for rolled values."""
    min: float = 0
    max: float = 0


# A catalog bonus is either a fixed number or a range to roll
StatValue = Union[int, float, StatRange]


def resolve_stat(value: Optional[StatValue]) -> float:
    """Concrete value of a catalog bonus; ranges resolve to their max."""
    if value is None:
        return 0
    if isinstance(value, StatRange):
        return value.max
    return value


class ItemBonuses(BaseModel):
    """Numeric bonuses shared by item templates, affixes and rolled stats."""
    stats_bonus: dict[Attribute, StatValue] = Field(default_factory=dict, description="Primary attribute bonuses")
    damage_min: Optional[StatValue] = None
    damage_max: Optional[StatValue] = None
    magic_damage_min: Optional[StatValue] = None
    magic_damage_max: Optional[StatValue] = None
    armor_bonus: Optional[StatValue] = None
    crit_chance_bonus: Optional[StatValue] = None
    max_health_bonus: Optional[StatValue] = None
    crit_damage_modifier_bonus: Optional[StatValue] = None
    armor_penetration_percent: Optional[StatValue] = None
    armor_penetration_flat: Optional[StatValue] = None
    life_steal_percent: Optional[StatValue] = None
    life_steal_flat: Optional[StatValue] = None
    mana_steal_percent: Optional[StatValue] = None
    mana_steal_flat: Optional[StatValue] = None
    attacks_per_round_bonus: Optional[StatValue] = None
    dodge_chance_bonus: Optional[StatValue] = None

    model_config = {"use_enum_values": True}


class ItemTemplate(ItemBonuses):
    """Static, shared item definition."""
    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    slot: EquipmentSlot
    category: ItemCategory
    rarity: ItemRarity = ItemRarity.COMMON
    required_level: int = Field(default=1, ge=1)
    required_stats: dict[Attribute, int] = Field(default_factory=dict)
    value: int = Field(default=0, ge=0, description="Vendor price in gold")

    # Weapon metadata
    attacks_per_round: Optional[float] = Field(default=None, description="Weapon attacks per round")
    is_magical: bool = False
    is_ranged: bool = False
    magic_attack_type: Optional[MagicAttackType] = None
    mana_cost: Optional[StatRange] = Field(default=None, description="Mana spent per magic attack")


class Affix(ItemBonuses):
    """Rollable prefix/suffix definition."""
    id: str
    name: str
    type: AffixType
    spawn_chances: dict[ItemCategory, float] = Field(
        default_factory=dict, description="Percent chance per item category"
    )
    required_level: int = Field(default=1, ge=1)


class ItemInstance(BaseModel):
    """A concrete item owned by a character."""
    unique_id: str = Field(..., description="Per-instance identifier")
    template_id: str
    upgrade_level: int = Field(default=0, ge=0, le=10)
    rolled_base_stats: Optional[ItemBonuses] = None
    prefix_id: Optional[str] = None
    suffix_id: Optional[str] = None
    rolled_prefix: Optional[ItemBonuses] = None
    rolled_suffix: Optional[ItemBonuses] = None


class LootDrop(BaseModel):
    """Loot table entry: a template with a percent drop chance."""
    template_id: str
    chance: float = Field(..., ge=0, le=100)


class ResourceDrop(BaseModel):
    """Resource table entry: an essence with a percent chance and an amount range."""
    resource: EssenceType
    chance: float = Field(..., ge=0, le=100)
    min: int = Field(default=1, ge=0)
    max: int = Field(default=1, ge=0)

    model_config = {"use_enum_values": True}
