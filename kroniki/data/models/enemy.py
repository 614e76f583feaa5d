"""Enemy data model for Kroniki Mroku."""

from typing import Optional

from pydantic import BaseModel, Field

from .item import LootDrop, MagicAttackType, ResourceDrop


class EnemyStats(BaseModel):
    """Combat statistics of an enemy template."""
    max_health: int = Field(default=1, ge=1)
    min_damage: int = Field(default=1, ge=0)
    max_damage: int = Field(default=1, ge=0)
    armor: int = Field(default=0, ge=0)
    crit_chance: float = Field(default=0, ge=0)
    crit_damage_modifier: int = Field(default=150, description="Crit multiplier in percent")
    agility: int = Field(default=1, ge=0)
    accuracy: int = Field(default=0, ge=0)
    dodge_chance: float = Field(default=0, ge=0, description="Informational only")
    max_mana: int = Field(default=0, ge=0)
    mana_regen: int = Field(default=0, ge=0)
    magic_damage_min: int = Field(default=0, ge=0)
    magic_damage_max: int = Field(default=0, ge=0)
    magic_attack_chance: float = Field(default=0, ge=0, le=100)
    magic_attack_mana_cost: int = Field(default=0, ge=0)
    magic_attack_type: Optional[MagicAttackType] = None
    attacks_per_turn: float = Field(default=1, gt=0)
    armor_penetration_percent: float = 0
    armor_penetration_flat: int = 0

    model_config = {"use_enum_values": True}


class Enemy(BaseModel):
    """Enemy template from the catalog (or a per-encounter spawn of one)."""
    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    level: int = Field(default=1, ge=1)
    race: Optional[str] = Field(default=None, description="Race name, if the enemy has one")
    stats: EnemyStats = Field(default_factory=EnemyStats)
    min_gold: int = Field(default=0, ge=0)
    max_gold: int = Field(default=0, ge=0)
    min_experience: int = Field(default=0, ge=0)
    max_experience: int = Field(default=0, ge=0)
    loot_table: list[LootDrop] = Field(default_factory=list)
    resource_loot_table: list[ResourceDrop] = Field(default_factory=list)
    unique_id: Optional[str] = Field(default=None, description="Set when spawned into an encounter")
