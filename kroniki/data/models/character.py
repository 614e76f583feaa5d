"""Character document model for Kroniki Mroku."""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from .item import EquipmentSlot, ItemInstance, EssenceType


class Race(StrEnum):
    """Playable races."""
    HUMAN = "Human"
    ELF = "Elf"
    ORC = "Orc"
    GNOME = "Gnome"
    DWARF = "Dwarf"


class CharacterClass(StrEnum):
    """Character classes; only some carry combat or reward powers."""
    MAGE = "Mage"
    WARRIOR = "Warrior"
    ROGUE = "Rogue"
    WIZARD = "Wizard"
    HUNTER = "Hunter"
    DRUID = "Druid"
    SHAMAN = "Shaman"
    BERSERKER = "Berserker"
    BLACKSMITH = "Blacksmith"
    DUNGEON_HUNTER = "DungeonHunter"
    THIEF = "Thief"
    ENGINEER = "Engineer"


class PrimaryAttributes(BaseModel):
    """Player-allocated primary attributes."""
    strength: int = Field(default=0, ge=0)
    agility: int = Field(default=0, ge=0)
    accuracy: int = Field(default=0, ge=0)
    stamina: int = Field(default=0, ge=0)
    intelligence: int = Field(default=0, ge=0)
    energy: int = Field(default=0, ge=0)
    luck: int = Field(default=0, ge=0)


class Resources(BaseModel):
    """Gold and crafting essences held by a character."""
    gold: int = Field(default=0, ge=0)
    essences: dict[EssenceType, int] = Field(default_factory=dict)

    model_config = {"use_enum_values": True}


class PvpRecord(BaseModel):
    """Arena record."""
    wins: int = 0
    losses: int = 0
    honor: int = 0


class Character(BaseModel):
    """Persisted player character document."""
    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    race: Race
    character_class: Optional[CharacterClass] = Field(default=None, description="Chosen class")
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    experience_to_next_level: int = Field(default=100, ge=1)
    stat_points: int = Field(default=0, ge=0)
    stats: PrimaryAttributes = Field(default_factory=PrimaryAttributes)

    # Current pools; None means "full"
    current_health: Optional[int] = None
    current_mana: Optional[int] = None
    current_energy: Optional[int] = None

    equipment: dict[EquipmentSlot, ItemInstance] = Field(default_factory=dict)
    inventory: list[ItemInstance] = Field(default_factory=list)
    backpack_level: int = Field(default=1, ge=1)
    resources: Resources = Field(default_factory=Resources)

    learned_skills: list[str] = Field(default_factory=list, description="Learned skill IDs")
    active_skills: list[str] = Field(default_factory=list, description="Toggled-on skill IDs")
    pvp: PvpRecord = Field(default_factory=PvpRecord)

    model_config = {"use_enum_values": True}
