"""Combat log entries.

The log is what the client replays, so entries serialise with the
camelCase keys the front-end indexes by.
"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CombatAction(StrEnum):
    """Kinds of log events."""
    START = "start"
    ATTACK = "attack"
    DODGE = "dodge"
    MANA_REGEN = "manaRegen"
    NOT_ENOUGH_MANA = "notEnoughMana"
    HARD_SKIN = "hardSkinProc"
    HUNTER_BONUS_SHOT = "hunter_bonus_shot"
    BERSERKER_FRENZY = "berserker_frenzy"


class CombatLogEntry(BaseModel):
    """One immutable event within a turn, with the pool snapshot after it."""
    turn: int
    attacker: str
    defender: str
    action: CombatAction
    damage: Optional[int] = None
    is_crit: Optional[bool] = None
    is_dodge: Optional[bool] = None
    damage_reduced: Optional[int] = None
    health_gained: Optional[int] = None
    mana_gained: Optional[int] = None
    mana_spent: Optional[int] = None
    magic_attack_type: Optional[str] = None
    weapon_name: Optional[str] = None
    player_health: int
    player_mana: int
    enemy_health: int
    enemy_mana: int

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
        "use_enum_values": True,
    }

    def to_client(self) -> dict:
        """Wire form: camelCase keys, unset optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


def serialize_log(entries: list[CombatLogEntry]) -> list[dict]:
    return [entry.to_client() for entry in entries]
