"""Encounter orchestration: expeditions, towers and PvP duels."""

from .fighters import (
    derive_character_stats,
    player_combatant,
    character_as_enemy,
    spawn_enemy,
    weapon_display_name,
)
from .expedition import ExpeditionSystem, ExpeditionResult
from .tower import TowerSystem, TowerRun, TowerRunStatus, FloorResult, RetreatResult
from .pvp import PvpSystem, PvpResult, calculate_honor_change

__all__ = [
    "derive_character_stats",
    "player_combatant",
    "character_as_enemy",
    "spawn_enemy",
    "weapon_display_name",
    "ExpeditionSystem",
    "ExpeditionResult",
    "TowerSystem",
    "TowerRun",
    "TowerRunStatus",
    "FloorResult",
    "RetreatResult",
    "PvpSystem",
    "PvpResult",
    "calculate_honor_change",
]
