"""Combat module for Kroniki Mroku.

This module provides the 1v1 turn-based combat system:
- Combatant representation (player or enemy)
- Single sub-attack resolution
- The fight loop and its combat log
"""

# Combatants
from .combatant import (
    Combatant,
    CombatantKind,
    CombatantMeta,
    CombatantStats,
    WeaponProfile,
)

# Combat log
from .combat_log import CombatAction, CombatLogEntry, serialize_log

# Attack
from .attack import (
    AttackSystem,
    FightState,
    Slot,
    calculate_dodge_chance,
    calculate_armor_reduction,
)

# Combat Engine
from .combat_engine import CombatEngine, FightResult, resolve_fight

__all__ = [
    # Combatants
    "Combatant",
    "CombatantKind",
    "CombatantMeta",
    "CombatantStats",
    "WeaponProfile",
    # Combat log
    "CombatAction",
    "CombatLogEntry",
    "serialize_log",
    # Attack
    "AttackSystem",
    "FightState",
    "Slot",
    "calculate_dodge_chance",
    "calculate_armor_reduction",
    # Engine
    "CombatEngine",
    "FightResult",
    "resolve_fight",
]
