"""Kroniki Mroku game-balance constants."""

from typing import Final

# =============================================================================
# CHARACTER BASE VALUES
# =============================================================================
BASE_HEALTH: Final[int] = 50
BASE_MANA: Final[int] = 20
BASE_ENERGY: Final[int] = 10
BASE_MIN_DAMAGE: Final[int] = 1
BASE_MAX_DAMAGE: Final[int] = 2
BASE_CRIT_DAMAGE_MODIFIER: Final[int] = 200

HEALTH_PER_STAMINA: Final[int] = 10
MANA_PER_INTELLIGENCE: Final[int] = 10
MANA_REGEN_PER_INTELLIGENCE: Final[int] = 2
CRIT_CHANCE_PER_ACCURACY: Final[float] = 0.5
DODGE_CHANCE_PER_AGILITY: Final[float] = 0.1
MAGIC_DAMAGE_PER_INTELLIGENCE: Final[float] = 1.5

# =============================================================================
# ITEM UPGRADES
# =============================================================================
UPGRADE_FACTOR_PER_LEVEL: Final[float] = 0.1
MAX_UPGRADE_LEVEL: Final[int] = 10
# Affix bonuses stop scaling after +5
MAX_AFFIX_UPGRADE_LEVEL: Final[int] = 5

# =============================================================================
# RACE BONUSES
# =============================================================================
DWARF_ARMOR_BONUS: Final[int] = 5
ELF_MANA_REGEN_BONUS: Final[int] = 10
GNOME_DODGE_BONUS: Final[float] = 10.0
HUMAN_EXPERIENCE_MULTIPLIER: Final[float] = 1.1
GNOME_GOLD_MULTIPLIER: Final[float] = 1.2

# Combat race effects
GNOME_ENEMY_DODGE_CHANCE: Final[float] = 10.0
ORC_FURY_HEALTH_THRESHOLD: Final[float] = 0.25
ORC_FURY_DAMAGE_MULTIPLIER: Final[float] = 1.25
DWARF_RESILIENCE_HEALTH_THRESHOLD: Final[float] = 0.5
DWARF_RESILIENCE_REDUCTION: Final[float] = 0.2

# =============================================================================
# CLASS POWERS & SKILLS
# =============================================================================
HUNTER_BONUS_SHOT_DAMAGE_RATIO: Final[float] = 0.5
BERSERKER_FRENZY_HEALTH_THRESHOLD: Final[float] = 0.3
THIEF_GOLD_MULTIPLIER: Final[float] = 1.25
ENGINEER_DOUBLE_ESSENCE_CHANCE: Final[float] = 50.0
DRUID_EXPEDITION_HEAL_RATIO: Final[float] = 0.5
# Independent chances for extra guaranteed loot rolls
DUNGEON_HUNTER_BONUS_LOOT_CHANCES: Final[list[float]] = [30.0, 15.0]

# Learned: halves the first critical hit taken in a fight
HARD_SKIN_SKILL_ID: Final[str] = "hard_skin"
HARD_SKIN_CRIT_REDUCTION: Final[float] = 0.5
# Active: one more item may drop on an expedition
THOROUGH_SEARCH_SKILL_ID: Final[str] = "thorough_search"

# =============================================================================
# GUILD
# =============================================================================
BARRACKS_DAMAGE_PER_LEVEL: Final[float] = 0.05
SHRINE_LUCK_PER_LEVEL: Final[int] = 5

# =============================================================================
# COMBAT
# =============================================================================
MAX_COMBAT_TURNS: Final[int] = 50
ARMOR_REDUCTION_FACTOR: Final[float] = 0.5
DODGE_PER_AGILITY_OVER_ACCURACY: Final[float] = 0.1

# =============================================================================
# PROGRESSION
# =============================================================================
EXPERIENCE_BASE: Final[int] = 100
EXPERIENCE_EXPONENT: Final[float] = 1.3
STAT_POINTS_PER_LEVEL: Final[int] = 1

# =============================================================================
# INVENTORY & LOOT
# =============================================================================
BACKPACK_BASE_CAPACITY: Final[int] = 40
BACKPACK_CAPACITY_PER_LEVEL: Final[int] = 10

# Luck at which rolls always land on the top of their range
LUCK_ROLL_CAP: Final[int] = 1000
RARITY_UPGRADE_CHANCE_PER_LUCK: Final[float] = 0.05
AFFIX_SECOND_CHANCE_PER_LUCK: Final[float] = 0.1
# Chance per luck point for pre-upgraded drops: +1, then +2, then +3
PRE_UPGRADE_CHANCE_PER_LUCK: Final[list[float]] = [0.15, 0.075, 0.03]

# =============================================================================
# PVP
# =============================================================================
PVP_GOLD_STEAL_RATIO: Final[float] = 0.1
PVP_EXPERIENCE_RATIO: Final[float] = 0.1
PVP_MAX_HONOR_CHANGE: Final[int] = 5
PVP_ENERGY_COST: Final[int] = 3
