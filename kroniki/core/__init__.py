# Core game rules
from .constants import (
    MAX_COMBAT_TURNS,
    STAT_POINTS_PER_LEVEL,
    BACKPACK_BASE_CAPACITY,
)
from .exceptions import (
    KronikiError,
    UnknownEntityError,
    InvalidRunStateError,
    GameDataError,
)
from .probability import roll_range, roll_percent, pick_weighted
from .stat_calculator import CharacterStats, StatCalculator, derive_stats, js_round
from .progression import (
    experience_to_next_level,
    calculate_total_experience,
    apply_level_ups,
)
from .rewards import (
    RewardSource,
    RewardBundle,
    backpack_capacity,
    apply_race_multipliers,
    apply_class_multipliers,
    apply_experience_buffs,
    roll_loot,
    roll_resources,
    bank_rewards,
)
from .items import ItemFactory, roll_value_with_luck, new_unique_id
from .logging_setup import setup_logging

__all__ = [
    "MAX_COMBAT_TURNS",
    "STAT_POINTS_PER_LEVEL",
    "BACKPACK_BASE_CAPACITY",
    "KronikiError",
    "UnknownEntityError",
    "InvalidRunStateError",
    "GameDataError",
    "roll_range",
    "roll_percent",
    "pick_weighted",
    "CharacterStats",
    "StatCalculator",
    "derive_stats",
    "js_round",
    "experience_to_next_level",
    "calculate_total_experience",
    "apply_level_ups",
    "RewardSource",
    "RewardBundle",
    "backpack_capacity",
    "apply_race_multipliers",
    "apply_class_multipliers",
    "apply_experience_buffs",
    "roll_loot",
    "roll_resources",
    "bank_rewards",
    "ItemFactory",
    "roll_value_with_luck",
    "new_unique_id",
    "setup_logging",
]
