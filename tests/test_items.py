"""Tests for item creation."""

import pytest
import random

from kroniki.core.items import ItemFactory, new_unique_id, roll_value_with_luck
from kroniki.data.models import (
    Affix,
    AffixType,
    EquipmentSlot,
    GameData,
    ItemCategory,
    ItemRarity,
    ItemTemplate,
    StatRange,
)


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def create_game_data() -> GameData:
    """Small catalog: two sword tiers, a helmet and two weapon affixes."""
    return GameData(
        item_templates=[
            ItemTemplate(
                id="iron_sword",
                name="Iron Sword",
                slot=EquipmentSlot.MAIN_HAND,
                category=ItemCategory.WEAPON,
                rarity=ItemRarity.COMMON,
                damage_min=StatRange(min=2, max=4),
                damage_max=6,
            ),
            ItemTemplate(
                id="steel_sword",
                name="Steel Sword",
                slot=EquipmentSlot.MAIN_HAND,
                category=ItemCategory.WEAPON,
                rarity=ItemRarity.UNCOMMON,
                required_level=2,
                damage_min=5,
                damage_max=9,
            ),
            ItemTemplate(
                id="leather_cap",
                name="Leather Cap",
                slot=EquipmentSlot.HEAD,
                category=ItemCategory.ARMOR,
                armor_bonus=3,
            ),
        ],
        affixes=[
            Affix(
                id="sharp",
                name="Sharp",
                type=AffixType.PREFIX,
                spawn_chances={ItemCategory.WEAPON: 20},
                damage_max=StatRange(min=2, max=4),
            ),
            Affix(
                id="of_fury",
                name="of Fury",
                type=AffixType.SUFFIX,
                spawn_chances={ItemCategory.WEAPON: 10},
                attacks_per_round_bonus=0.5,
            ),
        ],
    )


class TestLuckRolls:
    """Tests for luck-weighted value rolls."""

    def test_fixed_value_unchanged(self):
        assert roll_value_with_luck(7, 0, FixedRandom(0.5)) == 7

    def test_missing_value(self):
        assert roll_value_with_luck(None, 0, FixedRandom(0.5)) is None

    def test_range_without_luck(self):
        assert roll_value_with_luck(StatRange(min=2, max=4), 0, FixedRandom(0.0)) == 2
        assert roll_value_with_luck(StatRange(min=2, max=4), 0, FixedRandom(0.5)) == 3

    def test_max_luck_hits_top(self):
        assert roll_value_with_luck(StatRange(min=2, max=40), 1000, FixedRandom(0.0)) == 40

    def test_luck_raises_floor(self):
        # luck 500: weighted = 0.0 * 0.5 + 0.5
        assert roll_value_with_luck(StatRange(min=0, max=9), 500, FixedRandom(0.0)) == 5


class TestItemFactory:
    """Tests for ItemFactory."""

    @pytest.fixture
    def game_data(self):
        return create_game_data()

    def test_unknown_template_gives_bare_item(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.5)).create("missing")

        assert item.template_id == "missing"
        assert item.rolled_base_stats is None

    def test_rolls_base_stats(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.99)).create("iron_sword")

        assert item.rolled_base_stats.damage_min == 4
        assert item.rolled_base_stats.damage_max == 6
        assert item.prefix_id is None
        assert item.suffix_id is None
        assert item.upgrade_level == 0

    def test_affixes_spawn(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.05)).create("iron_sword")

        assert item.prefix_id == "sharp"
        assert item.rolled_prefix.damage_max == 2
        assert item.suffix_id == "of_fury"
        assert item.rolled_suffix.attacks_per_round_bonus == 0.5

    def test_affixes_disabled(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.05)).create("iron_sword", allow_affixes=False)

        assert item.prefix_id is None
        assert item.suffix_id is None

    def test_no_affix_for_other_category(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.0)).create("leather_cap")

        assert item.prefix_id is None
        assert item.rolled_base_stats.armor_bonus == 3

    def test_rarity_upgrade_and_pre_upgrade(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.5)).create("iron_sword", luck=2000, finder_level=5)

        assert item.template_id == "steel_sword"
        assert item.upgrade_level == 3

    def test_rarity_upgrade_respects_finder_level(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.5)).create(
            "iron_sword", luck=2000, finder_level=1, allow_affixes=False
        )

        assert item.template_id == "iron_sword"

    def test_no_finder_no_upgrades(self, game_data):
        item = ItemFactory(game_data, FixedRandom(0.5)).create("iron_sword", luck=2000)

        assert item.template_id == "iron_sword"
        assert item.upgrade_level == 0

    def test_luck_second_chance_affix(self, game_data):
        # 50 misses both spawn chances but hits the 100% second chance
        item = ItemFactory(game_data, FixedRandom(0.5)).create(
            "iron_sword", luck=1000, finder_level=1
        )

        assert item.prefix_id == "sharp"
        assert item.suffix_id == "of_fury"


class TestUniqueIds:
    """Tests for RNG-drawn unique ids."""

    def test_seeded_ids_repeat(self):
        assert new_unique_id(random.Random(7)) == new_unique_id(random.Random(7))

    def test_ids_differ_within_stream(self):
        rng = random.Random(7)
        assert new_unique_id(rng) != new_unique_id(rng)
