"""Tests for Expedition System."""

import pytest
import random

from kroniki.core.exceptions import UnknownEntityError
from kroniki.data.loaders import load_game_data
from kroniki.data.models import (
    Character,
    CharacterClass,
    GuildBuff,
    GuildContext,
    ItemInstance,
    PrimaryAttributes,
    Race,
)
from kroniki.encounters import ExpeditionSystem


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def create_character(race: Race = Race.HUMAN, strong: bool = True, **fields) -> Character:
    """Strong characters one-shot every dark forest enemy."""
    stats = PrimaryAttributes(strength=100, stamina=50, accuracy=10) if strong else PrimaryAttributes()
    return Character(id="char_1", name="Hero", race=race, stats=stats, **fields)


@pytest.fixture
def game_data():
    return load_game_data()


class TestSpawning:
    """Tests for enemy spawning."""

    def test_spawn_rolls_each_candidate(self, game_data):
        system = ExpeditionSystem(game_data, rng=FixedRandom(0.5))

        enemies = system.spawn_enemies(game_data.get_expedition("dark_forest"))

        assert sorted(e.id for e in enemies) == ["forest_wolf", "goblin_scout"]
        assert all(e.unique_id for e in enemies)
        assert enemies[0].unique_id != enemies[1].unique_id

    def test_spawn_chance_can_fail(self, game_data):
        system = ExpeditionSystem(game_data, rng=FixedRandom(0.5))

        enemies = system.spawn_enemies(game_data.get_expedition("haunted_crypt"))

        # The golem needs a roll under 50
        assert [e.id for e in enemies] == ["shadow_acolyte"]

    def test_spawn_cap(self, game_data):
        expedition = game_data.get_expedition("dark_forest").model_copy(update={"max_enemies": 1})
        system = ExpeditionSystem(game_data, rng=FixedRandom(0.0))

        assert len(system.spawn_enemies(expedition)) == 1


class TestExpeditionRun:
    """Tests for running expeditions."""

    def test_unknown_expedition(self, game_data):
        system = ExpeditionSystem(game_data, rng=random.Random(1))

        with pytest.raises(UnknownEntityError):
            system.run(create_character(), "nowhere")

    def test_victory_rewards(self, game_data):
        system = ExpeditionSystem(game_data, rng=FixedRandom(0.5))

        result = system.run(create_character(Race.ORC), "dark_forest")

        assert result.is_victory
        assert len(result.combat_logs) == 2
        # base 15 + wolf 6 + goblin 9; base 20 + wolf 8 + goblin 11
        assert result.rewards.gold == 30
        assert result.rewards.experience == 39
        assert result.rewards.breakdown[0].source == "Expedition: Dark Forest"
        assert len(result.rewards.breakdown) == 3
        assert result.character.resources.gold == 30
        assert result.character.experience == 39

    def test_human_experience_bonus(self, game_data):
        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(create_character(Race.HUMAN), "dark_forest")

        assert result.rewards.experience == 42

    def test_gnome_gold_bonus(self, game_data):
        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(create_character(Race.GNOME), "dark_forest")

        assert result.rewards.gold == 36

    def test_guild_experience_buff(self, game_data):
        guild = GuildContext(
            active_buffs=[GuildBuff(id="wisdom", name="Wisdom", exp_bonus=100, expires_at=10_000)]
        )

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(
            create_character(Race.ORC), "dark_forest", guild, now_ms=1_000
        )

        assert result.rewards.experience == 78

    def test_health_carries_between_fights(self, game_data):
        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(create_character(Race.ORC), "dark_forest")

        # The wolf hits for 3 and the goblin for 5 before dying
        assert result.character.current_health == 550 - 8

    def test_defeat_stops_and_gives_nothing(self, game_data):
        character = create_character(strong=False)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(character, "dark_forest")

        assert not result.is_victory
        assert len(result.combat_logs) == 1
        assert result.rewards.gold == 0
        assert result.character.resources.gold == 0
        assert result.character.current_health == 0

    def test_no_health_means_defeat(self, game_data):
        character = create_character(current_health=0)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(character, "dark_forest")

        assert not result.is_victory
        assert result.rewards.gold == 0

    def test_loot_and_essences(self, game_data):
        result = ExpeditionSystem(game_data, rng=FixedRandom(0.0)).run(create_character(Race.ORC), "dark_forest")

        assert result.is_victory
        assert sorted(i.template_id for i in result.rewards.items) == [
            "hunting_bow",
            "iron_sword",
            "leather_cap",
        ]
        assert len(result.character.inventory) == 3
        assert result.rewards.essences == {"commonEssence": 2}
        assert result.character.resources.essences["commonEssence"] == 2

    def test_full_backpack_loses_items(self, game_data):
        inventory = [ItemInstance(unique_id=f"junk_{i}", template_id="leather_cap") for i in range(39)]
        character = create_character(Race.ORC, inventory=inventory)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.0)).run(character, "dark_forest")

        assert len(result.rewards.items) == 1
        assert result.rewards.items_lost_count == 2
        assert len(result.character.inventory) == 40

    def test_input_character_untouched(self, game_data):
        character = create_character()
        before = character.model_dump()

        ExpeditionSystem(game_data, rng=random.Random(3)).run(character, "dark_forest")

        assert character.model_dump() == before

    def test_seeded_runs_repeat(self, game_data):
        first = ExpeditionSystem(game_data, rng=random.Random(99)).run(create_character(), "haunted_crypt")
        second = ExpeditionSystem(game_data, rng=random.Random(99)).run(create_character(), "haunted_crypt")

        assert first.model_dump() == second.model_dump()


def with_forest_item_cap(game_data, max_items: int):
    forest = game_data.get_expedition("dark_forest").model_copy(update={"max_items": max_items})
    return game_data.model_copy(update={"expeditions": [forest]})


class TestClassBonuses:
    """Tests for class and skill reward bonuses."""

    def test_thief_gold_bonus(self, game_data):
        character = create_character(Race.ORC, character_class=CharacterClass.THIEF)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(character, "dark_forest")

        assert result.rewards.gold == 37
        assert result.rewards.experience == 39

    def test_engineer_doubles_essences(self, game_data):
        character = create_character(Race.ORC, character_class=CharacterClass.ENGINEER)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.0)).run(character, "dark_forest")

        assert result.rewards.essences == {"commonEssence": 4}

    def test_druid_heals_after_victory(self, game_data):
        character = create_character(Race.ORC, character_class=CharacterClass.DRUID)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(character, "dark_forest")

        assert result.character.current_health == 550

    def test_druid_no_heal_on_defeat(self, game_data):
        character = create_character(strong=False, character_class=CharacterClass.DRUID)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.5)).run(character, "dark_forest")

        assert result.character.current_health == 0

    def test_dungeon_hunter_bonus_loot(self, game_data):
        character = create_character(Race.ORC, character_class=CharacterClass.DUNGEON_HUNTER)

        result = ExpeditionSystem(game_data, rng=FixedRandom(0.0)).run(character, "dark_forest")

        assert sorted(i.template_id for i in result.rewards.items) == [
            "hunting_bow",
            "iron_sword",
            "iron_sword",
            "iron_sword",
            "leather_cap",
        ]

    def test_item_cap(self, game_data):
        capped = with_forest_item_cap(game_data, 2)

        result = ExpeditionSystem(capped, rng=FixedRandom(0.0)).run(create_character(Race.ORC), "dark_forest")

        assert len(result.rewards.items) == 2

    def test_thorough_search_raises_item_cap(self, game_data):
        capped = with_forest_item_cap(game_data, 2)
        character = create_character(Race.ORC, active_skills=["thorough_search"])

        result = ExpeditionSystem(capped, rng=FixedRandom(0.0)).run(character, "dark_forest")

        assert len(result.rewards.items) == 3
