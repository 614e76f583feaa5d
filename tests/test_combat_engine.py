"""Tests for Combat Engine."""

import pytest
import random

from kroniki.combat import (
    CombatEngine,
    Combatant,
    CombatantKind,
    CombatantMeta,
    CombatantStats,
    WeaponProfile,
    resolve_fight,
)
from kroniki.core.constants import MAX_COMBAT_TURNS


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def create_combatant(
    kind: CombatantKind = CombatantKind.PLAYER,
    name: str = "Hero",
    race: str = None,
    character_class: str = None,
    weapon: WeaponProfile = WeaponProfile(),
    **stats,
) -> Combatant:
    """Create a test combatant."""
    defaults = dict(max_health=100, current_health=100, min_damage=10, max_damage=10)
    defaults.update(stats)
    return Combatant(
        kind=kind,
        stats=CombatantStats(**defaults),
        meta=CombatantMeta(name=name, race=race, character_class=character_class),
        weapon=weapon,
    )


def create_enemy(**stats) -> Combatant:
    stats.setdefault("name", "Wolf")
    return create_combatant(kind=CombatantKind.ENEMY, **stats)


def first_actor_of_turn(log, turn: int) -> str:
    return next(e.attacker for e in log if e.turn == turn and e.action == "attack")


class TestFightOutcome:
    """Tests for fight results."""

    @pytest.fixture
    def engine(self):
        return CombatEngine(rng=FixedRandom(0.5))

    def test_log_starts_with_snapshot(self, engine):
        result = engine.resolve(create_combatant(), create_enemy(max_health=30, current_health=30))

        start = result.log[0]
        assert start.turn == 0
        assert start.action == "start"
        assert start.attacker == "Hero"
        assert start.defender == "Wolf"
        assert start.player_health == 100
        assert start.enemy_health == 30

    def test_victory(self, engine):
        player = create_combatant()
        enemy = create_enemy(max_health=30, current_health=30, min_damage=1, max_damage=1)

        result = engine.resolve(player, enemy)

        assert result.is_victory
        assert result.turns == 3
        assert result.final_attacker_health == 98
        assert result.final_defender_health == 0
        assert not result.timed_out

    def test_defeat(self, engine):
        player = create_combatant(max_health=5, current_health=5)
        enemy = create_enemy(agility=5)

        result = engine.resolve(player, enemy)

        assert not result.is_victory
        assert result.final_attacker_health == 0
        assert result.final_defender_health == 100
        assert result.turns == 1

    def test_turn_cap(self, engine):
        player = create_combatant(min_damage=0, max_damage=0)
        enemy = create_enemy(min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        assert result.timed_out
        assert not result.is_victory
        assert result.turns == MAX_COMBAT_TURNS
        assert max(e.turn for e in result.log) == MAX_COMBAT_TURNS

    def test_fight_stops_mid_phase(self, engine):
        player = create_combatant(attacks_per_round=3)
        enemy = create_enemy(max_health=10, current_health=10)

        result = engine.resolve(player, enemy)

        assert result.is_victory
        assert [e.action for e in result.log] == ["start", "attack"]

    def test_multiple_attacks_per_phase(self, engine):
        player = create_combatant(min_damage=1, max_damage=1, attacks_per_round=2.5)
        enemy = create_enemy(min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        turn_one = [e for e in result.log if e.turn == 1 and e.attacker == "Hero"]
        assert len(turn_one) == 3

    def test_all_dodges_time_out(self):
        player = create_combatant(agility=50, max_mana=20, current_mana=20)
        enemy = create_enemy(agility=50)

        result = CombatEngine(rng=FixedRandom(0.0)).resolve(player, enemy)

        assert {e.action for e in result.log[1:]} == {"dodge"}
        assert len(result.log) == 1 + 2 * MAX_COMBAT_TURNS
        assert result.timed_out
        assert result.turns == MAX_COMBAT_TURNS
        assert result.final_attacker_health == 100
        assert result.final_attacker_mana == 20
        assert result.final_defender_health == 100

    @pytest.mark.parametrize(
        "player_stats,enemy_stats",
        [
            ({}, dict(max_health=30, current_health=30, min_damage=1, max_damage=1)),
            (dict(max_health=5, current_health=5), dict(agility=5)),
            (dict(min_damage=0, max_damage=0), dict(min_damage=0, max_damage=0)),
        ],
        ids=["victory", "defeat", "timeout"],
    )
    def test_last_entry_matches_result(self, engine, player_stats, enemy_stats):
        result = engine.resolve(create_combatant(**player_stats), create_enemy(**enemy_stats))

        last = result.log[-1]
        assert last.player_health == result.final_attacker_health
        assert last.player_mana == result.final_attacker_mana
        assert last.enemy_health == result.final_defender_health
        assert last.enemy_mana == result.final_defender_mana


class TestTurnOrder:
    """Tests for who acts first."""

    @pytest.fixture
    def engine(self):
        return CombatEngine(rng=FixedRandom(0.5))

    def test_higher_agility_first(self, engine):
        player = create_combatant(min_damage=1, max_damage=1, agility=1)
        enemy = create_enemy(min_damage=1, max_damage=1, agility=5)

        result = engine.resolve(player, enemy)

        assert first_actor_of_turn(result.log, 1) == "Wolf"

    def test_tie_goes_to_initiator(self, engine):
        player = create_combatant(min_damage=1, max_damage=1, agility=5)
        enemy = create_enemy(min_damage=1, max_damage=1, agility=5)

        result = engine.resolve(player, enemy)

        assert first_actor_of_turn(result.log, 1) == "Hero"

    def test_elf_opens_fight(self, engine):
        player = create_combatant(race="Elf", min_damage=1, max_damage=1, agility=0)
        enemy = create_enemy(min_damage=1, max_damage=1, agility=10)

        result = engine.resolve(player, enemy)

        assert first_actor_of_turn(result.log, 1) == "Hero"
        assert first_actor_of_turn(result.log, 2) == "Wolf"


class TestManaRegen:
    """Tests for per-phase mana regeneration."""

    @pytest.fixture
    def engine(self):
        return CombatEngine(rng=FixedRandom(0.5))

    def test_regen_logged(self, engine):
        player = create_combatant(max_mana=20, current_mana=10, mana_regen=5)
        enemy = create_enemy(max_health=10, current_health=10)

        result = engine.resolve(player, enemy)

        regen = result.log[1]
        assert regen.action == "manaRegen"
        assert regen.mana_gained == 5
        assert regen.player_mana == 15

    def test_regen_capped_and_silent_at_full(self, engine):
        player = create_combatant(max_mana=20, current_mana=20, mana_regen=5)
        enemy = create_enemy(max_health=10, current_health=10)

        result = engine.resolve(player, enemy)

        assert all(e.action != "manaRegen" for e in result.log)
        assert result.final_attacker_mana == 20


class TestDeterminism:
    """Tests for seeded replays and serialization."""

    def test_same_seed_same_fight(self):
        player = create_combatant(min_damage=3, max_damage=12, crit_chance=20, agility=4)
        enemy = create_enemy(min_damage=2, max_damage=9, armor=4, agility=6)

        first = CombatEngine(rng=random.Random(42)).resolve(player, enemy)
        second = CombatEngine(seed=42).resolve(player, enemy)

        assert first.log == second.log
        assert first.is_victory == second.is_victory

    def test_resolve_fight_helper(self):
        player = create_combatant()
        enemy = create_enemy(max_health=20, current_health=20)

        result = resolve_fight(player, enemy, rng=FixedRandom(0.5))

        assert result.is_victory
        assert result.turns == 2

    def test_log_dicts_use_client_keys(self):
        player = create_combatant()
        enemy = create_enemy(max_health=10, current_health=10)

        result = CombatEngine(rng=FixedRandom(0.5)).resolve(player, enemy)
        start, attack = result.log_dicts()

        assert "playerHealth" in start
        assert "damage" not in start
        assert attack["damage"] == 10
        assert attack["isCrit"] is False
        assert attack["enemyHealth"] == 0


BOW = WeaponProfile(name="Hunting Bow", is_ranged=True)


class TestClassPowers:
    """Tests for ranged openers and class powers."""

    @pytest.fixture
    def engine(self):
        return CombatEngine(rng=FixedRandom(0.5))

    def test_ranged_opening_shot(self, engine):
        player = create_combatant(weapon=BOW)
        enemy = create_enemy(max_health=30, current_health=30, min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        opener = result.log[1]
        assert opener.turn == 0
        assert opener.action == "attack"
        assert opener.weapon_name == "Hunting Bow"
        assert opener.enemy_health == 20
        assert result.turns == 2

    def test_ranged_shot_can_end_fight(self, engine):
        player = create_combatant(weapon=BOW)
        enemy = create_enemy(max_health=10, current_health=10)

        result = engine.resolve(player, enemy)

        assert result.is_victory
        assert result.turns == 0
        assert [e.action for e in result.log] == ["start", "attack"]

    def test_hunter_bonus_shot(self, engine):
        player = create_combatant(character_class="Hunter", weapon=BOW)
        enemy = create_enemy(max_health=30, current_health=30, min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        bonus = result.log[2]
        assert bonus.turn == 0
        assert bonus.action == "hunter_bonus_shot"
        assert bonus.damage == 5
        assert bonus.enemy_health == 15

    def test_hunter_needs_ranged_weapon(self, engine):
        player = create_combatant(character_class="Hunter")
        enemy = create_enemy(max_health=30, current_health=30, min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        assert all(e.turn > 0 for e in result.log[1:])
        assert all(e.action != "hunter_bonus_shot" for e in result.log)

    def test_warrior_first_hit_crits_through_dodge(self, engine):
        player = create_combatant(character_class="Warrior", attacks_per_round=2, crit_damage_modifier=150)
        enemy = create_enemy(agility=1000, min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        hero_turn_one = [e for e in result.log if e.turn == 1 and e.attacker == "Hero"]
        assert [e.action for e in hero_turn_one] == ["attack", "dodge"]
        assert hero_turn_one[0].is_crit is True
        assert hero_turn_one[0].damage == 15

    def test_enemy_warrior_class_ignored(self, engine):
        player = create_combatant(agility=1000, min_damage=0, max_damage=0)
        enemy = create_enemy(character_class="Warrior")

        result = engine.resolve(player, enemy)

        enemy_turn_one = [e for e in result.log if e.turn == 1 and e.attacker == "Wolf"]
        assert enemy_turn_one[0].action == "dodge"

    def test_berserker_frenzy_when_wounded(self, engine):
        player = create_combatant(character_class="Berserker", current_health=20)
        enemy = create_enemy(min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        assert [e.action for e in result.log[1:4]] == ["attack", "berserker_frenzy", "attack"]
        assert result.log[3].enemy_health == 80

    def test_no_frenzy_at_threshold(self, engine):
        player = create_combatant(character_class="Berserker", current_health=30)
        enemy = create_enemy(min_damage=0, max_damage=0)

        result = engine.resolve(player, enemy)

        assert all(e.action != "berserker_frenzy" for e in result.log)
