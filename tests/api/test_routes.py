"""Tests for API routes."""

from fastapi.testclient import TestClient
from kroniki.api.main import app

client = TestClient(app)


def character_payload(**overrides):
    payload = {
        "id": "char_1",
        "name": "Hero",
        "race": "Orc",
        "stats": {"strength": 100, "stamina": 50, "accuracy": 10},
    }
    payload.update(overrides)
    return payload


class TestRootEndpoints:
    """Tests for root endpoints."""

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["name"] == "Kroniki Mroku Engine API"

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestStatsRoutes:
    """Tests for stat routes."""

    def test_derive_stats(self):
        response = client.post("/api/stats/derive", json={"character": character_payload()})
        assert response.status_code == 200
        data = response.json()
        assert data["character_id"] == "char_1"
        assert data["stats"]["max_health"] == 550
        assert data["stats"]["min_damage"] == 101

    def test_derive_stats_invalid_character(self):
        response = client.post("/api/stats/derive", json={"character": {"name": "No Id"}})
        assert response.status_code == 422

    def test_preview_equip(self):
        response = client.post(
            "/api/stats/preview-equip",
            json={
                "character": character_payload(),
                "slot": "mainHand",
                "item": {"unique_id": "sword_1", "template_id": "iron_sword"},
            },
        )
        assert response.status_code == 200
        assert response.json()["changes"] == {"min_damage": 2, "max_damage": 5}

    def test_preview_unknown_item(self):
        response = client.post(
            "/api/stats/preview-equip",
            json={
                "character": character_payload(),
                "slot": "head",
                "item": {"unique_id": "x", "template_id": "nope"},
            },
        )
        assert response.status_code == 404


class TestCombatRoutes:
    """Tests for combat routes."""

    def test_fight_enemy(self):
        response = client.post(
            "/api/combat/fight",
            json={"character": character_payload(), "enemy_id": "forest_wolf", "seed": 7},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_victory"] is True
        assert data["log"][0]["action"] == "start"
        assert "playerHealth" in data["log"][0]

    def test_seeded_fight_repeats(self):
        body = {"character": character_payload(stats={}), "enemy_id": "goblin_scout", "seed": 11}
        first = client.post("/api/combat/fight", json=body).json()
        second = client.post("/api/combat/fight", json=body).json()
        assert first == second

    def test_fight_unknown_enemy(self):
        response = client.post(
            "/api/combat/fight",
            json={"character": character_payload(), "enemy_id": "dragon"},
        )
        assert response.status_code == 404


class TestEncounterRoutes:
    """Tests for expedition, tower and PvP routes."""

    def test_run_expedition(self):
        response = client.post(
            "/api/expeditions/run",
            json={"character": character_payload(), "expedition_id": "dark_forest", "seed": 3},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_victory"] is True
        assert data["character"]["resources"]["gold"] == data["rewards"]["gold"]

    def test_unknown_expedition(self):
        response = client.post(
            "/api/expeditions/run",
            json={"character": character_payload(), "expedition_id": "nowhere"},
        )
        assert response.status_code == 404

    def test_tower_start_fight_retreat(self):
        character = character_payload()
        start = client.post(
            "/api/towers/start",
            json={"character": character, "tower_id": "shadow_spire"},
        )
        assert start.status_code == 200
        run = start.json()
        assert run["current_floor"] == 1

        fight = client.post(
            "/api/towers/fight",
            json={"run": run, "character": character, "seed": 5},
        )
        assert fight.status_code == 200
        floor = fight.json()
        assert floor["is_victory"] is True
        assert floor["run"]["current_floor"] == 2

        retreat = client.post(
            "/api/towers/retreat",
            json={"run": floor["run"], "character": floor["character"]},
        )
        assert retreat.status_code == 200
        data = retreat.json()
        assert data["character"]["resources"]["gold"] == data["banked"]["gold"] > 0
        assert data["run"]["status"] == "RETREATED"

        again = client.post(
            "/api/towers/retreat",
            json={"run": data["run"], "character": data["character"]},
        )
        assert again.status_code == 400

    def test_inactive_tower(self):
        response = client.post(
            "/api/towers/start",
            json={"character": character_payload(), "tower_id": "forgotten_keep"},
        )
        assert response.status_code == 404

    def test_fight_finished_run(self):
        run = {"tower_id": "shadow_spire", "current_health": 10, "status": "FAILED"}
        response = client.post(
            "/api/towers/fight",
            json={"run": run, "character": character_payload()},
        )
        assert response.status_code == 400

    def test_pvp_duel(self):
        response = client.post(
            "/api/pvp/duel",
            json={
                "attacker": character_payload(),
                "defender": character_payload(
                    id="char_2", name="Rival", stats={}, resources={"gold": 500}
                ),
                "seed": 1,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_victory"] is True
        assert data["gold_stolen"] == 50
        assert data["attacker"]["pvp"]["wins"] == 1

    def test_pvp_without_energy(self):
        response = client.post(
            "/api/pvp/duel",
            json={
                "attacker": character_payload(current_energy=0),
                "defender": character_payload(id="char_2", name="Rival"),
            },
        )
        assert response.status_code == 400


class TestDataRoutes:
    """Tests for static data routes."""

    def test_get_items(self):
        response = client.get("/api/data/items")
        assert response.status_code == 200
        assert len(response.json()) > 0

    def test_get_items_by_slot(self):
        response = client.get("/api/data/items", params={"slot": "twoHand"})
        assert response.status_code == 200
        assert all(i["slot"] == "twoHand" for i in response.json())

    def test_get_enemy(self):
        response = client.get("/api/data/enemies/forest_wolf")
        assert response.status_code == 200
        assert response.json()["name"] == "Forest Wolf"

    def test_get_unknown_enemy(self):
        response = client.get("/api/data/enemies/dragon")
        assert response.status_code == 404

    def test_get_towers_only_active(self):
        response = client.get("/api/data/towers")
        ids = [t["id"] for t in response.json()]
        assert "shadow_spire" in ids
        assert "forgotten_keep" not in ids

    def test_get_expedition(self):
        response = client.get("/api/data/expeditions/dark_forest")
        assert response.status_code == 200
        assert response.json()["max_enemies"] == 2
