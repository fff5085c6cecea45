import pytest
import requests

from activities.modules.pokemon_reviews import pokeapi

POKEDEX = {
    "25": {"id": 25, "name": "pikachu", "sprites": {"front_default": "https://img.example/25.png"}},
    "1": {"id": 1, "name": "bulbasaur", "sprites": {"front_default": None}},
}
POKEDEX["pikachu"] = POKEDEX["25"]
POKEDEX["bulbasaur"] = POKEDEX["1"]


class FakeHTTPResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload

    def json(self):
        return self._payload


@pytest.fixture
def requested(monkeypatch):
    urls = []

    def fake_get(url, timeout=None):
        urls.append(url)
        key = url.rsplit("/", 1)[1]
        if key in POKEDEX:
            return FakeHTTPResponse(200, POKEDEX[key])
        return FakeHTTPResponse(404)

    monkeypatch.setattr(pokeapi.requests, "get", fake_get)
    return urls


def test_lookup_normalizes_name(client, requested, alice):
    r = client.get("/api/v1/pokemon/%20PikaChu%20", headers=alice["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["pokemon"] == {"id": 25, "name": "pikachu", "sprite_url": "https://img.example/25.png"}
    assert requested[-1].endswith("/pokemon/pikachu")


def test_lookup_falls_back_to_default_sprite(requested):
    pokemon = pokeapi.fetch_pokemon(1)
    assert pokemon.sprite_url.endswith("/sprites/pokemon/1.png")


def test_unknown_pokemon_is_404(client, requested, alice):
    r = client.get("/api/v1/pokemon/missingno", headers=alice["headers"])
    assert r.status_code == 404


@pytest.mark.parametrize("identifier", ["pikachu?x", "pikachu#y", "pikachu/../1"])
def test_identifier_is_escaped_into_one_path_segment(requested, identifier):
    assert pokeapi.fetch_pokemon(identifier) is None
    assert "/" not in requested[-1].rsplit("/pokemon/", 1)[1]
    assert "?" not in requested[-1] and "#" not in requested[-1]


def test_transport_error_counts_as_not_found(monkeypatch):
    def boom(url, timeout=None):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(pokeapi.requests, "get", boom)
    assert pokeapi.fetch_pokemon("pikachu") is None


def test_blank_identifier_skips_request(requested):
    assert pokeapi.fetch_pokemon("   ") is None
    assert requested == []


def test_review_upsert_overwrites(client, supabase, requested, alice):
    client.put("/api/v1/pokemon/pikachu/review", json={"review": "Cute", "rating": 3}, headers=alice["headers"])
    r = client.put("/api/v1/pokemon/25/review", json={"review": "Iconic", "rating": 5}, headers=alice["headers"])
    assert r.status_code == 200

    rows = supabase.rows("pokemon_reviews")
    assert len(rows) == 1
    assert rows[0]["review"] == "Iconic"
    assert rows[0]["pokemon_name"] == "pikachu"
    assert r.json()["draft_review"] == "Iconic"
    assert r.json()["draft_rating"] == 5


def test_thread_prefills_own_review(client, requested, alice, bob):
    client.put("/api/v1/pokemon/pikachu/review", json={"review": "Electric", "rating": 4}, headers=alice["headers"])

    mine = client.get("/api/v1/pokemon/pikachu", headers=alice["headers"]).json()
    theirs = client.get("/api/v1/pokemon/pikachu", headers=bob["headers"]).json()
    assert (mine["draft_review"], mine["draft_rating"]) == ("Electric", 4)
    assert (theirs["draft_review"], theirs["draft_rating"]) == ("", 5)
    assert len(theirs["reviews"]) == 1


def test_all_reviews_sorting(client, requested, alice, bob):
    client.put("/api/v1/pokemon/bulbasaur/review", json={"review": "Leafy", "rating": 3}, headers=bob["headers"])
    client.put("/api/v1/pokemon/pikachu/review", json={"review": "Zap", "rating": 4}, headers=alice["headers"])

    by_name = client.get("/api/v1/pokemon/reviews", params={"sort": "name"}, headers=alice["headers"]).json()
    by_date = client.get("/api/v1/pokemon/reviews", params={"sort": "date"}, headers=alice["headers"]).json()

    assert [r["pokemon_name"] for r in by_name] == ["bulbasaur", "pikachu"]
    assert [r["pokemon_name"] for r in by_date] == ["pikachu", "bulbasaur"]
    assert len(by_name) == len(by_date) == 2


def test_all_reviews_signed_out_is_empty(client, requested, alice):
    client.put("/api/v1/pokemon/pikachu/review", json={"review": "Zap", "rating": 4}, headers=alice["headers"])
    assert client.get("/api/v1/pokemon/reviews").json() == []


def test_delete_review_owner_only(client, supabase, requested, alice, bob):
    thread = client.put(
        "/api/v1/pokemon/pikachu/review", json={"review": "Zap", "rating": 4}, headers=alice["headers"]
    ).json()
    review_id = thread["reviews"][0]["id"]

    assert client.delete(f"/api/v1/pokemon/reviews/{review_id}", headers=bob["headers"]).status_code == 403
    assert client.delete(f"/api/v1/pokemon/reviews/{review_id}", headers=alice["headers"]).status_code == 204
    assert supabase.rows("pokemon_reviews") == []


def test_blank_review_rejected(client, supabase, requested, alice):
    r = client.put("/api/v1/pokemon/pikachu/review", json={"review": "  ", "rating": 4}, headers=alice["headers"])
    assert r.status_code == 400
    assert supabase.rows("pokemon_reviews") == []
