from __future__ import annotations

from sqlalchemy.exc import OperationalError

from common import dependencies
from services.recipe.models.core_model import IngredientUnit as U
from services.recipe.routers import rating_router
from services.user.routers import favorite_router
from tests.helpers import (
    add_category,
    add_favorite,
    add_rating,
    add_recipe,
    add_user,
    auth_headers,
)


def _seed_catalog(seed):
    async def _fn(db):
        chef = await add_user(db, "Chef")
        ana = await add_user(db, "Ana")
        bruno = await add_user(db, "Bruno")
        veggie = await add_category(db, "Veggie")
        await add_category(db, "Postres")
        ensalada = await add_recipe(
            db, chef, "Ensalada de tomate", minutes_ago=0, prep_time=10, average=4.0,
            ingredients=[("Tomate", 2, U.unit)], categories=[veggie],
        )
        flan = await add_recipe(
            db, ana, "Flan", minutes_ago=5, prep_time=60, average=0.0,
            ingredients=[("Huevo", 4, U.unit)],
        )
        await add_rating(db, ensalada, ana, 4, "Rica")
        await add_favorite(db, bruno, flan)
        return {
            "chef": chef.user_id,
            "ana": ana.user_id,
            "bruno": bruno.user_id,
            "ensalada": ensalada.recipe_id,
            "flan": flan.recipe_id,
        }
    return seed(_fn)


# -----------------------------
# 검색
# -----------------------------

def test_search_without_filters(client, seed):
    ids = _seed_catalog(seed)
    res = client.get("/api/recipes/search")
    assert res.status_code == 200
    body = res.json()
    assert [r["id"] for r in body["data"]] == [ids["ensalada"], ids["flan"]]
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["limit"] == 10
    assert body["totalPages"] == 1
    first = body["data"][0]
    assert first["authorDisplayName"] == "Chef"
    assert first["prepTimeMinutes"] == 10
    assert first["averageRating"] == 4.0
    assert first["categories"] == ["Veggie"]
    assert first["ingredients"] == [{"name": "Tomate", "quantity": 2.0, "unit": "unit"}]
    assert "favorited" not in first


def test_search_with_filters(client, seed):
    ids = _seed_catalog(seed)
    res = client.get(
        "/api/recipes/search",
        params={"ingrediente": "TOMATE", "tiempoPreparacion": "30", "categorias": "Veggie"},
    )
    assert [r["id"] for r in res.json()["data"]] == [ids["ensalada"]]

    res = client.get("/api/recipes/search", params={"ingrediente": "tomate", "incluirIngrediente": "false"})
    assert [r["id"] for r in res.json()["data"]] == [ids["flan"]]


def test_search_ignores_malformed_values(client, seed):
    _seed_catalog(seed)
    res = client.get(
        "/api/recipes/search",
        params={"tiempoPreparacion": "mucho", "valoracion": "alta", "page": "-2", "limit": "500"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["limit"] == 100


def test_search_unknown_author_is_empty(client, seed):
    _seed_catalog(seed)
    res = client.get("/api/recipes/search", params={"autor": "nadie"})
    assert res.status_code == 200
    assert res.json() == {"data": [], "total": 0, "page": 1, "limit": 10, "totalPages": 0}


def test_search_marks_favorites_for_logged_in_caller(client, seed):
    ids = _seed_catalog(seed)
    res = client.get("/api/recipes/search", headers=auth_headers(ids["bruno"]))
    assert [(r["id"], r["favorited"]) for r in res.json()["data"]] == [
        (ids["ensalada"], False),
        (ids["flan"], True),
    ]


def test_search_rejects_invalid_token(client, seed):
    _seed_catalog(seed)
    res = client.get("/api/recipes/search", headers={"Authorization": "Bearer no-es-un-token"})
    assert res.status_code == 401
    assert res.json()["code"] == "not_authenticated"
    assert res.headers["www-authenticate"] == "Bearer"


# -----------------------------
# 별점
# -----------------------------

def test_rate_recipe_updates_average(client, seed):
    ids = _seed_catalog(seed)
    res = client.post(
        f"/api/recipes/{ids['ensalada']}/rating",
        json={"puntuacion": 5, "comentario": "Excelente"},
        headers=auth_headers(ids["bruno"]),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["average"] == 4.5
    assert body["totalRatings"] == 2
    assert body["created"] is True
    assert body["rating"]["authorDisplayName"] == "Bruno"
    assert body["rating"]["comment"] == "Excelente"

    detail = client.get(f"/api/recipes/{ids['ensalada']}").json()
    assert detail["averageRating"] == 4.5


def test_rerating_replaces_previous_score(client, seed):
    ids = _seed_catalog(seed)
    url = f"/api/recipes/{ids['ensalada']}/rating"
    res = client.post(url, json={"puntuacion": 1}, headers=auth_headers(ids["ana"]))
    body = res.json()
    assert body["created"] is False
    assert body["totalRatings"] == 1
    assert body["average"] == 1.0

    ratings = client.get(f"/api/recipes/{ids['ensalada']}/ratings").json()
    assert len(ratings) == 1
    assert ratings[0]["score"] == 1
    assert ratings[0]["comment"] == ""


def test_rating_requires_authentication(client, seed):
    ids = _seed_catalog(seed)
    res = client.post(f"/api/recipes/{ids['ensalada']}/rating", json={"puntuacion": 5})
    assert res.status_code == 401


def test_rating_out_of_range(client, seed):
    ids = _seed_catalog(seed)
    for score in (0, 6, 2.5, "cinco"):
        res = client.post(
            f"/api/recipes/{ids['ensalada']}/rating",
            json={"puntuacion": score},
            headers=auth_headers(ids["bruno"]),
        )
        assert res.status_code == 400
        assert res.json()["field"] == "score"

    detail = client.get(f"/api/recipes/{ids['ensalada']}").json()
    assert detail["averageRating"] == 4.0


def test_rating_own_recipe_is_forbidden(client, seed):
    ids = _seed_catalog(seed)
    res = client.post(
        f"/api/recipes/{ids['ensalada']}/rating",
        json={"puntuacion": 5},
        headers=auth_headers(ids["chef"]),
    )
    assert res.status_code == 403
    assert res.json()["code"] == "forbidden"


def test_rating_unknown_recipe(client, seed):
    ids = _seed_catalog(seed)
    res = client.post("/api/recipes/999/rating", json={"puntuacion": 5}, headers=auth_headers(ids["ana"]))
    assert res.status_code == 404
    assert client.get("/api/recipes/999/ratings").status_code == 404


# -----------------------------
# 등록 / 최신 / 상세 / 카테고리
# -----------------------------

def _recipe_payload(**overrides):
    payload = {
        "name": "Tortilla",
        "servings": 4,
        "description": "Tortilla de patatas",
        "ingredients": [
            {"name": "Patata", "quantity": 500, "unit": "gram"},
            {"name": "Huevo", "quantity": 6, "unit": "unit"},
        ],
        "steps": [{"description": "Freir"}, {"description": "Cuajar"}],
        "categories": ["Veggie"],
        "prepTimeMinutes": 40,
    }
    payload.update(overrides)
    return payload


def test_publish_recipe(client, seed):
    ids = _seed_catalog(seed)
    res = client.post("/api/recipes", json=_recipe_payload(), headers=auth_headers(ids["ana"]))
    assert res.status_code == 201
    body = res.json()
    assert body["authorDisplayName"] == "Ana"
    assert body["averageRating"] == 0.0
    assert body["categories"] == ["Veggie"]
    assert [s["order"] for s in body["steps"]] == [1, 2]

    latest = client.get("/api/recipes/latest").json()
    assert latest[0]["id"] == body["id"]

    found = client.get("/api/recipes/search", params={"texto": "patatas"}).json()
    assert [r["id"] for r in found["data"]] == [body["id"]]


def test_publish_recipe_with_unknown_category(client, seed):
    ids = _seed_catalog(seed)
    res = client.post(
        "/api/recipes",
        json=_recipe_payload(categories=["Inventada"]),
        headers=auth_headers(ids["ana"]),
    )
    assert res.status_code == 400
    assert res.json()["field"] == "categories"


def test_publish_recipe_requires_ingredients(client, seed):
    ids = _seed_catalog(seed)
    res = client.post("/api/recipes", json=_recipe_payload(ingredients=[]), headers=auth_headers(ids["ana"]))
    assert res.status_code == 422


def test_publish_recipe_requires_authentication(client, seed):
    _seed_catalog(seed)
    assert client.post("/api/recipes", json=_recipe_payload()).status_code == 401


def test_recipe_detail(client, seed):
    ids = _seed_catalog(seed)
    res = client.get(f"/api/recipes/{ids['flan']}", headers=auth_headers(ids["bruno"]))
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Flan"
    assert body["favorited"] is True
    assert body["steps"] == [{"order": 1, "description": "Mezclar todo", "media": []}]

    assert client.get("/api/recipes/12345").status_code == 404


def test_categories(client, seed):
    _seed_catalog(seed)
    res = client.get("/api/recipes/categories")
    assert res.status_code == 200
    assert [c["name"] for c in res.json()] == ["Postres", "Veggie"]


def test_categories_empty(client):
    assert client.get("/api/recipes/categories").json() == []


# -----------------------------
# 즐겨찾기
# -----------------------------

def test_toggle_favorite(client, seed):
    ids = _seed_catalog(seed)
    headers = auth_headers(ids["ana"])
    url = f"/api/user/favorites/{ids['ensalada']}"

    res = client.put(url, headers=headers)
    assert res.status_code == 200
    assert res.json() == {"recipeId": ids["ensalada"], "favorited": True}

    favorites = client.get("/api/user/favorites", headers=headers).json()
    assert [(r["id"], r["favorited"]) for r in favorites] == [(ids["ensalada"], True)]

    assert client.put(url, headers=headers).json()["favorited"] is False
    assert client.get("/api/user/favorites", headers=headers).json() == []


def test_toggle_favorite_unknown_recipe(client, seed):
    ids = _seed_catalog(seed)
    res = client.put("/api/user/favorites/777", headers=auth_headers(ids["ana"]))
    assert res.status_code == 404


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


# -----------------------------
# 저장소 오류 -> 503
# -----------------------------

async def _storage_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection lost"))


def _assert_storage_unavailable(res):
    assert res.status_code == 503
    body = res.json()
    assert body["code"] == "storage_unavailable"
    assert body["retryable"] is True


def test_rating_list_storage_failure(client, seed, monkeypatch):
    ids = _seed_catalog(seed)
    monkeypatch.setattr(rating_router, "list_recipe_ratings", _storage_down)
    _assert_storage_unavailable(client.get(f"/api/recipes/{ids['ensalada']}/ratings"))


def test_favorite_toggle_storage_failure(client, seed, monkeypatch):
    ids = _seed_catalog(seed)
    monkeypatch.setattr(favorite_router, "get_recipe_by_id", _storage_down)
    res = client.put(f"/api/user/favorites/{ids['ensalada']}", headers=auth_headers(ids["ana"]))
    _assert_storage_unavailable(res)


def test_favorite_list_storage_failure(client, seed, monkeypatch):
    ids = _seed_catalog(seed)
    monkeypatch.setattr(favorite_router, "list_favorite_recipes", _storage_down)
    _assert_storage_unavailable(client.get("/api/user/favorites", headers=auth_headers(ids["ana"])))


def test_identity_lookup_storage_failure(client, seed, monkeypatch):
    ids = _seed_catalog(seed)
    monkeypatch.setattr(dependencies, "get_user_by_id", _storage_down)
    _assert_storage_unavailable(client.get("/api/user/favorites", headers=auth_headers(ids["ana"])))
