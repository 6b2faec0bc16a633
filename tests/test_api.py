"""FastAPI integration tests.

Strategy:
- Fresh in-memory SQLite database per test (``db`` fixture).
- The real app from main.py with the DB dependency overridden.
"""

from __future__ import annotations

from datetime import datetime

import aiosqlite
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from babydaily.api.dependencies import db_dependency
from babydaily.engine.clock import epoch_ms
from main import app

NOW = "2024-06-15T12:00:00"


def _ms(*args) -> int:
    return epoch_ms(datetime(*args))


@pytest_asyncio.fixture
async def client(db: aiosqlite.Connection):
    """HTTP test client bound to the in-memory database."""

    async def override_db():
        yield db

    app.dependency_overrides[db_dependency] = override_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def baby_id(client: AsyncClient) -> int:
    resp = await client.post("/babies", json={"name": "Leo", "birth_date": "2024-02-01"})
    return resp.json()["id"]


# ---------------------------------------------------------------------------
# /health, /babies
# ---------------------------------------------------------------------------

async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": True}


async def test_create_and_get_baby(client: AsyncClient):
    resp = await client.post("/babies", json={"name": "Leo", "birth_date": "2024-02-01"})
    assert resp.status_code == 201
    baby = resp.json()
    assert baby["name"] == "Leo"

    resp = await client.get(f"/babies/{baby['id']}")
    assert resp.status_code == 200
    assert resp.json()["birth_date"] == "2024-02-01"


async def test_create_baby_invalid(client: AsyncClient):
    resp = await client.post("/babies", json={"name": "X"})
    assert resp.status_code == 422


async def test_get_baby_not_found(client: AsyncClient):
    assert (await client.get("/babies/9999")).status_code == 404


async def test_update_baby(client: AsyncClient, baby_id: int):
    resp = await client.patch(f"/babies/{baby_id}", json={"name": "Léo"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Léo"


# ---------------------------------------------------------------------------
# Record CRUD
# ---------------------------------------------------------------------------

async def test_feeding_crud(client: AsyncClient, baby_id: int):
    resp = await client.post(f"/feedings/{baby_id}", json={
        "type": "formula", "volume": 110, "time": "10:15",
        "timestamp": _ms(2024, 6, 15, 10, 15), "note": "Enfamil A+",
    })
    assert resp.status_code == 201
    feeding = resp.json()
    assert feeding["volume"] == 110
    assert feeding["baby_id"] == baby_id

    resp = await client.put(f"/feedings/{feeding['id']}", json={
        "type": "formula", "volume": 150, "time": "10:15",
    })
    assert resp.status_code == 200
    assert resp.json()["volume"] == 150
    assert resp.json()["timestamp"] == feeding["timestamp"]

    resp = await client.get(f"/feedings/{baby_id}")
    assert [f["volume"] for f in resp.json()] == [150]

    assert (await client.delete(f"/feedings/{feeding['id']}")).status_code == 204
    assert (await client.delete(f"/feedings/{feeding['id']}")).status_code == 204
    assert (await client.get(f"/feedings/{baby_id}")).json() == []


async def test_feeding_missing_fields(client: AsyncClient, baby_id: int):
    resp = await client.post(f"/feedings/{baby_id}", json={"type": "formula"})
    assert resp.status_code == 422


async def test_feeding_unknown_baby(client: AsyncClient):
    resp = await client.post("/feedings/9999", json={"type": "formula", "volume": 80, "time": "08:00"})
    assert resp.status_code == 404


async def test_update_unknown_record(client: AsyncClient):
    resp = await client.put("/sleeps/9999", json={"start": "13:00", "end": "14:00"})
    assert resp.status_code == 404


async def test_delete_unknown_record_is_noop(client: AsyncClient):
    assert (await client.delete("/diapers/9999")).status_code == 204


async def test_diaper_pee_color_dropped(client: AsyncClient, baby_id: int):
    resp = await client.post(f"/diapers/{baby_id}", json={
        "type": "pee", "sub": "Normal", "time": "11:15", "color": "yellow",
    })
    assert resp.status_code == 201
    assert resp.json()["color"] is None


async def test_sleep_duration_ignores_client_value(client: AsyncClient, baby_id: int):
    resp = await client.post(f"/sleeps/{baby_id}", json={
        "start": "20:00", "end": "06:00", "duration": "1h 0m", "timestamp": _ms(2024, 6, 15, 6),
    })
    assert resp.status_code == 201
    assert resp.json()["duration"] == "10h 0m"


async def test_sleep_invalid_clock(client: AsyncClient, baby_id: int):
    resp = await client.post(f"/sleeps/{baby_id}", json={"start": "8pm", "end": "06:00"})
    assert resp.status_code == 422


async def test_growth_formatting(client: AsyncClient, baby_id: int):
    resp = await client.post(f"/growth/{baby_id}", json={"weight": 6.5, "height": "62", "date": "2024-06-10"})
    assert resp.status_code == 201
    growth = resp.json()
    assert (growth["weight"], growth["height"]) == ("6.50", "62.00")
    assert growth["timestamp"] == _ms(2024, 6, 10)


async def test_list_sorted_newest_first(client: AsyncClient, baby_id: int):
    for hour in (8, 14, 11):
        await client.post(f"/diapers/{baby_id}", json={
            "type": "poo", "time": f"{hour:02d}:00", "timestamp": _ms(2024, 6, 15, hour),
        })
    times = [d["time"] for d in (await client.get(f"/diapers/{baby_id}")).json()]
    assert times == ["14:00", "11:00", "08:00"]


# ---------------------------------------------------------------------------
# /views
# ---------------------------------------------------------------------------

async def _seed_feedings(client: AsyncClient, baby_id: int):
    for ts, volume in ((_ms(2024, 6, 15, 10, 15), 110), (_ms(2024, 6, 15, 7), 90),
                       (_ms(2024, 6, 10, 9), 100), (_ms(2024, 6, 1, 9), 70)):
        await client.post(f"/feedings/{baby_id}", json={
            "type": "formula", "volume": volume, "time": "09:00", "timestamp": ts,
        })


async def test_feeding_view_today(client: AsyncClient, baby_id: int):
    await _seed_feedings(client, baby_id)
    resp = await client.get(f"/views/{baby_id}/feedings", params={"scope": "today", "now": NOW})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_volume"] == 200
    assert len(data["records"]) == 2


async def test_feeding_view_week(client: AsyncClient, baby_id: int):
    await _seed_feedings(client, baby_id)
    resp = await client.get(f"/views/{baby_id}/feedings", params={"scope": "week", "now": NOW})
    assert resp.json()["total_volume"] == 300


async def test_feeding_view_bad_scope(client: AsyncClient, baby_id: int):
    resp = await client.get(f"/views/{baby_id}/feedings", params={"scope": "month"})
    assert resp.status_code == 422


async def test_diaper_view(client: AsyncClient, baby_id: int):
    await client.post(f"/diapers/{baby_id}", json={
        "type": "mixed", "time": "13:30", "timestamp": _ms(2024, 6, 15, 13, 30), "color": "green",
    })
    await client.post(f"/diapers/{baby_id}", json={
        "type": "pee", "time": "11:15", "timestamp": _ms(2024, 6, 15, 11, 15),
    })
    resp = await client.get(f"/views/{baby_id}/diapers", params={"type": "mixed", "now": NOW})
    data = resp.json()
    assert [d["type"] for d in data["records"]] == ["mixed"]
    assert data["prediction"] == {"time": "16:00", "type": "pee"}


async def test_diaper_view_empty_prediction(client: AsyncClient, baby_id: int):
    resp = await client.get(f"/views/{baby_id}/diapers", params={"scope": "history"})
    assert resp.json()["prediction"] == {"time": "12:00", "type": "pee"}


async def test_sleep_view(client: AsyncClient, baby_id: int):
    await client.post(f"/sleeps/{baby_id}", json={
        "start": "13:00", "end": "15:00", "timestamp": _ms(2024, 6, 15, 13),
    })
    resp = await client.get(f"/views/{baby_id}/sleeps", params={"now": NOW})
    assert resp.json()["total"] == "2h 0m"


async def test_growth_view(client: AsyncClient, baby_id: int):
    resp = await client.get(f"/views/{baby_id}/growth")
    assert resp.json()["latest"]["weight"] == "0.00"
    assert resp.json()["series"] == []

    await client.post(f"/growth/{baby_id}", json={"weight": 6, "height": 60, "date": "2024-06-01"})
    await client.post(f"/growth/{baby_id}", json={"weight": 7, "height": 62, "date": "2024-06-08"})
    data = (await client.get(f"/views/{baby_id}/growth", params={"field": "weight"})).json()
    assert data["latest"]["weight"] == "7.00"
    assert [round(p["y"], 2) for p in data["series"]] == [0.25, 0.75]


async def test_views_unknown_baby(client: AsyncClient):
    assert (await client.get("/views/9999/feedings")).status_code == 404


# ---------------------------------------------------------------------------
# /export
# ---------------------------------------------------------------------------

async def test_export_csv(client: AsyncClient, baby_id: int):
    await client.post(f"/feedings/{baby_id}", json={
        "type": "breast", "volume": 90, "time": "07:00", "timestamp": _ms(2024, 6, 15, 7),
    })
    await client.post(f"/growth/{baby_id}", json={"weight": 6.5, "height": 62, "date": "2024-06-10"})
    resp = await client.get(f"/export/{baby_id}")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.text.splitlines() == [
        "Category,Date,Time,Detail,Value",
        "Feeding,2024-06-15,07:00,breast,90ml",
        "Growth,2024-06-10,-,H:62.00cm,W:6.50kg",
    ]


# ---------------------------------------------------------------------------
# /auth
# ---------------------------------------------------------------------------

_ANSWERS = {"q1": "Paris", "q2": "Rex", "q3": "Blue"}


async def test_auth_flow(client: AsyncClient):
    resp = await client.post("/auth/register", json={
        "username": "parent", "password": "secret-pw", "answers": _ANSWERS,
    })
    assert resp.status_code == 201
    assert "password_hash" not in resp.json()

    resp = await client.post("/auth/register", json={
        "username": "parent", "password": "secret-pw", "answers": _ANSWERS,
    })
    assert resp.status_code == 400

    resp = await client.post("/auth/login", json={"username": "parent", "password": "nope"})
    assert resp.status_code == 401

    resp = await client.post("/auth/reset-password", json={
        "username": "parent", "answers": {**_ANSWERS, "q3": "Red"}, "new_password": "new-secret",
    })
    assert resp.status_code == 400

    resp = await client.post("/auth/reset-password", json={
        "username": "parent", "answers": _ANSWERS, "new_password": "new-secret",
    })
    assert resp.status_code == 200

    resp = await client.post("/auth/login", json={"username": "parent", "password": "new-secret"})
    assert resp.status_code == 200
    assert resp.json()["username"] == "parent"


async def test_get_user_profile(client: AsyncClient):
    resp = await client.post("/auth/register", json={
        "username": "parent", "password": "secret-pw", "answers": _ANSWERS,
    })
    user_id = resp.json()["user_id"]

    resp = await client.get(f"/users/{user_id}")
    assert resp.status_code == 200
    assert resp.json() == {"user_id": user_id, "username": "parent"}

    assert (await client.get("/users/9999")).status_code == 404
