import httpx
import pytest
import pytest_asyncio

from app.core.config import settings
from app.core.db import get_db
from app.core.security import create_access_token
from app.main import app
from factories import GymData, performed


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seeded(session_maker):
    """A lifter with three stable bench sessions and an in-progress fourth."""
    async with session_maker() as db:
        gym = GymData(db)
        user = await gym.user()
        other = await gym.user("someone@example.com")
        bench = await gym.exercise()
        t_ex = await gym.template_exercise(user, bench, [(8, 60.0)] * 3)
        for _ in range(3):
            await gym.session(user, bench, performed(3, 8, 60.0), template_exercise=t_ex)
        current = await gym.session(
            user, bench, performed(3, 8, 60.0), status="in_progress", template_exercise=t_ex
        )
        abandoned = await gym.session(user, bench, performed(3, 8, 60.0), status="abandoned")
        return {
            "user": user,
            "other": other,
            "bench": bench,
            "session": current,
            "abandoned": abandoned,
        }


def auth(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.mark.asyncio
async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


@pytest.mark.asyncio
async def test_requires_token(client, seeded):
    res = await client.get(f"/progression/sessions/{seeded['session'].id}/suggestions")
    assert res.status_code == 401

    res = await client.get(
        f"/progression/sessions/{seeded['session'].id}/suggestions",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_get_generates_then_reuses(client, seeded):
    url = f"/progression/sessions/{seeded['session'].id}/suggestions"

    first = await client.get(url, headers=auth(seeded["user"]))
    second = await client.get(url, headers=auth(seeded["user"]))

    assert first.status_code == 200
    items = first.json()["items"]
    assert len(items) == 1
    assert items[0]["exercise_name"] == "Développé couché"
    assert items[0]["suggestion_type"] == "increase_weight"
    assert items[0]["current_value"] == 60.0
    assert items[0]["suggested_value"] == 65.0
    assert items[0]["status"] == "pending"
    assert second.json()["items"] == items


@pytest.mark.asyncio
async def test_evaluate_endpoint_is_idempotent(client, seeded):
    url = f"/progression/sessions/{seeded['session'].id}/evaluate"
    first = await client.post(url, headers=auth(seeded["user"]))
    second = await client.post(url, headers=auth(seeded["user"]))

    assert first.status_code == 200
    assert [i["id"] for i in first.json()["items"]] == [i["id"] for i in second.json()["items"]]


@pytest.mark.asyncio
async def test_other_users_session_is_hidden(client, seeded):
    res = await client.get(
        f"/progression/sessions/{seeded['session'].id}/suggestions", headers=auth(seeded["other"])
    )
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_abandoned_session_has_no_suggestions(client, seeded):
    res = await client.get(
        f"/progression/sessions/{seeded['abandoned'].id}/suggestions", headers=auth(seeded["user"])
    )
    assert res.status_code == 200
    assert res.json() == {"items": []}

    res = await client.post(
        f"/progression/sessions/{seeded['abandoned'].id}/complete", headers=auth(seeded["user"])
    )
    assert res.status_code == 409


@pytest.mark.asyncio
async def test_accept_then_conflict(client, seeded):
    headers = auth(seeded["user"])
    items = (
        await client.get(f"/progression/sessions/{seeded['session'].id}/suggestions", headers=headers)
    ).json()["items"]
    suggestion_id = items[0]["id"]

    res = await client.patch(
        f"/progression/suggestions/{suggestion_id}", json={"status": "accepted"}, headers=headers
    )
    assert res.status_code == 200
    assert res.json()["status"] == "accepted"
    assert res.json()["responded_at"] is not None

    res = await client.patch(
        f"/progression/suggestions/{suggestion_id}", json={"status": "dismissed"}, headers=headers
    )
    assert res.status_code == 409


@pytest.mark.asyncio
async def test_respond_validation_and_ownership(client, seeded):
    headers = auth(seeded["user"])
    items = (
        await client.get(f"/progression/sessions/{seeded['session'].id}/suggestions", headers=headers)
    ).json()["items"]
    suggestion_id = items[0]["id"]

    res = await client.patch(
        f"/progression/suggestions/{suggestion_id}", json={"status": "pending"}, headers=headers
    )
    assert res.status_code == 422

    res = await client.patch(
        f"/progression/suggestions/{suggestion_id}",
        json={"status": "accepted"},
        headers=auth(seeded["other"]),
    )
    assert res.status_code == 404

    res = await client.patch("/progression/suggestions/9999", json={"status": "accepted"}, headers=headers)
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_complete_and_stagnation(client, seeded, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    headers = auth(seeded["user"])
    session_id = seeded["session"].id

    res = await client.post(f"/progression/sessions/{session_id}/complete", headers=headers)
    assert res.status_code == 200
    assert len(res.json()["items"]) == 1

    res = await client.get(f"/progression/sessions/{session_id}/stagnation", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["has_stagnation"] is True
    assert body["stagnating_exercise_ids"] == [seeded["bench"].id]
    assert body["ai_coaching_available"] is False
