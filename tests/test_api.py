import pytest
from fastapi.testclient import TestClient

from routine_tracker.db.session import get_db
from routine_tracker.main import app
from routine_tracker.services.live_sessions import LiveSessionRegistry, get_live_sessions

from conftest import OTHER_USER_ID

OTHER = {"X-User-Id": str(OTHER_USER_ID)}


@pytest.fixture
def registry(clock):
    return LiveSessionRegistry(clock=clock)


@pytest.fixture
def client(session_maker, registry):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_live_sessions] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_exercise(client, name, metrics):
    response = client.post("/api/v1/exercises", json={"name": name, "supported_metrics": metrics})
    assert response.status_code == 201
    return response.json()["id"]


def create_routine(client, **fields):
    bench = create_exercise(client, "Bench Press", ["reps", "weight"])
    plank = create_exercise(client, "Plank", ["duration"])
    payload = {
        "name": "Push Pull",
        "level": "intermediate",
        "goal": "strength",
        "days_per_week": 2,
        "days": [
            {
                "day_number": 1,
                "name": "Push",
                "exercises": [
                    {"exercise_id": bench, "target_sets": 3, "target_reps": 8, "target_weight": 80},
                    {"exercise_id": plank, "target_duration": 60},
                ],
            },
            {"day_number": 4, "name": "Pull", "exercises": []},
        ],
    }
    payload.update(fields)
    response = client.post("/api/v1/routines", json=payload)
    assert response.status_code == 201, response.text
    return response.json(), bench


def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "live_sessions": 0}


def test_create_routine_initializes_blank_days(client):
    response = client.post("/api/v1/routines", json={"name": "Fresh", "days_per_week": 3})
    assert response.status_code == 201
    body = response.json()
    assert [d["name"] for d in body["days"]] == ["Day 1", "Day 2", "Day 3"]

    listed = client.get("/api/v1/routines").json()
    assert [r["id"] for r in listed] == [body["id"]]
    assert client.get("/api/v1/routines", headers=OTHER).json() == []


def test_create_routine_rejects_day_mismatch(client):
    response = client.post(
        "/api/v1/routines",
        json={"name": "Bad", "days_per_week": 2, "days": [{"day_number": 1, "name": "Only"}]},
    )
    assert response.status_code == 400


def test_public_must_be_template(client):
    response = client.post("/api/v1/routines", json={"name": "Bad", "is_public": True})
    assert response.status_code == 422


def test_private_routine_hidden_from_others(client):
    routine, _ = create_routine(client)
    assert client.get(f"/api/v1/routines/{routine['id']}", headers=OTHER).status_code == 403
    assert client.delete(f"/api/v1/routines/{routine['id']}", headers=OTHER).status_code == 403


def test_days_per_week_resize(client):
    routine, _ = create_routine(client)
    url = f"/api/v1/routines/{routine['id']}/days-per-week"

    grown = client.post(url, json={"days_per_week": 4}).json()
    assert grown["applied"] is True
    assert [d["name"] for d in grown["routine"]["days"]] == ["Push", "Pull", "Day 3", "Day 4"]

    refused = client.post(url, json={"days_per_week": 1}).json()
    assert refused["applied"] is False
    assert refused["routine"]["days_per_week"] == 4
    assert len(client.get(f"/api/v1/routines/{routine['id']}").json()["days"]) == 4

    shrunk = client.post(url, json={"days_per_week": 1, "confirm": True}).json()
    assert shrunk["applied"] is True
    assert [d["name"] for d in shrunk["routine"]["days"]] == ["Push"]


def test_templates_and_cloning(client):
    template, _ = create_routine(client, is_template=True, is_public=True, tags=["split"])
    private, _ = create_routine(client, name="Mine")

    page = client.get("/api/v1/routines/templates", params={"goal": "strength"}).json()
    assert [t["id"] for t in page["templates"]] == [template["id"]]
    assert page["pagination"] == {"total": 1, "page": 1, "limit": 10, "pages": 1}

    response = client.post(f"/api/v1/routines/{template['id']}/clone", headers=OTHER)
    assert response.status_code == 201
    clone = response.json()
    assert clone["name"] == "Push Pull (Copy)"
    assert clone["user_id"] == str(OTHER_USER_ID)
    assert clone["is_template"] is False and clone["is_public"] is False
    assert clone["days"] == template["days"]

    assert client.post(f"/api/v1/routines/{private['id']}/clone").status_code == 400
    assert client.post(f"/api/v1/routines/{private['id']}/clone", headers=OTHER).status_code == 404


def test_live_session_flow(client, clock):
    routine, bench = create_routine(client)

    response = client.post(f"/api/v1/routines/{routine['id']}/days/0/sessions")
    assert response.status_code == 201
    snap = response.json()
    session_id = snap["session_id"]
    assert snap["state"] == "idle"
    exercises = snap["draft"]["exercises"]
    assert [len(e["completed_sets"]) for e in exercises] == [3, 1]
    assert exercises[0]["name"] == "Bench Press"

    base = f"/api/v1/live-sessions/{session_id}"
    assert client.post(f"{base}/timer/pause").status_code == 409

    client.post(f"{base}/timer/start")
    clock.advance(5)
    assert client.post(f"{base}/timer/pause").json()["elapsed_seconds"] == 5
    client.post(f"{base}/timer/start")
    clock.advance(3)
    assert client.get(base).json()["elapsed_seconds"] == 8

    snap = client.patch(f"{base}/exercises/0/sets/0", json={"is_completed": True, "reps": "7"}).json()
    assert snap["progress_percent"] == 25
    assert snap["draft"]["exercises"][0]["completed_sets"][0]["reps"] == 7
    client.patch(f"{base}/exercises/0/sets/1", json={"is_completed": True, "weight": "heavy"})
    client.patch(f"{base}/exercises/1/sets/0", json={"is_completed": True})
    assert client.patch(f"{base}/exercises/0/sets/9", json={"is_completed": True}).status_code == 404
    assert client.patch(base, json={"notes": "good pump"}).status_code == 200

    # Catalog rename after materialization does not reach the session
    client.patch(f"/api/v1/exercises/{bench}", json={"name": "Barbell Bench Press"})

    clock.advance(2)
    response = client.post(f"{base}/save")
    assert response.status_code == 201
    record = response.json()
    assert record["progress"] == 75
    assert record["duration_seconds"] == 10
    assert record["notes"] == "good pump"
    assert record["exercises"][0]["name"] == "Bench Press"
    assert record["exercises"][0]["completed_sets"][1]["weight"] == 0

    assert client.get(base).status_code == 404

    history = client.get("/api/v1/sessions").json()
    assert [s["id"] for s in history] == [record["id"]]
    assert client.get(f"/api/v1/sessions/{record['id']}", headers=OTHER).status_code == 404

    edited = client.patch(f"/api/v1/sessions/{record['id']}", json={"notes": "edited"}).json()
    assert edited["notes"] == "edited"
    assert edited["progress"] == 75


def test_reset_requires_confirm(client, clock):
    routine, _ = create_routine(client)
    session_id = client.post(f"/api/v1/routines/{routine['id']}/days/0/sessions").json()["session_id"]
    base = f"/api/v1/live-sessions/{session_id}"

    client.post(f"{base}/timer/start")
    clock.advance(30)
    assert client.post(f"{base}/timer/reset", json={}).json()["elapsed_seconds"] == 30
    snap = client.post(f"{base}/timer/reset", json={"confirm": True}).json()
    assert snap["state"] == "idle"
    assert snap["elapsed_seconds"] == 0


def test_save_without_progress_is_refused(client):
    routine, _ = create_routine(client)
    session_id = client.post(f"/api/v1/routines/{routine['id']}/days/0/sessions").json()["session_id"]

    assert client.post(f"/api/v1/live-sessions/{session_id}/save").status_code == 400
    assert client.delete(f"/api/v1/live-sessions/{session_id}").status_code == 204
    assert client.get("/api/v1/sessions").json() == []


def test_bad_day_index(client):
    routine, _ = create_routine(client)
    assert client.post(f"/api/v1/routines/{routine['id']}/days/5/sessions").status_code == 404


def test_empty_day_materializes_empty_session(client):
    routine, _ = create_routine(client)
    snap = client.post(f"/api/v1/routines/{routine['id']}/days/1/sessions").json()
    assert snap["draft"]["exercises"] == []
    assert snap["draft"]["workout_name"] == "Pull"
