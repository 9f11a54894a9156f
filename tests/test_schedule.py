import pytest
from fastapi.testclient import TestClient

from backend.app.core.cache import query_cache
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    query_cache.clear()
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seeded():
    client = TestClient(app)
    admin_token = register_and_login(client, "admin@example.com", "secret")
    north = client.post("/branches/", json={"name": "North", "address": "1 A St", "city": "Metro"}, headers=auth(admin_token)).json()
    south = client.post("/branches/", json={"name": "South", "address": "2 B St", "city": "Metro"}, headers=auth(admin_token)).json()
    kim = client.post(
        "/coaches/", json={"name": "Coach Kim", "email": "kim@example.com", "password": "hoops123"}, headers=auth(admin_token)
    ).json()
    ray = client.post("/coaches/", json={"name": "Coach Ray", "email": "ray@example.com"}, headers=auth(admin_token)).json()
    avery = client.post("/students/", json={"name": "Avery", "email": "avery@example.com"}, headers=auth(admin_token)).json()
    blake = client.post("/students/", json={"name": "Blake", "email": "blake@example.com"}, headers=auth(admin_token)).json()

    def add(day, start, end, branch, coach, student):
        return client.post(
            "/sessions/",
            json={"date": day, "start_time": start, "end_time": end, "branch_id": branch["id"],
                  "coach_ids": [coach["id"]], "student_ids": [student["id"]]},
            headers=auth(admin_token),
        ).json()

    sessions = [
        add("2024-06-02", "09:00:00", "10:00:00", south, ray, blake),
        add("2024-06-01", "14:00:00", "15:00:00", north, kim, avery),
        add("2024-06-01", "09:00:00", "10:00:00", north, kim, avery),
        add("2024-07-01", "09:00:00", "10:00:00", north, kim, avery),
    ]
    kim_token = client.post("/auth/login", json={"email": "kim@example.com", "password": "hoops123"}).json()["access_token"]
    return {"client": client, "admin_token": admin_token, "kim_token": kim_token, "north": north, "south": south,
            "kim": kim, "ray": ray, "sessions": sessions}


def test_schedule_orders_by_date_then_start(seeded):
    client = seeded["client"]
    entries = client.get(
        "/schedule/?start_date=2024-06-01&end_date=2024-06-30", headers=auth(seeded["admin_token"])
    ).json()
    assert [(e["date"], e["start_time"]) for e in entries] == [
        ("2024-06-01", "09:00:00"),
        ("2024-06-01", "14:00:00"),
        ("2024-06-02", "09:00:00"),
    ]
    first = entries[0]
    assert first["branch_name"] == "North"
    assert first["coaches"] == [{"id": seeded["kim"]["id"], "name": "Coach Kim"}]
    assert [s["name"] for s in first["students"]] == ["Avery"]


def test_schedule_filters_by_branch_and_coach(seeded):
    client = seeded["client"]
    south = client.get(f"/schedule/?branch_id={seeded['south']['id']}", headers=auth(seeded["admin_token"])).json()
    assert [e["branch_name"] for e in south] == ["South"]

    ray = client.get(f"/schedule/?coach_id={seeded['ray']['id']}", headers=auth(seeded["admin_token"])).json()
    assert [e["id"] for e in ray] == [seeded["sessions"][0]["id"]]


def test_coach_sees_only_own_sessions(seeded):
    client = seeded["client"]
    entries = client.get(f"/schedule/?coach_id={seeded['ray']['id']}", headers=auth(seeded["kim_token"])).json()
    assert len(entries) == 3
    assert all(e["coaches"][0]["name"] == "Coach Kim" for e in entries)


def test_schedule_reflects_new_sessions_despite_cache(seeded):
    client = seeded["client"]
    before = client.get("/schedule/", headers=auth(seeded["admin_token"])).json()
    client.delete(f"/sessions/{seeded['sessions'][3]['id']}", headers=auth(seeded["admin_token"]))
    after = client.get("/schedule/", headers=auth(seeded["admin_token"])).json()
    assert len(after) == len(before) - 1


def test_inverted_range_rejected(seeded):
    client = seeded["client"]
    resp = client.get("/schedule/?start_date=2024-06-30&end_date=2024-06-01", headers=auth(seeded["admin_token"]))
    assert resp.status_code == 422
