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


def create_coach_with_login(client: TestClient, admin_token: str, name: str, email: str) -> tuple[dict, str]:
    coach = client.post(
        "/coaches/", json={"name": name, "email": email, "password": "hoops123"}, headers=auth(admin_token)
    ).json()
    token = client.post("/auth/login", json={"email": email, "password": "hoops123"}).json()["access_token"]
    return coach, token


def create_session(client: TestClient, admin_token: str, branch_id: int, coach_id: int, student_id: int, day: str) -> dict:
    return client.post(
        "/sessions/",
        json={
            "date": day,
            "start_time": "10:00:00",
            "end_time": "11:00:00",
            "branch_id": branch_id,
            "coach_ids": [coach_id],
            "student_ids": [student_id],
        },
        headers=auth(admin_token),
    ).json()


def test_feed_is_newest_first_with_coach_names_and_scoped_for_coaches():
    client = TestClient(app)
    admin_token = register_and_login(client, "admin@example.com", "secret")
    branch = client.post("/branches/", json={"name": "Main", "address": "1 Hoop Ln", "city": "Metro"}, headers=auth(admin_token)).json()
    student = client.post("/students/", json={"name": "Avery", "email": "avery@example.com"}, headers=auth(admin_token)).json()
    kim, kim_token = create_coach_with_login(client, admin_token, "Coach Kim", "kim@example.com")
    ray, ray_token = create_coach_with_login(client, admin_token, "Coach Ray", "ray@example.com")
    kim_session = create_session(client, admin_token, branch["id"], kim["id"], student["id"], "2024-06-01")
    ray_session = create_session(client, admin_token, branch["id"], ray["id"], student["id"], "2024-06-02")

    client.post(f"/sessions/{kim_session['id']}/time-in", headers=auth(kim_token))
    client.post(f"/sessions/{ray_session['id']}/time-in", headers=auth(ray_token))

    feed = client.get("/activity-logs/", headers=auth(admin_token)).json()
    assert [(e["coach_name"], e["activity_type"]) for e in feed] == [
        ("Coach Ray", "time_in"),
        ("Coach Kim", "time_in"),
    ]
    assert feed[0]["activity_description"] == "Coach timed in for session"
    assert feed[0]["created_at_display"]

    kim_feed = client.get("/activity-logs/", headers=auth(kim_token)).json()
    assert [e["session_id"] for e in kim_feed] == [kim_session["id"]]


def test_feed_limit_and_session_filter():
    client = TestClient(app)
    admin_token = register_and_login(client, "admin@example.com", "secret")
    branch = client.post("/branches/", json={"name": "Main", "address": "1 Hoop Ln", "city": "Metro"}, headers=auth(admin_token)).json()
    student = client.post("/students/", json={"name": "Avery", "email": "avery@example.com"}, headers=auth(admin_token)).json()
    kim, kim_token = create_coach_with_login(client, admin_token, "Coach Kim", "kim@example.com")
    session = create_session(client, admin_token, branch["id"], kim["id"], student["id"], "2024-06-01")
    client.post(f"/sessions/{session['id']}/time-in", headers=auth(kim_token))
    client.post(f"/sessions/{session['id']}/time-out", headers=auth(kim_token))

    limited = client.get("/activity-logs/?limit=2", headers=auth(admin_token)).json()
    assert [e["activity_type"] for e in limited] == ["session_completed", "time_out"]

    by_session = client.get(f"/activity-logs/?session_id={session['id']}", headers=auth(admin_token)).json()
    assert len(by_session) == 3


def test_user_without_coach_profile_gets_empty_feed():
    client = TestClient(app)
    register_and_login(client, "admin@example.com", "secret")
    token = register_and_login(client, "plain@example.com", "secret")
    assert client.get("/activity-logs/", headers=auth(token)).json() == []
