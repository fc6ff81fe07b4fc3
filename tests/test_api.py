from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from campus_api.app import create_app

ACTIVITY = {
    "title": "Robotics demo",
    "description": "Build a line follower",
    "category": "tech",
    "organizer": "Robotics Club",
    "location": "Lab 3",
    "startTime": "2026-11-02T09:00:00Z",
    "endTime": "2026-11-02T12:00:00Z",
    "capacity": 20,
}


@pytest.fixture()
def app(make_settings):
    return create_app(make_settings())


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


def _signup(client, username, password="secret1", **extra):
    return client.post("/api/register", json={"username": username, "password": password, **extra})


def _login(client, username, password="secret1"):
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(app, client):
    app.state.auth_service.create_user("admin01", "supersecret", role="admin")
    return _auth(_login(client, "admin01", "supersecret")["token"])


def _user_headers(client, username):
    _signup(client, username)
    body = _login(client, username)
    return _auth(body["token"]), body["user"]["id"]


def test_healthz_and_security_headers(client):
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "Strict-Transport-Security" not in resp.headers


def test_signup_and_login(client):
    resp = _signup(client, "alice", fullName="Alice Liddell", college="Engineering")

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "registration successful"
    assert body["user"]["username"] == "alice"
    assert body["user"]["fullName"] == "Alice Liddell"
    assert body["user"]["role"] == "student"
    assert "passwordHash" not in body["user"]

    login = _login(client, "alice")
    assert login["message"] == "login successful"
    assert login["token"]
    assert login["user"]["id"] == body["user"]["id"]


def test_login_failures_are_generic_401(client):
    _signup(client, "alice")

    wrong = client.post("/api/login", json={"username": "alice", "password": "nope123"})
    unknown = client.post("/api/login", json={"username": "ghost", "password": "secret1"})

    assert wrong.status_code == 401
    assert unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert wrong.json()["code"] == "unauthenticated"


def test_signup_validation_and_duplicates(client):
    assert _signup(client, "abc").status_code == 400
    assert _signup(client, "alice", password="12345").status_code == 400
    assert _signup(client, "alice").status_code == 201

    dup = _signup(client, "alice")
    assert dup.status_code == 409
    assert dup.json()["code"] == "conflict"


def test_malformed_body_is_400(client):
    resp = client.post("/api/register", json={"password": "secret1"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"
    assert "username" in resp.json()["error"]


def test_create_activity_requires_token(client):
    assert client.post("/api/activities", json=ACTIVITY).status_code == 401
    bad = client.post("/api/activities", json=ACTIVITY, headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401


def test_activity_crud_and_filters(client):
    headers, user_id = _user_headers(client, "alice")

    created = client.post("/api/activities", json=ACTIVITY, headers=headers)
    assert created.status_code == 201
    activity = created.json()
    assert activity["createdById"] == user_id
    assert activity["capacity"] == 20

    client.post("/api/activities", json={**ACTIVITY, "title": "Poetry slam", "category": "arts"}, headers=headers)

    assert [a["title"] for a in client.get("/api/activities", params={"category": "tech"}).json()] == ["Robotics demo"]
    assert [a["title"] for a in client.get("/api/activities", params={"search": "slam"}).json()] == ["Poetry slam"]
    assert len(client.get("/api/activities").json()) == 2

    detail = client.get(f"/api/activities/{activity['id']}")
    assert detail.status_code == 200
    assert detail.json()["registeredCount"] == 0

    deleted = client.delete(f"/api/activities/{activity['id']}", headers=headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/activities/{activity['id']}").status_code == 404
    assert client.delete(f"/api/activities/{activity['id']}", headers=headers).status_code == 404


def test_activity_with_end_before_start_is_rejected(client):
    headers, _ = _user_headers(client, "alice")
    payload = {**ACTIVITY, "endTime": "2026-11-02T08:00:00Z"}

    resp = client.post("/api/activities", json=payload, headers=headers)

    assert resp.status_code == 400
    assert client.get("/api/activities").json() == []


def test_registration_lifecycle(client, admin_headers):
    alice, _ = _user_headers(client, "alice")
    bob, bob_id = _user_headers(client, "bobby")
    activity_id = client.post("/api/activities", json=ACTIVITY, headers=alice).json()["id"]

    reg = client.post(f"/api/activities/{activity_id}/register", headers=bob)
    assert reg.status_code == 201
    registration = reg.json()
    assert registration["status"] == "pending"
    assert registration["userId"] == bob_id

    assert client.post(f"/api/activities/{activity_id}/register", headers=bob).status_code == 409
    assert client.get(f"/api/activities/{activity_id}").json()["registeredCount"] == 1

    approved = client.put(
        f"/api/admin/registrations/{registration['id']}/status", json={"status": "approved"}, headers=admin_headers
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    mine = client.get(f"/api/users/{bob_id}/registrations").json()
    assert [(r["activityId"], r["status"]) for r in mine] == [(activity_id, "approved")]

    registrants = client.get(f"/api/activities/{activity_id}/registrations").json()
    assert [r["username"] for r in registrants] == ["bobby"]

    everything = client.get("/api/admin/registrations", headers=admin_headers).json()
    assert everything[0]["activityTitle"] == "Robotics demo"

    assert client.delete(f"/api/registrations/{registration['id']}", headers=alice).status_code == 403
    assert client.delete(f"/api/registrations/{registration['id']}", headers=bob).status_code == 200
    assert client.delete(f"/api/registrations/{registration['id']}", headers=bob).status_code == 404
    assert client.get(f"/api/users/{bob_id}/registrations").json() == []


def test_register_for_missing_activity_is_404(client):
    headers, _ = _user_headers(client, "alice")

    assert client.post("/api/activities/999/register", headers=headers).status_code == 404


def test_admin_routes_reject_non_admins(client):
    headers, _ = _user_headers(client, "alice")

    assert client.get("/api/admin/registrations").status_code == 401
    assert client.get("/api/admin/registrations", headers=headers).status_code == 403
    forbidden = client.put("/api/admin/registrations/1/status", json={"status": "approved"}, headers=headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "forbidden"
    assert client.delete("/api/admin/registrations/1", headers=headers).status_code == 403


def test_admin_status_validation_and_delete(client, admin_headers):
    alice, _ = _user_headers(client, "alice")
    activity_id = client.post("/api/activities", json=ACTIVITY, headers=alice).json()["id"]
    reg_id = client.post(f"/api/activities/{activity_id}/register", headers=alice).json()["id"]

    bad = client.put(f"/api/admin/registrations/{reg_id}/status", json={"status": "cancelled"}, headers=admin_headers)
    assert bad.status_code == 400
    missing = client.put("/api/admin/registrations/999/status", json={"status": "approved"}, headers=admin_headers)
    assert missing.status_code == 404

    assert client.delete(f"/api/admin/registrations/{reg_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/admin/registrations/{reg_id}", headers=admin_headers).status_code == 404


def test_stats_endpoints(client):
    alice, _ = _user_headers(client, "alice")
    bob, _ = _user_headers(client, "bobby")
    first = client.post("/api/activities", json=ACTIVITY, headers=alice).json()["id"]
    client.post("/api/activities", json={**ACTIVITY, "title": "Poetry slam", "organizer": "Poets"}, headers=alice)
    client.post(f"/api/activities/{first}/register", headers=alice)
    client.post(f"/api/activities/{first}/register", headers=bob)

    hot = client.get("/api/stats/hot-activities").json()
    assert hot[0] == {"title": "Robotics demo", "organizer": "Robotics Club", "registrationCount": 2}
    assert hot[1]["registrationCount"] == 0
    assert len(client.get("/api/stats/hot-activities", params={"limit": 1}).json()) == 1
    assert client.get("/api/stats/hot-activities", params={"limit": 0}).status_code == 400

    counts = client.get("/api/stats/organizer-activity-counts").json()
    assert {c["organizer"]: c["activityCount"] for c in counts} == {"Robotics Club": 1, "Poets": 1}


def test_narrowed_admin_targets(make_settings):
    app = create_app(make_settings(admin_status_targets=("approved", "pending")))
    with TestClient(app) as client:
        app.state.auth_service.create_user("admin01", "supersecret", role="admin")
        admin = _auth(_login(client, "admin01", "supersecret")["token"])
        alice, _ = _user_headers(client, "alice")
        activity_id = client.post("/api/activities", json=ACTIVITY, headers=alice).json()["id"]
        reg_id = client.post(f"/api/activities/{activity_id}/register", headers=alice).json()["id"]

        resp = client.put(f"/api/admin/registrations/{reg_id}/status", json={"status": "rejected"}, headers=admin)

        assert resp.status_code == 400


def test_register_with_token_for_missing_user_is_404(app, client):
    alice, _ = _user_headers(client, "alice")
    activity_id = client.post("/api/activities", json=ACTIVITY, headers=alice).json()["id"]
    ghost = app.state.auth_gate.tokens.issue(4242, "ghost", "student")

    resp = client.post(f"/api/activities/{activity_id}/register", headers=_auth(ghost))

    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"


@pytest.mark.parametrize(
    "path",
    [
        "/api/activities/99999999999999999999999",
        "/api/activities/0",
        "/api/activities/-3/registrations",
        "/api/users/99999999999999999999999/registrations",
    ],
)
def test_out_of_range_ids_are_400(client, path):
    resp = client.get(path)

    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


def test_out_of_range_ids_on_authenticated_routes_are_400(client, admin_headers):
    big = "99999999999999999999999"

    assert client.delete(f"/api/registrations/{big}", headers=admin_headers).status_code == 400
    resp = client.put(f"/api/admin/registrations/{big}/status", json={"status": "approved"}, headers=admin_headers)
    assert resp.status_code == 400


def test_unexpected_errors_return_json_500(app):
    @app.get("/explode")
    def explode():
        raise OverflowError("Python int too large to convert to SQLite INTEGER")

    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/explode")

    assert resp.status_code == 500
    assert resp.json() == {"error": "internal server error", "code": "internal_error"}


def test_search_is_case_insensitive(client):
    headers, _ = _user_headers(client, "alice")
    client.post("/api/activities", json=ACTIVITY, headers=headers)

    found = client.get("/api/activities", params={"search": "ROBOTICS"}).json()

    assert [a["title"] for a in found] == ["Robotics demo"]


def test_times_are_utc_aware_on_the_wire(client):
    headers, _ = _user_headers(client, "alice")
    payload = {**ACTIVITY, "startTime": "2026-11-02T11:00:00+02:00"}
    activity = client.post("/api/activities", json=payload, headers=headers).json()
    registration = client.post(f"/api/activities/{activity['id']}/register", headers=headers).json()

    detail = client.get(f"/api/activities/{activity['id']}").json()

    assert detail["startTime"] in ("2026-11-02T09:00:00Z", "2026-11-02T09:00:00+00:00")
    assert detail["endTime"] in ("2026-11-02T12:00:00Z", "2026-11-02T12:00:00+00:00")
    assert registration["registrationTime"].endswith(("Z", "+00:00"))
