"""Self-service profile and admin user management."""

from app.models import Profile


def test_profile_requires_login(client):
    r = client.get("/profile")
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_profile_is_null_before_first_save(client, login):
    headers = login("newbie", email="newbie@example.com")

    r = client.get("/profile", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"user": {"id": "newbie", "email": "newbie@example.com"}, "profile": None}


def test_update_merges_fields(client, login):
    headers = login("u1")

    r = client.post("/profile", json={"name": " Jane ", "lunchSession": "12:30"}, headers=headers)
    assert r.status_code == 200
    assert r.json() == {"ok": True}

    client.post("/profile", json={"locationId": "loc-hq"}, headers=headers)

    profile = client.get("/profile", headers=headers).json()["profile"]
    assert profile == {
        "id": "u1",
        "name": "Jane",
        "role": "staff",
        "locationId": "loc-hq",
        "lunchSession": "12:30",
    }


def test_update_accepts_snake_case_and_null_clears(client, login):
    headers = login("u1")
    client.post("/profile", json={"name": "Jane", "lunch_session": "13:00"}, headers=headers)
    client.post("/profile", json={"lunchSession": None}, headers=headers)

    profile = client.get("/profile", headers=headers).json()["profile"]
    assert profile["name"] == "Jane"
    assert profile["lunchSession"] is None


def test_empty_update_reports_no_change(client, login):
    headers = login("u1")
    r = client.post("/profile", json={}, headers=headers)
    assert r.json() == {"ok": True, "noChange": True}


def test_role_cannot_be_self_assigned(client, login, db):
    headers = login("u1", name="Jane")

    r = client.post("/profile", json={"name": "Boss", "role": "admin"}, headers=headers)
    assert r.status_code == 400

    db.expire_all()
    profile = db.get(Profile, "u1")
    assert profile.role == "staff"
    assert profile.name == "Jane"


def test_bad_lunch_session_rejected(client, login):
    r = client.post("/profile", json={"lunchSession": "11:00"}, headers=login("u1"))
    assert r.status_code == 400


def test_admin_sets_role(client, admin_headers, login, db):
    login("u2", name="Pat")

    r = client.patch("/profile", json={"id": "u2", "role": "catering"}, headers=admin_headers)
    assert r.status_code == 200

    db.expire_all()
    assert db.get(Profile, "u2").role == "catering"


def test_admin_sets_role_creates_missing_profile(client, admin_headers, db):
    r = client.patch("/admin/users", json={"id": "ghost-user", "role": "catering"}, headers=admin_headers)
    assert r.status_code == 200

    db.expire_all()
    assert db.get(Profile, "ghost-user").role == "catering"


def test_set_role_rejects_unknown_role(client, admin_headers):
    r = client.patch("/profile", json={"id": "u2", "role": "chef"}, headers=admin_headers)
    assert r.status_code == 400


def test_catering_cannot_set_roles(client, catering_headers):
    r = client.patch("/profile", json={"id": "cater-1", "role": "admin"}, headers=catering_headers)
    assert r.status_code == 403


def test_admin_lists_users(client, admin_headers, login):
    login("u2", email="zoe@example.com", name="Zoe", lunch_session="13:00")
    login("u3", email="bea@example.com")

    r = client.get("/admin/users", headers=admin_headers)
    assert r.status_code == 200
    users = r.json()["users"]

    assert [u["email"] for u in users] == ["admin-1@example.com", "bea@example.com", "zoe@example.com"]
    assert users[1] == {
        "id": "u3",
        "email": "bea@example.com",
        "name": None,
        "role": "staff",
        "lunchSession": None,
        "locationId": None,
    }
    assert users[2]["lunchSession"] == "13:00"
    assert users[0]["role"] == "admin"


def test_staff_cannot_list_users(client, staff_headers):
    assert client.get("/admin/users", headers=staff_headers).status_code == 403
