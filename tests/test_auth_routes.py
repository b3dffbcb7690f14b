import pytest

from tests.conftest import auth_header


def test_register_returns_token_and_user(client, register):
    body = register()
    assert body["token"]
    user = body["user"]
    assert user["email"] == "alice@example.com"
    assert user["role"] == "driver"
    assert user["user_id"].startswith("driver_")
    assert "password" not in user and "password_hash" not in user


def test_register_validation_errors(client):
    resp = client.post("/api/auth/register", json={
        "name": "",
        "email": "not-an-email",
        "password": "123",
        "role": "chef",
        "phone": "",
    })
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "Name is required"
    fields = {d["field"] for d in body["details"]}
    assert fields == {"name", "email", "password", "role", "phone"}


def test_register_without_body(client):
    resp = client.post("/api/auth/register", data="nope", content_type="text/plain")
    assert resp.status_code == 400


def test_register_duplicate_is_rejected(client, register):
    register()
    resp = client.post("/api/auth/register", json={
        "name": "Alice Again",
        "email": "alice@example.com",
        "password": "secret123",
        "role": "driver",
        "phone": "555-0101",
    })
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "User already exists"}


def test_login(client, register):
    register()
    resp = client.post("/api/auth/login", json={
        "email": "alice@example.com", "password": "secret123", "role": "driver",
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["token"]
    assert body["user"]["email"] == "alice@example.com"


def test_login_bad_password(client, register):
    register()
    resp = client.post("/api/auth/login", json={
        "email": "alice@example.com", "password": "wrong-pass", "role": "driver",
    })
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid credentials"


def test_login_unknown_email_looks_the_same(client):
    resp = client.post("/api/auth/login", json={
        "email": "ghost@example.com", "password": "secret123", "role": "maid",
    })
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid credentials"


def test_current_user(client, register):
    body = register(role="maid", email="mary@example.com", name="Mary")
    resp = client.get("/api/auth/user", headers=auth_header(body["token"]))
    assert resp.status_code == 200
    user = resp.get_json()
    assert user["user_id"] == body["user"]["user_id"]
    assert user["role"] == "maid"
    assert "password_hash" not in user


def test_update_profile(client, register):
    token = register()["token"]
    resp = client.put("/api/auth/profile", headers=auth_header(token),
                      json={"name": "Alice B.", "phone": "555-0111"})
    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["name"] == "Alice B."
    assert user["phone"] == "555-0111"


def test_update_profile_rejects_blank_name(client, register):
    token = register()["token"]
    resp = client.put("/api/auth/profile", headers=auth_header(token), json={"name": "  "})
    assert resp.status_code == 400


@pytest.mark.parametrize("body", [[1, 2], "x", 5])
@pytest.mark.parametrize("path", ["/api/auth/register", "/api/auth/login"])
def test_non_object_body_is_rejected(client, path, body):
    resp = client.post(path, json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Request body must be a JSON object"}


def test_profile_non_object_body_is_rejected(client, register):
    token = register()["token"]
    resp = client.put("/api/auth/profile", headers=auth_header(token), json=["name"])
    assert resp.status_code == 400


def test_whitespace_password_can_log_in(client, register):
    register(password="      ")
    resp = client.post("/api/auth/login", json={
        "email": "alice@example.com", "password": "      ", "role": "driver",
    })
    assert resp.status_code == 200


def test_login_empty_password(client, register):
    register()
    resp = client.post("/api/auth/login", json={
        "email": "alice@example.com", "password": "", "role": "driver",
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Password is required"
