import inspect

from api.middleware import get_current_user
from models.user import User

def test_register_user_binds_caller_ip(client, db):
    res = client.post(
        "/users/register",
        json={"username": "alice"},
        headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.254"}
    )
    assert res.status_code == 201
    data = res.json()
    assert data["username"] == "alice"
    assert data["ip_address"] == "203.0.113.7"

    assert db.query(User).filter_by(username="alice").count() == 1

def test_register_user_requires_username(client):
    res = client.post("/users/register", json={"username": "   "})
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Username is required."}

def test_register_user_missing_body_field(client):
    res = client.post("/users/register", json={})
    assert res.status_code == 400
    assert res.json()["success"] is False

def test_register_duplicate_username(client, test_user):
    res = client.post("/users/register", json={"username": test_user.username})
    assert res.status_code == 409
    assert res.json()["error"] == "Username already exists."

def test_get_me(client, test_user, user_headers):
    res = client.get("/users/me", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["id"] == test_user.id

def test_get_me_unknown_ip(client, test_user):
    res = client.get("/users/me", headers={"X-Forwarded-For": "192.0.2.99"})
    assert res.status_code == 401
    assert res.json()["error"] == "User not found or unauthorized."

def test_real_ip_header_is_used_without_forwarded_for(client, test_user):
    res = client.get("/users/me", headers={"X-Real-IP": test_user.ip_address})
    assert res.status_code == 200
    assert res.json()["username"] == test_user.username

def test_current_user_dependency_runs_in_threadpool():
    # Sync dependencies are run off the event loop by FastAPI
    assert not inspect.iscoroutinefunction(get_current_user)
