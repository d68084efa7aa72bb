"""
HTTP tests for the auth and task routers.

The repositories are swapped for the in-memory fakes through
``app.dependency_overrides``; the lifespan is not entered, so no
database is touched.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from taskboard.core.dependencies import get_task_repository, get_user_repository
from taskboard.errors import StoreError
from taskboard.main import app
from tests.fakes import FakeClock, FakeTaskRepository, FakeUserRepository

PASSWORD = "s3cret-pass"


@pytest.fixture()
def client():
    clock = FakeClock()
    users = FakeUserRepository(clock)
    tasks = FakeTaskRepository(clock)
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_task_repository] = lambda: tasks
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def register(client, name):
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": f"{name.lower()}@example.com", "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]


@pytest.fixture()
def admin(client):
    """Register a user and promote them directly in the fake store."""
    headers, user = register(client, "Ada")
    users = app.dependency_overrides[get_user_repository]()
    users.users[uuid.UUID(user["id"])].role = "admin"
    return headers, user


def new_task(client, headers, assignee_id, **overrides):
    body = {
        "title": "Write release notes",
        "description": "Summarise the changes",
        "dueDate": "2030-06-01T12:00:00Z",
        "priority": "high",
        "assignedTo": assignee_id,
    }
    body.update(overrides)
    return client.post("/api/tasks", json=body, headers=headers)


def test_register_always_creates_plain_user(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Eve", "email": "EVE@example.com", "password": PASSWORD, "role": "admin"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"]["role"] == "user"
    assert body["user"]["email"] == "eve@example.com"
    assert "hashedPassword" not in body["user"]


def test_register_duplicate_email_conflicts(client):
    register(client, "Alice")
    response = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "alice@example.com", "password": PASSWORD},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "conflict"


def test_register_short_password_is_rejected(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Short", "email": "short@example.com", "password": "abc"},
    )
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["error"]["details"]] == ["password"]


def test_login_and_me(client):
    register(client, "Alice")

    response = client.post("/api/auth/login", json={"email": "ALICE@example.com", "password": PASSWORD})
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    me = client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["name"] == "Alice"


def test_login_with_wrong_password(client):
    register(client, "Alice")
    response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Incorrect email or password"


def test_missing_or_bad_token_is_401(client):
    response = client.get("/api/tasks")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["error"]["code"] == "unauthenticated"

    response = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_task_lifecycle(client, admin):
    admin_headers, _ = admin
    alice_headers, alice = register(client, "Alice")

    created = new_task(client, admin_headers, alice["id"])
    assert created.status_code == 201, created.text
    task = created.json()
    assert task["status"] == "pending"
    assert task["assignedTo"] == {"id": alice["id"], "name": "Alice", "email": "alice@example.com"}
    assert task["createdBy"]["name"] == "Ada"

    fetched = client.get(f"/api/tasks/{task['id']}", headers=alice_headers)
    assert fetched.status_code == 200

    updated = client.put(f"/api/tasks/{task['id']}", json={"status": "completed", "title": ""}, headers=alice_headers)
    assert updated.status_code == 200
    assert updated.json()["status"] == "completed"
    assert updated.json()["title"] == "Write release notes"

    deleted = client.delete(f"/api/tasks/{task['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Task deleted successfully"}

    missing = client.get(f"/api/tasks/{task['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "not_found"


def test_create_reports_every_invalid_field(client):
    headers, _ = register(client, "Alice")
    response = client.post("/api/tasks", json={"priority": "someday"}, headers=headers)
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert [d["field"] for d in error["details"]] == ["title", "description", "dueDate", "priority", "assignedTo"]


def test_create_with_unknown_assignee(client):
    headers, _ = register(client, "Alice")
    response = new_task(client, headers, str(uuid.uuid4()))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_reference"


def test_other_users_task_is_forbidden(client, admin):
    admin_headers, _ = admin
    _, alice = register(client, "Alice")
    bob_headers, _ = register(client, "Bob")
    task = new_task(client, admin_headers, alice["id"]).json()

    assert client.get(f"/api/tasks/{task['id']}", headers=bob_headers).status_code == 403
    assert client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=bob_headers).status_code == 403
    response = client.delete(f"/api/tasks/{task['id']}", headers=bob_headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "forbidden"


def test_assignee_cannot_reassign(client, admin):
    admin_headers, _ = admin
    alice_headers, alice = register(client, "Alice")
    _, bob = register(client, "Bob")
    task = new_task(client, admin_headers, alice["id"]).json()

    response = client.put(f"/api/tasks/{task['id']}", json={"assignedTo": bob["id"]}, headers=alice_headers)
    assert response.status_code == 403

    response = client.put(f"/api/tasks/{task['id']}", json={"assignedTo": bob["id"]}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["assignedTo"]["id"] == bob["id"]


def test_list_is_scoped_and_paginated(client, admin):
    admin_headers, _ = admin
    alice_headers, alice = register(client, "Alice")
    _, bob = register(client, "Bob")
    for i in range(12):
        new_task(client, admin_headers, alice["id"], title=f"Alice {i}")
    for i in range(3):
        new_task(client, admin_headers, bob["id"], title=f"Bob {i}", priority="low")

    page = client.get("/api/tasks", headers=alice_headers).json()
    assert page["totalTasks"] == 12
    assert page["totalPages"] == 2
    assert page["currentPage"] == 1
    assert len(page["tasks"]) == 10
    assert page["tasks"][0]["title"] == "Alice 11"

    second = client.get("/api/tasks", params={"page": 2}, headers=alice_headers).json()
    assert [t["title"] for t in second["tasks"]] == ["Alice 1", "Alice 0"]

    low = client.get("/api/tasks", params={"priority": "low", "limit": 2}, headers=admin_headers).json()
    assert low["totalTasks"] == 3
    assert low["totalPages"] == 2
    assert {t["assignedTo"]["id"] for t in low["tasks"]} == {bob["id"]}

    hidden = client.get("/api/tasks", params={"priority": "low"}, headers=alice_headers).json()
    assert hidden["totalTasks"] == 0


def test_non_uuid_task_id_is_a_validation_error(client):
    headers, _ = register(client, "Alice")
    response = client.get("/api/tasks/not-a-uuid", headers=headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


def test_user_management_requires_admin(client, admin):
    admin_headers, _ = admin
    alice_headers, alice = register(client, "Alice")

    assert client.get("/api/auth/users", headers=alice_headers).status_code == 200
    assert client.patch(f"/api/auth/users/{alice['id']}", json={"role": "admin"}, headers=alice_headers).status_code == 403

    created = client.post(
        "/api/auth/users",
        json={"name": "Carol", "email": "carol@example.com", "password": PASSWORD, "role": "admin"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    assert created.json()["role"] == "admin"

    promoted = client.patch(f"/api/auth/users/{alice['id']}", json={"role": "admin"}, headers=admin_headers)
    assert promoted.status_code == 200
    assert promoted.json()["role"] == "admin"

    # Role changes apply to tokens issued before them
    assert client.post(
        "/api/auth/users",
        json={"name": "Dan", "email": "dan@example.com", "password": PASSWORD},
        headers=alice_headers,
    ).status_code == 201


def test_delete_user_with_open_tasks_conflicts(client, admin):
    admin_headers, _ = admin
    alice_headers, alice = register(client, "Alice")
    task = new_task(client, admin_headers, alice["id"]).json()

    response = client.delete(f"/api/auth/users/{alice['id']}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["error"]["details"] == {"openTasks": 1}

    client.put(f"/api/tasks/{task['id']}", json={"status": "completed"}, headers=alice_headers)
    response = client.delete(f"/api/auth/users/{alice['id']}", headers=admin_headers)
    assert response.status_code == 200

    # The removed user's token no longer authenticates; their task shows no assignee
    assert client.get("/api/auth/me", headers=alice_headers).status_code == 401
    view = client.get(f"/api/tasks/{task['id']}", headers=admin_headers).json()
    assert view["assignedTo"] is None


def test_numeric_due_date_is_not_a_timestamp(client):
    headers, alice = register(client, "Alice")

    response = new_task(client, headers, alice["id"], dueDate=1700000000)
    assert response.status_code == 400
    assert [d["field"] for d in response.json()["error"]["details"]] == ["dueDate"]

    task = new_task(client, headers, alice["id"]).json()
    response = client.put(f"/api/tasks/{task['id']}", json={"dueDate": 5}, headers=headers)
    assert response.status_code == 400
    assert client.get(f"/api/tasks/{task['id']}", headers=headers).json()["dueDate"] == task["dueDate"]


def test_wrong_json_types_are_reported_with_the_other_violations(client):
    headers, _ = register(client, "Alice")
    response = client.post(
        "/api/tasks",
        json={"title": 5, "description": "", "dueDate": 1700000000, "priority": 3, "assignedTo": 42},
        headers=headers,
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert [d["field"] for d in error["details"]] == ["title", "description", "dueDate", "priority", "assignedTo"]


def test_store_failure_is_503(client, monkeypatch):
    headers, _ = register(client, "Alice")
    tasks = app.dependency_overrides[get_task_repository]()

    async def unavailable(filters=None):
        raise StoreError("Storage failure during task count")

    monkeypatch.setattr(tasks, "count", unavailable)

    response = client.get("/api/tasks", headers=headers)
    assert response.status_code == 503
    assert response.json() == {
        "error": {"code": "store_error", "message": "Storage failure during task count"}
    }
