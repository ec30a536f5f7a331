from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from conftest import basic_auth, session_cookie, token_from


def _session_for(client: FlaskClient, name: str, email: str) -> dict[str, str]:
    client.post("/api/users", json={"name": name, "email": email, "password": "secret123"})
    login = client.post("/api/users/login", headers=basic_auth(email, "secret123"))
    return session_cookie(token_from(login))


@pytest.fixture()
def alice(client: FlaskClient) -> dict[str, str]:
    return _session_for(client, "Alice", "a@x.com")


@pytest.fixture()
def bob(client: FlaskClient) -> dict[str, str]:
    return _session_for(client, "Bob", "b@x.com")


def test_todos_require_session(client: FlaskClient) -> None:
    assert client.get("/api/todos").status_code == 401
    assert client.post("/api/todos", json={"title": "x"}).status_code == 401
    assert client.delete("/api/todos").status_code == 401


def test_create_and_list_todos(client: FlaskClient, alice: dict[str, str]) -> None:
    created = client.post("/api/todos", json={"title": " buy milk ", "order": 2}, headers=alice)
    client.post("/api/todos", json={"title": "walk dog", "order": 1}, headers=alice)
    client.post("/api/todos", json={"title": "someday"}, headers=alice)

    assert created.status_code == 201
    todo = created.get_json()
    assert todo == {"id": todo["id"], "title": "buy milk", "order": 2, "completed": False}

    listed = client.get("/api/todos", headers=alice)
    assert listed.status_code == 200
    assert [t["title"] for t in listed.get_json()] == ["walk dog", "buy milk", "someday"]


@pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}, {"title": "x" * 257}])
def test_create_todo_validates_title(
    client: FlaskClient, alice: dict[str, str], payload: dict
) -> None:
    response = client.post("/api/todos", json=payload, headers=alice)

    assert response.status_code == 422
    assert response.get_json()["context"]["fields"] == ["title"]


def test_get_update_and_delete_todo(client: FlaskClient, alice: dict[str, str]) -> None:
    todo_id = client.post(
        "/api/todos", json={"title": "write docs", "order": 5}, headers=alice
    ).get_json()["id"]

    fetched = client.get(f"/api/todos/{todo_id}", headers=alice)
    assert fetched.get_json()["title"] == "write docs"

    patched = client.patch(f"/api/todos/{todo_id}", json={"completed": True}, headers=alice)
    assert patched.status_code == 200
    assert patched.get_json() == {
        "id": todo_id,
        "title": "write docs",
        "order": 5,
        "completed": True,
    }

    cleared = client.patch(f"/api/todos/{todo_id}", json={"order": None}, headers=alice)
    assert cleared.get_json()["order"] is None

    unchanged = client.patch(f"/api/todos/{todo_id}", json={}, headers=alice)
    assert unchanged.get_json()["title"] == "write docs"

    assert client.delete(f"/api/todos/{todo_id}", headers=alice).status_code == 200
    missing = client.get(f"/api/todos/{todo_id}", headers=alice)
    assert missing.status_code == 404
    assert missing.get_json() == {"error": "todo_not_found", "context": {"todo_id": todo_id}}


def test_other_users_todo_is_not_found(
    client: FlaskClient, alice: dict[str, str], bob: dict[str, str]
) -> None:
    todo_id = client.post("/api/todos", json={"title": "private"}, headers=alice).get_json()["id"]

    assert client.get(f"/api/todos/{todo_id}", headers=bob).status_code == 404
    assert (
        client.patch(f"/api/todos/{todo_id}", json={"title": "mine"}, headers=bob).status_code
        == 404
    )
    assert client.delete(f"/api/todos/{todo_id}", headers=bob).status_code == 404
    assert client.get("/api/todos", headers=bob).get_json() == []
    assert client.get(f"/api/todos/{todo_id}", headers=alice).get_json()["title"] == "private"


def test_delete_all_only_removes_callers_todos(
    client: FlaskClient, alice: dict[str, str], bob: dict[str, str]
) -> None:
    client.post("/api/todos", json={"title": "a1"}, headers=alice)
    client.post("/api/todos", json={"title": "a2"}, headers=alice)
    client.post("/api/todos", json={"title": "b1"}, headers=bob)

    response = client.delete("/api/todos", headers=alice)

    assert response.status_code == 200
    assert response.get_json() == {"deleted": 2}
    assert client.get("/api/todos", headers=alice).get_json() == []
    assert [t["title"] for t in client.get("/api/todos", headers=bob).get_json()] == ["b1"]


@pytest.mark.parametrize("order", [10**30, -(10**30), 2**31])
def test_out_of_range_order_returns_422(
    client: FlaskClient, alice: dict[str, str], order: int
) -> None:
    created = client.post("/api/todos", json={"title": "x", "order": order}, headers=alice)
    assert created.status_code == 422
    assert created.get_json()["context"]["fields"] == ["order"]

    todo_id = client.post("/api/todos", json={"title": "x"}, headers=alice).get_json()["id"]
    patched = client.patch(f"/api/todos/{todo_id}", json={"order": order}, headers=alice)
    assert patched.status_code == 422
    assert patched.get_json()["context"]["fields"] == ["order"]


def test_order_at_int32_bounds_is_accepted(client: FlaskClient, alice: dict[str, str]) -> None:
    for order in (2**31 - 1, -(2**31)):
        response = client.post("/api/todos", json={"title": "x", "order": order}, headers=alice)
        assert response.status_code == 201
        assert response.get_json()["order"] == order


@pytest.mark.parametrize("method", ["get", "patch", "delete"])
def test_oversized_todo_id_is_not_found(
    client: FlaskClient, alice: dict[str, str], method: str
) -> None:
    response = getattr(client, method)("/api/todos/" + "9" * 30, json={}, headers=alice)

    assert response.status_code == 404
