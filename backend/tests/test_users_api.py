from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from dependencies import get_user_service
from services.user_service import UserService


def test_list_users_empty(client):
    response = client.get("/api/users")

    assert response.status_code == 200
    assert response.json() == []


def test_scenario(client):
    response = client.post("/api/users", json={"name": "Ada", "email": "ada@x.com"})
    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "Ada", "email": "ada@x.com"}

    response = client.put("/api/users/1", json={"name": "Ada L", "email": "ada@x.com"})
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Ada L", "email": "ada@x.com"}

    response = client.get("/api/users/2")
    assert response.status_code == 404
    assert response.json() == {"detail": "User not found"}

    response = client.delete("/api/users/1")
    assert response.status_code == 204
    assert response.content == b""

    response = client.get("/api/users/1")
    assert response.status_code == 404


def test_create_ignores_body_id(client):
    response = client.post("/api/users", json={"id": 77, "name": "Ada", "email": "ada@x.com"})

    assert response.status_code == 201
    assert response.json()["id"] == 1


def test_create_ignores_body_id_of_any_type(client):
    response = client.post("/api/users", json={"id": "abc", "name": "Ada", "email": "ada@x.com"})

    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "Ada", "email": "ada@x.com"}

    response = client.put("/api/users/1", json={"id": None, "name": "Ada L", "email": "ada@x.com"})

    assert response.status_code == 200
    assert response.json()["id"] == 1


def test_update_body_id_is_overridden_by_path(client):
    client.post("/api/users", json={"name": "Ada", "email": "ada@x.com"})

    response = client.put("/api/users/1", json={"id": 9, "name": "Ada", "email": "new@x.com"})

    assert response.json() == {"id": 1, "name": "Ada", "email": "new@x.com"}
    assert client.get("/api/users/9").status_code == 404


def test_update_unknown_id_creates_user(client):
    response = client.put("/api/users/5", json={"name": "Grace", "email": "grace@x.com"})

    assert response.status_code == 200
    assert client.get("/api/users/5").json() == {"id": 5, "name": "Grace", "email": "grace@x.com"}


def test_delete_unknown_id_succeeds(client):
    assert client.delete("/api/users/31337").status_code == 204


def test_ids_beyond_64_bits_are_treated_as_absent(client):
    too_big = 2**64

    assert client.get(f"/api/users/{too_big}").status_code == 404
    assert client.get(f"/api/users/{-too_big}").status_code == 404
    assert client.delete(f"/api/users/{too_big}").status_code == 204


def test_update_rejects_ids_beyond_64_bits(client):
    response = client.put(f"/api/users/{2**63}", json={"name": "Ada", "email": "ada@x.com"})

    assert response.status_code == 422
    assert client.get("/api/users").json() == []


def test_deleted_id_is_not_handed_out_again(client):
    first = client.post("/api/users", json={"name": "Ada", "email": "ada@x.com"}).json()
    client.delete(f"/api/users/{first['id']}")

    second = client.post("/api/users", json={"name": "Grace", "email": "grace@x.com"}).json()

    assert second["id"] != first["id"]
    assert client.get(f"/api/users/{first['id']}").status_code == 404


def test_list_reflects_creates_and_deletes(client):
    for name in ("a", "b", "c"):
        client.post("/api/users", json={"name": name, "email": f"{name}@x.com"})
    client.delete("/api/users/2")

    body = client.get("/api/users").json()
    assert [u["name"] for u in body] == ["a", "c"]


def test_missing_field_is_rejected(client):
    response = client.post("/api/users", json={"name": "Ada"})

    assert response.status_code == 422


def test_non_integer_id_is_rejected(client):
    assert client.get("/api/users/abc").status_code == 422


def test_store_failure_is_server_error_not_not_found(app, auth_headers):
    class BrokenService(UserService):
        def get_user_by_id(self, user_id):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

    app.dependency_overrides[get_user_service] = lambda: BrokenService(None, object())
    with TestClient(app, headers=auth_headers) as client:
        response = client.get("/api/users/1")

    assert response.status_code == 500


def test_response_carries_request_id(client):
    response = client.get("/api/users", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
