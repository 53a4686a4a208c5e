from userstore.data.database import get_store
from userstore.errors import DatabaseConnectionError
from userstore.main import app


def test_root(client):
    assert client.get("/").status_code == 200


def test_create_and_list(client):
    resp = client.post("/users/", json={"name": "Ferris", "email": "ferris@gmail.com"})
    assert resp.status_code == 201

    resp = client.get("/users/", params={"projection": "id, name, email"})
    assert resp.status_code == 200
    assert resp.json() == [{"id": 1, "name": "Ferris", "email": "ferris@gmail.com"}]


def test_duplicate_email_returns_400(client):
    client.post("/users/", json={"name": "Ferris", "email": "ferris@gmail.com"})
    resp = client.post("/users/", json={"name": "Other", "email": "ferris@gmail.com"})

    assert resp.status_code == 400


def test_empty_name_is_rejected(client):
    resp = client.post("/users/", json={"name": "", "email": "ferris@gmail.com"})

    assert resp.status_code == 422


def test_unknown_projection_is_rejected(client):
    resp = client.get("/users/", params={"projection": "id; DROP TABLE users"})

    assert resp.status_code == 422


def test_update_and_delete(client):
    client.post("/users/", json={"name": "Ferris", "email": "ferris@gmail.com"})

    resp = client.put(
        "/users/ferris@gmail.com",
        json={"name": "Ferris2", "email": "ferris2@gmail.com"},
    )
    assert resp.json() == {"status": "ok", "rows_affected": 1}

    resp = client.get("/users/", params={"projection": "name, email"})
    assert resp.json() == [{"name": "Ferris2", "email": "ferris2@gmail.com"}]

    resp = client.delete("/users/ferris@gmail.com")
    assert resp.json() == {"status": "ok", "rows_affected": 0}

    resp = client.delete("/users/ferris2@gmail.com")
    assert resp.json() == {"status": "ok", "rows_affected": 1}
    assert client.get("/users/").json() == []


def test_unavailable_database_returns_503(client):
    def broken_store():
        raise DatabaseConnectionError("connection refused")

    app.dependency_overrides[get_store] = broken_store

    resp = client.get("/users/")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "connection refused"}
