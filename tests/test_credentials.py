"""
Tests for credential CRUD and the simulated connection test.
"""

from extraction_hub.core.config import settings
from extraction_hub.models import Credential


def test_create_credential_hides_password(client, user_headers, create_credential):
    cred = create_credential(user_headers)
    assert cred["name"] == "Warehouse"
    assert cred["type"] == "postgresql"
    assert cred["ssl_enabled"] is True
    assert "password" not in cred


def test_create_then_read_returns_same_fields(client, user_headers, create_credential, credential_payload):
    cred = create_credential(user_headers)
    res = client.get(f"/api/credentials/{cred['id']}", headers=user_headers)
    assert res.status_code == 200
    body = res.json()
    for key in ("name", "type", "host", "port", "database_name", "username", "ssl_enabled"):
        assert body[key] == credential_payload[key]


def test_list_is_newest_first_and_scoped(client, make_user, create_credential):
    alice = make_user("alice@hub.io")
    bob = make_user("bob@hub.io")

    create_credential(alice, name="First")
    create_credential(alice, name="Second")
    create_credential(bob, name="Bobs")

    res = client.get("/api/credentials/", headers=alice)
    assert res.status_code == 200
    assert [c["name"] for c in res.json()] == ["Second", "First"]


def test_foreign_credential_is_not_found(client, make_user, create_credential):
    alice = make_user("alice@hub.io")
    bob = make_user("bob@hub.io")
    cred = create_credential(alice)

    assert client.get(f"/api/credentials/{cred['id']}", headers=bob).status_code == 404
    assert client.delete(f"/api/credentials/{cred['id']}", headers=bob).status_code == 404


def test_update_keeps_password_when_blank(client, db, user_headers, create_credential):
    cred = create_credential(user_headers)

    res = client.patch(
        f"/api/credentials/{cred['id']}",
        json={"host": "db2.internal", "password": ""},
        headers=user_headers,
    )
    assert res.status_code == 200
    assert res.json()["host"] == "db2.internal"

    stored = db.get(Credential, cred["id"])
    assert stored.password == "hunter2"


def test_update_replaces_password_when_given(client, db, user_headers, create_credential):
    cred = create_credential(user_headers)
    client.patch(f"/api/credentials/{cred['id']}", json={"password": "new-one"}, headers=user_headers)

    stored = db.get(Credential, cred["id"])
    assert stored.password == "new-one"


def test_delete_removes_row(client, user_headers, create_credential):
    cred = create_credential(user_headers)
    res = client.delete(f"/api/credentials/{cred['id']}", headers=user_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True}
    assert client.get(f"/api/credentials/{cred['id']}", headers=user_headers).status_code == 404


def test_invalid_type_is_rejected(client, user_headers, credential_payload):
    res = client.post("/api/credentials/", json={**credential_payload, "type": "mongodb"}, headers=user_headers)
    assert res.status_code == 422


def test_connection_test_success(client, user_headers, credential_payload, monkeypatch):
    monkeypatch.setattr(settings, "CONNECTION_TEST_SUCCESS_RATE", 1.0)
    res = client.post("/api/credentials/test", json=credential_payload, headers=user_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Successfully connected to postgresql database"}


def test_connection_test_failure(client, user_headers, credential_payload, monkeypatch):
    monkeypatch.setattr(settings, "CONNECTION_TEST_SUCCESS_RATE", 0.0)
    res = client.post("/api/credentials/test", json=credential_payload, headers=user_headers)
    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "Connection failed: Connection timeout or invalid credentials",
    }


def test_update_rejects_blank_fields(client, user_headers, create_credential):
    cred = create_credential(user_headers)
    for field in ("name", "host", "database_name", "username"):
        res = client.patch(f"/api/credentials/{cred['id']}", json={field: ""}, headers=user_headers)
        assert res.status_code == 422

    assert client.get(f"/api/credentials/{cred['id']}", headers=user_headers).json()["host"] == "db.internal"
