"""
Tests for job CRUD, status rules and permission checks.
"""

from extraction_hub.models import User, UserRole


def test_create_now_job_is_active(client, user_headers, create_job):
    job = create_job(user_headers)
    assert job["status"] == "active"
    assert job["schedule_type"] == "now"
    assert job["credential"] is None
    assert job["latest_execution"] is None


def test_create_then_read_returns_same_fields(client, user_headers, create_job):
    job = create_job(
        user_headers,
        description="nightly dump",
        s3_bucket="data-bucket",
        folder_path="customers",
        date_subfolders=True,
    )
    res = client.get(f"/api/jobs/{job['id']}", headers=user_headers)
    assert res.status_code == 200
    body = res.json()
    for key in ("name", "description", "source_type", "code", "s3_bucket", "folder_path", "date_subfolders"):
        assert body[key] == job[key]


def test_database_job_includes_credential_summary(client, user_headers, create_credential, create_job):
    cred = create_credential(user_headers)
    job = create_job(user_headers, source_type="postgresql", code="SELECT 1", credential_id=cred["id"])

    assert job["credential"] == {
        "id": cred["id"],
        "name": "Warehouse",
        "type": "postgresql",
        "host": "db.internal",
        "database_name": "analytics",
    }


def test_database_job_requires_credential(client, user_headers):
    res = client.post(
        "/api/jobs/",
        json={"name": "No creds", "source_type": "oracle", "code": "SELECT 1"},
        headers=user_headers,
    )
    assert res.status_code == 400
    assert "credential is required" in res.json()["detail"]


def test_foreign_credential_is_rejected(client, make_user, create_credential):
    alice = make_user("alice@hub.io")
    bob = make_user("bob@hub.io")
    cred = create_credential(alice)

    res = client.post(
        "/api/jobs/",
        json={"name": "Steal", "source_type": "postgresql", "code": "SELECT 1", "credential_id": cred["id"]},
        headers=bob,
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Credential not found"


def test_user_cannot_schedule(client, user_headers):
    res = client.post(
        "/api/jobs/",
        json={
            "name": "Nightly",
            "source_type": "python",
            "code": "x = 1",
            "schedule_type": "schedule",
            "frequency": "daily",
            "schedule_time": "02:30",
        },
        headers=user_headers,
    )
    assert res.status_code == 403


def test_manager_scheduled_job_starts_as_draft(client, manager_headers, create_job):
    job = create_job(manager_headers, schedule_type="schedule", frequency="daily", schedule_time="2:30")
    assert job["status"] == "draft"
    assert job["schedule_time"] == "02:30"


def test_scheduled_job_requires_frequency(client, manager_headers):
    res = client.post(
        "/api/jobs/",
        json={"name": "Nightly", "source_type": "python", "code": "x", "schedule_type": "schedule"},
        headers=manager_headers,
    )
    assert res.status_code == 400


def test_bad_schedule_time_is_rejected(client, manager_headers):
    res = client.post(
        "/api/jobs/",
        json={
            "name": "Nightly",
            "source_type": "python",
            "code": "x",
            "schedule_type": "schedule",
            "frequency": "daily",
            "schedule_time": "25:00",
        },
        headers=manager_headers,
    )
    assert res.status_code == 422


def test_update_overwrites_fields(client, user_headers, create_job):
    job = create_job(user_headers)
    res = client.patch(
        f"/api/jobs/{job['id']}",
        json={"name": "Renamed", "status": "inactive"},
        headers=user_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Renamed"
    assert body["status"] == "inactive"
    assert body["code"] == job["code"]


def test_list_is_newest_first_and_scoped(client, make_user, create_job):
    alice = make_user("alice@hub.io")
    bob = make_user("bob@hub.io")
    create_job(alice, name="One")
    create_job(alice, name="Two")
    create_job(bob, name="Bobs")

    res = client.get("/api/jobs/", headers=alice)
    assert [j["name"] for j in res.json()] == ["Two", "One"]


def test_user_cannot_delete_job(client, user_headers, create_job):
    job = create_job(user_headers)
    res = client.delete(f"/api/jobs/{job['id']}", headers=user_headers)
    assert res.status_code == 403


def test_manager_delete_removes_job_and_executions(client, manager_headers, create_job):
    job = create_job(manager_headers)
    run = client.post("/api/executions/", json={"job_id": job["id"]}, headers=manager_headers)
    assert run.status_code == 200

    res = client.delete(f"/api/jobs/{job['id']}", headers=manager_headers)
    assert res.status_code == 200
    assert client.get(f"/api/jobs/{job['id']}", headers=manager_headers).status_code == 404

    history = client.get("/api/executions/", headers=manager_headers).json()
    assert history["total"] == 0


def test_deleting_credential_detaches_jobs(client, user_headers, create_credential, create_job):
    cred = create_credential(user_headers)
    job = create_job(user_headers, source_type="mysql", code="SELECT 1", credential_id=cred["id"])

    client.delete(f"/api/credentials/{cred['id']}", headers=user_headers)

    body = client.get(f"/api/jobs/{job['id']}", headers=user_headers).json()
    assert body["credential_id"] is None
    assert body["credential"] is None


def test_update_requires_edit_permission(client, db, user_headers, create_job):
    job = create_job(user_headers)
    alice = db.query(User).filter(User.email == "alice@hub.io").first()
    db.query(UserRole).filter(UserRole.user_id == alice.id).delete()
    db.commit()

    res = client.patch(f"/api/jobs/{job['id']}", json={"name": "Renamed"}, headers=user_headers)
    assert res.status_code == 403
    assert res.json()["detail"] == "You don't have permission to edit jobs"


def test_update_rejects_blank_fields(client, user_headers, create_job):
    job = create_job(user_headers)
    for field in ("name", "code"):
        res = client.patch(f"/api/jobs/{job['id']}", json={field: ""}, headers=user_headers)
        assert res.status_code == 422

    assert client.get(f"/api/jobs/{job['id']}", headers=user_headers).json()["name"] == job["name"]
