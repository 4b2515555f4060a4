"""
Tests for the flat role -> permission lookups.
"""

from datetime import datetime

from extraction_hub.models import Permission, RolePermission, User, UserRole
from extraction_hub.services.permission_service import (
    PERMISSIONS,
    PermissionService,
    seed_permissions,
)


def _alice(db):
    return db.query(User).filter(User.email == "alice@hub.io").first()


def test_seed_is_idempotent(client, db):
    assert seed_permissions(db) == 0
    assert db.query(Permission).count() == len(PERMISSIONS)
    assert db.query(RolePermission).filter(RolePermission.role == "admin").count() == len(PERMISSIONS)


def test_user_role_lookups(client, db, user_headers):
    alice = _alice(db)
    service = PermissionService(db)

    assert service.get_user_roles(alice.id) == ["user"]
    assert service.has_permission(alice.id, "job_execute")
    assert not service.has_permission(alice.id, "job_delete")
    assert not service.is_admin(alice.id)
    assert not service.is_manager(alice.id)


def test_permissions_follow_role_changes(client, db, user_headers):
    alice = _alice(db)
    service = PermissionService(db)

    db.add(UserRole(user_id=alice.id, role="manager", assigned_at=datetime.utcnow()))
    db.commit()
    assert service.is_manager(alice.id)
    assert service.has_permission(alice.id, "config_transfer")

    db.query(UserRole).filter(UserRole.user_id == alice.id).delete()
    db.commit()
    assert service.get_user_roles(alice.id) == []
    assert service.get_user_permissions(alice.id) == []


def test_my_permissions_endpoint(client, manager_headers):
    res = client.get("/api/permissions/me", headers=manager_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["roles"] == ["manager", "user"]
    assert "job_delete" in body["permissions"]
    assert "user_manage" not in body["permissions"]
