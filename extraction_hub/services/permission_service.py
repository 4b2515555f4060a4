import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from extraction_hub.models.permission import Permission, RolePermission
from extraction_hub.models.user_role import UserRole, APP_ROLES

logger = logging.getLogger(__name__)

# name -> (category, description)
PERMISSIONS = {
    "job_create": ("jobs", "Create extraction jobs"),
    "job_edit": ("jobs", "Edit extraction jobs"),
    "job_delete": ("jobs", "Delete extraction jobs"),
    "job_execute": ("jobs", "Run extraction jobs on demand"),
    "query_schedule": ("jobs", "Schedule recurring extractions"),
    "history_view": ("history", "View execution history and logs"),
    "credential_manage": ("credentials", "Manage database credentials"),
    "config_transfer": ("settings", "Export and import configuration"),
    "user_manage": ("admin", "Manage user profiles and status"),
    "role_assign": ("admin", "Assign and remove user roles"),
}

_USER_PERMISSIONS = ["job_create", "job_edit", "job_execute", "history_view", "credential_manage"]
_MANAGER_PERMISSIONS = _USER_PERMISSIONS + ["job_delete", "query_schedule", "config_transfer"]

ROLE_PERMISSIONS = {
    "admin": list(PERMISSIONS.keys()),
    "manager": _MANAGER_PERMISSIONS,
    "user": _USER_PERMISSIONS,
}


def seed_permissions(db: Session) -> int:
    """
    Inserts the static permission table and role mapping. Safe to run on every startup.
    Returns the number of rows added.
    """
    added = 0
    by_name = {p.name: p for p in db.query(Permission).all()}

    for name, (category, description) in PERMISSIONS.items():
        if name not in by_name:
            perm = Permission(name=name, category=category, description=description)
            db.add(perm)
            by_name[name] = perm
            added += 1
    db.flush()

    existing = {(rp.role, rp.permission_id) for rp in db.query(RolePermission).all()}
    for role, names in ROLE_PERMISSIONS.items():
        for name in names:
            key = (role, by_name[name].id)
            if key not in existing:
                db.add(RolePermission(role=role, permission_id=by_name[name].id))
                existing.add(key)
                added += 1

    db.commit()
    if added:
        logger.info(f"Seeded {added} permission rows")
    return added


class PermissionService:
    def __init__(self, db: Session):
        self.db = db

    def get_user_roles(self, user_id: int) -> List[str]:
        rows = self.db.query(UserRole.role).filter(UserRole.user_id == user_id).all()
        return sorted(r.role for r in rows)

    def get_user_permissions(self, user_id: int) -> List[str]:
        roles = self.get_user_roles(user_id)
        if not roles:
            return []
        rows = (
            self.db.query(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .filter(RolePermission.role.in_(roles))
            .distinct()
            .all()
        )
        return sorted(r.name for r in rows)

    def has_role(self, user_id: int, role: str) -> bool:
        return role in self.get_user_roles(user_id)

    def has_permission(self, user_id: int, permission: str) -> bool:
        return permission in self.get_user_permissions(user_id)

    def is_admin(self, user_id: int) -> bool:
        return self.has_role(user_id, "admin")

    def is_manager(self, user_id: int) -> bool:
        return self.has_role(user_id, "manager")

    def get_overview(self) -> Dict:
        """Permissions grouped by role, each group sorted by category."""
        rows = (
            self.db.query(RolePermission.role, Permission)
            .select_from(RolePermission)
            .join(Permission, RolePermission.permission_id == Permission.id)
            .all()
        )

        grouped: Dict[str, List[Permission]] = {}
        for role, perm in rows:
            grouped.setdefault(role, []).append(perm)

        ordered_roles = [r for r in APP_ROLES if r in grouped] + sorted(r for r in grouped if r not in APP_ROLES)
        roles = [
            {
                "role": role,
                "permissions": [
                    {"id": p.id, "name": p.name, "description": p.description, "category": p.category}
                    for p in sorted(grouped[role], key=lambda p: (p.category, p.name))
                ],
            }
            for role in ordered_roles
        ]
        categories = sorted({c for (c,) in self.db.query(Permission.category).distinct().all()})
        return {"roles": roles, "categories": categories}
