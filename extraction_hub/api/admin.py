from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from extraction_hub.api.deps import require_admin
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.services.permission_service import PermissionService
from extraction_hub.services.user_admin_service import UserAdminService
from extraction_hub.schemas.admin import (
    AdminUserList,
    AssignRoleRequest,
    UpdateStatusRequest,
    UpdateProfileRequest,
    ActionResponse,
)
from extraction_hub.schemas.permission import PermissionOverview

router = APIRouter(prefix="/api/admin", tags=["Administration"])

# =========================================================
# 1. USERS
# =========================================================

@router.get("/users", response_model=AdminUserList)
def list_users(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return {"users": UserAdminService(db, admin.id).list_users()}


@router.post("/users/{user_id}/roles", response_model=ActionResponse)
def assign_role(
    user_id: int,
    payload: AssignRoleRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    UserAdminService(db, admin.id).assign_role(user_id, payload.role)
    return {"success": True}


@router.delete("/users/{user_id}/roles/{role}", response_model=ActionResponse)
def remove_role(
    user_id: int,
    role: str,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not UserAdminService(db, admin.id).remove_role(user_id, role):
        raise HTTPException(status_code=404, detail="Role assignment not found")
    return {"success": True}


@router.patch("/users/{user_id}/status", response_model=ActionResponse)
def update_status(
    user_id: int,
    payload: UpdateStatusRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    UserAdminService(db, admin.id).update_status(user_id, payload.status)
    return {"success": True}


@router.patch("/users/{user_id}/profile", response_model=ActionResponse)
def update_profile(
    user_id: int,
    payload: UpdateProfileRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    UserAdminService(db, admin.id).update_profile(user_id, payload.display_name)
    return {"success": True}

# =========================================================
# 2. PERMISSION OVERVIEW
# =========================================================

@router.get("/permissions", response_model=PermissionOverview)
def permission_overview(admin: User = Depends(require_admin), db: Session = Depends(get_db)):
    return PermissionService(db).get_overview()
