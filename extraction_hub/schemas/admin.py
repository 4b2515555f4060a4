from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

AppRole = Literal["admin", "manager", "user"]
ProfileStatus = Literal["active", "inactive", "suspended"]

class RoleAssignment(BaseModel):
    role: str
    assigned_at: Optional[datetime] = None
    assigned_by: Optional[int] = None

    class Config:
        from_attributes = True

class AdminUser(BaseModel):
    id: int
    user_id: int
    email: Optional[str] = None
    display_name: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user_roles: List[RoleAssignment] = []

class AdminUserList(BaseModel):
    users: List[AdminUser]

class AssignRoleRequest(BaseModel):
    role: AppRole

class UpdateStatusRequest(BaseModel):
    status: ProfileStatus

class UpdateProfileRequest(BaseModel):
    display_name: str = Field(..., min_length=1)

class ActionResponse(BaseModel):
    success: bool
