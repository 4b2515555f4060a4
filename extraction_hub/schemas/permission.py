from pydantic import BaseModel
from typing import Optional, List

class PermissionSchema(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: str

    class Config:
        from_attributes = True

class RolePermissionGroup(BaseModel):
    role: str
    permissions: List[PermissionSchema]

class PermissionOverview(BaseModel):
    roles: List[RolePermissionGroup]
    categories: List[str]

class MyPermissions(BaseModel):
    roles: List[str]
    permissions: List[str]
