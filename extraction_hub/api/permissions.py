from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from extraction_hub.api.deps import get_current_user
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.schemas.permission import MyPermissions
from extraction_hub.services.permission_service import PermissionService

router = APIRouter(prefix="/api/permissions", tags=["Permissions"])

@router.get("/me", response_model=MyPermissions)
def my_permissions(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    service = PermissionService(db)
    return {
        "roles": service.get_user_roles(user.id),
        "permissions": service.get_user_permissions(user.id),
    }
