from typing import Optional

from fastapi import Cookie, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from extraction_hub.core.database import get_db
from extraction_hub.core.security import decode_access_token
from extraction_hub.models.user import User
from extraction_hub.services.permission_service import PermissionService


def get_current_user(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """
    Tries to get token from the Authorization header first, then the cookie.
    """
    token = None

    if authorization:
        token = authorization.replace("Bearer ", "").strip()
    elif access_token:
        token = access_token.replace("Bearer ", "").strip()

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    claims = decode_access_token(token)
    if not claims or claims.get("id") is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = db.get(User, claims["id"])
    if not user:
        raise HTTPException(status_code=401, detail="User no longer exists")
    if user.profile and user.profile.status != "active":
        raise HTTPException(status_code=403, detail=f"Account is {user.profile.status}")

    return user


def require_admin(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    if not PermissionService(db).is_admin(user.id):
        raise HTTPException(status_code=403, detail="Forbidden: Admin access required")
    return user


def require_permission(permission: str):
    def checker(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> User:
        if not PermissionService(db).has_permission(user.id, permission):
            raise HTTPException(status_code=403, detail=f"Missing permission: {permission}")
        return user
    return checker
