from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from datetime import timedelta

from extraction_hub.api.deps import get_current_user
from extraction_hub.core.database import get_db
from extraction_hub.core.security import create_access_token, ACCESS_TOKEN_EXPIRE_MINUTES
from extraction_hub.models.user import User
from extraction_hub.schemas.auth import UserCreate, UserLogin, UserResponse, Token, CurrentUserResponse
from extraction_hub.services.auth_service import AuthService
from extraction_hub.services.permission_service import PermissionService

router = APIRouter(prefix="/auth", tags=["Authentication"])

# ---------------------------------------------------------
# REGISTER
# ---------------------------------------------------------
@router.post("/register", response_model=UserResponse, status_code=201)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    return AuthService(db).register(user_in)

# ---------------------------------------------------------
# LOGIN
# ---------------------------------------------------------
@router.post("/login", response_model=Token)
def login(response: Response, login_data: UserLogin, db: Session = Depends(get_db)):
    user = AuthService(db).authenticate(login_data.email, login_data.password)

    access_token = create_access_token(
        data={"sub": user.email, "id": user.id},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=False     # Set to True in Production (HTTPS)
    )

    return {"access_token": access_token, "token_type": "bearer"}

# ---------------------------------------------------------
# LOGOUT
# ---------------------------------------------------------
@router.post("/logout")
def logout(response: Response):
    response.delete_cookie("access_token")
    return {"message": "Logged out successfully"}

# ---------------------------------------------------------
# CURRENT USER
# ---------------------------------------------------------
@router.get("/me", response_model=CurrentUserResponse)
def me(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    permissions = PermissionService(db)
    profile = user.profile
    return {
        "id": user.id,
        "email": user.email,
        "display_name": profile.display_name if profile else None,
        "status": profile.status if profile else "active",
        "roles": permissions.get_user_roles(user.id),
        "permissions": permissions.get_user_permissions(user.id),
    }
