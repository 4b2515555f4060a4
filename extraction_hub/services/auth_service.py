import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from extraction_hub.core.exceptions import HubError, PermissionDenied
from extraction_hub.core.security import get_password_hash, verify_password
from extraction_hub.models.user import User
from extraction_hub.models.profile import Profile
from extraction_hub.models.user_role import UserRole
from extraction_hub.schemas.auth import UserCreate

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def register(self, data: UserCreate) -> User:
        """Creates the user, its profile and the default role assignment."""
        email = data.email.lower()
        if self.get_by_email(email):
            raise HubError("Email already registered")

        now = datetime.utcnow()
        user = User(
            email=email,
            password_hash=get_password_hash(data.password),
            created_at=now,
        )
        self.db.add(user)
        self.db.flush()

        self.db.add(Profile(
            user_id=user.id,
            email=email,
            display_name=data.display_name or email.split("@")[0],
            status="active",
            created_at=now,
            updated_at=now,
        ))
        self.db.add(UserRole(user_id=user.id, role=DEFAULT_ROLE, assigned_at=now))

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Registered user {user.id} ({email})")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise HubError("Incorrect email or password")

        if user.profile and user.profile.status != "active":
            raise PermissionDenied(f"Account is {user.profile.status}")

        user.last_login = datetime.utcnow()
        self.db.commit()
        return user
