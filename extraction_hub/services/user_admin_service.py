import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from extraction_hub.core.exceptions import HubError, NotFound
from extraction_hub.models.profile import Profile
from extraction_hub.models.user_role import UserRole, APP_ROLES

logger = logging.getLogger(__name__)


class UserAdminService:
    def __init__(self, db: Session, acting_user_id: int):
        self.db = db
        self.acting_user_id = acting_user_id

    def _profile(self, user_id: int) -> Profile:
        profile = self.db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            raise NotFound("User not found")
        return profile

    def list_users(self) -> List[dict]:
        """All profiles with their role assignments."""
        profiles = self.db.query(Profile).order_by(Profile.created_at.desc(), Profile.id.desc()).all()
        roles = self.db.query(UserRole).all()

        by_user = {}
        for r in roles:
            by_user.setdefault(r.user_id, []).append(
                {"role": r.role, "assigned_at": r.assigned_at, "assigned_by": r.assigned_by}
            )

        users = []
        for p in profiles:
            users.append({
                "id": p.id,
                "user_id": p.user_id,
                "email": p.email,
                "display_name": p.display_name,
                "status": p.status,
                "created_at": p.created_at,
                "updated_at": p.updated_at,
                "user_roles": sorted(by_user.get(p.user_id, []), key=lambda x: x["role"]),
            })
        return users

    def assign_role(self, user_id: int, role: str) -> UserRole:
        if role not in APP_ROLES:
            raise HubError(f"Unknown role: {role}")
        self._profile(user_id)

        exists = self.db.query(UserRole).filter(UserRole.user_id == user_id, UserRole.role == role).first()
        if exists:
            raise HubError(f"User already has role {role}")

        assignment = UserRole(
            user_id=user_id,
            role=role,
            assigned_at=datetime.utcnow(),
            assigned_by=self.acting_user_id,
        )
        self.db.add(assignment)
        self.db.commit()
        logger.info(f"Role {role} assigned to user {user_id} by {self.acting_user_id}")
        return assignment

    def remove_role(self, user_id: int, role: str) -> bool:
        deleted = self.db.query(UserRole).filter(
            UserRole.user_id == user_id,
            UserRole.role == role,
        ).delete(synchronize_session=False)
        self.db.commit()
        if deleted:
            logger.info(f"Role {role} removed from user {user_id} by {self.acting_user_id}")
        return bool(deleted)

    def update_status(self, user_id: int, status: str) -> Profile:
        profile = self._profile(user_id)
        profile.status = status
        profile.updated_at = datetime.utcnow()
        self.db.commit()
        logger.info(f"User {user_id} status set to {status}")
        return profile

    def update_profile(self, user_id: int, display_name: str) -> Profile:
        profile = self._profile(user_id)
        profile.display_name = display_name
        profile.updated_at = datetime.utcnow()
        self.db.commit()
        return profile
