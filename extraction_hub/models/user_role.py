from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from extraction_hub.core.database import Base

APP_ROLES = ("admin", "manager", "user")

class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String, nullable=False) # 'admin' | 'manager' | 'user'

    assigned_at = Column(TIMESTAMP)
    assigned_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    user = relationship("User", back_populates="roles", foreign_keys=[user_id])
