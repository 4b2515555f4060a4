from sqlalchemy import Column, Integer, String, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from extraction_hub.core.database import Base

class Permission(Base):
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, unique=True, nullable=False) # e.g. "job_create"
    description = Column(Text)
    category = Column(String, nullable=False) # e.g. "jobs", "admin"

    roles = relationship("RolePermission", back_populates="permission", cascade="all, delete-orphan")


class RolePermission(Base):
    __tablename__ = "role_permissions"
    __table_args__ = (UniqueConstraint("role", "permission_id", name="uq_role_permissions_role_permission"),)

    id = Column(Integer, primary_key=True, index=True)

    role = Column(String, nullable=False, index=True)
    permission_id = Column(Integer, ForeignKey("permissions.id"))

    permission = relationship("Permission", back_populates="roles")
