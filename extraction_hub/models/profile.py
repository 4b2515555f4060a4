from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from extraction_hub.core.database import Base

PROFILE_STATUSES = ("active", "inactive", "suspended")

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    email = Column(String)
    display_name = Column(String)

    # 'active' | 'inactive' | 'suspended'
    status = Column(String, default="active")

    created_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP)

    user = relationship("User", back_populates="profile")
