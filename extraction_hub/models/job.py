from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from extraction_hub.core.database import Base

SOURCE_TYPES = ("postgresql", "redshift", "oracle", "mysql", "python")
SCHEDULE_TYPES = ("now", "schedule")
FREQUENCIES = ("hourly", "daily", "weekly", "monthly")
JOB_STATUSES = ("active", "inactive", "draft")

class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # 'python' jobs run a script, every other type runs a query via a credential
    source_type = Column(String, nullable=False)
    code = Column(Text, nullable=False)
    credential_id = Column(Integer, ForeignKey("credentials.id", ondelete="SET NULL"), nullable=True)

    # Scheduling
    schedule_type = Column(String, default="now") # 'now' | 'schedule'
    frequency = Column(String, nullable=True) # 'hourly' | 'daily' | 'weekly' | 'monthly'
    schedule_time = Column(String, nullable=True) # "HH:MM" (UTC)

    # Export target
    s3_bucket = Column(String, nullable=True)
    folder_path = Column(String, nullable=True)
    date_subfolders = Column(Boolean, default=False)

    status = Column(String, default="draft") # 'active' | 'inactive' | 'draft'

    created_at = Column(TIMESTAMP)
    updated_at = Column(TIMESTAMP)

    credential = relationship("Credential")
    executions = relationship("JobExecution", back_populates="job", cascade="all, delete-orphan")
