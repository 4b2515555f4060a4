from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from extraction_hub.core.database import Base

EXECUTION_STATUSES = ("running", "success", "failed", "cancelled")

class JobExecution(Base):
    __tablename__ = "job_executions"

    id = Column(Integer, primary_key=True, index=True)

    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    run_id = Column(String, unique=True, nullable=False) # run_20241219T143000_ab12cd34

    # Status Flow: 'running' -> 'success' | 'failed'
    status = Column(String, default="running")

    started_at = Column(TIMESTAMP)
    completed_at = Column(TIMESTAMP, nullable=True)
    duration_ms = Column(Integer, nullable=True)

    rows_processed = Column(Integer, nullable=True)
    error_message = Column(Text, nullable=True)
    logs = Column(Text, nullable=True)
    output_location = Column(String, nullable=True)

    created_at = Column(TIMESTAMP)

    job = relationship("Job", back_populates="executions")
