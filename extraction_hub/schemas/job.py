from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

SourceType = Literal["postgresql", "redshift", "oracle", "mysql", "python"]
ScheduleType = Literal["now", "schedule"]
Frequency = Literal["hourly", "daily", "weekly", "monthly"]
JobStatus = Literal["active", "inactive", "draft"]


def _check_schedule_time(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    parts = value.split(":")
    if len(parts) < 2 or not all(p.isdigit() for p in parts[:2]):
        raise ValueError("schedule_time must be HH:MM")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError("schedule_time must be HH:MM")
    return f"{hour:02d}:{minute:02d}"


class JobBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    source_type: SourceType
    code: str = Field(..., min_length=1)
    credential_id: Optional[int] = None
    schedule_type: ScheduleType = "now"
    frequency: Optional[Frequency] = None
    schedule_time: Optional[str] = None
    s3_bucket: Optional[str] = None
    folder_path: Optional[str] = None
    date_subfolders: bool = False

    @field_validator("schedule_time")
    @classmethod
    def validate_schedule_time(cls, v):
        return _check_schedule_time(v)

class JobCreate(JobBase):
    pass

class JobUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    source_type: Optional[SourceType] = None
    code: Optional[str] = Field(None, min_length=1)
    credential_id: Optional[int] = None
    schedule_type: Optional[ScheduleType] = None
    frequency: Optional[Frequency] = None
    schedule_time: Optional[str] = None
    s3_bucket: Optional[str] = None
    folder_path: Optional[str] = None
    date_subfolders: Optional[bool] = None
    status: Optional[JobStatus] = None

    @field_validator("schedule_time")
    @classmethod
    def validate_schedule_time(cls, v):
        return _check_schedule_time(v)

class CredentialSummary(BaseModel):
    id: int
    name: str
    type: str
    host: str
    database_name: str

    class Config:
        from_attributes = True

class LatestExecution(BaseModel):
    status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class JobResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    source_type: str
    code: str
    credential_id: Optional[int] = None
    schedule_type: str
    frequency: Optional[str] = None
    schedule_time: Optional[str] = None
    s3_bucket: Optional[str] = None
    folder_path: Optional[str] = None
    date_subfolders: Optional[bool] = False
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    credential: Optional[CredentialSummary] = None
    latest_execution: Optional[LatestExecution] = None

    class Config:
        from_attributes = True
