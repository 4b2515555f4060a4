from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

class ExecuteJobRequest(BaseModel):
    job_id: int

class ExecuteJobResponse(BaseModel):
    success: bool
    execution_id: int
    run_id: str
    rows_processed: int
    output_location: str

class ExecutionJobRef(BaseModel):
    name: str

class ExecutionResponse(BaseModel):
    id: int
    job_id: int
    run_id: str
    status: str # running, success, failed, cancelled
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    duration_ms: Optional[int] = None
    rows_processed: Optional[int] = None
    error_message: Optional[str] = None
    logs: Optional[str] = None
    output_location: Optional[str] = None
    job: Optional[ExecutionJobRef] = None

    class Config:
        from_attributes = True

class ExecutionListResponse(BaseModel):
    data: List[ExecutionResponse]
    total: int
    limit: int
