from typing import Optional, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from extraction_hub.api.deps import get_current_user, require_permission
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.services.execution_service import ExecutionService
from extraction_hub.schemas.execution import (
    ExecuteJobRequest,
    ExecuteJobResponse,
    ExecutionListResponse,
    ExecutionResponse,
)

router = APIRouter(prefix="/api/executions", tags=["Executions & History"])

# 1. Run a job now
@router.post("/", response_model=ExecuteJobResponse)
def execute_job(
    payload: ExecuteJobRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Runs the job synchronously and returns the recorded execution.
    A failed run is still recorded, then reported as 400.
    """
    return ExecutionService(db, user.id).execute_job(payload.job_id)

# 2. History
@router.get("/", response_model=ExecutionListResponse)
def list_executions(
    limit: Optional[int] = Query(None, ge=1),
    status: Optional[Literal["running", "success", "failed", "cancelled"]] = None,
    job_id: Optional[int] = None,
    user: User = Depends(require_permission("history_view")),
    db: Session = Depends(get_db),
):
    return ExecutionService(db, user.id).list_executions(limit=limit, status=status, job_id=job_id)

# 3. One execution (with logs)
@router.get("/{id}", response_model=ExecutionResponse)
def get_execution(
    id: int,
    user: User = Depends(require_permission("history_view")),
    db: Session = Depends(get_db),
):
    service = ExecutionService(db, user.id)
    execution = service.get_execution(id)
    if not execution:
        raise HTTPException(status_code=404, detail="Execution not found")
    return service.to_response(execution)
