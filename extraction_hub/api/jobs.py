from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from extraction_hub.api.deps import get_current_user
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.services.job_service import JobService
from extraction_hub.schemas.job import JobCreate, JobUpdate, JobResponse

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])

# --- READ ALL ---
@router.get("/", response_model=List[JobResponse])
def list_jobs(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Caller's jobs, newest first, each with its credential and latest execution."""
    service = JobService(db, user.id)
    return [service.to_response(job) for job in service.list_jobs()]

# --- READ ONE ---
@router.get("/{id}", response_model=JobResponse)
def get_job(id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    service = JobService(db, user.id)
    job = service.get_job(id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return service.to_response(job)

# --- CREATE ---
@router.post("/", response_model=JobResponse, status_code=201)
def create_job(payload: JobCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    service = JobService(db, user.id)
    return service.to_response(service.create_job(payload))

# --- UPDATE ---
@router.patch("/{id}", response_model=JobResponse)
def update_job(
    id: int,
    payload: JobUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = JobService(db, user.id)
    updated = service.update_job(id, payload)
    if not updated:
        raise HTTPException(status_code=404, detail="Job not found")
    return service.to_response(updated)

# --- DELETE ---
@router.delete("/{id}")
def delete_job(id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not JobService(db, user.id).delete_job(id):
        raise HTTPException(status_code=404, detail="Job not found")
    return {"success": True}
