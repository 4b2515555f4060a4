import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from extraction_hub.core.exceptions import HubError, PermissionDenied
from extraction_hub.models.credential import Credential
from extraction_hub.models.job import Job
from extraction_hub.models.job_execution import JobExecution
from extraction_hub.schemas.job import JobCreate, JobUpdate
from extraction_hub.services.permission_service import PermissionService

logger = logging.getLogger(__name__)

# Columns a PATCH may not null out
_REQUIRED_FIELDS = {"name", "source_type", "code", "schedule_type", "status", "date_subfolders"}


class JobService:
    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id
        self.permissions = PermissionService(db)

    # ---------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------
    def _scoped(self):
        return self.db.query(Job).filter(Job.user_id == self.user_id)

    def _require(self, permission: str, message: str):
        if not self.permissions.has_permission(self.user_id, permission):
            raise PermissionDenied(message)

    def _check_credential(self, credential_id: Optional[int]):
        if credential_id is None:
            return
        owned = self.db.query(Credential.id).filter(
            Credential.id == credential_id,
            Credential.user_id == self.user_id,
        ).first()
        if not owned:
            raise HubError("Credential not found")

    def _check_job_state(self, job: Job):
        if job.source_type != "python" and job.credential_id is None:
            raise HubError(f"A credential is required for {job.source_type} jobs")
        if job.schedule_type == "schedule" and not job.frequency:
            raise HubError("Scheduled jobs require a frequency")

    def latest_execution(self, job_id: int) -> Optional[JobExecution]:
        return (
            self.db.query(JobExecution)
            .filter(JobExecution.job_id == job_id)
            .order_by(JobExecution.started_at.desc(), JobExecution.id.desc())
            .first()
        )

    def to_response(self, job: Job) -> dict:
        """Job row plus its credential summary and latest execution."""
        data = {c.name: getattr(job, c.name) for c in Job.__table__.columns}
        credential = job.credential if job.credential_id else None
        data["credential"] = {
            "id": credential.id,
            "name": credential.name,
            "type": credential.type,
            "host": credential.host,
            "database_name": credential.database_name,
        } if credential else None

        latest = self.latest_execution(job.id)
        data["latest_execution"] = {
            "status": latest.status,
            "started_at": latest.started_at,
            "completed_at": latest.completed_at,
        } if latest else None
        return data

    # ---------------------------------------------------------
    # READ
    # ---------------------------------------------------------
    def list_jobs(self) -> List[Job]:
        return self._scoped().order_by(Job.created_at.desc(), Job.id.desc()).all()

    def get_job(self, job_id: int) -> Optional[Job]:
        return self._scoped().filter(Job.id == job_id).first()

    def get_by_name(self, name: str) -> Optional[Job]:
        return self._scoped().filter(Job.name == name).first()

    # ---------------------------------------------------------
    # WRITE
    # ---------------------------------------------------------
    def create_job(self, data: JobCreate, status: Optional[str] = None, commit: bool = True) -> Job:
        """With commit=False the row is only flushed; the caller owns the transaction."""
        self._require("job_create", "You don't have permission to create jobs")
        if data.schedule_type == "schedule":
            self._require("query_schedule", "You don't have permission to schedule queries")

        self._check_credential(data.credential_id)

        now = datetime.utcnow()
        job = Job(
            user_id=self.user_id,
            name=data.name,
            description=data.description,
            source_type=data.source_type,
            code=data.code,
            credential_id=data.credential_id,
            schedule_type=data.schedule_type,
            frequency=data.frequency,
            schedule_time=data.schedule_time,
            s3_bucket=data.s3_bucket,
            folder_path=data.folder_path,
            date_subfolders=data.date_subfolders,
            status=status or ("active" if data.schedule_type == "now" else "draft"),
            created_at=now,
            updated_at=now,
        )
        self._check_job_state(job)

        self.db.add(job)
        if not commit:
            self.db.flush()
            return job
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"Job created: {job.id} ({job.name})")
        return job

    def update_job(self, job_id: int, data: JobUpdate) -> Optional[Job]:
        job = self.get_job(job_id)
        if not job:
            return None

        self._require("job_edit", "You don't have permission to edit jobs")

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("schedule_type") == "schedule":
            self._require("query_schedule", "You don't have permission to schedule queries")
        if "credential_id" in update_data:
            self._check_credential(update_data["credential_id"])

        for key, value in update_data.items():
            if value is None and key in _REQUIRED_FIELDS:
                continue
            setattr(job, key, value)

        try:
            self._check_job_state(job)
        except HubError:
            self.db.rollback()
            raise

        job.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"Job updated: {job.id}")
        return job

    def delete_job(self, job_id: int) -> bool:
        job = self.get_job(job_id)
        if not job:
            return False

        self._require("job_delete", "You don't have permission to delete jobs")

        self.db.delete(job)
        self.db.commit()
        logger.info(f"Job deleted: {job_id}")
        return True
