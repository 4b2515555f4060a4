import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from extraction_hub.core.config import settings
from extraction_hub.core.exceptions import HubError, JobExecutionError, PermissionDenied
from extraction_hub.models.credential import Credential
from extraction_hub.models.job import Job
from extraction_hub.models.job_execution import JobExecution
from extraction_hub.services.permission_service import PermissionService
from extraction_hub.workers.extraction.output import generate_run_id, build_output_location
from extraction_hub.workers.extraction.simulator import RunLog, run_python_script, run_database_query

logger = logging.getLogger(__name__)


def _duration_ms(started_at: datetime) -> int:
    return int((datetime.utcnow() - started_at).total_seconds() * 1000)


class ExecutionService:
    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    # ---------------------------------------------------------
    # 1. RUN A JOB
    # ---------------------------------------------------------
    def execute_job(self, job_id: int, check_permission: bool = True) -> dict:
        """
        Runs one simulated extraction for the caller's job and records it.

        Raises HubError when the job can't be loaded, JobExecutionError when the
        run itself fails (the execution row is marked failed first).
        """
        if check_permission and not PermissionService(self.db).has_permission(self.user_id, "job_execute"):
            raise PermissionDenied("You don't have permission to execute jobs")

        job = self.db.query(Job).filter(Job.id == job_id, Job.user_id == self.user_id).first()
        if not job:
            raise HubError("Job not found or access denied")

        run_id = generate_run_id()
        started_at = datetime.utcnow()
        execution = JobExecution(
            job_id=job.id,
            user_id=self.user_id,
            run_id=run_id,
            status="running",
            started_at=started_at,
            created_at=started_at,
        )
        self.db.add(execution)
        self.db.commit()
        self.db.refresh(execution)
        logger.info(f"Execution {execution.id} started for job {job.id} ({job.name}), run {run_id}")

        log = RunLog()
        log.info(f"Starting job execution for {job.name}")

        try:
            if job.source_type == "python":
                result = run_python_script(job, log)
            else:
                if not job.credential_id:
                    raise JobExecutionError("No credentials configured for this job")
                credential = self.db.query(Credential).filter(
                    Credential.id == job.credential_id,
                    Credential.user_id == self.user_id,
                ).first()
                result = run_database_query(job, credential, log)

            output_location = build_output_location(
                job.s3_bucket, job.folder_path, job.name, run_id, bool(job.date_subfolders)
            )
            if output_location:
                log.info(f"Data exported to {output_location}")
            log.info("Job completed successfully")

        except Exception as e:
            log.error(str(e))
            execution.status = "failed"
            execution.completed_at = datetime.utcnow()
            execution.duration_ms = _duration_ms(started_at)
            execution.error_message = str(e)
            execution.logs = log.text()
            self.db.commit()
            logger.warning(f"Execution {execution.id} failed: {e}")
            if isinstance(e, JobExecutionError):
                raise
            raise JobExecutionError(str(e)) from e

        execution.status = "success"
        execution.completed_at = datetime.utcnow()
        execution.duration_ms = _duration_ms(started_at)
        execution.rows_processed = result.rows_processed
        execution.logs = log.text()
        execution.output_location = output_location
        self.db.commit()
        logger.info(f"Execution {execution.id} succeeded: {result.rows_processed} rows")

        return {
            "success": True,
            "execution_id": execution.id,
            "run_id": run_id,
            "rows_processed": result.rows_processed,
            "output_location": output_location,
        }

    # ---------------------------------------------------------
    # 2. HISTORY
    # ---------------------------------------------------------
    def _scoped(self):
        return self.db.query(JobExecution).filter(JobExecution.user_id == self.user_id)

    def list_executions(
        self,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        job_id: Optional[int] = None,
    ) -> dict:
        limit = limit or settings.HISTORY_DEFAULT_LIMIT
        limit = max(1, min(limit, settings.HISTORY_MAX_LIMIT))

        query = self._scoped()
        if status:
            query = query.filter(JobExecution.status == status)
        if job_id is not None:
            query = query.filter(JobExecution.job_id == job_id)

        total = query.count()
        rows = query.order_by(JobExecution.started_at.desc(), JobExecution.id.desc()).limit(limit).all()
        return {"data": [self.to_response(r) for r in rows], "total": total, "limit": limit}

    def get_execution(self, execution_id: int) -> Optional[JobExecution]:
        return self._scoped().filter(JobExecution.id == execution_id).first()

    def to_response(self, execution: JobExecution) -> dict:
        data = {c.name: getattr(execution, c.name) for c in JobExecution.__table__.columns}
        data["job"] = {"name": execution.job.name} if execution.job else None
        return data

    def recent(self, limit: int = 10) -> List[JobExecution]:
        return self._scoped().order_by(JobExecution.started_at.desc(), JobExecution.id.desc()).limit(limit).all()
