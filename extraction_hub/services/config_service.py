import logging
from datetime import datetime

from pydantic import ValidationError
from sqlalchemy.orm import Session

from extraction_hub.core.exceptions import HubError, PermissionDenied
from extraction_hub.models.credential import Credential
from extraction_hub.models.job import Job
from extraction_hub.schemas.config_transfer import ConfigDocument, CONFIG_VERSION
from extraction_hub.schemas.credential import CredentialCreate
from extraction_hub.schemas.job import JobCreate
from extraction_hub.services.credential_service import CredentialService
from extraction_hub.services.job_service import JobService
from extraction_hub.services.permission_service import PermissionService

logger = logging.getLogger(__name__)


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(x) for x in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid value")


class ConfigService:
    """JSON export/import of a user's credentials and jobs. Passwords never leave the database."""

    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _require_transfer(self):
        if not PermissionService(self.db).has_permission(self.user_id, "config_transfer"):
            raise PermissionDenied("You don't have permission to export or import configuration")

    def export_config(self) -> dict:
        self._require_transfer()

        credentials = self.db.query(Credential).filter(Credential.user_id == self.user_id)\
            .order_by(Credential.id).all()
        names = {c.id: c.name for c in credentials}

        jobs = self.db.query(Job).filter(Job.user_id == self.user_id).order_by(Job.id).all()

        return {
            "version": CONFIG_VERSION,
            "exported_at": datetime.utcnow().isoformat(),
            "credentials": [
                {
                    "name": c.name,
                    "type": c.type,
                    "host": c.host,
                    "port": c.port,
                    "database_name": c.database_name,
                    "username": c.username,
                    "ssl_enabled": bool(c.ssl_enabled),
                }
                for c in credentials
            ],
            "jobs": [
                {
                    "name": j.name,
                    "description": j.description,
                    "source_type": j.source_type,
                    "code": j.code,
                    "credential_name": names.get(j.credential_id),
                    "schedule_type": j.schedule_type,
                    "frequency": j.frequency,
                    "schedule_time": j.schedule_time,
                    "s3_bucket": j.s3_bucket,
                    "folder_path": j.folder_path,
                    "date_subfolders": bool(j.date_subfolders),
                    "status": j.status,
                }
                for j in jobs
            ],
        }

    def import_config(self, document: ConfigDocument) -> dict:
        """
        Imports a whole document or nothing: every item is validated before the
        first insert, and all inserts share one transaction.
        """
        self._require_transfer()
        if document.version != CONFIG_VERSION:
            raise HubError(f"Unsupported config version: {document.version}")

        credential_service = CredentialService(self.db, self.user_id)
        job_service = JobService(self.db, self.user_id)

        # 1. Validate
        credentials = []
        for item in document.credentials:
            try:
                credentials.append(CredentialCreate(**item.model_dump(), password=""))
            except ValidationError as e:
                raise HubError(f"Invalid credential '{item.name}': {_first_error(e)}")

        jobs = []
        for item in document.jobs:
            payload = item.model_dump(exclude={"credential_name", "status"})
            try:
                jobs.append((item, JobCreate(**payload)))
            except ValidationError as e:
                raise HubError(f"Invalid job '{item.name}': {_first_error(e)}")

        # 2. Write
        summary = {"credentials_created": 0, "credentials_reused": 0, "jobs_created": 0, "jobs_skipped": 0}
        credential_ids = {}
        try:
            for data in credentials:
                existing = credential_service.get_by_name(data.name)
                if existing:
                    credential_ids[data.name] = existing.id
                    summary["credentials_reused"] += 1
                    continue
                credential_ids[data.name] = credential_service.create_credential(data, commit=False).id
                summary["credentials_created"] += 1

            for item, data in jobs:
                if job_service.get_by_name(data.name):
                    summary["jobs_skipped"] += 1
                    continue

                if item.credential_name:
                    credential_id = credential_ids.get(item.credential_name)
                    if credential_id is None:
                        existing = credential_service.get_by_name(item.credential_name)
                        credential_id = existing.id if existing else None
                    data.credential_id = credential_id

                job_service.create_job(data, status=item.status, commit=False)
                summary["jobs_created"] += 1

            self.db.commit()
        except HubError:
            self.db.rollback()
            raise

        logger.info(f"Config imported for user {self.user_id}: {summary}")
        return summary
