import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from extraction_hub.models.credential import Credential
from extraction_hub.models.job import Job
from extraction_hub.schemas.credential import CredentialCreate, CredentialUpdate, ConnectionTestRequest
from extraction_hub.workers.extraction.simulator import simulate_connection_test

logger = logging.getLogger(__name__)


class CredentialService:
    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _scoped(self):
        return self.db.query(Credential).filter(Credential.user_id == self.user_id)

    def list_credentials(self) -> List[Credential]:
        """Caller's credentials, newest first."""
        return self._scoped().order_by(Credential.created_at.desc(), Credential.id.desc()).all()

    def get_credential(self, credential_id: int) -> Optional[Credential]:
        return self._scoped().filter(Credential.id == credential_id).first()

    def get_by_name(self, name: str) -> Optional[Credential]:
        return self._scoped().filter(Credential.name == name).first()

    def create_credential(self, data: CredentialCreate, commit: bool = True) -> Credential:
        now = datetime.utcnow()
        credential = Credential(
            user_id=self.user_id,
            name=data.name,
            type=data.type,
            host=data.host,
            port=data.port,
            database_name=data.database_name,
            username=data.username,
            password=data.password or "",
            ssl_enabled=data.ssl_enabled,
            created_at=now,
            updated_at=now,
        )
        self.db.add(credential)
        if not commit:
            self.db.flush()
            return credential
        self.db.commit()
        self.db.refresh(credential)
        logger.info(f"Credential created: {credential.id}")
        return credential

    def update_credential(self, credential_id: int, data: CredentialUpdate) -> Optional[Credential]:
        credential = self.get_credential(credential_id)
        if not credential:
            return None

        update_data = data.model_dump(exclude_unset=True)
        # Only replace the password when a new one is supplied
        if not update_data.get("password"):
            update_data.pop("password", None)

        for key, value in update_data.items():
            if value is None:
                continue
            setattr(credential, key, value)

        credential.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(credential)
        logger.info(f"Credential updated: {credential.id}")
        return credential

    def delete_credential(self, credential_id: int) -> bool:
        credential = self.get_credential(credential_id)
        if not credential:
            return False

        # Detach jobs that still reference it
        self.db.query(Job).filter(Job.credential_id == credential.id).update(
            {Job.credential_id: None}, synchronize_session=False
        )
        self.db.delete(credential)
        self.db.commit()
        logger.info(f"Credential deleted: {credential_id}")
        return True

    def test_connection(self, data: ConnectionTestRequest) -> dict:
        logger.info(f"Testing connection to {data.type} at {data.host}:{data.port}")
        if simulate_connection_test():
            return {"success": True, "message": f"Successfully connected to {data.type} database"}
        return {"success": False, "message": "Connection failed: Connection timeout or invalid credentials"}
