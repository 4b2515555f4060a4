from pydantic import BaseModel
from typing import Optional, List, Literal
from datetime import datetime

CONFIG_VERSION = 1

class CredentialExport(BaseModel):
    name: str
    type: str
    host: str
    port: int
    database_name: str
    username: str
    ssl_enabled: bool = False

class JobExport(BaseModel):
    name: str
    description: Optional[str] = None
    source_type: str
    code: str
    credential_name: Optional[str] = None
    schedule_type: str = "now"
    frequency: Optional[str] = None
    schedule_time: Optional[str] = None
    s3_bucket: Optional[str] = None
    folder_path: Optional[str] = None
    date_subfolders: bool = False
    status: Literal["active", "inactive", "draft"] = "draft"

class ConfigDocument(BaseModel):
    version: int = CONFIG_VERSION
    exported_at: Optional[datetime] = None
    credentials: List[CredentialExport] = []
    jobs: List[JobExport] = []

class ImportSummary(BaseModel):
    credentials_created: int
    credentials_reused: int
    jobs_created: int
    jobs_skipped: int
