"""
Run identifiers and export locations for extraction runs.
"""

import re
import uuid
from datetime import datetime
from typing import Optional


def generate_run_id(now: Optional[datetime] = None) -> str:
    """
    run_<YYYYMMDDTHHMMSS>_<8 hex chars>, e.g. run_20241219T143000_ab12cd34
    """
    now = now or datetime.utcnow()
    return f"run_{now.strftime('%Y%m%dT%H%M%S')}_{uuid.uuid4().hex[:8]}"


def slugify_job_name(name: str) -> str:
    return re.sub(r"\s+", "_", (name or "").lower())


def build_output_location(
    s3_bucket: Optional[str],
    folder_path: Optional[str],
    job_name: str,
    run_id: str,
    date_subfolders: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """
    Returns the S3 URI the run exports to, or "" when the job has no bucket/folder.
    """
    if not s3_bucket or not folder_path:
        return ""

    now = now or datetime.utcnow()
    filename = f"{slugify_job_name(job_name)}_{run_id}"

    if date_subfolders:
        return f"s3://{s3_bucket}/{folder_path}/{now.strftime('%Y/%m/%d')}/{filename}.csv"
    return f"s3://{s3_bucket}/{folder_path}/{filename}.csv"
