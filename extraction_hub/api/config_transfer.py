import json

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from extraction_hub.api.deps import get_current_user
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.services.config_service import ConfigService
from extraction_hub.schemas.config_transfer import ConfigDocument, ImportSummary

router = APIRouter(prefix="/api/config", tags=["Configuration Export/Import"])

EXPORT_FILENAME = "extraction_hub_config.json"

@router.get("/export")
def export_config(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    document = ConfigService(db, user.id).export_config()
    return StreamingResponse(
        iter([json.dumps(document, indent=2)]),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )

@router.post("/import", response_model=ImportSummary)
def import_config(
    document: ConfigDocument,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConfigService(db, user.id).import_config(document)
