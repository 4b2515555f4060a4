from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List

from extraction_hub.api.deps import get_current_user
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.services.credential_service import CredentialService
from extraction_hub.schemas.credential import (
    CredentialCreate,
    CredentialUpdate,
    CredentialResponse,
    ConnectionTestRequest,
    ConnectionTestResponse,
)

router = APIRouter(prefix="/api/credentials", tags=["Credentials"])

# --- READ ALL ---
@router.get("/", response_model=List[CredentialResponse])
def list_credentials(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return CredentialService(db, user.id).list_credentials()

# --- TEST CONNECTION ---
@router.post("/test", response_model=ConnectionTestResponse)
def test_connection(
    payload: ConnectionTestRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    result = CredentialService(db, user.id).test_connection(payload)
    if not result["success"]:
        return JSONResponse(status_code=400, content=result)
    return result

# --- READ ONE ---
@router.get("/{id}", response_model=CredentialResponse)
def get_credential(id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    credential = CredentialService(db, user.id).get_credential(id)
    if not credential:
        raise HTTPException(status_code=404, detail="Credential not found")
    return credential

# --- CREATE ---
@router.post("/", response_model=CredentialResponse, status_code=201)
def create_credential(
    payload: CredentialCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CredentialService(db, user.id).create_credential(payload)

# --- UPDATE ---
@router.patch("/{id}", response_model=CredentialResponse)
def update_credential(
    id: int,
    payload: CredentialUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    updated = CredentialService(db, user.id).update_credential(id, payload)
    if not updated:
        raise HTTPException(status_code=404, detail="Credential not found")
    return updated

# --- DELETE ---
@router.delete("/{id}")
def delete_credential(id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not CredentialService(db, user.id).delete_credential(id):
        raise HTTPException(status_code=404, detail="Credential not found")
    return {"success": True}
