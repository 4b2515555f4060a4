from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

CredentialType = Literal["postgresql", "redshift", "oracle", "mysql"]

# Base Schema (Shared properties)
class CredentialBase(BaseModel):
    name: str = Field(..., min_length=1)
    type: CredentialType
    host: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)
    database_name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    ssl_enabled: bool = False

# Schema for CREATING a credential
class CredentialCreate(CredentialBase):
    password: str = ""

# Schema for UPDATING (all fields optional)
class CredentialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[CredentialType] = None
    host: Optional[str] = Field(None, min_length=1)
    port: Optional[int] = Field(None, ge=1, le=65535)
    database_name: Optional[str] = Field(None, min_length=1)
    username: Optional[str] = Field(None, min_length=1)
    # Empty or missing keeps the stored password
    password: Optional[str] = None
    ssl_enabled: Optional[bool] = None

# Connection test payload (nothing is persisted)
class ConnectionTestRequest(BaseModel):
    type: str
    host: str
    port: int
    database_name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    ssl_enabled: bool = False

class ConnectionTestResponse(BaseModel):
    success: bool
    message: str

# Schema for READING. Password is never part of a response.
class CredentialResponse(CredentialBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
