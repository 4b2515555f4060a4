from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    display_name: Optional[str] = None

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    id: int
    email: EmailStr
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CurrentUserResponse(BaseModel):
    id: int
    email: EmailStr
    display_name: Optional[str] = None
    status: str
    roles: List[str]
    permissions: List[str]

class Token(BaseModel):
    access_token: str
    token_type: str
