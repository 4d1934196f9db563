from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from cafe.models.user import RoleName


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str
    role: RoleName
    expires_at: datetime


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=4)
    role_id: int


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=150)
    # Left unchanged when omitted
    password: Optional[str] = Field(None, min_length=4)
    role_id: Optional[int] = None


class UserResponse(BaseModel):
    id: int
    username: str
    role_id: int
    role_name: RoleName
    created_at: datetime
    updated_at: datetime


class RoleResponse(BaseModel):
    id: int
    role_name: RoleName
    permissions: List[str] = []


class SessionResponse(BaseModel):
    user_id: int
    username: str
    role: RoleName
