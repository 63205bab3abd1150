# projectboard/models/admin.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from projectboard.models.project import CamelModel


class AdminRequest(CamelModel):
    id: str
    name: str
    email: str
    created_at: datetime
    approved: bool = False
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None


class AdminUser(CamelModel):
    email: str
    name: str
    approved: Literal[True] = True
    approved_at: datetime
    approved_by: str


class AdminRequestIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    # strength rules belong to the auth provider
    password: str


class AdminLoginIn(BaseModel):
    email: EmailStr
    password: str


class AdminLoginResponse(BaseModel):
    message: str
    access_token: str
    user: AdminUser


class MessageResponse(BaseModel):
    message: str
