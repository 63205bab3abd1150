from pydantic import BaseModel, EmailStr
from typing import Optional


class SignInResult(BaseModel):
    id_token: str
    refresh_token: Optional[str] = None
    expires_in: int = 3600
    local_id: str
    email: EmailStr


class CreatedAccount(BaseModel):
    uid: str
    email: EmailStr
    display_name: Optional[str] = None


class VerifiedIdentity(BaseModel):
    uid: str
    email: Optional[str] = None
