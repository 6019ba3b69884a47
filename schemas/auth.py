"""
Pydantic schemas for authentication
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict


# ========== SIGN UP ==========

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=72)
    password_confirmation: str = Field(..., max_length=72)
    first_name: str = Field(default="", max_length=60)
    last_name: str = Field(default="", max_length=60)
    phone: Optional[str] = Field(None, max_length=30)
    # Elevated roles are granted by an admin, never at sign-up
    role: str = Field(default="receptionist", pattern="^(receptionist|housekeeping|maintenance|security)$")


class SignUpResponse(BaseModel):
    message: str
    redirect_to: str
    email_redirect_to: str
    profile_id: int


# ========== SESSION ==========

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class ProfileRead(BaseModel):
    id: int
    email: Optional[str] = None
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
