"""
Pydantic schemas for registration, login and token identity
"""

from pydantic import BaseModel, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Registration payload. Presence is checked by the auth service so the
    client gets the same message for any missing field."""

    email: Optional[str] = Field(None, description="Login email", examples=["a@x.com"])
    password: Optional[str] = Field(None, description="Plaintext password")
    licenseKey: Optional[str] = Field(None, description="Unredeemed license key", examples=["DEMO-KEY-123"])


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    id: int
    email: str


class LoginResponse(BaseModel):
    token: str = Field(..., description="Bearer token valid for 24 hours")
    user: UserPublic


class MessageResponse(BaseModel):
    message: str


class Identity(BaseModel):
    """Decoded token claims attached to authenticated requests"""

    user_id: int
    email: str
