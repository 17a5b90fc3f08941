"""
Registration and login endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from contactbook.core.config import Settings
from contactbook.core.database import get_db
from contactbook.core.security import get_settings_from_request
from contactbook.schemas.auth import LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from contactbook.services import auth_service

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_request),
):
    """
    Create an account by redeeming a license key

    Expected payload:
    {
        "email": "a@x.com",
        "password": "...",
        "licenseKey": "XXXX-XXXX-XXXX-XXXX"
    }
    """
    auth_service.register_user(db, settings, payload.email, payload.password, payload.licenseKey)
    return {"message": "User created successfully"}


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_request),
):
    """Exchange credentials for a 24 hour bearer token"""
    return auth_service.login(db, settings, payload.email, payload.password)
