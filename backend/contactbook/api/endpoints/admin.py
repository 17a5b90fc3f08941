"""
License key administration, guarded by the admin-password header
"""

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from contactbook.core.database import get_db
from contactbook.core.security import require_admin
from contactbook.schemas.license_key import LicenseKeyIssueRequest, LicenseKeyIssueResponse, LicenseKeyResponse
from contactbook.services import license_keys

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/license-keys", response_model=LicenseKeyIssueResponse)
def issue_license_keys(
    payload: Optional[LicenseKeyIssueRequest] = Body(None),
    db: Session = Depends(get_db),
):
    """Generate up to 100 new active keys"""
    quantity = payload.quantity if payload is not None else 1
    keys = license_keys.issue_license_keys(db, quantity)
    return {"keys": keys, "message": f"Generated {len(keys)} license keys"}


@router.get("/license-keys", response_model=List[LicenseKeyResponse])
def list_license_keys(db: Session = Depends(get_db)):
    """The 100 most recent keys, newest first"""
    return [key.to_dict() for key in license_keys.list_license_keys(db)]
