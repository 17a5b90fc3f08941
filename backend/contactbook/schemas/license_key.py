"""
Pydantic schemas for the admin license key endpoints
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class LicenseKeyIssueRequest(BaseModel):
    quantity: int = Field(1, description="Number of keys to generate, capped at 100")


class LicenseKeyIssueResponse(BaseModel):
    keys: List[str]
    message: str


class LicenseKeyResponse(BaseModel):
    key_value: str
    status: str
    used_by: Optional[str] = None
    created_at: Optional[str] = None
