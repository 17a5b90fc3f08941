"""
Pydantic schemas for API request/response validation
"""

from .auth import RegisterRequest, LoginRequest, LoginResponse, UserPublic, MessageResponse, Identity
from .contact import ConnectionIn, ContactPayload, ConnectionSummary, ContactResponse
from .tag import TagPayload, TagResponse
from .license_key import LicenseKeyIssueRequest, LicenseKeyIssueResponse, LicenseKeyResponse

__all__ = [
    # Auth schemas
    "RegisterRequest", "LoginRequest", "LoginResponse", "UserPublic", "MessageResponse", "Identity",
    # Contact schemas
    "ConnectionIn", "ContactPayload", "ConnectionSummary", "ContactResponse",
    # Tag schemas
    "TagPayload", "TagResponse",
    # License key schemas
    "LicenseKeyIssueRequest", "LicenseKeyIssueResponse", "LicenseKeyResponse",
]
