"""
Database models package
"""

from .base import Base, BaseModel
from .user import User
from .license_key import LicenseKey, LicenseKeyStatus
from .tag import Tag
from .contact import Contact, ContactTag, ContactConnection, DEFAULT_CONNECTION_TYPE

__all__ = [
    "Base", "BaseModel", "User", "LicenseKey", "LicenseKeyStatus", "Tag",
    "Contact", "ContactTag", "ContactConnection", "DEFAULT_CONNECTION_TYPE"
]
