"""
License key model gating registration
"""

import enum

from sqlalchemy import Column, String

from contactbook.models.base import BaseModel


class LicenseKeyStatus(str, enum.Enum):
    ACTIVE = "active"
    USED = "used"


class LicenseKey(BaseModel):
    """
    Single-use redemption code. Moves from active to used exactly once,
    when a registration redeems it, and is never deleted.
    """
    __tablename__ = "license_keys"

    key_value = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Formatted key, e.g. ABCD-EFGH-IJKL-MNOP"
    )

    status = Column(
        String(50),
        nullable=False,
        default=LicenseKeyStatus.ACTIVE.value,
        server_default=LicenseKeyStatus.ACTIVE.value,
        index=True,
        comment="active or used"
    )

    used_by = Column(
        String(255),
        nullable=True,
        comment="Email of the user who redeemed the key"
    )

    def redeem(self, email: str) -> None:
        self.status = LicenseKeyStatus.USED.value
        self.used_by = email

    def to_dict(self) -> dict:
        return {
            "key_value": self.key_value,
            "status": self.status,
            "used_by": self.used_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<LicenseKey(key_value='{self.key_value}', status='{self.status}')>"
