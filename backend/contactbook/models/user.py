"""
User account model
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship, validates

from contactbook.models.base import BaseModel


class User(BaseModel):
    """
    A registered account. Owns its contacts and tags exclusively.
    """
    __tablename__ = "users"

    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email, unique across all users"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password"
    )

    license_key = Column(
        String(255),
        nullable=False,
        comment="License key redeemed at registration"
    )

    # Relationships
    contacts = relationship("Contact", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    tags = relationship("Tag", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @validates('email')
    def validate_email(self, key: str, email: str) -> str:
        if not email or not email.strip():
            raise ValueError("Email cannot be empty")
        return email.strip()

    def to_dict(self) -> dict:
        """Public view of the user, never includes the password hash"""
        return {"id": self.id, "email": self.email}

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
