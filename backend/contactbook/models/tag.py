"""
Tag model for labelling contacts
"""

from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from contactbook.models.base import BaseModel


class Tag(BaseModel):
    """
    A per-user label. Names are case-sensitive and unique within one user.
    """
    __tablename__ = "tags"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user"
    )

    name = Column(
        String(100),
        nullable=False,
        comment="Tag label"
    )

    # Relationships
    user = relationship("User", back_populates="tags")
    contact_links = relationship("ContactTag", back_populates="tag", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tags_user_id_name"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
