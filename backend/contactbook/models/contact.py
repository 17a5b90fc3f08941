"""
Contact models: address book entries, their tags and the
directed connections between them
"""

from sqlalchemy import Column, String, Integer, Text, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship, validates
from typing import Any, Dict, List

from contactbook.models.base import Base, BaseModel

DEFAULT_CONNECTION_TYPE = "introduced_by"


class Contact(BaseModel):
    """
    Address book entry owned by exactly one user
    """
    __tablename__ = "contacts"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user"
    )

    name = Column(String(255), nullable=False, comment="Contact's full name")
    location = Column(String(255), nullable=False, comment="Where the contact lives or was met")
    spouse = Column(String(255), nullable=True)
    children = Column(Text, nullable=True, comment="Free text")
    notes = Column(Text, nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    user = relationship("User", back_populates="contacts")
    tag_links = relationship(
        "ContactTag",
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    connections = relationship(
        "ContactConnection",
        foreign_keys="ContactConnection.contact_id",
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ContactConnection.id",
    )

    @validates('name', 'location')
    def validate_required(self, key: str, value: str) -> str:
        if not value or not value.strip():
            raise ValueError(f"Contact {key} cannot be empty")
        return value

    @property
    def tag_names(self) -> List[str]:
        return sorted(link.tag.name for link in self.tag_links)

    def to_dict(self) -> Dict[str, Any]:
        """
        Contact with its tag names and outgoing connection summaries
        """
        data = super().to_dict()
        data["tags"] = self.tag_names
        data["connections"] = [
            connection.summary()
            for connection in self.connections
            if connection.connected_contact is not None
            and connection.connected_contact.user_id == self.user_id
        ]
        return data

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, name='{self.name}')>"


class ContactTag(Base):
    """
    Junction table for Contact-Tag relationships
    """
    __tablename__ = "contact_tags"

    contact_id = Column(
        Integer,
        ForeignKey("contacts.id", ondelete="CASCADE"),
        primary_key=True,
    )

    tag_id = Column(
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )

    contact = relationship("Contact", back_populates="tag_links")
    tag = relationship("Tag", back_populates="contact_links")

    def __repr__(self) -> str:
        return f"<ContactTag(contact_id={self.contact_id}, tag_id={self.tag_id})>"


class ContactConnection(BaseModel):
    """
    Directed edge from one contact to another contact of the same user
    """
    __tablename__ = "contact_connections"

    contact_id = Column(
        Integer,
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Source contact"
    )

    connected_contact_id = Column(
        Integer,
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Target contact"
    )

    connection_type = Column(
        String(100),
        nullable=False,
        default=DEFAULT_CONNECTION_TYPE,
        server_default=DEFAULT_CONNECTION_TYPE,
    )

    connection_notes = Column(Text, nullable=True)

    contact = relationship("Contact", foreign_keys=[contact_id], back_populates="connections")
    connected_contact = relationship("Contact", foreign_keys=[connected_contact_id])

    __table_args__ = (
        UniqueConstraint(
            "contact_id", "connected_contact_id", "connection_type",
            name="uq_contact_connections_edge",
        ),
    )

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.connected_contact.id,
            "name": self.connected_contact.name,
            "connection_type": self.connection_type,
            "connection_notes": self.connection_notes,
        }

    def __repr__(self) -> str:
        return (
            f"<ContactConnection({self.contact_id} -> {self.connected_contact_id}, "
            f"type='{self.connection_type}')>"
        )
