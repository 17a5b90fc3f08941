"""
Pydantic schemas for Contact request/response validation
"""

from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Optional, List

TagName = Annotated[str, Field(max_length=100)]


class ConnectionIn(BaseModel):
    """Outgoing edge submitted with a contact"""

    connected_contact_id: int = Field(..., description="Target contact, owned by the same user")
    connection_type: Optional[str] = Field(None, max_length=100, description="Defaults to introduced_by")
    connection_notes: Optional[str] = None


class ContactPayload(BaseModel):
    """
    Body for create and update. Name and location are checked by the service
    so the client always gets "Name and location are required".
    """

    name: Optional[str] = Field(None, max_length=255)
    location: Optional[str] = Field(None, max_length=255)
    spouse: Optional[str] = Field(None, max_length=255)
    children: Optional[str] = None
    notes: Optional[str] = None
    tags: List[TagName] = Field(default_factory=list, description="Tag names, created on demand")
    connections: List[ConnectionIn] = Field(default_factory=list)

    @field_validator('tags', 'connections', mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v


class ConnectionSummary(BaseModel):
    id: int
    name: str
    connection_type: str
    connection_notes: Optional[str] = None


class ContactResponse(BaseModel):
    id: int
    user_id: int
    name: str
    location: str
    spouse: Optional[str] = None
    children: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    connections: List[ConnectionSummary] = Field(default_factory=list)
