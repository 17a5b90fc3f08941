"""
Pydantic schemas for Tag request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional


class TagPayload(BaseModel):
    name: Optional[str] = Field(None, max_length=100, description="Tag label, trimmed")


class TagResponse(BaseModel):
    id: int
    name: str
    created_at: Optional[str] = None
