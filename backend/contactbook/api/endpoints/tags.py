"""
Tag endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from contactbook.core.database import get_db
from contactbook.core.security import get_current_identity
from contactbook.schemas.auth import Identity, MessageResponse
from contactbook.schemas.tag import TagPayload, TagResponse
from contactbook.services import tags as tag_service

router = APIRouter()


@router.get("", response_model=List[TagResponse])
def list_tags(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """User's tags in alphabetical order"""
    return [tag.to_dict() for tag in tag_service.list_tags(db, identity.user_id)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TagResponse)
def create_tag(
    payload: TagPayload,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return tag_service.create_tag(db, identity.user_id, payload.name).to_dict()


@router.put("/{tag_id}", response_model=TagResponse)
def rename_tag(
    tag_id: int,
    payload: TagPayload,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return tag_service.update_tag(db, identity.user_id, tag_id, payload.name).to_dict()


@router.delete("/{tag_id}", response_model=MessageResponse)
def delete_tag(
    tag_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    tag_service.delete_tag(db, identity.user_id, tag_id)
    return {"message": "Tag deleted successfully"}
