"""
Tag CRUD scoped to the owning user
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contactbook.core.exceptions import DuplicateTagError, NotFoundError, ValidationError
from contactbook.models import Tag

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Tag name is required")
    return name


def _get_owned_tag(db: Session, user_id: int, tag_id: int) -> Tag:
    tag = db.query(Tag).filter(Tag.id == tag_id, Tag.user_id == user_id).first()
    if tag is None:
        raise NotFoundError("Tag not found")
    return tag


def list_tags(db: Session, user_id: int) -> List[Tag]:
    return db.query(Tag).filter(Tag.user_id == user_id).order_by(Tag.name).all()


def create_tag(db: Session, user_id: int, name: Optional[str]) -> Tag:
    name = _clean_name(name)
    tag = Tag(user_id=user_id, name=name)
    try:
        db.add(tag)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateTagError()
    logger.info(f"User {user_id} created tag {tag.id}")
    return tag


def update_tag(db: Session, user_id: int, tag_id: int, name: Optional[str]) -> Tag:
    name = _clean_name(name)
    tag = _get_owned_tag(db, user_id, tag_id)
    try:
        tag.name = name
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateTagError()
    return tag


def delete_tag(db: Session, user_id: int, tag_id: int) -> None:
    """Removes the tag and its contact associations, never the contacts"""
    deleted = (
        db.query(Tag)
        .filter(Tag.id == tag_id, Tag.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFoundError("Tag not found")
    db.commit()
    logger.info(f"User {user_id} deleted tag {tag_id}")
