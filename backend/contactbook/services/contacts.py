"""
Contact CRUD scoped to the owning user.

Creates and updates write the contact, its tag links and its outgoing
connections in one transaction; nothing is persisted if any step fails.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from contactbook.core.exceptions import NotFoundError, ValidationError
from contactbook.models import Contact, ContactConnection, ContactTag, Tag, DEFAULT_CONNECTION_TYPE
from contactbook.schemas.contact import ConnectionIn, ContactPayload

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name and location are required"


def _owned_contacts_query(db: Session, user_id: int):
    return (
        db.query(Contact)
        .filter(Contact.user_id == user_id)
        .options(
            selectinload(Contact.tag_links).joinedload(ContactTag.tag),
            selectinload(Contact.connections).joinedload(ContactConnection.connected_contact),
        )
    )


def list_contacts(db: Session, user_id: int) -> List[Contact]:
    """All of the user's contacts, newest first"""
    return (
        _owned_contacts_query(db, user_id)
        .order_by(Contact.created_at.desc(), Contact.id.desc())
        .all()
    )


def get_contact(db: Session, user_id: int, contact_id: int) -> Contact:
    contact = _owned_contacts_query(db, user_id).filter(Contact.id == contact_id).first()
    if contact is None:
        raise NotFoundError("Contact not found")
    return contact


def _validate_payload(payload: ContactPayload) -> None:
    if not payload.name or not payload.name.strip() or not payload.location or not payload.location.strip():
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)


def _scalar_fields(payload: ContactPayload) -> Dict[str, str]:
    # Empty optional strings are stored as NULL
    return {
        "name": payload.name,
        "location": payload.location,
        "spouse": payload.spouse or None,
        "children": payload.children or None,
        "notes": payload.notes or None,
    }


def _unique_tag_names(names: Iterable[str]) -> List[str]:
    seen = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def get_or_create_tag(db: Session, user_id: int, name: str) -> Tag:
    """
    Find the user's tag by exact name, creating it if absent.
    """
    tag = db.query(Tag).filter(Tag.user_id == user_id, Tag.name == name).first()
    if tag is not None:
        return tag

    try:
        with db.begin_nested():
            tag = Tag(user_id=user_id, name=name)
            db.add(tag)
            db.flush()
    except IntegrityError:
        # Created concurrently by another request
        tag = db.query(Tag).filter(Tag.user_id == user_id, Tag.name == name).one()
    return tag


def _attach_tags(db: Session, contact: Contact, user_id: int, names: Iterable[str]) -> None:
    for name in _unique_tag_names(names):
        contact.tag_links.append(ContactTag(tag=get_or_create_tag(db, user_id, name)))


def _unique_connections(connections: Iterable[ConnectionIn]) -> List[Tuple[int, str, str]]:
    edges = {}
    for connection in connections:
        connection_type = (connection.connection_type or "").strip() or DEFAULT_CONNECTION_TYPE
        key = (connection.connected_contact_id, connection_type)
        if key not in edges:
            edges[key] = connection.connection_notes or None
    return [(target_id, connection_type, notes) for (target_id, connection_type), notes in edges.items()]


def _attach_connections(db: Session, contact: Contact, user_id: int, connections: Iterable[ConnectionIn]) -> None:
    edges = _unique_connections(connections)
    if not edges:
        return

    target_ids = {target_id for target_id, _, _ in edges}
    targets = {
        target.id: target
        for target in db.query(Contact).filter(Contact.user_id == user_id, Contact.id.in_(target_ids))
    }
    if len(targets) != len(target_ids):
        raise ValidationError("Invalid connected contact")

    for target_id, connection_type, notes in edges:
        contact.connections.append(
            ContactConnection(
                connected_contact=targets[target_id],
                connection_type=connection_type,
                connection_notes=notes,
            )
        )


def create_contact(db: Session, user_id: int, payload: ContactPayload) -> Contact:
    _validate_payload(payload)

    try:
        contact = Contact(user_id=user_id, **_scalar_fields(payload))
        db.add(contact)
        db.flush()

        _attach_tags(db, contact, user_id, payload.tags)
        _attach_connections(db, contact, user_id, payload.connections)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"User {user_id} created contact {contact.id}")
    return contact


def update_contact(db: Session, user_id: int, contact_id: int, payload: ContactPayload) -> Contact:
    """
    Replace the contact's fields, tags and outgoing connections with the payload.
    """
    _validate_payload(payload)

    try:
        contact = get_contact(db, user_id, contact_id)
        contact.update_from_dict(_scalar_fields(payload))
        contact.updated_at = datetime.now(timezone.utc)

        contact.tag_links.clear()
        contact.connections.clear()
        db.flush()

        _attach_tags(db, contact, user_id, payload.tags)
        _attach_connections(db, contact, user_id, payload.connections)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"User {user_id} updated contact {contact_id}")
    return contact


def delete_contact(db: Session, user_id: int, contact_id: int) -> None:
    """
    Not found and owned by someone else are indistinguishable to the caller.
    """
    deleted = (
        db.query(Contact)
        .filter(Contact.id == contact_id, Contact.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFoundError("Contact not found")
    db.commit()
    logger.info(f"User {user_id} deleted contact {contact_id}")
