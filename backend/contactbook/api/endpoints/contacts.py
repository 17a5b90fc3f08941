"""
Contact endpoints. Every query is filtered by the authenticated user.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from contactbook.core.database import get_db
from contactbook.core.security import get_current_identity
from contactbook.schemas.auth import Identity, MessageResponse
from contactbook.schemas.contact import ContactPayload, ContactResponse
from contactbook.services import contacts as contact_service

router = APIRouter()


@router.get("", response_model=List[ContactResponse])
def list_contacts(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """All contacts with their tag names and connections, newest first"""
    return [contact.to_dict() for contact in contact_service.list_contacts(db, identity.user_id)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ContactResponse)
def create_contact(
    payload: ContactPayload,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Create a contact

    Expected payload:
    {
        "name": "Ada", "location": "NYC",
        "spouse": null, "children": null, "notes": null,
        "tags": ["friend"],
        "connections": [{"connected_contact_id": 1, "connection_type": "introduced_by"}]
    }
    """
    return contact_service.create_contact(db, identity.user_id, payload).to_dict()


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return contact_service.get_contact(db, identity.user_id, contact_id).to_dict()


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: int,
    payload: ContactPayload,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Replace fields, tags and connections"""
    return contact_service.update_contact(db, identity.user_id, contact_id, payload).to_dict()


@router.delete("/{contact_id}", response_model=MessageResponse)
def delete_contact(
    contact_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    contact_service.delete_contact(db, identity.user_id, contact_id)
    return {"message": "Contact deleted successfully"}
