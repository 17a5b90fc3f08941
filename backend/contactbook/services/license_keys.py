"""
License key generation, bulk issuance and listing
"""

import logging
import random
import string
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contactbook.core.exceptions import DuplicateLicenseKeyError
from contactbook.models import LicenseKey

logger = logging.getLogger(__name__)

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 4
KEY_GROUP_LENGTH = 4
MAX_KEYS_PER_REQUEST = 100
MAX_LIST_SIZE = 100
MAX_INSERT_ATTEMPTS = 5


def generate_license_key(rng: Optional[random.Random] = None) -> str:
    """
    Random key in the form XXXX-XXXX-XXXX-XXXX (uppercase letters and digits).

    Keys gate registration but are not secrets, so the plain PRNG is enough;
    uniqueness is enforced at insert time.
    """
    rng = rng or random
    groups = [
        "".join(rng.choices(KEY_ALPHABET, k=KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(groups)


def clamp_quantity(quantity: int) -> int:
    return max(0, min(quantity, MAX_KEYS_PER_REQUEST))


def _insert_unique_key(db: Session, generator: Callable[[], str]) -> str:
    for attempt in range(1, MAX_INSERT_ATTEMPTS + 1):
        key_value = generator()
        try:
            with db.begin_nested():
                db.add(LicenseKey(key_value=key_value))
                db.flush()
        except IntegrityError:
            logger.warning(f"License key collision on attempt {attempt}, regenerating")
            continue
        return key_value
    raise DuplicateLicenseKeyError()


def issue_license_keys(
    db: Session,
    quantity: int = 1,
    generator: Callable[[], str] = generate_license_key,
) -> List[str]:
    """
    Generate and store up to MAX_KEYS_PER_REQUEST new active keys.
    """
    keys = []
    try:
        for _ in range(clamp_quantity(quantity)):
            keys.append(_insert_unique_key(db, generator))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Issued {len(keys)} license keys")
    return keys


def list_license_keys(db: Session, limit: int = MAX_LIST_SIZE) -> List[LicenseKey]:
    """Most recent keys first"""
    return (
        db.query(LicenseKey)
        .order_by(LicenseKey.created_at.desc(), LicenseKey.id.desc())
        .limit(min(limit, MAX_LIST_SIZE))
        .all()
    )


def ensure_license_key(db: Session, key_value: str) -> bool:
    """
    Insert an active key unless it already exists. Returns True when inserted.
    """
    if db.query(LicenseKey.id).filter(LicenseKey.key_value == key_value).first() is not None:
        return False
    db.add(LicenseKey(key_value=key_value))
    db.flush()
    return True
