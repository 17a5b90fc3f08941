"""
Registration and login
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contactbook.core.config import Settings
from contactbook.core.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidLicenseError,
    ValidationError,
)
from contactbook.core.security import create_access_token, hash_password, verify_password
from contactbook.models import LicenseKey, LicenseKeyStatus, User

logger = logging.getLogger(__name__)


def register_user(db: Session, settings: Settings, email: str, password: str, license_key: str) -> User:
    """
    Redeem a license key and create the account.

    Key validation, user insert and key redemption share one transaction and
    the key row is locked, so a key can never be redeemed twice.
    """
    email = (email or "").strip()
    if not email or not password or not license_key:
        raise ValidationError("All fields are required")

    # Hash outside the transaction so the key row is not locked during it
    password_hash = hash_password(password, settings.BCRYPT_ROUNDS)

    try:
        key = (
            db.query(LicenseKey)
            .filter(
                LicenseKey.key_value == license_key,
                LicenseKey.status == LicenseKeyStatus.ACTIVE.value,
            )
            .with_for_update()
            .first()
        )
        if key is None:
            raise InvalidLicenseError()

        if db.query(User.id).filter(User.email == email).first() is not None:
            raise DuplicateUserError()

        user = User(
            email=email,
            password_hash=password_hash,
            license_key=license_key,
        )
        db.add(user)
        key.redeem(email)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Registration for {email} lost a uniqueness race")
        raise DuplicateUserError()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Registered user {user.id} ({email}) with license key {license_key}")
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Check credentials. Unknown email and wrong password are reported the same way.
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == email.strip()).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info(f"Failed login attempt for {email}")
        raise InvalidCredentialsError()
    return user


def login(db: Session, settings: Settings, email: str, password: str) -> dict:
    user = authenticate_user(db, email, password)
    token = create_access_token(
        user.id,
        user.email,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expires_minutes=settings.JWT_EXPIRE_MINUTES,
    )
    return {"token": token, "user": user.to_dict()}
