"""
Authentication utilities: password hashing, JWT issuance/verification
and the FastAPI dependencies guarding user and admin routes
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from contactbook.core.config import Settings
from contactbook.core.exceptions import InvalidTokenError, MissingTokenError, UnauthorizedError
from contactbook.schemas.auth import Identity

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing tokens are reported by us, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_HEADER = "admin-password"


# -----------------------------------------------------------------------------
# Password Hashing
# -----------------------------------------------------------------------------

@lru_cache(maxsize=None)
def get_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(raw_password: str, rounds: int = 12) -> str:
    """
    Hash a plaintext password using bcrypt.
    """
    return get_password_context(rounds).hash(raw_password)


def verify_password(raw_password: str, hashed_password: str) -> bool:
    """
    Verify that a raw password matches its hashed stored version.
    Malformed hashes count as a mismatch.
    """
    try:
        return get_password_context().verify(raw_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


# -----------------------------------------------------------------------------
# JWT Token Handling
# -----------------------------------------------------------------------------

def create_access_token(
    user_id: int,
    email: str,
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int = 1440,
) -> str:
    """
    Create a signed token carrying the user id and email.
    """
    expire_at = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"user_id": user_id, "email": email, "exp": expire_at}
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def verify_token(raw: str, secret: str, algorithm: str = "HS256") -> Identity:
    """
    Validate signature and expiry and return the identity the token carries.

    Raises:
        InvalidTokenError: bad signature, expired, or missing claims
    """
    try:
        payload = jwt.decode(raw, secret, algorithms=[algorithm])
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise InvalidTokenError()

    user_id = payload.get("user_id")
    email = payload.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidTokenError()

    return Identity(user_id=user_id, email=email)


# -----------------------------------------------------------------------------
# Request Dependencies
# -----------------------------------------------------------------------------

def get_settings_from_request(request: Request) -> Settings:
    return request.app.state.settings


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_from_request),
) -> Identity:
    """
    Extract and verify the bearer token from the Authorization header.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    return verify_token(credentials.credentials, settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM)


def require_admin(request: Request, settings: Settings = Depends(get_settings_from_request)) -> None:
    """
    Compare the admin-password header against the configured secret.
    With no secret configured every admin request is refused.
    """
    supplied = request.headers.get(ADMIN_HEADER)
    expected = settings.ADMIN_PASSWORD
    if not expected or supplied is None:
        raise UnauthorizedError()
    if not hmac.compare_digest(supplied.encode(), expected.encode()):
        logger.warning(f"Rejected admin request from {request.client.host if request.client else 'unknown'}")
        raise UnauthorizedError()
