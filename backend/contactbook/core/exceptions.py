"""
Domain exceptions raised by services and mapped to JSON error responses
"""


class ContactBookError(Exception):
    """Base class for errors that are safe to report to the client"""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ContactBookError):
    """Missing or malformed input"""
    status_code = 400
    message = "Invalid request"


class InvalidLicenseError(ValidationError):
    message = "Invalid license key"


class ConflictError(ContactBookError):
    """Uniqueness violation"""
    status_code = 400
    message = "Resource already exists"


class DuplicateUserError(ConflictError):
    message = "User already exists"


class DuplicateTagError(ConflictError):
    message = "Tag already exists"


class DuplicateLicenseKeyError(ConflictError):
    message = "Could not generate a unique license key"


class AuthError(ContactBookError):
    status_code = 401
    message = "Authentication failed"


class MissingTokenError(AuthError):
    message = "Access token required"


class InvalidTokenError(AuthError):
    status_code = 403
    message = "Invalid token"


class InvalidCredentialsError(AuthError):
    message = "Invalid credentials"


class UnauthorizedError(AuthError):
    message = "Invalid admin password"


class NotFoundError(ContactBookError):
    """Resource absent or owned by another user"""
    status_code = 404
    message = "Not found"


class InternalError(ContactBookError):
    pass
