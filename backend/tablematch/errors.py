"""Account error taxonomy.

Every failure an account operation can report is an ``AccountError``
carrying a stable ``ErrorCode``, the user-facing message, and the HTTP
status the API layer answers with.
"""
from enum import Enum

from fastapi import status


class ErrorCode(str, Enum):
    """Stable identifiers for account failures."""

    INVALID_NAME = "InvalidName"
    INVALID_EMAIL = "InvalidEmail"
    WEAK_PASSWORD = "WeakPassword"
    PASSWORD_MISMATCH = "PasswordMismatch"
    EMAIL_TAKEN = "EmailTaken"
    MISSING_CREDENTIALS = "MissingCredentials"
    INVALID_CREDENTIALS = "InvalidCredentials"
    MISSING_USER_ID = "MissingUserId"
    USER_NOT_FOUND = "UserNotFound"
    INVALID_REQUEST = "InvalidRequest"
    STORE_UNAVAILABLE = "StoreUnavailable"


MESSAGES = {
    ErrorCode.INVALID_NAME: "Please enter your first and last name",
    ErrorCode.INVALID_EMAIL: "Invalid email address",
    ErrorCode.WEAK_PASSWORD: "Password must be at least {min_length} characters",
    ErrorCode.PASSWORD_MISMATCH: "Passwords do not match",
    ErrorCode.EMAIL_TAKEN: "This email is already registered",
    ErrorCode.MISSING_CREDENTIALS: "Please enter your email and password",
    ErrorCode.INVALID_CREDENTIALS: "Incorrect email or password",
    ErrorCode.MISSING_USER_ID: "Missing userId",
    ErrorCode.USER_NOT_FOUND: "User not found",
    ErrorCode.INVALID_REQUEST: "Invalid request",
    ErrorCode.STORE_UNAVAILABLE: "User data is temporarily unavailable",
}


class AccountError(Exception):
    """Base class for failures reported back to the caller."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, code: ErrorCode, **params):
        self.code = code
        self.message = MESSAGES[code].format(**params)
        super().__init__(self.message)


class ValidationError(AccountError):
    """Malformed or missing input."""


class NotFoundError(AccountError):
    """Unknown user id."""

    status_code = status.HTTP_404_NOT_FOUND


class AuthError(AccountError):
    """Credential mismatch.

    Raised for both an unknown email and a wrong password so callers
    cannot tell which one failed.
    """

    status_code = status.HTTP_401_UNAUTHORIZED


class PersistenceError(Exception):
    """Durable read or write of the user store failed."""
