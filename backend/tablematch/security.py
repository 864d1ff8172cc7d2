"""Password hashing helpers."""
import logging

import bcrypt

from tablematch.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(
            _encode(plain_password),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return bcrypt.hashpw(
        _encode(password),
        bcrypt.gensalt(rounds=settings.bcrypt_rounds),
    ).decode("utf-8")
