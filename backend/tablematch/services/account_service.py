"""Account business rules: signup, login, and dining preferences.

Every operation takes the ``UserStore`` it works against, loads the full
snapshot, and (for mutations) writes it back through ``UserStore.mutate``.
Failures are raised as ``AccountError`` subclasses.
"""
import logging
import re
from typing import Any

from tablematch.config import get_settings
from tablematch.database import UserStore
from tablematch.errors import AuthError, ErrorCode, NotFoundError, ValidationError
from tablematch.schemas.coercion import (
    coerce_min_rating,
    coerce_price_range,
    coerce_tags,
    coerce_user_id,
)
from tablematch.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def create_account(
    store: UserStore,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    phone: str | None,
    password: str | None,
    confirm_password: str | None,
) -> int:
    """Register a new account and return its id.

    Checks run in a fixed order and the first failure is reported:
    name, email format, password length, password confirmation, and
    finally email uniqueness.
    """
    first_name = (first_name or "").strip()
    last_name = (last_name or "").strip()
    if not first_name or not last_name:
        raise ValidationError(ErrorCode.INVALID_NAME)

    if not is_valid_email(email):
        raise ValidationError(ErrorCode.INVALID_EMAIL)

    min_length = settings.min_password_length
    if not password or len(password) < min_length:
        raise ValidationError(ErrorCode.WEAK_PASSWORD, min_length=min_length)

    if password != confirm_password:
        raise ValidationError(ErrorCode.PASSWORD_MISMATCH)

    password_hash = get_password_hash(password)

    with store.mutate() as data:
        if data.find_by_email(email):
            raise ValidationError(ErrorCode.EMAIL_TAKEN)

        user = data.add_user(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone or "",
            password_hash=password_hash,
            min_rating=settings.default_min_rating,
        )

    logger.info(f"Created account {user.id}")
    return user.id


def login(store: UserStore, email: str | None, password: str | None) -> dict:
    """Check credentials and return the user summary."""
    if not email or not password:
        raise ValidationError(ErrorCode.MISSING_CREDENTIALS)

    user = store.load().find_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Rejected login attempt")
        raise AuthError(ErrorCode.INVALID_CREDENTIALS)

    return user.login_view()


def update_preferences(
    store: UserStore,
    user_id: Any,
    preferences: Any = None,
    dietary_restrictions: Any = None,
    cuisine_types: Any = None,
    price_range: Any = None,
    min_rating: Any = None,
) -> dict:
    """Overwrite a user's dining preferences.

    Tag fields that are not lists are stored as empty lists, a missing
    price range as an empty string, and a missing or zero rating as the
    configured default. The user is marked as having chosen preferences.
    """
    if user_id is None or user_id == "" or user_id == 0:
        raise ValidationError(ErrorCode.MISSING_USER_ID)

    parsed_id = coerce_user_id(user_id)

    with store.mutate() as data:
        user = data.find_by_id(parsed_id) if parsed_id is not None else None
        if not user:
            raise NotFoundError(ErrorCode.USER_NOT_FOUND)

        user.preferences = coerce_tags(preferences)
        user.dietary_restrictions = coerce_tags(dietary_restrictions)
        user.cuisine_types = coerce_tags(cuisine_types)
        user.price_range = coerce_price_range(price_range)
        user.min_rating = coerce_min_rating(min_rating, settings.default_min_rating)
        user.has_preferences = True

    logger.info(f"Updated preferences for user {user.id}")
    return user.public_view()


def get_user(store: UserStore, user_id: Any) -> dict:
    """Look up a user by id."""
    parsed_id = coerce_user_id(user_id)
    user = store.load().find_by_id(parsed_id) if parsed_id is not None else None
    if not user:
        raise NotFoundError(ErrorCode.USER_NOT_FOUND)
    return user.public_view()
