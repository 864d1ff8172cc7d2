"""User record models.

These are the persisted shapes of the users file. Field aliases are the
camelCase keys used on disk, so a file written by any earlier version of
the service stays readable.
"""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from tablematch.schemas.coercion import (
    DEFAULT_MIN_RATING,
    coerce_min_rating,
    coerce_tags,
    coerce_text,
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserRecord(BaseModel):
    """One registered account."""

    id: int
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    phone: str = ""
    password_hash: str = Field(..., alias="password")
    preferences: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list, alias="dietaryRestrictions")
    cuisine_types: list[str] = Field(default_factory=list, alias="cuisineTypes")
    price_range: str = Field("", alias="priceRange")
    min_rating: float = Field(DEFAULT_MIN_RATING, alias="minRating")
    has_preferences: bool = Field(False, alias="hasPreferences")
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt")

    class Config:
        populate_by_name = True
        # Keys written by other tools are carried through untouched
        extra = "allow"

    # Files written by older versions hold whatever clients sent
    @field_validator("first_name", "last_name", "phone", "price_range", mode="before")
    @classmethod
    def normalize_text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("preferences", "dietary_restrictions", "cuisine_types", mode="before")
    @classmethod
    def normalize_tags(cls, value: Any) -> list[str]:
        return coerce_tags(value)

    @field_validator("min_rating", mode="before")
    @classmethod
    def normalize_min_rating(cls, value: Any) -> float:
        return coerce_min_rating(value)

    @field_validator("has_preferences", mode="before")
    @classmethod
    def normalize_has_preferences(cls, value: Any) -> Any:
        return False if value is None else value

    def public_view(self) -> dict:
        """Full record as returned to callers, without the password hash."""
        return self.model_dump(by_alias=True, exclude={"password_hash"})

    def login_view(self) -> dict:
        """The subset of the record handed back on a successful login."""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "hasPreferences": self.has_preferences,
        }


class UserStoreData(BaseModel):
    """Snapshot of the whole users file."""

    users: list[UserRecord] = Field(default_factory=list)
    next_id: int = Field(1, alias="nextId")
    _placeholder: bool = PrivateAttr(default=False)

    class Config:
        populate_by_name = True

    @field_validator("next_id", mode="before")
    @classmethod
    def normalize_next_id(cls, value: Any) -> Any:
        return 1 if value is None else value

    @model_validator(mode="after")
    def check_next_id(self) -> "UserStoreData":
        """Keep nextId ahead of every id already handed out."""
        highest = max((user.id for user in self.users), default=0)
        if self.next_id <= highest:
            self.next_id = highest + 1
        return self

    @classmethod
    def placeholder(cls) -> "UserStoreData":
        """Empty snapshot standing in for a file that could not be read."""
        data = cls()
        data._placeholder = True
        return data

    @property
    def is_placeholder(self) -> bool:
        return self._placeholder

    def find_by_email(self, email: str) -> UserRecord | None:
        return next((user for user in self.users if user.email == email), None)

    def find_by_id(self, user_id: int) -> UserRecord | None:
        return next((user for user in self.users if user.id == user_id), None)

    def add_user(self, **fields) -> UserRecord:
        """Append a new record under the next free id and advance the counter."""
        user = UserRecord(id=self.next_id, **fields)
        self.users.append(user)
        self.next_id += 1
        return user

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
