"""Account request and response schemas."""
from typing import Any

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Account registration request.

    Every field is optional at this level; missing values are reported
    by the account service with a specific message.
    """

    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    email: str | None = None
    phone: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(None, alias="confirmPassword")

    class Config:
        populate_by_name = True


class LoginRequest(BaseModel):
    """Login request."""

    email: str | None = None
    password: str | None = None


class PreferencesRequest(BaseModel):
    """Dining preferences update.

    Values are accepted as sent and coerced by the account service.
    """

    user_id: Any = Field(None, alias="userId")
    preferences: Any = None
    dietary_restrictions: Any = Field(None, alias="dietaryRestrictions")
    cuisine_types: Any = Field(None, alias="cuisineTypes")
    price_range: Any = Field(None, alias="priceRange")
    min_rating: Any = Field(None, alias="minRating")

    class Config:
        populate_by_name = True


class LoginUser(BaseModel):
    """User summary returned on login."""

    id: int
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")
    email: str
    has_preferences: bool = Field(..., serialization_alias="hasPreferences")


class SignupResponse(BaseModel):
    success: bool = True
    message: str
    user_id: int = Field(..., serialization_alias="userId")


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: LoginUser


class UserResponse(BaseModel):
    """Response carrying a full user record (never the password hash)."""

    success: bool = True
    message: str
    user: dict[str, Any]


class UserLookupResponse(BaseModel):
    success: bool = True
    user: dict[str, Any]


class FailureResponse(BaseModel):
    """Generic failure response."""

    success: bool = False
    message: str


class HealthResponse(BaseModel):
    status: str = "Server is running"
