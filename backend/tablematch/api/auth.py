"""Authentication and preferences API endpoints."""
from fastapi import APIRouter, Depends, status

from tablematch.database import UserStore, get_store
from tablematch.schemas.auth import (
    FailureResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    PreferencesRequest,
    SignupRequest,
    SignupResponse,
    UserResponse,
)
from tablematch.services import account_service

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": FailureResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": FailureResponse},
        status.HTTP_404_NOT_FOUND: {"model": FailureResponse},
    },
)


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, store: UserStore = Depends(get_store)):
    """Register a new account."""
    user_id = account_service.create_account(
        store,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        phone=payload.phone,
        password=payload.password,
        confirm_password=payload.confirm_password,
    )
    return SignupResponse(message="Account created successfully!", user_id=user_id)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, store: UserStore = Depends(get_store)):
    """Check email and password."""
    user = account_service.login(store, payload.email, payload.password)
    return LoginResponse(
        message="Login successful!",
        user=LoginUser(
            id=user["id"],
            first_name=user["firstName"],
            last_name=user["lastName"],
            email=user["email"],
            has_preferences=user["hasPreferences"],
        ),
    )


@router.post("/preferences", response_model=UserResponse)
def update_preferences(payload: PreferencesRequest, store: UserStore = Depends(get_store)):
    """Save the user's dining preferences."""
    user = account_service.update_preferences(
        store,
        payload.user_id,
        preferences=payload.preferences,
        dietary_restrictions=payload.dietary_restrictions,
        cuisine_types=payload.cuisine_types,
        price_range=payload.price_range,
        min_rating=payload.min_rating,
    )
    return UserResponse(message="Preferences updated!", user=user)
