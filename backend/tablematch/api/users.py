"""User lookup API endpoints."""
from fastapi import APIRouter, Depends, status

from tablematch.database import UserStore, get_store
from tablematch.schemas.auth import FailureResponse, UserLookupResponse
from tablematch.services import account_service

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={status.HTTP_404_NOT_FOUND: {"model": FailureResponse}},
)


@router.get("/{user_id}", response_model=UserLookupResponse)
def get_user(user_id: str, store: UserStore = Depends(get_store)):
    """Get a user's profile and preferences."""
    return UserLookupResponse(user=account_service.get_user(store, user_id))
