"""Persisted models package."""
from tablematch.models.user import UserRecord, UserStoreData

__all__ = [
    "UserRecord",
    "UserStoreData",
]
