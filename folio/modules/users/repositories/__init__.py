"""
Data Access Layer (Repositories)

Repositories handle all database interactions.
"""

from .base import IdentityStore, ProfileStore
from .user_repository import UserRepository
from .profile_repository import ProfileRepository

__all__ = [
    "IdentityStore",
    "ProfileStore",
    "UserRepository",
    "ProfileRepository",
]
