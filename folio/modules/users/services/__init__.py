"""
Business Logic Services

Services contain business logic and orchestrate repository calls.
"""

from .auth_service import AuthService, AuthResult, RegistrationData
from .profile_service import ProfileService, ProfileChanges, ProfileUpdateResult

__all__ = [
    "AuthService",
    "AuthResult",
    "RegistrationData",
    "ProfileService",
    "ProfileChanges",
    "ProfileUpdateResult",
]
