"""
Authentication Module

Provides:
- Password hashing
- Token issuance and verification
- Authentication dependencies
"""

from .passwords import PasswordHasher, hash_password, verify_password
from .tokens import TokenService, TokenPayload

__all__ = [
    "PasswordHasher",
    "hash_password",
    "verify_password",
    "TokenService",
    "TokenPayload",
]
