"""
User Accounts - Exceptions
"""
from typing import Optional


class UserAccountError(Exception):
    """Base exception for user account errors"""
    pass


class HashingFailed(UserAccountError):
    """Raised when a password could not be hashed"""
    pass


class InvalidHashFormat(UserAccountError):
    """Raised when a stored password hash is not a valid bcrypt hash"""
    pass


class InvalidToken(UserAccountError):
    """Raised when a token fails verification"""
    pass


class InvalidSignature(InvalidToken):
    """Raised when a token signature does not match"""
    pass


class TokenExpired(InvalidToken):
    """Raised when a token is past its expiry"""
    pass


class MalformedToken(InvalidToken):
    """Raised when a token is structurally invalid"""
    pass


class DuplicateKey(UserAccountError):
    """Raised by a store when a write violates a uniqueness constraint"""

    def __init__(self, field: Optional[str] = None, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Duplicate value for {field or 'unique key'}")


class DuplicateIdentity(UserAccountError):
    """Raised when a username or email is already taken"""

    MESSAGES = {
        "email": "User with the same email already exists",
        "username": "User with the same username already exists",
    }

    def __init__(self, field: str):
        self.field = field
        self.message = self.MESSAGES.get(field, "User already exists")
        super().__init__(self.message)


class AuthenticationFailed(UserAccountError):
    """Failed to authenticate user with provided credentials"""
    pass


class Unauthorized(UserAccountError):
    """Raised when a request carries no valid token"""
    pass


class UserNotFound(UserAccountError):
    """Raised when a user does not exist"""
    pass


class RecordNotFound(UserAccountError):
    """Raised when a profile child record does not exist for the user"""
    pass
