"""
Authentication Middleware

FastAPI dependencies for services and the authenticated user.
"""
import logging
from functools import lru_cache
from typing import Optional
from fastapi import HTTPException, Header, Depends
from folio.modules.settings import get_settings
from folio.modules.users.domain.user import User
from folio.modules.users.auth.passwords import PasswordHasher
from folio.modules.users.auth.tokens import TokenService
from folio.modules.users.repositories.user_repository import UserRepository
from folio.modules.users.repositories.profile_repository import ProfileRepository
from folio.modules.users.services.auth_service import AuthService
from folio.modules.users.services.profile_service import ProfileService
from folio.modules.users.exceptions import Unauthorized

logger = logging.getLogger("folio.users.auth")


# Singleton instances
@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        default_ttl=settings.token_ttl,
    )


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    return AuthService(
        users=UserRepository(),
        profiles=ProfileRepository(),
        hasher=PasswordHasher(rounds=get_settings().bcrypt_rounds),
        tokens=get_token_service(),
    )


@lru_cache(maxsize=1)
def get_profile_service() -> ProfileService:
    return ProfileService(
        users=UserRepository(),
        profiles=ProfileRepository(),
        tokens=get_token_service(),
    )


async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    FastAPI dependency to get current authenticated user.

    Raises HTTPException 401 if the token is missing, invalid, expired,
    or names a user that no longer exists.
    """
    try:
        return await auth_service.authenticate(authorization)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))
