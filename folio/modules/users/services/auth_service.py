"""
Auth Service

Registration, sign-in and bearer-token authentication.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from folio.modules.users.domain.user import User, PublicUser
from folio.modules.users.auth.passwords import PasswordHasher
from folio.modules.users.auth.tokens import TokenService, TokenPayload
from folio.modules.users.repositories.base import IdentityStore, ProfileStore
from folio.modules.users.exceptions import (
    AuthenticationFailed,
    DuplicateIdentity,
    DuplicateKey,
    InvalidToken,
    Unauthorized,
    UserNotFound,
)

logger = logging.getLogger("folio.users.auth_service")

BEARER_PREFIX = "bearer "


@dataclass
class RegistrationData:
    name: str
    username: str
    email: str
    password: str
    description: str = ""


@dataclass
class AuthResult:
    """Outcome of a successful registration or sign-in."""
    token: str
    payload: TokenPayload
    user: PublicUser

    def to_dict(self, message: str) -> dict:
        return {
            "success": True,
            "message": message,
            "token": self.token,
            "user": self.user.to_dict(),
        }


def extract_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an Authorization header value.

    The raw token is accepted as-is; a leading "Bearer " scheme is stripped.
    """
    if not authorization or not authorization.strip():
        raise Unauthorized("Authorization token required")
    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    if not value:
        raise Unauthorized("Authorization token required")
    return value


class AuthService:
    """Service for account registration and authentication."""

    def __init__(
        self,
        users: IdentityStore,
        profiles: ProfileStore,
        hasher: PasswordHasher,
        tokens: TokenService
    ):
        self.users = users
        self.profiles = profiles
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, data: RegistrationData) -> AuthResult:
        """
        Create a user with empty socials and contact rows and sign them in.

        The existence checks are a fast path only; the store's unique
        constraints decide, and a DuplicateKey from create is reported the
        same way as a failed pre-check.
        """
        logger.debug(f"[AuthService.register] username={data.username}")

        if await self.users.exists_by_email(data.email):
            raise DuplicateIdentity("email")
        if await self.users.exists_by_username(data.username):
            raise DuplicateIdentity("username")

        password_hash = await self.hasher.hash(data.password)
        user = User(
            id=None,
            name=data.name,
            username=data.username,
            email=data.email,
            password_hash=password_hash,
            description=data.description or "",
        )

        try:
            async with self.users.transaction():
                user.id = await self.users.create(user)
                await self.profiles.create_socials(user.id)
                await self.profiles.create_contact(user.id)
        except DuplicateKey as e:
            logger.info(f"[AuthService.register] lost uniqueness race on {e.field}")
            raise DuplicateIdentity(e.field or "username") from e

        stored = await self.users.find_by_id(user.id)
        if stored is not None:
            user = stored

        logger.info(f"[AuthService.register] User created: {user.id}")
        return self._issue(user)

    async def sign_in(self, username_or_email: str, password: str) -> AuthResult:
        """Check credentials; unknown identity and wrong password look the same."""
        logger.debug("[AuthService.sign_in] attempt")

        user = await self.users.find_by_username_or_email(username_or_email)
        if user is None:
            logger.warning("[AuthService.sign_in] unknown identity")
            raise AuthenticationFailed("Invalid credentials")

        if not await self.hasher.verify(password, user.password_hash):
            logger.warning(f"[AuthService.sign_in] wrong password for user {user.id}")
            raise AuthenticationFailed("Invalid credentials")

        return self._issue(user)

    async def authenticate(self, authorization: Optional[str]) -> User:
        """Resolve the user behind a bearer token, or raise Unauthorized."""
        token = extract_token(authorization)
        try:
            payload = self.tokens.verify_token(token)
        except InvalidToken as e:
            logger.warning(f"[AuthService.authenticate] rejected token: {type(e).__name__}")
            raise Unauthorized("Invalid token") from e

        user = await self.users.find_by_username(payload.username)
        if user is None:
            raise Unauthorized("Token subject no longer exists")
        return user

    async def get_user(self, user_id: str) -> User:
        """Get user by ID; raises UserNotFound."""
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFound(f"User {user_id} not found")
        return user

    def _issue(self, user: User) -> AuthResult:
        token, payload = self.tokens.create_token(user.username, user.id)
        return AuthResult(token=token, payload=payload, user=user.to_public())
