"""
Token Service

Issues and verifies signed, expiring identity tokens (HS256 JWTs).
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple
import jwt
from folio.modules.users.exceptions import InvalidSignature, TokenExpired, MalformedToken

logger = logging.getLogger("folio.users.tokens")

REQUIRED_CLAIMS = ["sub", "uid", "iat", "exp"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenPayload:
    """Verified contents of a token."""
    username: str
    user_id: str
    issued_at: datetime
    expired_at: datetime

    def to_claims(self) -> dict:
        return {
            "sub": self.username,
            "uid": self.user_id,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expired_at.timestamp()),
        }


class TokenService:
    """
    Creates and verifies tokens with a process-wide signing key.

    Verification is a pure classification: valid, expired, or invalid.
    There is no server-side revocation state.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(hours=24),
        clock: Optional[Callable[[], datetime]] = None
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.default_ttl = default_ttl
        self.clock = clock or utcnow

    def create_token(
        self,
        username: str,
        user_id: str,
        ttl: Optional[timedelta] = None
    ) -> Tuple[str, TokenPayload]:
        """Create a token bound to username and user id, expiring at now + ttl."""
        ttl = self.default_ttl if ttl is None else ttl
        if ttl < timedelta(0):
            raise ValueError("Token ttl must not be negative")

        issued_at = self.clock().replace(microsecond=0)
        payload = TokenPayload(
            username=username,
            user_id=str(user_id),
            issued_at=issued_at,
            expired_at=issued_at + ttl,
        )
        token = jwt.encode(payload.to_claims(), self._secret, algorithm=self.algorithm)
        return token, payload

    def verify_token(self, token: str) -> TokenPayload:
        """
        Check the signature, then the expiry, and return the payload.

        Raises InvalidSignature, TokenExpired or MalformedToken.
        """
        if not isinstance(token, str) or not token:
            raise MalformedToken("Token is empty")

        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignature("Token signature does not match") from e
        except jwt.InvalidTokenError as e:
            raise MalformedToken(f"Not a valid token: {e}") from e

        try:
            payload = TokenPayload(
                username=str(data["sub"]),
                user_id=str(data["uid"]),
                issued_at=datetime.fromtimestamp(int(data["iat"]), tz=timezone.utc),
                expired_at=datetime.fromtimestamp(int(data["exp"]), tz=timezone.utc),
            )
        except (TypeError, ValueError, OverflowError) as e:
            raise MalformedToken(f"Invalid token claims: {e}") from e

        # The expiry instant itself already counts as expired, so a zero ttl never verifies.
        if self.clock() >= payload.expired_at:
            raise TokenExpired("Token has expired")

        return payload
