"""
User Repository

Handles all database operations for the users table.
"""
import logging
import uuid
from typing import Optional, Dict, Any
from asyncpg.exceptions import UniqueViolationError
from databases import Database
from folio.modules.users.domain.user import User
from folio.modules.users.exceptions import DuplicateKey
from folio.modules.users.repositories.base import IdentityStore

logger = logging.getLogger("folio.users.repository")

USER_COLUMNS = "id, name, username, email, password_hash, description, avatar, created_at, updated_at"


def row_to_dict(row: Any) -> Dict[str, Any]:
    """Convert a database record to a plain dict."""
    mapping = getattr(row, "_mapping", None)
    return dict(mapping) if mapping is not None else dict(row)


def duplicate_field(error: Exception) -> Optional[str]:
    """Work out which unique column a UniqueViolationError refers to."""
    hint = getattr(error, "constraint_name", None) or str(error)
    for field in ("email", "username"):
        if field in hint:
            return field
    return None


class UserRepository(IdentityStore):
    """Repository for user data access."""

    def __init__(self, db: Optional[Database] = None):
        if db is None:
            from folio.modules.database import database
            db = database
        self.db = db

    async def _fetch_user(self, where: str, values: Dict[str, Any]) -> Optional[User]:
        query = f"SELECT {USER_COLUMNS} FROM users WHERE {where}"
        row = await self.db.fetch_one(query, values)
        if not row:
            return None
        return User.from_dict(row_to_dict(row))

    async def find_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        return await self._fetch_user("username = :username", {"username": username})

    async def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        """Get user whose username or email equals identifier."""
        return await self._fetch_user(
            "username = :identifier OR email = :identifier "
            "ORDER BY (username = :identifier) DESC LIMIT 1",
            {"identifier": identifier}
        )

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        return await self._fetch_user("id = :user_id", {"user_id": user_id})

    async def exists_by_email(self, email: str) -> bool:
        query = "SELECT EXISTS(SELECT 1 FROM users WHERE email = :email)"
        return bool(await self.db.fetch_val(query, {"email": email}))

    async def exists_by_username(self, username: str) -> bool:
        query = "SELECT EXISTS(SELECT 1 FROM users WHERE username = :username)"
        return bool(await self.db.fetch_val(query, {"username": username}))

    async def create(self, user: User) -> str:
        """Create a new user and return its id."""
        user_id = uuid.uuid4().hex
        query = """
            INSERT INTO users (id, name, username, email, password_hash, description, avatar)
            VALUES (:id, :name, :username, :email, :password_hash, :description, :avatar)
        """
        try:
            await self.db.execute(query, {
                "id": user_id,
                "name": user.name,
                "username": user.username,
                "email": user.email,
                "password_hash": user.password_hash,
                "description": user.description,
                "avatar": user.avatar,
            })
        except UniqueViolationError as e:
            field = duplicate_field(e)
            logger.info(f"[UserRepository.create] unique violation on {field}")
            raise DuplicateKey(field) from e
        return user_id

    async def update(self, user: User) -> bool:
        """Replace the mutable fields of a user."""
        query = """
            UPDATE users
            SET name = :name, username = :username, email = :email,
                description = :description, avatar = :avatar,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = :id
            RETURNING id
        """
        try:
            updated = await self.db.fetch_val(query, {
                "id": user.id,
                "name": user.name,
                "username": user.username,
                "email": user.email,
                "description": user.description,
                "avatar": user.avatar,
            })
        except UniqueViolationError as e:
            raise DuplicateKey(duplicate_field(e)) from e
        return updated is not None

    async def delete(self, user_id: str) -> bool:
        """Hard delete user; child rows go with it via ON DELETE CASCADE."""
        query = "DELETE FROM users WHERE id = :user_id RETURNING id"
        deleted = await self.db.fetch_val(query, {"user_id": user_id})
        return deleted is not None

    def transaction(self):
        return self.db.transaction()
