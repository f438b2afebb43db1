"""
User Domain Model

Pure data model representing a registered identity, plus the projection
that is safe to hand to clients.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass
class PublicUser:
    """External view of a user. Never carries the password hash."""
    id: str
    name: str
    username: str
    email: str
    description: str
    avatar: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert PublicUser to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "description": self.description,
            "avatar": self.avatar,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class User:
    """User domain model."""
    id: Optional[str]
    name: str
    username: str
    email: str
    password_hash: str
    description: str = ""
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create User from dictionary (e.g., from database row)."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            description=data.get("description") or "",
            avatar=data.get("avatar"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_public(self) -> PublicUser:
        """Project to the client-facing view."""
        return PublicUser(
            id=self.id,
            name=self.name,
            username=self.username,
            email=self.email,
            description=self.description,
            avatar=self.avatar,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def copy(self, **changes) -> "User":
        return replace(self, **changes)
