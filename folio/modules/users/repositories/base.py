"""
Store Contracts

Abstract persistence contracts consumed by the services. Concrete
implementations own the storage technology; services only see these.

Lookups are exact-match: usernames and emails are compared as stored,
without case folding.
"""
from abc import ABC, abstractmethod
from typing import AsyncContextManager, List, Optional
from folio.modules.users.domain.user import User
from folio.modules.users.domain.profile import Socials, Contact, Education, Skills


class IdentityStore(ABC):
    """Persistence contract for user records and uniqueness checks."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        ...

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        ...

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        ...

    @abstractmethod
    async def create(self, user: User) -> str:
        """
        Insert a user and return its assigned id.

        Must raise DuplicateKey when username or email collides, even if a
        concurrent insert slipped past the caller's pre-check.
        """

    @abstractmethod
    async def update(self, user: User) -> bool:
        """Replace the mutable fields of an existing user. False if no row matched."""

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Hard delete a user. False if no row matched."""

    @abstractmethod
    def transaction(self) -> AsyncContextManager:
        """Unit of work spanning identity and profile writes."""


class ProfileStore(ABC):
    """Persistence contract for a user's dependent records."""

    # Socials
    @abstractmethod
    async def create_socials(self, user_id: str) -> None:
        ...

    @abstractmethod
    async def find_socials(self, user_id: str) -> Optional[Socials]:
        ...

    @abstractmethod
    async def update_socials(self, user_id: str, socials: Socials) -> None:
        ...

    # Contact
    @abstractmethod
    async def create_contact(self, user_id: str) -> None:
        ...

    @abstractmethod
    async def find_contact(self, user_id: str) -> Optional[Contact]:
        ...

    @abstractmethod
    async def update_contact(self, user_id: str, contact: Contact) -> None:
        ...

    # Education
    @abstractmethod
    async def find_education(self, user_id: str) -> List[Education]:
        ...

    @abstractmethod
    async def create_education(self, education: Education) -> Education:
        ...

    @abstractmethod
    async def update_education(self, user_id: str, entries: List[Education]) -> List[Education]:
        """Replace the whole education list of a user."""

    @abstractmethod
    async def delete_education(self, user_id: str, education_id: str) -> bool:
        ...

    # Skills
    @abstractmethod
    async def find_skills(self, user_id: str) -> Skills:
        ...

    @abstractmethod
    async def add_skill(self, user_id: str, skill: str) -> None:
        """Add a skill; adding one that is already present is a no-op."""

    @abstractmethod
    async def delete_skill(self, user_id: str, skill: str) -> bool:
        ...

    @abstractmethod
    async def delete_all(self, user_id: str) -> None:
        """Remove every child record of a user."""
