"""
Shared fixtures: in-memory stores, services and an API client.

The in-memory stores enforce uniqueness under a lock the same way the
database's unique constraints do, so the services can be exercised
without Postgres.
"""
import asyncio
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
import pytest
from fastapi.testclient import TestClient
from folio.modules.users.auth.passwords import PasswordHasher
from folio.modules.users.auth.tokens import TokenService
from folio.modules.users.domain.user import User
from folio.modules.users.domain.profile import Socials, Contact, Education, Skills
from folio.modules.users.exceptions import DuplicateKey
from folio.modules.users.repositories.base import IdentityStore, ProfileStore
from folio.modules.users.services.auth_service import AuthService, RegistrationData
from folio.modules.users.services.profile_service import ProfileService

TEST_SECRET = "test-secret-0123456789abcdefghijklmnop"


class InMemoryUserRepository(IdentityStore):
    def __init__(self):
        self.users: Dict[str, User] = {}
        self._lock = asyncio.Lock()

    async def find_by_username(self, username: str) -> Optional[User]:
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    async def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        user = await self.find_by_username(identifier)
        if user:
            return user
        for user in self.users.values():
            if user.email == identifier:
                return user
        return None

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def exists_by_email(self, email: str) -> bool:
        return any(u.email == email for u in self.users.values())

    async def exists_by_username(self, username: str) -> bool:
        return any(u.username == username for u in self.users.values())

    def _check_unique(self, user: User) -> None:
        for other in self.users.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise DuplicateKey("email")
            if other.username == user.username:
                raise DuplicateKey("username")

    async def create(self, user: User) -> str:
        async with self._lock:
            candidate = user.copy(id=uuid.uuid4().hex)
            self._check_unique(candidate)
            now = datetime.now(timezone.utc)
            self.users[candidate.id] = candidate.copy(created_at=now, updated_at=now)
            return candidate.id

    async def update(self, user: User) -> bool:
        async with self._lock:
            if user.id not in self.users:
                return False
            self._check_unique(user)
            self.users[user.id] = user.copy(updated_at=datetime.now(timezone.utc))
            return True

    async def delete(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    @asynccontextmanager
    async def transaction(self):
        yield


class InMemoryProfileRepository(ProfileStore):
    def __init__(self):
        self.socials: Dict[str, Socials] = {}
        self.contacts: Dict[str, Contact] = {}
        self.education: Dict[str, List[Education]] = {}
        self.skills: Dict[str, List[str]] = {}

    async def create_socials(self, user_id: str) -> None:
        self.socials.setdefault(user_id, Socials(user_id=user_id))

    async def find_socials(self, user_id: str) -> Optional[Socials]:
        return self.socials.get(user_id)

    async def update_socials(self, user_id: str, socials: Socials) -> None:
        self.socials[user_id] = socials

    async def create_contact(self, user_id: str) -> None:
        self.contacts.setdefault(user_id, Contact(user_id=user_id))

    async def find_contact(self, user_id: str) -> Optional[Contact]:
        return self.contacts.get(user_id)

    async def update_contact(self, user_id: str, contact: Contact) -> None:
        self.contacts[user_id] = contact

    async def find_education(self, user_id: str) -> List[Education]:
        return list(self.education.get(user_id, []))

    async def create_education(self, education: Education) -> Education:
        education.id = uuid.uuid4().hex
        self.education.setdefault(education.user_id, []).append(education)
        return education

    async def update_education(self, user_id: str, entries: List[Education]) -> List[Education]:
        self.education[user_id] = []
        return [await self.create_education(e) for e in entries]

    async def delete_education(self, user_id: str, education_id: str) -> bool:
        entries = self.education.get(user_id, [])
        remaining = [e for e in entries if e.id != education_id]
        self.education[user_id] = remaining
        return len(remaining) != len(entries)

    async def find_skills(self, user_id: str) -> Skills:
        return Skills(user_id=user_id, skills=list(self.skills.get(user_id, [])))

    async def add_skill(self, user_id: str, skill: str) -> None:
        skills = self.skills.setdefault(user_id, [])
        if skill not in skills:
            skills.append(skill)

    async def delete_skill(self, user_id: str, skill: str) -> bool:
        skills = self.skills.get(user_id, [])
        if skill not in skills:
            return False
        skills.remove(skill)
        return True

    async def delete_all(self, user_id: str) -> None:
        for table in (self.socials, self.contacts, self.education, self.skills):
            table.pop(user_id, None)


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def user_store():
    return InMemoryUserRepository()


@pytest.fixture
def profile_store():
    return InMemoryProfileRepository()


@pytest.fixture
def secret():
    return TEST_SECRET


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_service(secret):
    return TokenService(secret=secret)


@pytest.fixture
def hasher():
    # Minimum cost keeps the suite fast.
    return PasswordHasher(rounds=4)


@pytest.fixture
def auth_service(user_store, profile_store, hasher, token_service):
    return AuthService(users=user_store, profiles=profile_store, hasher=hasher, tokens=token_service)


@pytest.fixture
def profile_service(user_store, profile_store, token_service):
    return ProfileService(users=user_store, profiles=profile_store, tokens=token_service)


@pytest.fixture
def registration():
    def make(name="Ann", username="ann", email="ann@x.com", password="pw"):
        return RegistrationData(name=name, username=username, email=email, password=password)
    return make


@pytest.fixture
def client(auth_service, profile_service, token_service):
    """API client wired to the in-memory services; the database lifespan is not run."""
    from folio.app import app
    from folio.modules.users.auth.middleware import (
        get_auth_service,
        get_profile_service,
        get_token_service,
    )

    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_token_service] = lambda: token_service
    yield TestClient(app)
    app.dependency_overrides.clear()
