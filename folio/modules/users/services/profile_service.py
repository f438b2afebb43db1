"""
Profile Service

Business logic for authenticated profile changes: the user record itself
and its socials, contact, education and skills.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional
from folio.modules.users.domain.user import User, PublicUser
from folio.modules.users.domain.profile import Socials, Contact, Education, Skills
from folio.modules.users.auth.tokens import TokenService
from folio.modules.users.repositories.base import IdentityStore, ProfileStore
from folio.modules.users.exceptions import DuplicateIdentity, DuplicateKey, RecordNotFound

logger = logging.getLogger("folio.users.profile_service")

EDITABLE_FIELDS = ("name", "username", "email", "description")


@dataclass
class ProfileChanges:
    """Partial update; None and "" both mean "leave unchanged"."""
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None

    def supplied(self) -> Dict[str, str]:
        values = {f: getattr(self, f) for f in EDITABLE_FIELDS}
        return {k: v for k, v in values.items() if v}


@dataclass
class ProfileUpdateResult:
    success: bool
    message: str
    user: Optional[PublicUser] = None
    token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"success": self.success, "message": self.message}
        if self.user is not None:
            data["user"] = self.user.to_dict()
        if self.token is not None:
            data["token"] = self.token
        return data


class ProfileService:
    """Service for profile business logic."""

    def __init__(self, users: IdentityStore, profiles: ProfileStore, tokens: TokenService):
        self.users = users
        self.profiles = profiles
        self.tokens = tokens

    async def update_profile(self, user: User, changes: ProfileChanges) -> ProfileUpdateResult:
        """
        Apply a partial update to the user record.

        Raises DuplicateIdentity, without writing anything, when a new
        username or email is already taken.
        """
        supplied = changes.supplied()
        logger.debug(f"[ProfileService.update_profile] user_id={user.id}, fields={list(supplied.keys())}")

        new_username = supplied.get("username")
        if new_username and new_username != user.username:
            if await self.users.exists_by_username(new_username):
                raise DuplicateIdentity("username")

        new_email = supplied.get("email")
        if new_email and new_email != user.email:
            if await self.users.exists_by_email(new_email):
                raise DuplicateIdentity("email")

        updated = user.copy(**supplied)
        if updated == user:
            return ProfileUpdateResult(True, "Profile updated successfully", user.to_public())

        try:
            success = await self.users.update(updated)
        except DuplicateKey as e:
            raise DuplicateIdentity(e.field or "username") from e

        if not success:
            logger.error(f"[ProfileService.update_profile] no row updated for user_id={user.id}")
            return ProfileUpdateResult(False, "Failed to update profile")

        token = None
        if updated.username != user.username:
            # Tokens are resolved by username, so the old one stops working.
            token, _ = self.tokens.create_token(updated.username, updated.id)

        logger.info(f"[ProfileService.update_profile] updated user_id={user.id}")
        return ProfileUpdateResult(True, "Profile updated successfully", updated.to_public(), token)

    async def update_avatar(self, user: User, avatar: str) -> ProfileUpdateResult:
        """Point the user's avatar at a stored image reference."""
        updated = user.copy(avatar=avatar or None)
        if not await self.users.update(updated):
            return ProfileUpdateResult(False, "Failed to update avatar")
        return ProfileUpdateResult(True, "Avatar updated successfully", updated.to_public())

    async def delete_account(self, user: User) -> bool:
        """Hard delete the user and every record it owns."""
        logger.info(f"[ProfileService.delete_account] user_id={user.id}")
        async with self.users.transaction():
            await self.profiles.delete_all(user.id)
            return await self.users.delete(user.id)

    async def get_profile(self, user: User) -> Dict[str, Any]:
        """Full profile: public user plus all child records."""
        socials = await self.get_socials(user.id)
        contact = await self.get_contact(user.id)
        education = await self.profiles.find_education(user.id)
        skills = await self.profiles.find_skills(user.id)
        return {
            "user": user.to_public().to_dict(),
            "socials": socials.to_dict(),
            "contact": contact.to_dict(),
            "education": [e.to_dict() for e in education],
            "skills": skills.skills,
        }

    # Socials
    async def get_socials(self, user_id: str) -> Socials:
        socials = await self.profiles.find_socials(user_id)
        if socials is None:
            # Registration is not guaranteed to have created the row.
            logger.warning(f"[ProfileService.get_socials] creating missing socials for user_id={user_id}")
            await self.profiles.create_socials(user_id)
            socials = Socials(user_id=user_id)
        return socials

    async def update_socials(self, user_id: str, links: Dict[str, str]) -> Socials:
        normalized = {}
        for platform, url in links.items():
            platform = platform.strip().lower()
            if platform and url:
                normalized[platform] = url.strip()
        socials = Socials(user_id=user_id, links=normalized)
        await self.profiles.update_socials(user_id, socials)
        return socials

    # Contact
    async def get_contact(self, user_id: str) -> Contact:
        contact = await self.profiles.find_contact(user_id)
        if contact is None:
            logger.warning(f"[ProfileService.get_contact] creating missing contact for user_id={user_id}")
            await self.profiles.create_contact(user_id)
            contact = Contact(user_id=user_id)
        return contact

    async def update_contact(self, user_id: str, fields: Dict[str, str]) -> Contact:
        contact = Contact.from_dict({**fields, "user_id": user_id})
        await self.profiles.update_contact(user_id, contact)
        return contact

    # Education
    async def list_education(self, user_id: str) -> List[Education]:
        return await self.profiles.find_education(user_id)

    async def add_education(self, user_id: str, fields: Dict[str, Any]) -> Education:
        entry = Education.from_dict({**fields, "user_id": user_id, "id": None})
        return await self.profiles.create_education(entry)

    async def replace_education(self, user_id: str, entries: List[Dict[str, Any]]) -> List[Education]:
        education = [Education.from_dict({**e, "user_id": user_id, "id": None}) for e in entries]
        return await self.profiles.update_education(user_id, education)

    async def delete_education(self, user_id: str, education_id: str) -> None:
        if not await self.profiles.delete_education(user_id, education_id):
            raise RecordNotFound(f"Education entry {education_id} not found")

    # Skills
    async def get_skills(self, user_id: str) -> Skills:
        return await self.profiles.find_skills(user_id)

    async def add_skill(self, user_id: str, skill: str) -> Skills:
        skill = skill.strip()
        if not skill:
            raise ValueError("Skill must not be empty")
        await self.profiles.add_skill(user_id, skill)
        return await self.profiles.find_skills(user_id)

    async def remove_skill(self, user_id: str, skill: str) -> Skills:
        if not await self.profiles.delete_skill(user_id, skill.strip()):
            raise RecordNotFound(f"Skill '{skill}' not found")
        return await self.profiles.find_skills(user_id)
