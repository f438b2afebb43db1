"""
Profile Repository

Handles all database operations for the profile child tables.
"""
import logging
import json
import uuid
from typing import Optional, Dict, Any, List
from databases import Database
from folio.modules.users.domain.profile import Socials, Contact, Education, Skills
from folio.modules.users.repositories.base import ProfileStore
from folio.modules.users.repositories.user_repository import row_to_dict

logger = logging.getLogger("folio.users.profile_repository")


def parse_jsonb(value: Any) -> Dict[str, Any]:
    """Parse JSONB value from database."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return {}
    elif value is None:
        return {}
    return value


class ProfileRepository(ProfileStore):
    """Repository for profile data access."""

    def __init__(self, db: Optional[Database] = None):
        if db is None:
            from folio.modules.database import database
            db = database
        self.db = db

    # Socials
    async def create_socials(self, user_id: str) -> None:
        query = """
            INSERT INTO user_socials (user_id, links)
            VALUES (:user_id, :links)
            ON CONFLICT (user_id) DO NOTHING
        """
        await self.db.execute(query, {"user_id": user_id, "links": "{}"})

    async def find_socials(self, user_id: str) -> Optional[Socials]:
        query = "SELECT user_id, links FROM user_socials WHERE user_id = :user_id"
        row = await self.db.fetch_one(query, {"user_id": user_id})
        if not row:
            return None
        data = row_to_dict(row)
        return Socials(user_id=data["user_id"], links=parse_jsonb(data["links"]))

    async def update_socials(self, user_id: str, socials: Socials) -> None:
        query = """
            INSERT INTO user_socials (user_id, links)
            VALUES (:user_id, :links)
            ON CONFLICT (user_id)
            DO UPDATE SET links = EXCLUDED.links, updated_at = CURRENT_TIMESTAMP
        """
        await self.db.execute(query, {"user_id": user_id, "links": json.dumps(socials.links)})

    # Contact
    async def create_contact(self, user_id: str) -> None:
        query = """
            INSERT INTO user_contacts (user_id)
            VALUES (:user_id)
            ON CONFLICT (user_id) DO NOTHING
        """
        await self.db.execute(query, {"user_id": user_id})

    async def find_contact(self, user_id: str) -> Optional[Contact]:
        query = """
            SELECT user_id, phone, email, address, website
            FROM user_contacts
            WHERE user_id = :user_id
        """
        row = await self.db.fetch_one(query, {"user_id": user_id})
        if not row:
            return None
        return Contact.from_dict(row_to_dict(row))

    async def update_contact(self, user_id: str, contact: Contact) -> None:
        query = """
            INSERT INTO user_contacts (user_id, phone, email, address, website)
            VALUES (:user_id, :phone, :email, :address, :website)
            ON CONFLICT (user_id)
            DO UPDATE SET phone = EXCLUDED.phone, email = EXCLUDED.email,
                          address = EXCLUDED.address, website = EXCLUDED.website,
                          updated_at = CURRENT_TIMESTAMP
        """
        await self.db.execute(query, {
            "user_id": user_id,
            "phone": contact.phone,
            "email": contact.email,
            "address": contact.address,
            "website": contact.website,
        })

    # Education
    async def find_education(self, user_id: str) -> List[Education]:
        query = """
            SELECT id, user_id, level, school_name, subject, from_year, to_year
            FROM user_education
            WHERE user_id = :user_id
            ORDER BY seq
        """
        rows = await self.db.fetch_all(query, {"user_id": user_id})
        return [Education.from_dict(row_to_dict(row)) for row in rows]

    async def create_education(self, education: Education) -> Education:
        education_id = uuid.uuid4().hex
        query = """
            INSERT INTO user_education (id, user_id, level, school_name, subject, from_year, to_year)
            VALUES (:id, :user_id, :level, :school_name, :subject, :from_year, :to_year)
        """
        await self.db.execute(query, {
            "id": education_id,
            "user_id": education.user_id,
            "level": education.level,
            "school_name": education.school_name,
            "subject": education.subject,
            "from_year": education.from_year,
            "to_year": education.to_year,
        })
        education.id = education_id
        return education

    async def update_education(self, user_id: str, entries: List[Education]) -> List[Education]:
        """Bulk replace: delete the user's entries and insert the new list."""
        async with self.db.transaction():
            await self.db.execute(
                "DELETE FROM user_education WHERE user_id = :user_id",
                {"user_id": user_id}
            )
            created = []
            for entry in entries:
                entry.user_id = user_id
                created.append(await self.create_education(entry))
        return created

    async def delete_education(self, user_id: str, education_id: str) -> bool:
        query = """
            DELETE FROM user_education
            WHERE id = :education_id AND user_id = :user_id
            RETURNING id
        """
        deleted = await self.db.fetch_val(query, {"education_id": education_id, "user_id": user_id})
        return deleted is not None

    # Skills
    async def find_skills(self, user_id: str) -> Skills:
        query = """
            SELECT skill FROM user_skills
            WHERE user_id = :user_id
            ORDER BY seq
        """
        rows = await self.db.fetch_all(query, {"user_id": user_id})
        return Skills(user_id=user_id, skills=[row_to_dict(row)["skill"] for row in rows])

    async def add_skill(self, user_id: str, skill: str) -> None:
        query = """
            INSERT INTO user_skills (user_id, skill)
            VALUES (:user_id, :skill)
            ON CONFLICT (user_id, skill) DO NOTHING
        """
        await self.db.execute(query, {"user_id": user_id, "skill": skill})

    async def delete_skill(self, user_id: str, skill: str) -> bool:
        query = "DELETE FROM user_skills WHERE user_id = :user_id AND skill = :skill RETURNING skill"
        deleted = await self.db.fetch_val(query, {"user_id": user_id, "skill": skill})
        return deleted is not None

    async def delete_all(self, user_id: str) -> None:
        async with self.db.transaction():
            for table in ("user_socials", "user_contacts", "user_education", "user_skills"):
                await self.db.execute(f"DELETE FROM {table} WHERE user_id = :user_id", {"user_id": user_id})
