"""
Profile Domain Models

Child records owned by a user: socials, contact, education and skills.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

KNOWN_PLATFORMS = ("twitter", "github", "linkedin", "instagram")


@dataclass
class Socials:
    """One-to-one social links, keyed by platform name."""
    user_id: str
    links: Dict[str, str] = field(default_factory=dict)

    def url_for(self, platform: str) -> str:
        return self.links.get(platform, "")

    def to_dict(self) -> Dict[str, Any]:
        data = {"user_id": self.user_id}
        # Known platforms are always present so clients get a stable shape.
        for platform in KNOWN_PLATFORMS:
            data[platform] = self.url_for(platform)
        data["links"] = dict(self.links)
        return data


@dataclass
class Contact:
    """One-to-one contact details."""
    user_id: str
    phone: str = ""
    email: str = ""
    address: str = ""
    website: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Contact":
        return cls(
            user_id=data["user_id"],
            phone=data.get("phone") or "",
            email=data.get("email") or "",
            address=data.get("address") or "",
            website=data.get("website") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "website": self.website,
        }


@dataclass
class Education:
    """One education entry; a user may have many."""
    user_id: str
    level: str = ""
    school_name: str = ""
    subject: str = ""
    from_year: Optional[int] = None
    to_year: Optional[int] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Education":
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            level=data.get("level") or "",
            school_name=data.get("school_name") or "",
            subject=data.get("subject") or "",
            from_year=data.get("from_year"),
            to_year=data.get("to_year"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "level": self.level,
            "school_name": self.school_name,
            "subject": self.subject,
            "from_year": self.from_year,
            "to_year": self.to_year,
        }


@dataclass
class Skills:
    """Set-like list of skills, kept in insertion order."""
    user_id: str
    skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"user_id": self.user_id, "skills": list(self.skills)}
