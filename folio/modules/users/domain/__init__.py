"""
Domain Models

Pure data models representing user and profile entities.
"""

from .user import User, PublicUser
from .profile import Socials, Contact, Education, Skills, KNOWN_PLATFORMS

__all__ = [
    "User",
    "PublicUser",
    "Socials",
    "Contact",
    "Education",
    "Skills",
    "KNOWN_PLATFORMS",
]
