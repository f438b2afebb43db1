"""
Request Models

Shapes of the JSON bodies accepted by the user endpoints.
"""
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from folio.modules.users.auth.passwords import MAX_PASSWORD_BYTES, password_fits


def _check_password(value: str) -> str:
    if not password_fits(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=1)
    description: str = ""

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value)


class SignInRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username_or_email: str = Field(..., alias="usernameOrEmail", min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    """Every field optional; empty strings are treated as not supplied."""
    name: Optional[str] = Field(None, max_length=100)
    username: Optional[str] = Field(None, max_length=64)
    email: Optional[Union[EmailStr, Literal[""]]] = None
    description: Optional[str] = None


class UpdateAvatarRequest(BaseModel):
    avatar: str = ""


class SocialEntry(BaseModel):
    type: str = Field(..., min_length=1)
    url: str = ""


class UpdateSocialsRequest(BaseModel):
    socials: List[SocialEntry] = Field(default_factory=list)

    def to_links(self) -> dict:
        links = {}
        for entry in self.socials:
            links[entry.type] = entry.url
        return links


class UpdateContactRequest(BaseModel):
    phone: str = ""
    email: str = ""
    address: str = ""
    website: str = ""


class EducationRequest(BaseModel):
    level: str = ""
    school_name: str = ""
    subject: str = ""
    from_year: Optional[int] = Field(None, ge=1900, le=2200)
    to_year: Optional[int] = Field(None, ge=1900, le=2200)

    @model_validator(mode="after")
    def check_years(self):
        if self.from_year is not None and self.to_year is not None and self.from_year > self.to_year:
            raise ValueError("from_year must not be after to_year")
        return self


class ReplaceEducationRequest(BaseModel):
    education: List[EducationRequest] = Field(default_factory=list)


class SkillRequest(BaseModel):
    skill: str = Field(..., min_length=1, max_length=64)
