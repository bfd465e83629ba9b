"""
Database Schemas for the Portfolio CMS

Each Pydantic model = one MongoDB collection. Attributes are snake_case in
Python and camelCase on the wire and in the store.
"""

from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

# ~2MB limit for a base64 logo string
LOGO_MAX_LENGTH = 2621440

RequiredStr = Annotated[str, Field(min_length=1)]


def split_list(value: Any, separator: str) -> Any:
    """Accept a delimited string or a list and return a list of trimmed entries"""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(separator) if part.strip()]
    if isinstance(value, (list, tuple)):
        return [item.strip() if isinstance(item, str) else item for item in value
                if not (isinstance(item, str) and not item.strip())]
    return value


def blank_to_none(value: Any) -> Any:
    """Empty form inputs mean "no date"; pydantic parses the rest"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_logo(value: Optional[str]) -> Optional[str]:
    if value and len(value) > LOGO_MAX_LENGTH:
        raise ValueError("Logo image is too large (max 2MB)")
    return value


class PortfolioDocument(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Content
class About(PortfolioDocument):
    first_name: RequiredStr
    last_name: RequiredStr
    title: RequiredStr
    short_bio: RequiredStr
    long_bio: RequiredStr
    email: EmailStr
    phone: Optional[str] = None
    location: Optional[str] = None
    resume_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    highlights: List[str] = []
    motto: Optional[str] = None

    @field_validator("highlights", mode="before")
    @classmethod
    def _split_highlights(cls, v):
        return split_list(v, "\n")


class Skill(PortfolioDocument):
    type: Literal["Technical Skills", "Languages Spoken"]
    subtype: Optional[str] = None
    name: RequiredStr
    language: Optional[str] = None
    level: Optional[str] = None
    language_proficiency: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class Project(PortfolioDocument):
    title: RequiredStr
    description: RequiredStr
    long_description: Optional[str] = None
    image_url: RequiredStr
    tags: List[str] = []
    github_link: Optional[str] = None
    live_link: Optional[str] = None
    type: Literal["individual", "team"] = "individual"
    year: Optional[str] = None
    technologies: List[str] = []

    @field_validator("tags", "technologies", mode="before")
    @classmethod
    def _split_commas(cls, v):
        return split_list(v, ",")


class Education(PortfolioDocument):
    institution: RequiredStr
    field: RequiredStr
    start_date: datetime
    end_date: Optional[datetime] = None
    is_currently_enrolled: bool = False
    description: Optional[str] = None
    gpa: Optional[str] = None
    activities: List[str] = []
    logo: Optional[str] = None  # base64 encoded institution logo

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, v):
        return blank_to_none(v)

    @field_validator("activities", mode="before")
    @classmethod
    def _split_lines(cls, v):
        return split_list(v, "\n")

    @field_validator("logo")
    @classmethod
    def _logo_size(cls, v):
        return check_logo(v)


class Experience(PortfolioDocument):
    company: RequiredStr
    title: RequiredStr
    location: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    is_currently_working: bool = False
    description: Optional[str] = None
    achievements: List[str] = []
    logo: Optional[str] = None  # base64 encoded company logo

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, v):
        return blank_to_none(v)

    @field_validator("achievements", mode="before")
    @classmethod
    def _split_lines(cls, v):
        return split_list(v, "\n")

    @field_validator("logo")
    @classmethod
    def _logo_size(cls, v):
        return check_logo(v)


class Achievement(PortfolioDocument):
    title: RequiredStr
    organization: Optional[str] = None
    date: Optional[datetime] = None
    description: Optional[str] = None
    category: Literal["athletics", "leadership", "academic", "other"] = "other"
    year: Optional[str] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        return blank_to_none(v)


class Gallery(PortfolioDocument):
    title: RequiredStr
    description: Optional[str] = None
    images: List[str] = Field(..., min_length=1)


class Contact(PortfolioDocument):
    name: RequiredStr
    email: EmailStr
    student_email: Optional[str] = None
    work_email: Optional[str] = None
    phone: RequiredStr
    location: RequiredStr
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class Message(PortfolioDocument):
    name: RequiredStr
    email: EmailStr
    message: RequiredStr
    status: Literal["new", "read", "replied"] = "new"

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        return v or "new"
