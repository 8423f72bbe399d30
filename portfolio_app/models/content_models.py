"""Pydantic models for portfolio content records.

Each record type comes in two shapes: ``<Name>Data`` holds the editable
fields (what forms submit and what ``add``/``update`` accept), and
``<Name>`` adds the backend-assigned ``id``. Documents are stored and
serialised with camelCase keys.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel


# YYYY-MM-DD, optionally followed by a time part
ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}"


class ContentModel(BaseModel):
    """Base model storing fields under camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SkillIcon(str, Enum):
    """Built-in skill icons."""

    CODE = "code"
    DATABASE = "database"
    SERVER = "server"
    GLOBE = "globe"
    CPU = "cpu"
    GIT_BRANCH = "git-branch"
    LAYERS = "layers"
    WORKFLOW = "workflow"
    BRAIN_CIRCUIT = "brain-circuit"
    USERS = "users"


class Profile(ContentModel):
    """Site owner profile (singleton document)."""

    name: str
    title: str
    bio: str
    email: str
    phone: str = ""
    location: str = ""
    github: str = ""
    linkedin: str = ""
    website: str = ""
    image_url: str = ""


class ProjectData(ContentModel):
    """Editable project fields."""

    title: str
    description: str
    technologies: List[str] = Field(default_factory=list)
    image_url: str = ""
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    detailed_description: Optional[str] = None
    role: Optional[str] = None
    contribution: Optional[str] = None
    additional_images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    challenges: Optional[str] = None
    duration: Optional[str] = None


class Project(ProjectData):
    id: str


class SkillData(ContentModel):
    """Editable skill fields.

    ``category`` must match a skill category name. ``icon_url`` (an uploaded
    image) takes precedence over ``icon`` when rendering.
    """

    name: str
    category: str
    icon: Optional[SkillIcon] = None
    icon_url: Optional[str] = None
    order: int = 1


class Skill(SkillData):
    id: str


class SkillCategoryData(ContentModel):
    """Editable skill category fields."""

    name: str
    order: int


class SkillCategory(SkillCategoryData):
    id: str


class ExperienceData(ContentModel):
    """Editable experience fields. A null ``end_date`` means ongoing."""

    company: str
    position: str
    start_date: str = Field(..., pattern=ISO_DATE_PATTERN)
    end_date: Optional[str] = Field(None, pattern=ISO_DATE_PATTERN)
    description: str = ""
    location: str = ""


class Experience(ExperienceData):
    id: str


class EducationData(ContentModel):
    """Editable education fields. A null ``end_date`` means ongoing."""

    institution: str
    degree: str
    field: str
    start_date: str = Field(..., pattern=ISO_DATE_PATTERN)
    end_date: Optional[str] = Field(None, pattern=ISO_DATE_PATTERN)
    description: str = ""
    location: str = ""
    logo_url: Optional[str] = None


class Education(EducationData):
    id: str


class InterestData(ContentModel):
    """Editable interest fields."""

    name: str
    description: str
    icon: Optional[str] = "🔍"


class Interest(InterestData):
    id: str


class SectionVisibility(ContentModel):
    """Visibility flag for one page section."""

    id: str
    name: str
    visible: bool = True


class ContactForm(ContentModel):
    """Message submitted through the public contact form."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ContactMessage(ContactForm):
    id: str
    created_at: str
    read: bool = False
