"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Python attributes are snake_case; the wire and the stored document use
camelCase aliases (firstName, techStack, lastUpdated, ...).
"""

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List
from datetime import datetime, timezone
from enum import Enum


class CamelModel(BaseModel):
    """Base model: camelCase aliases, unknown keys dropped."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime) -> datetime:
    # BSON datetimes come back naive but are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


# ============================================================
# ENUMS
# ============================================================

class AuthProvider(str, Enum):
    local = "local"
    google = "google"
    facebook = "facebook"


# Tag value on experience entries that marks an internship
INTERNSHIP_TYPE = "Internship"


# ============================================================
# PROFILE DOCUMENT
# ============================================================

class PersonalInfo(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None  # data URL or hosted URL
    headline: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    about: Optional[str] = None


class EducationEntry(CamelModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    location: Optional[str] = None
    gpa: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class ExperienceEntry(CamelModel):
    company: Optional[str] = None
    role: Optional[str] = None
    type: Optional[str] = None  # free-form: 'Full-time', 'Internship', ...
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class InternshipEntry(CamelModel):
    company: Optional[str] = None
    role: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class InternshipInput(CamelModel):
    """Internship as the profile builder sends it (uses `title`, not `role`)."""
    title: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class ProjectEntry(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    link: Optional[str] = None
    github_link: Optional[str] = None


class CertificationEntry(CamelModel):
    name: Optional[str] = None
    issuer: Optional[str] = None
    date: Optional[str] = None
    url: Optional[str] = None


class Skills(CamelModel):
    programming: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    databases: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    technical: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    soft: List[str] = Field(default_factory=list)


class Profile(CamelModel):
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    projects: List[ProjectEntry] = Field(default_factory=list)
    internships: List[InternshipEntry] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)


class DashboardStats(CamelModel):
    profile_views: int = 0
    applications: int = 0
    interviews: int = 0


class ActivityEntry(CamelModel):
    type: Optional[str] = None  # 'profile', 'resume', 'project', ...
    action: Optional[str] = None
    time: Optional[UtcDatetime] = None


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SocialAuthRequest(CamelModel):
    email: str = Field(..., min_length=1)
    profile: Optional[Profile] = None


class TokenResponse(CamelModel):
    token: str


class UserResponse(CamelModel):
    """Full user document, password hash excluded."""
    id: str
    email: str
    auth_provider: AuthProvider = AuthProvider.local
    created_via_social: bool = False
    profile: Profile = Field(default_factory=Profile)
    created_at: Optional[UtcDatetime] = None
    last_updated: Optional[UtcDatetime] = None
    dashboard_stats: DashboardStats = Field(default_factory=DashboardStats)
    activity_log: List[ActivityEntry] = Field(default_factory=list)


# ============================================================
# PROFILE UPDATE SCHEMAS
# ============================================================

class SkillsUpdate(CamelModel):
    programming: Optional[List[str]] = None
    frameworks: Optional[List[str]] = None
    databases: Optional[List[str]] = None
    tools: Optional[List[str]] = None
    technical: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    soft: Optional[List[str]] = None


class ProfileUpdate(CamelModel):
    """Partial profile. Only fields the client actually sends are applied."""
    personal: Optional[PersonalInfo] = None
    education: Optional[List[EducationEntry]] = None
    experience: Optional[List[ExperienceEntry]] = None
    internships: Optional[List[InternshipInput]] = None
    skills: Optional[SkillsUpdate] = None
    projects: Optional[List[ProjectEntry]] = None


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class ActivityPage(CamelModel):
    total: int
    skip: int
    limit: int
    items: List[ActivityEntry]


class DashboardResponse(CamelModel):
    stats: DashboardStats
    profile_completion: int = Field(..., ge=0, le=100)
    recent_activity: List[ActivityEntry]
    total_activity: int
