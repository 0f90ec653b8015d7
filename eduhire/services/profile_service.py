"""
Profile Service - merges partial profile payloads into the stored document.

Merge policy per top-level field (field presence decides, not value):
- personal:    shallow merge over the stored record
- education:   full replace
- experience / internships:
               payload experience + payload internships (tagged
               type="Internship", role=title) replace stored experience.
               Stored experience is NOT merged in, so sending internships
               alone drops earlier non-internship entries.
- skills:      programming/frameworks/databases/tools always overwritten
               (missing bucket -> []); technical/languages/soft only when sent
- projects:    full replace
- achievements, certifications: never touched here

Every successful call prepends one activity entry and bumps lastUpdated,
even when the payload carries no fields.
"""

import logging
from typing import List, Optional

from eduhire.core.errors import NotFoundError
from eduhire.schemas.schemas import (
    INTERNSHIP_TYPE, ExperienceEntry, InternshipInput, Profile, ProfileUpdate, UserResponse
)
from eduhire.services.user_service import UserService, serialize_user, utc_now

logger = logging.getLogger(__name__)

PRIMARY_SKILL_BUCKETS = ("programming", "frameworks", "databases", "tools")
SECONDARY_SKILL_BUCKETS = ("technical", "languages", "soft")

PROFILE_ACTIVITY = {"type": "profile", "action": "Updated profile details"}


def _sent(payload: ProfileUpdate, field: str) -> bool:
    """True if the client sent the field with a non-null value."""
    return field in payload.model_fields_set and getattr(payload, field) is not None


def internship_to_experience(entry: InternshipInput) -> dict:
    """Map an internship payload entry onto the experience shape."""
    data = entry.model_dump(by_alias=True)
    data["type"] = INTERNSHIP_TYPE
    data["role"] = entry.title
    return ExperienceEntry.model_validate(data).model_dump(by_alias=True)


def combine_experience(
    experience: Optional[List[ExperienceEntry]],
    internships: Optional[List[InternshipInput]],
) -> List[dict]:
    """Payload experience followed by the payload internships, tagged."""
    combined = [entry.model_dump(by_alias=True) for entry in experience or []]
    combined.extend(internship_to_experience(entry) for entry in internships or [])
    return combined


def merge_skills(stored: Optional[dict], payload: ProfileUpdate) -> dict:
    skills = dict(stored or {})
    sent = payload.skills.model_dump()
    for bucket in PRIMARY_SKILL_BUCKETS:
        skills[bucket] = sent[bucket] or []
    for bucket in SECONDARY_SKILL_BUCKETS:
        if sent[bucket] is not None:
            skills[bucket] = sent[bucket]
    return skills


def merge_profile(stored: dict, payload: ProfileUpdate) -> dict:
    """
    Apply a partial payload to a stored profile (camelCase dict).

    Returns a new dict; `stored` is not modified.
    """
    profile = dict(stored or {})

    if _sent(payload, "personal"):
        personal = dict(profile.get("personal") or {})
        personal.update(payload.personal.model_dump(by_alias=True, exclude_unset=True))
        profile["personal"] = personal

    if _sent(payload, "education"):
        profile["education"] = [entry.model_dump(by_alias=True) for entry in payload.education]

    if _sent(payload, "experience") or _sent(payload, "internships"):
        profile["experience"] = combine_experience(payload.experience, payload.internships)

    if _sent(payload, "skills"):
        profile["skills"] = merge_skills(profile.get("skills"), payload)

    if _sent(payload, "projects"):
        profile["projects"] = [entry.model_dump(by_alias=True) for entry in payload.projects]

    return profile


def internship_view(profile: Profile) -> List[ExperienceEntry]:
    """Internship-only view of a profile, derived from the experience tag."""
    return [entry for entry in profile.experience if entry.type == INTERNSHIP_TYPE]


class ProfileService:
    """Update contract for the profile document."""

    def __init__(self, users: Optional[UserService] = None):
        self.users = users or UserService()

    def get_user(self, identity: str) -> UserResponse:
        """
        Raises:
            NotFoundError if the identity has no stored document
        """
        user = self.users.get_by_id(identity)
        if not user:
            raise NotFoundError()
        return serialize_user(user)

    def update_profile(self, identity: str, payload: ProfileUpdate) -> UserResponse:
        """
        Merge `payload` into the user's profile and save the whole document.

        Raises:
            NotFoundError if the identity has no stored document
            StoreFailureError if the write fails (nothing is written)
        """
        user = self.users.get_by_id(identity)
        if not user:
            raise NotFoundError()

        now = utc_now()
        user["profile"] = merge_profile(user.get("profile"), payload)
        user["lastUpdated"] = now
        user["activityLog"] = [{**PROFILE_ACTIVITY, "time": now}] + list(user.get("activityLog") or [])

        if not self.users.replace(user):
            raise NotFoundError()

        logger.info(
            "Updated profile for %s (fields: %s)",
            identity, ", ".join(sorted(payload.model_fields_set)) or "none"
        )
        return serialize_user(user)
