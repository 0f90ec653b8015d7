"""
Dashboard Service - read-only summaries of a user document.

- Profile completion percentage (10 slots: 5 personal fields,
  4 list sections, 1 for "any skill at all")
- Dashboard counters
- Windowed reads of the activity log (storage itself is unbounded)
"""

from typing import Optional

from eduhire.schemas.schemas import ActivityPage, DashboardResponse, UserResponse
from eduhire.services.profile_service import ProfileService

COMPLETION_PERSONAL_FIELDS = ("first_name", "last_name", "email", "phone", "location")
COMPLETION_SECTIONS = ("education", "experience", "projects", "internships")

DEFAULT_ACTIVITY_WINDOW = 3


def profile_completion(user: UserResponse) -> int:
    """Percentage of profile slots that are filled, rounded."""
    profile = user.profile
    completed = 0
    total = 0

    for field in COMPLETION_PERSONAL_FIELDS:
        total += 1
        # The personal record has no email; the account email fills that slot
        value = user.email if field == "email" else getattr(profile.personal, field)
        if value:
            completed += 1

    for section in COMPLETION_SECTIONS:
        total += 1
        if getattr(profile, section):
            completed += 1

    total += 1
    if any(profile.skills.model_dump().values()):
        completed += 1

    return round(completed * 100 / total)


class DashboardService:

    def __init__(self, profiles: Optional[ProfileService] = None):
        self.profiles = profiles or ProfileService()

    def summary(self, identity: str, activity_limit: int = DEFAULT_ACTIVITY_WINDOW) -> DashboardResponse:
        user = self.profiles.get_user(identity)
        return DashboardResponse(
            stats=user.dashboard_stats,
            profile_completion=profile_completion(user),
            recent_activity=user.activity_log[:activity_limit],
            total_activity=len(user.activity_log),
        )

    def activity(self, identity: str, skip: int = 0, limit: int = 20) -> ActivityPage:
        """One page of the activity log, newest first."""
        user = self.profiles.get_user(identity)
        return ActivityPage(
            total=len(user.activity_log),
            skip=skip,
            limit=limit,
            items=user.activity_log[skip:skip + limit],
        )
