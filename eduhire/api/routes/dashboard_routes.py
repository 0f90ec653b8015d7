"""
Dashboard Routes

GET /auth/dashboard - Counters, profile completion, recent activity
GET /auth/activity - Page through the activity log
"""

from fastapi import APIRouter, Depends, Query

from eduhire.core.auth import get_current_identity
from eduhire.core.errors import EduHireError, to_http_exception
from eduhire.schemas.schemas import ActivityPage, DashboardResponse
from eduhire.services.dashboard_service import DEFAULT_ACTIVITY_WINDOW, DashboardService

router = APIRouter(prefix="/auth", tags=["Dashboard"])


def get_dashboard_service() -> DashboardService:
    return DashboardService()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    activity_limit: int = Query(DEFAULT_ACTIVITY_WINDOW, ge=1, le=100),
    identity: str = Depends(get_current_identity),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Summary for the student dashboard."""
    try:
        return dashboard.summary(identity, activity_limit)
    except EduHireError as e:
        raise to_http_exception(e)


@router.get("/activity", response_model=ActivityPage)
async def get_activity(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    identity: str = Depends(get_current_identity),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Activity log, newest first."""
    try:
        return dashboard.activity(identity, skip, limit)
    except EduHireError as e:
        raise to_http_exception(e)
