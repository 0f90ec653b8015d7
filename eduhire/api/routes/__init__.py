"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from eduhire.api.routes.auth_routes import router as auth_router
from eduhire.api.routes.dashboard_routes import router as dashboard_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
