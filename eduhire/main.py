"""
EduHire Profile API - Main Application

FastAPI backend with:
- MongoDB for the per-user profile document
- bcrypt password hashing
- JWT authentication (x-auth-token header)

Run: uvicorn eduhire.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from eduhire.api.routes import api_router
from eduhire.db.mongodb import init_mongo_indexes, test_mongo_connection
from eduhire.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="EduHire Profile API",
    description="""
    Career-profile backend for the EduHire student portal.

    ## Features
    - **Authentication**: email/password and Google/Facebook sign-in, JWT tokens
    - **Profile**: one nested profile document per student (personal info,
      education, experience, internships, projects, skills)
    - **Dashboard**: profile completion, counters and the activity log

    ## Database
    - MongoDB: `users` collection, one document per student
    """,
    version="1.0.0",
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
