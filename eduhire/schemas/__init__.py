"""
Schemas module - Request/Response schemas for API endpoints.

The same models describe the stored user document, so a profile read
back from MongoDB is normalized through them before it leaves the API.
"""
