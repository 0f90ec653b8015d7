"""
EduHire Profile API
Career-profile backend for students: accounts, profile document, dashboard.

Architecture:
- MongoDB: one user document per student (credentials + nested profile)
- JWT: stateless bearer tokens, fixed 5-day expiry
"""

__version__ = "1.0.0"
