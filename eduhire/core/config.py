"""
Configuration module - loads all env vars using pydantic-settings.
Every other module reads its settings through get_settings().
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "eduhire"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 5

    # Password hashing (bcrypt cost factor)
    bcrypt_rounds: int = 10

    # Header the client sends its token in
    auth_header_name: str = "x-auth-token"

    # App
    cors_origins: List[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
