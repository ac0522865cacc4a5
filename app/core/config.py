"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "career_fair"
    # Commit each batch inside a multi-document transaction. Needs a replica
    # set or mongos; a standalone mongod rejects transactions, so leave it off
    # there and batches apply op by op.
    mongodb_transactions: bool = False

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Invite codes
    invite_code_length: int = 8
    invite_code_max_attempts: int = 5

    # App
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
