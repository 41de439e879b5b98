"""
App configuration loaded from environment variables (.env)

Everything that changes between development and production lives here
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "prono"
    # Transactions need a replica set (Atlas clusters have one, a bare mongod does not)
    mongodb_use_transactions: bool = False

    # App
    app_env: str = "development"  # or "production"
    log_level: str = "INFO"

    # CORS - where requests may come from
    cors_origins: str = "http://localhost:3000"  # comma separated URLs

    # Admin routes require "Authorization: Bearer <admin_token>" when set
    admin_token: str | None = None

    # Predictions close this many minutes before kickoff
    prediction_cutoff_minutes: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # ignore extra .env keys that are not modelled here


@lru_cache()
def get_settings() -> Settings:
    """Return the settings instance (cached so .env is read once)"""
    return Settings()
