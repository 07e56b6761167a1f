# school_portal/core/config.py
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # tell pydantic-settings which .env file to load
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "school_portal"
    MONGO_TIMEOUT_MS: int = 5000

    # swap Mongo and Firebase for in-process fakes (local dev without services)
    USE_IN_MEMORY_BACKENDS: bool = False

    # either a path to a service account json, or the same json base64-encoded
    FIREBASE_CREDENTIALS_FILE: str = ""
    FIREBASE_CREDENTIALS_BASE64: str = ""

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    PASSWORD_MIN_LENGTH: int = 6
    BCRYPT_ROUNDS: int = 10

settings = Settings()
