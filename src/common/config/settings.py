# File: common/config/settings.py

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Calculate base directory for consistent file paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = BASE_DIR / ".env"
STAGING_DIR = BASE_DIR / "public" / "temp"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = Field("DEBUG", description="Level of the vidgraph logger")

    BASE_DIR: Path = Field(default=BASE_DIR, description="Base directory of the project")

    # MongoDB
    MONGO_URI: str = Field("mongodb://localhost:27017", description="MongoDB connection URI")
    MONGO_DB: str = Field("vidgraph_db", description="MongoDB database name")
    MONGO_TIMEOUT: int = Field(5000, description="MongoDB connection timeout in milliseconds")

    # Pagination
    DEFAULT_PAGE: int = Field(1, description="Page used when the caller supplies none")
    DEFAULT_PAGE_LIMIT: int = Field(10, description="Page size used when the caller supplies none")

    # Aggregations
    STATS_TIMEOUT_SECONDS: float = Field(10.0, description="Deadline for channel stats aggregation")

    # Media storage (Cloudinary)
    CLOUDINARY_CLOUD_NAME: str = Field("", description="Cloudinary cloud name")
    CLOUDINARY_API_KEY: str = Field("", description="Cloudinary API key")
    CLOUDINARY_API_SECRET: str = Field("", description="Cloudinary API secret")
    MEDIA_UPLOAD_TIMEOUT: int = Field(300, description="Media upload timeout in seconds")
    UPLOAD_STAGING_DIR: Path = Field(default=STAGING_DIR, description="Local staging directory for uploads")

    # Sentry
    SENTRY_DSN: str = Field("", description="Sentry DSN, empty disables reporting")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(0.0, description="Sentry traces sample rate")
    SENTRY_SEND_PII: bool = Field(False, description="Send personally identifiable info to Sentry")

    # HTTP
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

# Singleton settings instance
settings = Settings()
