# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import Annotated, Any, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug("[CONFIG] Looking for .env at: %s (exists=%s)", env_path, env_path.exists())
    load_dotenv(env_path)


# Generic webmail hosts never identify an organization.
DEFAULT_EXCLUDED_EMAIL_DOMAINS: List[str] = [
    "aol.com",
    "att.net",
    "comcast.net",
    "gmail.com",
    "hotmail.com",
    "icloud.com",
    "msn.com",
    "outlook.com",
    "sbcglobal.net",
    "yahoo.com",
]


class Settings(BaseSettings):
    environment: str = Field(default="development", description="Deployment environment name")
    log_level: str = Field(default="INFO", description="Root logging level")

    database_url: str = Field(
        default="sqlite:///./directory.db",
        description="SQLAlchemy URL of the location directory database",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements to the log")

    # Geocoding/Maps providers
    geocoding_provider: str = Field(
        default="google", description="Geocoding provider: google|mapbox|mock"
    )
    google_maps_api_key: str = Field(default="", description="Google Maps API key for geocoding")
    mapbox_access_token: str = Field(default="", description="Mapbox access token for geocoding")
    geocode_timeout_s: float = Field(
        default=3.0,
        gt=0,
        description="Upper bound on a single geocoding lookup before the location filter degrades",
    )

    # Search
    search_default_per_page: int = Field(
        default=30, ge=1, description="Page size used when per_page is absent"
    )
    search_max_per_page: int = Field(
        default=100, ge=1, description="Largest page size a client may request"
    )
    search_default_radius_miles: Optional[float] = Field(
        default=None,
        description="Distance cut-off applied to geographic searches that omit radius",
    )
    search_require_terms: bool = Field(
        default=False,
        description="Reject searches lacking keyword, location, and language",
    )
    search_excluded_email_domains: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_EMAIL_DOMAINS),
        description="Public webmail domains ignored by domain matching",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("search_excluded_email_domains", mode="before")
    @classmethod
    def _split_domains(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip().lower() for part in value.split(",") if part.strip()]
        return value

    @field_validator("search_default_radius_miles", mode="before")
    @classmethod
    def _blank_radius_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value


settings = Settings()
