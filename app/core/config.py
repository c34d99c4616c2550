import json
from pathlib import Path
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # FastAPI Configuration
    PROJECT_NAME: str = "Map Document Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Storage Configuration - relative paths resolve against the working directory
    DOCUMENTS_DIR: Path = Field(
        default=Path("files"), description="Directory holding JSON map documents"
    )
    MAPS_DIR: Path = Field(
        default=Path("maps"), description="Directory holding uploaded map images"
    )
    STATIC_DIR: Path = Field(
        default=Path("public"), description="Static assets served at the site root"
    )

    # Upload Configuration
    ALLOWED_IMAGE_TYPES: Annotated[List[str], NoDecode] = [
        "image/png",
        "image/jpeg",
        "image/jpg",
    ]
    MAPS_URL_PREFIX: str = "/maps"

    @field_validator("ALLOWED_IMAGE_TYPES", mode="before")
    @classmethod
    def parse_allowed_image_types(cls, v):
        """Parse ALLOWED_IMAGE_TYPES from comma-separated string or JSON array."""
        if isinstance(v, str):
            if v.startswith("["):
                return json.loads(v)
            return [x.strip() for x in v.split(",") if x.strip()]
        return v

    # Listing Configuration
    LISTING_MODE: str = Field(
        default="strict",
        description="'strict' aborts the listing on the first bad document, "
        "'best_effort' annotates failing documents instead",
    )

    @field_validator("LISTING_MODE")
    @classmethod
    def validate_listing_mode(cls, v: str) -> str:
        """Only the two listing modes are accepted."""
        v = v.strip().lower()
        if v not in ("strict", "best_effort"):
            raise ValueError("LISTING_MODE must be 'strict' or 'best_effort'")
        return v

    # CORS Settings
    CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    CORS_HEADERS: List[str] = [
        "Content-Type",
        "X-Requested-With",
        "Accept",
        "Origin",
        "Cache-Control",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or JSON array."""
        if isinstance(v, str):
            if v.startswith("["):
                return json.loads(v)
            return [x.strip() for x in v.split(",") if x.strip()]
        return v

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        """Check if the application is running in development mode."""
        return self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production mode."""
        return self.ENVIRONMENT.lower() in ["production", "prod"]


# Global settings instance
settings = Settings()
