"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageBackend(str, Enum):
    """Durable key-value storage backends"""
    MEMORY = "memory"
    FILE = "file"
    SQL = "sql"


class StorageSettings(BaseSettings):
    """Where the store state blob is persisted"""

    backend: StorageBackend = Field(default=StorageBackend.FILE)
    name: str = Field(default="skatespot-storage", min_length=1, description="Key of the persisted state blob")
    directory: str = Field(default="data", description="Directory used by the file backend")
    database_url: str = Field(default="sqlite:///data/skatespot.db", description="Used by the sql backend")

    @field_validator('backend', mode='before')
    @classmethod
    def normalize_backend(cls, v):
        """Accept backend names in any case"""
        if isinstance(v, str):
            return StorageBackend(v.lower())
        return v

    def get_directory(self) -> Path:
        """Get absolute path of the file backend directory"""
        return Path(self.directory).resolve()

    model_config = {"env_prefix": "STORAGE_"}


class CheckInSettings(BaseSettings):
    """Check-in expiry configuration"""

    expiry_hours: float = Field(default=8, gt=0, le=72)
    anonymous_name: str = Field(default="Anônimo", min_length=1)

    model_config = {"env_prefix": "CHECKIN_"}


class ImageSettings(BaseSettings):
    """Photo upload and compression configuration"""

    max_width: int = Field(default=800, ge=32, le=4096)
    jpeg_quality: int = Field(default=70, ge=1, le=95)
    max_upload_mb: int = Field(default=5, ge=1, le=50)
    allowed_content_types: List[str] = Field(
        default_factory=lambda: ["image/jpeg", "image/jpg", "image/png", "image/webp"]
    )

    @field_validator('allowed_content_types', mode='before')
    @classmethod
    def parse_content_types(cls, v):
        """Parse content types from environment variable or list"""
        if isinstance(v, str):
            return [t.strip().lower() for t in v.split(",") if t.strip()]
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    model_config = {"env_prefix": "IMAGE_"}


class GeocodingSettings(BaseSettings):
    """Address search (Nominatim) configuration"""

    base_url: str = Field(default="https://nominatim.openstreetmap.org")
    result_limit: int = Field(default=5, ge=1, le=50)
    min_query_length: int = Field(default=3, ge=1, le=20)
    timeout_seconds: int = Field(default=10, ge=1, le=60)
    user_agent: str = Field(default="skatespot-backend/1.0")
    accept_language: Optional[str] = Field(default=None)

    model_config = {"env_prefix": "GEOCODING_"}


class SecuritySettings(BaseSettings):
    """CORS configuration for the local UI"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "DELETE"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="SkateSpot Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Nested Settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    check_ins: CheckInSettings = Field(default_factory=CheckInSettings)
    images: ImageSettings = Field(default_factory=ImageSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings
