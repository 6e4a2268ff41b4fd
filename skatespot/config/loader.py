"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            return Settings(_env_file=str(env_file_path), environment=env)

        logger.warning(f"Environment file {env_file_path} not found, using default settings")
        return Settings(environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            env_name = env_file.name.replace(".env.", "")
            if env_name in {e.value for e in Environment}:
                env_files.append(env_name)
        return sorted(env_files)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        default_settings = Settings()

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={default_settings.app_name}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={default_settings.host}
PORT={default_settings.port}
RELOAD={'true' if env == Environment.DEVELOPMENT else 'false'}

# Logging Configuration
LOG_LEVEL={default_settings.log_level.value}
LOG_FORMAT={default_settings.log_format}

# Storage Configuration
STORAGE_BACKEND={default_settings.storage.backend.value}
STORAGE_NAME={default_settings.storage.name}
STORAGE_DIRECTORY={default_settings.storage.directory}
STORAGE_DATABASE_URL={default_settings.storage.database_url}

# Check-in Configuration
CHECKIN_EXPIRY_HOURS={default_settings.check_ins.expiry_hours}
CHECKIN_ANONYMOUS_NAME={default_settings.check_ins.anonymous_name}

# Photo Configuration
IMAGE_MAX_WIDTH={default_settings.images.max_width}
IMAGE_JPEG_QUALITY={default_settings.images.jpeg_quality}
IMAGE_MAX_UPLOAD_MB={default_settings.images.max_upload_mb}

# Address Search Configuration
GEOCODING_BASE_URL={default_settings.geocoding.base_url}
GEOCODING_USER_AGENT={default_settings.geocoding.user_agent}
"""

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
