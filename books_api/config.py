"""
API configuration settings.
"""

from typing import Dict, List

from pydantic_settings import BaseSettings


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Course Books API"
    api_version: str = "1.0.0"
    api_description: str = "List and create entries of the course book collection"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 80
    debug: bool = False

    # CORS Settings
    cors_origin: str = "*"
    cors_allow_methods: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    cors_allow_headers: List[str] = ["Content-Type"]

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "extra": "ignore"  # Ignore extra fields from .env
    }

    def cors_headers(self) -> Dict[str, str]:
        """Headers attached to every response."""
        return {
            "Access-Control-Allow-Origin": self.cors_origin,
            "Access-Control-Allow-Methods": ", ".join(self.cors_allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.cors_allow_headers),
        }


# Global config instance
config = APIConfig()
