"""
Configuration management using environment variables.
Handles database and logging settings with proper validation and defaults.
"""

from typing import Optional
from urllib.parse import quote_plus
from pydantic import Field, validator
from pydantic_settings import BaseSettings
from pathlib import Path


class ServiceConfig(BaseSettings):
    """
    Configuration class for the book service.
    Uses pydantic BaseSettings for environment variable management.
    """

    # MongoDB Configuration
    mongodb_username: str = Field(default="")
    mongodb_password: str = Field(default="")
    mongodb_url: str = Field(default="localhost", description="MongoDB host name")
    mongodb_port: int = Field(default=27017)
    mongodb_database: str = Field(default="course-books")
    mongodb_collection: str = Field(default="books")
    mongodb_auth_source: str = Field(default="admin")
    mongodb_timeout_ms: int = Field(default=5000)

    # Startup connection policy
    connect_retry_attempts: int = Field(default=5)
    connect_retry_delay: float = Field(default=1.0)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    log_file: Optional[str] = Field(default=None)

    # Development/Testing
    debug: bool = Field(default=False)

    @validator('mongodb_port')
    def validate_port(cls, v):
        """Ensure port is a valid TCP port."""
        if v < 1 or v > 65535:
            raise ValueError('mongodb_port must be between 1 and 65535')
        return v

    @validator('mongodb_timeout_ms')
    def validate_timeout(cls, v):
        """Ensure timeout is reasonable."""
        if v < 100 or v > 120000:
            raise ValueError('mongodb_timeout_ms must be between 100 and 120000')
        return v

    @validator('connect_retry_attempts')
    def validate_retry_attempts(cls, v):
        """Ensure retry attempts is reasonable."""
        if v < 0 or v > 20:
            raise ValueError('connect_retry_attempts must be between 0 and 20')
        return v

    @validator('connect_retry_delay')
    def validate_retry_delay(cls, v):
        if v < 0 or v > 60:
            raise ValueError('connect_retry_delay must be between 0 and 60 seconds')
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from .env

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None

    def get_connection_url(self) -> str:
        """
        Build the MongoDB connection URL.

        Credentials are URL-escaped and left out entirely when no
        username is configured.
        """
        credentials = ""
        if self.mongodb_username:
            credentials = f"{quote_plus(self.mongodb_username)}:{quote_plus(self.mongodb_password)}@"
        return (
            f"mongodb://{credentials}{self.mongodb_url}:{self.mongodb_port}"
            f"/{self.mongodb_database}?authSource={self.mongodb_auth_source}"
        )

    def get_redacted_connection_url(self) -> str:
        """Connection URL safe for logging."""
        if not self.mongodb_username:
            return self.get_connection_url()
        return self.get_connection_url().replace(
            f":{quote_plus(self.mongodb_password)}@", ":***@", 1
        )


# Global configuration instance
config = ServiceConfig()
