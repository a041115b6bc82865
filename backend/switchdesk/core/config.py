"""Application configuration using Pydantic Settings"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=BACKEND_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = Field(default="switchdesk", description="Service name")
    version: str = Field(default="1.0.0", description="Reported API version")

    # Environment
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    frontend_url: str = Field(default="http://localhost:3000", description="Frontend URL for CORS")

    # Settings document
    config_path: Path = Field(
        default=BACKEND_DIR / "config" / "defaults.json",
        description="Location of the persisted settings document",
    )

    # Stream lifecycle (seconds)
    stream_start_delay: float = Field(default=1.0, description="starting -> running delay")
    stream_stop_delay: float = Field(default=1.0, description="stopping -> stopped delay")
    stream_retention: float = Field(default=5.0, description="Stopped stream kept for")
    stream_stats_interval: float = Field(default=2.0, description="Stream stats tick")

    # Recording lifecycle (seconds)
    recording_stats_interval: float = Field(default=1.0, description="Recording stats tick")
    recording_retention: float = Field(default=30.0, description="Stopped recording kept for")

    # Channel liveness / shutdown (seconds)
    liveness_interval: float = Field(default=30.0, description="Websocket ping interval and closed-channel sweep interval")
    shutdown_timeout: float = Field(default=5.0, description="Forced exit after shutdown signal")

    # Keep-Alive
    enable_keep_alive: bool = Field(default=True, description="Enable heartbeat log task")
    keep_alive_interval: int = Field(default=300, description="Heartbeat interval in seconds")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS allowed origins"""
        return [self.frontend_url]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
